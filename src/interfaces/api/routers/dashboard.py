"""
Dashboard API router.

Endpoints:
- GET /api/users/{user_id}/dashboard - XP, level, streak, mascot and badges
"""

from fastapi import APIRouter

from src.core.domain.gamification import DAILY_XP_CAP, xp_for_next_level
from src.core.domain.habit_rules import LedgerState, count_completed_categories
from src.core.domain.streak_rules import STREAK_THRESHOLD
from src.core.exceptions import UserNotFoundError
from src.core.use_cases.evaluate_streak import evaluate_streak_use_case
from src.interfaces.api.routers.habits import get_user_or_404, resolve_today
from src.interfaces.api.schemas import (
    BadgeResponse,
    DashboardResponse,
    MascotResponse,
    StreakResponse,
)
from src.storage import badge_repo, daily_log_repo, habits_config_repo, user_repo

router = APIRouter(prefix="/api/users/{user_id}", tags=["dashboard"])


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(user_id: int) -> DashboardResponse:
    """
    Get dashboard data.

    Includes:
    - XP, level, XP threshold of the next level, today's XP vs the daily cap
    - Streak block (shields, categories completed today)
    - Mascot with mood: happy while a streak is active, sad otherwise
    - Earned badges
    """
    user = await get_user_or_404(user_id)
    today = resolve_today(user)
    await evaluate_streak_use_case.execute(user.id, today)
    user = await user_repo.get_user(user.id)
    if user is None:
        raise UserNotFoundError(user_id)

    log = await daily_log_repo.get_daily_log(user.id, today)
    goals = await habits_config_repo.get_goals(user.id)
    completed_today = count_completed_categories(LedgerState.from_log(log), goals)

    mood = "happy" if user.current_streak > 0 else "sad"
    badges = await badge_repo.list_badges(user.id)

    return DashboardResponse(
        user_id=user.id,
        name=user.name,
        mascot=(
            MascotResponse(
                id=user.mascot_id,
                name=user.mascot_name,
                stage=user.mascot_stage,
                mood=mood,
            )
            if user.mascot_id
            else None
        ),
        streak=StreakResponse(
            current=user.current_streak,
            longest=user.longest_streak,
            shields=user.streak_shields,
            mood=mood,
            categories_completed_today=completed_today,
            categories_required=STREAK_THRESHOLD,
            on_track=completed_today >= STREAK_THRESHOLD,
        ),
        xp_total=user.xp_total,
        level=user.level,
        xp_for_next_level=xp_for_next_level(user.level),
        daily_xp_earned=log.xp_earned if log else 0,
        daily_xp_cap=DAILY_XP_CAP,
        badges=[BadgeResponse.model_validate(badge) for badge in badges],
    )
