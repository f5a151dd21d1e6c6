"""
Habits API router.

Endpoints:
- GET /api/users/{user_id}/habits/today - Today's ledger, goals and checklists
- PATCH /api/users/{user_id}/habits/today/{category} - Update one category
"""

import logging
from dataclasses import asdict
from datetime import date

from fastapi import APIRouter, HTTPException, status

from src.config import config
from src.core.domain.dates import today_for_timezone
from src.core.domain.habit_rules import (
    MOVEMENT_EXERCISES,
    FoodInput,
    HabitInput,
    HydrationInput,
    LedgerState,
    MovementInput,
    SleepInput,
    StepsInput,
    completed_categories,
    food_checklist,
)
from src.core.exceptions import UserNotFoundError
from src.core.use_cases.evaluate_streak import evaluate_streak_use_case
from src.core.use_cases.log_habit import HabitUpdateResult, log_habit_use_case
from src.database.models import User
from src.interfaces.api.schemas import (
    DailyLogResponse,
    EvolutionResponse,
    FoodUpdateRequest,
    GoalsResponse,
    HabitUpdateResponse,
    HydrationUpdateRequest,
    LevelUpResponse,
    MascotResponse,
    MovementUpdateRequest,
    SleepUpdateRequest,
    StepsUpdateRequest,
    TodayResponse,
)
from src.storage import daily_log_repo, habits_config_repo, user_repo

router = APIRouter(prefix="/api/users/{user_id}/habits", tags=["habits"])
logger = logging.getLogger(__name__)


async def get_user_or_404(user_id: int) -> User:
    user = await user_repo.get_user(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return user


def resolve_today(user: User) -> date:
    return today_for_timezone(user.timezone or config.DEFAULT_TIMEZONE)


def build_update_response(today: date, result: HabitUpdateResult) -> HabitUpdateResponse:
    ledger = LedgerState.from_log(result.daily_log)

    evolution = None
    if result.evolution:
        evolution = EvolutionResponse(
            previous_mascot=MascotResponse(
                id=result.evolution.previous_mascot_id,
                name=result.evolution.previous_mascot_name,
            ),
            new_mascot=MascotResponse(**asdict(result.evolution.new_mascot)),
            evolution_level=result.evolution.evolution_level,
            badges=list(result.evolution.badges),
        )

    return HabitUpdateResponse(
        date=today,
        category=result.category,
        goal_met=result.category in completed_categories(ledger, result.goals),
        xp_awarded=result.xp_awarded,
        xp_total=result.xp_total,
        level=result.level,
        level_up=(
            LevelUpResponse(
                previous_level=result.level_up.previous_level,
                new_level=result.level_up.new_level,
            )
            if result.level_up
            else None
        ),
        evolution=evolution,
        today=DailyLogResponse.model_validate(result.daily_log),
    )


async def apply_update(user_id: int, data: HabitInput) -> HabitUpdateResponse:
    user = await get_user_or_404(user_id)
    today = resolve_today(user)
    try:
        result = await log_habit_use_case.execute(user_id=user.id, data=data, today=today)
    except UserNotFoundError:
        raise
    except Exception:
        logger.exception(f"Habit update failed for user {user_id}: {data}")
        raise
    return build_update_response(today, result)


@router.get("/today", response_model=TodayResponse)
async def get_today(user_id: int) -> TodayResponse:
    """
    Get today's habit log with goals, movement routine and food checklist.

    Evaluates the streak for any unevaluated days first.
    """
    user = await get_user_or_404(user_id)
    today = resolve_today(user)
    await evaluate_streak_use_case.execute(user.id, today)

    log = await daily_log_repo.get_daily_log(user.id, today)
    goals = await habits_config_repo.get_goals(user.id)

    return TodayResponse(
        date=today,
        goals=GoalsResponse(**asdict(goals)),
        movement_routine=MOVEMENT_EXERCISES.get(goals.movement_preference or ""),
        food_habits=food_checklist(LedgerState.from_log(log)),
        today=DailyLogResponse.model_validate(log) if log else None,
    )


@router.patch("/today/steps", response_model=HabitUpdateResponse)
async def update_steps(user_id: int, request: StepsUpdateRequest) -> HabitUpdateResponse:
    """Update manual or device steps. Effective steps = max of both sources."""
    return await apply_update(user_id, StepsInput(value=request.value, source=request.source))


@router.patch("/today/hydration", response_model=HabitUpdateResponse)
async def update_hydration(
    user_id: int, request: HydrationUpdateRequest
) -> HabitUpdateResponse:
    """Set today's glass count."""
    return await apply_update(user_id, HydrationInput(glasses=request.value))


@router.patch("/today/sleep", response_model=HabitUpdateResponse)
async def update_sleep(user_id: int, request: SleepUpdateRequest) -> HabitUpdateResponse:
    """Log sleep start and/or end (HH:MM). Hours are derived when both exist."""
    return await apply_update(
        user_id, SleepInput(sleep_start=request.sleep_start, sleep_end=request.sleep_end)
    )


@router.patch("/today/movement", response_model=HabitUpdateResponse)
async def update_movement(
    user_id: int, request: MovementUpdateRequest
) -> HabitUpdateResponse:
    return await apply_update(user_id, MovementInput(done=request.done))


@router.patch("/today/food", response_model=HabitUpdateResponse)
async def update_food(user_id: int, request: FoodUpdateRequest) -> HabitUpdateResponse:
    """Check or uncheck a food item. Unchecking never revokes XP."""
    return await apply_update(user_id, FoodInput(item=request.item, checked=request.checked))
