"""
Mascot Evolution Use Case - applies an EvolutionPlan to the user.

Runs inside the caller's transaction, right after a level-up is computed.
"""

import logging
from dataclasses import dataclass, field

from tortoise.backends.base.client import BaseDBAsyncClient

from src.core.domain.evolution import (
    BADGE_NAMES,
    MASCOT_EVOLUTION,
    Mascot,
    plan_evolution,
)
from src.database.models import User
from src.storage import badge_repo, user_repo

logger = logging.getLogger(__name__)


@dataclass
class EvolutionResult:
    previous_mascot_id: int | None
    previous_mascot_name: str | None
    new_mascot: Mascot
    evolution_level: int
    badges: tuple[str, ...]
    badges_granted: list[str] = field(default_factory=list)


async def check_and_apply_evolution(
    user: User,
    previous_level: int,
    new_level: int,
    connection: BaseDBAsyncClient,
) -> EvolutionResult | None:
    """
    Evolve the mascot and grant badges if the level change crossed 5 or 10.

    Returns None when nothing changes (no crossing, unknown BMI category,
    mascot already at the target stage).
    """
    plan = plan_evolution(user.bmi_category, user.mascot_id, previous_level, new_level)
    if plan is None:
        if new_level > previous_level and user.bmi_category not in MASCOT_EVOLUTION:
            logger.warning(
                f"User {user.id} has no mascot mapping for "
                f"BMI category {user.bmi_category!r}, skipping evolution"
            )
        return None

    result = EvolutionResult(
        previous_mascot_id=user.mascot_id,
        previous_mascot_name=user.mascot_name,
        new_mascot=plan.new_mascot,
        evolution_level=plan.evolution_level,
        badges=plan.badges,
    )

    user.mascot_id = plan.new_mascot.id
    user.mascot_name = plan.new_mascot.name
    user.mascot_stage = plan.new_mascot.stage
    await user_repo.save_fields(user, user_repo.MASCOT_FIELDS, connection)

    for badge_type in plan.badges:
        if await badge_repo.grant_badge(
            user.id, badge_type, BADGE_NAMES[badge_type], connection
        ):
            result.badges_granted.append(badge_type)

    logger.info(
        f"User {user.id} mascot evolved: {result.previous_mascot_name} -> "
        f"{plan.new_mascot.name} (level {previous_level} -> {new_level}), "
        f"badges granted: {result.badges_granted}"
    )
    return result
