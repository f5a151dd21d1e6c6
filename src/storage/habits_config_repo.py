"""
HabitsConfig Repository - user goals as a domain GoalConfig.

Missing config is not an error: defaults apply.
"""

from tortoise.backends.base.client import BaseDBAsyncClient

from src.core.domain.habit_rules import DEFAULT_GOALS, GoalConfig
from src.database.models import HabitsConfig


async def get_goals(
    user_id: int, connection: BaseDBAsyncClient | None = None
) -> GoalConfig:
    query = HabitsConfig.filter(user_id=user_id)
    if connection is not None:
        query = query.using_db(connection)
    habits_config = await query.first()
    if habits_config is None:
        return DEFAULT_GOALS
    return GoalConfig(
        daily_steps=habits_config.daily_steps,
        hydration_glasses=habits_config.hydration_glasses,
        movement_preference=habits_config.movement_preference,
    )
