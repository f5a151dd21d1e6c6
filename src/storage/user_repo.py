"""
User Repository - thin CRUD operations for the User model.

AICODE-NOTE: The repository only accesses data, WITHOUT business logic.
Level and streak rules live in src/core/domain/.
"""

from tortoise.backends.base.client import BaseDBAsyncClient

from src.database.models import User

XP_FIELDS = ["xp_total", "level"]
STREAK_FIELDS = [
    "current_streak",
    "longest_streak",
    "streak_shields",
    "streak_last_evaluated_date",
]
MASCOT_FIELDS = ["mascot_id", "mascot_name", "mascot_stage"]


async def get_user(user_id: int) -> User | None:
    """Get user by id."""
    return await User.get_or_none(id=user_id)


async def lock_user(user_id: int, connection: BaseDBAsyncClient) -> User | None:
    """Get user by id and lock the row until the transaction ends."""
    return (
        await User.filter(id=user_id)
        .using_db(connection)
        .select_for_update()
        .first()
    )


async def save_fields(
    user: User, update_fields: list[str], connection: BaseDBAsyncClient
) -> User:
    """Persist only the given fields."""
    await user.save(using_db=connection, update_fields=update_fields)
    return user
