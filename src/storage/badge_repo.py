"""Badge Repository - idempotent badge grants."""

from tortoise.backends.base.client import BaseDBAsyncClient

from src.database.models import Badge


async def grant_badge(
    user_id: int, badge_type: str, badge_name: str, connection: BaseDBAsyncClient
) -> bool:
    """
    Grant a badge once.

    Returns True if newly granted, False if the user already had it.
    """
    exists = (
        await Badge.filter(user_id=user_id, badge_type=badge_type)
        .using_db(connection)
        .exists()
    )
    if exists:
        return False
    await Badge.create(
        user_id=user_id, badge_type=badge_type, badge_name=badge_name, using_db=connection
    )
    return True


async def list_badges(user_id: int) -> list[Badge]:
    return await Badge.filter(user_id=user_id).order_by("awarded_at", "id")
