"""
Script to recompute every user's level from xp_total.
Run after changing the level table: python -m scripts.ops.recalc_levels
"""

import asyncio

from tortoise import Tortoise

from src.core.domain.gamification import level_for_xp
from src.database.config import TORTOISE_ORM
from src.database.models import User


async def recalculate_levels() -> int:
    """Recompute levels for all users. Returns the number of users changed."""
    users = await User.all()
    print(f"Found {len(users)} users to recalculate")

    changed = 0
    for user in users:
        new_level = level_for_xp(user.xp_total)
        if new_level == user.level:
            continue

        old_level = user.level
        user.level = new_level
        await user.save(update_fields=["level"])
        changed += 1
        print(f"  User {user.id}: level {old_level} -> {new_level} ({user.xp_total} XP)")

    return changed


async def main():
    await Tortoise.init(config=TORTOISE_ORM)
    try:
        changed = await recalculate_levels()
        print(f"\nDone! {changed} user(s) updated")
    finally:
        await Tortoise.close_connections()


if __name__ == "__main__":
    asyncio.run(main())
