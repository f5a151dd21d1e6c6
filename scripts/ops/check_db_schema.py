"""
Script to check that the production database schema matches the models.

Usage:
    python -m scripts.ops.check_db_schema

AICODE-NOTE: Diagnoses a missed `aerich upgrade` before habit writes start
failing with OperationalError.
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from tortoise import Tortoise

from src.core.domain.habit_rules import LedgerState
from src.database.config import TORTOISE_ORM
from src.database.models import Badge, DailyLog, HabitsConfig, User
from src.storage.user_repo import STREAK_FIELDS

LEDGER_COLUMNS = [name for name in LedgerState.__dataclass_fields__]


async def check_table_exists(model, table_name: str) -> tuple[bool, str]:
    """Check that a table exists and every model column is readable."""
    try:
        await model.all().limit(1)
        return True, f"✅ Table '{table_name}' exists and is accessible"
    except Exception as e:
        return False, f"❌ Table '{table_name}' error: {e}"


async def check_columns(model, columns: list[str], label: str) -> tuple[bool, str]:
    """Select the given columns explicitly."""
    try:
        await model.all().limit(1).values("id", *columns)
        return True, f"✅ {label} columns exist ({len(columns)})"
    except Exception as e:
        return False, f"❌ {label} columns error: {e}"


async def run_checks() -> bool:
    checks = [
        ("Users table", check_table_exists(User, "users")),
        ("HabitsConfig table", check_table_exists(HabitsConfig, "habits_config")),
        ("DailyLogs table", check_table_exists(DailyLog, "daily_logs")),
        ("Badges table", check_table_exists(Badge, "badges")),
        ("DailyLog ledger columns", check_columns(DailyLog, LEDGER_COLUMNS, "Ledger")),
        ("User streak columns", check_columns(User, STREAK_FIELDS, "Streak")),
    ]

    all_passed = True
    for check_name, check_coro in checks:
        success, message = await check_coro
        print(f"\n{check_name}:")
        print(f"  {message}")
        if not success:
            all_passed = False
    return all_passed


async def main():
    print("🔍 Checking database schema synchronization...")
    print("=" * 60)

    await Tortoise.init(config=TORTOISE_ORM)
    try:
        all_passed = await run_checks()
    finally:
        await Tortoise.close_connections()

    print("\n" + "=" * 60)
    if all_passed:
        print("✅ All checks passed! Database schema is synchronized.")
        return 0

    print("❌ Some checks failed. Database schema is NOT synchronized.")
    print("\n💡 Possible solutions:")
    print("  1. Run migrations: aerich upgrade")
    print("  2. Check if migrations are up to date: aerich history")
    print("  3. Create missing migration: aerich migrate --name 'fix_schema'")
    return 1


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
