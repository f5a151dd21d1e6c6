"""
Tests that the Tortoise ORM models and the generated schema agree.

AICODE-NOTE: Catches missing columns and broken constraints before they turn
into OperationalError / IntegrityError at runtime.
"""

from datetime import date, datetime, timezone

import pytest
from tortoise.exceptions import IntegrityError, OperationalError

from src.core.domain.habit_rules import LedgerState
from src.database.models import Badge, DailyLog, HabitsConfig, User


@pytest.mark.asyncio
async def test_all_models_have_tables(db):
    tables = {
        "users": User,
        "habits_config": HabitsConfig,
        "daily_logs": DailyLog,
        "badges": Badge,
    }

    for table_name, model in tables.items():
        try:
            await model.all().limit(1)
        except OperationalError as e:
            pytest.fail(f"Table '{table_name}' does not exist or has schema issues: {e}")


@pytest.mark.asyncio
async def test_ledger_snapshot_covers_daily_log_columns(user):
    """Every LedgerState field must be a DailyLog column."""
    bonus_at = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)
    daily_log = await DailyLog.create(
        user=user,
        date=date(2026, 3, 10),
        steps=1200,
        steps_manual=1200,
        steps_last_bonus_at=bonus_at,
        sleep_start="23:00",
        sleep_end="07:00",
        sleep_hours=8.0,
        food_no_junk=True,
    )

    fetched = await DailyLog.get(id=daily_log.id)
    ledger = LedgerState.from_log(fetched)

    assert ledger.steps == 1200
    assert ledger.steps_last_bonus_at == bonus_at
    assert ledger.sleep_hours == 8.0
    assert ledger.food_no_junk
    assert ledger.hydration_xp_glasses == 0
    assert ledger.xp_earned == 0


@pytest.mark.asyncio
async def test_one_daily_log_per_user_per_day(user):
    await DailyLog.create(user=user, date=date(2026, 3, 10))

    with pytest.raises(IntegrityError):
        await DailyLog.create(user=user, date=date(2026, 3, 10))


@pytest.mark.asyncio
async def test_one_badge_per_type(user):
    await Badge.create(user=user, badge_type="champion", badge_name="Champion")

    with pytest.raises(IntegrityError):
        await Badge.create(user=user, badge_type="champion", badge_name="Champion")


@pytest.mark.asyncio
async def test_user_defaults(db):
    user = await User.create(name="Fresh")

    assert user.xp_total == 0
    assert user.level == 1
    assert user.current_streak == 0
    assert user.streak_shields == 0
    assert user.streak_last_evaluated_date is None
    assert user.mascot_stage == 1



@pytest.mark.asyncio
async def test_schema_check_script_passes(db):
    from scripts.ops.check_db_schema import run_checks

    assert await run_checks() is True
