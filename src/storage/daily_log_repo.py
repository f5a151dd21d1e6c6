"""
DailyLog Repository - thin CRUD operations for the DailyLog model.

AICODE-NOTE: The repository only accesses data, WITHOUT business logic.
"""

from collections.abc import Mapping
from datetime import date
from typing import Any

from tortoise.backends.base.client import BaseDBAsyncClient

from src.database.models import DailyLog


async def get_daily_log(user_id: int, log_date: date) -> DailyLog | None:
    """Get DailyLog for the given date."""
    return await DailyLog.get_or_none(user_id=user_id, date=log_date)


async def lock_daily_log(
    user_id: int, log_date: date, connection: BaseDBAsyncClient
) -> DailyLog | None:
    """Get DailyLog for the given date and lock the row."""
    return (
        await DailyLog.filter(user_id=user_id, date=log_date)
        .using_db(connection)
        .select_for_update()
        .first()
    )


async def write_daily_log(
    log: DailyLog | None,
    user_id: int,
    log_date: date,
    writes: Mapping[str, Any],
    connection: BaseDBAsyncClient,
) -> DailyLog:
    """Create the day's DailyLog with the given fields, or update them."""
    if log is None:
        return await DailyLog.create(
            user_id=user_id, date=log_date, using_db=connection, **writes
        )

    for name, value in writes.items():
        setattr(log, name, value)
    await log.save(using_db=connection, update_fields=[*writes, "updated_at"])
    return log


async def get_logs_between(
    user_id: int,
    start: date,
    end: date,
    connection: BaseDBAsyncClient | None = None,
) -> dict[date, DailyLog]:
    """All DailyLogs in [start, end], keyed by date."""
    query = DailyLog.filter(user_id=user_id, date__gte=start, date__lte=end)
    if connection is not None:
        query = query.using_db(connection)
    return {log.date: log for log in await query}
