"""Calendar helpers: resolving a user's "today"."""

import logging
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)


def today_for_timezone(tz_name: str | None, now: datetime | None = None) -> date:
    """
    Calendar date in the given IANA timezone.

    Falls back to UTC if the timezone is missing or unknown.
    """
    now = now or datetime.now(timezone.utc)
    if not tz_name:
        return now.astimezone(timezone.utc).date()
    try:
        return now.astimezone(ZoneInfo(tz_name)).date()
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown timezone {tz_name!r}, falling back to UTC")
        return now.astimezone(timezone.utc).date()
