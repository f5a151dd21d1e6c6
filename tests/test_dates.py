from datetime import date, datetime, timezone

from src.core.domain.dates import today_for_timezone

NOW = datetime(2026, 3, 10, 23, 30, tzinfo=timezone.utc)


def test_today_in_utc():
    assert today_for_timezone("UTC", NOW) == date(2026, 3, 10)
    assert today_for_timezone(None, NOW) == date(2026, 3, 10)


def test_today_ahead_of_utc():
    assert today_for_timezone("Europe/Berlin", NOW) == date(2026, 3, 11)


def test_today_behind_utc():
    now = datetime(2026, 3, 10, 2, 0, tzinfo=timezone.utc)
    assert today_for_timezone("America/New_York", now) == date(2026, 3, 9)


def test_unknown_timezone_falls_back_to_utc():
    assert today_for_timezone("Mars/Olympus", NOW) == date(2026, 3, 10)
