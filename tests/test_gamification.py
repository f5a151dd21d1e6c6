import pytest

from src.core.domain.gamification import (
    DAILY_XP_CAP,
    LEVEL_THRESHOLDS,
    build_level_thresholds,
    cap_daily_xp,
    level_for_xp,
    xp_for_next_level,
)


def test_level_table_seed_and_growth():
    table = build_level_thresholds(10)
    assert table == (0, 500, 1200, 2040, 3048, 4258, 5710, 7452, 9542, 12050)


def test_level_table_is_strictly_increasing():
    assert all(a < b for a, b in zip(LEVEL_THRESHOLDS, LEVEL_THRESHOLDS[1:]))


@pytest.mark.parametrize(
    "xp, level",
    [(0, 1), (499, 1), (500, 2), (1199, 2), (1200, 3), (3048, 5), (12050, 10)],
)
def test_level_for_xp_boundaries(xp, level):
    assert level_for_xp(xp) == level


def test_level_for_xp_is_monotonic():
    levels = [level_for_xp(xp) for xp in range(0, 20000, 37)]
    assert levels == sorted(levels)


def test_xp_for_next_level():
    assert xp_for_next_level(1) == 500
    assert xp_for_next_level(2) == 1200
    assert xp_for_next_level(len(LEVEL_THRESHOLDS)) is None


def test_cap_daily_xp():
    assert cap_daily_xp(0, 40) == 40
    assert cap_daily_xp(130, 40) == 20
    assert cap_daily_xp(145, 10) == 5
    assert cap_daily_xp(150, 10) == 0
    assert cap_daily_xp(100, -5) == 0
    assert cap_daily_xp(DAILY_XP_CAP, 40) == 0
    assert cap_daily_xp(50, 0) == 0
    assert cap_daily_xp(50, -10) == 0


def test_cap_daily_xp_never_exceeds_cap_over_a_day():
    day_total = 0
    for raw in [40, 20, 15, 30, 40, 25, 10]:
        day_total += cap_daily_xp(day_total, raw)
    assert day_total == DAILY_XP_CAP
