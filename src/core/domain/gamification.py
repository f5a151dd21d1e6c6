"""
Gamification Domain Rules - pure functions for level and daily XP cap.

AICODE-NOTE: Pure functions WITHOUT DB access, WITHOUT side-effects.
Called from use-cases to compute awards.

Level thresholds:
- Level 1 = 0 XP
- Level 2 = 500 XP
- Level 3 = 1200 XP
- Every next increment = round(previous increment * 1.2)
"""

from bisect import bisect_right

from src.config import config

DAILY_XP_CAP = 150

LEVEL_SEED_THRESHOLDS = (0, 500, 1200)
LEVEL_GROWTH_FACTOR = 1.2


def build_level_thresholds(max_level: int = 100) -> tuple[int, ...]:
    """
    Build the minimum cumulative XP for each level.

    Index = level - 1. The table is monotonic and generated once.
    """
    thresholds = list(LEVEL_SEED_THRESHOLDS[:max_level])
    increment = LEVEL_SEED_THRESHOLDS[2] - LEVEL_SEED_THRESHOLDS[1]
    while len(thresholds) < max_level:
        increment = round(increment * LEVEL_GROWTH_FACTOR)
        thresholds.append(thresholds[-1] + increment)
    return tuple(thresholds)


LEVEL_THRESHOLDS = build_level_thresholds(config.LEVEL_TABLE_MAX_LEVEL)


def level_for_xp(xp: int, thresholds: tuple[int, ...] = LEVEL_THRESHOLDS) -> int:
    """
    Highest level L such that threshold[L] <= xp.

    Examples:
    - 0 XP = Level 1
    - 500 XP = Level 2
    - 1199 XP = Level 2
    - 1200 XP = Level 3
    """
    return max(1, bisect_right(thresholds, xp))


def xp_for_next_level(
    level: int, thresholds: tuple[int, ...] = LEVEL_THRESHOLDS
) -> int | None:
    """Threshold for level + 1, or None at the last generated level."""
    if level >= len(thresholds):
        return None
    return thresholds[level]


def cap_daily_xp(current_day_xp: int, raw_delta: int) -> int:
    """
    Clamp a proposed XP delta against DAILY_XP_CAP.

    current_day_xp must come from the same transaction that persists the
    new daily total.
    """
    if raw_delta <= 0:
        return 0
    remaining = max(0, DAILY_XP_CAP - (current_day_xp or 0))
    return min(raw_delta, remaining)
