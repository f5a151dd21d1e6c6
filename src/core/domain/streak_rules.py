"""
Streak Domain - pure backfill of unevaluated days.

AICODE-NOTE: Pure functions WITHOUT DB access. The use-case loads the ledgers
for the whole range once, feeds completed-category counts here in
chronological order and persists the final state in one write.

Rules per evaluated day:
- >= 3 of 5 categories completed -> streak += 1,
  every 7th streak day banks a shield (max 1)
- < 3 and a shield is banked -> shield consumed, streak kept (not incremented)
- < 3 and no shield -> streak = 0
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace
from datetime import date, timedelta

STREAK_THRESHOLD = 3
SHIELD_STREAK_INTERVAL = 7
MAX_SHIELDS = 1

DAY_COMPLETED = "completed"
DAY_SHIELDED = "shielded"
DAY_RESET = "reset"


@dataclass(frozen=True)
class StreakState:
    current_streak: int = 0
    longest_streak: int = 0
    streak_shields: int = 0


@dataclass(frozen=True)
class DayOutcome:
    day: date
    completed_categories: int
    result: str  # completed | shielded | reset
    shield_earned: bool = False


def advance_streak(state: StreakState, completed: int) -> tuple[StreakState, str, bool]:
    """
    Apply one day to the streak state.

    Returns (new_state, result, shield_earned).
    """
    current = state.current_streak
    shields = state.streak_shields
    shield_earned = False

    if completed >= STREAK_THRESHOLD:
        current += 1
        result = DAY_COMPLETED
        if current % SHIELD_STREAK_INTERVAL == 0 and shields < MAX_SHIELDS:
            shields += 1
            shield_earned = True
    elif shields > 0:
        shields -= 1
        result = DAY_SHIELDED
    else:
        current = 0
        result = DAY_RESET

    new_state = replace(
        state,
        current_streak=current,
        longest_streak=max(state.longest_streak, current),
        streak_shields=shields,
    )
    return new_state, result, shield_earned


def iter_days(start: date, end: date) -> Iterator[date]:
    """Every date from start through end, inclusive."""
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def days_to_evaluate(watermark: date, today: date) -> list[date]:
    """Dates after the watermark and before today."""
    return list(iter_days(watermark + timedelta(days=1), today - timedelta(days=1)))


def backfill_streak(
    state: StreakState, completions: Iterable[tuple[date, int]]
) -> tuple[StreakState, list[DayOutcome]]:
    """Fold (day, completed_count) pairs, in order, into the streak state."""
    outcomes = []
    for day, completed in completions:
        state, result, shield_earned = advance_streak(state, completed)
        outcomes.append(DayOutcome(day, completed, result, shield_earned))
    return state, outcomes
