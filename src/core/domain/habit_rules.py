"""
Habit Rules Domain - pure XP rules for the five habit categories.

AICODE-NOTE: Pure functions WITHOUT DB access, WITHOUT side-effects.
Every rule receives a frozen snapshot of today's ledger, the new input and the
user's goals, and returns the raw (uncapped) XP plus the ledger fields to write.
Capping and persistence happen in src/core/use_cases/progression.py.

XP table:
- Steps: goal met 20 (5k goal) / 40 (any other goal), +5 per manual increase
  of >= 500 steps with a 2-hour cooldown
- Hydration: 5 per glass above the day's high-water mark, 20 at goal
- Sleep: 5 for start, 5 for end, 15 for >= 7 hours
- Movement: 15 when done
- Food: 10 / 10 / 5 per checkbox
"""

import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, fields
from datetime import datetime, timedelta, timezone
from typing import Any, ClassVar

STEPS = "steps"
HYDRATION = "hydration"
SLEEP = "sleep"
MOVEMENT = "movement"
FOOD = "food"

HABIT_CATEGORIES = (STEPS, HYDRATION, SLEEP, MOVEMENT, FOOD)

# Steps
MAX_MANUAL_STEPS = 50000
STEP_GOAL_XP_5K = 20
STEP_GOAL_XP = 40
STEP_BONUS_INCREMENT = 500
STEP_BONUS_XP = 5
STEP_BONUS_COOLDOWN = timedelta(hours=2)
SOURCE_MANUAL = "manual"
SOURCE_DEVICE = "device"

# Hydration
HYDRATION_GLASS_XP = 5
HYDRATION_GOAL_BONUS_XP = 20

# Sleep
SLEEP_LOG_XP = 5
SLEEP_GOAL_BONUS_XP = 15
SLEEP_GOAL_HOURS = 7

# Movement
MOVEMENT_XP = 15

# Defaults when the user has no habits config
DEFAULT_DAILY_STEPS = 10000
DEFAULT_HYDRATION_GLASSES = 8


@dataclass(frozen=True)
class FoodHabit:
    label: str
    xp: int
    column: str
    xp_column: str


FOOD_HABITS: dict[str, FoodHabit] = {
    "vegetables": FoodHabit(
        "Ate 2 servings of vegetables", 10, "food_vegetables", "food_vegetables_xp_awarded"
    ),
    "no_junk": FoodHabit(
        "Skipped junk food today", 10, "food_no_junk", "food_no_junk_xp_awarded"
    ),
    "breakfast": FoodHabit(
        "Ate breakfast", 5, "food_breakfast", "food_breakfast_xp_awarded"
    ),
}

# Preset 3-exercise routine per movement preference
MOVEMENT_EXERCISES: dict[str, list[dict[str, Any]]] = {
    "jumping_jacks": [
        {"name": "jumping_jacks", "label": "Jumping Jacks", "reps": 20},
        {"name": "chair_squats", "label": "Chair Squats", "reps": 15},
        {"name": "calf_raises", "label": "Calf Raises", "reps": 20},
    ],
    "chair_exercises": [
        {"name": "chair_squats", "label": "Chair Squats", "reps": 15},
        {"name": "shoulder_rolls", "label": "Shoulder Rolls", "reps": 10},
        {"name": "calf_raises", "label": "Calf Raises", "reps": 20},
    ],
    "walking": [
        {"name": "jumping_jacks", "label": "Jumping Jacks", "reps": 20},
        {"name": "shoulder_rolls", "label": "Shoulder Rolls", "reps": 10},
        {"name": "calf_raises", "label": "Calf Raises", "reps": 20},
    ],
}


@dataclass(frozen=True)
class GoalConfig:
    """User goals (defaults apply when no config exists)."""

    daily_steps: int = DEFAULT_DAILY_STEPS
    hydration_glasses: int = DEFAULT_HYDRATION_GLASSES
    movement_preference: str | None = None


DEFAULT_GOALS = GoalConfig()


@dataclass(frozen=True)
class LedgerState:
    """Read-only snapshot of a DailyLog row. Absent row = all defaults."""

    steps: int | None = None
    steps_manual: int | None = None
    steps_device: int | None = None
    steps_goal_xp_awarded: bool = False
    steps_last_bonus_at: datetime | None = None

    hydration_glasses: int | None = None
    hydration_xp_glasses: int = 0
    hydration_goal_xp_awarded: bool = False

    sleep_start: str | None = None
    sleep_end: str | None = None
    sleep_hours: float | None = None
    sleep_xp_start_awarded: bool = False
    sleep_xp_end_awarded: bool = False
    sleep_goal_xp_awarded: bool = False

    movement_done: bool = False
    movement_xp_awarded: bool = False

    food_vegetables: bool = False
    food_vegetables_xp_awarded: bool = False
    food_no_junk: bool = False
    food_no_junk_xp_awarded: bool = False
    food_breakfast: bool = False
    food_breakfast_xp_awarded: bool = False

    xp_earned: int = 0

    @classmethod
    def from_log(cls, log: Any | None) -> "LedgerState":
        if log is None:
            return cls()
        return cls(**{f.name: getattr(log, f.name) for f in fields(cls)})


@dataclass(frozen=True)
class RuleOutcome:
    """Raw XP and ledger writes produced by one category update."""

    category: str
    raw_xp: int
    writes: Mapping[str, Any]
    awards: tuple[str, ...] = field(default=())


# ============ Inputs ============


@dataclass(frozen=True)
class StepsInput:
    category: ClassVar[str] = STEPS

    value: int
    source: str = SOURCE_MANUAL


@dataclass(frozen=True)
class HydrationInput:
    category: ClassVar[str] = HYDRATION

    glasses: int


@dataclass(frozen=True)
class SleepInput:
    category: ClassVar[str] = SLEEP

    sleep_start: str | None = None
    sleep_end: str | None = None


@dataclass(frozen=True)
class MovementInput:
    category: ClassVar[str] = MOVEMENT

    done: bool


@dataclass(frozen=True)
class FoodInput:
    category: ClassVar[str] = FOOD

    item: str
    checked: bool


HabitInput = StepsInput | HydrationInput | SleepInput | MovementInput | FoodInput


def pays_once(already_awarded: bool, eligible: bool) -> bool:
    """
    One-shot award: True only on the not-awarded -> awarded transition.

    The persisted flag is `already_awarded or pays_once(...)`, so it never resets.
    """
    return eligible and not already_awarded


def step_goal_xp(daily_steps: int) -> int:
    return STEP_GOAL_XP_5K if daily_steps == 5000 else STEP_GOAL_XP


def _bonus_cooldown_passed(last_bonus_at: datetime | None, now: datetime) -> bool:
    if last_bonus_at is None:
        return True
    if last_bonus_at.tzinfo is None:
        last_bonus_at = last_bonus_at.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now - last_bonus_at >= STEP_BONUS_COOLDOWN


def steps_rule(
    ledger: LedgerState, data: StepsInput, goals: GoalConfig, now: datetime
) -> RuleOutcome:
    manual = data.value if data.source == SOURCE_MANUAL else ledger.steps_manual
    device = data.value if data.source == SOURCE_DEVICE else ledger.steps_device
    effective = max(manual or 0, device or 0)

    raw_xp = 0
    awards = []

    goal_paid = pays_once(ledger.steps_goal_xp_awarded, effective >= goals.daily_steps)
    if goal_paid:
        raw_xp += step_goal_xp(goals.daily_steps)
        awards.append("steps_goal")

    last_bonus_at = ledger.steps_last_bonus_at
    if data.source == SOURCE_MANUAL:
        increase = data.value - (ledger.steps_manual or 0)
        if increase >= STEP_BONUS_INCREMENT and _bonus_cooldown_passed(last_bonus_at, now):
            raw_xp += STEP_BONUS_XP
            last_bonus_at = now
            awards.append("steps_bonus")

    writes: dict[str, Any] = {
        "steps": effective,
        "steps_goal_xp_awarded": ledger.steps_goal_xp_awarded or goal_paid,
        "steps_last_bonus_at": last_bonus_at,
    }
    if data.source == SOURCE_MANUAL:
        writes["steps_manual"] = data.value
    else:
        writes["steps_device"] = data.value

    return RuleOutcome(STEPS, raw_xp, writes, tuple(awards))


def hydration_rule(
    ledger: LedgerState, data: HydrationInput, goals: GoalConfig, now: datetime
) -> RuleOutcome:
    previous_mark = ledger.hydration_xp_glasses or 0
    new_mark = max(previous_mark, data.glasses)

    raw_xp = (new_mark - previous_mark) * HYDRATION_GLASS_XP
    awards = ["hydration_glasses"] if raw_xp else []

    goal_paid = pays_once(
        ledger.hydration_goal_xp_awarded, data.glasses >= goals.hydration_glasses
    )
    if goal_paid:
        raw_xp += HYDRATION_GOAL_BONUS_XP
        awards.append("hydration_goal")

    writes = {
        "hydration_glasses": data.glasses,
        "hydration_xp_glasses": new_mark,
        "hydration_goal_xp_awarded": ledger.hydration_goal_xp_awarded or goal_paid,
    }
    return RuleOutcome(HYDRATION, raw_xp, writes, tuple(awards))


def _minutes(hhmm: str) -> int:
    hours, minutes = hhmm.split(":")
    return int(hours) * 60 + int(minutes)


def sleep_duration_hours(sleep_start: str, sleep_end: str) -> float:
    """
    Hours between HH:MM start and end, one decimal.

    end < start means the night crossed midnight.
    """
    start = _minutes(sleep_start)
    end = _minutes(sleep_end)
    diff = end - start if end >= start else 24 * 60 - start + end
    return math.floor(diff / 6 + 0.5) / 10


def sleep_rule(
    ledger: LedgerState, data: SleepInput, goals: GoalConfig, now: datetime
) -> RuleOutcome:
    start = data.sleep_start or ledger.sleep_start
    end = data.sleep_end or ledger.sleep_end

    hours = sleep_duration_hours(start, end) if start and end else None

    raw_xp = 0
    awards = []

    start_paid = pays_once(ledger.sleep_xp_start_awarded, bool(start))
    if start_paid:
        raw_xp += SLEEP_LOG_XP
        awards.append("sleep_start")

    end_paid = pays_once(ledger.sleep_xp_end_awarded, bool(end))
    if end_paid:
        raw_xp += SLEEP_LOG_XP
        awards.append("sleep_end")

    goal_paid = pays_once(
        ledger.sleep_goal_xp_awarded, hours is not None and hours >= SLEEP_GOAL_HOURS
    )
    if goal_paid:
        raw_xp += SLEEP_GOAL_BONUS_XP
        awards.append("sleep_goal")

    writes: dict[str, Any] = {
        "sleep_xp_start_awarded": ledger.sleep_xp_start_awarded or start_paid,
        "sleep_xp_end_awarded": ledger.sleep_xp_end_awarded or end_paid,
        "sleep_goal_xp_awarded": ledger.sleep_goal_xp_awarded or goal_paid,
    }
    if start:
        writes["sleep_start"] = start
    if end:
        writes["sleep_end"] = end
    if hours is not None:
        writes["sleep_hours"] = hours

    return RuleOutcome(SLEEP, raw_xp, writes, tuple(awards))


def movement_rule(
    ledger: LedgerState, data: MovementInput, goals: GoalConfig, now: datetime
) -> RuleOutcome:
    paid = pays_once(ledger.movement_xp_awarded, data.done)
    writes = {
        "movement_done": data.done,
        "movement_xp_awarded": ledger.movement_xp_awarded or paid,
    }
    return RuleOutcome(
        MOVEMENT, MOVEMENT_XP if paid else 0, writes, ("movement",) if paid else ()
    )


def food_rule(
    ledger: LedgerState, data: FoodInput, goals: GoalConfig, now: datetime
) -> RuleOutcome:
    habit = FOOD_HABITS[data.item]
    already_awarded = getattr(ledger, habit.xp_column)
    paid = pays_once(already_awarded, data.checked)
    writes = {
        habit.column: data.checked,
        habit.xp_column: already_awarded or paid,
    }
    return RuleOutcome(
        FOOD, habit.xp if paid else 0, writes, (f"food_{data.item}",) if paid else ()
    )


HABIT_RULES: dict[type, Callable[..., RuleOutcome]] = {
    StepsInput: steps_rule,
    HydrationInput: hydration_rule,
    SleepInput: sleep_rule,
    MovementInput: movement_rule,
    FoodInput: food_rule,
}


def evaluate_habit(
    ledger: LedgerState, data: HabitInput, goals: GoalConfig, now: datetime
) -> RuleOutcome:
    """Dispatch one category update to its rule."""
    rule = HABIT_RULES[type(data)]
    return rule(ledger, data, goals, now)


# ============ Category completion (streak input) ============


def completed_categories(ledger: LedgerState, goals: GoalConfig) -> list[str]:
    """Categories that met their goal in this ledger."""
    done = []
    if ledger.steps is not None and ledger.steps >= goals.daily_steps:
        done.append(STEPS)
    if (
        ledger.hydration_glasses is not None
        and ledger.hydration_glasses >= goals.hydration_glasses
    ):
        done.append(HYDRATION)
    if ledger.sleep_hours is not None and ledger.sleep_hours >= SLEEP_GOAL_HOURS:
        done.append(SLEEP)
    if ledger.movement_done:
        done.append(MOVEMENT)
    if ledger.food_vegetables or ledger.food_no_junk or ledger.food_breakfast:
        done.append(FOOD)
    return done


def count_completed_categories(ledger: LedgerState, goals: GoalConfig) -> int:
    return len(completed_categories(ledger, goals))


def food_checklist(ledger: LedgerState) -> list[dict[str, Any]]:
    """Food checklist for the read path."""
    return [
        {
            "id": key,
            "label": habit.label,
            "xp": habit.xp,
            "checked": bool(getattr(ledger, habit.column)),
        }
        for key, habit in FOOD_HABITS.items()
    ]
