from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from src.core.domain.habit_rules import (
    DEFAULT_GOALS,
    FOOD,
    HYDRATION,
    MOVEMENT,
    SLEEP,
    STEPS,
    FoodInput,
    GoalConfig,
    HydrationInput,
    LedgerState,
    MovementInput,
    SleepInput,
    StepsInput,
    completed_categories,
    count_completed_categories,
    evaluate_habit,
    food_checklist,
    pays_once,
    sleep_duration_hours,
)

NOW = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)


def apply(ledger: LedgerState, data, goals=DEFAULT_GOALS, now=NOW):
    """Run a rule and fold its writes into the ledger like the DB would."""
    outcome = evaluate_habit(ledger, data, goals, now)
    return replace(ledger, **outcome.writes), outcome


def test_pays_once():
    assert pays_once(False, True) is True
    assert pays_once(True, True) is False
    assert pays_once(False, False) is False
    assert pays_once(True, False) is False


# ============ Steps ============


def test_steps_goal_pays_once():
    ledger, outcome = apply(LedgerState(), StepsInput(10000, "device"))
    assert outcome.raw_xp == 40
    assert ledger.steps_goal_xp_awarded

    ledger, outcome = apply(ledger, StepsInput(12000, "device"))
    assert outcome.raw_xp == 0
    assert ledger.steps == 12000


def test_steps_goal_xp_for_5k_goal():
    goals = GoalConfig(daily_steps=5000, hydration_glasses=8)
    _, outcome = apply(LedgerState(), StepsInput(5000, "device"), goals)
    assert outcome.raw_xp == 20


def test_effective_steps_is_max_of_sources():
    ledger, _ = apply(LedgerState(), StepsInput(3000, "device"))
    ledger, _ = apply(ledger, StepsInput(1000, "manual"))
    assert ledger.steps == 3000
    assert ledger.steps_manual == 1000
    assert ledger.steps_device == 3000


def test_steps_manual_bonus_cooldown():
    # +600 -> bonus
    ledger, outcome = apply(LedgerState(), StepsInput(600))
    assert outcome.raw_xp == 5
    assert outcome.awards == ("steps_bonus",)

    # +600 an hour later -> cooldown
    ledger, outcome = apply(ledger, StepsInput(1200), now=NOW + timedelta(hours=1))
    assert outcome.raw_xp == 0
    assert ledger.steps_last_bonus_at == NOW

    # +600 after the cooldown -> bonus again
    later = NOW + timedelta(hours=2, minutes=1)
    ledger, outcome = apply(ledger, StepsInput(1800), now=later)
    assert outcome.raw_xp == 5
    assert ledger.steps_last_bonus_at == later


def test_steps_small_increase_or_device_gives_no_bonus():
    _, outcome = apply(LedgerState(), StepsInput(499))
    assert outcome.raw_xp == 0

    _, outcome = apply(LedgerState(), StepsInput(2000, "device"))
    assert outcome.raw_xp == 0


def test_steps_decrease_never_revokes_goal():
    ledger, _ = apply(LedgerState(), StepsInput(10000, "device"))
    ledger, outcome = apply(ledger, StepsInput(100, "device"))
    assert outcome.raw_xp == 0
    assert ledger.steps == 100
    assert ledger.steps_goal_xp_awarded


# ============ Hydration ============


def test_hydration_high_water_mark():
    ledger, outcome = apply(LedgerState(), HydrationInput(3))
    assert outcome.raw_xp == 15

    ledger, outcome = apply(ledger, HydrationInput(5))
    assert outcome.raw_xp == 10

    ledger, outcome = apply(ledger, HydrationInput(3))
    assert outcome.raw_xp == 0
    assert ledger.hydration_glasses == 3
    assert ledger.hydration_xp_glasses == 5

    ledger, outcome = apply(ledger, HydrationInput(5))
    assert outcome.raw_xp == 0


def test_hydration_goal_bonus_once():
    ledger, outcome = apply(LedgerState(), HydrationInput(8))
    assert outcome.raw_xp == 8 * 5 + 20
    assert outcome.awards == ("hydration_glasses", "hydration_goal")

    ledger, _ = apply(ledger, HydrationInput(2))
    _, outcome = apply(ledger, HydrationInput(8))
    assert outcome.raw_xp == 0


# ============ Sleep ============


@pytest.mark.parametrize(
    "start, end, hours",
    [
        ("23:00", "07:00", 8.0),
        ("22:30", "05:45", 7.3),
        ("01:00", "06:30", 5.5),
        ("23:50", "00:10", 0.3),
        ("07:00", "07:00", 0.0),
    ],
)
def test_sleep_duration_hours(start, end, hours):
    assert sleep_duration_hours(start, end) == hours


def test_sleep_start_then_end_across_midnight():
    ledger, outcome = apply(LedgerState(), SleepInput(sleep_start="23:00"))
    assert outcome.raw_xp == 5
    assert ledger.sleep_hours is None

    ledger, outcome = apply(ledger, SleepInput(sleep_end="07:00"))
    assert outcome.raw_xp == 5 + 15
    assert ledger.sleep_hours == 8.0
    assert outcome.awards == ("sleep_end", "sleep_goal")


def test_sleep_edits_do_not_pay_again():
    ledger, _ = apply(LedgerState(), SleepInput("23:00", "07:00"))
    ledger, outcome = apply(ledger, SleepInput(sleep_end="04:00"))
    assert outcome.raw_xp == 0
    assert ledger.sleep_hours == 5.0
    assert ledger.sleep_goal_xp_awarded


# ============ Movement / Food ============


def test_movement_toggle_pays_once():
    ledger, outcome = apply(LedgerState(), MovementInput(True))
    assert outcome.raw_xp == 15
    ledger, outcome = apply(ledger, MovementInput(False))
    assert outcome.raw_xp == 0
    assert not ledger.movement_done
    _, outcome = apply(ledger, MovementInput(True))
    assert outcome.raw_xp == 0


def test_food_uncheck_keeps_xp_flag():
    ledger, outcome = apply(LedgerState(), FoodInput("vegetables", True))
    assert outcome.raw_xp == 10
    assert outcome.awards == ("food_vegetables",)

    ledger, outcome = apply(ledger, FoodInput("vegetables", False))
    assert outcome.raw_xp == 0
    assert not ledger.food_vegetables
    assert ledger.food_vegetables_xp_awarded

    _, outcome = apply(ledger, FoodInput("vegetables", True))
    assert outcome.raw_xp == 0


def test_food_items_are_independent():
    ledger, _ = apply(LedgerState(), FoodInput("no_junk", True))
    _, outcome = apply(ledger, FoodInput("breakfast", True))
    assert outcome.raw_xp == 5


def test_rule_is_idempotent_for_repeated_input():
    for data in [
        StepsInput(10000, "device"),
        HydrationInput(8),
        SleepInput("23:00", "07:00"),
        MovementInput(True),
        FoodInput("breakfast", True),
    ]:
        ledger, first = apply(LedgerState(), data)
        _, second = apply(ledger, data)
        assert first.raw_xp > 0
        assert second.raw_xp == 0


# ============ Completion ============


def test_completed_categories():
    assert completed_categories(LedgerState(), DEFAULT_GOALS) == []

    ledger = LedgerState(
        steps=10000,
        hydration_glasses=8,
        sleep_hours=6.9,
        movement_done=True,
        food_breakfast=True,
    )
    assert completed_categories(ledger, DEFAULT_GOALS) == [
        STEPS,
        HYDRATION,
        MOVEMENT,
        FOOD,
    ]
    assert count_completed_categories(replace(ledger, sleep_hours=7.0), DEFAULT_GOALS) == 5
    assert SLEEP not in completed_categories(ledger, DEFAULT_GOALS)


def test_completion_uses_current_values_not_award_flags():
    ledger = LedgerState(steps=100, steps_goal_xp_awarded=True, movement_xp_awarded=True)
    assert count_completed_categories(ledger, DEFAULT_GOALS) == 0


def test_food_checklist():
    checklist = food_checklist(LedgerState(food_no_junk=True))
    assert [item["id"] for item in checklist] == ["vegetables", "no_junk", "breakfast"]
    assert [item["checked"] for item in checklist] == [False, True, False]
