"""
Pydantic schemas for the progression API.

Request models carry all input validation; the engine trusts what passes here.
"""

import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.core.domain.habit_rules import MAX_MANUAL_STEPS, SOURCE_MANUAL

HHMM_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"

# ============ Habit update requests ============


class StepsUpdateRequest(BaseModel):
    value: int = Field(ge=0)
    source: Literal["manual", "device"] = "manual"

    @model_validator(mode="after")
    def check_manual_cap(self) -> "StepsUpdateRequest":
        if self.source == SOURCE_MANUAL and self.value > MAX_MANUAL_STEPS:
            raise ValueError(
                f"Manual step entries are capped at {MAX_MANUAL_STEPS:,} steps/day."
            )
        return self


class HydrationUpdateRequest(BaseModel):
    value: int = Field(ge=0)


class SleepUpdateRequest(BaseModel):
    sleep_start: str | None = Field(default=None, pattern=HHMM_PATTERN)
    sleep_end: str | None = Field(default=None, pattern=HHMM_PATTERN)

    @model_validator(mode="after")
    def check_any_time(self) -> "SleepUpdateRequest":
        if not self.sleep_start and not self.sleep_end:
            raise ValueError("At least one of sleep_start or sleep_end is required.")
        return self


class MovementUpdateRequest(BaseModel):
    done: bool


class FoodUpdateRequest(BaseModel):
    item: Literal["vegetables", "no_junk", "breakfast"]
    checked: bool


# ============ Shared blocks ============


class DailyLogResponse(BaseModel):
    """Today's ledger values (award flags are internal)."""

    model_config = ConfigDict(from_attributes=True)

    steps: int | None = None
    steps_manual: int | None = None
    steps_device: int | None = None
    hydration_glasses: int | None = None
    sleep_start: str | None = None
    sleep_end: str | None = None
    sleep_hours: float | None = None
    movement_done: bool = False
    food_vegetables: bool = False
    food_no_junk: bool = False
    food_breakfast: bool = False
    xp_earned: int = 0


class GoalsResponse(BaseModel):
    daily_steps: int
    hydration_glasses: int
    movement_preference: str | None = None


class LevelUpResponse(BaseModel):
    previous_level: int
    new_level: int


class MascotResponse(BaseModel):
    id: int | None = None
    name: str | None = None
    stage: int | None = None
    mood: str | None = None


class EvolutionResponse(BaseModel):
    previous_mascot: MascotResponse
    new_mascot: MascotResponse
    evolution_level: int
    badges: list[str]


class FoodHabitItem(BaseModel):
    id: str
    label: str
    xp: int
    checked: bool


class ExerciseItem(BaseModel):
    name: str
    label: str
    reps: int


# ============ Responses ============


class HabitUpdateResponse(BaseModel):
    date: datetime.date
    category: str
    goal_met: bool
    xp_awarded: int
    xp_total: int
    level: int
    level_up: LevelUpResponse | None = None
    evolution: EvolutionResponse | None = None
    today: DailyLogResponse


class TodayResponse(BaseModel):
    date: datetime.date
    goals: GoalsResponse
    movement_routine: list[ExerciseItem] | None = None
    food_habits: list[FoodHabitItem]
    today: DailyLogResponse | None = None


class StreakResponse(BaseModel):
    current: int
    longest: int
    shields: int
    mood: str
    categories_completed_today: int
    categories_required: int
    on_track: bool


class BadgeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    badge_type: str
    badge_name: str


class DashboardResponse(BaseModel):
    user_id: int
    name: str | None = None
    mascot: MascotResponse | None = None
    streak: StreakResponse
    xp_total: int
    level: int
    xp_for_next_level: int | None = None
    daily_xp_earned: int
    daily_xp_cap: int
    badges: list[BadgeResponse]
