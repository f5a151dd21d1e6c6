"""
Mascot Evolution Domain - level crossings, mascot stages and badges.

AICODE-NOTE: Pure functions WITHOUT DB access.

Each BMI category has a 3-stage mascot:
- Stage 1 (Level 1-4): starter mascot (assigned at onboarding)
- Stage 2 (Level 5-9): evolved mascot
- Stage 3 (Level 10+): final form
"""

from dataclasses import dataclass

EVOLUTION_LEVEL_5 = 5
EVOLUTION_LEVEL_10 = 10

BADGE_EVOLUTION_5 = "evolution_5"
BADGE_CHAMPION = "champion"

BADGE_NAMES = {
    BADGE_EVOLUTION_5: "Mascot Evolution",
    BADGE_CHAMPION: "Champion",
}


@dataclass(frozen=True)
class Mascot:
    id: int
    name: str
    stage: int


MASCOT_EVOLUTION: dict[str, tuple[Mascot, Mascot, Mascot]] = {
    "underweight": (
        Mascot(1, "Baby Flamingo", 1),
        Mascot(11, "Flamingo", 2),
        Mascot(12, "Dancing Flamingo", 3),
    ),
    "normal": (
        Mascot(2, "Energetic Fox", 1),
        Mascot(21, "Swift Fox", 2),
        Mascot(22, "Champion Fox", 3),
    ),
    "overweight": (
        Mascot(3, "Chunky Bear", 1),
        Mascot(31, "Strong Bear", 2),
        Mascot(32, "Mighty Bear", 3),
    ),
    "obese_1": (
        Mascot(4, "Sleepy Panda", 1),
        Mascot(41, "Active Panda", 2),
        Mascot(42, "Warrior Panda", 3),
    ),
    "obese_2": (
        Mascot(5, "Cozy Sloth", 1),
        Mascot(51, "Speedy Sloth", 2),
        Mascot(52, "Turbo Sloth", 3),
    ),
}


@dataclass(frozen=True)
class EvolutionPlan:
    """What an evolution check decided: the target mascot and badges to grant."""

    new_mascot: Mascot
    badges: tuple[str, ...]
    evolution_level: int


def mascot_stage_for_level(level: int) -> int:
    """Stage index 0, 1 or 2 for a level."""
    if level >= EVOLUTION_LEVEL_10:
        return 2
    if level >= EVOLUTION_LEVEL_5:
        return 1
    return 0


def mascot_for_level(bmi_category: str | None, level: int) -> Mascot | None:
    """Mascot for a BMI category and level. None if the category is unknown."""
    stages = MASCOT_EVOLUTION.get(bmi_category or "")
    if not stages:
        return None
    return stages[mascot_stage_for_level(level)]


def plan_evolution(
    bmi_category: str | None,
    current_mascot_id: int | None,
    previous_level: int,
    new_level: int,
) -> EvolutionPlan | None:
    """
    Decide whether a level change evolves the mascot.

    A jump across both 5 and 10 grants both badges and lands directly on the
    final stage.
    """
    if new_level <= previous_level:
        return None

    crossed_5 = previous_level < EVOLUTION_LEVEL_5 <= new_level
    crossed_10 = previous_level < EVOLUTION_LEVEL_10 <= new_level
    if not crossed_5 and not crossed_10:
        return None

    new_mascot = mascot_for_level(bmi_category, new_level)
    if new_mascot is None or new_mascot.id == current_mascot_id:
        return None

    badges = []
    if crossed_5:
        badges.append(BADGE_EVOLUTION_5)
    if crossed_10:
        badges.append(BADGE_CHAMPION)

    return EvolutionPlan(
        new_mascot=new_mascot,
        badges=tuple(badges),
        evolution_level=EVOLUTION_LEVEL_10 if crossed_10 else EVOLUTION_LEVEL_5,
    )
