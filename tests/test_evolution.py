from src.core.domain.evolution import (
    BADGE_CHAMPION,
    BADGE_EVOLUTION_5,
    mascot_for_level,
    plan_evolution,
)


def test_crossing_level_5():
    plan = plan_evolution("normal", 2, 4, 5)
    assert plan.new_mascot.id == 21
    assert plan.new_mascot.stage == 2
    assert plan.badges == (BADGE_EVOLUTION_5,)
    assert plan.evolution_level == 5


def test_crossing_level_10():
    plan = plan_evolution("overweight", 31, 9, 10)
    assert plan.new_mascot.name == "Mighty Bear"
    assert plan.badges == (BADGE_CHAMPION,)


def test_jump_across_both_levels_grants_both_badges():
    plan = plan_evolution("normal", 2, 4, 11)
    assert plan.new_mascot.id == 22
    assert plan.new_mascot.stage == 3
    assert plan.badges == (BADGE_EVOLUTION_5, BADGE_CHAMPION)
    assert plan.evolution_level == 10


def test_no_crossing_is_noop():
    assert plan_evolution("normal", 2, 2, 3) is None
    assert plan_evolution("normal", 21, 6, 8) is None
    assert plan_evolution("normal", 21, 5, 5) is None


def test_unknown_bmi_category_is_noop():
    assert plan_evolution("unknown", 2, 4, 5) is None
    assert plan_evolution(None, None, 4, 5) is None


def test_mascot_already_at_target_stage_is_noop():
    assert plan_evolution("normal", 21, 4, 5) is None


def test_mascot_for_level():
    assert mascot_for_level("obese_2", 1).name == "Cozy Sloth"
    assert mascot_for_level("obese_2", 7).id == 51
    assert mascot_for_level("obese_2", 30).id == 52
    assert mascot_for_level("unknown", 5) is None
