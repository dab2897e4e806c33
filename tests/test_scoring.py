import math

from meal_compass.core.profiles import default_profile
from meal_compass.core.scoring import score
from meal_compass.db.models import HealthProfile, Nutrition, NutritionalPreference, Recipe


def _recipe(protein=0, fiber=0, prep=0, cook=0, difficulty="beginner") -> Recipe:
    return Recipe(
        id=1, name="Dish", prep_time=prep, cook_time=cook, difficulty=difficulty,
        nutrition=Nutrition(protein=protein, fiber=fiber),
    )


def _prefs(**enabled) -> list:
    return [NutritionalPreference(id=pid.replace("_", "-"), enabled=on) for pid, on in enabled.items()]


# ── preferences ──────────────────────────────────────────────────────
def test_enabled_preferences_add_two_each():
    profile = HealthProfile(nutritional_preferences=_prefs(high_protein=True, high_fiber=True))
    assert score(_recipe(protein=15, fiber=5), profile) == 4
    assert score(_recipe(protein=14, fiber=5), profile) == 2


def test_disabled_preference_adds_nothing():
    profile = HealthProfile(nutritional_preferences=_prefs(high_protein=False))
    assert score(_recipe(protein=40), profile) == 0


# ── cooking time ─────────────────────────────────────────────────────
def test_time_bonus_is_linear_and_floored_at_zero():
    profile = HealthProfile(cooking_time_max=40)
    assert math.isclose(score(_recipe(prep=10, cook=10), profile), 0.5)
    assert score(_recipe(prep=30, cook=30), profile) == 0


def test_no_time_bonus_without_a_cap():
    assert score(_recipe(), HealthProfile(cooking_time_max=None)) == 0


# ── skill ────────────────────────────────────────────────────────────
def test_skill_bonus_matrix():
    cases = [
        ("beginner", "beginner", 2),
        ("beginner", "intermediate", 0),
        ("intermediate", "intermediate", 2),
        ("intermediate", "beginner", 1),
        ("intermediate", "advanced", 0),
        ("advanced", "beginner", 2),
        ("advanced", "advanced", 2),
    ]
    for skill, difficulty, expected in cases:
        assert score(_recipe(difficulty=difficulty), HealthProfile(skill_level=skill)) == expected


def test_default_profile_score():
    # high-protein +2, high-fiber +2, time 1 - 30/45, intermediate on intermediate +2
    recipe = _recipe(protein=20, fiber=6, prep=10, cook=20, difficulty="intermediate")
    assert math.isclose(score(recipe, default_profile()), 6 + 1 / 3)
