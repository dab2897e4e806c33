"""Soft-preference ranking score for admissible recipes.

Scores are comparative only: terms are added up with no normalization, and a
higher score sorts earlier in the catalog view.
"""

from meal_compass.db.models import HealthProfile, Recipe

HIGH_PROTEIN_GRAMS = 15
HIGH_FIBER_GRAMS = 5
PREFERENCE_BONUS = 2


def _preference_score(recipe: Recipe, profile: HealthProfile) -> float:
    score = 0.0
    for pref in profile.nutritional_preferences or []:
        if not pref.enabled:
            continue
        if pref.id == "high-protein" and recipe.nutrition.protein >= HIGH_PROTEIN_GRAMS:
            score += PREFERENCE_BONUS
        elif pref.id == "high-fiber" and recipe.nutrition.fiber >= HIGH_FIBER_GRAMS:
            score += PREFERENCE_BONUS
    return score


def _time_score(recipe: Recipe, profile: HealthProfile) -> float:
    """Linear bonus from 1 (no time at all) down to 0 at the cooking time cap."""
    if not profile.cooking_time_max:
        return 0.0
    total = recipe.prep_time + recipe.cook_time
    return max(0.0, 1 - total / profile.cooking_time_max)


def _skill_score(recipe: Recipe, profile: HealthProfile) -> float:
    if profile.skill_level == "beginner":
        return 2 if recipe.difficulty == "beginner" else 0
    if profile.skill_level == "intermediate":
        if recipe.difficulty == "intermediate":
            return 2
        return 1 if recipe.difficulty == "beginner" else 0
    if profile.skill_level == "advanced":
        return 2
    return 0


def score(recipe: Recipe, profile: HealthProfile) -> float:
    """Return the nonnegative ranking score of recipe for profile."""
    return (
        _preference_score(recipe, profile)
        + _time_score(recipe, profile)
        + _skill_score(recipe, profile)
    )
