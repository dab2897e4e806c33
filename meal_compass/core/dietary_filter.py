"""Hard dietary constraints: decide whether a recipe is admissible for a profile.

Every rule is checked and each failure adds a human-readable reason, so the
caller can show why a recipe was hidden. A recipe is admissible only when
the reason list is empty. Nothing here raises for a failed check.
"""

import logging
from dataclasses import dataclass, field

from meal_compass.core.normalize import first_token, normalize
from meal_compass.db.models import HealthProfile, Recipe

_LOG = logging.getLogger(__name__)

# diet_type -> (DietaryInfo attribute, label)
_DIET_FLAGS = {
    "vegetarian": ("vegetarian", "vegetarian"),
    "vegan": ("vegan", "vegan"),
    "pescatarian": ("pescetarian", "pescatarian"),
}

# Named restrictions without a matching flag (nut-free, kosher, halal) are not checked.
_RESTRICTION_FLAGS = {
    "gluten-free": "gluten_free",
    "dairy-free": "dairy_free",
}

# Highest recipe difficulty each skill level admits.
_SKILL_RANK = {"beginner": 0, "intermediate": 1, "advanced": 2}
# Missing or unrecognised recipe difficulties rank as the hardest.
_HARDEST = max(_SKILL_RANK.values())


@dataclass
class Admissibility:
    passed: bool
    reasons: list = field(default_factory=list)  # list[str]


def _matches_term(ingredient_name: str, term: str) -> bool:
    """Loose token match between an ingredient and an allergy/restriction term.

    Errs toward rejecting: 'peanut butter' matches 'peanut', and 'eggs' matches
    'eggs (free range)'.
    """
    term_key = normalize(term)
    if not term_key:
        return False
    ing_key = normalize(ingredient_name)
    return (
        ing_key == term_key
        or first_token(ing_key) == term_key
        or first_token(term_key) == ing_key
    )


def _matching_ingredient(recipe: Recipe, terms: list):
    for term in terms:
        for ingredient in recipe.ingredients:
            if _matches_term(ingredient.name, term):
                return ingredient.name, term
    return None


def is_admissible(recipe: Recipe, profile: HealthProfile) -> Admissibility:
    """Check recipe against every hard constraint of profile."""
    reasons = []
    info = recipe.dietary_info

    diet = _DIET_FLAGS.get((profile.diet_type or "").lower())
    if diet and not getattr(info, diet[0]):
        reasons.append(f"Not {diet[1]}")

    if profile.is_on_glp1 and not (info.high_protein and info.high_fibre):
        reasons.append("Not high protein and high fibre (GLP-1)")

    for restriction in profile.restrictions:
        flag = _RESTRICTION_FLAGS.get(restriction.lower())
        if flag and not getattr(info, flag):
            reasons.append(f"Not {restriction.lower()}")

    hit = _matching_ingredient(recipe, profile.allergies)
    if hit:
        reasons.append(f"Contains allergen '{hit[1]}' ({hit[0]})")

    hit = _matching_ingredient(recipe, profile.custom_restrictions)
    if hit:
        reasons.append(f"Contains restricted ingredient '{hit[1]}' ({hit[0]})")

    allowed = _SKILL_RANK.get(profile.skill_level)
    if allowed is not None and _SKILL_RANK.get(recipe.difficulty, _HARDEST) > allowed:
        reasons.append(f"Too difficult for {profile.skill_level} cooks ({recipe.difficulty})")

    if reasons:
        _LOG.debug("recipe %r rejected: %s", recipe.name, "; ".join(reasons))
    return Admissibility(passed=not reasons, reasons=reasons)


def admissible(recipe: Recipe, profile: HealthProfile) -> bool:
    return is_admissible(recipe, profile).passed
