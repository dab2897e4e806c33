"""Catalog views: profile-aware filtering/ranking plus browse filters and sorts.

view() is the only place admissibility and scoring meet: filter with the
dietary rules, then sort by score, highest first. Python's sort is stable, so
recipes with equal scores keep their catalog order.
"""

import logging
from typing import Iterable, Optional

from meal_compass.core.dietary_filter import admissible
from meal_compass.core.normalize import normalize
from meal_compass.core.scoring import HIGH_PROTEIN_GRAMS, score
from meal_compass.db.models import HealthProfile, Recipe

_LOG = logging.getLogger(__name__)

SORT_OPTIONS = ["popular", "healthy", "recent", "promotions"]

BROWSE_CATEGORIES = {
    "high protein": lambda r: r.nutrition.protein >= HIGH_PROTEIN_GRAMS,
    "vegetarian": lambda r: r.dietary_info.vegetarian,
    "vegan": lambda r: r.dietary_info.vegan,
    "gluten free": lambda r: r.dietary_info.gluten_free,
    "dairy free": lambda r: r.dietary_info.dairy_free,
}


def view(catalog: list[Recipe], profile: Optional[HealthProfile]) -> list[Recipe]:
    """Return the admissible recipes of catalog, best match first.

    Without a profile (guest browsing) the catalog comes back unchanged.
    """
    if profile is None:
        return list(catalog)
    matches = [r for r in catalog if admissible(r, profile)]
    _LOG.debug("catalog view: %d of %d recipes admissible", len(matches), len(catalog))
    return sorted(matches, key=lambda r: score(r, profile), reverse=True)


def _promoted_count(recipe: Recipe) -> int:
    return sum(1 for ing in recipe.ingredients if ing.promoted)


_SORT_KEYS = {
    "popular": lambda r: r.likes,
    "healthy": lambda r: r.health_score,
    "recent": lambda r: r.created_at or "",
    "promotions": _promoted_count,
}


def browse(
    recipes: list[Recipe],
    categories: Iterable[str] = (),
    difficulties: Iterable[str] = (),
    max_total_time: Optional[int] = None,
    sort_by: Optional[str] = None,
) -> list[Recipe]:
    """Apply the browse-screen filters and sort to an already profile-filtered list.

    categories match if any one of them applies; unknown category names match
    nothing. sort_by is one of SORT_OPTIONS, or None to keep the input order.
    """
    wanted = [c.lower() for c in categories]
    levels = set(difficulties)
    result = []
    for recipe in recipes:
        if wanted and not any(
            BROWSE_CATEGORIES.get(c, lambda r: False)(recipe) for c in wanted
        ):
            continue
        if levels and recipe.difficulty not in levels:
            continue
        if max_total_time and recipe.prep_time + recipe.cook_time > max_total_time:
            continue
        result.append(recipe)

    if sort_by:
        if sort_by not in _SORT_KEYS:
            raise ValueError(f"Unknown sort option: {sort_by!r}")
        result.sort(key=_SORT_KEYS[sort_by], reverse=True)
    return result


def search(recipes: list[Recipe], query: str) -> list[Recipe]:
    """Return recipes whose name, description, cuisine, or any ingredient contains query."""
    needle = normalize(query)
    if not needle:
        return list(recipes)

    def _hit(recipe: Recipe) -> bool:
        fields = [recipe.name, recipe.description or "", recipe.cuisine or ""]
        fields.extend(ing.name for ing in recipe.ingredients)
        return any(needle in normalize(f) for f in fields)

    return [r for r in recipes if _hit(r)]
