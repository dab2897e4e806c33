from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request

from meal_compass.core import catalog, recipes as recipes_core
from meal_compass.core.dietary_filter import is_admissible
from meal_compass.core.nutrition import daily_values
from meal_compass.core.profiles import get_profile
from meal_compass.core.scoring import score
from app.dependencies import current_user

router = APIRouter(prefix="/recipes", tags=["recipes"])


def _profile_for(request: Request):
    """Logged-in users get their profile; guests browse without constraints."""
    user = current_user(request)
    return get_profile(user) if user else None


@router.get("")
def recipes_list(
    request: Request,
    category: list[str] = Query(default=[]),
    difficulty: list[str] = Query(default=[]),
    max_time: Optional[int] = None,
    sort: Optional[str] = None,
    q: str = "",
):
    profile = _profile_for(request)
    recipes = catalog.view(recipes_core.get_all(), profile)
    if q:
        recipes = catalog.search(recipes, q)
    if sort is not None and sort not in catalog.SORT_OPTIONS:
        raise HTTPException(status_code=400, detail=f"Unknown sort option: {sort}")
    recipes = catalog.browse(recipes, category, difficulty, max_time, sort)
    return {
        "filtered": profile is not None,
        "recipes": [
            {**asdict(r), "score": score(r, profile) if profile else None}
            for r in recipes
        ],
    }


@router.get("/{recipe_id}")
def recipe_detail(recipe_id: int):
    recipe = recipes_core.get(recipe_id)
    if recipe is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return {"recipe": asdict(recipe), "daily_values": daily_values(recipe.nutrition)}


@router.get("/{recipe_id}/admissibility")
def recipe_admissibility(request: Request, recipe_id: int):
    recipe = recipes_core.get(recipe_id)
    if recipe is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    profile = _profile_for(request)
    if profile is None:
        return {"passed": True, "reasons": []}
    return asdict(is_admissible(recipe, profile))
