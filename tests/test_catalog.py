"""
Catalog view end to end (no DB) plus the browse filters, sorts and search.
"""
import pytest

from meal_compass.core import catalog
from meal_compass.db.models import DietaryInfo, HealthProfile, Nutrition, Recipe, RecipeIngredient


def _recipe(rid, name, vegan=False, protein=0, fiber=0, difficulty="beginner", total_time=0,
            likes=0, health_score=0, created_at=None, promoted=0, cuisine=None) -> Recipe:
    return Recipe(
        id=rid, name=name, difficulty=difficulty, prep_time=total_time, cook_time=0,
        likes=likes, health_score=health_score, created_at=created_at, cuisine=cuisine,
        dietary_info=DietaryInfo(vegan=vegan, vegetarian=vegan),
        nutrition=Nutrition(protein=protein, fiber=fiber),
        ingredients=[RecipeIngredient(name=f"item {i}", amount=1, promoted=True) for i in range(promoted)],
    )


A = _recipe(1, "A", vegan=False, protein=20, fiber=6, difficulty="beginner", total_time=20)
B = _recipe(2, "B", vegan=True, protein=10, fiber=2, difficulty="advanced", total_time=50)


# ── view ─────────────────────────────────────────────────────────────
def test_vegan_profile_keeps_only_vegan_recipe():
    assert catalog.view([A, B], HealthProfile(diet_type="vegan")) == [B]


def test_guest_view_returns_catalog_unchanged():
    recipes = [B, A]
    result = catalog.view(recipes, None)
    assert result == [B, A]
    assert result is not recipes


def test_view_sorts_by_score_descending():
    profile = HealthProfile(cooking_time_max=60)
    slow = _recipe(1, "slow", total_time=50)
    fast = _recipe(2, "fast", total_time=10)
    assert catalog.view([slow, fast], profile) == [fast, slow]


def test_view_keeps_catalog_order_for_equal_scores():
    first, second, third = (_recipe(i, str(i)) for i in range(3))
    assert catalog.view([first, second, third], HealthProfile()) == [first, second, third]


# ── browse ───────────────────────────────────────────────────────────
def test_browse_category_filters_are_any_of():
    result = catalog.browse([A, B], categories=["Vegan", "high protein"])
    assert result == [A, B]
    assert catalog.browse([A, B], categories=["vegan"]) == [B]


def test_browse_unknown_category_matches_nothing():
    assert catalog.browse([A, B], categories=["keto"]) == []


def test_browse_difficulty_and_time():
    assert catalog.browse([A, B], difficulties=["advanced"]) == [B]
    assert catalog.browse([A, B], max_total_time=30) == [A]


def test_browse_sorts():
    old = _recipe(1, "old", likes=5, health_score=90, created_at="2024-01-01", promoted=0)
    new = _recipe(2, "new", likes=50, health_score=40, created_at="2025-06-01", promoted=2)
    assert catalog.browse([old, new], sort_by="popular") == [new, old]
    assert catalog.browse([old, new], sort_by="healthy") == [old, new]
    assert catalog.browse([old, new], sort_by="recent") == [new, old]
    assert catalog.browse([old, new], sort_by="promotions") == [new, old]
    assert catalog.browse([old, new]) == [old, new]


def test_browse_unknown_sort_raises():
    with pytest.raises(ValueError):
        catalog.browse([A], sort_by="cheapest")


# ── search ───────────────────────────────────────────────────────────
def test_search_matches_name_cuisine_and_ingredients():
    thai = _recipe(3, "Green Curry", cuisine="Thai", promoted=1)
    assert catalog.search([A, thai], "curry") == [thai]
    assert catalog.search([A, thai], "THAI") == [thai]
    assert catalog.search([A, thai], "item 0") == [thai]
    assert catalog.search([A, thai], "  ") == [A, thai]
