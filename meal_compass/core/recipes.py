"""Recipe catalog storage: load, add, and delete recipes.

This is the catalog source the engine reads from. Each recipe carries its
ingredient lines (ordered by position) and instruction steps. Recipes are
read-only snapshots once loaded; there is no update().
"""

import json
from typing import Optional

from meal_compass.db.database import get_connection
from meal_compass.db.models import (
    DietaryInfo,
    Nutrition,
    Recipe,
    RecipeIngredient,
    RecipeInstruction,
)

_DIETARY_COLUMNS = [
    "vegetarian", "vegan", "gluten_free", "dairy_free",
    "pescetarian", "high_protein", "high_fibre",
]
_NUTRITION_COLUMNS = ["calories", "protein", "carbs", "fat", "fiber", "sugar"]
_OPTIONAL_NUTRITION_COLUMNS = ["saturated_fat", "sodium"]
DIFFICULTIES = ["beginner", "intermediate", "advanced"]


def _row_to_recipe(row, conn) -> Recipe:
    """Convert a database row into a Recipe, loading its ingredients and steps."""
    recipe = Recipe(
        id=row["id"],
        name=row["name"],
        description=row["description"],
        servings=row["servings"],
        prep_time=row["prep_time"] or 0,
        cook_time=row["cook_time"] or 0,
        difficulty=row["difficulty"],
        cuisine=row["cuisine"],
        health_score=row["health_score"] or 0,
        likes=row["likes"] or 0,
        created_at=row["created_at"],
        dietary_info=DietaryInfo(**{c: bool(row[c]) for c in _DIETARY_COLUMNS}),
        nutrition=Nutrition(
            **{c: row[c] or 0 for c in _NUTRITION_COLUMNS},
            **{c: row[c] for c in _OPTIONAL_NUTRITION_COLUMNS},
        ),
    )
    ing_rows = conn.execute(
        "SELECT * FROM recipe_ingredients WHERE recipe_id = ? ORDER BY position",
        (recipe.id,),
    ).fetchall()
    recipe.ingredients = [
        RecipeIngredient(
            name=r["name"],
            amount=r["amount"],
            unit=r["unit"] or "",
            notes=r["notes"],
            substitutes=json.loads(r["substitutes"]) if r["substitutes"] else [],
            product_name=r["product_name"],
            price=r["price"],
            promoted=bool(r["promoted"]),
        )
        for r in ing_rows
    ]
    step_rows = conn.execute(
        "SELECT step, text FROM recipe_instructions WHERE recipe_id = ? ORDER BY step",
        (recipe.id,),
    ).fetchall()
    recipe.instructions = [RecipeInstruction(step=r["step"], text=r["text"]) for r in step_rows]
    return recipe


def get_all() -> list[Recipe]:
    """Return all recipes in catalog (insertion) order."""
    conn = get_connection()
    try:
        rows = conn.execute("SELECT * FROM recipes ORDER BY id").fetchall()
        return [_row_to_recipe(r, conn) for r in rows]
    finally:
        conn.close()


def get(recipe_id: int) -> Optional[Recipe]:
    """Return a single recipe with its ingredients, or None if not found."""
    conn = get_connection()
    try:
        row = conn.execute("SELECT * FROM recipes WHERE id = ?", (recipe_id,)).fetchone()
        return _row_to_recipe(row, conn) if row else None
    finally:
        conn.close()


def count() -> int:
    conn = get_connection()
    try:
        return conn.execute("SELECT COUNT(*) FROM recipes").fetchone()[0]
    finally:
        conn.close()


def add(recipe: Recipe) -> int:
    """Insert a new recipe with its ingredients and steps. Return the new recipe ID.

    Raises ValueError for non-positive servings (serving-ratio scaling divides by
    it) and for difficulties other than beginner, intermediate or advanced.
    """
    if recipe.servings <= 0:
        raise ValueError(f"Recipe {recipe.name!r} must have positive servings")
    if recipe.difficulty not in DIFFICULTIES:
        raise ValueError(f"Recipe {recipe.name!r} has unknown difficulty {recipe.difficulty!r}")
    info, nutrition = recipe.dietary_info, recipe.nutrition
    conn = get_connection()
    try:
        cursor = conn.execute(
            """INSERT INTO recipes (name, description, servings, prep_time, cook_time,
               difficulty, cuisine, health_score, likes,
               vegetarian, vegan, gluten_free, dairy_free, pescetarian,
               high_protein, high_fibre,
               calories, protein, carbs, fat, fiber, sugar, saturated_fat, sodium)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                recipe.name, recipe.description, recipe.servings,
                recipe.prep_time, recipe.cook_time, recipe.difficulty,
                recipe.cuisine, recipe.health_score, recipe.likes,
                *(int(getattr(info, c)) for c in _DIETARY_COLUMNS),
                *(getattr(nutrition, c) for c in _NUTRITION_COLUMNS),
                *(getattr(nutrition, c) for c in _OPTIONAL_NUTRITION_COLUMNS),
            ),
        )
        recipe_id = cursor.lastrowid
        for position, ing in enumerate(recipe.ingredients):
            conn.execute(
                """INSERT INTO recipe_ingredients
                   (recipe_id, position, name, amount, unit, notes, substitutes,
                    product_name, price, promoted)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (recipe_id, position, ing.name, ing.amount, ing.unit, ing.notes,
                 json.dumps(ing.substitutes) if ing.substitutes else None,
                 ing.product_name, ing.price, int(ing.promoted)),
            )
        for instruction in recipe.instructions:
            conn.execute(
                "INSERT INTO recipe_instructions (recipe_id, step, text) VALUES (?, ?, ?)",
                (recipe_id, instruction.step, instruction.text),
            )
        conn.commit()
        return recipe_id
    finally:
        conn.close()


def delete(recipe_id: int) -> None:
    """Delete a recipe by ID. Ingredients and steps are cascade-deleted by the DB."""
    conn = get_connection()
    try:
        conn.execute("DELETE FROM recipes WHERE id = ?", (recipe_id,))
        conn.commit()
    finally:
        conn.close()
