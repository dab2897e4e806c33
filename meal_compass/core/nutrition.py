"""Percent-of-daily-value figures for a recipe's nutrition panel."""

import math

from meal_compass.db.models import Nutrition

# Reference daily amounts: grams, except sodium in milligrams.
DAILY_VALUES = {
    "protein": 50,
    "carbs": 300,
    "fiber": 28,
    "fat": 78,
    "sugar": 50,
    "saturated_fat": 20,
    "sodium": 2300,
}


def _percent(amount: float, reference: float) -> int:
    return math.floor(amount / reference * 100 + 0.5)


def daily_values(nutrition: Nutrition) -> dict[str, int]:
    """Return {nutrient: percent of daily value}.

    Saturated fat and sodium are only included when the recipe lists them.
    """
    result = {}
    for nutrient, reference in DAILY_VALUES.items():
        amount = getattr(nutrition, nutrient)
        if amount is None:
            continue
        result[nutrient] = _percent(amount, reference)
    return result
