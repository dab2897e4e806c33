from meal_compass.core.nutrition import daily_values
from meal_compass.db.models import Nutrition


def test_daily_values_percentages():
    values = daily_values(Nutrition(calories=500, protein=25, carbs=150, fiber=14, fat=39, sugar=25))
    assert values == {"protein": 50, "carbs": 50, "fiber": 50, "fat": 50, "sugar": 50}


def test_optional_nutrients_included_when_present():
    values = daily_values(Nutrition(saturated_fat=5, sodium=480))
    assert values["saturated_fat"] == 25
    assert values["sodium"] == 21


def test_values_round_to_whole_percent():
    assert daily_values(Nutrition(protein=33))["protein"] == 66
    assert daily_values(Nutrition(fiber=10))["fiber"] == 36
