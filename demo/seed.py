"""Seed the recipe catalog with sample recipes if it's empty."""
import logging

from meal_compass.core import recipes as recipes_core
from meal_compass.db.models import (
    DietaryInfo,
    Nutrition,
    Recipe,
    RecipeIngredient as Ing,
    RecipeInstruction as Step,
)

_LOG = logging.getLogger(__name__)


SAMPLE_RECIPES = [
    Recipe(id=None, name="Overnight Oats", description="Easy no-cook breakfast",
           servings=2, prep_time=5, cook_time=0, difficulty="beginner",
           cuisine="British", health_score=82, likes=120,
           dietary_info=DietaryInfo(vegetarian=True, high_fibre=True),
           nutrition=Nutrition(calories=320, protein=12, carbs=52, fat=7, fiber=8, sugar=14),
           ingredients=[
               Ing(name="rolled oats", amount=100, unit="g", product_name="Jumbo Oats 1kg",
                   price="£1.10"),
               Ing(name="milk", amount=200, unit="ml"),
               Ing(name="honey", amount=1, unit="tbsp"),
               Ing(name="banana", amount=1, unit="whole", price="£0.20", promoted=True),
           ],
           instructions=[
               Step(step=1, text="Combine oats and milk."),
               Step(step=2, text="Add honey and sliced banana."),
               Step(step=3, text="Refrigerate overnight."),
           ]),
    Recipe(id=None, name="Chicken Stir Fry", description="Quick weeknight dinner",
           servings=2, prep_time=10, cook_time=15, difficulty="intermediate",
           cuisine="Chinese", health_score=76, likes=95,
           dietary_info=DietaryInfo(gluten_free=True, dairy_free=True, high_protein=True),
           nutrition=Nutrition(calories=480, protein=38, carbs=40, fat=14, fiber=4, sugar=8),
           ingredients=[
               Ing(name="chicken breast", amount=300, unit="g", product_name="British Chicken Fillets",
                   price="£3.50", promoted=True),
               Ing(name="broccoli", amount=1, unit="head"),
               Ing(name="tamari", amount=3, unit="tbsp"),
               Ing(name="rice", amount=150, unit="g"),
               Ing(name="garlic", amount=2, unit="cloves"),
           ],
           instructions=[
               Step(step=1, text="Slice the chicken."),
               Step(step=2, text="Stir fry with broccoli and garlic."),
               Step(step=3, text="Add tamari and serve with rice."),
           ]),
    Recipe(id=None, name="Lentil & Vegetable Soup", description="Hearty vegan soup",
           servings=4, prep_time=15, cook_time=35, difficulty="beginner",
           cuisine="Mediterranean", health_score=91, likes=64,
           dietary_info=DietaryInfo(vegetarian=True, vegan=True, gluten_free=True, dairy_free=True,
                                    pescetarian=True, high_protein=True, high_fibre=True),
           nutrition=Nutrition(calories=310, protein=18, carbs=45, fat=5, fiber=14, sugar=7,
                               saturated_fat=1, sodium=480),
           ingredients=[
               Ing(name="red lentils", amount=250, unit="g", price="£1.30"),
               Ing(name="onion", amount=1, unit="whole"),
               Ing(name="chopped tomatoes", amount=400, unit="g", price="£0.55"),
               Ing(name="vegetable stock", amount=1, unit="l"),
               Ing(name="olive oil", amount=1, unit="tbsp"),
           ],
           instructions=[
               Step(step=1, text="Soften the onion in olive oil."),
               Step(step=2, text="Add lentils, tomatoes and stock."),
               Step(step=3, text="Simmer for 30 minutes."),
           ]),
    Recipe(id=None, name="Baked Salmon with Greens", description="Omega-3 rich dinner",
           servings=2, prep_time=10, cook_time=20, difficulty="intermediate",
           cuisine="Nordic", health_score=88, likes=77,
           dietary_info=DietaryInfo(pescetarian=True, gluten_free=True, high_protein=True),
           nutrition=Nutrition(calories=520, protein=34, carbs=12, fat=30, fiber=5, sugar=3),
           ingredients=[
               Ing(name="salmon fillets", amount=2, unit="whole", price="£4.25"),
               Ing(name="spinach", amount=100, unit="g"),
               Ing(name="butter", amount=20, unit="g"),
               Ing(name="lemon", amount=1, unit="whole"),
           ],
           instructions=[
               Step(step=1, text="Bake the salmon with butter and lemon."),
               Step(step=2, text="Wilt the spinach and serve alongside."),
           ]),
    Recipe(id=None, name="Beef Wellington", description="Showstopper for the weekend",
           servings=6, prep_time=60, cook_time=45, difficulty="advanced",
           cuisine="British", health_score=45, likes=150,
           dietary_info=DietaryInfo(high_protein=True),
           nutrition=Nutrition(calories=780, protein=42, carbs=35, fat=50, fiber=2, sugar=3),
           ingredients=[
               Ing(name="beef fillet", amount=1, unit="kg", price="£24.00"),
               Ing(name="puff pastry", amount=500, unit="g"),
               Ing(name="mushrooms", amount=400, unit="g"),
               Ing(name="eggs", amount=1, unit="whole"),
               Ing(name="flour", amount=2, unit="tbsp"),
           ],
           instructions=[
               Step(step=1, text="Sear the beef."),
               Step(step=2, text="Wrap in mushroom duxelles and pastry."),
               Step(step=3, text="Bake until golden."),
           ]),
    Recipe(id=None, name="Greek Salad", description="Light Mediterranean lunch",
           servings=2, prep_time=10, cook_time=0, difficulty="beginner",
           cuisine="Greek", health_score=79, likes=58,
           dietary_info=DietaryInfo(vegetarian=True, gluten_free=True),
           nutrition=Nutrition(calories=290, protein=9, carbs=12, fat=22, fiber=3, sugar=6),
           ingredients=[
               Ing(name="cucumber", amount=1, unit="whole"),
               Ing(name="tomatoes", amount=2, unit="whole"),
               Ing(name="feta cheese", amount=100, unit="g", price="£1.50"),
               Ing(name="olive oil", amount=2, unit="tbsp"),
           ],
           instructions=[
               Step(step=1, text="Chop the vegetables."),
               Step(step=2, text="Toss with feta and olive oil."),
           ]),
]


def seed_if_empty() -> int:
    """Seed the catalog if it has no recipes yet. Returns the number of recipes added."""
    if recipes_core.count():
        return 0  # Already seeded
    for recipe in SAMPLE_RECIPES:
        recipes_core.add(recipe)
    _LOG.info("seeded catalog with %d sample recipes", len(SAMPLE_RECIPES))
    return len(SAMPLE_RECIPES)
