"""Dataclass models for catalog, planning, shopping, and goal entities.

Recipe, RecipeIngredient, RecipeInstruction and HealthProfile map onto
database tables. MealPlanItem and the shopping list types live only in memory
for the duration of a session. Goals are persisted as JSON through a goal
store. These are plain data containers with no business logic.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class DietaryInfo:
    """Dietary flags precomputed for a recipe."""
    vegetarian: bool = False
    vegan: bool = False
    gluten_free: bool = False
    dairy_free: bool = False
    pescetarian: bool = False
    high_protein: bool = False
    high_fibre: bool = False


@dataclass
class Nutrition:
    """Per-serving nutrition. Saturated fat (g) and sodium (mg) are optional."""
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    fiber: float = 0
    sugar: float = 0
    saturated_fat: Optional[float] = None
    sodium: Optional[float] = None


@dataclass
class RecipeIngredient:
    """A single ingredient line within a recipe (e.g. '100 g oats').

    amount is relative to the owning recipe's servings. price is an opaque
    display string such as '£1.20'.
    """

    name: str
    amount: float
    unit: str = ""
    notes: Optional[str] = None
    substitutes: list = field(default_factory=list)  # list[str]
    product_name: Optional[str] = None
    price: Optional[str] = None
    promoted: bool = False


@dataclass
class RecipeInstruction:
    step: int
    text: str


@dataclass
class Recipe:
    """A catalog recipe with embedded ingredients and instructions.

    prep_time and cook_time are minutes. difficulty is one of 'beginner',
    'intermediate' or 'advanced'. Recipes are read-only once loaded.
    """

    id: Optional[int]
    name: str
    description: Optional[str] = None
    servings: int = 2
    prep_time: int = 0
    cook_time: int = 0
    difficulty: str = "beginner"
    cuisine: Optional[str] = None
    health_score: int = 0
    likes: int = 0
    created_at: Optional[str] = None
    dietary_info: DietaryInfo = field(default_factory=DietaryInfo)
    nutrition: Nutrition = field(default_factory=Nutrition)
    ingredients: list = field(default_factory=list)  # list[RecipeIngredient]
    instructions: list = field(default_factory=list)  # list[RecipeInstruction]


@dataclass
class NutritionalPreference:
    """A soft preference such as 'high-protein'; affects ranking only."""
    id: str
    label: str = ""
    description: str = ""
    enabled: bool = True
    locked: bool = False


@dataclass
class HealthProfile:
    """A user's dietary constraints and soft preferences.

    diet_type is one of 'omnivore', 'vegetarian', 'vegan', 'pescatarian'.
    restrictions holds named restrictions like 'gluten-free'; allergies and
    custom_restrictions are free text matched against ingredient names.
    """

    diet_type: str = "omnivore"
    restrictions: list = field(default_factory=list)  # list[str]
    allergies: list = field(default_factory=list)  # list[str]
    custom_restrictions: list = field(default_factory=list)  # list[str]
    nutritional_preferences: list = field(default_factory=list)  # list[NutritionalPreference]
    is_on_glp1: bool = False
    caloric_target: Optional[int] = None
    cooking_time_max: Optional[int] = None
    skill_level: Optional[str] = None
    servings_default: Optional[int] = None


@dataclass
class MealPlanItem:
    """One recipe assigned to a date + meal type slot.

    recipe is a read-only reference to the catalog recipe. day_of_week is
    derived from date (Sunday=0).
    """

    id: str
    recipe: Recipe
    date: str  # ISO YYYY-MM-DD
    day_of_week: int
    meal_type: str  # breakfast, lunch, dinner
    servings: int = 1
    notes: str = ""


@dataclass
class GroupedIngredient:
    """A consolidated shopping line keyed by the normalized ingredient name."""
    name: str
    amount: float
    unit: str
    category: str  # produce, meat, dairy, pantry, other
    checked: bool = False
    selected: bool = False
    product_name: Optional[str] = None
    price: Optional[str] = None
    promoted: bool = False


@dataclass
class ShoppingListItem:
    """A manually entered shopping line with a user-chosen category."""
    id: str
    name: str
    amount: float
    unit: str
    category: str = "other"
    checked: bool = False
    selected: bool = False
    product_name: Optional[str] = None
    price: Optional[str] = None
    promoted: bool = False


@dataclass
class CartItem:
    name: str
    amount: float
    unit: str
    product_name: Optional[str] = None
    price: Optional[str] = None


@dataclass
class Goal:
    """A nutrition or hydration goal.

    status moves from 'in_progress' to 'completed' once and never back.
    Dates are ISO YYYY-MM-DD strings; timestamps are ISO datetimes.
    """

    id: str
    category: str  # nutrition, hydration
    title: str
    target: float
    unit: str
    duration: str  # daily, weekly, monthly, quarterly
    start_date: str
    end_date: str
    description: str = ""
    current_progress: float = 0
    status: str = "in_progress"
    points: int = 100
    user_id: str = "local-user"
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class Achievement:
    id: str
    title: str
    description: str
    image_url: str
    points: int
    unlocked: bool = False


@dataclass
class Reward:
    id: str
    title: str
    description: str
    image_url: str
    points_cost: int
    type: str  # recipe, template, badge
    unlocked: bool = False
