"""Weekly meal planning: assign recipes to date + meal-type slots.

MealPlanSchedule owns the list of planned meals for one session. Each
(date, meal_type) slot holds at most one meal: placing a meal into an
occupied slot, by adding or by moving, replaces the meal that was there.
Moves and deletes for unknown IDs are silent no-ops.
"""

import logging
import math
import uuid
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, Optional, Union

from meal_compass.db.models import MealPlanItem, Recipe

_LOG = logging.getLogger(__name__)

MEAL_TYPES = ["breakfast", "lunch", "dinner"]
MAX_WEEKLY_MEALS = 28

PROTEIN_TARGET = (60, 100)  # grams per day
CALORIE_TARGET = (1200, 1800)

DateLike = Union[date, str]


def _to_date(value: DateLike) -> date:
    return value if isinstance(value, date) else date.fromisoformat(value)


def _to_iso(value: DateLike) -> str:
    return _to_date(value).isoformat()


def day_of_week(value: DateLike) -> int:
    """Return 0-6 with Sunday=0, Monday=1 ... Saturday=6."""
    return (_to_date(value).weekday() + 1) % 7


class MealPlanSchedule:
    """The planned meals of one session.

    recipe_lookup maps a recipe ID to a Recipe (or None); the schedule keeps a
    reference to the returned recipe and never modifies it.
    """

    def __init__(self, recipe_lookup: Callable[[int], Optional[Recipe]]):
        self._lookup = recipe_lookup
        self._items: list[MealPlanItem] = []

    @property
    def items(self) -> list[MealPlanItem]:
        return list(self._items)

    def get(self, meal_id: str) -> Optional[MealPlanItem]:
        return next((item for item in self._items if item.id == meal_id), None)

    def slot(self, entry_date: DateLike, meal_type: str) -> Optional[MealPlanItem]:
        iso = _to_iso(entry_date)
        return next(
            (item for item in self._items if item.date == iso and item.meal_type == meal_type),
            None,
        )

    def _evict(self, iso: str, meal_type: str) -> None:
        kept = []
        for item in self._items:
            if item.date == iso and item.meal_type == meal_type:
                _LOG.debug("slot %s/%s: replacing %r", iso, meal_type, item.recipe.name)
                continue
            kept.append(item)
        self._items = kept

    def add_meal(
        self,
        recipe_id: int,
        entry_date: DateLike,
        meal_type: str,
        servings: int = 1,
        notes: str = "",
    ) -> Optional[MealPlanItem]:
        """Plan recipe_id for a date + meal type. Returns None for an unknown recipe."""
        if meal_type not in MEAL_TYPES:
            raise ValueError(f"Unknown meal type: {meal_type!r}")
        recipe = self._lookup(recipe_id)
        if recipe is None:
            _LOG.warning("add_meal: no recipe with id %r", recipe_id)
            return None
        iso = _to_iso(entry_date)
        item = MealPlanItem(
            id=str(uuid.uuid4()),
            recipe=recipe,
            date=iso,
            day_of_week=day_of_week(iso),
            meal_type=meal_type,
            servings=servings,
            notes=notes or "",
        )
        self._evict(iso, meal_type)
        self._items.append(item)
        return item

    def move_meal(self, from_date: DateLike, to_date: DateLike, meal_id: str) -> None:
        """Move a meal to another date, keeping its meal type.

        Dropping a meal on the date it came from changes nothing.
        """
        to_iso = _to_iso(to_date)
        if _to_iso(from_date) == to_iso:
            return
        meal = self.get(meal_id)
        if meal is None:
            return
        self._items = [item for item in self._items if item.id != meal_id]
        meal.date = to_iso
        meal.day_of_week = day_of_week(to_iso)
        self._evict(to_iso, meal.meal_type)
        self._items.append(meal)

    def delete_meal(self, meal_id: str) -> None:
        self._items = [item for item in self._items if item.id != meal_id]

    def clear(self) -> None:
        self._items = []

    def meals_on(self, entry_date: DateLike) -> list[MealPlanItem]:
        """Meals for one day in breakfast, lunch, dinner order."""
        iso = _to_iso(entry_date)
        day = [item for item in self._items if item.date == iso]
        return sorted(day, key=lambda item: MEAL_TYPES.index(item.meal_type))

    def week(self, start_date: DateLike) -> dict[str, dict[str, Optional[MealPlanItem]]]:
        """Returns seven days from start_date as {date_str: {meal_type: item or None}}."""
        start = _to_date(start_date)
        grid = {}
        for offset in range(7):
            iso = (start + timedelta(days=offset)).isoformat()
            grid[iso] = {meal_type: self.slot(iso, meal_type) for meal_type in MEAL_TYPES}
        return grid


@dataclass
class PlanSummary:
    total_meals: int
    max_meals: int
    progress: float  # percent of max_meals
    avg_daily_protein: int
    avg_daily_calories: int
    protein_status: str
    calories_status: str


def _status(value: float, target: tuple) -> str:
    low, high = target
    if low <= value <= high:
        return "On target"
    return "Below target" if value < low else "Above target"


def summarize(items: list[MealPlanItem]) -> PlanSummary:
    """Weekly totals averaged over seven days, with on/below/above target labels."""
    protein = sum(item.recipe.nutrition.protein * item.servings for item in items)
    calories = sum(item.recipe.nutrition.calories * item.servings for item in items)
    # Half-up rounding; round() would send 2.5 to 2.
    avg_protein = math.floor(protein / 7 + 0.5) if items else 0
    avg_calories = math.floor(calories / 7 + 0.5) if items else 0
    return PlanSummary(
        total_meals=len(items),
        max_meals=MAX_WEEKLY_MEALS,
        progress=len(items) / MAX_WEEKLY_MEALS * 100,
        avg_daily_protein=avg_protein,
        avg_daily_calories=avg_calories,
        protein_status=_status(avg_protein, PROTEIN_TARGET),
        calories_status=_status(avg_calories, CALORIE_TARGET),
    )
