"""Shopping list generation: aggregate planned-meal ingredients into one list.

aggregate() scales every recipe ingredient by the meal's serving ratio and
folds it into a dict keyed by the normalized ingredient name. The first line
seen for a key fixes its display name, unit, category, product name, price
and promoted flag; every later line only adds to the amount. Manually entered
items fold into the same dict, so a manual "eggs" and a recipe's "eggs"
become one line.

ShoppingList wraps one shopping session: the aggregated lines, extra custom
lines the user adds (kept separate, never merged), check/select toggles, the
price total, and the plain-text export.
"""

import logging
import re
import uuid
from typing import Iterable, Optional

from meal_compass.core.normalize import normalize
from meal_compass.db.models import CartItem, GroupedIngredient, MealPlanItem, ShoppingListItem

_LOG = logging.getLogger(__name__)

CATEGORIES = ["produce", "meat", "dairy", "pantry", "other"]

# Checked in order; the first matching group wins.
_CATEGORY_PATTERNS = [
    ("produce", re.compile(r"lettuce|tomato|onion|garlic|vegetable|fruit|herb")),
    ("meat", re.compile(r"chicken|beef|fish|pork|meat")),
    ("dairy", re.compile(r"milk|cheese|yogurt|cream|butter")),
    ("pantry", re.compile(r"flour|sugar|oil|spice|rice|pasta")),
]

_NON_PRICE_CHARS = re.compile(r"[^0-9.]")
_LEADING_NUMBER = re.compile(r"\d*\.?\d+")
_CURRENCY_SYMBOLS = ("$", "£", "€")


def categorize(name: str) -> str:
    """Guess a shopping category from keywords in the ingredient name."""
    lowered = name.lower()
    for category, pattern in _CATEGORY_PATTERNS:
        if pattern.search(lowered):
            return category
    return "other"


def merge_ingredient(
    acc: dict[str, GroupedIngredient],
    name: str,
    amount: float,
    unit: str,
    product_name: Optional[str] = None,
    price: Optional[str] = None,
    promoted: bool = False,
) -> GroupedIngredient:
    """Fold one ingredient line into acc and return the merged entry.

    First write wins for descriptive fields; amounts always add up.
    """
    key = normalize(name)
    entry = acc.get(key)
    if entry is None:
        entry = GroupedIngredient(
            name=name.strip(),
            amount=0,
            unit=unit,
            category=categorize(name),
            product_name=product_name,
            price=price,
            promoted=bool(promoted),
        )
        acc[key] = entry
    else:
        _LOG.debug("merging %r into existing line %r", name, entry.name)
    entry.amount += amount
    return entry


def aggregate(
    meal_plan_items: Iterable[MealPlanItem],
    manual_items: Iterable[ShoppingListItem] = (),
) -> list[GroupedIngredient]:
    """Consolidate planned meals and manual entries into one line per ingredient.

    Returns lines in first-seen order. Recipe servings are assumed positive
    (recipes are validated when they are stored).
    """
    acc: dict[str, GroupedIngredient] = {}
    for item in meal_plan_items:
        recipe = item.recipe
        for ing in recipe.ingredients:
            scaled = ing.amount * item.servings / recipe.servings
            merge_ingredient(acc, ing.name, scaled, ing.unit,
                             ing.product_name, ing.price, ing.promoted)
    for manual in manual_items:
        merge_ingredient(acc, manual.name, manual.amount, manual.unit,
                         manual.product_name, manual.price, manual.promoted)
    return list(acc.values())


def group_by_category(items: Iterable) -> dict[str, list]:
    """Group lines by category in display order, promoted lines first.

    Ordering is otherwise stable. Empty categories are left out.
    """
    groups: dict[str, list] = {c: [] for c in CATEGORIES}
    for item in items:
        groups.setdefault(item.category, []).append(item)
    return {
        category: sorted(lines, key=lambda line: not line.promoted)
        for category, lines in groups.items()
        if lines
    }


def parse_price(price: Optional[str]) -> float:
    """Return the numeric value of a display price such as '£2.50', or 0.0.

    Everything except digits and dots is dropped, then the leading number is
    read. Strings with no number in them are worth nothing.
    """
    if not price:
        return 0.0
    match = _LEADING_NUMBER.match(_NON_PRICE_CHARS.sub("", price))
    return float(match.group()) if match else 0.0


def total_price(lines: Iterable, custom_items: Iterable = ()) -> float:
    """Sum parseable prices over the aggregated lines and any custom lines."""
    return sum(parse_price(line.price) for line in list(lines) + list(custom_items))


def format_price(price: Optional[str]) -> str:
    """Prefix bare prices with '£' for display; keep explicit currency symbols."""
    if not price:
        return ""
    if price.startswith(_CURRENCY_SYMBOLS):
        return price
    return f"£{price}"


def _format_amount(amount: float) -> str:
    amount = float(amount)
    return str(int(amount)) if amount.is_integer() else repr(amount)


def format_item(line) -> str:
    """Render one line as '{amount} {unit} {name}[ ({product})][ - {price}]'."""
    text = f"{_format_amount(line.amount)} {line.unit} {line.name}"
    if line.product_name:
        text += f" ({line.product_name})"
    if line.price:
        text += f" - {line.price}"
    return text


def format_shopping_list(lines: Iterable) -> str:
    """Format lines as plain text for share/clipboard/print, one per line."""
    return "\n".join(format_item(line) for line in lines)


class ShoppingList:
    """One shopping session over an aggregated list plus custom lines."""

    def __init__(self, meal_plan_items: Iterable[MealPlanItem] = (),
                 manual_items: Iterable[ShoppingListItem] = ()):
        self._ingredients: dict[str, GroupedIngredient] = {}
        self._custom: list[ShoppingListItem] = []
        self.all_selected = False
        self.rebuild(meal_plan_items, manual_items)

    @property
    def ingredients(self) -> list[GroupedIngredient]:
        return list(self._ingredients.values())

    @property
    def custom_items(self) -> list[ShoppingListItem]:
        return list(self._custom)

    def rebuild(self, meal_plan_items: Iterable[MealPlanItem],
                manual_items: Iterable[ShoppingListItem] = ()) -> None:
        """Re-aggregate from the current plan. Custom lines are kept."""
        lines = aggregate(meal_plan_items, manual_items)
        self._ingredients = {normalize(line.name): line for line in lines}
        self._refresh_all_selected()
        _LOG.debug("shopping list rebuilt with %d lines", len(lines))

    def _find_custom(self, item_id: str) -> Optional[ShoppingListItem]:
        return next((item for item in self._custom if item.id == item_id), None)

    def _refresh_all_selected(self) -> None:
        lines = self.ingredients + self._custom
        self.all_selected = bool(lines) and all(line.selected for line in lines)

    def toggle_checked(self, name: str) -> Optional[GroupedIngredient]:
        line = self._ingredients.get(normalize(name))
        if line is not None:
            line.checked = not line.checked
        return line

    def toggle_selected(self, name: str) -> Optional[GroupedIngredient]:
        line = self._ingredients.get(normalize(name))
        if line is not None:
            line.selected = not line.selected
            self._refresh_all_selected()
        return line

    def add_custom_item(
        self,
        name: str,
        amount: float = 1,
        unit: str = "pcs",
        category: str = "other",
        product_name: Optional[str] = None,
        price: Optional[str] = None,
        promoted: bool = False,
    ) -> Optional[ShoppingListItem]:
        """Append a custom line. Blank names are ignored and return None."""
        if not name or not name.strip():
            return None
        if category not in CATEGORIES:
            raise ValueError(f"Unknown shopping category: {category!r}")
        item = ShoppingListItem(
            id=str(uuid.uuid4()),
            name=name.strip(),
            amount=amount,
            unit=unit,
            category=category,
            product_name=product_name or None,
            price=price or None,
            promoted=promoted,
        )
        self._custom.append(item)
        self._refresh_all_selected()
        return item

    def remove_custom_item(self, item_id: str) -> None:
        self._custom = [item for item in self._custom if item.id != item_id]
        self._refresh_all_selected()

    def toggle_custom_checked(self, item_id: str) -> Optional[ShoppingListItem]:
        item = self._find_custom(item_id)
        if item is not None:
            item.checked = not item.checked
        return item

    def toggle_custom_selected(self, item_id: str) -> Optional[ShoppingListItem]:
        item = self._find_custom(item_id)
        if item is not None:
            item.selected = not item.selected
            self._refresh_all_selected()
        return item

    def select_all(self) -> bool:
        """Flip the select-all state and apply it to every line. Returns the new state."""
        new_state = not self.all_selected
        for line in self.ingredients + self._custom:
            line.selected = new_state
        self.all_selected = new_state
        return new_state

    def cart_items(self) -> list[CartItem]:
        """Selected lines for cart export: aggregated lines first, then custom lines."""
        return [
            CartItem(name=line.name, amount=line.amount, unit=line.unit,
                     product_name=line.product_name, price=line.price)
            for line in self.ingredients + self._custom
            if line.selected
        ]

    def total_price(self) -> float:
        return total_price(self.ingredients, self._custom)

    def grouped(self) -> dict[str, list]:
        """Lines by category; within a category aggregated lines precede custom ones."""
        ingredients = group_by_category(self.ingredients)
        custom = group_by_category(self._custom)
        return {
            category: ingredients.get(category, []) + custom.get(category, [])
            for category in CATEGORIES
            if category in ingredients or category in custom
        }

    def as_text(self) -> str:
        return format_shopping_list(self.ingredients + self._custom)
