"""Shopping list generation from a week plan, and list maintenance actions."""

from __future__ import annotations

import json
import logging
import uuid
from collections.abc import Callable, Iterable, Mapping
from dataclasses import asdict, replace

from nutriplan.ingredients import parse_ingredient, parse_ingredient_lines
from nutriplan.models import Meal, ShoppingListItem, WeekPlan

logger = logging.getLogger(__name__)


def resolve_week_meals(meals: Mapping[str, Meal], week_plan: WeekPlan) -> list[Meal]:
    """Resolve every scheduled meal id in visit order.

    Ids whose meal no longer exists in the catalog are skipped.
    """
    resolved: list[Meal] = []
    for day in week_plan.days:
        for meal_id in day.meal_ids():
            meal = meals.get(meal_id)
            if meal is None:
                logger.debug("Skipping unknown meal id %r on %s", meal_id, day.date)
                continue
            resolved.append(meal)
    return resolved


def aggregate_ingredients(
    ingredient_lists: Iterable[list[str]],
) -> dict[tuple[str, str], float]:
    """Sum parsed quantities across meals, keyed by (name, unit).

    Insertion order of the first occurrence of each key is preserved.
    """
    agg: dict[tuple[str, str], float] = {}

    for lines in ingredient_lists:
        for line in lines:
            if not line.strip():
                continue
            ing = parse_ingredient(line).ingredient
            key = (ing.name, ing.unit)
            agg[key] = agg.get(key, 0.0) + ing.quantity

    return agg


def generate_shopping_list(
    meals: Mapping[str, Meal],
    week_plan: WeekPlan,
) -> list[ShoppingListItem]:
    """Build a fresh, deduplicated shopping list for the whole week.

    The result replaces any existing list; checked state is not carried over.
    """
    week_meals = resolve_week_meals(meals, week_plan)
    agg = aggregate_ingredients(meal.ingredients for meal in week_meals)

    items = [
        ShoppingListItem(id=f"sl{i}", name=name, quantity=qty, unit=unit)
        for i, ((name, unit), qty) in enumerate(agg.items())
    ]
    logger.debug(
        "Shopping list: %d items from %d scheduled meals", len(items), len(week_meals)
    )
    return items


def _new_item_id() -> str:
    return f"sl{uuid.uuid4().hex[:12]}"


def add_ingredients(
    items: list[ShoppingListItem],
    ingredients: list[str],
    id_factory: Callable[[], str] | None = None,
) -> list[ShoppingListItem]:
    """Append one unmerged item per ingredient line (the "add to list" action)."""
    make_id = id_factory or _new_item_id
    new_items = [
        ShoppingListItem(id=make_id(), name=ing.name, quantity=ing.quantity, unit=ing.unit)
        for ing in parse_ingredient_lines(ingredients)
    ]
    return [*items, *new_items]


def toggle_item(items: list[ShoppingListItem], item_id: str) -> list[ShoppingListItem]:
    return [
        replace(item, checked=not item.checked) if item.id == item_id else item
        for item in items
    ]


def delete_item(items: list[ShoppingListItem], item_id: str) -> list[ShoppingListItem]:
    return [item for item in items if item.id != item_id]


def clear_checked(items: list[ShoppingListItem]) -> list[ShoppingListItem]:
    return [item for item in items if not item.checked]


def format_number(value: float) -> str:
    """Render a number without a trailing ".0" for whole values."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_qty(qty: float) -> str:
    """Format a quantity as a practical fraction or decimal."""
    if qty == 0:
        return "0"

    fractions = {
        0.25: "1/4",
        0.33: "1/3",
        0.5: "1/2",
        0.67: "2/3",
        0.75: "3/4",
    }

    whole = int(qty)
    frac = qty - whole

    # Round fraction to nearest common value
    if frac > 0:
        closest = min(fractions.keys(), key=lambda f: abs(f - frac))
        if abs(closest - frac) < 0.01:
            frac_str = fractions[closest]
            if whole > 0:
                return f"{whole} {frac_str}"
            return frac_str

    if whole == qty:
        return str(whole)
    return f"{qty:.2f}".rstrip("0").rstrip(".")


def format_shopping_text(items: list[ShoppingListItem]) -> str:
    """Plain-text export, one "<qty> <unit> <name>" line per item."""
    return "\n".join(
        f"{format_number(item.quantity)} {item.unit} {item.name} "
        f"{'(✓)' if item.checked else ''}"
        for item in items
    )


def format_shopping_markdown(items: list[ShoppingListItem]) -> str:
    """Format the list as a markdown checklist, unchecked items first."""
    lines = ["# Shopping List", ""]

    unchecked = [i for i in items if not i.checked]
    checked = [i for i in items if i.checked]

    for item in unchecked:
        lines.append(f"- [ ] {format_qty(item.quantity)} {item.unit} {item.name}")

    if checked:
        lines.append("")
        lines.append(f"## Checked ({len(checked)})")
        lines.append("")
        for item in checked:
            lines.append(f"- [x] {format_qty(item.quantity)} {item.unit} {item.name}")

    lines.append("")
    return "\n".join(lines)


def format_shopping_json(items: list[ShoppingListItem]) -> str:
    return json.dumps([asdict(item) for item in items], indent=2)
