"""Meal plan to consolidated shopping list aggregation."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from larder.config import get_settings
from larder.models.recipe import IngredientMention, MealPlan, Recipe, load_meal_plan
from larder.models.shopping import ConsolidatedItem, FoodCategory, ShoppingList

from .categories import categorize, group_by_category
from .ingredients import canonical_name, normalize_ingredient
from .units import display_quantity, normalize_unit

logger = logging.getLogger(__name__)

EMPTY_EXPORT = "No items in shopping list"
_RULE_WIDTH = 40
# Sums saturate here instead of overflowing to inf.
_MAX_TOTAL = sys.float_info.max


@dataclass
class _RunningTotal:
    name: str
    unit: str
    category: FoodCategory
    quantity: float = 0.0


def aggregation_key(name: str, unit: Any) -> Tuple[str, str]:
    """Return the (canonical ingredient, normalized unit) pair mentions merge under."""

    return canonical_name(normalize_ingredient(name)), normalize_unit(unit)


def consolidate(mentions: Iterable[IngredientMention]) -> List[ConsolidatedItem]:
    """Merge duplicate ingredient mentions, summing quantities per ingredient and unit.

    The first mention seen for a key supplies the display name and category.
    """

    totals: Dict[Tuple[str, str], _RunningTotal] = {}
    for mention in mentions:
        key = aggregation_key(mention.name, mention.unit)
        total = totals.get(key)
        if total is None:
            total = _RunningTotal(
                name=mention.name,
                unit=key[1],
                category=categorize(mention.name),
            )
            totals[key] = total
        total.quantity = min(total.quantity + mention.quantity, _MAX_TOTAL)

    return [
        ConsolidatedItem(
            name=total.name,
            quantity=total.quantity,
            unit=total.unit,
            category=total.category,
        )
        for total in totals.values()
    ]


def generate_shopping_list(
    meal_plan: Any,
    catalog: Optional[Mapping[str, Recipe]] = None,
) -> ShoppingList:
    """Build the consolidated shopping list for every recipe occurrence in a plan.

    Repeated recipes count once per slot, both for ingredient totals and cost.
    """

    plan: MealPlan = load_meal_plan(meal_plan)
    mentions: List[IngredientMention] = []
    total_cost = 0.0
    occurrences = 0
    for recipe in plan.iter_recipes(catalog):
        occurrences += 1
        mentions.extend(recipe.ingredients)
        total_cost = min(total_cost + recipe.total_cost, _MAX_TOTAL)

    items = consolidate(mentions)
    logger.info(
        "Aggregated %s ingredient mention(s) from %s recipe slot(s) into %s item(s)",
        len(mentions),
        occurrences,
        len(items),
    )
    return ShoppingList(
        items=items,
        groups=group_by_category(items),
        total_cost=round(total_cost, 2),
        total_items=len(items),
    )


def export_shopping_list_text(shopping_list: Optional[ShoppingList]) -> str:
    """Render a shopping list as plain text grouped by grocery section."""

    if not isinstance(shopping_list, ShoppingList) or not shopping_list.items:
        return EMPTY_EXPORT

    settings = get_settings()
    lines = ["=== SHOPPING LIST ===", ""]
    for group in shopping_list.groups:
        if not group.items:
            continue
        lines.append(f"{group.category.icon} {group.category.name}")
        lines.append("-" * _RULE_WIDTH)
        for item in group.items:
            amount = display_quantity(item.quantity, item.unit)
            parts = [settings.export_checkbox, amount, item.unit, item.name]
            lines.append(" ".join(part for part in parts if part))
        lines.append("")

    lines.append(f"TOTAL ITEMS: {shopping_list.total_items}")
    lines.append(f"TOTAL COST: {settings.currency_symbol}{shopping_list.total_cost:.2f}")
    return "\n".join(lines) + "\n"


__all__ = [
    "EMPTY_EXPORT",
    "aggregation_key",
    "consolidate",
    "export_shopping_list_text",
    "generate_shopping_list",
]
