"""Reconcile a shopping list against the pantry.

Each shopping item is matched against the *first* pantry entry whose name is
equivalent, in pantry order. There is no ranking of candidates: a later, better
fitting entry is never considered once an earlier one matches.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence

from pydantic import ValidationError

from larder.models.recipe import PantryEntry, Quantity, coerce_quantity, coerce_text, load_pantry
from larder.models.shopping import (
    CategorizedItem,
    ConsolidatedItem,
    FoodCategory,
    PantryComparison,
    PantryStatus,
)

from .categories import categorize
from .ingredients import names_match
from .units import convert, display_quantity, normalize_unit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PantryAssessment:
    """Outcome of weighing one required amount against one pantry entry."""

    status: PantryStatus
    pantry_quantity: Optional[Quantity] = None
    need_quantity: Optional[float] = None
    converted_quantity: Optional[float] = None
    convertible: bool = True
    message: Optional[str] = None


def _amount(value: float) -> str:
    return display_quantity(value, "")


def _measure(value: float, unit: str) -> str:
    return f"{_amount(value)} {unit}".strip()


def find_pantry_match(name: str, pantry: Sequence[PantryEntry]) -> Optional[PantryEntry]:
    """Return the first pantry entry whose name matches, in pantry order."""

    for entry in pantry:
        if names_match(name, entry.name):
            return entry
    return None


def assess_against_pantry(
    name: str,
    quantity: float,
    unit: str,
    entry: Optional[PantryEntry],
) -> PantryAssessment:
    """Decide whether ``entry`` covers ``quantity`` of ``name``.

    Same units compare directly. When either side has no unit, any positive pantry
    amount counts as enough. Otherwise the pantry amount is converted to the
    required unit; units that cannot be reconciled still count as a partial match
    since some form of the ingredient is on hand.
    """

    if entry is None:
        return PantryAssessment(status="buy")

    needed = coerce_quantity(quantity)
    needed_unit = normalize_unit(unit)
    have = entry.quantity
    have_unit = normalize_unit(entry.unit)
    on_hand = Quantity(value=have, unit=have_unit)

    if needed_unit == have_unit and needed_unit:
        if have >= needed:
            return PantryAssessment(
                status="have",
                pantry_quantity=on_hand,
                message=(
                    f"Already have {_measure(have, have_unit)} "
                    f"(need {_measure(needed, needed_unit)})"
                ),
            )
        if have > 0:
            shortfall = round(needed - have, 2)
            return PantryAssessment(
                status="partial",
                pantry_quantity=on_hand,
                need_quantity=shortfall,
                message=(
                    f"Need {shortfall:.2f} more {needed_unit} "
                    f"(you have {_measure(have, have_unit)})"
                ),
            )
        return PantryAssessment(status="buy", pantry_quantity=on_hand)

    if not needed_unit or not have_unit:
        if have > 0:
            return PantryAssessment(
                status="have",
                pantry_quantity=on_hand,
                message=f"Already have {_amount(have)} {have_unit or 'in pantry'}",
            )
        return PantryAssessment(status="buy", pantry_quantity=on_hand)

    converted = convert(have, have_unit, needed_unit, name)
    if converted is None:
        return PantryAssessment(
            status="partial",
            pantry_quantity=on_hand,
            need_quantity=needed,
            convertible=False,
            message=(
                f"Have {_measure(have, have_unit)}, need {_measure(needed, needed_unit)} "
                "(cannot convert units)"
            ),
        )

    equivalent = f"{_measure(have, have_unit)} ≈ {converted:.2f} {needed_unit}"
    if converted >= needed:
        return PantryAssessment(
            status="have",
            pantry_quantity=on_hand,
            converted_quantity=converted,
            message=f"Already have {equivalent} (need {_measure(needed, needed_unit)})",
        )
    if converted > 0:
        shortfall = round(needed - converted, 2)
        return PantryAssessment(
            status="partial",
            pantry_quantity=on_hand,
            need_quantity=shortfall,
            converted_quantity=converted,
            message=f"Need {shortfall:.2f} more {needed_unit} (you have {equivalent})",
        )
    return PantryAssessment(status="buy", pantry_quantity=on_hand, converted_quantity=converted)


def _coerce_category(raw: Any, name: str) -> FoodCategory:
    if isinstance(raw, FoodCategory):
        return raw
    if isinstance(raw, Mapping):
        try:
            return FoodCategory.model_validate(raw)
        except ValidationError:
            logger.debug("Reclassifying %r: unrecognised category payload", name)
    return categorize(name)


def _coerce_shopping_item(raw: Any) -> Optional[ConsolidatedItem]:
    if isinstance(raw, ConsolidatedItem):
        return raw
    if not isinstance(raw, Mapping):
        return None
    name = coerce_text(raw.get("name"))
    return ConsolidatedItem(
        name=name,
        quantity=coerce_quantity(raw.get("quantity")),
        unit=normalize_unit(raw.get("unit")),
        category=_coerce_category(raw.get("category"), name),
    )


def _coerce_shopping_items(shopping_items: Any) -> List[ConsolidatedItem]:
    if not isinstance(shopping_items, (list, tuple)):
        return []
    items = (_coerce_shopping_item(raw) for raw in shopping_items)
    return [item for item in items if item is not None]


def categorize_item(item: ConsolidatedItem, pantry: Sequence[PantryEntry]) -> CategorizedItem:
    """Annotate a single shopping item with its pantry status."""

    entry = find_pantry_match(item.name, pantry)
    assessment = assess_against_pantry(item.name, item.quantity, item.unit, entry)
    logger.debug(
        "Pantry check item=%s status=%s match=%s",
        item.name,
        assessment.status,
        entry.name if entry else None,
    )
    return CategorizedItem(
        name=item.name,
        quantity=item.quantity,
        unit=item.unit,
        category=item.category,
        status=assessment.status,
        pantry_quantity=assessment.pantry_quantity if assessment.status != "buy" else None,
        need_quantity=assessment.need_quantity,
        message=assessment.message,
    )


def compare_with_pantry(shopping_items: Any, pantry: Any) -> PantryComparison:
    """Split shopping items into already-have, need-more, and need-to-buy buckets.

    Bucket order mirrors the order of ``shopping_items``.
    """

    items = _coerce_shopping_items(shopping_items)
    entries = load_pantry(pantry)

    already_have: List[CategorizedItem] = []
    need_more: List[CategorizedItem] = []
    need_to_buy: List[CategorizedItem] = []
    buckets = {"have": already_have, "partial": need_more, "buy": need_to_buy}

    for item in items:
        categorized = categorize_item(item, entries)
        buckets[categorized.status].append(categorized)

    logger.info(
        "Compared %s item(s) against %s pantry entr(ies): have=%s partial=%s buy=%s",
        len(items),
        len(entries),
        len(already_have),
        len(need_more),
        len(need_to_buy),
    )
    return PantryComparison(
        already_have=already_have,
        need_more=need_more,
        need_to_buy=need_to_buy,
    )


__all__ = [
    "PantryAssessment",
    "assess_against_pantry",
    "categorize_item",
    "compare_with_pantry",
    "find_pantry_match",
]
