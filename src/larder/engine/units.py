"""Unit normalization and conversion between cooking measures.

Volume units convert through milliliters, weight units through grams. Volume and
weight only bridge when the ingredient has a known density (grams per cup); count
units never convert to anything but other count units. Every conversion failure is
reported as ``None`` rather than raised so callers can choose a fallback.
"""

from __future__ import annotations

import logging
import math
from types import MappingProxyType
from typing import Any, Literal, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

UnitKind = Literal["volume", "weight", "count", "unknown"]

COUNT_UNIT = "piece"
CAN_UNIT = "can"

VOLUME_TO_ML: Mapping[str, float] = MappingProxyType(
    {
        "ml": 1.0,
        "milliliter": 1.0,
        "millilitre": 1.0,
        "l": 1000.0,
        "liter": 1000.0,
        "litre": 1000.0,
        "cup": 236.588,
        "c": 236.588,
        "tablespoon": 14.787,
        "tbsp": 14.787,
        "teaspoon": 4.929,
        "tsp": 4.929,
        "fluid ounce": 29.574,
        "fl oz": 29.574,
        "fl. oz": 29.574,
        "fl.oz": 29.574,
        "floz": 29.574,
        "pint": 473.176,
        "pt": 473.176,
        "quart": 946.353,
        "qt": 946.353,
        "gallon": 3785.41,
        "gal": 3785.41,
    }
)

# A standard can is 15 oz.
WEIGHT_TO_G: Mapping[str, float] = MappingProxyType(
    {
        "g": 1.0,
        "gram": 1.0,
        "gramme": 1.0,
        "kg": 1000.0,
        "kilogram": 1000.0,
        "mg": 0.001,
        "milligram": 0.001,
        "lb": 453.592,
        "pound": 453.592,
        "oz": 28.3495,
        "ounce": 28.3495,
        "can": 425.243,
    }
)

# Ordered: density lookup falls back to the first substring hit.
DENSITY_G_PER_CUP: Tuple[Tuple[str, float], ...] = (
    ("flour", 120.0),
    ("all-purpose flour", 120.0),
    ("ap flour", 120.0),
    ("bread flour", 127.0),
    ("whole wheat flour", 120.0),
    ("rice", 185.0),
    ("white rice", 185.0),
    ("brown rice", 195.0),
    ("pasta", 100.0),
    ("quinoa", 170.0),
    ("sugar", 200.0),
    ("granulated sugar", 200.0),
    ("white sugar", 200.0),
    ("brown sugar", 220.0),
    ("powdered sugar", 120.0),
    ("confectioners sugar", 120.0),
    ("honey", 340.0),
    ("maple syrup", 322.0),
    ("butter", 227.0),
    ("oil", 218.0),
    ("vegetable oil", 218.0),
    ("olive oil", 216.0),
    ("milk", 244.0),
    ("whole milk", 244.0),
    ("cream", 240.0),
    ("heavy cream", 240.0),
    ("sour cream", 230.0),
    ("yogurt", 245.0),
    ("cheese", 113.0),
    ("shredded cheese", 113.0),
    ("parmesan", 100.0),
    ("grated parmesan", 100.0),
    ("onion", 160.0),
    ("onions", 160.0),
    ("garlic", 136.0),
    ("tomato", 180.0),
    ("tomatoes", 180.0),
    ("carrot", 128.0),
    ("carrots", 128.0),
    ("bell pepper", 149.0),
    ("potato", 150.0),
    ("potatoes", 150.0),
    ("chicken", 140.0),
    ("chicken breast", 140.0),
    ("ground beef", 225.0),
    ("beef", 225.0),
    ("almonds", 143.0),
    ("walnuts", 117.0),
    ("peanuts", 146.0),
    ("water", 237.0),
    ("broth", 240.0),
    ("chicken broth", 240.0),
    ("beef broth", 240.0),
    ("stock", 240.0),
    ("crushed tomatoes", 243.0),
    ("tomato sauce", 245.0),
    ("beans", 256.0),
    ("black beans", 256.0),
    ("chickpeas", 240.0),
    ("kidney beans", 256.0),
)
_DENSITY_INDEX: Mapping[str, float] = MappingProxyType(dict(DENSITY_G_PER_CUP))

COUNT_SYNONYMS = frozenset(
    {
        "piece",
        "whole",
        "unit",
        "clove",
        "item",
        "each",
        "count",
        "serving",
        "portion",
        "small",
        "medium",
        "large",
    }
)

_IRREGULAR_PLURALS: Mapping[str, str] = MappingProxyType(
    {
        "cans": "can",
        "tbs": "tbsp",
        "tbls": "tbsp",
        "bunches": "bunch",
        "pinches": "pinch",
        "dashes": "dash",
        "boxes": "box",
        "leaves": "leaf",
        "loaves": "loaf",
        "glasses": "glass",
    }
)

_NATURALLY_ENDS_IN_S = frozenset({"fl oz", "floz", "oz", "fl. oz", "fl.oz"})

CAN_MIN_QUANTITY = 0.1


def _singularize(unit: str) -> str:
    if unit in _IRREGULAR_PLURALS:
        return _IRREGULAR_PLURALS[unit]
    if (
        unit.endswith("s")
        and len(unit) > 1
        and not unit.endswith("ss")
        and unit not in _NATURALLY_ENDS_IN_S
    ):
        return unit[:-1].rstrip()
    if unit in COUNT_SYNONYMS:
        return COUNT_UNIT
    return unit


def normalize_unit(raw: Any) -> str:
    """Reduce a free-text unit to its canonical singular, synonym-collapsed form.

    Singularization repeats until the unit stops changing, so a detached suffix
    such as ``"cup s"`` or a doubled plural such as ``"cans s"`` settles on the same
    form as ``"cup"`` and ``"can"``.
    """

    if not isinstance(raw, str):
        return ""
    unit = " ".join(raw.lower().split())
    while unit:
        reduced = _singularize(unit)
        if reduced == unit:
            break
        unit = reduced
    return unit


def classify_unit(unit: Any) -> UnitKind:
    normalized = normalize_unit(unit)
    if normalized in VOLUME_TO_ML:
        return "volume"
    if normalized in WEIGHT_TO_G:
        return "weight"
    if normalized == "" or normalized in COUNT_SYNONYMS:
        return "count"
    return "unknown"


def lookup_density(ingredient_name: Any) -> Optional[float]:
    """Return grams per cup for an ingredient, or None when it is not tabulated."""

    if not isinstance(ingredient_name, str):
        return None
    name = " ".join(ingredient_name.lower().split())
    if not name:
        return None
    if name in _DENSITY_INDEX:
        return _DENSITY_INDEX[name]
    for key, density in DENSITY_G_PER_CUP:
        if key in name or name in key:
            return density
    return None


def _valid_amount(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    number = float(value)
    if not math.isfinite(number) or number < 0:
        return None
    return number


def _finite(result: float, source: str, target: str) -> Optional[float]:
    if math.isfinite(result):
        return result
    logger.debug("Converting %s to %s overflowed the float range", source, target)
    return None


def convert(
    value: Any,
    from_unit: Any,
    to_unit: Any,
    ingredient_name: Optional[str] = None,
) -> Optional[float]:
    """Convert ``value`` between units, returning None when they cannot be reconciled."""

    amount = _valid_amount(value)
    if amount is None:
        return None

    source = normalize_unit(from_unit)
    target = normalize_unit(to_unit)
    if source == target:
        return amount

    source_kind = classify_unit(source)
    target_kind = classify_unit(target)

    if source_kind == "unknown" or target_kind == "unknown":
        logger.debug(
            "Cannot convert %r (%s) to %r (%s)", source, source_kind, target, target_kind
        )
        return None

    if source_kind == target_kind:
        if source_kind == "volume":
            return _finite(amount * VOLUME_TO_ML[source] / VOLUME_TO_ML[target], source, target)
        if source_kind == "weight":
            return _finite(amount * WEIGHT_TO_G[source] / WEIGHT_TO_G[target], source, target)
        return amount

    if {source_kind, target_kind} == {"volume", "weight"}:
        density = lookup_density(ingredient_name)
        if density is None:
            logger.debug(
                "Cannot convert %s to %s for ingredient %r: density unknown",
                source,
                target,
                ingredient_name,
            )
            return None
        ml_per_cup = VOLUME_TO_ML["cup"]
        if source_kind == "volume":
            cups = amount * VOLUME_TO_ML[source] / ml_per_cup
            return _finite(cups * density / WEIGHT_TO_G[target], source, target)
        cups = amount * WEIGHT_TO_G[source] / density
        return _finite(cups * ml_per_cup / VOLUME_TO_ML[target], source, target)

    logger.debug("Cannot convert count unit %r to %r", source, target)
    return None


def units_compatible(unit_a: Any, unit_b: Any, ingredient_name: Optional[str] = None) -> bool:
    """Return True when quantities in the two units can be compared."""

    first = normalize_unit(unit_a)
    second = normalize_unit(unit_b)
    if first == second:
        return True
    first_kind = classify_unit(first)
    second_kind = classify_unit(second)
    if first_kind == second_kind and first_kind != "unknown":
        return True
    if {first_kind, second_kind} == {"volume", "weight"}:
        return lookup_density(ingredient_name) is not None
    return False


def conversion_message(
    from_unit: Any, to_unit: Any, ingredient_name: Optional[str] = None
) -> str:
    """Explain in plain words whether two units can be reconciled."""

    source = normalize_unit(from_unit)
    target = normalize_unit(to_unit)
    if source == target:
        return "Units are the same"

    source_kind = classify_unit(source)
    target_kind = classify_unit(target)
    if source_kind == "unknown" or target_kind == "unknown":
        unknown = from_unit if source_kind == "unknown" else to_unit
        return f"Unknown unit type: {unknown}"
    if {source_kind, target_kind} == {"volume", "weight"}:
        if lookup_density(ingredient_name) is None:
            return (
                f"Cannot convert {from_unit} to {to_unit}: "
                f'ingredient density unknown for "{ingredient_name}"'
            )
        return f"Convertible using the density of {ingredient_name}"
    if source_kind != target_kind:
        other = target_kind if source_kind == "count" else source_kind
        return f"Cannot convert between count-based units and {other} units"
    return f"Convertible ({source_kind})"


def _round_half_up(value: float, factor: int) -> float:
    scaled = value * factor
    if not math.isfinite(scaled):
        # Already far coarser than the rounding step.
        return value
    return math.floor(scaled + 0.5) / factor


def format_quantity(value: Any, unit: Any) -> float:
    """Round a quantity to a clean, shoppable figure for its unit.

    Cans get tiered rounding: anything under 0.1 is bumped to 0.1, amounts under one
    can round to a tenth, larger amounts to the nearest quarter can. Every other unit
    rounds to two decimals.
    """

    amount = _valid_amount(value)
    if amount is None:
        return 0.0
    if normalize_unit(unit) == CAN_UNIT:
        if amount < CAN_MIN_QUANTITY:
            return CAN_MIN_QUANTITY
        if amount < 1:
            return _round_half_up(amount, 10)
        return _round_half_up(amount, 4)
    return _round_half_up(amount, 100)


def display_quantity(value: Any, unit: Any) -> str:
    """Render a formatted quantity without trailing zero noise."""

    formatted = format_quantity(value, unit)
    if float(formatted).is_integer():
        return str(int(formatted))
    return f"{formatted:.2f}".rstrip("0").rstrip(".")


__all__ = [
    "CAN_MIN_QUANTITY",
    "CAN_UNIT",
    "COUNT_SYNONYMS",
    "COUNT_UNIT",
    "DENSITY_G_PER_CUP",
    "VOLUME_TO_ML",
    "WEIGHT_TO_G",
    "UnitKind",
    "classify_unit",
    "conversion_message",
    "convert",
    "display_quantity",
    "format_quantity",
    "lookup_density",
    "normalize_unit",
    "units_compatible",
]
