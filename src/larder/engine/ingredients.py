"""Ingredient name cleanup and synonym-aware identity checks.

Two equivalence notions live here and are kept apart on purpose:

* ``canonical_name`` picks the synonym-table key that shopping list entries are
  merged under.
* ``names_match`` decides whether a pantry entry stands in for a shopping item.

The synonym table is not symmetric, so ``names_match`` checks both directions plus
shared variants; ``canonical_name`` only ever looks one way.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Any, Mapping, Tuple

INGREDIENT_SYNONYMS: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        # proteins
        "chicken breast": ("chicken", "chicken breasts", "poultry", "chicken meat"),
        "chicken": ("chicken breast", "poultry", "chicken meat"),
        "ground beef": ("beef", "ground meat", "minced beef", "hamburger meat"),
        "beef": ("ground beef", "beef meat"),
        "pork": ("pork chops", "pork meat", "pork shoulder"),
        "pork chops": ("pork", "pork meat"),
        "shrimp": ("prawns", "shrimps"),
        "salmon": ("salmon fillets", "salmon fillet"),
        # vegetables
        "onion": ("onions", "yellow onion", "white onion"),
        "garlic": ("garlic cloves", "garlic clove", "minced garlic"),
        "tomatoes": ("tomato", "fresh tomatoes", "roma tomatoes"),
        "bell pepper": ("bell peppers", "sweet pepper", "pepper", "capsicum"),
        "broccoli": ("broccoli florets",),
        "carrots": ("carrot",),
        "potatoes": ("potato",),
        "mushrooms": ("mushroom", "button mushrooms"),
        # pantry and grains
        "rice": ("white rice", "long grain rice"),
        "pasta": ("spaghetti", "penne", "noodles", "linguine"),
        "spaghetti": ("pasta", "noodles"),
        "flour": ("all-purpose flour", "ap flour", "plain flour"),
        "bread": ("sandwich bread", "white bread"),
        "quinoa": ("quinoa grain",),
        # dairy
        "cheese": ("shredded cheese", "grated cheese", "cheddar cheese"),
        "parmesan cheese": ("parmesan", "parmigiano", "grated parmesan"),
        "mozzarella cheese": ("mozzarella", "fresh mozzarella"),
        "feta cheese": ("feta",),
        "milk": ("whole milk", "dairy milk"),
        "butter": ("unsalted butter", "salted butter"),
        # oils and condiments
        "olive oil": ("extra virgin olive oil", "evoo", "oil"),
        "vegetable oil": ("cooking oil", "oil"),
        "soy sauce": ("soya sauce", "tamari"),
        "fish sauce": ("nam pla",),
        # canned goods
        "crushed tomatoes": ("canned tomatoes", "tomato sauce", "tomato puree"),
        "black beans": ("canned black beans", "cooked black beans"),
        "chickpeas": ("garbanzo beans", "canned chickpeas"),
        "kidney beans": ("red beans", "canned kidney beans"),
        # herbs and spices
        "basil": ("fresh basil", "basil leaves"),
        "parsley": ("fresh parsley", "italian parsley"),
        "oregano": ("dried oregano",),
        "cumin": ("ground cumin", "cumin powder"),
        "paprika": ("sweet paprika", "paprika powder"),
    }
)

UNIT_WORDS: Tuple[str, ...] = (
    "cup",
    "cups",
    "tablespoon",
    "tablespoons",
    "tbsp",
    "teaspoon",
    "teaspoons",
    "tsp",
    "ounce",
    "ounces",
    "oz",
    "pound",
    "pounds",
    "lb",
    "lbs",
    "gram",
    "grams",
    "g",
    "kilogram",
    "kilograms",
    "kg",
    "milliliter",
    "milliliters",
    "ml",
    "liter",
    "liters",
    "l",
    "piece",
    "pieces",
    "clove",
    "cloves",
    "small",
    "medium",
    "large",
    "whole",
)

DESCRIPTORS: Tuple[str, ...] = (
    "fresh",
    "frozen",
    "dried",
    "canned",
    "cooked",
    "raw",
    "organic",
    "chopped",
    "diced",
    "minced",
    "sliced",
    "shredded",
    "grated",
    "peeled",
    "trimmed",
    "boneless",
    "skinless",
)

_LEADING_AMOUNT_RE = re.compile(r"^[\d./\s¼-¾⅐-⅞]+")
_LEADING_UNIT_RE = re.compile(r"^(?:" + "|".join(UNIT_WORDS) + r")\s+")
_DESCRIPTOR_RE = re.compile(r"\b(?:" + "|".join(DESCRIPTORS) + r")\b")


def normalize_ingredient(raw: Any) -> str:
    """Strip amounts, a leading unit word, and prep descriptors from an ingredient name.

    >>> normalize_ingredient("2 cups Fresh chopped Onions")
    'onions'
    """

    if not isinstance(raw, str):
        return ""
    name = raw.lower().strip()
    name = _LEADING_AMOUNT_RE.sub("", name)
    name = _LEADING_UNIT_RE.sub("", name)
    name = _DESCRIPTOR_RE.sub("", name)
    return " ".join(name.split())


def names_match(first: Any, second: Any) -> bool:
    """Return True when two ingredient names denote the same ingredient."""

    left = normalize_ingredient(first)
    right = normalize_ingredient(second)
    if left == right:
        return True

    left_variants = INGREDIENT_SYNONYMS.get(left, ())
    right_variants = INGREDIENT_SYNONYMS.get(right, ())
    if right in left_variants or left in right_variants:
        return True
    return any(variant in right_variants for variant in left_variants)


def canonical_name(normalized_name: str) -> str:
    """Map a normalized name to the synonym-table key it is grouped under."""

    name = normalized_name.lower()
    if name in INGREDIENT_SYNONYMS:
        return name
    for canonical, variants in INGREDIENT_SYNONYMS.items():
        if name in variants:
            return canonical
    return name


__all__ = [
    "DESCRIPTORS",
    "INGREDIENT_SYNONYMS",
    "UNIT_WORDS",
    "canonical_name",
    "names_match",
    "normalize_ingredient",
]
