"""Meal plan insights built on the resolver and pantry comparator."""

from __future__ import annotations

import logging
import math
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Set

from larder.config import get_settings
from larder.models.analysis import (
    IngredientUsage,
    PartialIngredientMatch,
    RecipePantryMatch,
    RecipeSuggestion,
    SharedIngredient,
    SharedIngredientReport,
)
from larder.models.recipe import Recipe, load_meal_plan, load_pantry, load_recipe, load_recipes

from .comparator import assess_against_pantry, find_pantry_match
from .ingredients import names_match, normalize_ingredient
from .units import display_quantity, normalize_unit

logger = logging.getLogger(__name__)


def _percent(part: float, whole: float) -> int:
    if whole <= 0:
        return 0
    return int(math.floor(part / whole * 100 + 0.5))


@dataclass
class _Usage:
    display_name: str
    recipe_keys: Set[str] = field(default_factory=set)
    recipes: List[str] = field(default_factory=list)
    usages: List[IngredientUsage] = field(default_factory=list)


def _recipe_key(recipe: Recipe) -> str:
    return recipe.id or recipe.name


def _summarize(normalized: str, usage: _Usage) -> SharedIngredient:
    units = {entry.unit for entry in usage.usages}
    if len(units) == 1:
        unit = next(iter(units))
        total = min(sum(entry.quantity for entry in usage.usages), sys.float_info.max)
        return SharedIngredient(
            name=usage.display_name,
            normalized_name=normalized,
            recipe_count=len(usage.recipes),
            recipes=list(usage.recipes),
            usages=list(usage.usages),
            total_quantity=total,
            unit=unit,
            has_multiple_units=False,
            quantity_display=f"{display_quantity(total, unit)} {unit}".strip(),
        )

    per_unit: Dict[str, float] = {}
    for entry in usage.usages:
        per_unit[entry.unit] = min(
            per_unit.get(entry.unit, 0.0) + entry.quantity, sys.float_info.max
        )
    display = ", ".join(
        f"{display_quantity(amount, unit)} {unit or 'unit'}" for unit, amount in per_unit.items()
    )
    return SharedIngredient(
        name=usage.display_name,
        normalized_name=normalized,
        recipe_count=len(usage.recipes),
        recipes=list(usage.recipes),
        usages=list(usage.usages),
        total_quantity=None,
        unit="Multiple units",
        has_multiple_units=True,
        quantity_display=display,
    )


def analyze_shared_ingredients(
    meal_plan: Any,
    catalog: Optional[Mapping[str, Recipe]] = None,
    *,
    top: Optional[int] = None,
) -> SharedIngredientReport:
    """Find ingredients used by two or more distinct recipes in a plan.

    A recipe placed in several slots contributes its quantities only once. Recipes
    are told apart by id, falling back to name when they have none.
    """

    plan = load_meal_plan(meal_plan)
    usage_map: Dict[str, _Usage] = {}
    recipe_keys: Set[str] = set()

    for recipe in plan.iter_recipes(catalog):
        key = _recipe_key(recipe)
        recipe_keys.add(key)
        for ingredient in recipe.ingredients:
            normalized = normalize_ingredient(ingredient.name)
            usage = usage_map.setdefault(normalized, _Usage(display_name=ingredient.name))
            if key in usage.recipe_keys:
                continue
            usage.recipe_keys.add(key)
            usage.recipes.append(recipe.name)
            usage.usages.append(
                IngredientUsage(
                    recipe=recipe.name,
                    quantity=ingredient.quantity,
                    unit=normalize_unit(ingredient.unit),
                )
            )

    shared = sorted(
        (
            _summarize(normalized, usage)
            for normalized, usage in usage_map.items()
            if len(usage.recipes) >= 2
        ),
        key=lambda entry: entry.recipe_count,
        reverse=True,
    )
    limit = top if top is not None else get_settings().suggestion_limit
    return SharedIngredientReport(
        total_shared_ingredients=len(shared),
        total_recipes=len(recipe_keys),
        top_shared_ingredients=shared[:limit],
        all_shared_ingredients=shared,
    )


def count_unique_ingredients(
    meal_plan: Any, catalog: Optional[Mapping[str, Recipe]] = None
) -> int:
    plan = load_meal_plan(meal_plan)
    return len(
        {
            normalize_ingredient(ingredient.name)
            for recipe in plan.iter_recipes(catalog)
            for ingredient in recipe.ingredients
        }
    )


def find_shared_ingredients(first: Any, second: Any) -> List[str]:
    """Normalized names of ingredients in ``first`` that also appear in ``second``."""

    recipe_a = load_recipe(first)
    recipe_b = load_recipe(second)
    if recipe_a is None or recipe_b is None:
        return []

    other_names = [normalize_ingredient(ingredient.name) for ingredient in recipe_b.ingredients]
    shared: List[str] = []
    for ingredient in recipe_a.ingredients:
        normalized = normalize_ingredient(ingredient.name)
        if normalized in shared:
            continue
        if any(names_match(normalized, other) for other in other_names):
            shared.append(normalized)
    return shared


def match_score(first: Any, second: Any) -> int:
    """Percentage of the smaller recipe's ingredients shared with the other recipe."""

    recipe_a = load_recipe(first)
    recipe_b = load_recipe(second)
    if recipe_a is None or recipe_b is None:
        return 0
    smaller = min(len(recipe_a.ingredients), len(recipe_b.ingredients))
    if smaller == 0:
        return 0
    return min(100, _percent(len(find_shared_ingredients(recipe_a, recipe_b)), smaller))


def _same_recipe(selected: Recipe, candidate: Recipe) -> bool:
    if selected.id is not None:
        return candidate.id == selected.id
    return candidate.name == selected.name


def suggest_recipes(
    selected: Any, recipes: Any, limit: Optional[int] = None
) -> List[RecipeSuggestion]:
    """Rank recipes by ingredient overlap with ``selected``, best first."""

    target = load_recipe(selected)
    if target is None:
        return []

    suggestions: List[RecipeSuggestion] = []
    for candidate in load_recipes(recipes):
        if _same_recipe(target, candidate):
            continue
        score = match_score(target, candidate)
        if score <= 0:
            continue
        suggestions.append(
            RecipeSuggestion(
                recipe=candidate,
                match_score=score,
                shared_ingredients=find_shared_ingredients(target, candidate),
            )
        )

    suggestions.sort(
        key=lambda entry: (entry.match_score, len(entry.shared_ingredients)), reverse=True
    )
    cap = limit if limit is not None else get_settings().suggestion_limit
    return suggestions[:cap]


def _match_recipe(recipe: Recipe, pantry: List[Any]) -> RecipePantryMatch:
    matched: List[str] = []
    missing: List[str] = []
    partial: List[PartialIngredientMatch] = []

    for ingredient in recipe.ingredients:
        normalized = normalize_ingredient(ingredient.name)
        entry = find_pantry_match(normalized, pantry)
        assessment = assess_against_pantry(
            ingredient.name or normalized, ingredient.quantity, ingredient.unit, entry
        )
        if assessment.status == "have":
            matched.append(normalized)
            continue
        if assessment.status == "buy":
            missing.append(normalized)
            continue

        needed_unit = normalize_unit(ingredient.unit)
        on_hand = assessment.pantry_quantity
        have_text = f"{display_quantity(on_hand.value, '')} {on_hand.unit}".strip()
        if not assessment.convertible:
            partial.append(
                PartialIngredientMatch(
                    name=normalized,
                    display_name=ingredient.name,
                    has=have_text,
                    needs=f"{display_quantity(ingredient.quantity, '')} {needed_unit}".strip(),
                    unit="mixed",
                    match_percent=0,
                )
            )
            continue

        available = (
            assessment.converted_quantity
            if assessment.converted_quantity is not None
            else on_hand.value
        )
        if assessment.converted_quantity is not None:
            have_text = f"{have_text} (≈{available:.2f} {needed_unit})"
        partial.append(
            PartialIngredientMatch(
                name=normalized,
                display_name=ingredient.name,
                has=have_text,
                needs=display_quantity(ingredient.quantity, ""),
                unit=needed_unit,
                match_percent=_percent(available, ingredient.quantity),
            )
        )

    total = len(recipe.ingredients)
    percentage = _percent(len(matched), total)
    return RecipePantryMatch(
        recipe=recipe,
        pantry_match_percentage=percentage,
        matched_ingredients_count=len(matched),
        total_ingredients_count=total,
        matched_ingredients=matched,
        missing_ingredients=missing,
        partial_matches=partial,
        can_make=total > 0 and percentage == 100,
    )


def match_recipes_to_pantry(pantry: Any, recipes: Any) -> List[RecipePantryMatch]:
    """Score every recipe by how much of it the pantry already covers."""

    entries = load_pantry(pantry)
    candidates = load_recipes(recipes)
    if not candidates:
        return []

    matches = [_match_recipe(recipe, entries) for recipe in candidates]
    matches.sort(
        key=lambda entry: (entry.pantry_match_percentage, entry.matched_ingredients_count),
        reverse=True,
    )
    logger.info(
        "Matched %s recipe(s) against %s pantry entr(ies); %s cookable now",
        len(matches),
        len(entries),
        sum(1 for entry in matches if entry.can_make),
    )
    return matches


__all__ = [
    "analyze_shared_ingredients",
    "count_unique_ingredients",
    "find_shared_ingredients",
    "match_recipes_to_pantry",
    "match_score",
    "suggest_recipes",
]
