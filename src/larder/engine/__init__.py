"""Reconciliation engine: units, ingredient identity, categories, and pantry checks."""

from larder.engine.aggregator import (
    aggregation_key,
    consolidate,
    export_shopping_list_text,
    generate_shopping_list,
)
from larder.engine.analysis import (
    analyze_shared_ingredients,
    count_unique_ingredients,
    find_shared_ingredients,
    match_recipes_to_pantry,
    match_score,
    suggest_recipes,
)
from larder.engine.categories import categorize, group_by_category
from larder.engine.comparator import (
    PantryAssessment,
    assess_against_pantry,
    categorize_item,
    compare_with_pantry,
    find_pantry_match,
)
from larder.engine.ingredients import canonical_name, names_match, normalize_ingredient
from larder.engine.units import (
    classify_unit,
    conversion_message,
    convert,
    display_quantity,
    format_quantity,
    lookup_density,
    normalize_unit,
    units_compatible,
)

__all__ = [
    "PantryAssessment",
    "aggregation_key",
    "analyze_shared_ingredients",
    "assess_against_pantry",
    "canonical_name",
    "categorize",
    "categorize_item",
    "classify_unit",
    "compare_with_pantry",
    "consolidate",
    "conversion_message",
    "convert",
    "count_unique_ingredients",
    "display_quantity",
    "export_shopping_list_text",
    "find_pantry_match",
    "find_shared_ingredients",
    "format_quantity",
    "generate_shopping_list",
    "group_by_category",
    "lookup_density",
    "match_recipes_to_pantry",
    "match_score",
    "names_match",
    "normalize_ingredient",
    "normalize_unit",
    "suggest_recipes",
    "units_compatible",
]
