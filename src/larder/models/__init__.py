"""Pydantic models defining shared data contracts."""

from larder.models.analysis import (
    IngredientUsage,
    PartialIngredientMatch,
    RecipePantryMatch,
    RecipeSuggestion,
    SharedIngredient,
    SharedIngredientReport,
)
from larder.models.recipe import (
    DayPlan,
    IngredientMention,
    MealPlan,
    PantryEntry,
    Quantity,
    Recipe,
)
from larder.models.shopping import (
    CategorizedItem,
    CategoryGroup,
    ConsolidatedItem,
    FoodCategory,
    PantryComparison,
    ShoppingList,
)

__all__ = [
    "DayPlan",
    "IngredientMention",
    "MealPlan",
    "PantryEntry",
    "Quantity",
    "Recipe",
    "CategorizedItem",
    "CategoryGroup",
    "ConsolidatedItem",
    "FoodCategory",
    "PantryComparison",
    "ShoppingList",
    "IngredientUsage",
    "PartialIngredientMatch",
    "RecipePantryMatch",
    "RecipeSuggestion",
    "SharedIngredient",
    "SharedIngredientReport",
]
