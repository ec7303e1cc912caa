"""Meal plan analysis report models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from larder.models.recipe import Recipe


class IngredientUsage(BaseModel):
    """Quantity of an ingredient contributed by one recipe."""

    recipe: str
    quantity: float = Field(default=0.0, ge=0)
    unit: str = Field(default="")

    model_config = ConfigDict(frozen=True)


class SharedIngredient(BaseModel):
    """Ingredient used by two or more distinct recipes in a plan."""

    name: str
    normalized_name: str
    recipe_count: int = Field(ge=0)
    recipes: list[str] = Field(default_factory=list)
    usages: list[IngredientUsage] = Field(default_factory=list)
    total_quantity: Optional[float] = Field(default=None)
    unit: str = Field(default="")
    has_multiple_units: bool = Field(default=False)
    quantity_display: str = Field(default="")

    model_config = ConfigDict(frozen=True)


class SharedIngredientReport(BaseModel):
    total_shared_ingredients: int = Field(default=0, ge=0)
    total_recipes: int = Field(default=0, ge=0)
    top_shared_ingredients: list[SharedIngredient] = Field(default_factory=list)
    all_shared_ingredients: list[SharedIngredient] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class RecipeSuggestion(BaseModel):
    """Recipe ranked by ingredient overlap with a selected recipe."""

    recipe: Recipe
    match_score: int = Field(ge=0, le=100)
    shared_ingredients: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class PartialIngredientMatch(BaseModel):
    """Recipe ingredient the pantry only partly covers."""

    name: str
    display_name: str
    has: str
    needs: str
    unit: str
    match_percent: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)


class RecipePantryMatch(BaseModel):
    """How much of a recipe can be cooked from the pantry as it stands."""

    recipe: Recipe
    pantry_match_percentage: int = Field(ge=0, le=100)
    matched_ingredients_count: int = Field(ge=0)
    total_ingredients_count: int = Field(ge=0)
    matched_ingredients: list[str] = Field(default_factory=list)
    missing_ingredients: list[str] = Field(default_factory=list)
    partial_matches: list[PartialIngredientMatch] = Field(default_factory=list)
    can_make: bool = Field(default=False)

    model_config = ConfigDict(frozen=True)


__all__ = [
    "IngredientUsage",
    "PartialIngredientMatch",
    "RecipePantryMatch",
    "RecipeSuggestion",
    "SharedIngredient",
    "SharedIngredientReport",
]
