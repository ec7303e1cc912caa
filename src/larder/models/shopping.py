"""Shopping list and pantry comparison models."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from larder.models.recipe import Quantity

PantryStatus = Literal["have", "partial", "buy"]


class FoodCategory(BaseModel):
    """Grocery store section an ingredient is shelved in."""

    name: str
    icon: str
    order: int = Field(ge=1)

    model_config = ConfigDict(frozen=True)


class ConsolidatedItem(BaseModel):
    """Shopping list entry after merging duplicate ingredient mentions."""

    name: str
    quantity: float = Field(default=0.0, ge=0)
    unit: str = Field(default="")
    category: FoodCategory

    model_config = ConfigDict(frozen=True)


class CategorizedItem(ConsolidatedItem):
    """Shopping list entry annotated with its pantry reconciliation outcome."""

    status: PantryStatus
    pantry_quantity: Optional[Quantity] = Field(default=None)
    need_quantity: Optional[float] = Field(default=None, ge=0)
    message: Optional[str] = Field(default=None)


class CategoryGroup(BaseModel):
    """Items sharing a grocery section, ready for rendering."""

    category: FoodCategory
    items: list[ConsolidatedItem] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class ShoppingList(BaseModel):
    """Consolidated shopping list produced from a meal plan."""

    items: list[ConsolidatedItem] = Field(default_factory=list)
    groups: list[CategoryGroup] = Field(default_factory=list)
    total_cost: float = Field(default=0.0, ge=0)
    total_items: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)


class PantryComparison(BaseModel):
    """Shopping items split into what is on hand, short, or missing."""

    already_have: list[CategorizedItem] = Field(default_factory=list)
    need_more: list[CategorizedItem] = Field(default_factory=list)
    need_to_buy: list[CategorizedItem] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def all_items(self) -> list[CategorizedItem]:
        return [*self.already_have, *self.need_more, *self.need_to_buy]

    def counts(self) -> dict[str, int]:
        return {
            "have": len(self.already_have),
            "partial": len(self.need_more),
            "buy": len(self.need_to_buy),
        }


__all__ = [
    "CategorizedItem",
    "CategoryGroup",
    "ConsolidatedItem",
    "FoodCategory",
    "PantryComparison",
    "PantryStatus",
    "ShoppingList",
]
