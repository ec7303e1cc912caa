"""Recipe, meal plan, and pantry input models."""

from __future__ import annotations

import logging
import math
from typing import Any, Iterator, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

logger = logging.getLogger(__name__)

DAYS: Tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)
MEALS: Tuple[str, ...] = ("breakfast", "lunch", "dinner")


def coerce_quantity(value: Any) -> float:
    """Parse a free-form quantity, falling back to zero for anything unusable."""

    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def coerce_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


class Quantity(BaseModel):
    """Amount of an ingredient with a free-text unit."""

    value: float = Field(default=0.0, ge=0)
    unit: str = Field(default="")

    model_config = ConfigDict(frozen=True)

    @field_validator("value", mode="before")
    @classmethod
    def _coerce_value(cls, value: Any) -> float:
        return coerce_quantity(value)

    @field_validator("unit", mode="before")
    @classmethod
    def _coerce_unit(cls, value: Any) -> str:
        return coerce_text(value)


class _MeasuredItem(BaseModel):
    """Shared shape for anything carrying a name and a flat quantity/unit pair."""

    name: str = Field(default="")
    quantity: float = Field(default=0.0, ge=0, alias="qty")
    unit: str = Field(default="")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _flatten_nested_quantity(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        nested = data.get("quantity")
        if isinstance(nested, Quantity):
            nested = nested.model_dump()
        if not isinstance(nested, Mapping):
            return data
        flattened = dict(data)
        flattened["quantity"] = nested.get("value")
        if flattened.get("unit") is None:
            flattened["unit"] = nested.get("unit")
        return flattened

    @field_validator("quantity", mode="before")
    @classmethod
    def _coerce_quantity(cls, value: Any) -> float:
        return coerce_quantity(value)

    @field_validator("name", "unit", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return coerce_text(value)

    @property
    def amount(self) -> Quantity:
        return Quantity(value=self.quantity, unit=self.unit)


class IngredientMention(_MeasuredItem):
    """Ingredient line as it appears inside a recipe."""


class PantryEntry(_MeasuredItem):
    """Item currently available in the household pantry."""


class Recipe(BaseModel):
    """Recipe record owned by the external recipe store."""

    id: Optional[str] = Field(default=None)
    name: str = Field(default="")
    ingredients: list[IngredientMention] = Field(default_factory=list)
    cost_per_serving: float = Field(default=0.0, ge=0, alias="costPerServing")
    servings: int = Field(default=1, ge=1)

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Optional[str]:
        text = coerce_text(value)
        return text or None

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> str:
        return coerce_text(value)

    @field_validator("ingredients", mode="before")
    @classmethod
    def _coerce_ingredients(cls, value: Any) -> list[Any]:
        if not isinstance(value, (list, tuple)):
            return []
        return [
            entry
            for entry in value
            if isinstance(entry, (Mapping, IngredientMention))
        ]

    @field_validator("cost_per_serving", mode="before")
    @classmethod
    def _coerce_cost(cls, value: Any) -> float:
        return coerce_quantity(value)

    @field_validator("servings", mode="before")
    @classmethod
    def _coerce_servings(cls, value: Any) -> int:
        number = coerce_quantity(value)
        if number < 1:
            return 1
        return int(number)

    @property
    def total_cost(self) -> float:
        return self.cost_per_serving * self.servings


RecipeSlot = Union[Recipe, str, None]


def _coerce_slot(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, (Recipe, Mapping)):
        return value
    return None


class DayPlan(BaseModel):
    """Breakfast, lunch, and dinner slots for a single day."""

    breakfast: RecipeSlot = Field(default=None)
    lunch: RecipeSlot = Field(default=None)
    dinner: RecipeSlot = Field(default=None)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _coerce_day(cls, data: Any) -> Any:
        if isinstance(data, DayPlan):
            return data
        if not isinstance(data, Mapping):
            return {}
        return {meal: _coerce_slot(data.get(meal)) for meal in MEALS}


class MealPlan(BaseModel):
    """Fixed seven-day by three-meal planning grid."""

    monday: DayPlan = Field(default_factory=DayPlan)
    tuesday: DayPlan = Field(default_factory=DayPlan)
    wednesday: DayPlan = Field(default_factory=DayPlan)
    thursday: DayPlan = Field(default_factory=DayPlan)
    friday: DayPlan = Field(default_factory=DayPlan)
    saturday: DayPlan = Field(default_factory=DayPlan)
    sunday: DayPlan = Field(default_factory=DayPlan)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _coerce_plan(cls, data: Any) -> Any:
        if isinstance(data, MealPlan):
            return data
        if not isinstance(data, Mapping):
            return {}
        return {day: data.get(day) or {} for day in DAYS}

    def slot(self, day: str, meal: str) -> RecipeSlot:
        return getattr(getattr(self, day), meal)

    def iter_recipes(
        self, catalog: Optional[Mapping[str, Recipe]] = None
    ) -> Iterator[Recipe]:
        """Yield every filled slot in day-then-meal order.

        String references are resolved against ``catalog`` (keyed by recipe id or
        name); references that cannot be resolved are skipped.
        """

        for day in DAYS:
            for meal in MEALS:
                entry = self.slot(day, meal)
                if entry is None:
                    continue
                if isinstance(entry, Recipe):
                    yield entry
                    continue
                resolved = (catalog or {}).get(entry)
                if resolved is None:
                    logger.debug("Unresolved recipe reference %r in %s/%s", entry, day, meal)
                    continue
                yield resolved


def load_meal_plan(payload: Any) -> MealPlan:
    """Coerce an arbitrary payload into a MealPlan, degrading to an empty plan."""

    if isinstance(payload, MealPlan):
        return payload
    try:
        return MealPlan.model_validate(payload)
    except ValidationError as exc:
        logger.warning("Discarding invalid meal plan payload: %s", exc.error_count())
        return MealPlan()


def load_recipe(payload: Any) -> Optional[Recipe]:
    if isinstance(payload, Recipe):
        return payload
    if not isinstance(payload, Mapping):
        return None
    try:
        return Recipe.model_validate(payload)
    except ValidationError as exc:
        logger.warning("Discarding invalid recipe payload: %s", exc.error_count())
        return None


def load_recipes(payload: Any) -> list[Recipe]:
    if not isinstance(payload, (list, tuple)):
        return []
    recipes = (load_recipe(entry) for entry in payload)
    return [recipe for recipe in recipes if recipe is not None]


def build_catalog(recipes: Any) -> dict[str, Recipe]:
    """Index recipes by id and by name for resolving meal plan references."""

    catalog: dict[str, Recipe] = {}
    for recipe in load_recipes(recipes):
        if recipe.name:
            catalog.setdefault(recipe.name, recipe)
        if recipe.id:
            catalog[recipe.id] = recipe
    return catalog


def load_pantry(payload: Any) -> list[PantryEntry]:
    """Coerce a pantry payload into entries, dropping anything that is not a record."""

    if not isinstance(payload, (list, tuple)):
        return []
    entries: list[PantryEntry] = []
    for raw in payload:
        if isinstance(raw, PantryEntry):
            entries.append(raw)
            continue
        if not isinstance(raw, Mapping):
            continue
        try:
            entries.append(PantryEntry.model_validate(raw))
        except ValidationError as exc:
            logger.warning("Discarding invalid pantry entry: %s", exc.error_count())
    return entries


__all__ = [
    "DAYS",
    "MEALS",
    "DayPlan",
    "IngredientMention",
    "MealPlan",
    "PantryEntry",
    "Quantity",
    "Recipe",
    "RecipeSlot",
    "build_catalog",
    "coerce_quantity",
    "coerce_text",
    "load_meal_plan",
    "load_pantry",
    "load_recipe",
    "load_recipes",
]
