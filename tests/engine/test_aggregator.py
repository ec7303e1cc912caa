"""Tests for meal plan aggregation and the plain-text export."""

from __future__ import annotations

import math
import sys

import pytest

from larder.config import get_settings
from larder.engine.aggregator import (
    EMPTY_EXPORT,
    aggregation_key,
    export_shopping_list_text,
    generate_shopping_list,
)
from larder.engine.categories import CANNED, DAIRY, GRAINS, MEAT, OILS, PRODUCE
from larder.models.recipe import build_catalog


def _by_name(shopping_list):
    return {item.name: item for item in shopping_list.items}


def _salad_plan():
    salad = {
        "name": "Spinach Salad",
        "costPerServing": 2,
        "servings": 2,
        "ingredients": [
            {"name": "Spinach", "quantity": 2, "unit": "cups"},
            {"name": "Feta", "quantity": 0.5, "unit": "cup"},
            {"name": "Olive Oil", "quantity": 1, "unit": "tbsp"},
        ],
    }
    return {"monday": {"lunch": salad}}


def test_generate_shopping_list_consolidates_plan(sample_meal_plan):
    result = generate_shopping_list(sample_meal_plan)
    items = _by_name(result)

    assert result.total_items == 10
    assert len(result.items) == 10
    assert result.total_cost == pytest.approx(18.5)

    assert items["Onion"].quantity == pytest.approx(3.0)
    assert items["Onion"].unit == "cup"
    assert "Onions" not in items
    assert items["Garlic"].quantity == pytest.approx(5.0)
    assert items["Garlic"].unit == "piece"
    assert items["Oats"].quantity == pytest.approx(2.0)
    assert items["Milk"].quantity == pytest.approx(4.0)
    assert items["Milk"].category == DAIRY


def test_items_keep_first_seen_order(sample_meal_plan):
    result = generate_shopping_list(sample_meal_plan)

    assert [item.name for item in result.items] == [
        "Oats",
        "Milk",
        "Spaghetti",
        "Crushed Tomatoes",
        "Onion",
        "Olive Oil",
        "Garlic",
        "Chicken Breast",
        "Soy Sauce",
        "Rice",
    ]


def test_groups_follow_category_order(sample_meal_plan):
    result = generate_shopping_list(sample_meal_plan)

    assert [group.category for group in result.groups] == [
        PRODUCE,
        MEAT,
        DAIRY,
        GRAINS,
        CANNED,
        OILS,
    ]
    grains = result.groups[3]
    assert [item.name for item in grains.items] == ["Oats", "Rice", "Spaghetti"]


def test_synonym_spellings_consolidate_into_one_entry():
    soup = {"name": "Soup", "ingredients": [{"name": "onion", "quantity": 1, "unit": "cup"}]}
    stew = {"name": "Stew", "ingredients": [{"name": "onions", "quantity": 2, "unit": "cups"}]}
    plan = {"monday": {"dinner": soup}, "tuesday": {"dinner": stew}}

    result = generate_shopping_list(plan)

    assert len(result.items) == 1
    assert result.items[0].quantity == pytest.approx(3.0)
    assert result.items[0].unit == "cup"


def test_different_units_stay_separate():
    plan = {
        "monday": {
            "breakfast": {
                "name": "Latte",
                "ingredients": [
                    {"name": "milk", "quantity": 1, "unit": "cup"},
                    {"name": "Milk", "quantity": 200, "unit": "ml"},
                ],
            }
        }
    }

    result = generate_shopping_list(plan)

    assert sorted((item.unit, item.quantity) for item in result.items) == [
        ("cup", 1.0),
        ("ml", 200.0),
    ]


def test_string_references_resolve_through_catalog(sample_recipes):
    plan = {
        "monday": {"dinner": "pasta"},
        "tuesday": {"lunch": "Chicken Stir Fry"},
        "friday": {"dinner": "missing"},
    }

    resolved = generate_shopping_list(plan, build_catalog(sample_recipes))
    unresolved = generate_shopping_list(plan)

    assert resolved.total_cost == pytest.approx(16.0)
    assert resolved.total_items == 8
    assert unresolved.items == []
    assert unresolved.total_cost == 0


@pytest.mark.parametrize("payload", [None, "garbage", [1, 2], 42, {"monday": "oops"}])
def test_invalid_plans_yield_empty_list(payload):
    result = generate_shopping_list(payload)

    assert result.items == []
    assert result.groups == []
    assert result.total_cost == 0
    assert result.total_items == 0
    assert export_shopping_list_text(result) == EMPTY_EXPORT


def test_malformed_ingredient_lines_are_coerced():
    plan = {
        "monday": {
            "dinner": {
                "name": "Mystery",
                "costPerServing": "n/a",
                "ingredients": [
                    {"name": "salt", "quantity": "abc", "unit": None},
                    "junk",
                    {"name": "pepper", "quantity": -2},
                ],
            },
            "lunch": {"name": "Empty", "ingredients": "nope"},
        }
    }

    result = generate_shopping_list(plan)

    assert [(item.name, item.quantity, item.unit) for item in result.items] == [
        ("salt", 0.0, ""),
        ("pepper", 0.0, ""),
    ]
    assert result.total_cost == 0


def test_aggregation_key():
    assert aggregation_key("2 cups Fresh Onions", "Cups") == ("onion", "cup")
    assert aggregation_key("garlic", "cloves") == ("garlic", "piece")


def test_export_shopping_list_text():
    result = generate_shopping_list(_salad_plan())
    rule = "-" * 40

    expected = "\n".join(
        [
            "=== SHOPPING LIST ===",
            "",
            "🥬 Produce",
            rule,
            "☐ 2 cup Spinach",
            "",
            "🥛 Dairy & Eggs",
            rule,
            "☐ 0.5 cup Feta",
            "",
            "🫒 Oils & Condiments",
            rule,
            "☐ 1 tbsp Olive Oil",
            "",
            "TOTAL ITEMS: 3",
            "TOTAL COST: $4.00",
        ]
    ) + "\n"
    assert export_shopping_list_text(result) == expected


def test_export_uses_configured_symbols(monkeypatch):
    monkeypatch.setenv("LARDER_CURRENCY_SYMBOL", "€")
    monkeypatch.setenv("LARDER_EXPORT_CHECKBOX", "[ ]")
    get_settings.cache_clear()

    text = export_shopping_list_text(generate_shopping_list(_salad_plan()))

    assert "[ ] 2 cup Spinach" in text
    assert text.endswith("TOTAL COST: €4.00\n")


def test_export_rejects_non_lists():
    assert export_shopping_list_text(None) == EMPTY_EXPORT


def test_export_handles_huge_quantities():
    plan = {
        "monday": {
            "dinner": {
                "name": "Brine",
                "ingredients": [{"name": "salt", "quantity": 1e307, "unit": "g"}],
            }
        }
    }

    text = export_shopping_list_text(generate_shopping_list(plan))

    assert f"☐ {int(1e307)} g salt" in text


def test_consolidated_totals_saturate_instead_of_overflowing():
    huge = sys.float_info.max
    plan = {
        "monday": {
            "dinner": {
                "name": "Brine",
                "ingredients": [
                    {"name": "salt", "quantity": huge, "unit": "g"},
                    {"name": "Salt", "quantity": huge, "unit": "g"},
                ],
            }
        }
    }

    result = generate_shopping_list(plan)

    assert len(result.items) == 1
    assert math.isfinite(result.items[0].quantity)
    assert result.items[0].quantity == huge
    assert export_shopping_list_text(result).count(str(int(huge))) == 1
