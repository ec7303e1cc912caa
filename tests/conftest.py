"""Shared pytest fixtures for the Larder test suite."""

from __future__ import annotations

import logging
from typing import Dict, List

import pytest

from larder.config import get_settings


@pytest.fixture()
def pasta_recipe() -> Dict[str, object]:
    return {
        "id": "pasta",
        "name": "Tomato Pasta",
        "costPerServing": 2.5,
        "servings": 4,
        "ingredients": [
            {"name": "Spaghetti", "quantity": 1, "unit": "lb"},
            {"name": "Crushed Tomatoes", "quantity": 1, "unit": "can"},
            {"name": "Onion", "quantity": 1, "unit": "cup"},
            {"name": "Olive Oil", "quantity": 2, "unit": "tbsp"},
            {"name": "Garlic", "quantity": 3, "unit": "cloves"},
        ],
    }


@pytest.fixture()
def stir_fry_recipe() -> Dict[str, object]:
    return {
        "id": "stirfry",
        "name": "Chicken Stir Fry",
        "costPerServing": 3.0,
        "servings": 2,
        "ingredients": [
            {"name": "Chicken Breast", "quantity": 1, "unit": "lb"},
            {"name": "Onions", "quantity": 2, "unit": "cups"},
            {"name": "Soy Sauce", "quantity": 3, "unit": "tbsp"},
            {"name": "Rice", "quantity": 2, "unit": "cups"},
            {"name": "Garlic", "quantity": 2, "unit": "clove"},
        ],
    }


@pytest.fixture()
def oatmeal_recipe() -> Dict[str, object]:
    return {
        "id": "oatmeal",
        "name": "Oatmeal",
        "costPerServing": 1.25,
        "servings": 1,
        "ingredients": [
            {"name": "Oats", "quantity": 1, "unit": "cup"},
            {"name": "Milk", "quantity": 2, "unit": "cups"},
        ],
    }


@pytest.fixture()
def sample_recipes(pasta_recipe, stir_fry_recipe, oatmeal_recipe) -> List[Dict[str, object]]:
    return [pasta_recipe, stir_fry_recipe, oatmeal_recipe]


@pytest.fixture()
def sample_meal_plan(pasta_recipe, stir_fry_recipe, oatmeal_recipe) -> Dict[str, object]:
    """Oatmeal twice, pasta once, stir fry once."""

    return {
        "monday": {"breakfast": oatmeal_recipe, "dinner": pasta_recipe},
        "tuesday": {"dinner": stir_fry_recipe},
        "wednesday": {"breakfast": oatmeal_recipe},
    }


@pytest.fixture()
def sample_pantry() -> List[Dict[str, object]]:
    return [
        {"name": "onions", "quantity": 1, "unit": "cup"},
        {"name": "spaghetti", "quantity": 20, "unit": "oz"},
        {"name": "garlic", "quantity": 10, "unit": ""},
        {"name": "Milk", "quantity": 500, "unit": "ml"},
        {"name": "chicken", "quantity": 2, "unit": "piece"},
        {"name": "olive oil", "quantity": 0, "unit": "tbsp"},
        {"name": "rice", "quantity": 1, "unit": "kg"},
    ]


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep every test independent of the caller's environment and .env files."""

    for key in (
        "LARDER_LOG_LEVEL",
        "LARDER_LOG_FORMAT",
        "LARDER_CURRENCY_SYMBOL",
        "LARDER_EXPORT_CHECKBOX",
        "LARDER_SUGGESTION_LIMIT",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def restore_root_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.captureWarnings(False)
