"""Tests for the Larder command-line interface."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from larder.cli import app

runner = CliRunner()


def _invoke(*args: str):
    return runner.invoke(app, ["--log-level", "WARNING", *args])


@pytest.fixture()
def plan_file(tmp_path, sample_meal_plan):
    path = tmp_path / "plan.json"
    path.write_text(json.dumps(sample_meal_plan), encoding="utf-8")
    return path


@pytest.fixture()
def pantry_file(tmp_path, sample_pantry):
    path = tmp_path / "pantry.json"
    path.write_text(json.dumps(sample_pantry), encoding="utf-8")
    return path


@pytest.fixture()
def recipes_file(tmp_path, sample_recipes):
    path = tmp_path / "recipes.json"
    path.write_text(json.dumps(sample_recipes), encoding="utf-8")
    return path


def test_shopping_list_outputs_json(plan_file):
    result = _invoke("shopping-list", str(plan_file))

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["total_items"] == 10
    assert payload["total_cost"] == pytest.approx(18.5)
    assert payload["groups"][0]["category"]["name"] == "Produce"


def test_shopping_list_text_export(plan_file):
    result = _invoke("shopping-list", str(plan_file), "--text")

    assert result.exit_code == 0
    assert result.stdout.startswith("=== SHOPPING LIST ===\n")
    assert "☐ 3 cup Onion" in result.stdout
    assert result.stdout.endswith("TOTAL COST: $18.50\n")


def test_shopping_list_resolves_catalog_references(tmp_path, recipes_file):
    plan_path = tmp_path / "refs.json"
    plan_path.write_text(json.dumps({"friday": {"dinner": "oatmeal"}}), encoding="utf-8")

    result = _invoke("shopping-list", str(plan_path), "--catalog", str(recipes_file), "--pretty")

    assert result.exit_code == 0
    assert '\n  "items": [' in result.stdout
    assert json.loads(result.stdout)["total_items"] == 2


def test_compare_outputs_buckets(plan_file, pantry_file):
    result = _invoke("compare", str(plan_file), str(pantry_file))

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert len(payload["already_have"]) == 3
    assert len(payload["need_more"]) == 3
    assert len(payload["need_to_buy"]) == 4
    assert payload["need_more"][1]["status"] == "partial"


@pytest.mark.parametrize(
    "args, expected",
    [
        (["2", "cups", "ml"], "473.18 ml"),
        (["1", "cup", "g", "--ingredient", "flour"], "120 g"),
        (["3", "whole", "cloves"], "3 piece"),
        (["1", "cup s", "ml"], "236.59 ml"),
    ],
)
def test_convert(args, expected):
    result = _invoke("convert", *args)

    assert result.exit_code == 0
    assert result.stdout.strip() == expected


def test_convert_failure_exits_non_zero():
    result = _invoke("convert", "1", "piece", "cup")

    assert result.exit_code == 1


@pytest.mark.parametrize("amount", ["-1", "nan", "inf"])
def test_convert_rejects_unusable_amounts(amount):
    result = _invoke("convert", "--", amount, "cup", "ml")

    assert result.exit_code == 2
    assert "Amount must be a finite, non-negative number" in result.output
    assert "Units are the same" not in result.output
    assert "Convertible" not in result.output


def test_shared_reports_common_ingredients(plan_file):
    result = _invoke("shared", str(plan_file))

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["total_shared_ingredients"] == 1
    assert payload["top_shared_ingredients"][0]["normalized_name"] == "garlic"


def test_pantry_matches(pantry_file, recipes_file):
    result = _invoke("pantry-matches", str(pantry_file), str(recipes_file))

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert len(payload) == 3
    percentages = [entry["pantry_match_percentage"] for entry in payload]
    assert percentages == sorted(percentages, reverse=True)


def test_missing_file_exits_with_bad_input(tmp_path):
    result = _invoke("shopping-list", str(tmp_path / "absent.json"))

    assert result.exit_code == 2
    assert "Unable to read" in result.output


def test_invalid_json_exits_with_bad_input(tmp_path, pantry_file):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")

    result = _invoke("compare", str(broken), str(pantry_file))

    assert result.exit_code == 2
    assert "Invalid JSON" in result.output
