"""Command-line interface for Larder."""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, Optional

import typer
from pydantic import BaseModel

from larder.config import get_settings
from larder.engine.aggregator import export_shopping_list_text, generate_shopping_list
from larder.engine.analysis import analyze_shared_ingredients, match_recipes_to_pantry
from larder.engine.comparator import compare_with_pantry
from larder.engine.units import conversion_message, convert, display_quantity, normalize_unit
from larder.logging_utils import configure_logging
from larder.models.recipe import Recipe, build_catalog

app = typer.Typer(help="Larder shopping list and pantry reconciliation commands.")

EXIT_BAD_INPUT = 2


def _read_json(path: str) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as fh:
            return json.load(fh)
    except OSError as exc:
        typer.secho(f"Unable to read {path}: {exc.strerror or exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=EXIT_BAD_INPUT) from exc
    except json.JSONDecodeError as exc:
        typer.secho(f"Invalid JSON in {path}: {exc.msg}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=EXIT_BAD_INPUT) from exc


def _load_catalog(path: Optional[Path]) -> Optional[dict[str, Recipe]]:
    if path is None:
        return None
    return build_catalog(_read_json(str(path)))


def _emit(payload: Any, pretty: bool) -> None:
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json")
    elif isinstance(payload, list):
        payload = [
            entry.model_dump(mode="json") if isinstance(entry, BaseModel) else entry
            for entry in payload
        ]
    output = json.dumps(payload, indent=2 if pretty else None, sort_keys=pretty, ensure_ascii=False)
    typer.echo(output)


CATALOG_OPTION = typer.Option(
    None,
    "--catalog",
    help="JSON list of recipes used to resolve recipe references in the plan.",
)
PRETTY_OPTION = typer.Option(False, "--pretty", help="Pretty-print output JSON.")


@app.callback()
def main_callback(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Override the configured logging level."
    ),
) -> None:
    """Configure logging before any command runs."""

    settings = get_settings()
    configure_logging(log_level or settings.log_level, settings.log_format)


@app.command("shopping-list")
def shopping_list(
    plan_path: str = typer.Argument(..., help="Meal plan JSON file."),
    catalog: Optional[Path] = CATALOG_OPTION,
    text: bool = typer.Option(False, "--text", help="Render the plain-text export instead of JSON."),
    pretty: bool = PRETTY_OPTION,
) -> None:
    """
    Build the consolidated shopping list for a weekly meal plan.
    """
    plan = _read_json(plan_path)
    result = generate_shopping_list(plan, _load_catalog(catalog))
    if text:
        typer.echo(export_shopping_list_text(result), nl=False)
        return
    _emit(result, pretty)


@app.command()
def compare(
    plan_path: str = typer.Argument(..., help="Meal plan JSON file."),
    pantry_path: str = typer.Argument(..., help="Pantry JSON file (list of entries)."),
    catalog: Optional[Path] = CATALOG_OPTION,
    pretty: bool = PRETTY_OPTION,
) -> None:
    """
    Reconcile a meal plan's shopping list against the pantry.
    """
    plan = _read_json(plan_path)
    pantry = _read_json(pantry_path)
    result = generate_shopping_list(plan, _load_catalog(catalog))
    _emit(compare_with_pantry(result.items, pantry), pretty)


@app.command("convert")
def convert_command(
    value: float = typer.Argument(..., help="Amount to convert."),
    from_unit: str = typer.Argument(..., help="Unit the amount is expressed in."),
    to_unit: str = typer.Argument(..., help="Unit to convert into."),
    ingredient: Optional[str] = typer.Option(
        None, "--ingredient", help="Ingredient name, needed to bridge volume and weight."
    ),
) -> None:
    """Convert an amount between cooking units."""

    if not math.isfinite(value) or value < 0:
        typer.secho(
            f"Amount must be a finite, non-negative number (got {value})",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=EXIT_BAD_INPUT)
    converted = convert(value, from_unit, to_unit, ingredient)
    if converted is None:
        typer.secho(
            conversion_message(from_unit, to_unit, ingredient), fg=typer.colors.YELLOW, err=True
        )
        raise typer.Exit(code=1)
    target = normalize_unit(to_unit)
    typer.echo(f"{display_quantity(converted, target)} {target}".strip())


@app.command()
def shared(
    plan_path: str = typer.Argument(..., help="Meal plan JSON file."),
    catalog: Optional[Path] = CATALOG_OPTION,
    pretty: bool = PRETTY_OPTION,
) -> None:
    """Report ingredients shared by two or more recipes in a plan."""

    plan = _read_json(plan_path)
    _emit(analyze_shared_ingredients(plan, _load_catalog(catalog)), pretty)


@app.command("pantry-matches")
def pantry_matches(
    pantry_path: str = typer.Argument(..., help="Pantry JSON file (list of entries)."),
    recipes_path: str = typer.Argument(..., help="Recipes JSON file (list of recipes)."),
    pretty: bool = PRETTY_OPTION,
) -> None:
    """Rank recipes by how much of each the pantry already covers."""

    pantry = _read_json(pantry_path)
    recipes = _read_json(recipes_path)
    _emit(match_recipes_to_pantry(pantry, recipes), pretty)


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for `python -m larder`."""
    app(prog_name="larder", args=argv)


if __name__ == "__main__":
    main()
