"""Typer CLI for poking at the engine (normalize, reduce, match, categorize, check-catalog)."""

from __future__ import annotations

from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from dotenv import load_dotenv
# load .env immediately so subsequent imports (which read settings at import time)
# pick up values from the .env file
load_dotenv()

# Configure top-level logging early so other modules pick it up.
import logging
from ingredient_engine.settings import settings

log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
handlers = [logging.StreamHandler()]
if settings.LOG_FILE:
    handlers.append(logging.FileHandler(settings.LOG_FILE))
logging.basicConfig(
    level=log_level,
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    handlers=handlers,
)

# Quiet noisy third-party loggers while keeping our app logs
logging.getLogger("rapidfuzz").setLevel(logging.WARNING)

from ingredient_engine.catalog.index import CatalogIndex
from ingredient_engine.catalog.io import load_catalog, load_raw_rows
from ingredient_engine.catalog.system import system_entries
from ingredient_engine.categories.categorize import matching_rule
from ingredient_engine.categories.mapping import validate_category_consistency
from ingredient_engine.models.category import DEFAULT_CATEGORY
from ingredient_engine.orchestrate.resolve import resolve_ingredient
from ingredient_engine.settings import validate_settings
from ingredient_engine.text.normalize import normalize
from ingredient_engine.text.reduce import reduce_to_ingredient_core

app = typer.Typer()
console = Console()

CATALOG_HELP = "Catalog JSON file (defaults to CATALOG_PATH or the system catalog)."


def _load_index(catalog: Optional[str]) -> CatalogIndex:
    path = catalog or settings.CATALOG_PATH
    if path:
        return CatalogIndex.build(load_catalog(path))
    return CatalogIndex.build(system_entries())


@app.callback()
def main() -> None:
    """Ingredient normalization, matching and categorization tools."""
    try:
        validate_settings()
    except RuntimeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)


@app.command("normalize")
def normalize_cmd(text: str):
    """Print the canonical form of TEXT."""
    console.print(normalize(text))


@app.command("reduce")
def reduce_cmd(phrase: str):
    """Print the ingredient core of a recipe line."""
    console.print(reduce_to_ingredient_core(phrase))


@app.command("match")
def match_cmd(
    phrases: List[str],
    catalog: Optional[str] = typer.Option(None, "--catalog", "-c", help=CATALOG_HELP),
    threshold: Optional[int] = typer.Option(None, "--threshold", "-t", min=1, max=100),
):
    """Match one or more ingredient phrases against a catalog."""
    try:
        index = _load_index(catalog)
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    table = Table("phrase", "kind", "confidence", "entry", "category")
    for phrase in phrases:
        r = resolve_ingredient(phrase, index, threshold=threshold)
        entry = r.match.matched_entry
        table.add_row(
            phrase,
            r.match.match_kind.value,
            str(r.match.confidence),
            entry.name if entry else "-",
            r.category.value,
        )
    console.print(table)


@app.command("categorize")
def categorize_cmd(
    names: List[str],
    context: Optional[List[str]] = typer.Option(
        None, "--context", "-x", help='Recipe label such as "Course: Dessert" (repeatable).'
    ),
):
    """Show the heuristic category (and the rule that fired) for each name."""
    table = Table("name", "category", "rule")
    for name in names:
        rule = matching_rule(name, context)
        if rule is None:
            table.add_row(name, DEFAULT_CATEGORY.value, "(default)")
        else:
            table.add_row(name, rule.category.value, rule.name)
    console.print(table)


@app.command("check-catalog")
def check_catalog(catalog: Optional[str] = typer.Option(None, "--catalog", "-c", help=CATALOG_HELP)):
    """Validate a catalog file: loadable rows, canonical categories, unique names."""
    path = catalog or settings.CATALOG_PATH
    if not path:
        console.print("[red]Error:[/red] no catalog given (use --catalog or CATALOG_PATH)")
        raise typer.Exit(code=1)
    try:
        rows = load_raw_rows(path)
        entries = load_catalog(path)
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    problems = list(validate_category_consistency(rows).issues)
    seen: dict = {}
    for entry in entries:
        if entry.normalized_name in seen:
            problems.append(f"Duplicate name '{entry.normalized_name}': {seen[entry.normalized_name]} and {entry.id}")
        else:
            seen[entry.normalized_name] = entry.id

    console.print(f"{len(entries)} entries in {path}")
    if problems:
        for p in problems:
            console.print(f"[yellow]-[/yellow] {p}")
        raise typer.Exit(code=1)
    console.print("Catalog OK.")


if __name__ == "__main__":
    app()
