"""
Catalog Commands.

Load the starter destinations and tours.
"""

from pathlib import Path

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from kashmir_tours.backend.core.config import find_project_root
from kashmir_tours.backend.core.exceptions import ApplicationError
from kashmir_tours.backend.core.logging import get_logger, log_with_source
from kashmir_tours.backend.schemas.catalog import CatalogSeed
from kashmir_tours.backend.services.catalog import CatalogSeedService
from kashmir_tours.cli.session import run_in_session

app = typer.Typer(help="Catalog commands")
console = Console()
logger = get_logger(__name__)


def load_seed_file(path: Path) -> CatalogSeed:
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return CatalogSeed.model_validate(raw)


@app.command()
def seed(
    file: Path = typer.Option(None, "--file", "-f", help="Seed file (default: config/seed/catalog.yaml)"),
) -> None:
    """
    Create destinations and tours from a seed file.

    Records whose slug already exists are skipped, so the command can be
    run repeatedly.

    Examples:
        cli.py catalog seed
        cli.py catalog seed --file my_catalog.yaml
    """
    seed_path = file or find_project_root() / "config" / "seed" / "catalog.yaml"
    if not seed_path.exists():
        console.print(f"[red]Seed file not found: {seed_path}[/red]")
        raise typer.Exit(1)

    try:
        catalog = load_seed_file(seed_path)
    except (yaml.YAMLError, ValidationError) as e:
        console.print(f"[red]Invalid seed file {seed_path}:[/red]\n{e}")
        raise typer.Exit(1)

    try:
        result = run_in_session(lambda session: CatalogSeedService(session).seed(catalog))
    except ApplicationError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)

    log_with_source(
        logger, "cli", "info", "Catalog seed finished", seed_file=str(seed_path), **result.model_dump(),
    )

    table = Table(title="Catalog seed", show_header=True)
    table.add_column("Kind", style="cyan")
    table.add_column("Created", justify="right")
    table.add_column("Skipped", justify="right")
    table.add_row("Destinations", str(result.destinations_created), str(result.destinations_skipped))
    table.add_row("Tours", str(result.tours_created), str(result.tours_skipped))
    console.print(table)
