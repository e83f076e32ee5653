#!/usr/bin/env python3
"""
ExploreKashmirTours CLI.

Operations tooling built with Typer for commands and Rich for output.

Usage:
    python cli.py --help

    # Server
    python cli.py server start --reload

    # Database migrations
    python cli.py db upgrade
    python cli.py db current
    python cli.py db generate -m "message"

    # Administration
    python cli.py users create-admin --email ops@example.com
    python cli.py users promote --email guide@example.com
    python cli.py catalog seed

    # System info
    python cli.py system info
    python cli.py system config database
"""

import sys
from pathlib import Path

import structlog
import typer
from rich.console import Console

# Add project root to path for absolute imports
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from kashmir_tours.backend.core.logging import setup_logging
from kashmir_tours.cli.commands import catalog_app, db_app, server_app, system_app, users_app

app = typer.Typer(
    name="cli",
    help="ExploreKashmirTours CLI - server, migrations, users and catalogue.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

app.add_typer(server_app, name="server")
app.add_typer(db_app, name="db")
app.add_typer(users_app, name="users")
app.add_typer(catalog_app, name="catalog")
app.add_typer(system_app, name="system")


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    ExploreKashmirTours CLI.

    Server management, database migrations, admin accounts and catalogue seeding.
    """
    if not (project_root / ".project_root").exists():
        console.print("[red]Error: .project_root not found. Run from project root.[/red]")
        raise typer.Exit(1)

    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    else:
        level = "WARNING"
    setup_logging(level=level, format_type="console")
    structlog.contextvars.bind_contextvars(source="cli")


if __name__ == "__main__":
    app()
