"""
System Commands.

Commands for system information and configuration.
"""

from typing import Any, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.tree import Tree

app = typer.Typer(help="System information commands")
console = Console()


@app.command()
def info() -> None:
    """
    Display application information.

    Shows app name, version, and environment.
    """
    try:
        from kashmir_tours.backend.core.config import get_app_config

        app_settings = get_app_config().application
    except Exception as e:
        console.print(f"[red]Error loading configuration: {e}[/red]")
        raise typer.Exit(1)

    console.print(Panel(
        f"[bold]{app_settings.name}[/bold]\n"
        f"Version: {app_settings.version}\n"
        f"Environment: {app_settings.environment}\n"
        f"Description: {app_settings.description}",
        title="Application Info",
    ))


@app.command()
def config(
    section: Optional[str] = typer.Argument(
        None,
        help="Config section to show (application, database, logging, features, security)",
    ),
) -> None:
    """
    Display configuration settings.

    Shows all configuration or a specific section. Secrets from
    config/.env are never shown.
    """
    try:
        from kashmir_tours.backend.core.config import get_app_config

        app_config = get_app_config()
    except Exception as e:
        console.print(f"[red]Error loading configuration: {e}[/red]")
        raise typer.Exit(1)

    sections = {
        "application": app_config.application.model_dump(),
        "database": app_config.database.model_dump(),
        "logging": app_config.logging.model_dump(),
        "features": app_config.features.model_dump(),
        "security": app_config.security.model_dump(),
    }

    if section:
        if section not in sections:
            console.print(f"[red]Unknown section: {section}[/red]")
            console.print(f"Available sections: {', '.join(sections.keys())}")
            raise typer.Exit(1)
        _display_config_section(section, sections[section])
        return

    for name, data in sections.items():
        _display_config_section(name, data)
        console.print()


def _display_config_section(name: str, data: dict[str, Any]) -> None:
    """Display a configuration section as a tree."""
    tree = Tree(f"[bold cyan]{name}[/bold cyan]")

    def add_items(parent: Tree, items: dict[str, Any]) -> None:
        for key, value in items.items():
            if isinstance(value, dict):
                branch = parent.add(f"[cyan]{key}[/cyan]")
                add_items(branch, value)
            else:
                parent.add(f"[cyan]{key}[/cyan]: {value}")

    add_items(tree, data)
    console.print(tree)
