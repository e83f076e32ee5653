"""
User Commands.

Administrator account management.
"""

import typer
from rich.console import Console

from kashmir_tours.backend.core.exceptions import ApplicationError
from kashmir_tours.backend.core.logging import get_logger, log_with_source
from kashmir_tours.backend.core.security import BCRYPT_MAX_BYTES, MIN_PASSWORD_LENGTH
from kashmir_tours.backend.schemas.user import normalize_email
from kashmir_tours.backend.services.auth import AuthService
from kashmir_tours.cli.session import run_in_session

app = typer.Typer(help="User administration commands")
console = Console()
logger = get_logger(__name__)


@app.command("create-admin")
def create_admin(
    email: str = typer.Option(..., "--email", "-e", help="Admin email"),
    full_name: str = typer.Option("Administrator", "--full-name", "-n", help="Display name"),
    password: str = typer.Option(
        ...,
        "--password",
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
        help="Admin password",
    ),
) -> None:
    """
    Create an administrator account.

    Examples:
        cli.py users create-admin --email ops@example.com
    """
    try:
        email = normalize_email(email)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if not MIN_PASSWORD_LENGTH <= len(password.encode("utf-8")) <= BCRYPT_MAX_BYTES:
        console.print(
            f"[red]Password must be between {MIN_PASSWORD_LENGTH} and {BCRYPT_MAX_BYTES} bytes[/red]"
        )
        raise typer.Exit(1)

    try:
        user = run_in_session(
            lambda session: AuthService(session).create_admin(email, password, full_name)
        )
    except ApplicationError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)

    log_with_source(logger, "cli", "info", "Administrator created", user_id=user.id)
    console.print(f"[green]Administrator created:[/green] {user.email} ({user.id})")


@app.command()
def promote(
    email: str = typer.Option(..., "--email", "-e", help="Email of the account to promote"),
) -> None:
    """Grant the admin role to an existing account."""
    try:
        user = run_in_session(lambda session: AuthService(session).promote_to_admin(email))
    except ApplicationError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)

    log_with_source(logger, "cli", "info", "User promoted to admin", user_id=user.id)
    console.print(f"[green]{user.email} is now an administrator[/green]")
