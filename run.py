#!/usr/bin/env python3
"""
Application Entry Script.

Quick entry point for the ExploreKashmirTours backend. For data
management (migrations, admin accounts, catalogue seeding) use cli.py.

Usage:
    python run.py --help
    python run.py --action server --reload --verbose
    python run.py --action health --debug
    python run.py --action config
    python run.py --action test --test-type unit
"""

import subprocess
import sys
from pathlib import Path

import click
import structlog

# Ensure project root is in path for absolute imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from kashmir_tours.backend.core.logging import get_logger, setup_logging


def validate_project_root() -> Path:
    """Validate that we're running from the project root."""
    if not (PROJECT_ROOT / ".project_root").exists():
        click.echo(
            click.style("Error: .project_root not found. Run from project root.", fg="red"),
            err=True,
        )
        sys.exit(1)
    return PROJECT_ROOT


@click.command()
@click.option(
    "--action",
    type=click.Choice(["server", "health", "config", "test", "info"]),
    default="info",
    help="Action to perform.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output (INFO level logging).",
)
@click.option(
    "--debug", "-d",
    is_flag=True,
    help="Enable debug output (DEBUG level logging).",
)
@click.option(
    "--host",
    default=None,
    help="Server host (for server action).",
)
@click.option(
    "--port",
    default=None,
    type=int,
    help="Server port (for server action).",
)
@click.option(
    "--reload",
    is_flag=True,
    help="Enable auto-reload (for server action).",
)
@click.option(
    "--test-type",
    type=click.Choice(["all", "unit", "integration"]),
    default="all",
    help="Test type to run (for test action).",
)
@click.option(
    "--coverage",
    is_flag=True,
    help="Run tests with coverage (for test action).",
)
def main(
    action: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
    test_type: str,
    coverage: bool,
) -> None:
    """
    ExploreKashmirTours backend entry point.

    Run the API server, check health, view configuration, or run tests.

    \b
    Examples:
        python run.py --action server --reload --verbose
        python run.py --action health --debug
        python run.py --action config
        python run.py --action test --test-type unit --coverage
        python run.py --action info
    """
    validate_project_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    setup_logging(level=log_level, format_type="console")
    structlog.contextvars.bind_contextvars(source="cli")
    logger = get_logger(__name__)

    logger.debug("Starting application", extra={"action": action, "log_level": log_level})

    if action == "server":
        run_server(logger, host, port, reload)
    elif action == "health":
        check_health(logger)
    elif action == "config":
        show_config(logger)
    elif action == "test":
        run_tests(logger, test_type, coverage)
    elif action == "info":
        show_info(logger)


def run_server(logger, host: str | None, port: int | None, reload: bool) -> None:
    """Start the FastAPI server with uvicorn."""
    from kashmir_tours.backend.core.config import get_app_config
    from kashmir_tours.cli.commands.server import build_server_command

    try:
        server = get_app_config().application.server
    except Exception as e:
        logger.error("Failed to load configuration", extra={"error": str(e)})
        click.echo(
            click.style("Error: Could not load config/settings/application.yaml.", fg="red"),
            err=True,
        )
        sys.exit(1)

    server_host = host or server.host
    server_port = port or server.port

    logger.info(
        "Starting server",
        extra={"host": server_host, "port": server_port, "reload": reload},
    )

    click.echo(f"Starting server at http://{server_host}:{server_port}")
    click.echo("Press Ctrl+C to stop\n")

    try:
        subprocess.run(build_server_command(server_host, server_port, reload), check=True)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except subprocess.CalledProcessError as e:
        logger.error("Server failed to start", extra={"exit_code": e.returncode})
        sys.exit(e.returncode)


def _health_checks() -> list[tuple[str, object]]:
    """Named checks; each returns a detail string or None and raises on failure."""
    from kashmir_tours.backend.core.config import get_app_config, get_settings

    def yaml_config():
        return f"App: {get_app_config().application.name}"

    def secrets():
        settings = get_settings()
        minimum = get_app_config().security.secrets_validation.jwt_secret_min_length
        if len(settings.jwt_secret) < minimum:
            raise ValueError(f"JWT_SECRET shorter than {minimum} characters")
        return None

    def fastapi_app():
        from kashmir_tours.backend.main import get_app
        return f"Title: {get_app().title}"

    def models():
        from kashmir_tours.backend.models.base import Base
        from kashmir_tours.backend.models import booking, destination, review, tour, user  # noqa: F401
        return f"Tables: {', '.join(sorted(Base.metadata.tables))}"

    return [
        ("YAML configuration", yaml_config),
        ("Secrets (config/.env)", secrets),
        ("FastAPI application", fastapi_app),
        ("Database models", models),
    ]


def check_health(logger) -> None:
    """Check application health by loading configuration, secrets and the app."""
    click.echo("Checking application health...\n")

    results = []
    for name, check in _health_checks():
        try:
            detail = check()
            results.append((name, True, detail))
            logger.debug("Health check passed", extra={"check": name})
        except Exception as e:
            results.append((name, False, str(e)))
            logger.error("Health check failed", extra={"check": name, "error": str(e)})

    click.echo("Health Check Results:")
    click.echo("-" * 50)
    for name, passed, detail in results:
        status = click.style("PASS", fg="green") if passed else click.style("FAIL", fg="red")
        detail_str = f" ({detail})" if detail else ""
        click.echo(f"  {status}  {name}{detail_str}")
    click.echo("-" * 50)

    if all(passed for _, passed, _ in results):
        click.echo(click.style("\nAll checks passed!", fg="green"))
    else:
        click.echo(click.style("\nSome checks failed. See details above.", fg="yellow"))
        click.echo("Note: secrets are read from config/.env (see config/.env.example).")
        sys.exit(1)


def show_config(logger) -> None:
    """Display loaded configuration (secrets excluded)."""
    from kashmir_tours.backend.core.config import get_app_config

    try:
        app_config = get_app_config()
    except Exception as e:
        logger.error("Failed to load configuration", extra={"error": str(e)})
        click.echo(click.style(f"Error loading configuration: {e}", fg="red"))
        sys.exit(1)

    sections = {
        "Application": app_config.application,
        "Database": app_config.database,
        "Logging": app_config.logging,
        "Feature Flags": app_config.features,
        "Security": app_config.security,
    }
    for title, section in sections.items():
        click.echo(f"{title} (from YAML):")
        click.echo("-" * 40)
        _echo_mapping(section.model_dump(), indent=2)
        click.echo()

    logger.info("Configuration displayed successfully")


def _echo_mapping(data: dict, indent: int) -> None:
    for key, value in data.items():
        if isinstance(value, dict):
            click.echo(f"{' ' * indent}{key}:")
            _echo_mapping(value, indent + 2)
        else:
            click.echo(f"{' ' * indent}{key}: {value}")


def run_tests(logger, test_type: str, coverage: bool) -> None:
    """Run the test suite."""
    logger.info("Running tests", extra={"type": test_type, "coverage": coverage})

    target = {"unit": "tests/unit", "integration": "tests/integration"}.get(test_type, "tests/")
    cmd = [sys.executable, "-m", "pytest", target, "-v"]

    if coverage:
        cmd.extend(["--cov=kashmir_tours", "--cov-report=term-missing"])

    click.echo(f"Running: {' '.join(cmd)}\n")

    try:
        result = subprocess.run(cmd)
    except FileNotFoundError:
        logger.error("pytest not found. Install with: pip install -e '.[test]'")
        sys.exit(1)
    sys.exit(result.returncode)


def show_info(logger) -> None:
    """Display application information."""
    from kashmir_tours.backend.core.config import get_app_config

    try:
        app_settings = get_app_config().application
    except Exception as e:
        logger.error("Failed to load application configuration", extra={"error": str(e)})
        click.echo(click.style("Error: Could not load application.yaml.", fg="red"), err=True)
        sys.exit(1)

    click.echo(app_settings.name)
    click.echo("=" * 40)
    click.echo(f"Version: {app_settings.version}")
    click.echo(f"Environment: {app_settings.environment}")
    click.echo(f"Description: {app_settings.description}")
    click.echo()
    click.echo("Available Actions:")
    click.echo("  --action server   Start the API server")
    click.echo("  --action health   Check configuration, secrets and app wiring")
    click.echo("  --action config   Display configuration")
    click.echo("  --action test     Run test suite")
    click.echo("  --action info     Show this information")
    click.echo()
    click.echo("Data management lives in cli.py:")
    click.echo("  python cli.py db upgrade")
    click.echo("  python cli.py catalog seed")
    click.echo("  python cli.py users create-admin --email ops@example.com")

    logger.debug("Info displayed")


if __name__ == "__main__":
    main()
