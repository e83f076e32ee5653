"""
Startup Security Validation.

Checks security invariants before the application accepts traffic.
If any check fails, the application refuses to start with a clear
error message.

Called during FastAPI lifespan initialization.
"""

from kashmir_tours.backend.core.config import get_app_config, get_settings
from kashmir_tours.backend.core.logging import get_logger

logger = get_logger(__name__)


class StartupSecurityError(RuntimeError):
    """Raised when a startup security check fails."""

    pass


def run_startup_checks() -> None:
    """
    Validate all security invariants at startup.

    Raises:
        StartupSecurityError: If any check fails
    """
    app_config = get_app_config()
    settings = get_settings()
    environment = app_config.application.environment
    is_production = environment == "production"

    errors: list[str] = []

    _check_secret_strength(settings, app_config.security, errors)
    _check_production_safety(app_config, is_production, errors)

    if errors:
        for error in errors:
            logger.error("Startup security check failed", extra={"check": error})
        raise StartupSecurityError(
            f"Startup blocked: {len(errors)} security check(s) failed:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )

    logger.info(
        "Startup security checks passed",
        extra={"environment": environment},
    )


def _check_secret_strength(settings, security_config, errors: list[str]) -> None:
    """Validate that secrets meet minimum length requirements."""
    jwt_min = security_config.secrets_validation.jwt_secret_min_length
    if len(settings.jwt_secret) < jwt_min:
        errors.append(
            f"JWT_SECRET is {len(settings.jwt_secret)} chars, "
            f"minimum is {jwt_min}"
        )


def _check_production_safety(app_config, is_production: bool, errors: list[str]) -> None:
    """Validate production environment safety constraints."""
    if not is_production:
        return

    app = app_config.application
    if app.debug:
        errors.append("debug is true in production environment")

    if app_config.features.api_detailed_errors:
        errors.append("api_detailed_errors is true in production environment")

    if app.docs_enabled:
        errors.append("docs_enabled is true in production environment")

    if app_config.security.cors.enforce_in_production:
        localhost_origins = [o for o in app.cors.origins if "localhost" in o]
        if localhost_origins:
            errors.append(
                f"CORS origins contain localhost in production: {localhost_origins}"
            )
