"""
Unit Tests for Startup Security Checks.
"""

import pytest

from kashmir_tours.backend.core.config import get_app_config, get_settings
from kashmir_tours.backend.core.startup_checks import StartupSecurityError, run_startup_checks


def test_development_config_passes():
    run_startup_checks()


def test_short_jwt_secret_blocks_startup(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "too-short")
    get_settings.cache_clear()

    with pytest.raises(StartupSecurityError, match="JWT_SECRET"):
        run_startup_checks()


def test_production_rejects_development_settings(monkeypatch):
    app_config = get_app_config()
    monkeypatch.setattr(app_config.application, "environment", "production")

    with pytest.raises(StartupSecurityError) as exc_info:
        run_startup_checks()

    message = str(exc_info.value)
    assert "debug is true" in message
    assert "docs_enabled" in message
    assert "localhost" in message


def test_production_with_safe_settings_passes(monkeypatch):
    app_config = get_app_config()
    monkeypatch.setattr(app_config.application, "environment", "production")
    monkeypatch.setattr(app_config.application, "debug", False)
    monkeypatch.setattr(app_config.application, "docs_enabled", False)
    monkeypatch.setattr(app_config.application.cors, "origins", ["https://explorekashmirtours.com"])
    monkeypatch.setattr(app_config.features, "api_detailed_errors", False)

    run_startup_checks()
