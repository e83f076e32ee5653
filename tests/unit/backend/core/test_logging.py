"""
Unit Tests for Logging Setup.
"""

import json
import logging
from unittest.mock import MagicMock

import pytest

from kashmir_tours.backend.core import logging as app_logging
from kashmir_tours.backend.core.logging import get_logger, log_with_source, setup_logging


@pytest.fixture
def root_logger():
    """Restore the root logger after a test reconfigures it."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestLogWithSource:
    def test_passes_source_and_fields(self):
        logger = MagicMock()

        log_with_source(logger, "cli", "WARNING", "Catalog seeded", tours=12)

        logger.warning.assert_called_once_with("Catalog seeded", source="cli", tours=12)

    def test_unrecognised_source(self):
        logger = MagicMock()

        log_with_source(logger, "cron", "info", "Nightly run")

        logger.info.assert_called_once_with("Nightly run", source="unknown")


class TestSetupLogging:
    def test_defaults_come_from_logging_yaml(self, root_logger):
        setup_logging(enable_console=False, enable_file_logging=False)

        assert root_logger.level == logging.INFO
        assert root_logger.handlers == []
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    def test_file_handler_writes_json_lines(self, root_logger, tmp_path, monkeypatch):
        monkeypatch.setattr(app_logging, "find_project_root", lambda: tmp_path)

        setup_logging(level="DEBUG", enable_console=False, enable_file_logging=True)
        get_logger("kashmir_tours.tests.logging").info("Booking created", reference="EKT-1A2B3C4D")
        for handler in root_logger.handlers:
            handler.flush()

        lines = (tmp_path / "logs" / "system.jsonl").read_text(encoding="utf-8").splitlines()
        record = json.loads(lines[-1])
        assert record["event"] == "Booking created"
        assert record["reference"] == "EKT-1A2B3C4D"
        assert record["level"] == "info"
        assert record["logger"] == "kashmir_tours.tests.logging"
