"""
Logging Setup.

structlog over the stdlib logging tree, configured from
config/settings/logging.yaml (see LoggingSchema). Every module gets its
logger from get_logger(); nothing configures handlers on its own.

Records carry timestamp, level, logger, event, func_name and lineno.
HTTP requests bind request_id and source through the request context
middleware; CLI code passes source explicitly via log_with_source().

Usage:
    logger = get_logger(__name__)
    logger.info("Booking created", extra={"reference": "EKT-1A2B3C4D"})

    log_with_source(logger, "cli", "info", "Catalog seeded", tours=12)
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Any

import structlog
from structlog.typing import Processor

from kashmir_tours.backend.core.config import find_project_root, get_app_config

# Values accepted for the `source` field. Anything else is logged as "unknown".
LOG_SOURCES = frozenset({"web", "mobile", "cli", "api", "internal"})

# Libraries that are too chatty at INFO.
_QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite")


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
    ]


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    enable_console: bool | None = None,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Configure structlog and the root logger.

    Arguments left as None fall back to logging.yaml.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        format_type: 'console' for coloured output, 'json' for JSON lines
        enable_console: Write to stdout
        enable_file_logging: Write JSON lines to the rotating file handler
    """
    config = get_app_config().logging
    handlers = config.handlers

    level = level or config.level
    format_type = format_type or config.format
    if enable_console is None:
        enable_console = handlers.console.enabled
    if enable_file_logging is None:
        enable_file_logging = handlers.file.enabled

    processors = _shared_processors()
    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    json_formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=processors,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        if format_type == "console":
            console_handler.setFormatter(structlog.stdlib.ProcessorFormatter(
                processor=structlog.dev.ConsoleRenderer(colors=True),
                foreign_pre_chain=processors,
            ))
        else:
            console_handler.setFormatter(json_formatter)
        root_logger.addHandler(console_handler)

    if enable_file_logging:
        log_path = find_project_root() / handlers.file.path
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=str(log_path),
            maxBytes=handlers.file.max_bytes,
            backupCount=handlers.file.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(json_formatter)
        root_logger.addHandler(file_handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Return the structlog logger for a module, usually get_logger(__name__)."""
    return structlog.get_logger(name)


def log_with_source(logger: Any, source: str, level: str, message: str, **kwargs: Any) -> None:
    """
    Log with an explicit `source` field, for code outside a request.

    Raises:
        AttributeError: If level is not a log method name
    """
    if source not in LOG_SOURCES:
        source = "unknown"
    getattr(logger, level.lower())(message, source=source, **kwargs)
