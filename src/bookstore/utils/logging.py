"""Logging configuration for the bookstore.

stdlib handlers carry the output (console plus rotating files under ``logs/``);
structlog sits in front of them and renders key/value events. Production and
staging render JSON, every other environment renders for a terminal.

Values bound with :func:`add_context` (the HTTP layer binds ``request_id``)
are merged into every event logged afterwards in the same context.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

LOG_DIR = Path("logs")
LOG_FILE = "bookstore.log"
ERROR_LOG_FILE = "bookstore_error.log"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

ENVIRONMENT_LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}
JSON_ENVIRONMENTS = ("production", "staging")

# Third-party loggers held above the application level
QUIET_LOGGERS = {
    "urllib3": logging.WARNING,
    "asyncio": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "passlib": logging.ERROR,
}


def current_environment() -> str:
    """Name of the running environment, lower-cased."""
    for variable in ("ENV", "ENVIRONMENT", "PROTEAN_ENV"):
        if os.getenv(variable):
            return os.environ[variable].lower()
    return "development"


def get_log_level() -> str:
    """``LOG_LEVEL`` when set, otherwise the level of the current environment."""
    default = ENVIRONMENT_LEVELS.get(current_environment(), "INFO")
    return os.getenv("LOG_LEVEL", default).upper()


def _rotating_handler(filename: str, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=LOG_DIR / filename,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging() -> None:
    """Route the root logger to stdout, the main log file and the error log file."""
    level = get_log_level()
    LOG_DIR.mkdir(exist_ok=True)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [
        console,
        _rotating_handler(LOG_FILE, level),
        _rotating_handler(ERROR_LOG_FILE, logging.ERROR),
    ]

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)


def _renderer():
    if current_environment() in JSON_ENVIRONMENTS:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def setup_structlog() -> None:
    """Install the structlog processor chain in front of stdlib logging."""
    callsite = structlog.processors.CallsiteParameterAdder(
        parameters=[
            structlog.processors.CallsiteParameter.FILENAME,
            structlog.processors.CallsiteParameter.LINENO,
            structlog.processors.CallsiteParameter.FUNC_NAME,
        ]
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            callsite,
            _renderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging() -> None:
    setup_stdlib_logging()
    setup_structlog()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Bind values that every later log event in this context will carry."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
