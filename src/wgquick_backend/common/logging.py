"""Centralized logging configuration using structlog.

Importing the package does not touch logging; applications that want the
backend's console or JSON output call :func:`setup_logging` themselves.
"""

import logging
import sys

import structlog
from structlog.typing import Processor

# Marks handlers installed here so re-running setup only replaces our own
_HANDLER_ATTR = "_wgquick_backend_handler"


def _install(root_logger: logging.Logger, handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_ATTR, True)
    root_logger.addHandler(handler)


def setup_logging(
    level: str = "INFO",
    json_format: bool = False,
    log_file: str | None = None,
) -> None:
    """Configure structured logging for the backend.

    Handlers added by earlier calls are replaced; handlers installed by
    the application are left alone.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: If True, output JSON formatted logs
        log_file: Optional file path to write logs to
    """
    log_level = getattr(logging, level.upper())

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        if getattr(handler, _HANDLER_ATTR, False):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(log_level)

    # stderr, so wg output relayed on stdout is not mixed with log lines
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    _install(root_logger, console_handler)

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]
    processors.append(
        structlog.processors.JSONRenderer()
        if json_format
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        _install(root_logger, file_handler)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger for a backend module (usually ``__name__``)."""
    return structlog.get_logger(name)  # type: ignore[no-any-return]
