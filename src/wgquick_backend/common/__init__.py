"""Common utilities and shared functionality."""

from .exceptions import (
    CommandExecutionError,
    ConfigurationError,
    InvalidStateError,
    ProcessError,
    UnsupportedOperationError,
    WgBackendError,
)
from .logging import get_logger, setup_logging
from .shell import RootShell
from .worker import AsyncWorker

__all__ = [
    # Execution
    "RootShell",
    "AsyncWorker",
    # Exceptions
    "WgBackendError",
    "InvalidStateError",
    "CommandExecutionError",
    "UnsupportedOperationError",
    "ProcessError",
    "ConfigurationError",
    # Logging
    "get_logger",
    "setup_logging",
]
