"""Custom exceptions for the wg-quick backend."""


class WgBackendError(Exception):
    """Base exception for all wg-quick backend errors."""
    pass


class InvalidStateError(WgBackendError, ValueError):
    """Raised when a tunnel state cannot be requested (e.g. UNKNOWN)."""
    pass


class CommandExecutionError(WgBackendError):
    """Raised when a privileged command exits with a non-zero status."""

    def __init__(self, command: str, exit_code: int):
        self.command = command
        self.exit_code = exit_code
        super().__init__(f"Command failed with exit code {exit_code}: {command}")


class UnsupportedOperationError(WgBackendError, NotImplementedError):
    """Raised when the backend cannot perform an operation in the current state."""
    pass


class ProcessError(WgBackendError):
    """Raised when a privileged command cannot be launched or finished."""
    pass


class ConfigurationError(WgBackendError):
    """Raised when backend configuration is invalid."""
    pass
