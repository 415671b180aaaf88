"""Protocol interfaces for the backend and its collaborators."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, TypeVar

if TYPE_CHECKING:
    from ..models import Statistics, Tunnel, TunnelState

ConfigT = TypeVar("ConfigT")


class PrivilegedExecutor(Protocol):
    """Runs a command line with elevated privileges."""

    def run(self, command: str) -> tuple[int, list[str]]:
        """Return the exit code and captured stdout lines."""
        ...


class AsyncScheduler(Protocol):
    """Runs blocking work asynchronously."""

    async def run(self, func: Any, *args: Any, **kwargs: Any) -> Any:
        """Run ``func`` off the event loop and return its result."""
        ...


class Backend(Protocol):
    """Tunnel state backend operations."""

    async def enumerate(self) -> frozenset[str]:
        """Names of currently active tunnels."""
        ...

    async def get_state(self, tunnel: Tunnel) -> TunnelState:
        """Observed state of a tunnel."""
        ...

    async def set_state(self, tunnel: Tunnel, state: TunnelState) -> TunnelState:
        """Transition a tunnel and return the observed result."""
        ...

    async def apply_config(self, tunnel: Tunnel, config: ConfigT) -> ConfigT:
        """Apply a new configuration to a tunnel."""
        ...

    async def get_statistics(self, tunnel: Tunnel) -> Statistics:
        """Transfer statistics for a tunnel."""
        ...
