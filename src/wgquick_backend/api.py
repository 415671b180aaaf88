"""High-level API for the wg-quick backend.

Synchronous helpers for scripts that just want a tunnel up or down
without managing an event loop.
"""

import asyncio
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from .backends import WgQuickBackend
from .common.logging import get_logger
from .common.shell import RootShell
from .common.worker import AsyncWorker
from .config import BackendConfig
from .exporter import export_configs
from .models import Tunnel, TunnelState

logger = get_logger(__name__)


def create_backend(
    config: BackendConfig | None = None, worker: AsyncWorker | None = None
) -> WgQuickBackend:
    """Build a WgQuickBackend wired to a RootShell and AsyncWorker.

    Args:
        config: Backend configuration (read from the environment if omitted)
        worker: Worker pool to use (a new one is created if omitted)

    Returns:
        Ready to use backend
    """
    if config is None:
        config = BackendConfig.from_env()
    shell = RootShell(config.privilege_command, timeout=config.command_timeout)
    if worker is None:
        worker = AsyncWorker(max_workers=config.max_workers)
    return WgQuickBackend(config, shell, worker)


@contextmanager
def _backend(config: BackendConfig | None) -> Iterator[WgQuickBackend]:
    if config is None:
        config = BackendConfig.from_env()
    with AsyncWorker(max_workers=config.max_workers) as worker:
        yield create_backend(config, worker)


def list_active_tunnels(config: BackendConfig | None = None) -> set[str]:
    """Return the names of all tunnels that are currently up."""
    with _backend(config) as backend:
        return set(asyncio.run(backend.enumerate()))


def get_tunnel_state(name: str, config: BackendConfig | None = None) -> TunnelState:
    """Return UP or DOWN for the named tunnel."""
    with _backend(config) as backend:
        return asyncio.run(backend.get_state(Tunnel(name=name)))


def set_tunnel_state(
    name: str, state: TunnelState | str, config: BackendConfig | None = None
) -> TunnelState:
    """Bring the named tunnel up or down, or toggle it.

    Args:
        name: Tunnel name
        state: UP, DOWN or TOGGLE (enum or its lower-case value)
        config: Backend configuration

    Returns:
        The state observed after the change

    Example:
        >>> set_tunnel_state("wg0", "up")
        <TunnelState.UP: 'up'>
    """
    with _backend(config) as backend:
        return asyncio.run(backend.set_state(Tunnel(name=name), TunnelState(state)))


def toggle_tunnel(name: str, config: BackendConfig | None = None) -> TunnelState:
    """Invert the named tunnel's current state."""
    return set_tunnel_state(name, TunnelState.TOGGLE, config)


def export_tunnels(
    names: list[str], destination: str | Path, config: BackendConfig | None = None
) -> Path:
    """Zip the config files of the named tunnels into ``destination``."""
    tunnels = [Tunnel(name=name) for name in names]
    with _backend(config) as backend:
        return asyncio.run(
            export_configs(backend.config, backend.worker, tunnels, Path(destination))
        )


@contextmanager
def managed_tunnel(
    name: str, config: BackendConfig | None = None
) -> Iterator[Tunnel]:
    """Context manager that keeps a tunnel up for the duration of the block.

    Args:
        name: Tunnel name
        config: Backend configuration

    Yields:
        Tunnel carrying its observed UP state

    Raises:
        RuntimeError: If the tunnel is not up after wg-quick ran

    Example:
        >>> with managed_tunnel("wg0") as tunnel:
        ...     run_backup()
    """
    with _backend(config) as backend:
        tunnel = Tunnel(name=name)
        observed = asyncio.run(backend.set_state(tunnel, TunnelState.UP))
        if observed != TunnelState.UP:
            raise RuntimeError(f"Failed to bring up tunnel {name}")

        try:
            yield tunnel.with_state(observed)
        finally:
            try:
                asyncio.run(backend.set_state(tunnel, TunnelState.DOWN))
            except Exception as e:
                logger.error("Failed to bring down tunnel", tunnel=name, error=str(e))
