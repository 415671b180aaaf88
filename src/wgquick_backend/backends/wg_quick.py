"""Tunnel backend driving the wg and wg-quick command line tools."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TypeVar

from ..common.exceptions import (
    CommandExecutionError,
    InvalidStateError,
    ProcessError,
    UnsupportedOperationError,
)
from ..common.logging import get_logger
from ..config import BackendConfig
from ..models import Statistics, Tunnel, TunnelState
from .interfaces import AsyncScheduler, PrivilegedExecutor

logger = get_logger(__name__)

ConfigT = TypeVar("ConfigT")


def resolve_state(current: TunnelState, requested: TunnelState) -> TunnelState:
    """Turn a requested state into the concrete state to apply.

    Args:
        current: Last known state of the tunnel
        requested: State asked for by the caller

    Returns:
        UP or DOWN

    Raises:
        InvalidStateError: If UNKNOWN is requested
    """
    if requested == TunnelState.UNKNOWN:
        raise InvalidStateError("Requested unknown state")
    if requested == TunnelState.TOGGLE:
        return TunnelState.DOWN if current == TunnelState.UP else TunnelState.UP
    return requested


def parse_interfaces(output: list[str]) -> frozenset[str]:
    """Parse ``wg show interfaces`` output.

    wg prints every interface on the first line, separated by spaces.
    """
    if not output:
        return frozenset()
    return frozenset(output[0].split())


class WgQuickBackend:
    """Backend that shells out to wg-quick for every state change.

    No state is cached here: the live interface list reported by
    ``wg show interfaces`` is the only source of truth, and every state
    change is confirmed by querying it again.
    """

    def __init__(
        self,
        config: BackendConfig,
        shell: PrivilegedExecutor,
        worker: AsyncScheduler,
    ):
        self.config = config
        self.shell = shell
        self.worker = worker
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: dict[str, int] = {}

    @asynccontextmanager
    async def _tunnel_lock(self, name: str) -> AsyncIterator[None]:
        """Serialize state changes per tunnel name.

        The lock is dropped once no caller holds or waits for it.
        """
        lock = self._locks.setdefault(name, asyncio.Lock())
        self._lock_users[name] = self._lock_users.get(name, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[name] -= 1
            if self._lock_users[name] == 0:
                del self._lock_users[name]
                del self._locks[name]

    def config_path(self, tunnel: Tunnel) -> Path:
        """Path of the tunnel's config file (assumed FileConfigStore layout)"""
        return self.config.config_path_for(tunnel.name)

    async def enumerate(self) -> frozenset[str]:
        """Return the names of all tunnels whose interfaces are up.

        A failed or empty query yields an empty set rather than an error
        so that callers listing tunnels keep working.
        """
        command = f"{self.config.wg_binary} show interfaces"
        try:
            exit_code, output = await self.worker.run(self.shell.run, command)
        except ProcessError as e:
            logger.warning("Interface query failed", error=str(e))
            return frozenset()

        if exit_code != 0:
            logger.warning("Interface query exited with error", exit_code=exit_code)
            return frozenset()

        return parse_interfaces(output)

    async def get_state(self, tunnel: Tunnel) -> TunnelState:
        """Return UP if the tunnel's interface is listed, DOWN otherwise"""
        logger.debug("Requested state", tunnel=tunnel.name)
        active = await self.enumerate()
        return TunnelState.UP if tunnel.name in active else TunnelState.DOWN

    async def set_state(self, tunnel: Tunnel, state: TunnelState) -> TunnelState:
        """Bring a tunnel up or down, or toggle it.

        Args:
            tunnel: Tunnel to change
            state: UP, DOWN or TOGGLE

        Returns:
            The state observed after the command ran, which may differ
            from the one requested

        Raises:
            InvalidStateError: If UNKNOWN is requested
            CommandExecutionError: If wg-quick exits non-zero
            ProcessError: If wg-quick cannot be run
        """
        logger.debug("Requested state change", tunnel=tunnel.name, state=state.value)
        if state == TunnelState.UNKNOWN:
            raise InvalidStateError("Requested unknown state")

        async with self._tunnel_lock(tunnel.name):
            if tunnel.state.is_observed:
                current = tunnel.state
            else:
                current = await self.get_state(tunnel)

            target = resolve_state(current, state)
            path = self.config_path(tunnel)
            command = f"{self.config.wg_quick_binary} {target.value} '{path}'"

            exit_code, _ = await self.worker.run(self.shell.run, command)
            if exit_code != 0:
                logger.error(
                    "wg-quick failed",
                    tunnel=tunnel.name,
                    state=target.value,
                    exit_code=exit_code,
                )
                raise CommandExecutionError(command, exit_code)

            observed = await self.get_state(tunnel)

        if observed != target:
            logger.warning(
                "Tunnel did not reach requested state",
                tunnel=tunnel.name,
                requested=target.value,
                observed=observed.value,
            )
        else:
            logger.info("Tunnel state changed", tunnel=tunnel.name, state=observed.value)
        return observed

    async def apply_config(self, tunnel: Tunnel, config: ConfigT) -> ConfigT:
        """Accept a new configuration for a tunnel.

        Stub: nothing is written or applied; the configuration is returned
        unchanged. Running tunnels cannot be reconfigured.

        Raises:
            UnsupportedOperationError: If the tunnel is known to be UP
        """
        if tunnel.state == TunnelState.UP:
            raise UnsupportedOperationError(
                f"Cannot apply configuration to running tunnel {tunnel.name}"
            )
        return config

    async def get_statistics(self, tunnel: Tunnel) -> Statistics:
        """Stub: always an empty snapshot"""
        return Statistics()
