"""Tunnel state backends."""

from .interfaces import AsyncScheduler, Backend, PrivilegedExecutor
from .wg_quick import WgQuickBackend, parse_interfaces, resolve_state

__all__ = [
    "AsyncScheduler",
    "Backend",
    "PrivilegedExecutor",
    "WgQuickBackend",
    "parse_interfaces",
    "resolve_state",
]
