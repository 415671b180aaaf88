"""wg-quick backend - drive WireGuard tunnels through wg-quick."""

from .api import (
    create_backend,
    export_tunnels,
    get_tunnel_state,
    list_active_tunnels,
    managed_tunnel,
    set_tunnel_state,
    toggle_tunnel,
)
from .backends import (
    AsyncScheduler,
    Backend,
    PrivilegedExecutor,
    WgQuickBackend,
    parse_interfaces,
    resolve_state,
)
from .common.exceptions import (
    CommandExecutionError,
    ConfigurationError,
    InvalidStateError,
    ProcessError,
    UnsupportedOperationError,
    WgBackendError,
)
from .common.logging import get_logger, setup_logging
from .common.shell import RootShell
from .common.worker import AsyncWorker
from .config import BackendConfig
from .exporter import export_configs, write_archive
from .models import Statistics, Tunnel, TunnelState

logger = get_logger(__name__)

__version__ = "0.1.0"


__all__ = [
    # High-level API
    "create_backend",
    "list_active_tunnels",
    "get_tunnel_state",
    "set_tunnel_state",
    "toggle_tunnel",
    "export_tunnels",
    "managed_tunnel",
    # Backend
    "Backend",
    "WgQuickBackend",
    "resolve_state",
    "parse_interfaces",
    "PrivilegedExecutor",
    "AsyncScheduler",
    "RootShell",
    "AsyncWorker",
    "BackendConfig",
    # Models
    "Tunnel",
    "TunnelState",
    "Statistics",
    # Export
    "export_configs",
    "write_archive",
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
