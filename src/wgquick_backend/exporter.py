"""Export tunnel configuration files as a zip archive."""

import os
import zipfile
from collections.abc import Sequence
from pathlib import Path

from .backends.interfaces import AsyncScheduler
from .common.logging import get_logger
from .config import BackendConfig
from .models import Tunnel

logger = get_logger(__name__)

DEFAULT_ARCHIVE_NAME = "wireguard-export.zip"


def write_archive(
    config: BackendConfig, tunnels: Sequence[Tunnel], destination: Path
) -> Path:
    """Write every tunnel's config file into a zip archive.

    Args:
        config: Backend configuration used to locate config files
        tunnels: Tunnels to export
        destination: Archive file, or a directory to place the default
            archive name in

    Returns:
        Path of the written archive

    Raises:
        ValueError: If there are no tunnels to export
        OSError: If a config file cannot be read or the archive written
    """
    if not tunnels:
        raise ValueError("No tunnels to export")

    if destination.is_dir():
        destination = destination / DEFAULT_ARCHIVE_NAME

    try:
        with zipfile.ZipFile(destination, "w", zipfile.ZIP_DEFLATED) as archive:
            for tunnel in tunnels:
                source = config.config_path_for(tunnel.name)
                archive.writestr(f"{tunnel.name}.conf", source.read_bytes())
    except Exception:
        try:
            os.unlink(destination)
        except OSError:
            pass
        raise

    logger.info("Exported tunnel configs", path=str(destination), count=len(tunnels))
    return destination


async def export_configs(
    config: BackendConfig,
    worker: AsyncScheduler,
    tunnels: Sequence[Tunnel],
    destination: Path,
) -> Path:
    """Asynchronous wrapper around :func:`write_archive`."""
    return await worker.run(write_archive, config, tunnels, destination)
