"""Backend configuration using Pydantic for validation."""

import os
import tempfile
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .common.exceptions import ConfigurationError
from .common.logging import get_logger

logger = get_logger(__name__)

ENV_PREFIX = "WG_BACKEND_"


def _default_files_dir() -> Path:
    return Path(tempfile.gettempdir()) / "wgquick-backend"


class BackendConfig(BaseModel):
    """Configuration for the wg-quick backend and its privileged shell."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra="forbid",
    )

    files_dir: Path = Field(
        default_factory=_default_files_dir,
        description="Private directory holding <tunnel>.conf files",
    )
    wg_binary: str = Field(default="wg", min_length=1, description="wg tool")
    wg_quick_binary: str = Field(
        default="wg-quick", min_length=1, description="wg-quick tool"
    )
    privilege_command: list[str] = Field(
        default_factory=lambda: ["sudo", "-n"],
        description="Prefix used to elevate commands; empty when already root",
    )
    command_timeout: float = Field(
        default=30.0, ge=0.1, le=300.0, description="Per-command timeout in seconds"
    )
    max_workers: int = Field(
        default=4, ge=1, le=32, description="Worker threads for blocking commands"
    )

    @field_validator("files_dir")
    @classmethod
    def validate_files_dir(cls, v: Path) -> Path:
        """Config paths are single-quoted on the command line."""
        if "'" in str(v):
            raise ValueError("files_dir must not contain single quotes")
        return v.absolute()

    @field_validator("wg_binary", "wg_quick_binary")
    @classmethod
    def validate_binary(cls, v: str) -> str:
        if any(ch.isspace() for ch in v):
            raise ValueError("Binary name must not contain whitespace")
        return v

    def config_path_for(self, tunnel_name: str) -> Path:
        """Return the conventional config file path for a tunnel.

        The file is assumed to exist; it is never checked or written here.
        """
        return self.files_dir / f"{tunnel_name}.conf"

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "BackendConfig":
        """Build configuration from ``WG_BACKEND_*`` environment variables.

        Recognised variables: ``WG_BACKEND_FILES_DIR``, ``WG_BACKEND_WG_BINARY``,
        ``WG_BACKEND_WG_QUICK_BINARY``, ``WG_BACKEND_PRIVILEGE_COMMAND``
        (space-separated, empty for none), ``WG_BACKEND_COMMAND_TIMEOUT`` and
        ``WG_BACKEND_MAX_WORKERS``.

        Raises:
            ConfigurationError: If any value fails validation
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}

        for field_name in cls.model_fields:
            key = ENV_PREFIX + field_name.upper()
            if key not in env:
                continue
            raw = env[key]
            if field_name == "privilege_command":
                values[field_name] = raw.split()
            else:
                values[field_name] = raw

        try:
            config = cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid backend configuration: {e}") from e

        logger.debug("Backend configuration loaded", **config.model_dump(mode="json"))
        return config
