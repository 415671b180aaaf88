"""Tunnel models using Pydantic for type safety and validation."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# Linux limits interface names to 15 bytes
TUNNEL_NAME_PATTERN = r"^[a-zA-Z0-9_=+.-]{1,15}$"


class TunnelState(str, Enum):
    """Tunnel state enumeration.

    TOGGLE and UNKNOWN may be requested or cached, but the backend only
    ever reports DOWN or UP as an observed state.
    """

    DOWN = "down"
    UP = "up"
    TOGGLE = "toggle"
    UNKNOWN = "unknown"

    @property
    def is_observed(self) -> bool:
        """Whether this value can come out of a live query."""
        return self in (TunnelState.DOWN, TunnelState.UP)


class Tunnel(BaseModel):
    """A named tunnel with its last known state (immutable)."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        pattern=TUNNEL_NAME_PATTERN,
        description="Tunnel name, equal to the wg interface name",
    )
    state: TunnelState = Field(
        default=TunnelState.UNKNOWN, description="Last known state"
    )

    def with_state(self, state: TunnelState) -> "Tunnel":
        """Create new tunnel instance with updated state.

        Args:
            state: New last known state

        Returns:
            New tunnel instance
        """
        return self.model_copy(update={"state": state})


class Statistics(BaseModel):
    """Per-tunnel transfer statistics.

    Placeholder: no counters are collected yet.
    """

    model_config = ConfigDict(frozen=True)
