"""Mini README: Centralised configuration for flightaction.

Structure:
    * FlightActionSettings - Pydantic settings model read from the environment.
    * get_settings - cached accessor so validation happens once per process.

Usage:
    Every value can be overridden with a ``FLIGHTACTION_`` prefixed
    environment variable or a ``.env`` file, e.g.
    ``FLIGHTACTION_CHANNEL_PROVIDER=simulated``.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings

LANDED_STATE_CHOICES = ("on_ground", "in_air", "unknown")


class FlightActionSettings(BaseSettings):
    """Runtime configuration for the action service and its channels."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    log_level: str = Field("INFO", description="Root logger level name.")
    channel_provider: str = Field(
        "simulated",
        description="Registry identifier of the device command channel to instantiate.",
    )
    connection_string: Optional[str] = Field(
        None,
        description="Provider specific address, e.g. 'udp://:14540'.",
    )
    simulated_latency_seconds: float = Field(
        0.0,
        description="Artificial acknowledgement delay applied by the simulated channel.",
        ge=0.0,
    )
    simulated_initial_landed_state: str = Field(
        "on_ground",
        description=(
            "Landed state the simulated vehicle reports on connect."
            " 'unknown' keeps it silent until the first state change."
        ),
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the HTTP service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the HTTP service exposes.",
        ge=1,
        le=65535,
    )

    class Config:
        env_prefix = "FLIGHTACTION_"
        env_file = ".env"
        case_sensitive = False

    @validator("log_level")
    def _known_level(cls, value: str) -> str:
        """Reject level names the logging module does not know."""

        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level '{value}'")
        return level

    @validator("simulated_initial_landed_state")
    def _known_landed_state(cls, value: str) -> str:
        state = value.lower()
        if state not in LANDED_STATE_CHOICES:
            raise ValueError(
                f"simulated_initial_landed_state must be one of {', '.join(LANDED_STATE_CHOICES)}"
            )
        return state


@lru_cache()
def get_settings() -> FlightActionSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return FlightActionSettings()
