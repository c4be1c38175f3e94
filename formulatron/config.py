"""
Runtime settings for the calculator engine and the API server.
"""

import os

from pydantic import BaseModel, Field


ENV_SIGNIFICANT_DIGITS = "FORMULATRON_SIGNIFICANT_DIGITS"


class EngineSettings(BaseModel):
    """
    Display settings used by the recalculation engine.

    The mantissa shown for every derived variable is rounded to
    ``significant_digits`` so repeated passes do not make the display flicker.
    """
    significant_digits: int = Field(
        default=5,
        ge=1,
        le=15,
        description="Significant digits kept in a derived mantissa",
    )
    start_marker: str = Field(default="⭐", description="Marker for the first variable in the chain")
    end_marker: str = Field(default="➡️", description="Marker for the last variable in the chain")

    @classmethod
    def from_env(cls) -> "EngineSettings":
        """Build settings, overriding precision from the environment if set."""
        raw = os.environ.get(ENV_SIGNIFICANT_DIGITS)
        if raw is None:
            return cls()
        return cls(significant_digits=int(raw))


class ServerSettings(BaseModel):
    """Defaults for ``formulatron serve``."""
    host: str = Field(default="127.0.0.1", description="Host to bind to")
    port: int = Field(default=8000, gt=0, lt=65536, description="Port to listen on")
    reload: bool = Field(default=False, description="Enable auto-reload for development")
    max_sessions: int = Field(default=1000, gt=0, description="Sessions kept in memory before the oldest is evicted")
