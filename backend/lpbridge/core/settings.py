from __future__ import annotations

from datetime import timedelta
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SolverSettings(BaseSettings):
    """Process-wide solver defaults, read from ``LPBRIDGE_*`` environment variables."""

    # Wall-clock limit applied when a solver is built without an explicit configuration.
    MAX_WALL_TIME_SECONDS: Optional[float] = Field(default=None, ge=0)

    model_config = SettingsConfigDict(
        env_prefix="LPBRIDGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def max_wall_time(self) -> Optional[timedelta]:
        if self.MAX_WALL_TIME_SECONDS is None:
            return None
        return timedelta(seconds=self.MAX_WALL_TIME_SECONDS)


def get_settings() -> SolverSettings:
    # Not cached: the environment is re-read so a long-lived process picks up changes.
    return SolverSettings()
