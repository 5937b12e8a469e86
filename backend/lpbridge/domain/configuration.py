from __future__ import annotations

from datetime import timedelta
from typing import Optional

from pydantic import field_validator

from lpbridge.core.settings import get_settings
from lpbridge.domain.schema import StrictBaseModel


class Configuration(StrictBaseModel):
    """Options a caller may request from a solver.

    ``None`` for a time limit means unbounded.
    """

    force_deterministic: bool = False
    max_wall_time: Optional[timedelta] = None
    max_cpu_time: Optional[timedelta] = None

    @field_validator("max_wall_time", "max_cpu_time")
    @classmethod
    def _non_negative(cls, v: Optional[timedelta]) -> Optional[timedelta]:
        if v is not None and v < timedelta(0):
            raise ValueError("Time limits must be non-negative.")
        return v

    @property
    def is_wall_time_bounded(self) -> bool:
        return self.max_wall_time is not None

    @property
    def is_cpu_time_bounded(self) -> bool:
        return self.max_cpu_time is not None

    @classmethod
    def default(cls) -> "Configuration":
        return cls(max_wall_time=get_settings().max_wall_time)
