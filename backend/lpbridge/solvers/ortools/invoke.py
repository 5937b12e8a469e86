from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import timedelta

from lpbridge.domain.configuration import Configuration
from lpbridge.solvers.ortools.encode import EncodedModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Invocation:
    raw_status: int
    elapsed: timedelta  # measured around Solve() with a monotonic clock
    engine_wall_time: timedelta  # engine-reported, since the engine was created


def time_limit_ms(limit: timedelta) -> int:
    # OR-Tools reads a zero limit as "no limit", so round up to the smallest real one.
    return max(1, int(limit / timedelta(milliseconds=1)))


def invoke(encoded: EncodedModel, configuration: Configuration) -> Invocation:
    s = encoded.solver

    if configuration.max_wall_time is not None:
        s.SetTimeLimit(time_limit_ms(configuration.max_wall_time))

    start = time.monotonic_ns()
    raw_status = s.Solve()
    length_ns = time.monotonic_ns() - start

    invocation = Invocation(
        raw_status=raw_status,
        elapsed=timedelta(microseconds=length_ns / 1_000),
        engine_wall_time=timedelta(milliseconds=s.wall_time()),
    )
    _check_wall_time(invocation)
    return invocation


def _check_wall_time(invocation: Invocation) -> None:
    """Diagnostic only: the engine's clock started before ours, so it should not be behind."""
    slack = timedelta(milliseconds=1)  # engine reports whole milliseconds
    if invocation.elapsed > invocation.engine_wall_time + slack:
        logger.warning(
            "Measured solve time exceeds engine-reported wall time",
            extra={
                "elapsed_ms": invocation.elapsed / timedelta(milliseconds=1),
                "engine_wall_time_ms": invocation.engine_wall_time / timedelta(milliseconds=1),
            },
        )
