from __future__ import annotations

import functools
import logging
from enum import Enum, IntEnum

import ortools
from ortools.linear_solver import pywraplp

from lpbridge.core.errors import EngineUnavailable

logger = logging.getLogger(__name__)


class EngineStatus(IntEnum):
    """Termination codes returned by ``pywraplp.Solver.Solve``."""

    OPTIMAL = pywraplp.Solver.OPTIMAL
    FEASIBLE = pywraplp.Solver.FEASIBLE
    INFEASIBLE = pywraplp.Solver.INFEASIBLE
    UNBOUNDED = pywraplp.Solver.UNBOUNDED
    ABNORMAL = pywraplp.Solver.ABNORMAL
    MODEL_INVALID = pywraplp.Solver.MODEL_INVALID
    NOT_SOLVED = pywraplp.Solver.NOT_SOLVED


class ProblemType(str, Enum):
    LINEAR = "GLOP"
    MIXED_INTEGER = "CBC"

    @property
    def native(self) -> int:
        return _NATIVE_PROBLEM_TYPES[self]


_NATIVE_PROBLEM_TYPES = {
    ProblemType.LINEAR: pywraplp.Solver.GLOP_LINEAR_PROGRAMMING,
    ProblemType.MIXED_INTEGER: pywraplp.Solver.CBC_MIXED_INTEGER_PROGRAMMING,
}


@functools.lru_cache(maxsize=None)
def load_engine() -> str:
    """One-time check that the native OR-Tools backends are usable.

    Returns the OR-Tools version. Failures are not cached, so a later call
    retries.
    """
    missing = [
        pt.value for pt in ProblemType if not pywraplp.Solver.SupportsProblemType(pt.native)
    ]
    if missing:
        raise EngineUnavailable(
            f"OR-Tools {ortools.__version__} was built without solver backends: {missing}."
        )

    logger.info(
        "Loaded OR-Tools linear solver",
        extra={"ortools_version": ortools.__version__},
    )
    return ortools.__version__


def create_engine(name: str, problem_type: ProblemType) -> pywraplp.Solver:
    return pywraplp.Solver(name, problem_type.native)
