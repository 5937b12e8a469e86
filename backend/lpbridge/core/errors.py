from __future__ import annotations

from typing import Optional


class DomainError(ValueError):
    """Invalid program in a domain sense (duplicate variables, bad bounds, etc.)."""


class SolverError(RuntimeError):
    """Base class for failures raised by a solver binding."""


class UnsupportedConfiguration(SolverError):
    """A configuration option cannot be honored by this engine binding."""


class UnknownVariable(SolverError):
    """A constraint, objective or lookup refers to a variable the program does not declare.

    This is a programming error (inconsistent input model), not an engine failure.
    """


class SolverDidNotConverge(SolverError):
    """The engine stopped without an optimal, infeasible or unbounded verdict."""

    def __init__(self, message: str, raw_status: Optional[int] = None) -> None:
        super().__init__(message)
        self.raw_status = raw_status


class InternalInvariantViolation(SolverError):
    """The engine reported something the binding does not know about (version mismatch)."""

    def __init__(self, message: str, raw_status: Optional[int] = None) -> None:
        super().__init__(message)
        self.raw_status = raw_status


class EngineUnavailable(SolverError):
    """The native engine (or one of its backends) cannot be loaded."""


class NoSolution(LookupError):
    """Raised when reading solution values from a result that has none."""
