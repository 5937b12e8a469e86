"""Solver-agnostic interface implemented by every engine binding."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Union

from lpbridge.domain.builder import ProgramBuilder
from lpbridge.domain.configuration import Configuration
from lpbridge.domain.result import Result
from lpbridge.domain.schema import MathProgram


class Solver(ABC):
    """Abstract base class for solver adapters.

    An adapter owns mutable state for the duration of one ``solve`` call and
    must not be shared between concurrent callers.
    """

    @abstractmethod
    def set_configuration(self, configuration: Configuration) -> None:
        """Validate and store the configuration used by the next ``solve``.

        Raises:
            UnsupportedConfiguration: if the engine cannot honor an option.
        """
        raise NotImplementedError

    @abstractmethod
    def solve(self, program: Union[MathProgram, ProgramBuilder]) -> Result:
        """Solve the program, blocking until the engine returns.

        Raises:
            UnknownVariable: the program references undeclared variables.
            SolverDidNotConverge: the engine gave no definitive verdict.
            InternalInvariantViolation: the engine returned an unknown status.
        """
        raise NotImplementedError
