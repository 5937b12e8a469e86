from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from lpbridge.core.errors import NoSolution, UnknownVariable
from lpbridge.domain.configuration import Configuration
from lpbridge.domain.schema import MathProgram, Variable


class ResultStatus(str, Enum):
    OPTIMAL = "optimal"
    INFEASIBLE = "infeasible"
    UNBOUNDED = "unbounded"


@dataclass(frozen=True)
class ComputationTime:
    wall_time: timedelta

    @classmethod
    def of_wall_time(cls, wall_time: timedelta) -> "ComputationTime":
        return cls(wall_time=wall_time)


@dataclass(frozen=True)
class Solution:
    program: MathProgram
    objective_value: float
    values: Mapping[Variable, float]

    @classmethod
    def of(
        cls,
        program: MathProgram,
        objective_value: float,
        values: Mapping[Variable, float],
    ) -> "Solution":
        """Build a solution, checking it assigns exactly the program's variables."""
        missing = [v.description for v in program.variables if v not in values]
        if missing:
            raise ValueError(f"Solution has no value for variables: {missing}")
        declared = set(program.variables)
        extra = [v.description for v in values if v not in declared]
        if extra:
            raise ValueError(f"Solution assigns variables outside the program: {extra}")

        # Re-key in program order so iteration matches the declared variables.
        ordered = {v: float(values[v]) for v in program.variables}
        return cls(
            program=program,
            objective_value=float(objective_value),
            values=MappingProxyType(ordered),
        )

    def value(self, variable: Variable) -> float:
        try:
            return self.values[variable]
        except KeyError:
            raise UnknownVariable(
                f"Variable '{variable.description}' is not part of this solution."
            ) from None


@dataclass(frozen=True)
class Result:
    status: ResultStatus
    time: ComputationTime
    configuration: Configuration
    solution: Optional[Solution] = None

    def __post_init__(self) -> None:
        if self.status == ResultStatus.OPTIMAL and self.solution is None:
            raise ValueError("An optimal result must carry a solution.")
        if self.status != ResultStatus.OPTIMAL and self.solution is not None:
            raise ValueError(f"A {self.status.value} result cannot carry a solution.")

    @classmethod
    def with_solution(
        cls,
        status: ResultStatus,
        time: ComputationTime,
        configuration: Configuration,
        solution: Solution,
    ) -> "Result":
        return cls(status=status, time=time, configuration=configuration, solution=solution)

    @classmethod
    def no_solution(
        cls, status: ResultStatus, time: ComputationTime, configuration: Configuration
    ) -> "Result":
        return cls(status=status, time=time, configuration=configuration)

    def require_solution(self) -> Solution:
        if self.solution is None:
            raise NoSolution(f"Result is {self.status.value}; no solution available.")
        return self.solution
