from __future__ import annotations

import logging
from typing import Optional, Union

from lpbridge.core.errors import UnsupportedConfiguration
from lpbridge.domain.builder import ProgramBuilder
from lpbridge.domain.configuration import Configuration
from lpbridge.domain.export import solution_to_string
from lpbridge.domain.result import Result
from lpbridge.domain.schema import MathProgram
from lpbridge.domain.validate import validate_program
from lpbridge.solvers.base import Solver
from lpbridge.solvers.ortools.decode import decode_result
from lpbridge.solvers.ortools.encode import encode_program
from lpbridge.solvers.ortools.engine import load_engine
from lpbridge.solvers.ortools.invoke import invoke

logger = logging.getLogger(__name__)


def check_configuration(configuration: Configuration) -> None:
    if configuration.force_deterministic:
        raise UnsupportedConfiguration(
            "OR-Tools linear solver does not expose a determinism guarantee."
        )
    if configuration.is_cpu_time_bounded:
        raise UnsupportedConfiguration(
            "OR-Tools linear solver supports wall-time limits only, not CPU-time limits."
        )


class OrToolsSolver(Solver):
    """Solves a MathProgram with OR-Tools (GLOP for LP, CBC for MIP).

    Every call to ``solve`` builds a fresh engine and variable map; nothing
    but the configuration survives between calls.
    """

    def __init__(self, configuration: Optional[Configuration] = None) -> None:
        self._configuration = Configuration.default()
        if configuration is not None:
            self.set_configuration(configuration)

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    def set_configuration(self, configuration: Configuration) -> None:
        check_configuration(configuration)
        self._configuration = configuration

    def solve(self, program: Union[MathProgram, ProgramBuilder]) -> Result:
        if isinstance(program, ProgramBuilder):
            program = program.build()
        configuration = self._configuration

        load_engine()
        validate_program(program)

        logger.info(
            "Solving program",
            extra={
                "program": program.name,
                "variable_count": len(program.variables),
                "constraint_count": len(program.constraints),
            },
        )

        encoded = encode_program(program)
        invocation = invoke(encoded, configuration)
        result = decode_result(program, encoded, invocation, configuration)

        logger.info(
            "Solved program",
            extra={
                "program": program.name,
                "status": result.status.value,
                "problem_type": encoded.problem_type.value,
                "wall_time_ms": result.time.wall_time.total_seconds() * 1000,
            },
        )
        if result.solution is not None and logger.isEnabledFor(logging.DEBUG):
            logger.debug("Solution obtained:\n%s", solution_to_string(result.solution))
        return result


def solve_program(
    program: Union[MathProgram, ProgramBuilder],
    configuration: Optional[Configuration] = None,
) -> Result:
    return OrToolsSolver(configuration).solve(program)
