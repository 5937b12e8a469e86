from __future__ import annotations

from typing import Dict, Optional

from lpbridge.core.errors import InternalInvariantViolation, SolverDidNotConverge
from lpbridge.domain.configuration import Configuration
from lpbridge.domain.result import ComputationTime, Result, ResultStatus, Solution
from lpbridge.domain.schema import MathProgram, Variable
from lpbridge.solvers.ortools.encode import EncodedModel, VariableMap
from lpbridge.solvers.ortools.engine import EngineStatus
from lpbridge.solvers.ortools.invoke import Invocation

# Every engine status, with None marking "no definitive verdict".
STATUS_TABLE: Dict[EngineStatus, Optional[ResultStatus]] = {
    EngineStatus.OPTIMAL: ResultStatus.OPTIMAL,
    EngineStatus.INFEASIBLE: ResultStatus.INFEASIBLE,
    EngineStatus.UNBOUNDED: ResultStatus.UNBOUNDED,
    EngineStatus.FEASIBLE: None,
    EngineStatus.NOT_SOLVED: None,
    EngineStatus.ABNORMAL: None,
    EngineStatus.MODEL_INVALID: None,
}


def decode_status(raw_status: int) -> ResultStatus:
    try:
        status = EngineStatus(raw_status)
    except ValueError:
        raise InternalInvariantViolation(
            f"Unknown solver status: {raw_status}", raw_status=raw_status
        ) from None

    decoded = STATUS_TABLE[status]
    if decoded is None:
        raise SolverDidNotConverge(_status_message(status), raw_status=status)
    return decoded


def _status_message(status: EngineStatus) -> str:
    if status == EngineStatus.FEASIBLE:
        return "Solver stopped with a feasible solution but no proof of optimality (time limit?)."
    if status == EngineStatus.NOT_SOLVED:
        return "Model not solved (solver did not run or stopped early)."
    if status == EngineStatus.ABNORMAL:
        return "Solver ended abnormally."
    if status == EngineStatus.MODEL_INVALID:
        return "Model is invalid (NaN/Inf coefficients or malformed constraints)."
    return f"Solver status {status.name} carries no verdict."


def decode_result(
    program: MathProgram,
    encoded: EncodedModel,
    invocation: Invocation,
    configuration: Configuration,
) -> Result:
    status = decode_status(invocation.raw_status)
    time = ComputationTime.of_wall_time(invocation.elapsed)

    if status != ResultStatus.OPTIMAL:
        return Result.no_solution(status, time, configuration)

    values = extract_values(encoded.variables)
    objective_value = encoded.solver.Objective().Value()
    solution = Solution.of(program, objective_value, values)
    return Result.with_solution(status, time, configuration, solution)


def extract_values(variables: VariableMap) -> Dict[Variable, float]:
    return {v: engine_var.solution_value() for v, engine_var in variables.items()}
