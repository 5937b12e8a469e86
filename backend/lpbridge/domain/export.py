from __future__ import annotations

from lpbridge.domain.result import Solution


def solution_to_string(solution: Solution) -> str:
    lines = [f"Objective value: {solution.objective_value}"]
    for variable in solution.program.variables:
        lines.append(f"{variable.description} = {solution.values[variable]}")
    return "\n".join(lines)
