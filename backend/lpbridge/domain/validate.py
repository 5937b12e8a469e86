from __future__ import annotations

from collections import defaultdict
from typing import Dict, Set

from lpbridge.core.errors import DomainError, UnknownVariable
from lpbridge.domain.schema import MathProgram, SumTerms, Variable


def validate_program(program: MathProgram) -> None:
    # Unique variable validation (identity, not description)
    declared = _declared_variables(program)

    # Every term must refer to a declared variable
    for c in program.constraints:
        _terms_reference_declared_variables(
            c.lhs, declared, f"Constraint '{c.description}'"
        )
    _terms_reference_declared_variables(
        program.objective.function, declared, "Objective"
    )


def _declared_variables(program: MathProgram) -> Set[Variable]:
    declared = set(program.variables)
    if len(declared) == len(program.variables):
        return declared

    counts: Dict[Variable, int] = defaultdict(int)
    for v in program.variables:
        counts[v] += 1
    dups = sorted(v.description for v, k in counts.items() if k > 1)

    raise DomainError(
        f"Program '{program.name}' declares the same variable more than once: {dups}."
    )


def _terms_reference_declared_variables(
    terms: SumTerms, declared: Set[Variable], owner: str
) -> None:
    for term in terms:
        if term.variable not in declared:
            raise UnknownVariable(
                f"{owner} references variable '{term.variable.description}', "
                f"which is not declared in the program."
            )
