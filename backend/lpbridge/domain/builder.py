from __future__ import annotations

from typing import Dict, List

from lpbridge.domain.schema import Constraint, MathProgram, Objective, SumTerms, Variable


class ProgramBuilder:
    """Mutable accumulator for a MathProgram.

    Variables referenced by a constraint or the objective are declared
    automatically, in order of first appearance.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._variables: Dict[Variable, None] = {}
        self._constraints: List[Constraint] = []
        self._objective = Objective.zero()

    def add_variable(self, variable: Variable) -> bool:
        """Declare a variable. Returns False if it was already declared."""
        if variable in self._variables:
            return False
        self._variables[variable] = None
        return True

    def add_constraint(self, constraint: Constraint) -> "ProgramBuilder":
        self._declare_terms(constraint.lhs)
        self._constraints.append(constraint)
        return self

    def set_objective(self, objective: Objective) -> "ProgramBuilder":
        self._declare_terms(objective.function)
        self._objective = objective
        return self

    @property
    def variables(self) -> List[Variable]:
        return list(self._variables)

    @property
    def constraints(self) -> List[Constraint]:
        return list(self._constraints)

    @property
    def objective(self) -> Objective:
        return self._objective

    def build(self) -> MathProgram:
        return MathProgram(
            name=self.name,
            variables=tuple(self._variables),
            constraints=tuple(self._constraints),
            objective=self._objective,
        )

    def _declare_terms(self, terms: SumTerms) -> None:
        for term in terms:
            self.add_variable(term.variable)
