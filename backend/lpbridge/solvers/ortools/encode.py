from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple

from ortools.linear_solver import pywraplp

from lpbridge.core.errors import DomainError, InternalInvariantViolation, UnknownVariable
from lpbridge.domain.schema import (
    ComparisonOperator,
    Constraint,
    MathProgram,
    Objective,
    Sense,
    SumTerms,
    Variable,
    VariableKind,
)
from lpbridge.solvers.ortools.engine import ProblemType, create_engine

logger = logging.getLogger(__name__)


class VariableMap:
    """One-to-one map between program variables and engine variables.

    Engine variables are keyed by their column index, so lookups are O(1) in
    both directions. Iteration follows encoding order.
    """

    def __init__(self) -> None:
        self._to_engine: Dict[Variable, pywraplp.Variable] = {}
        self._from_engine: Dict[int, Variable] = {}

    def put(self, variable: Variable, engine_var: pywraplp.Variable) -> None:
        if variable in self._to_engine:
            raise DomainError(f"Variable '{variable.description}' is encoded twice.")
        index = engine_var.index()
        if index in self._from_engine:
            raise InternalInvariantViolation(
                f"Engine column {index} is already bound to "
                f"'{self._from_engine[index].description}'."
            )
        self._to_engine[variable] = engine_var
        self._from_engine[index] = variable

    def engine_var(self, variable: Variable) -> pywraplp.Variable:
        try:
            return self._to_engine[variable]
        except KeyError:
            raise UnknownVariable(
                f"Variable '{variable.description}' is not declared in the program."
            ) from None

    def variable_for(self, engine_var: pywraplp.Variable) -> Variable:
        try:
            return self._from_engine[engine_var.index()]
        except KeyError:
            raise UnknownVariable(
                f"Engine variable '{engine_var.name()}' has no program counterpart."
            ) from None

    def items(self) -> Iterator[Tuple[Variable, pywraplp.Variable]]:
        return iter(self._to_engine.items())

    def __contains__(self, variable: object) -> bool:
        return variable in self._to_engine

    def __iter__(self) -> Iterator[Variable]:
        return iter(self._to_engine)

    def __len__(self) -> int:
        return len(self._to_engine)


@dataclass
class EncodedModel:
    solver: pywraplp.Solver
    problem_type: ProblemType
    variables: VariableMap
    constraints: List[pywraplp.Constraint] = field(default_factory=list)


def constraint_bounds(constraint: Constraint) -> Tuple[float, float]:
    rhs = constraint.rhs
    if constraint.operator == ComparisonOperator.EQ:
        return rhs, rhs
    if constraint.operator == ComparisonOperator.GE:
        return rhs, math.inf
    if constraint.operator == ComparisonOperator.LE:
        return -math.inf, rhs
    raise InternalInvariantViolation(f"Unknown comparison operator: {constraint.operator!r}")


def select_problem_type(program: MathProgram) -> ProblemType:
    if program.integer_domains_count >= 1:
        return ProblemType.MIXED_INTEGER
    return ProblemType.LINEAR


def encode_program(program: MathProgram) -> EncodedModel:
    problem_type = select_problem_type(program)
    s = create_engine(program.name, problem_type)

    variables = _encode_variables(s, program.variables)
    constraints = _encode_constraints(s, program.constraints, variables)
    _encode_objective(s, program.objective, variables)

    logger.debug(
        "Encoded program",
        extra={
            "program": program.name,
            "problem_type": problem_type.value,
            "variable_count": s.NumVariables(),
            "constraint_count": s.NumConstraints(),
        },
    )
    return EncodedModel(
        solver=s,
        problem_type=problem_type,
        variables=variables,
        constraints=constraints,
    )


def _engine_bound(s: pywraplp.Solver, value: float) -> float:
    if math.isinf(value):
        return s.infinity() if value > 0 else -s.infinity()
    return float(value)


def _encode_variables(s: pywraplp.Solver, variables: Tuple[Variable, ...]) -> VariableMap:
    mapping = VariableMap()
    for v in variables:
        lb = _engine_bound(s, v.lower)
        ub = _engine_bound(s, v.upper)
        if v.kind == VariableKind.BOOL:
            # {0, 1} regardless of the declared bounds
            x = s.BoolVar(v.description)
        elif v.kind == VariableKind.INT:
            x = s.IntVar(lb, ub, v.description)
        elif v.kind == VariableKind.REAL:
            x = s.NumVar(lb, ub, v.description)
        else:
            raise InternalInvariantViolation(f"Unknown variable kind: {v.kind!r}")
        mapping.put(v, x)
    return mapping


def _encode_constraints(
    s: pywraplp.Solver, constraints: Tuple[Constraint, ...], variables: VariableMap
) -> List[pywraplp.Constraint]:
    encoded: List[pywraplp.Constraint] = []
    for c in constraints:
        lo, hi = constraint_bounds(c)
        row = s.Constraint(_engine_bound(s, lo), _engine_bound(s, hi), c.description)
        for engine_var, coefficient in _resolve_terms(c.lhs, variables):
            row.SetCoefficient(engine_var, coefficient)
        encoded.append(row)
    return encoded


def _encode_objective(s: pywraplp.Solver, objective: Objective, variables: VariableMap) -> None:
    # Zero objective: leave the engine's empty objective untouched (feasibility problem).
    if objective.is_zero:
        return

    o = s.Objective()
    if objective.sense == Sense.MAX:
        o.SetMaximization()
    elif objective.sense == Sense.MIN:
        o.SetMinimization()
    else:
        raise InternalInvariantViolation(f"Unknown objective sense: {objective.sense!r}")

    for engine_var, coefficient in _resolve_terms(objective.function, variables):
        o.SetCoefficient(engine_var, coefficient)


def _resolve_terms(
    terms: SumTerms, variables: VariableMap
) -> List[Tuple[pywraplp.Variable, float]]:
    # SetCoefficient overwrites, so repeated variables are summed first.
    coefficients: Dict[Variable, float] = {}
    for term in terms:
        coefficients[term.variable] = coefficients.get(term.variable, 0.0) + term.coefficient
    return [(variables.engine_var(v), c) for v, c in coefficients.items()]
