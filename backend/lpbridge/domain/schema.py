from __future__ import annotations

import math
from enum import Enum
from typing import Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class VariableKind(str, Enum):
    BOOL = "bool"
    INT = "int"
    REAL = "real"


class ComparisonOperator(str, Enum):
    EQ = "eq"
    GE = "ge"
    LE = "le"


class Sense(str, Enum):
    MIN = "min"
    MAX = "max"


class StrictBaseModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class Variable(StrictBaseModel):
    """A decision variable.

    Variables are compared and hashed by identity: two variables sharing a
    description are still two distinct variables.
    """

    description: str = Field(min_length=1)
    kind: VariableKind = VariableKind.REAL
    lower: float = -math.inf
    upper: float = math.inf

    @model_validator(mode="after")
    def _check_bounds(self) -> "Variable":
        if math.isnan(self.lower) or math.isnan(self.upper):
            raise ValueError(f"Variable '{self.description}' has a NaN bound.")
        if self.lower > self.upper:
            raise ValueError(
                f"Variable '{self.description}' has lower bound {self.lower} "
                f"above upper bound {self.upper}."
            )
        return self

    def __eq__(self, other: object) -> bool:
        return self is other

    __hash__ = object.__hash__

    @property
    def bounds(self) -> Tuple[float, float]:
        return self.lower, self.upper

    @classmethod
    def real(
        cls, description: str, lower: float = -math.inf, upper: float = math.inf
    ) -> "Variable":
        return cls(description=description, kind=VariableKind.REAL, lower=lower, upper=upper)

    @classmethod
    def integer(
        cls, description: str, lower: float = -math.inf, upper: float = math.inf
    ) -> "Variable":
        return cls(description=description, kind=VariableKind.INT, lower=lower, upper=upper)

    @classmethod
    def boolean(cls, description: str) -> "Variable":
        return cls(description=description, kind=VariableKind.BOOL, lower=0.0, upper=1.0)


class Term(StrictBaseModel):
    coefficient: float
    variable: Variable


SumTerms = Tuple[Term, ...]


def sum_terms(*coefficients_and_variables) -> SumTerms:
    """Build terms from alternating coefficients and variables: ``sum_terms(2, x, -1, y)``."""
    if len(coefficients_and_variables) % 2:
        raise ValueError("sum_terms expects (coefficient, variable) pairs.")
    pairs = zip(coefficients_and_variables[::2], coefficients_and_variables[1::2])
    return tuple(Term(coefficient=c, variable=v) for c, v in pairs)


class Constraint(StrictBaseModel):
    description: str = ""
    lhs: SumTerms = ()
    operator: ComparisonOperator
    rhs: float

    @field_validator("rhs")
    @classmethod
    def _rhs_is_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("Constraint right-hand side must be finite.")
        return v

    @classmethod
    def of(
        cls, description: str, lhs: SumTerms, operator: ComparisonOperator, rhs: float
    ) -> "Constraint":
        return cls(description=description, lhs=lhs, operator=operator, rhs=rhs)


class Objective(StrictBaseModel):
    sense: Sense = Sense.MIN
    function: SumTerms = ()

    @property
    def is_zero(self) -> bool:
        return all(t.coefficient == 0 for t in self.function)

    @classmethod
    def zero(cls) -> "Objective":
        return cls()

    @classmethod
    def maximize(cls, function: SumTerms) -> "Objective":
        return cls(sense=Sense.MAX, function=function)

    @classmethod
    def minimize(cls, function: SumTerms) -> "Objective":
        return cls(sense=Sense.MIN, function=function)


class MathProgram(StrictBaseModel):
    name: str = ""
    variables: Tuple[Variable, ...] = ()
    constraints: Tuple[Constraint, ...] = ()
    objective: Objective = Field(default_factory=Objective.zero)

    @property
    def integer_domains_count(self) -> int:
        return sum(1 for v in self.variables if v.kind != VariableKind.REAL)

    def referenced_variables(self) -> List[Variable]:
        # dict keeps first-appearance order; keys hash by identity
        seen: Dict[Variable, None] = {}
        for c in self.constraints:
            for term in c.lhs:
                seen.setdefault(term.variable, None)
        for term in self.objective.function:
            seen.setdefault(term.variable, None)
        return list(seen)
