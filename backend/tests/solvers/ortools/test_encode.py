import math

import pytest

from lpbridge.core.errors import DomainError, UnknownVariable
from lpbridge.domain.schema import (
    ComparisonOperator,
    Constraint,
    MathProgram,
    Objective,
    Variable,
    VariableKind,
    sum_terms,
)
from lpbridge.solvers.ortools.encode import (
    VariableMap,
    constraint_bounds,
    encode_program,
    select_problem_type,
)
from lpbridge.solvers.ortools.engine import ProblemType
from tests.program_scenario_factory import ProgramScenarioFactory


def _single_variable_program(variable: Variable) -> MathProgram:
    return MathProgram(name="single", variables=(variable,))


class TestConstraintBounds:
    @pytest.mark.parametrize("rhs", [-7.25, 0.0, 3.0, 1e9])
    def test_operator_shapes(self, rhs):
        x = Variable.real("x")
        terms = sum_terms(1, x)
        assert constraint_bounds(Constraint.of("eq", terms, ComparisonOperator.EQ, rhs)) == (rhs, rhs)
        assert constraint_bounds(Constraint.of("ge", terms, ComparisonOperator.GE, rhs)) == (rhs, math.inf)
        assert constraint_bounds(Constraint.of("le", terms, ComparisonOperator.LE, rhs)) == (-math.inf, rhs)

    def test_engine_rows_carry_bounds(self):
        x = Variable.real("x", 0.0, 10.0)
        program = MathProgram(
            variables=(x,),
            constraints=(
                Constraint.of("eq", sum_terms(1, x), ComparisonOperator.EQ, 2.5),
                Constraint.of("ge", sum_terms(1, x), ComparisonOperator.GE, 1.0),
                Constraint.of("le", sum_terms(1, x), ComparisonOperator.LE, 9.0),
            ),
        )
        built = encode_program(program)

        eq, ge, le = built.constraints
        assert (eq.lb(), eq.ub()) == (2.5, 2.5)
        assert (ge.lb(), ge.ub()) == (1.0, math.inf)
        assert (le.lb(), le.ub()) == (-math.inf, 9.0)


class TestProblemType:
    def test_all_real_is_linear(self):
        program = ProgramScenarioFactory.maximize_bounded_x()
        assert select_problem_type(program) == ProblemType.LINEAR
        assert encode_program(program).problem_type == ProblemType.LINEAR

    def test_integer_is_mixed_integer(self):
        assert select_problem_type(ProgramScenarioFactory.small_integer_program()) == ProblemType.MIXED_INTEGER

    def test_boolean_is_mixed_integer(self):
        assert select_problem_type(ProgramScenarioFactory.knapsack_booleans()) == ProblemType.MIXED_INTEGER


class TestVariableEncoding:
    @pytest.mark.parametrize(
        "lo, hi",
        [(0.0, 10.0), (-3.5, 3.5), (-math.inf, 4.0), (2.0, math.inf), (-math.inf, math.inf), (1.0, 1.0)],
    )
    @pytest.mark.parametrize("kind", [VariableKind.REAL, VariableKind.INT])
    def test_bounds_round_trip(self, kind, lo, hi):
        v = Variable(description="v", kind=kind, lower=lo, upper=hi)
        built = encode_program(_single_variable_program(v))

        engine_var = built.variables.engine_var(v)
        assert engine_var.lb() == lo
        assert engine_var.ub() == hi

    def test_boolean_ignores_declared_bounds(self):
        b = Variable(description="b", kind=VariableKind.BOOL, lower=-5.0, upper=7.0)
        built = encode_program(_single_variable_program(b))

        engine_var = built.variables.engine_var(b)
        assert (engine_var.lb(), engine_var.ub()) == (0.0, 1.0)

    def test_engine_names_follow_descriptions(self):
        program = ProgramScenarioFactory.small_integer_program()
        built = encode_program(program)
        assert [built.variables.engine_var(v).name() for v in program.variables] == ["x", "y"]


class TestVariableMap:
    def test_mapping_is_bijective(self):
        program = ProgramScenarioFactory.knapsack_booleans()
        built = encode_program(program)
        mapping = built.variables

        assert len(mapping) == len(program.variables) == built.solver.NumVariables()
        assert list(mapping) == list(program.variables)

        engine_vars = [mapping.engine_var(v) for v in program.variables]
        assert len({ev.index() for ev in engine_vars}) == len(engine_vars)
        for v, ev in zip(program.variables, engine_vars):
            assert mapping.variable_for(ev) is v

    def test_same_description_variables_stay_distinct(self):
        x1 = Variable.real("x", 0.0, 1.0)
        x2 = Variable.real("x", 0.0, 1.0)
        built = encode_program(MathProgram(variables=(x1, x2)))

        assert len(built.variables) == 2
        assert built.variables.engine_var(x1).index() != built.variables.engine_var(x2).index()

    def test_put_twice_raises(self):
        program = ProgramScenarioFactory.maximize_bounded_x()
        built = encode_program(program)
        x = program.variables[0]

        with pytest.raises(DomainError, match="encoded twice"):
            built.variables.put(x, built.variables.engine_var(x))

    def test_unknown_lookups_raise(self):
        mapping = VariableMap()
        with pytest.raises(UnknownVariable):
            mapping.engine_var(Variable.real("ghost"))

        other = encode_program(ProgramScenarioFactory.maximize_bounded_x())
        with pytest.raises(UnknownVariable):
            mapping.variable_for(other.variables.engine_var(next(iter(other.variables))))


class TestConstraintAndObjectiveEncoding:
    def test_coefficients_are_set(self):
        program = ProgramScenarioFactory.small_integer_program()
        v = ProgramScenarioFactory.by_description(program)
        built = encode_program(program)
        m = built.variables

        c1 = built.constraints[0]
        assert c1.GetCoefficient(m.engine_var(v["x"])) == 1.0
        assert c1.GetCoefficient(m.engine_var(v["y"])) == 7.0

        objective = built.solver.Objective()
        assert objective.maximization()
        assert objective.GetCoefficient(m.engine_var(v["y"])) == 10.0

    def test_repeated_variable_coefficients_are_summed(self):
        x = Variable.real("x", 0.0, 10.0)
        program = MathProgram(
            variables=(x,),
            constraints=(Constraint.of("c", sum_terms(1, x, 2, x), ComparisonOperator.LE, 6.0),),
        )
        built = encode_program(program)
        assert built.constraints[0].GetCoefficient(built.variables.engine_var(x)) == 3.0

    def test_minimize_sets_minimization(self):
        built = encode_program(ProgramScenarioFactory.minimize_with_lower_bound())
        assert built.solver.Objective().minimization()

    def test_zero_objective_leaves_engine_objective_empty(self):
        program = ProgramScenarioFactory.zero_objective_feasibility()
        built = encode_program(program)
        objective = built.solver.Objective()
        for v in program.variables:
            assert objective.GetCoefficient(built.variables.engine_var(v)) == 0.0

    def test_duplicate_descriptions_make_separate_rows(self):
        program = ProgramScenarioFactory.two_constraints_same_description().build()
        built = encode_program(program)
        assert built.solver.NumConstraints() == 2
        assert [c.name() for c in built.constraints] == ["c1", "c1"]

    def test_constraint_with_undeclared_variable_raises(self):
        with pytest.raises(UnknownVariable, match="ghost"):
            encode_program(ProgramScenarioFactory.constraint_with_undeclared_variable())

    def test_objective_with_undeclared_variable_raises(self):
        with pytest.raises(UnknownVariable, match="ghost"):
            encode_program(ProgramScenarioFactory.objective_with_undeclared_variable())

    def test_objective_only_maximize_keeps_sense(self):
        x = Variable.real("x", 0.0, 1.0)
        program = MathProgram(variables=(x,), objective=Objective.maximize(sum_terms(2, x)))
        built = encode_program(program)
        assert built.solver.Objective().maximization()
