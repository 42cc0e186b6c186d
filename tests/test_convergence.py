# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the solver-agnostic convergence classifier."""
import pytest

from dynamic_shooting.domain.config import ShotGeometry, SolverMethod
from dynamic_shooting.domain.convergence import (
    ConvergenceClassification,
    ConvergenceSolver,
    FixedPointSolver,
    NewtonSolver,
    classify,
    get_solver,
    is_convergence_failure,
    iterations_to_converge,
)
from dynamic_shooting.domain.geometry import ZERO, Vec2
from dynamic_shooting.domain.trace import IterationRecord


GEOMETRY = ShotGeometry()
LATERAL_SPEEDS = [0.0, 0.5, 1.0, 1.5, 2.0, 2.5, 3.0]


# ── Solver registry ──────────────────────────────────────────────────

class TestGetSolver:

    def test_fixed_point(self):
        solver = get_solver(SolverMethod.FIXED_POINT)
        assert isinstance(solver, FixedPointSolver)
        assert solver.method is SolverMethod.FIXED_POINT

    def test_newton(self):
        solver = get_solver(SolverMethod.NEWTON)
        assert isinstance(solver, NewtonSolver)
        assert solver.method is SolverMethod.NEWTON

    def test_satisfy_protocol(self):
        for method in SolverMethod:
            assert isinstance(get_solver(method), ConvergenceSolver)

    def test_unknown_method_raises(self):
        with pytest.raises(ValueError, match="Unknown solver method"):
            get_solver("newton")

    def test_traces_have_same_shape(self):
        for method in SolverMethod:
            trace = get_solver(method).run(GEOMETRY, Vec2(1.0, 0.0), 10)
            assert isinstance(trace, tuple)
            assert all(isinstance(r, IterationRecord) for r in trace)


# ── Classification ───────────────────────────────────────────────────

class TestClassify:

    @pytest.mark.parametrize("method", list(SolverMethod))
    def test_stationary_converges_immediately(self, method):
        result = classify(GEOMETRY, ZERO, 10, method)
        assert result == ConvergenceClassification(iterations=1, failed=False)

    @pytest.mark.parametrize("method", list(SolverMethod))
    def test_uninitialized_is_failure_at_cap(self, method):
        g = ShotGeometry(target_pos=None)
        result = classify(g, Vec2(1.0, 0.0), 15, method)
        assert result.failed
        assert result.iterations == 15

    def test_classification_is_frozen(self):
        result = classify(GEOMETRY, ZERO, 10)
        with pytest.raises(AttributeError):
            result.failed = True

    def test_invalid_budget_raises(self):
        with pytest.raises(ValueError):
            classify(GEOMETRY, ZERO, 0)
        with pytest.raises(ValueError):
            iterations_to_converge(GEOMETRY, ZERO, 0)
        with pytest.raises(ValueError):
            is_convergence_failure(GEOMETRY, ZERO, 0)

    def test_iterations_within_bounds(self):
        for method in SolverMethod:
            for speed in LATERAL_SPEEDS + [4.0, 6.0]:
                n = iterations_to_converge(GEOMETRY, Vec2(speed, 0.0), 20, method)
                assert 1 <= n <= 20


class TestFailureVerdict:

    @pytest.mark.parametrize("method", list(SolverMethod))
    def test_solvers_agree_on_degenerate_inputs(self, method):
        solver = get_solver(method)
        vel = Vec2(1.0, 0.0)
        assert solver.is_convergence_failure(ShotGeometry(shooter_pos=None), vel, 10)
        assert solver.is_convergence_failure(ShotGeometry(projectile_speed=0.0), vel, 10)
        assert not solver.is_convergence_failure(GEOMETRY, ZERO, 10)

    @pytest.mark.parametrize("method", list(SolverMethod))
    def test_zero_projectile_speed_classified_at_cap(self, method):
        result = classify(ShotGeometry(projectile_speed=0.0), Vec2(1.0, 0.0), 12, method)
        assert result == ConvergenceClassification(iterations=12, failed=True)

    def test_budget_one_fails_for_fast_strafe(self):
        assert is_convergence_failure(GEOMETRY, Vec2(3.0, 0.0), 1)

    def test_budget_one_passes_for_slow_strafe(self):
        assert not is_convergence_failure(GEOMETRY, Vec2(1.0, 0.0), 1)

    def test_fixed_point_converges_below_projectile_speed(self):
        assert not is_convergence_failure(
            GEOMETRY, Vec2(3.0, 0.0), 1000, SolverMethod.FIXED_POINT,
        )

    def test_fixed_point_fails_above_projectile_speed(self):
        assert is_convergence_failure(
            GEOMETRY, Vec2(5.0, 0.0), 1000, SolverMethod.FIXED_POINT,
        )

    def test_newton_singular_derivative_is_failure(self):
        assert is_convergence_failure(GEOMETRY, Vec2(0.0, -3.5), 20, SolverMethod.NEWTON)


# ── Solver comparison ────────────────────────────────────────────────

class TestSolverComparison:

    @pytest.mark.parametrize("method", list(SolverMethod))
    def test_counts_non_decreasing_with_lateral_speed(self, method):
        counts = [
            iterations_to_converge(GEOMETRY, Vec2(s, 0.0), 1000, method)
            for s in LATERAL_SPEEDS
        ]
        assert counts == sorted(counts)

    def test_newton_never_slower_than_fixed_point(self):
        for s in LATERAL_SPEEDS:
            vel = Vec2(s, 0.0)
            newton = iterations_to_converge(GEOMETRY, vel, 1000, SolverMethod.NEWTON)
            fixed = iterations_to_converge(GEOMETRY, vel, 1000, SolverMethod.FIXED_POINT)
            assert newton <= fixed

    def test_newton_strictly_faster_at_high_speed(self):
        vel = Vec2(3.0, 0.0)
        newton = iterations_to_converge(GEOMETRY, vel, 1000, SolverMethod.NEWTON)
        fixed = iterations_to_converge(GEOMETRY, vel, 1000, SolverMethod.FIXED_POINT)
        assert newton < fixed
