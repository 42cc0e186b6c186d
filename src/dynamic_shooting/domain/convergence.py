# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Solver-agnostic convergence classification.

Both intercept solvers sit behind one structural interface so the
region-of-convergence marcher, the heat-map sampler and the session can
switch between them with a SolverMethod value:

    run(geometry, v, max_iter)                    -> Trace
    iterations_to_converge(geometry, v, max_iter) -> int in [1, max_iter]
    is_convergence_failure(geometry, v, max_iter) -> bool

Failure means: uninitialized geometry, an empty trace, or a final landing
point outside the tolerance. Iteration counts use the first record within
tolerance and fall back to max_iter.

No external dependencies — only stdlib dataclasses/typing + domain imports.
"""
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from dynamic_shooting.domain.config import ShotGeometry, SolverMethod
from dynamic_shooting.domain.geometry import Vec2
from dynamic_shooting.domain.fixed_point import (
    fixed_point_iterations_to_convergence,
    run_fixed_point_iterations,
)
from dynamic_shooting.domain.newton import (
    newton_iterations_to_convergence,
    run_newton_iterations,
)
from dynamic_shooting.domain.trace import Trace, landing_error


@runtime_checkable
class ConvergenceSolver(Protocol):
    """Structural typing port for interchangeable intercept solvers."""

    method: SolverMethod

    def run(self, geometry: ShotGeometry, shooter_vel: Vec2, max_iter: int) -> Trace: ...

    def iterations_to_converge(
        self, geometry: ShotGeometry, shooter_vel: Vec2, max_iter: int,
    ) -> int: ...

    def is_convergence_failure(
        self, geometry: ShotGeometry, shooter_vel: Vec2, max_iter: int,
    ) -> bool: ...


@dataclass(frozen=True)
class ConvergenceClassification:
    """Iteration count together with the final-step failure verdict."""
    iterations: int
    failed: bool


def _final_step_fails(geometry: ShotGeometry, trace: Trace) -> bool:
    if not trace:
        return True
    # NaN landing errors count as failures
    return not landing_error(trace[-1], geometry.target_pos) <= geometry.tolerance


def _run_fails(
    solver: ConvergenceSolver,
    geometry: ShotGeometry,
    shooter_vel: Vec2,
    max_iter: int,
) -> bool:
    """Failure verdict shared by every solver: run it and judge the final step."""
    if not geometry.is_initialized:
        return True
    return _final_step_fails(geometry, solver.run(geometry, shooter_vel, max_iter))


class FixedPointSolver:
    """Fixed-point refinement of the virtual target."""

    method = SolverMethod.FIXED_POINT

    def run(self, geometry: ShotGeometry, shooter_vel: Vec2, max_iter: int) -> Trace:
        return run_fixed_point_iterations(geometry, shooter_vel, max_iter)

    def iterations_to_converge(
        self, geometry: ShotGeometry, shooter_vel: Vec2, max_iter: int,
    ) -> int:
        return fixed_point_iterations_to_convergence(geometry, shooter_vel, max_iter)

    def is_convergence_failure(
        self, geometry: ShotGeometry, shooter_vel: Vec2, max_iter: int,
    ) -> bool:
        return _run_fails(self, geometry, shooter_vel, max_iter)


class NewtonSolver:
    """Newton-Raphson root finding on the time-of-flight equation."""

    method = SolverMethod.NEWTON

    def run(self, geometry: ShotGeometry, shooter_vel: Vec2, max_iter: int) -> Trace:
        return run_newton_iterations(geometry, shooter_vel, max_iter)

    def iterations_to_converge(
        self, geometry: ShotGeometry, shooter_vel: Vec2, max_iter: int,
    ) -> int:
        return newton_iterations_to_convergence(geometry, shooter_vel, max_iter)

    def is_convergence_failure(
        self, geometry: ShotGeometry, shooter_vel: Vec2, max_iter: int,
    ) -> bool:
        return _run_fails(self, geometry, shooter_vel, max_iter)


_SOLVERS: dict[SolverMethod, ConvergenceSolver] = {
    SolverMethod.FIXED_POINT: FixedPointSolver(),
    SolverMethod.NEWTON: NewtonSolver(),
}


def get_solver(method: SolverMethod) -> ConvergenceSolver:
    """Solver implementation for a method selector."""
    try:
        return _SOLVERS[method]
    except KeyError:
        raise ValueError(f"Unknown solver method: {method!r}") from None


def _check_max_iter(max_iter: int) -> None:
    if max_iter < 1:
        raise ValueError(f"max_iter must be >= 1, got {max_iter}")


def iterations_to_converge(
    geometry: ShotGeometry,
    shooter_vel: Vec2,
    max_iter: int,
    method: SolverMethod = SolverMethod.FIXED_POINT,
) -> int:
    """First iteration landing within tolerance, else max_iter."""
    _check_max_iter(max_iter)
    return get_solver(method).iterations_to_converge(geometry, shooter_vel, max_iter)


def is_convergence_failure(
    geometry: ShotGeometry,
    shooter_vel: Vec2,
    max_iter: int,
    method: SolverMethod = SolverMethod.FIXED_POINT,
) -> bool:
    """True when the final step of a max_iter run lands outside tolerance."""
    _check_max_iter(max_iter)
    return get_solver(method).is_convergence_failure(geometry, shooter_vel, max_iter)


def classify(
    geometry: ShotGeometry,
    shooter_vel: Vec2,
    max_iter: int,
    method: SolverMethod = SolverMethod.FIXED_POINT,
) -> ConvergenceClassification:
    """Iteration count and failure verdict for one shooter velocity."""
    _check_max_iter(max_iter)
    solver = get_solver(method)
    return ConvergenceClassification(
        iterations=solver.iterations_to_converge(geometry, shooter_vel, max_iter),
        failed=solver.is_convergence_failure(geometry, shooter_vel, max_iter),
    )
