# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Region of convergence in shooter-velocity space.

Casts rays from zero velocity at fixed angular steps and marches each ray
outward in fixed speed increments until the classifier first reports a
failure for the given iteration budget. The first failing speed becomes
that ray's boundary; rays that never fail are capped at the ceiling.

The linear march assumes failure is not re-entrant along a ray: once a
speed fails, every larger speed in that direction fails too. That is an
approximation, not a proven property. find_non_monotone_rays scans rays
to the ceiling without stopping and reports every ray where a failure is
followed by renewed convergence.

No external dependencies — only stdlib math/dataclasses + domain imports.
"""
import math
from dataclasses import dataclass

from dynamic_shooting.domain.config import ShotGeometry, SolverMethod, SweepSettings
from dynamic_shooting.domain.convergence import get_solver
from dynamic_shooting.domain.geometry import Vec2


@dataclass(frozen=True)
class PolarSample:
    """Boundary sample: largest convergent speed along a bearing."""
    angle_deg: float
    max_velocity: float

    def to_velocity(self) -> Vec2:
        return Vec2.from_polar(self.max_velocity, self.angle_deg)


@dataclass(frozen=True)
class RegionOfConvergence:
    """Closed polar curve bounding the convergent velocities."""
    samples: tuple[PolarSample, ...]
    iteration_budget: int
    method: SolverMethod


@dataclass(frozen=True)
class MonotonicityViolation:
    """A ray along which convergence resumes after a failure."""
    angle_deg: float
    first_failure: float
    recovered_at: float


def _ray_speeds(sweep: SweepSettings) -> list[float]:
    """Speeds 0, step, 2*step, ... up to and including the ceiling."""
    n_steps = int(math.floor(sweep.max_velocity / sweep.velocity_step + 1e-9))
    return [k * sweep.velocity_step for k in range(n_steps + 1)]


def compute_region_of_convergence(
    geometry: ShotGeometry,
    max_iter: int,
    method: SolverMethod = SolverMethod.FIXED_POINT,
    sweep: SweepSettings = SweepSettings(),
) -> RegionOfConvergence:
    """
    Ray-march the convergence boundary for one iteration budget.

    Args:
        geometry: Scenario snapshot.
        max_iter: Iteration budget handed to the classifier.
        method: Which solver to classify with.
        sweep: Ray count, speed step and ceiling.

    Returns:
        RegionOfConvergence with one PolarSample per ray, ordered by
        angle from 0 deg. Empty when the geometry is uninitialized.
    """
    if max_iter < 1:
        raise ValueError(f"max_iter must be >= 1, got {max_iter}")
    sweep.validate()

    if not geometry.is_initialized:
        return RegionOfConvergence(samples=(), iteration_budget=max_iter, method=method)

    solver = get_solver(method)
    speeds = _ray_speeds(sweep)
    samples: list[PolarSample] = []

    for i in range(sweep.num_rays):
        angle_deg = i * sweep.angle_step_deg
        boundary = sweep.max_velocity
        for speed in speeds:
            vel = Vec2.from_polar(speed, angle_deg)
            if solver.is_convergence_failure(geometry, vel, max_iter):
                boundary = speed
                break
        samples.append(PolarSample(angle_deg=angle_deg, max_velocity=boundary))

    return RegionOfConvergence(
        samples=tuple(samples), iteration_budget=max_iter, method=method,
    )


def find_non_monotone_rays(
    geometry: ShotGeometry,
    max_iter: int,
    method: SolverMethod = SolverMethod.FIXED_POINT,
    sweep: SweepSettings = SweepSettings(),
) -> list[MonotonicityViolation]:
    """
    Look for rays where convergence fails and later succeeds again.

    Scans every speed on every ray, so it costs a full sweep regardless of
    where the boundary lies. An empty result means the linear search in
    compute_region_of_convergence is exact at this sampling resolution.
    """
    if max_iter < 1:
        raise ValueError(f"max_iter must be >= 1, got {max_iter}")
    sweep.validate()

    if not geometry.is_initialized:
        return []

    solver = get_solver(method)
    speeds = _ray_speeds(sweep)
    violations: list[MonotonicityViolation] = []

    for i in range(sweep.num_rays):
        angle_deg = i * sweep.angle_step_deg
        first_failure: float | None = None
        for speed in speeds:
            vel = Vec2.from_polar(speed, angle_deg)
            fails = solver.is_convergence_failure(geometry, vel, max_iter)
            if fails and first_failure is None:
                first_failure = speed
            elif not fails and first_failure is not None:
                violations.append(MonotonicityViolation(
                    angle_deg=angle_deg,
                    first_failure=first_failure,
                    recovered_at=speed,
                ))
                break

    return violations
