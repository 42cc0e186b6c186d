# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Fixed-point intercept solver.

Refines the aim point ("virtual target") for a shooter moving at constant
velocity. Each step shifts the real target against the shooter velocity
by the previous time-of-flight estimate, then re-measures the flight time
to the shifted point:

    offset_k  = -v * tau_{k-1}
    virtual_k = target + offset_k
    tau_k     = |virtual_k - shooter| / v_p
    landing_k = virtual_k + v * tau_k

The iteration stops once successive flight times agree to within
SETTLE_THRESHOLD_S. It converges linearly for shooter speeds well below
the projectile speed and may exhaust max_iter near or above it; that is
a result, not an error.

No external dependencies — only stdlib logging + domain imports.
"""
import logging

from dynamic_shooting.domain.config import ShotGeometry, SolverConstants
from dynamic_shooting.domain.geometry import Vec2, time_of_flight
from dynamic_shooting.domain.trace import (
    IterationRecord,
    Trace,
    first_converged_index,
)

logger = logging.getLogger(__name__)


def run_fixed_point_iterations(
    geometry: ShotGeometry,
    shooter_vel: Vec2,
    max_iter: int,
) -> Trace:
    """
    Run the fixed-point recursion and return its full trace.

    The first step seeds tau_prev with the straight-line flight time and
    is never tested for settling; the settle test compares each later
    tau with the one produced by the step before it. A stationary shooter
    therefore yields two identical records.

    Args:
        geometry: Shooter/target positions, projectile speed, tolerance.
        shooter_vel: Shooter velocity (m/s).
        max_iter: Maximum number of records to produce.

    Returns:
        Tuple of at most max_iter IterationRecords; empty when the
        geometry is uninitialized or the projectile speed is not positive.
    """
    if not geometry.is_initialized:
        logger.debug("Fixed-point solver called with uninitialized geometry")
        return ()
    if not geometry.projectile_speed > 0.0:
        logger.error(
            "Fixed-point solver needs a positive projectile speed, got %r",
            geometry.projectile_speed,
        )
        return ()

    shooter = geometry.shooter_pos
    target = geometry.target_pos
    speed = geometry.projectile_speed

    records: list[IterationRecord] = []
    relative = target - shooter
    prev_tof: float | None = None

    for index in range(1, max_iter + 1):
        tau_prev = time_of_flight(relative, speed) if prev_tof is None else prev_tof

        offset = (-shooter_vel).scale(tau_prev)
        virtual_target = target + offset
        tau = time_of_flight(virtual_target - shooter, speed)
        landing = virtual_target + shooter_vel.scale(tau)

        records.append(IterationRecord(
            iteration=index,
            relative_position=relative,
            tau=tau,
            tau_prev=tau_prev,
            virtual_target=virtual_target,
            virtual_target_offset=offset,
            actual_trajectory_end=landing,
        ))

        if prev_tof is not None and abs(tau - prev_tof) < SolverConstants.SETTLE_THRESHOLD_S:
            break

        relative = virtual_target - shooter
        prev_tof = tau

    return tuple(records)


def fixed_point_iterations_to_convergence(
    geometry: ShotGeometry,
    shooter_vel: Vec2,
    max_iter: int,
) -> int:
    """First iteration landing within tolerance of the target, else max_iter."""
    if not geometry.is_initialized:
        return max_iter
    trace = run_fixed_point_iterations(geometry, shooter_vel, max_iter)
    index = first_converged_index(trace, geometry.target_pos, geometry.tolerance)
    return index if index is not None else max_iter
