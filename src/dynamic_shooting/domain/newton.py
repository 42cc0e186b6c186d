# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Newton-Raphson intercept solver.

Solves the implicit time-of-flight equation directly for t:

    R(t)  = target - shooter - v * t
    F(t)  = t - |R(t)| / v_p                           = 0
    F'(t) = 1 + (R_x * v_x + R_y * v_y) / (v_p * |R(t)|)

starting from the straight-line flight time t_0 = |R(0)| / v_p. Each
update t <- t - F/F' is clamped to MIN_TIME_OF_FLIGHT_S so flight time
never becomes zero or negative.

The landing point for a given t is target - v * F(t), so the landing
error is |F(t)| * |v|. The allocation-free counter uses that identity
instead of materialising records; it drives the heat-map sampler.

No external dependencies — only stdlib math/logging + domain imports.
"""
import logging
import math

from dynamic_shooting.domain.config import ShotGeometry, SolverConstants
from dynamic_shooting.domain.geometry import ZERO, Vec2
from dynamic_shooting.domain.trace import IterationRecord, Trace

logger = logging.getLogger(__name__)


def _newton_update(t: float, f: float, f_prime: float) -> float:
    t_next = t - f / f_prime
    if t_next < SolverConstants.MIN_TIME_OF_FLIGHT_S:
        t_next = SolverConstants.MIN_TIME_OF_FLIGHT_S
    return t_next


def run_newton_iterations(
    geometry: ShotGeometry,
    shooter_vel: Vec2,
    max_iter: int,
) -> Trace:
    """
    Run Newton's method on F(t) and return the full trace.

    Record fields mirror the fixed-point solver: the virtual target is the
    real target shifted by -v * t, and the landing point adds back the
    shooter displacement over the re-measured flight time |R(t)| / v_p.

    Stops when the landing point is within tolerance (converged), when
    |R(t)| falls below the numerical floor (one degenerate record), or
    when |F'| falls below the floor (singular derivative, treated as
    non-convergence by the classifier).

    Args:
        geometry: Shooter/target positions, projectile speed, tolerance.
        shooter_vel: Shooter velocity (m/s).
        max_iter: Maximum number of records to produce.

    Returns:
        Tuple of at most max_iter IterationRecords; empty when the
        geometry is uninitialized.
    """
    if not geometry.is_initialized:
        logger.debug("Newton solver called with uninitialized geometry")
        return ()
    if not geometry.projectile_speed > 0.0:
        logger.error(
            "Newton solver needs a positive projectile speed, got %r",
            geometry.projectile_speed,
        )
        return ()

    floor = SolverConstants.NUMERICAL_FLOOR
    target = geometry.target_pos
    shooter = geometry.shooter_pos
    vp = geometry.projectile_speed
    vx, vy = shooter_vel.x, shooter_vel.y
    dx0 = target.x - shooter.x
    dy0 = target.y - shooter.y

    d0 = math.hypot(dx0, dy0)
    if d0 < floor:
        if max_iter < 1:
            return ()
        return (IterationRecord(
            iteration=1,
            relative_position=ZERO,
            tau=0.0,
            tau_prev=0.0,
            virtual_target=target,
            virtual_target_offset=ZERO,
            actual_trajectory_end=target,
        ),)

    t = d0 / vp
    t_prev: float | None = None
    records: list[IterationRecord] = []

    for index in range(1, max_iter + 1):
        x = dx0 - vx * t
        y = dy0 - vy * t
        d = math.hypot(x, y)
        tau = d / vp

        offset = Vec2(-vx * t, -vy * t)
        virtual_target = target + offset
        landing = virtual_target + shooter_vel.scale(tau)
        tau_prev = t if t_prev is None else t_prev

        records.append(IterationRecord(
            iteration=index,
            relative_position=Vec2(x, y),
            tau=tau,
            tau_prev=tau_prev,
            virtual_target=virtual_target,
            virtual_target_offset=offset,
            actual_trajectory_end=landing,
        ))

        if d < floor:
            logger.debug("Newton solver hit zero aim distance at t=%g", t)
            break

        error = math.hypot(landing.x - target.x, landing.y - target.y)
        if error <= geometry.tolerance:
            break

        f = t - tau
        f_prime = 1.0 + (x * vx + y * vy) / (vp * d)
        if abs(f_prime) < floor:
            logger.debug("Newton solver stopped on singular derivative at t=%g", t)
            break

        t_prev = t
        t = _newton_update(t, f, f_prime)

    return tuple(records)


def newton_iterations_to_convergence(
    geometry: ShotGeometry,
    shooter_vel: Vec2,
    max_iter: int,
) -> int:
    """
    Iterations Newton's method needs to land within tolerance.

    Same recurrence as run_newton_iterations, but tests |F| * |v| against
    the tolerance instead of building records.

    Returns:
        First 1-based iteration meeting tolerance, or max_iter when the
        cap is exhausted, the derivative is singular, or the geometry is
        uninitialized.
    """
    if not geometry.is_initialized:
        return max_iter
    if not geometry.projectile_speed > 0.0:
        return max_iter

    floor = SolverConstants.NUMERICAL_FLOOR
    vp = geometry.projectile_speed
    vx, vy = shooter_vel.x, shooter_vel.y
    dx0 = geometry.target_pos.x - geometry.shooter_pos.x
    dy0 = geometry.target_pos.y - geometry.shooter_pos.y

    d0 = math.hypot(dx0, dy0)
    if d0 < floor:
        return 1

    v_mag = math.hypot(vx, vy)
    tol = geometry.tolerance
    t = d0 / vp

    for k in range(1, max_iter + 1):
        x = dx0 - vx * t
        y = dy0 - vy * t
        d = math.hypot(x, y)
        if d < floor:
            return k

        f = t - d / vp
        if abs(f) * v_mag <= tol:
            return k

        f_prime = 1.0 + (x * vx + y * vy) / (vp * d)
        if abs(f_prime) < floor:
            return max_iter

        t = _newton_update(t, f, f_prime)

    return max_iter
