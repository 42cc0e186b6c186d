# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Kinematic reachability in shooter-velocity space.

Closed-form bounds that do not depend on any solver or iteration budget.

Reachability boundary ("Mach cone"): for a shooter velocity at bearing
theta, let phi = theta - bearing(shooter -> target), wrapped to
(-180, 180]. A positive-time intercept exists up to

    v_max = v_p                 for |phi| >= 90 deg (rearward)
    v_max = v_p / |sin(phi)|    otherwise, clamped to the ceiling

with |sin(phi)| below min_sin_phi treated as unbounded (ceiling).

Pursuit geodesic: the curve |v| = v_p * cot(theta), theta measured off the
target line, returned as polyline segments for overlaying on
velocity-space plots next to the boundary curves.

No external dependencies — only stdlib math/dataclasses + domain imports.
"""
import math
from dataclasses import dataclass

from dynamic_shooting.domain.config import ShotGeometry, SweepSettings
from dynamic_shooting.domain.geometry import Vec2
from dynamic_shooting.domain.region_of_convergence import PolarSample


@dataclass(frozen=True)
class ReachabilityBoundary:
    """Per-bearing kinematic speed limit for a positive-time intercept."""
    samples: tuple[PolarSample, ...]
    projectile_speed: float


def _wrap_pi(angle_rad: float) -> float:
    """Wrap an angle to (-pi, pi]."""
    while angle_rad > math.pi:
        angle_rad -= 2.0 * math.pi
    while angle_rad <= -math.pi:
        angle_rad += 2.0 * math.pi
    return angle_rad


def target_bearing_rad(geometry: ShotGeometry) -> float:
    """Bearing of the target as seen from the shooter, CCW from +x."""
    dx = geometry.target_pos.x - geometry.shooter_pos.x
    dy = geometry.target_pos.y - geometry.shooter_pos.y
    return math.atan2(dy, dx)


def reachable_speed(
    phi_rad: float,
    projectile_speed: float,
    max_velocity: float = 20.0,
    min_sin_phi: float = 0.01,
) -> float:
    """Kinematic speed bound for a velocity phi_rad off the target line."""
    phi = _wrap_pi(phi_rad)
    if abs(phi) >= math.pi / 2.0:
        return projectile_speed
    sin_phi = abs(math.sin(phi))
    if sin_phi < min_sin_phi:
        return max_velocity
    return min(projectile_speed / sin_phi, max_velocity)


def compute_reachability_boundary(
    geometry: ShotGeometry,
    sweep: SweepSettings = SweepSettings(),
) -> ReachabilityBoundary:
    """
    Evaluate the reachability bound on every sweep ray.

    Args:
        geometry: Scenario snapshot (positions and projectile speed).
        sweep: Ray count, ceiling and the sin(phi) clamp.

    Returns:
        ReachabilityBoundary ordered by bearing from 0 deg. Empty when the
        geometry is uninitialized.
    """
    sweep.validate()
    if not geometry.is_initialized:
        return ReachabilityBoundary(samples=(), projectile_speed=geometry.projectile_speed)

    target_dir = target_bearing_rad(geometry)
    samples = []
    for i in range(sweep.num_rays):
        angle_deg = i * sweep.angle_step_deg
        phi = math.radians(angle_deg) - target_dir
        samples.append(PolarSample(
            angle_deg=angle_deg,
            max_velocity=reachable_speed(
                phi, geometry.projectile_speed,
                sweep.max_velocity, sweep.min_sin_phi,
            ),
        ))
    return ReachabilityBoundary(
        samples=tuple(samples), projectile_speed=geometry.projectile_speed,
    )


def compute_pursuit_geodesic(
    geometry: ShotGeometry,
    max_velocity: float = 20.0,
    num_points: int = 180,
    asymptote_margin_rad: float = 0.05,
) -> tuple[tuple[Vec2, ...], ...]:
    """
    Sample the pursuit geodesic |v| = v_p * cot(theta) on both sides of
    the target line.

    theta runs from +/-asymptote_margin_rad to +/-(pi/2 - margin) in
    num_points steps. Points faster than max_velocity break the curve;
    each contiguous run becomes its own segment.

    Returns:
        Tuple of polyline segments (negative-theta branch first), each a
        tuple of velocity points. Empty when the geometry is uninitialized.
    """
    if num_points < 1:
        raise ValueError(f"num_points must be >= 1, got {num_points}")
    if not geometry.is_initialized:
        return ()

    target_dir = target_bearing_rad(geometry)
    vp = geometry.projectile_speed
    theta_range = math.pi / 2.0 - asymptote_margin_rad
    theta_step = theta_range / num_points

    segments: list[tuple[Vec2, ...]] = []
    for sign in (-1.0, 1.0):
        current: list[Vec2] = []
        for i in range(num_points + 1):
            theta = sign * (asymptote_margin_rad + i * theta_step)
            if abs(theta) >= math.pi / 2.0 - asymptote_margin_rad:
                continue
            speed = abs(vp * math.cos(theta) / math.sin(theta))
            if speed > max_velocity:
                if current:
                    segments.append(tuple(current))
                current = []
                continue
            bearing = theta + target_dir
            current.append(Vec2(speed * math.cos(bearing), speed * math.sin(bearing)))
        if current:
            segments.append(tuple(current))
    return tuple(segments)
