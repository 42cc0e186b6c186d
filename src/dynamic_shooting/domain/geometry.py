# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Planar geometry primitives.

World-frame points and velocities as immutable 2-vectors, plus the
time-of-flight relation for a projectile travelling in a straight line
at constant speed.

No external dependencies — only stdlib math/dataclasses/logging.
"""
import logging
import math
from dataclasses import dataclass

logger = logging.getLogger(__name__)

TOF_FALLBACK_S = 1.0


@dataclass(frozen=True)
class Vec2:
    """2D vector in the world frame (m for points, m/s for velocities)."""
    x: float
    y: float

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> "Vec2":
        return Vec2(-self.x, -self.y)

    def scale(self, k: float) -> "Vec2":
        return Vec2(self.x * k, self.y * k)

    def norm(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    @staticmethod
    def from_polar(magnitude: float, angle_deg: float) -> "Vec2":
        """Vector of given magnitude along a bearing measured from +x, CCW."""
        angle_rad = math.radians(angle_deg)
        return Vec2(magnitude * math.cos(angle_rad), magnitude * math.sin(angle_rad))


ZERO = Vec2(0.0, 0.0)


def distance(a: Vec2, b: Vec2) -> float:
    """Euclidean distance between two points."""
    return (a - b).norm()


def time_of_flight(relative_position: Vec2, projectile_speed: float) -> float:
    """
    Straight-line projectile flight time to a point.

    tau = |relative_position| / projectile_speed

    Non-finite input components, or a non-finite result (e.g. a zero
    projectile speed), are logged and replaced by TOF_FALLBACK_S so that
    NaN never propagates into downstream geometry.

    Args:
        relative_position: Aim point relative to the shooter (m).
        projectile_speed: Projectile speed (m/s).

    Returns:
        Time of flight in seconds, always finite.
    """
    if not relative_position.is_finite():
        logger.error(
            "Invalid relative position for time of flight: (%r, %r)",
            relative_position.x, relative_position.y,
        )
        return TOF_FALLBACK_S

    tof = math.nan
    if projectile_speed != 0.0:
        tof = relative_position.norm() / projectile_speed

    if not math.isfinite(tof):
        logger.error(
            "Invalid time of flight: distance=%r, projectile_speed=%r",
            relative_position.norm(), projectile_speed,
        )
        return TOF_FALLBACK_S
    return tof
