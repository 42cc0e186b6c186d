# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Configuration for intercept prediction and convergence analysis.

Immutable snapshots of the scenario geometry and of the sampling
settings used by the derived analyses. Every computation receives one
of these snapshots; none of them is mutated after construction.

No external dependencies — only stdlib dataclasses/enum.
"""
from dataclasses import dataclass, replace
from enum import Enum

from dynamic_shooting.domain.geometry import Vec2


class SolverMethod(Enum):
    FIXED_POINT = "fixed-point"
    NEWTON = "newton"


@dataclass(frozen=True)
class _SolverConstants:
    """Numerical constants shared by both solvers."""
    SETTLE_THRESHOLD_S: float = 0.01     # fixed-point |tau - tau_prev| stop
    NUMERICAL_FLOOR: float = 1e-10       # Newton distance / derivative floor
    MIN_TIME_OF_FLIGHT_S: float = 0.001  # Newton update clamp
    FIXED_POINT_CAP: int = 1000
    NEWTON_CAP: int = 20
    TRACE_ITERATIONS: int = 10           # iterations shown per trace


SolverConstants: _SolverConstants = _SolverConstants()


def default_iteration_cap(method: SolverMethod) -> int:
    """Hard iteration stop used for heat maps with the given solver."""
    if method is SolverMethod.NEWTON:
        return SolverConstants.NEWTON_CAP
    return SolverConstants.FIXED_POINT_CAP


@dataclass(frozen=True)
class ShotGeometry:
    """Scenario snapshot: where the shooter and target are and how fast it fires.

    Either position may be None while the scene is still being set up;
    every analysis treats that as uninitialized geometry and returns its
    documented safe default.
    """
    shooter_pos: Vec2 | None = Vec2(7.5, 4.0)
    target_pos: Vec2 | None = Vec2(7.5, 11.0)
    projectile_speed: float = 3.5  # m/s
    tolerance: float = 0.1         # m, landing-error threshold

    @property
    def is_initialized(self) -> bool:
        return self.shooter_pos is not None and self.target_pos is not None

    def with_changes(self, **changes) -> "ShotGeometry":
        return replace(self, **changes)


@dataclass(frozen=True)
class SweepSettings:
    """Polar sampling of velocity space for boundary curves."""
    num_rays: int = 360
    velocity_step: float = 0.05  # m/s
    max_velocity: float = 20.0   # m/s, ceiling for every ray
    min_sin_phi: float = 0.01    # reachability clamp near the target line

    @property
    def angle_step_deg(self) -> float:
        return 360.0 / self.num_rays

    def validate(self) -> None:
        if self.num_rays < 1:
            raise ValueError(f"num_rays must be >= 1, got {self.num_rays}")
        if self.velocity_step <= 0:
            raise ValueError(
                f"velocity_step must be positive, got {self.velocity_step}"
            )
        if self.max_velocity < 0:
            raise ValueError(
                f"max_velocity must be non-negative, got {self.max_velocity}"
            )


@dataclass(frozen=True)
class HeatmapSettings:
    """Heat-map sampling window, resolution and recompute debounce."""
    grid_resolution: int = 200
    half_width: float = 20.0   # m/s, square window centred on zero velocity
    debounce_s: float = 0.25

    def validate(self) -> None:
        if self.grid_resolution < 1:
            raise ValueError(
                f"grid_resolution must be >= 1, got {self.grid_resolution}"
            )
        if self.half_width <= 0:
            raise ValueError(f"half_width must be positive, got {self.half_width}")
        if self.debounce_s < 0:
            raise ValueError(f"debounce_s must be >= 0, got {self.debounce_s}")
