# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Iteration-count heat map over a velocity-space window.

Evaluates the solver's convergence count at the centre of every cell of
an N x N grid covering a rectangular window of shooter velocities. Row 0
is the top of the window (largest vy), column 0 its left edge (smallest
vx), matching image orientation. Cost grows as N^2 * max_iter, which is
why recomputation is debounced by the session.

Colour mapping is logarithmic in the iteration count, from dark green
(1 iteration) to white (cap).

External dependency: numpy (allowed in domain layer).
"""
import math
from dataclasses import dataclass

import numpy as np

from dynamic_shooting.domain.config import ShotGeometry, SolverMethod
from dynamic_shooting.domain.convergence import get_solver
from dynamic_shooting.domain.geometry import Vec2

_LOW_RGB = (0, 68, 27)
_HIGH_RGB = (255, 255, 255)


@dataclass(frozen=True)
class VelocityWindow:
    """Axis-aligned velocity-space sampling window (m/s)."""
    vx_min: float
    vx_max: float
    vy_min: float
    vy_max: float

    @staticmethod
    def centered(half_width: float, center: Vec2 = Vec2(0.0, 0.0)) -> "VelocityWindow":
        return VelocityWindow(
            vx_min=center.x - half_width, vx_max=center.x + half_width,
            vy_min=center.y - half_width, vy_max=center.y + half_width,
        )

    def validate(self) -> None:
        if not (self.vx_max > self.vx_min and self.vy_max > self.vy_min):
            raise ValueError(
                f"Velocity window must have positive extent, got "
                f"vx [{self.vx_min}, {self.vx_max}], vy [{self.vy_min}, {self.vy_max}]"
            )

    def cell_velocity(self, row: int, col: int, resolution: int) -> Vec2:
        """Velocity at the centre of grid cell (row, col)."""
        step_x = (self.vx_max - self.vx_min) / resolution
        step_y = (self.vy_max - self.vy_min) / resolution
        return Vec2(
            self.vx_min + (col + 0.5) * step_x,
            self.vy_max - (row + 0.5) * step_y,
        )

    def axes(self, resolution: int) -> tuple[np.ndarray, np.ndarray]:
        """Cell-centre vx values (left to right) and vy values (top to bottom)."""
        step_x = (self.vx_max - self.vx_min) / resolution
        step_y = (self.vy_max - self.vy_min) / resolution
        idx = np.arange(resolution, dtype=np.float64) + 0.5
        return self.vx_min + idx * step_x, self.vy_max - idx * step_y


@dataclass(frozen=True)
class HeatmapGrid:
    """Convergence counts per cell together with the window that produced them."""
    counts: tuple[tuple[int, ...], ...]
    window: VelocityWindow
    iteration_cap: int
    method: SolverMethod

    @property
    def resolution(self) -> int:
        return len(self.counts)

    def as_array(self) -> np.ndarray:
        return np.array(self.counts, dtype=np.int64).reshape(self.resolution, self.resolution)

    def velocity_at(self, row: int, col: int) -> Vec2:
        return self.window.cell_velocity(row, col, self.resolution)

    def converged_fraction(self) -> float:
        """Share of cells that met tolerance before the cap."""
        arr = self.as_array()
        if arr.size == 0:
            return 0.0
        return float(np.count_nonzero(arr < self.iteration_cap)) / arr.size


def compute_heatmap(
    geometry: ShotGeometry,
    window: VelocityWindow,
    grid_resolution: int,
    max_iter: int,
    method: SolverMethod = SolverMethod.NEWTON,
) -> HeatmapGrid:
    """
    Sample the convergence iteration count over a velocity window.

    Args:
        geometry: Scenario snapshot.
        window: Velocity-space window to cover.
        grid_resolution: Cells per side (grid is resolution x resolution).
        max_iter: Iteration cap; also the value of non-convergent cells.
        method: Solver whose fast iteration counter is sampled.

    Returns:
        HeatmapGrid with every count in [1, max_iter]. With uninitialized
        geometry every cell holds max_iter.
    """
    if grid_resolution < 1:
        raise ValueError(f"grid_resolution must be >= 1, got {grid_resolution}")
    if max_iter < 1:
        raise ValueError(f"max_iter must be >= 1, got {max_iter}")
    window.validate()

    n = grid_resolution
    if not geometry.is_initialized:
        row = (max_iter,) * n
        return HeatmapGrid(
            counts=(row,) * n, window=window, iteration_cap=max_iter, method=method,
        )

    solver = get_solver(method)
    vx_axis, vy_axis = window.axes(n)
    rows = []
    for vy in vy_axis:
        rows.append(tuple(
            solver.iterations_to_converge(geometry, Vec2(float(vx), float(vy)), max_iter)
            for vx in vx_axis
        ))

    return HeatmapGrid(
        counts=tuple(rows), window=window, iteration_cap=max_iter, method=method,
    )


def iteration_fraction(k: int, cap: int) -> float:
    """Log-scaled position of an iteration count: 0 at 1 iteration, 1 at cap."""
    if cap <= 1:
        return 0.0
    k = min(max(k, 1), cap)
    return math.log(k) / math.log(cap)


def iteration_to_rgb(k: int, cap: int) -> tuple[int, int, int]:
    """Dark green for fast convergence, fading to white at the cap."""
    t = iteration_fraction(k, cap)
    return tuple(
        int(round(lo + t * (hi - lo))) for lo, hi in zip(_LOW_RGB, _HIGH_RGB)
    )
