# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the velocity-space iteration heat map."""
import numpy as np
import pytest

from dynamic_shooting.domain.config import ShotGeometry, SolverMethod
from dynamic_shooting.domain.convergence import iterations_to_converge
from dynamic_shooting.domain.geometry import Vec2
from dynamic_shooting.domain.heatmap import (
    HeatmapGrid,
    VelocityWindow,
    compute_heatmap,
    iteration_fraction,
    iteration_to_rgb,
)


GEOMETRY = ShotGeometry()


# ── Velocity window ──────────────────────────────────────────────────

class TestVelocityWindow:

    def test_centered(self):
        w = VelocityWindow.centered(20.0)
        assert (w.vx_min, w.vx_max, w.vy_min, w.vy_max) == (-20.0, 20.0, -20.0, 20.0)

    def test_centered_offset(self):
        w = VelocityWindow.centered(1.0, center=Vec2(2.0, -3.0))
        assert (w.vx_min, w.vx_max, w.vy_min, w.vy_max) == (1.0, 3.0, -4.0, -2.0)

    def test_cell_centres_top_left_origin(self):
        w = VelocityWindow.centered(2.0)
        assert w.cell_velocity(0, 0, 4) == Vec2(-1.5, 1.5)
        assert w.cell_velocity(3, 3, 4) == Vec2(1.5, -1.5)
        assert w.cell_velocity(0, 3, 4) == Vec2(1.5, 1.5)

    def test_axes_match_cell_velocity(self):
        w = VelocityWindow(vx_min=-3.0, vx_max=5.0, vy_min=-1.0, vy_max=7.0)
        vx, vy = w.axes(8)
        assert vx.shape == (8,)
        assert vy.shape == (8,)
        for row in range(8):
            for col in range(8):
                cell = w.cell_velocity(row, col, 8)
                assert cell.x == pytest.approx(vx[col])
                assert cell.y == pytest.approx(vy[row])

    def test_inverted_window_rejected(self):
        with pytest.raises(ValueError):
            VelocityWindow(vx_min=1.0, vx_max=-1.0, vy_min=-1.0, vy_max=1.0).validate()
        with pytest.raises(ValueError):
            VelocityWindow(vx_min=-1.0, vx_max=1.0, vy_min=0.0, vy_max=0.0).validate()


# ── Grid computation ─────────────────────────────────────────────────

class TestComputeHeatmap:

    @pytest.mark.parametrize("resolution", [1, 3, 7])
    def test_shape(self, resolution):
        grid = compute_heatmap(GEOMETRY, VelocityWindow.centered(5.0), resolution, 20)
        assert isinstance(grid, HeatmapGrid)
        assert grid.resolution == resolution
        assert grid.as_array().shape == (resolution, resolution)
        assert grid.as_array().dtype == np.int64

    def test_counts_within_cap(self):
        grid = compute_heatmap(GEOMETRY, VelocityWindow.centered(10.0), 9, 20)
        arr = grid.as_array()
        assert arr.min() >= 1
        assert arr.max() <= 20

    def test_centre_cell_is_stationary(self):
        grid = compute_heatmap(GEOMETRY, VelocityWindow.centered(3.0), 3, 20)
        assert grid.velocity_at(1, 1) == Vec2(0.0, 0.0)
        assert grid.counts[1][1] == 1

    @pytest.mark.parametrize("method", list(SolverMethod))
    def test_cells_match_classifier(self, method):
        window = VelocityWindow.centered(4.0)
        grid = compute_heatmap(GEOMETRY, window, 5, 30, method)
        for row in range(5):
            for col in range(5):
                vel = window.cell_velocity(row, col, 5)
                assert grid.counts[row][col] == iterations_to_converge(
                    GEOMETRY, vel, 30, method,
                )

    def test_records_cap_and_method(self):
        grid = compute_heatmap(
            GEOMETRY, VelocityWindow.centered(1.0), 2, 1000, SolverMethod.FIXED_POINT,
        )
        assert grid.iteration_cap == 1000
        assert grid.method is SolverMethod.FIXED_POINT

    def test_deterministic(self):
        window = VelocityWindow.centered(6.0)
        assert compute_heatmap(GEOMETRY, window, 6, 20) == compute_heatmap(
            GEOMETRY, window, 6, 20,
        )

    def test_uninitialized_all_cap(self):
        g = ShotGeometry(shooter_pos=None)
        grid = compute_heatmap(g, VelocityWindow.centered(5.0), 4, 20)
        assert (grid.as_array() == 20).all()
        assert grid.converged_fraction() == 0.0

    def test_converged_fraction(self):
        grid = compute_heatmap(GEOMETRY, VelocityWindow.centered(10.0), 8, 20)
        assert 0.0 < grid.converged_fraction() <= 1.0

    def test_invalid_arguments(self):
        window = VelocityWindow.centered(5.0)
        with pytest.raises(ValueError):
            compute_heatmap(GEOMETRY, window, 0, 20)
        with pytest.raises(ValueError):
            compute_heatmap(GEOMETRY, window, 4, 0)


# ── Colour mapping ───────────────────────────────────────────────────

class TestColourMapping:

    def test_fraction_endpoints(self):
        assert iteration_fraction(1, 20) == 0.0
        assert iteration_fraction(20, 20) == pytest.approx(1.0)

    def test_fraction_logarithmic(self):
        assert iteration_fraction(10, 100) == pytest.approx(0.5)

    def test_fraction_clamped(self):
        assert iteration_fraction(0, 20) == 0.0
        assert iteration_fraction(50, 20) == pytest.approx(1.0)

    def test_cap_of_one(self):
        assert iteration_fraction(1, 1) == 0.0

    def test_rgb_endpoints(self):
        assert iteration_to_rgb(1, 20) == (0, 68, 27)
        assert iteration_to_rgb(20, 20) == (255, 255, 255)

    def test_rgb_monotone_brightening(self):
        colours = [iteration_to_rgb(k, 20) for k in range(1, 21)]
        for earlier, later in zip(colours, colours[1:]):
            assert all(b >= a for a, b in zip(earlier, later))
