# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Interactive convergence analysis session.

Facade for a presentation layer that changes parameters continuously
(sliders, drags, mode buttons). On every effective change the session
swaps in a new immutable ShotGeometry snapshot and:

- recomputes the cheap artifacts (region of convergence, reachability
  boundary) immediately;
- reschedules the expensive heat map through a Debouncer, so a burst of
  changes inside the settle window costs one heat-map computation.

The heat map runs against the snapshot captured when it was scheduled.
Until it runs, `heatmap` still holds the previous (stale) grid. Nothing
here is shared across threads; the owner drives deferred work by calling
poll().
"""
import logging
import time
from typing import Callable

from dynamic_shooting.domain.config import (
    HeatmapSettings,
    ShotGeometry,
    SolverConstants,
    SolverMethod,
    SweepSettings,
    default_iteration_cap,
)
from dynamic_shooting.domain.convergence import (
    ConvergenceClassification,
    classify,
    get_solver,
)
from dynamic_shooting.domain.geometry import Vec2
from dynamic_shooting.domain.heatmap import HeatmapGrid, VelocityWindow, compute_heatmap
from dynamic_shooting.domain.reachability import (
    ReachabilityBoundary,
    compute_reachability_boundary,
)
from dynamic_shooting.domain.region_of_convergence import (
    RegionOfConvergence,
    compute_region_of_convergence,
)
from dynamic_shooting.domain.scheduling import Debouncer
from dynamic_shooting.domain.trace import Trace

logger = logging.getLogger(__name__)

_UNSET = object()


class ConvergenceExplorer:
    """
    Stateful front end over the pure convergence analyses.

    Args:
        geometry: Initial scenario snapshot.
        method: Active solver.
        iteration_budget: Iteration budget for the region of convergence.
        heatmap_settings: Heat-map resolution, window and debounce delay.
        sweep: Ray sampling for the boundary curves.
        clock: Monotonic time source used by the debouncer.
    """

    def __init__(
        self,
        geometry: ShotGeometry = ShotGeometry(),
        method: SolverMethod = SolverMethod.NEWTON,
        iteration_budget: int = 1,
        heatmap_settings: HeatmapSettings = HeatmapSettings(),
        sweep: SweepSettings = SweepSettings(),
        clock: Callable[[], float] = time.monotonic,
    ):
        if iteration_budget < 1:
            raise ValueError(f"iteration_budget must be >= 1, got {iteration_budget}")
        heatmap_settings.validate()
        sweep.validate()

        self._geometry = geometry
        self._method = method
        self._iteration_budget = iteration_budget
        self._iteration_cap = default_iteration_cap(method)
        self._heatmap_settings = heatmap_settings
        self._window = VelocityWindow.centered(heatmap_settings.half_width)
        self._sweep = sweep
        self._debouncer = Debouncer(heatmap_settings.debounce_s, clock)
        self._heatmap_enabled = False
        self._heatmap: HeatmapGrid | None = None
        self._heatmap_runs = 0

        self._refresh_curves()

    # ── State ────────────────────────────────────────────────────────

    @property
    def geometry(self) -> ShotGeometry:
        return self._geometry

    @property
    def method(self) -> SolverMethod:
        return self._method

    @property
    def iteration_budget(self) -> int:
        return self._iteration_budget

    @property
    def iteration_cap(self) -> int:
        return self._iteration_cap

    @property
    def window(self) -> VelocityWindow:
        return self._window

    @property
    def region(self) -> RegionOfConvergence:
        return self._region

    @property
    def boundary(self) -> ReachabilityBoundary:
        return self._boundary

    @property
    def heatmap(self) -> HeatmapGrid | None:
        """Last completed heat map, possibly stale, or None."""
        return self._heatmap

    @property
    def heatmap_runs(self) -> int:
        """Number of heat-map computations performed so far."""
        return self._heatmap_runs

    @property
    def heatmap_enabled(self) -> bool:
        return self._heatmap_enabled

    @property
    def heatmap_pending(self) -> bool:
        return self._debouncer.pending is not None

    # ── Parameter changes ────────────────────────────────────────────

    def update(
        self,
        *,
        projectile_speed=_UNSET,
        tolerance=_UNSET,
        shooter_pos=_UNSET,
        target_pos=_UNSET,
        iteration_budget=_UNSET,
        method=_UNSET,
    ) -> bool:
        """
        Apply parameter changes.

        Only the keywords passed are changed; positions may be set to None
        to mark the geometry uninitialized. Changing the solver method
        resets the heat-map iteration cap to that solver's default.

        Returns:
            True if anything changed (and artifacts were refreshed).
        """
        if method is not _UNSET:
            method = SolverMethod(method)
        geometry_changes = {
            name: value for name, value in (
                ("projectile_speed", projectile_speed),
                ("tolerance", tolerance),
                ("shooter_pos", shooter_pos),
                ("target_pos", target_pos),
            )
            if value is not _UNSET and getattr(self._geometry, name) != value
        }
        budget_changed = (
            iteration_budget is not _UNSET and iteration_budget != self._iteration_budget
        )
        method_changed = method is not _UNSET and method is not self._method

        if not (geometry_changes or budget_changed or method_changed):
            return False

        if budget_changed and iteration_budget < 1:
            raise ValueError(f"iteration_budget must be >= 1, got {iteration_budget}")

        if geometry_changes:
            self._geometry = self._geometry.with_changes(**geometry_changes)
        if budget_changed:
            self._iteration_budget = iteration_budget
        if method_changed:
            self._method = method
            self._iteration_cap = default_iteration_cap(method)

        logger.debug(
            "Session update: geometry=%s budget=%s method=%s",
            sorted(geometry_changes), budget_changed, method_changed,
        )
        self._refresh_curves()
        if self._heatmap_enabled:
            self._schedule_heatmap()
        return True

    def set_window(self, window: VelocityWindow) -> None:
        """Change the heat-map window, e.g. after the view was resized."""
        window.validate()
        if window == self._window:
            return
        self._window = window
        if self._heatmap_enabled:
            self._schedule_heatmap()

    # ── Heat map ─────────────────────────────────────────────────────

    def enable_heatmap(self) -> HeatmapGrid:
        """Start maintaining the heat map; computes it once right away."""
        self._heatmap_enabled = True
        self._debouncer.cancel()
        self._run_heatmap(self._geometry, self._method, self._iteration_cap, self._window)
        return self._heatmap

    def disable_heatmap(self) -> None:
        """Stop maintaining the heat map and drop any pending recomputation."""
        self._heatmap_enabled = False
        self._debouncer.cancel()

    def poll(self, now: float | None = None) -> bool:
        """Run the deferred heat-map computation if it is due.

        Returns:
            True if a heat map was computed.
        """
        return self._debouncer.run_due(now)

    def _schedule_heatmap(self) -> None:
        geometry = self._geometry
        method = self._method
        cap = self._iteration_cap
        window = self._window
        self._debouncer.schedule(
            lambda: self._run_heatmap(geometry, method, cap, window)
        )

    def _run_heatmap(
        self,
        geometry: ShotGeometry,
        method: SolverMethod,
        cap: int,
        window: VelocityWindow,
    ) -> None:
        self._heatmap = compute_heatmap(
            geometry, window, self._heatmap_settings.grid_resolution, cap, method,
        )
        self._heatmap_runs += 1
        logger.debug(
            "Heat map computed: %dx%d, method=%s, cap=%d",
            self._heatmap.resolution, self._heatmap.resolution, method.value, cap,
        )

    # ── Queries ──────────────────────────────────────────────────────

    def trace(
        self,
        shooter_vel: Vec2,
        max_iter: int = SolverConstants.TRACE_ITERATIONS,
    ) -> Trace:
        """Iteration trace of the active solver for one shooter velocity."""
        if max_iter < 1:
            raise ValueError(f"max_iter must be >= 1, got {max_iter}")
        return get_solver(self._method).run(self._geometry, shooter_vel, max_iter)

    def classify(
        self,
        shooter_vel: Vec2,
        max_iter: int | None = None,
    ) -> ConvergenceClassification:
        """Convergence verdict for one velocity; defaults to the heat-map cap."""
        cap = self._iteration_cap if max_iter is None else max_iter
        return classify(self._geometry, shooter_vel, cap, self._method)

    def _refresh_curves(self) -> None:
        self._region = compute_region_of_convergence(
            self._geometry, self._iteration_budget, self._method, self._sweep,
        )
        self._boundary = compute_reachability_boundary(self._geometry, self._sweep)
