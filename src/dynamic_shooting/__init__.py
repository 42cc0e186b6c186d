# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Dynamic Shooting

Aim-point prediction for a projectile fired at constant speed from a
moving shooter at a stationary target, and velocity-space analysis of
where that prediction converges. Includes fixed-point and Newton-Raphson
intercept solvers, a solver-agnostic convergence classifier, ray-marched
region-of-convergence curves, the closed-form reachability boundary,
iteration-count heat maps, and a debounced interactive session.
"""

from dynamic_shooting.domain.geometry import (
    TOF_FALLBACK_S,
    Vec2,
    distance,
    time_of_flight,
)
from dynamic_shooting.domain.config import (
    HeatmapSettings,
    ShotGeometry,
    SolverConstants,
    SolverMethod,
    SweepSettings,
    default_iteration_cap,
)
from dynamic_shooting.domain.trace import (
    IterationRecord,
    first_converged_index,
    landing_error,
)
from dynamic_shooting.domain.fixed_point import (
    fixed_point_iterations_to_convergence,
    run_fixed_point_iterations,
)
from dynamic_shooting.domain.newton import (
    newton_iterations_to_convergence,
    run_newton_iterations,
)
from dynamic_shooting.domain.convergence import (
    ConvergenceClassification,
    ConvergenceSolver,
    FixedPointSolver,
    NewtonSolver,
    classify,
    get_solver,
    is_convergence_failure,
    iterations_to_converge,
)
from dynamic_shooting.domain.region_of_convergence import (
    MonotonicityViolation,
    PolarSample,
    RegionOfConvergence,
    compute_region_of_convergence,
    find_non_monotone_rays,
)
from dynamic_shooting.domain.reachability import (
    ReachabilityBoundary,
    compute_pursuit_geodesic,
    compute_reachability_boundary,
    reachable_speed,
)
from dynamic_shooting.domain.heatmap import (
    HeatmapGrid,
    VelocityWindow,
    compute_heatmap,
    iteration_fraction,
    iteration_to_rgb,
)
from dynamic_shooting.domain.scheduling import (
    DeferredTask,
    Debouncer,
)
from dynamic_shooting.domain.session import ConvergenceExplorer

__version__ = "1.0.0"

__all__ = [
    "TOF_FALLBACK_S",
    "Vec2",
    "distance",
    "time_of_flight",
    "HeatmapSettings",
    "ShotGeometry",
    "SolverConstants",
    "SolverMethod",
    "SweepSettings",
    "default_iteration_cap",
    "IterationRecord",
    "first_converged_index",
    "landing_error",
    "fixed_point_iterations_to_convergence",
    "run_fixed_point_iterations",
    "newton_iterations_to_convergence",
    "run_newton_iterations",
    "ConvergenceClassification",
    "ConvergenceSolver",
    "FixedPointSolver",
    "NewtonSolver",
    "classify",
    "get_solver",
    "is_convergence_failure",
    "iterations_to_converge",
    "MonotonicityViolation",
    "PolarSample",
    "RegionOfConvergence",
    "compute_region_of_convergence",
    "find_non_monotone_rays",
    "ReachabilityBoundary",
    "compute_pursuit_geodesic",
    "compute_reachability_boundary",
    "reachable_speed",
    "HeatmapGrid",
    "VelocityWindow",
    "compute_heatmap",
    "iteration_fraction",
    "iteration_to_rgb",
    "DeferredTask",
    "Debouncer",
    "ConvergenceExplorer",
]
