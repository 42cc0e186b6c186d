#!/usr/bin/env python3
"""Convergence map example: solver comparison + artifact export.

Compares the fixed-point and Newton solvers on a strafing shooter, traces
the region of convergence against the reachability boundary, and exports
both curves and a coarse Newton heat map.

Usage:
    python examples/convergence_map.py
"""
from pathlib import Path

from dynamic_shooting import (
    ShotGeometry,
    SolverMethod,
    SweepSettings,
    Vec2,
    VelocityWindow,
    compute_heatmap,
    compute_reachability_boundary,
    compute_region_of_convergence,
    find_non_monotone_rays,
    iterations_to_converge,
)
from dynamic_shooting.adapters import CsvArtifactExporter, JsonArtifactExporter

OUTPUT_DIR = Path(__file__).resolve().parent


def main(output_dir=OUTPUT_DIR):
    output_dir = Path(output_dir)
    geometry = ShotGeometry()
    sweep = SweepSettings(num_rays=36, velocity_step=0.1)

    # --- Step 1: Iteration counts along a strafe ---
    print("Iterations to land within tolerance (shooter strafing along +x):")
    print(f"  {'Speed':>6} {'Fixed point':>12} {'Newton':>7}")
    print(f"  {'-'*6} {'-'*12} {'-'*7}")
    for speed in (0.5, 1.0, 1.5, 2.0, 2.5, 3.0, 3.25):
        vel = Vec2(speed, 0.0)
        fp = iterations_to_converge(geometry, vel, 1000, SolverMethod.FIXED_POINT)
        nr = iterations_to_converge(geometry, vel, 20, SolverMethod.NEWTON)
        print(f"  {speed:>6.2f} {fp:>12} {nr:>7}")

    # --- Step 2: Region of convergence vs reachability ---
    print("\nRay-marching the region of convergence (budget 10)...")
    region = compute_region_of_convergence(geometry, 10, SolverMethod.FIXED_POINT, sweep)
    boundary = compute_reachability_boundary(geometry, sweep)
    print(f"  {'Bearing':>8} {'Converges to':>13} {'Reachable to':>13}")
    for conv, reach in list(zip(region.samples, boundary.samples))[::6]:
        print(f"  {conv.angle_deg:>7.0f}° {conv.max_velocity:>9.2f} m/s {reach.max_velocity:>9.2f} m/s")

    violations = find_non_monotone_rays(geometry, 10, SolverMethod.FIXED_POINT, sweep)
    if violations:
        print(f"\n  {len(violations)} ray(s) converge again past their first failure:")
        for v in violations:
            print(f"    {v.angle_deg:.0f}°: fails at {v.first_failure:.2f}, "
                  f"recovers at {v.recovered_at:.2f} m/s")

    # --- Step 3: Export artifacts ---
    region_path = output_dir / "region.json"
    reach_path = output_dir / "reachability.csv"
    JsonArtifactExporter().export_curve(region.samples, str(region_path))
    CsvArtifactExporter().export_curve(boundary.samples, str(reach_path))
    print(f"\nExported {region_path} and {reach_path}")

    print("Computing 40x40 Newton heat map...")
    grid = compute_heatmap(geometry, VelocityWindow.centered(10.0), 40, 20)
    heatmap_path = output_dir / "heatmap.csv"
    CsvArtifactExporter().export_heatmap(grid, str(heatmap_path))
    print(f"  {grid.converged_fraction() * 100:.1f}% of cells converge within "
          f"{grid.iteration_cap} iterations")
    print(f"Exported {heatmap_path}")


if __name__ == "__main__":
    main()
