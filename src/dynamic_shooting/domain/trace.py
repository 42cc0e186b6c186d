# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Solver iteration records.

A trace is the tuple of records produced by a single solver run. Records
are frozen; the caller owns the trace and nothing refers back to the
solver that produced it.
"""
from dataclasses import dataclass

from dynamic_shooting.domain.geometry import Vec2, distance


@dataclass(frozen=True)
class IterationRecord:
    """One solver step.

    relative_position is the target relative to the shooter as seen by
    this step, virtual_target is the aim point compensating for shooter
    motion, and actual_trajectory_end is where the projectile lands in the
    world frame once the shooter's own motion during flight is added back.
    """
    iteration: int
    relative_position: Vec2
    tau: float
    tau_prev: float
    virtual_target: Vec2
    virtual_target_offset: Vec2
    actual_trajectory_end: Vec2


Trace = tuple[IterationRecord, ...]


def landing_error(record: IterationRecord, target: Vec2) -> float:
    """Distance between the predicted landing point and the real target (m)."""
    return distance(record.actual_trajectory_end, target)


def first_converged_index(trace: Trace, target: Vec2, tolerance: float) -> int | None:
    """1-based index of the first record landing within tolerance, if any."""
    for record in trace:
        if landing_error(record, target) <= tolerance:
            return record.iteration
    return None
