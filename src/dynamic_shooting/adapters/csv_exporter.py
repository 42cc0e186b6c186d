# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
CSV artifact exporter.

Curves are written as angle_deg,max_velocity rows. Heat maps are written
as a matrix: the header row holds the column-centre vx values, and each
following row starts with its vy value followed by the iteration counts.
External dependencies (csv, file I/O) are confined to this adapter.
"""
import csv
import logging
from typing import Sequence

from dynamic_shooting.domain.heatmap import HeatmapGrid
from dynamic_shooting.domain.region_of_convergence import PolarSample
from dynamic_shooting.ports import ArtifactExporter

logger = logging.getLogger(__name__)

_CURVE_HEADER = ['angle_deg', 'max_velocity']


class CsvArtifactExporter(ArtifactExporter):
    """Exports curves and heat maps as CSV tables."""

    def export_curve(self, samples: Sequence[PolarSample], path: str) -> int:
        if not samples:
            logger.warning("Exporting empty curve to %s", path)
        with open(path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(_CURVE_HEADER)
            for s in samples:
                writer.writerow([f'{s.angle_deg:.4f}', f'{s.max_velocity:.4f}'])
        return len(samples)

    def export_heatmap(self, grid: HeatmapGrid, path: str) -> int:
        n = grid.resolution
        if n == 0:
            logger.warning("Exporting empty heat map to %s", path)
            with open(path, 'w', newline='', encoding='utf-8') as f:
                csv.writer(f).writerow(['vy\\vx'])
            return 0
        vx_axis, vy_axis = grid.window.axes(n)
        with open(path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(['vy\\vx'] + [f'{vx:.6f}' for vx in vx_axis])
            for vy, row in zip(vy_axis, grid.counts):
                writer.writerow([f'{vy:.6f}'] + list(row))
        return n * n
