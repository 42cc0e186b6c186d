# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
JSON artifact exporter.

Writes boundary curves as a list of {angle_deg, max_velocity} objects and
heat maps as {window, iteration_cap, method, counts}.
"""
import json
import logging
from typing import Sequence

from dynamic_shooting.domain.heatmap import HeatmapGrid
from dynamic_shooting.domain.region_of_convergence import PolarSample
from dynamic_shooting.ports import ArtifactExporter

logger = logging.getLogger(__name__)


class JsonArtifactExporter(ArtifactExporter):
    """Exports curves and heat maps as JSON documents."""

    def __init__(self, indent: int | None = 2):
        self._indent = indent

    def export_curve(self, samples: Sequence[PolarSample], path: str) -> int:
        if not samples:
            logger.warning("Exporting empty curve to %s", path)
        data = [
            {'angle_deg': s.angle_deg, 'max_velocity': s.max_velocity}
            for s in samples
        ]
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=self._indent)
        return len(data)

    def export_heatmap(self, grid: HeatmapGrid, path: str) -> int:
        if grid.resolution == 0:
            logger.warning("Exporting empty heat map to %s", path)
        w = grid.window
        data = {
            'window': {
                'vx_min': w.vx_min, 'vx_max': w.vx_max,
                'vy_min': w.vy_min, 'vy_max': w.vy_max,
            },
            'iteration_cap': grid.iteration_cap,
            'method': grid.method.value,
            'counts': [list(row) for row in grid.counts],
        }
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=self._indent)
        return grid.resolution * grid.resolution
