# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for exporting convergence artifacts.

Adapters implement this to write boundary curves and heat maps in
various file formats (JSON, CSV, etc.) for plotting tools.
"""
from typing import Protocol, Sequence, runtime_checkable

from dynamic_shooting.domain.heatmap import HeatmapGrid
from dynamic_shooting.domain.region_of_convergence import PolarSample


@runtime_checkable
class ArtifactExporter(Protocol):
    """Port for writing derived analysis artifacts to file."""

    def export_curve(self, samples: Sequence[PolarSample], path: str) -> int:
        """
        Export a polar boundary curve (region of convergence or
        reachability boundary).

        Returns:
            Number of samples written.
        """
        ...

    def export_heatmap(self, grid: HeatmapGrid, path: str) -> int:
        """
        Export a heat-map grid with its sampling window.

        Returns:
            Number of cells written.
        """
        ...
