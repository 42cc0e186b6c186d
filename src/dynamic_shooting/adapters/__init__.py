# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Adapters for artifact export.

External dependencies (json, csv, file I/O) are confined to this layer.
"""
from dynamic_shooting.adapters.csv_exporter import CsvArtifactExporter
from dynamic_shooting.adapters.json_exporter import JsonArtifactExporter

__all__ = [
    "CsvArtifactExporter",
    "JsonArtifactExporter",
]
