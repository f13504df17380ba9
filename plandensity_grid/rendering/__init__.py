"""
Rendering Layer
===============

Bounded Context: Result sinks.

Responsibilities:
- Draw classified cells as a heatmap image (band colour, hit counter label)
- Export the report as JSON

Non-responsibilities:
- Overlap computation (handled by geometry)
- Counting and classification (handled by analytics)

Design:
- Stateless drawing functions
- Uses supervision drawing utilities
"""

from plandensity_grid.rendering.visualizer import BAND_COLORS, HeatmapImageSink, HeatmapVisualizer
from plandensity_grid.rendering.report import JsonReportSink

__all__ = [
    "BAND_COLORS",
    "HeatmapVisualizer",
    "HeatmapImageSink",
    "JsonReportSink",
]
