"""
Plan Density Grid v1.0
======================

Bounded Context: Site-density heatmap over a tiled floor plan.

A regular grid of square cells is laid over the plan. Every marker (a
closed outline drawn on the plan) adds one hit to the K cells it overlaps
most; the accumulated hits are then classified into five severity bands.

Architecture:

    plandensity_grid/
    ├── geometry/          # Regions, lattice, overlap (immutable, stateless)
    │   ├── provider.py    # GeometryProvider protocol, shapely implementation
    │   ├── shapes.py      # Cell, Marker
    │   ├── lattice.py     # Lattice, build_lattice
    │   └── overlap.py     # OverlapEngine (closest-fragment rule)
    │
    ├── analytics/         # Counting & classification
    │   ├── accumulator.py # HitAccumulator, HitStats (top-K ranking)
    │   └── classifier.py  # SeverityBand, classify
    │
    ├── rendering/         # Result sinks
    │   ├── visualizer.py  # HeatmapVisualizer, HeatmapImageSink
    │   └── report.py      # JsonReportSink
    │
    ├── sources.py         # MarkerSource (file loading, filtering)
    ├── config.py          # AnalysisConfig, GridConfig, RenderConfig
    └── pipeline.py        # Orchestration

Usage:

    from plandensity_grid import (
        AnalysisConfig, GridConfig, MarkerSource, PipelineBuilder, HeatmapImageSink,
    )

    config = AnalysisConfig(
        grid=GridConfig(origin_corner=(0, 0), cell_size=400,
                        column_count=20, row_count=10, sweep=(1, 1)),
        top_k=4,
        split_area_tolerance=0.1,
    )

    pipeline = (
        PipelineBuilder()
        .with_config(config)
        .add_sink(HeatmapImageSink("heatmap.png"))
        .build()
    )
    report = pipeline.process_source(MarkerSource.from_file("markers.yaml"))
"""

# Configuration & errors
from plandensity_grid.config import AnalysisConfig, GridConfig, RenderConfig
from plandensity_grid.errors import (
    PlanDensityError,
    ConfigurationError,
    GeometryError,
    MarkerSkipped,
)

# Geometry Layer
from plandensity_grid.geometry import (
    GeometryProvider,
    ShapelyGeometryProvider,
    Cell,
    Marker,
    Lattice,
    build_lattice,
    OverlapEngine,
)

# Analytics Layer
from plandensity_grid.analytics import HitAccumulator, HitStats, SeverityBand, classify

# Sources, schemas & sinks
from plandensity_grid.sources import MarkerCandidate, MarkerSource, REFERENCE_MARKER_COLOR
from plandensity_grid.schemas import AnalysisReport, CellResult, SkippedMarker
from plandensity_grid.rendering import HeatmapVisualizer, HeatmapImageSink, JsonReportSink

# Pipeline (orchestration)
from plandensity_grid.pipeline import PlanDensityPipeline, PipelineBuilder, classify_cells

__all__ = [
    # Configuration
    "AnalysisConfig",
    "GridConfig",
    "RenderConfig",
    # Errors
    "PlanDensityError",
    "ConfigurationError",
    "GeometryError",
    "MarkerSkipped",
    # Geometry
    "GeometryProvider",
    "ShapelyGeometryProvider",
    "Cell",
    "Marker",
    "Lattice",
    "build_lattice",
    "OverlapEngine",
    # Analytics
    "HitAccumulator",
    "HitStats",
    "SeverityBand",
    "classify",
    # Sources & results
    "MarkerCandidate",
    "MarkerSource",
    "REFERENCE_MARKER_COLOR",
    "AnalysisReport",
    "CellResult",
    "SkippedMarker",
    # Rendering
    "HeatmapVisualizer",
    "HeatmapImageSink",
    "JsonReportSink",
    # Pipeline
    "PlanDensityPipeline",
    "PipelineBuilder",
    "classify_cells",
]

__version__ = "1.0.0"
