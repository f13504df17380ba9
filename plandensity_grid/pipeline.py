"""
Analysis Pipeline Module
========================

Bounded Context: Orchestration of one analysis pass.

Design:
- Orchestrator: lattice -> per-marker overlap -> ranking -> classification -> sinks
- Builder pattern: Fluent configuration
- Fail Fast: configuration and lattice errors abort before any marker
- Per-marker failures are isolated, logged and reported in the result

Dependencies:
- plandensity_grid.geometry (lattice, overlap engine)
- plandensity_grid.analytics (accumulator, classifier)
- plandensity_grid.rendering (result sinks)
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Protocol, Sequence

import numpy as np

from plandensity_grid.analytics.accumulator import HitAccumulator
from plandensity_grid.analytics.classifier import classify
from plandensity_grid.config import AnalysisConfig
from plandensity_grid.errors import ConfigurationError, GeometryError, MarkerSkipped
from plandensity_grid.geometry.lattice import Lattice, build_lattice
from plandensity_grid.geometry.overlap import OverlapEngine
from plandensity_grid.geometry.provider import GeometryProvider, ShapelyGeometryProvider
from plandensity_grid.geometry.shapes import Marker
from plandensity_grid.logging import LogEvent, StructuredLogger, create_logger
from plandensity_grid.schemas import AnalysisReport, CellResult, SkippedMarker
from plandensity_grid.sources import MarkerSource


class ResultSink(Protocol):
    """Consumer of classified cells (image, file, host scene, ...)."""

    def write(self, report: AnalysisReport) -> None:
        ...


@dataclass
class PipelineConfig:
    """
    Pipeline configuration.

    Design:
    - All dependencies injected
    - Validated at construction
    """

    analysis: AnalysisConfig
    provider: GeometryProvider
    sinks: List[ResultSink] = field(default_factory=list)
    logger: Optional[StructuredLogger] = None


def classify_cells(lattice: Lattice, counts: Sequence[int]) -> List[CellResult]:
    """
    Classify every cell of the lattice by its hit counter.

    Args:
        lattice: Lattice of the pass
        counts: Hit counters indexed by cell index

    Returns:
        CellResult per cell, in index order
    """
    return [
        CellResult(
            index=cell.index,
            boundary=cell.boundary,
            band=classify(int(counts[cell.index])),
            hit_counter=int(counts[cell.index]),
        )
        for cell in lattice
    ]


class PlanDensityPipeline:
    """
    Runs analysis passes.

    Every run() builds its own lattice and accumulator, so passes never
    share state.

    Usage:
        pipeline = (
            PipelineBuilder()
            .with_config(AnalysisConfig.from_yaml("analysis.yaml"))
            .add_sink(HeatmapImageSink("heatmap.png"))
            .build()
        )

        report = pipeline.process_source(MarkerSource.from_file("markers.yaml"))
    """

    def __init__(self, config: PipelineConfig):
        """
        Initialize pipeline with configuration.

        Args:
            config: Pipeline configuration
        """
        self.config = config
        self.logger = config.logger or create_logger("pipeline")
        self.engine = OverlapEngine(
            split_area_tolerance=config.analysis.split_area_tolerance,
            provider=config.provider,
        )
        self._validate_config()

    def _validate_config(self) -> None:
        """Validate configuration (fail fast)."""
        if not isinstance(self.config.analysis, AnalysisConfig):
            raise ConfigurationError(
                f"analysis must be an AnalysisConfig, got {type(self.config.analysis)}"
            )

    def build_lattice(self) -> Lattice:
        """
        Build a fresh lattice for one pass.

        Raises:
            GeometryError: If a cell region cannot be built (pass aborted)
        """
        try:
            lattice = build_lattice(self.config.analysis.grid, self.config.provider)
        except GeometryError as e:
            self.logger.error(
                event=LogEvent.GEOMETRY_ERROR,
                message="Lattice construction failed",
                exc_info=e,
            )
            raise

        self.logger.info(
            event=LogEvent.GRID_BUILT,
            message=f"Built lattice of {len(lattice)} cells",
            metadata={
                'cell_count': len(lattice),
                'extent': list(lattice.extent),
            }
        )
        return lattice

    def process_marker(
        self,
        marker: Marker,
        lattice: Lattice,
        accumulator: HitAccumulator,
    ) -> np.ndarray:
        """
        Measure one marker and increment the counters of its top-K cells.

        Returns:
            Indices of the incremented cells

        Raises:
            MarkerSkipped: If the overlap cannot be computed for this marker
        """
        try:
            overlap_areas = self.engine.compute(marker, lattice)
        except GeometryError as e:
            raise MarkerSkipped(marker.marker_id, str(e)) from e

        selected = accumulator.update(overlap_areas)

        self.logger.debug(
            event=LogEvent.MARKER_PROCESSED,
            message=f"Processed marker {marker.marker_id}",
            metadata={
                'marker_id': marker.marker_id,
                'selected': [int(i) for i in selected],
                'selected_areas': [float(overlap_areas[i]) for i in selected],
            }
        )
        return selected

    def run(
        self,
        markers: Iterable[Marker],
        skipped: Sequence[SkippedMarker] = (),
    ) -> AnalysisReport:
        """
        Run one analysis pass and hand the result to every sink.

        Pass stages:
        1. Lattice construction
        2. Per marker, in order: overlap areas, top-K increment
        3. Classification of every cell
        4. Result sinks

        Args:
            markers: Validated markers, processed in order
            skipped: Markers already rejected upstream, carried into the report

        Returns:
            AnalysisReport
        """
        analysis = self.config.analysis
        lattice = self.build_lattice()
        accumulator = HitAccumulator(cell_count=len(lattice), top_k=analysis.top_k)
        skipped = list(skipped)

        self.logger.info(
            event=LogEvent.PASS_STARTED,
            message="Analysis pass started",
            metadata={'top_k': analysis.top_k, 'tolerance': analysis.split_area_tolerance}
        )

        for marker in markers:
            try:
                self.process_marker(marker, lattice, accumulator)
            except MarkerSkipped as e:
                skipped.append(SkippedMarker(e.marker_id, e.reason, stage="analysis"))
                self.logger.warning(
                    event=LogEvent.MARKER_SKIPPED,
                    message=str(e),
                    metadata={'marker_id': e.marker_id},
                    exc_info=e,
                )

        stats = accumulator.get_stats()
        report = AnalysisReport(
            cells=classify_cells(lattice, stats.counts),
            skipped=skipped,
            markers_processed=stats.markers_processed,
            top_k=analysis.top_k,
            config=analysis.to_dict(),
        )

        self.logger.info(
            event=LogEvent.PASS_COMPLETED,
            message=f"Processed {report.markers_processed} markers, skipped {len(skipped)}",
            metadata={
                'markers_processed': report.markers_processed,
                'skipped': len(skipped),
                'total_hits': stats.total_hits,
                'bands': {b.name: n for b, n in report.band_histogram.items()},
            }
        )

        for sink in self.config.sinks:
            sink.write(report)

        return report

    def process_source(self, source: MarkerSource) -> AnalysisReport:
        """Load markers from a source and run a pass over them."""
        markers, skipped = source.load()
        return self.run(markers, skipped)


class PipelineBuilder:
    """
    Builder for PlanDensityPipeline.

    Design:
    - Fluent API for construction
    - Fail-fast validation

    Usage:
        pipeline = (
            PipelineBuilder()
            .with_config(config)
            .add_sink(JsonReportSink("report.json"))
            .build()
        )
    """

    def __init__(self):
        self._config: Optional[AnalysisConfig] = None
        self._provider: Optional[GeometryProvider] = None
        self._sinks: List[ResultSink] = []
        self._logger: Optional[StructuredLogger] = None

    def with_config(self, config: AnalysisConfig) -> "PipelineBuilder":
        """Set analysis configuration."""
        self._config = config
        return self

    def with_provider(self, provider: GeometryProvider) -> "PipelineBuilder":
        """Set geometry provider."""
        self._provider = provider
        return self

    def with_logger(self, logger: StructuredLogger) -> "PipelineBuilder":
        """Set structured logger."""
        self._logger = logger
        return self

    def add_sink(self, sink: ResultSink) -> "PipelineBuilder":
        """Add a result sink (called in insertion order)."""
        self._sinks.append(sink)
        return self

    def build(self) -> PlanDensityPipeline:
        """
        Build the pipeline.

        Returns:
            Configured pipeline

        Raises:
            ConfigurationError: If required configuration is missing
        """
        if self._config is None:
            error = ConfigurationError("Analysis configuration is required (use .with_config())")
            (self._logger or create_logger("pipeline")).error(
                event=LogEvent.CONFIGURATION_ERROR,
                message=str(error),
                exc_info=error,
            )
            raise error

        if self._provider is None:
            self._provider = ShapelyGeometryProvider()

        config = PipelineConfig(
            analysis=self._config,
            provider=self._provider,
            sinks=self._sinks,
            logger=self._logger,
        )

        return PlanDensityPipeline(config)
