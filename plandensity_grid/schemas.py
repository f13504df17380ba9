"""
Result Schemas
==============

Bounded Context: Data handed to result sinks

Design Principles:
- Immutability: frozen=True prevents accidental mutation
- Serialization: to_dict() for JSON export

Types:
- CellResult: One classified cell (boundary, band, hit counter)
- SkippedMarker: Audit record of a marker left out of the pass
- AnalysisReport: Everything one pass produced
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from shapely.geometry import Polygon

from plandensity_grid.analytics.classifier import SeverityBand


@dataclass(frozen=True)
class CellResult:
    """
    One classified cell, as handed to a result sink.

    Attributes:
        index: Cell index in sweep order
        boundary: Cell rectangle
        band: Severity band of the hit counter
        hit_counter: Accumulated hits
    """

    index: int
    boundary: Polygon
    band: SeverityBand
    hit_counter: int

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        return tuple(self.boundary.bounds)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            'index': self.index,
            'bounds': list(self.bounds),
            'band': int(self.band),
            'hit_counter': self.hit_counter,
        }


@dataclass(frozen=True)
class SkippedMarker:
    """Marker excluded from accumulation, with the reason."""

    marker_id: str
    reason: str
    stage: str = "analysis"  # "source" or "analysis"

    def to_dict(self) -> Dict[str, str]:
        return {
            'marker_id': self.marker_id,
            'reason': self.reason,
            'stage': self.stage,
        }


@dataclass(frozen=True)
class AnalysisReport:
    """
    Complete output of one analysis pass.

    Attributes:
        cells: Classified cells in index order
        skipped: Markers left out (source filtering and analysis failures)
        markers_processed: Markers that contributed to the counters
        top_k: Cells incremented per marker
        config: Serialized configuration of the pass
    """

    cells: List[CellResult]
    skipped: List[SkippedMarker] = field(default_factory=list)
    markers_processed: int = 0
    top_k: int = 0
    config: Optional[Dict[str, Any]] = None

    @property
    def band_histogram(self) -> Dict[SeverityBand, int]:
        """Number of cells per severity band."""
        histogram = {band: 0 for band in SeverityBand}
        for cell in self.cells:
            histogram[cell.band] += 1
        return histogram

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            'markers_processed': self.markers_processed,
            'top_k': self.top_k,
            'config': self.config,
            'band_histogram': {
                band.name: count for band, count in self.band_histogram.items()
            },
            'cells': [cell.to_dict() for cell in self.cells],
            'skipped': [s.to_dict() for s in self.skipped],
        }
