"""
Marker Source
=============

Bounded Context: Turning drawn shapes into analysable markers.

Responsibilities:
- Read marker candidates from YAML/JSON files or memory
- Keep only candidates drawn in the selection colour (optional)
- Drop open curves and shapes that do not form a valid planar region,
  reporting each as a SkippedMarker

File format:
    markers:
      - id: nurse_01
        coordinates: [[100, 200, 0], [500, 200, 0], [500, 600, 0], [100, 600, 0], [100, 200, 0]]
        color: [36, 146, 251]     # optional
        closed: true              # optional, default: first point == last point
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

import yaml

from plandensity_grid.errors import ConfigurationError, MarkerSkipped
from plandensity_grid.geometry.provider import GeometryProvider, ShapelyGeometryProvider
from plandensity_grid.geometry.shapes import Marker
from plandensity_grid.logging import LogEvent, StructuredLogger, create_logger
from plandensity_grid.schemas import SkippedMarker

RGB = Tuple[int, int, int]

# Draw colour that selection markers carry on the source floor plans
REFERENCE_MARKER_COLOR: RGB = (36, 146, 251)


@dataclass(frozen=True)
class MarkerCandidate:
    """
    A drawn shape before validation.

    Attributes:
        marker_id: Identifier
        coordinates: Vertex list, 2D or 3D
        closed: Explicit closedness flag; None infers it from the vertices
        color: Draw colour as (r, g, b), if known
    """

    marker_id: str
    coordinates: Sequence[Sequence[float]]
    closed: Optional[bool] = None
    color: Optional[RGB] = None

    @property
    def is_closed(self) -> bool:
        if self.closed is not None:
            return self.closed
        if len(self.coordinates) < 2:
            return False
        return tuple(self.coordinates[0]) == tuple(self.coordinates[-1])

    @classmethod
    def from_dict(cls, data: dict, position: int) -> "MarkerCandidate":
        """
        Deserialize from dict.

        Args:
            data: Mapping with keys: coordinates, and optionally id, closed, color
            position: Position in the file, used when no id is given

        Raises:
            MarkerSkipped: If the entry is not a mapping, has no coordinates,
                or its coordinates or colour are malformed
        """
        if not isinstance(data, dict):
            raise MarkerSkipped(f"marker_{position}", "entry is not a mapping")

        marker_id = str(data.get("id", f"marker_{position}"))
        if "coordinates" not in data:
            raise MarkerSkipped(marker_id, "entry has no coordinates")

        color = data.get("color")
        try:
            coordinates = [tuple(point) for point in data["coordinates"]]
            color = tuple(int(c) for c in color) if color is not None else None
        except (TypeError, ValueError) as e:
            raise MarkerSkipped(marker_id, f"malformed entry: {e}") from e

        return cls(
            marker_id=marker_id,
            coordinates=coordinates,
            closed=data.get("closed"),
            color=color,
        )


class MarkerSource:
    """
    Supplies validated markers to an analysis pass.

    Usage:
        source = MarkerSource.from_file("markers.yaml", color_filter=REFERENCE_MARKER_COLOR)
        markers, skipped = source.load()
    """

    def __init__(
        self,
        candidates: Iterable[MarkerCandidate],
        color_filter: Optional[RGB] = None,
        provider: Optional[GeometryProvider] = None,
        logger: Optional[StructuredLogger] = None,
        rejected: Iterable[SkippedMarker] = (),
    ):
        """
        Args:
            candidates: Shapes to validate, in processing order
            color_filter: Keep only candidates drawn in this colour
            provider: Geometry provider (default: shapely)
            logger: Structured logger (default: "source" component)
            rejected: Entries already dropped while reading the file
        """
        self.candidates = list(candidates)
        self.rejected = list(rejected)
        self.color_filter = tuple(color_filter) if color_filter is not None else None
        self.provider = provider or ShapelyGeometryProvider()
        self.logger = logger or create_logger("source")

    @classmethod
    def from_candidates(
        cls,
        coordinates_by_id: dict,
        **kwargs,
    ) -> "MarkerSource":
        """Build a source from {marker_id: coordinates} (all treated as closed)."""
        candidates = [
            MarkerCandidate(marker_id=str(marker_id), coordinates=coords, closed=True)
            for marker_id, coords in coordinates_by_id.items()
        ]
        return cls(candidates, **kwargs)

    @classmethod
    def from_file(cls, path: Path, **kwargs) -> "MarkerSource":
        """
        Load candidates from a YAML or JSON file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigurationError: If the file is not a valid marker list
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Marker file not found: {path}")

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid marker file {path}: {e}") from e

        entries = data.get("markers") if isinstance(data, dict) else data
        if not isinstance(entries, list):
            raise ConfigurationError(f"Marker file {path} must contain a 'markers' list")

        candidates: List[MarkerCandidate] = []
        rejected: List[SkippedMarker] = []
        for position, entry in enumerate(entries):
            try:
                candidates.append(MarkerCandidate.from_dict(entry, position))
            except MarkerSkipped as e:
                rejected.append(SkippedMarker(e.marker_id, e.reason, stage="source"))

        source = cls(candidates, rejected=rejected, **kwargs)
        for skipped in rejected:
            source.logger.warning(
                event=LogEvent.SOURCE_CANDIDATE_REJECTED,
                message=f"Marker '{skipped.marker_id}' skipped: {skipped.reason}",
                metadata={'marker_id': skipped.marker_id, 'reason': skipped.reason}
            )
        source.logger.info(
            event=LogEvent.SOURCE_LOADED,
            message=f"Loaded {len(candidates)} marker candidates",
            metadata={
                'path': str(path),
                'candidate_count': len(candidates),
                'rejected_count': len(rejected),
            }
        )
        return source

    def load(self) -> Tuple[List[Marker], List[SkippedMarker]]:
        """
        Validate candidates.

        Returns:
            Tuple of:
            - markers: Valid markers, in candidate order
            - skipped: Malformed file entries, then open or invalid
              candidates (colour mismatches are not selections, so they
              are not reported)
        """
        markers: List[Marker] = []
        skipped: List[SkippedMarker] = list(self.rejected)

        for candidate in self.candidates:
            if self.color_filter is not None and candidate.color != self.color_filter:
                self.logger.debug(
                    event=LogEvent.SOURCE_CANDIDATE_REJECTED,
                    message=f"Candidate {candidate.marker_id} not in selection colour",
                    metadata={'marker_id': candidate.marker_id, 'color': candidate.color}
                )
                continue

            try:
                if not candidate.is_closed:
                    raise MarkerSkipped(candidate.marker_id, "curve is not closed")
                markers.append(
                    Marker.from_coordinates(
                        candidate.marker_id, candidate.coordinates, self.provider
                    )
                )
            except MarkerSkipped as e:
                skipped.append(SkippedMarker(e.marker_id, e.reason, stage="source"))
                self.logger.warning(
                    event=LogEvent.SOURCE_CANDIDATE_REJECTED,
                    message=str(e),
                    metadata={'marker_id': e.marker_id, 'reason': e.reason}
                )

        return markers, skipped
