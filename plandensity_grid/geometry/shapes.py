"""
Geometric Shapes Module
========================

Value types for the analysis: lattice cells and input markers.

Design:
- Immutable shapes (frozen dataclass pattern)
- Derived values (area, bounding centre) computed once at construction
- Mutable per-pass state (hit counters, overlap areas) lives elsewhere,
  keyed by cell index
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

from shapely.geometry import Polygon

from plandensity_grid.errors import GeometryError, MarkerSkipped
from plandensity_grid.geometry.provider import (
    GeometryProvider,
    Point2D,
    ShapelyGeometryProvider,
)


@dataclass(frozen=True)
class Cell:
    """
    One fixed rectangular region of the lattice.

    Attributes:
        index: Position in sweep order, unique and contiguous from 0
        boundary: Rectangle region
        column: Outer sweep position
        row: Inner sweep position
    """

    index: int
    boundary: Polygon
    column: int
    row: int
    area: float = field(init=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "area", float(self.boundary.area))

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        return tuple(self.boundary.bounds)

    @property
    def center(self) -> Point2D:
        min_x, min_y, max_x, max_y = self.boundary.bounds
        return ((min_x + max_x) / 2.0, (min_y + max_y) / 2.0)


@dataclass(frozen=True)
class Marker:
    """
    One input closed planar shape.

    The centre is the centre of the bounding box, not the centroid.

    Attributes:
        marker_id: Identifier reported back in skip records
        region: Closed planar region on the analysis plane
        center: Bounding-box centre of the region
    """

    marker_id: str
    region: Polygon
    center: Point2D

    @classmethod
    def from_coordinates(
        cls,
        marker_id: str,
        coordinates: Sequence[Sequence[float]],
        provider: Optional[GeometryProvider] = None,
    ) -> "Marker":
        """
        Build a marker from a vertex ring, projecting onto the XY plane.

        Args:
            marker_id: Marker identifier
            coordinates: (x, y) or (x, y, z) vertices; z is dropped
            provider: Geometry provider (default: shapely)

        Raises:
            MarkerSkipped: If the vertices do not form a valid planar region
        """
        provider = provider or ShapelyGeometryProvider()

        try:
            projected = [(float(p[0]), float(p[1])) for p in coordinates]
        except (TypeError, ValueError, IndexError) as e:
            raise MarkerSkipped(marker_id, f"cannot project coordinates: {e}") from e

        # Closing vertex is implicit
        if len(projected) > 1 and projected[0] == projected[-1]:
            projected = projected[:-1]

        try:
            region = provider.make_region(projected)
        except GeometryError as e:
            raise MarkerSkipped(marker_id, str(e)) from e

        return cls(
            marker_id=marker_id,
            region=region,
            center=provider.bounding_center(region),
        )
