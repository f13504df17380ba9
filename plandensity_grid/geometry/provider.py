"""
Geometry Provider Module
========================

Planar region primitives and boolean operations used by the overlap engine.

Design:
- Capability interface (Protocol): any 2D polygon boolean library fits
- Shapely implementation shipped as the default provider
- Provider failures surface as GeometryError, never as raw GEOS errors

Dependencies:
- shapely (polygons, intersection, split)
"""

from typing import List, Optional, Protocol, Sequence, Tuple

from shapely.errors import ShapelyError
from shapely.geometry import LineString, MultiLineString, Polygon, box
from shapely.geometry.base import BaseGeometry
from shapely.ops import split as shapely_split
from shapely.validation import explain_validity

from plandensity_grid.errors import GeometryError

Point2D = Tuple[float, float]


class GeometryProvider(Protocol):
    """Capability set the core is written against."""

    def make_region(self, coordinates: Sequence[Point2D]) -> Polygon:
        """Build a closed planar region from an ordered vertex ring."""
        ...

    def make_rectangle(
        self, min_x: float, min_y: float, max_x: float, max_y: float
    ) -> Polygon:
        """Build an axis-aligned rectangular region."""
        ...

    def intersect(self, region: Polygon, other: Polygon) -> Optional[MultiLineString]:
        """
        Boundary curve(s) of the overlap between two regions.

        Returns:
            None when the regions do not share any area
        """
        ...

    def split(self, region: Polygon, boundary: MultiLineString) -> List[Polygon]:
        """Split a region along boundary curves into disjoint fragments."""
        ...

    def area(self, region: Polygon) -> float:
        ...

    def bounding_center(self, region: Polygon) -> Point2D:
        """Centre of the region's axis-aligned bounding box."""
        ...


def _polygon_parts(geometry: BaseGeometry) -> List[Polygon]:
    """Flatten Polygon / MultiPolygon / GeometryCollection into polygons."""
    if geometry.is_empty:
        return []
    if geometry.geom_type == "Polygon":
        return [geometry]
    if hasattr(geometry, "geoms"):
        return [part for sub in geometry.geoms for part in _polygon_parts(sub)]
    return []


class ShapelyGeometryProvider:
    """
    GeometryProvider backed by shapely (GEOS).

    Usage:
        provider = ShapelyGeometryProvider()
        cell = provider.make_rectangle(0, 0, 10, 10)
        marker = provider.make_region([(5, 5), (15, 5), (15, 15), (5, 15)])
        boundary = provider.intersect(marker, cell)
        fragments = provider.split(cell, boundary)
    """

    def make_region(self, coordinates: Sequence[Point2D]) -> Polygon:
        if len(coordinates) < 3:
            raise GeometryError(
                f"A region needs at least 3 vertices, got {len(coordinates)}"
            )

        try:
            region = Polygon(coordinates)
        except (ShapelyError, ValueError) as e:
            raise GeometryError(f"Cannot build region: {e}") from e

        if not region.is_valid:
            raise GeometryError(f"Invalid region: {explain_validity(region)}")
        if region.area <= 0:
            raise GeometryError("Region has zero area")

        return region

    def make_rectangle(
        self, min_x: float, min_y: float, max_x: float, max_y: float
    ) -> Polygon:
        if not (max_x > min_x and max_y > min_y):
            raise GeometryError(
                f"Degenerate rectangle ({min_x}, {min_y}, {max_x}, {max_y})"
            )
        return box(min_x, min_y, max_x, max_y)

    def intersect(self, region: Polygon, other: Polygon) -> Optional[MultiLineString]:
        try:
            overlap = region.intersection(other)
        except ShapelyError as e:
            raise GeometryError(f"Intersection failed: {e}") from e

        # Edge or corner contact leaves lines/points only
        curves = []
        for part in _polygon_parts(overlap):
            if part.area <= 0:
                continue
            curves.append(LineString(part.exterior.coords))
            curves.extend(LineString(ring.coords) for ring in part.interiors)

        if not curves:
            return None
        return MultiLineString(curves)

    def split(self, region: Polygon, boundary: MultiLineString) -> List[Polygon]:
        try:
            pieces = shapely_split(region, boundary)
        except (ShapelyError, ValueError) as e:
            raise GeometryError(f"Split failed: {e}") from e

        fragments = [g for g in pieces.geoms if g.geom_type == "Polygon" and not g.is_empty]
        if not fragments:
            raise GeometryError("Split produced no fragments")
        return fragments

    def area(self, region: Polygon) -> float:
        return float(region.area)

    def bounding_center(self, region: Polygon) -> Point2D:
        min_x, min_y, max_x, max_y = region.bounds
        return ((min_x + max_x) / 2.0, (min_y + max_y) / 2.0)
