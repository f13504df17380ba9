"""
Overlap Engine Module
=====================

Per-marker overlap area against every cell of the lattice.

Design:
- Stateless with respect to the pass: every call returns a fresh,
  zero-initialised scratch array indexed by cell index
- Closest-fragment rule: the cell is split along the overlap boundary and
  the fragment whose bounding-box centre is nearest the marker centre
  stands for the overlapping portion
- Degenerate fragments (area below split_area_tolerance) mean the marker
  swallows the cell: the full cell area is used instead
"""

import math
from typing import Optional

import numpy as np

from plandensity_grid.errors import ConfigurationError
from plandensity_grid.geometry.lattice import Lattice
from plandensity_grid.geometry.provider import GeometryProvider, ShapelyGeometryProvider
from plandensity_grid.geometry.shapes import Cell, Marker


class OverlapEngine:
    """
    Computes resolved overlap areas for one marker at a time.

    Usage:
        engine = OverlapEngine(split_area_tolerance=0.1)
        areas = engine.compute(marker, lattice)   # shape (len(lattice),)
    """

    def __init__(
        self,
        split_area_tolerance: float,
        provider: Optional[GeometryProvider] = None,
    ):
        """
        Args:
            split_area_tolerance: Fragment area below which the full cell
                area is used
            provider: Geometry provider (default: shapely)
        """
        if not math.isfinite(split_area_tolerance) or split_area_tolerance < 0:
            raise ConfigurationError(
                f"split_area_tolerance must be >= 0, got {split_area_tolerance}"
            )
        self.split_area_tolerance = split_area_tolerance
        self.provider = provider or ShapelyGeometryProvider()

    def compute(self, marker: Marker, lattice: Lattice) -> np.ndarray:
        """
        Overlap area of the marker with every cell.

        Args:
            marker: Marker to measure
            lattice: Full cell lattice

        Returns:
            Float array of length len(lattice), entry i belongs to cell index i

        Raises:
            GeometryError: If the provider fails for this marker
        """
        overlap_areas = np.zeros(len(lattice), dtype=np.float64)

        for cell in lattice:
            overlap_areas[cell.index] = self.resolve_cell(marker, cell)

        return overlap_areas

    def resolve_cell(self, marker: Marker, cell: Cell) -> float:
        """
        Overlap area of the marker with a single cell.

        Returns:
            0.0 when the regions share no area
        """
        boundary = self.provider.intersect(marker.region, cell.boundary)
        if boundary is None:
            return 0.0

        fragments = self.provider.split(cell.boundary, boundary)
        mx, my = marker.center

        def distance_to_marker(fragment) -> float:
            fx, fy = self.provider.bounding_center(fragment)
            return math.hypot(fx - mx, fy - my)

        # min() keeps the first fragment on equal distances
        nearest = min(fragments, key=distance_to_marker)
        area = self.provider.area(nearest)

        if area < self.split_area_tolerance:
            return self.provider.area(cell.boundary)
        return area
