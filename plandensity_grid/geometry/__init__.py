"""
Geometry Layer
==============

Bounded Context: Planar regions, the cell lattice and overlap measurement.

Responsibilities:
- Geometry provider capability (shapely by default)
- Cell and marker value types
- Lattice construction
- Per-marker overlap areas
- NO counting, NO visualization

Design Philosophy:
- Immutable data structures
- Per-marker results returned as fresh arrays, never stored on cells
- Fail-fast validation
"""

from plandensity_grid.geometry.provider import GeometryProvider, ShapelyGeometryProvider
from plandensity_grid.geometry.shapes import Cell, Marker
from plandensity_grid.geometry.lattice import Lattice, build_lattice
from plandensity_grid.geometry.overlap import OverlapEngine

__all__ = [
    "GeometryProvider",
    "ShapelyGeometryProvider",
    "Cell",
    "Marker",
    "Lattice",
    "build_lattice",
    "OverlapEngine",
]
