"""
Lattice Module
==============

Grid Builder: constructs the cell lattice covering the configured extent.

Sweep order:
    for column in 0..column_count-1        (outer, along x)
        for row in 0..row_count-1          (inner, along y)
            index = column * row_count + row

Each step moves one cell_size away from origin_corner in the direction
given by GridConfig.sweep, so (-1, -1) tiles down and left from a
top-right origin.
"""

from typing import Iterator, Optional, Tuple

from plandensity_grid.config import GridConfig
from plandensity_grid.geometry.provider import GeometryProvider, ShapelyGeometryProvider
from plandensity_grid.geometry.shapes import Cell


class Lattice:
    """
    Ordered, immutable collection of all cells for one analysis pass.

    Usage:
        lattice = build_lattice(GridConfig(
            origin_corner=(0, 0), cell_size=10,
            column_count=2, row_count=2, sweep=(1, 1),
        ))
        len(lattice)      # 4
        lattice[0].bounds  # (0.0, 0.0, 10.0, 10.0)
    """

    def __init__(self, config: GridConfig, cells: Tuple[Cell, ...]):
        self.config = config
        self._cells = cells

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    def __getitem__(self, index: int) -> Cell:
        return self._cells[index]

    @property
    def cells(self) -> Tuple[Cell, ...]:
        return self._cells

    @property
    def extent(self) -> Tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y) covered by all cells."""
        return self.config.extent


def build_lattice(
    config: GridConfig,
    provider: Optional[GeometryProvider] = None,
) -> Lattice:
    """
    Build the lattice of column_count x row_count square cells.

    Args:
        config: Validated grid configuration
        provider: Geometry provider (default: shapely)

    Returns:
        Lattice with indices assigned in sweep order

    Raises:
        GeometryError: If a cell region cannot be built
    """
    provider = provider or ShapelyGeometryProvider()
    ox, oy = config.origin_corner
    sx, sy = config.sweep
    size = config.cell_size

    cells = []
    for column in range(config.column_count):
        # Both edges computed from the origin so neighbours share them exactly
        x0 = ox + sx * column * size
        x1 = ox + sx * (column + 1) * size
        for row in range(config.row_count):
            y0 = oy + sy * row * size
            y1 = oy + sy * (row + 1) * size
            boundary = provider.make_rectangle(
                min(x0, x1), min(y0, y1), max(x0, x1), max(y0, y1)
            )
            cells.append(Cell(index=len(cells), boundary=boundary, column=column, row=row))

    return Lattice(config, tuple(cells))
