import pytest

from plandensity_grid import (
    AnalysisConfig,
    GridConfig,
    Marker,
    ShapelyGeometryProvider,
    build_lattice,
)
from plandensity_grid.logging import create_logger


def square(min_x, min_y, max_x, max_y):
    """Counter-clockwise vertex ring of an axis-aligned rectangle."""
    return [(min_x, min_y), (max_x, min_y), (max_x, max_y), (min_x, max_y)]


@pytest.fixture
def provider():
    return ShapelyGeometryProvider()


@pytest.fixture
def quad_grid():
    """2x2 cells of size 10 covering [0, 20] x [0, 20]."""
    return GridConfig(
        origin_corner=(0.0, 0.0),
        cell_size=10.0,
        column_count=2,
        row_count=2,
        sweep=(1, 1),
    )


@pytest.fixture
def quad_lattice(quad_grid):
    return build_lattice(quad_grid)


@pytest.fixture
def quad_config(quad_grid):
    return AnalysisConfig(grid=quad_grid, top_k=1, split_area_tolerance=0.1)


@pytest.fixture
def centered_marker():
    """[5, 15] x [5, 15], one quadrant in each cell of quad_grid."""
    return Marker.from_coordinates("centered", square(5, 5, 15, 15))


@pytest.fixture
def quiet_logger():
    return create_logger("tests")
