import numpy as np
import pytest

from plandensity_grid import (
    ConfigurationError,
    GeometryError,
    GridConfig,
    HitAccumulator,
    Marker,
    OverlapEngine,
    ShapelyGeometryProvider,
    build_lattice,
)
from tests.conftest import square


@pytest.fixture
def engine():
    return OverlapEngine(split_area_tolerance=0.1)


def test_marker_outside_lattice_has_zero_overlap(engine, quad_lattice):
    marker = Marker.from_coordinates("far", square(100, 100, 110, 110))

    areas = engine.compute(marker, quad_lattice)

    assert areas.shape == (4,)
    assert np.all(areas == 0.0)


def test_marker_touching_edge_only_has_zero_overlap(engine, quad_lattice):
    marker = Marker.from_coordinates("neighbour", square(20, 0, 30, 10))

    assert np.all(engine.compute(marker, quad_lattice) == 0.0)


def test_marker_equal_to_cell_uses_full_cell_area(engine, quad_lattice):
    marker = Marker.from_coordinates("exact", square(10, 10, 20, 20))

    areas = engine.compute(marker, quad_lattice)

    assert areas[3] == pytest.approx(quad_lattice[3].area)
    assert HitAccumulator.rank(areas)[0] == 3


def test_marker_containing_cell_uses_full_cell_area(engine, quad_lattice):
    marker = Marker.from_coordinates("big", square(-5, -5, 25, 25))

    areas = engine.compute(marker, quad_lattice)

    assert areas == pytest.approx([100.0, 100.0, 100.0, 100.0])


def test_centered_marker_yields_quadrant_per_cell(engine, quad_lattice, centered_marker):
    areas = engine.compute(centered_marker, quad_lattice)

    assert areas == pytest.approx([25.0, 25.0, 25.0, 25.0])


def test_fragment_nearest_marker_center_is_selected(engine):
    lattice = build_lattice(
        GridConfig(origin_corner=(0, 0), cell_size=10, column_count=1, row_count=1, sweep=(1, 1))
    )
    # Overlap [7, 10] x [0, 10], remainder [0, 7] x [0, 10]
    marker = Marker.from_coordinates("right", square(7, 0, 30, 10))

    areas = engine.compute(marker, lattice)

    assert areas[0] == pytest.approx(30.0)


def test_sliver_below_tolerance_counts_as_full_cell():
    lattice = build_lattice(
        GridConfig(origin_corner=(0, 0), cell_size=10, column_count=1, row_count=1, sweep=(1, 1))
    )
    marker = Marker.from_coordinates("sliver", square(9.995, 0, 15, 10))

    lenient = OverlapEngine(split_area_tolerance=0.1).compute(marker, lattice)
    strict = OverlapEngine(split_area_tolerance=0.0).compute(marker, lattice)

    assert lenient[0] == pytest.approx(100.0)
    assert strict[0] == pytest.approx(0.05, abs=1e-6)


def test_compute_is_idempotent(engine, quad_lattice):
    marker = Marker.from_coordinates("triangle", [(2, 3), (17, 6), (8, 18)])

    first = engine.compute(marker, quad_lattice)
    second = engine.compute(marker, quad_lattice)

    np.testing.assert_array_equal(first, second)


def test_each_call_returns_fresh_zeroed_scratch(engine, quad_lattice, centered_marker):
    first = engine.compute(centered_marker, quad_lattice)
    far = Marker.from_coordinates("far", square(100, 100, 110, 110))

    second = engine.compute(far, quad_lattice)

    assert second is not first
    assert np.all(second == 0.0)
    assert first == pytest.approx([25.0] * 4)


def test_provider_failure_propagates_as_geometry_error(quad_lattice, centered_marker):
    class FailingProvider(ShapelyGeometryProvider):
        def intersect(self, region, other):
            raise GeometryError("boom")

    engine = OverlapEngine(split_area_tolerance=0.1, provider=FailingProvider())

    with pytest.raises(GeometryError):
        engine.compute(centered_marker, quad_lattice)


def test_negative_tolerance_rejected():
    with pytest.raises(ConfigurationError):
        OverlapEngine(split_area_tolerance=-1.0)
