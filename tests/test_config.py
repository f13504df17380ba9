import numpy as np
import pytest

from plandensity_grid import AnalysisConfig, ConfigurationError, GridConfig


@pytest.mark.parametrize("kwargs", [
    {"cell_size": 0},
    {"cell_size": -5.0},
    {"cell_size": float("nan")},
    {"column_count": 0},
    {"row_count": -1},
    {"row_count": 2.5},
    {"sweep": (1, 0)},
    {"origin_corner": (0.0,)},
])
def test_invalid_grid_config_raises(kwargs):
    params = dict(origin_corner=(0.0, 0.0), cell_size=10.0, column_count=2, row_count=2)
    params.update(kwargs)
    with pytest.raises(ConfigurationError):
        GridConfig(**params)


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        GridConfig(origin_corner=(0, 0), cell_size=0, column_count=1, row_count=1)


@pytest.mark.parametrize("top_k", [0, -1, 1.5, True])
def test_invalid_top_k_raises(quad_grid, top_k):
    with pytest.raises(ConfigurationError):
        AnalysisConfig(grid=quad_grid, top_k=top_k, split_area_tolerance=0.1)


def test_numpy_integer_counts_accepted():
    grid = GridConfig(
        origin_corner=(0.0, 0.0),
        cell_size=10.0,
        column_count=np.int64(3),
        row_count=np.int32(2),
    )
    config = AnalysisConfig(grid=grid, top_k=np.int64(2), split_area_tolerance=0.1)

    assert grid.cell_count == 6
    assert config.to_dict()["top_k"] == 2
    assert type(config.to_dict()["grid"]["column_count"]) is int


def test_negative_tolerance_raises(quad_grid):
    with pytest.raises(ConfigurationError):
        AnalysisConfig(grid=quad_grid, top_k=1, split_area_tolerance=-0.1)


def test_extent_follows_sweep():
    descending = GridConfig(origin_corner=(100, 50), cell_size=10, column_count=3, row_count=2)
    assert descending.extent == (70, 30, 100, 50)

    ascending = GridConfig(
        origin_corner=(100, 50), cell_size=10, column_count=3, row_count=2, sweep=(1, 1)
    )
    assert ascending.extent == (100, 50, 130, 70)


def test_reference_config_covers_positive_quadrant():
    config = AnalysisConfig.reference()

    assert config.grid.cell_size == 400
    assert config.grid.column_count == 169
    assert config.grid.row_count == 81
    assert config.top_k == 4
    assert config.split_area_tolerance == pytest.approx(0.1)

    min_x, min_y, _, _ = config.grid.extent
    assert min_x <= 0 < min_x + 400
    assert min_y <= 0 < min_y + 400


def test_from_yaml(tmp_path):
    path = tmp_path / "analysis.yaml"
    path.write_text(
        "grid:\n"
        "  origin_corner: [0, 0]\n"
        "  cell_size: 10\n"
        "  column_count: 3\n"
        "  row_count: 4\n"
        "  sweep: [1, 1]\n"
        "top_k: 2\n"
        "split_area_tolerance: 0.5\n"
        "rendering:\n"
        "  pixels_per_unit: 2.0\n"
    )

    config = AnalysisConfig.from_yaml(path)

    assert config.grid.origin_corner == (0.0, 0.0)
    assert config.grid.cell_count == 12
    assert config.grid.sweep == (1, 1)
    assert config.top_k == 2
    assert config.rendering.pixels_per_unit == 2.0


def test_from_yaml_missing_key(tmp_path):
    path = tmp_path / "analysis.yaml"
    path.write_text("grid:\n  origin_corner: [0, 0]\n  cell_size: 10\n")

    with pytest.raises(ConfigurationError, match="Missing required"):
        AnalysisConfig.from_yaml(path)


def test_from_yaml_missing_file(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        AnalysisConfig.from_yaml(tmp_path / "nope.yaml")


def test_to_dict_round_trips_through_from_dict(quad_config):
    assert AnalysisConfig.from_dict(quad_config.to_dict()) == quad_config
