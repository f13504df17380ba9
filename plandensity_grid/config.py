"""
Configuration schema for an analysis pass.

This module defines the lattice geometry, the ranking parameters and the
rendering settings. Everything is loaded from YAML and validated at
construction; no coordinate system is assumed.
"""

import math
import numbers
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Tuple

import yaml

from plandensity_grid.errors import ConfigurationError


def is_positive_int(value) -> bool:
    """True for integers > 0, numpy integers included, bools excluded."""
    return isinstance(value, numbers.Integral) and not isinstance(value, bool) and value > 0


@dataclass(frozen=True)
class GridConfig:
    """
    Lattice configuration.

    Attributes:
        origin_corner: (x, y) corner the sweeps start from
        cell_size: Edge length of every square cell
        column_count: Number of cells along x (outer sweep)
        row_count: Number of cells along y (inner sweep)
        sweep: Step direction per axis, +1 ascending or -1 descending.
            (-1, -1) treats origin_corner as the top-right corner of the extent.
    """

    origin_corner: Tuple[float, float]
    cell_size: float
    column_count: int
    row_count: int
    sweep: Tuple[int, int] = (-1, -1)

    def __post_init__(self):
        """Validate grid configuration."""
        if len(self.origin_corner) != 2:
            raise ConfigurationError(
                f"origin_corner must be an (x, y) pair, got {self.origin_corner}"
            )
        if not all(math.isfinite(v) for v in self.origin_corner):
            raise ConfigurationError(
                f"origin_corner must be finite, got {self.origin_corner}"
            )

        if not math.isfinite(self.cell_size) or self.cell_size <= 0:
            raise ConfigurationError(
                f"cell_size must be a positive number, got {self.cell_size}"
            )

        if not is_positive_int(self.column_count):
            raise ConfigurationError(
                f"column_count must be a positive integer, got {self.column_count}"
            )
        if not is_positive_int(self.row_count):
            raise ConfigurationError(
                f"row_count must be a positive integer, got {self.row_count}"
            )

        if len(self.sweep) != 2 or any(s not in (-1, 1) for s in self.sweep):
            raise ConfigurationError(
                f"sweep must be a pair of +1/-1 steps, got {self.sweep}"
            )

    @property
    def cell_count(self) -> int:
        return self.column_count * self.row_count

    @property
    def extent(self) -> Tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y) covered by the lattice."""
        ox, oy = self.origin_corner
        far_x = ox + self.sweep[0] * self.column_count * self.cell_size
        far_y = oy + self.sweep[1] * self.row_count * self.cell_size
        return (min(ox, far_x), min(oy, far_y), max(ox, far_x), max(oy, far_y))


@dataclass(frozen=True)
class RenderConfig:
    """Heatmap image settings."""

    pixels_per_unit: float = 1.0
    margin_px: int = 20
    opacity: float = 0.6
    text_scale: float = 0.5
    draw_labels: bool = True

    def __post_init__(self):
        """Validate rendering configuration."""
        if not self.pixels_per_unit > 0:
            raise ConfigurationError(
                f"pixels_per_unit must be > 0, got {self.pixels_per_unit}"
            )
        if self.margin_px < 0:
            raise ConfigurationError(
                f"margin_px must be >= 0, got {self.margin_px}"
            )
        if not 0.0 <= self.opacity <= 1.0:
            raise ConfigurationError(
                f"opacity must be in [0.0, 1.0], got {self.opacity}"
            )


@dataclass(frozen=True)
class AnalysisConfig:
    """
    Main configuration for an analysis pass.

    Immutable after construction (frozen dataclass).
    """

    grid: GridConfig
    top_k: int
    split_area_tolerance: float
    rendering: RenderConfig = field(default_factory=RenderConfig)

    def __post_init__(self):
        """Validate ranking parameters."""
        if not is_positive_int(self.top_k):
            raise ConfigurationError(
                f"top_k must be a positive integer, got {self.top_k}"
            )
        if not math.isfinite(self.split_area_tolerance) or self.split_area_tolerance < 0:
            raise ConfigurationError(
                f"split_area_tolerance must be >= 0, got {self.split_area_tolerance}"
            )

    @classmethod
    def reference(cls) -> "AnalysisConfig":
        """
        Floor-plan settings the heatmap was first calibrated on.

        400-unit cells swept down and left from the top-right corner
        (63980.14 + 9 * 400, 31086.91 + 3 * 400) until the positive
        quadrant is covered.
        """
        cell_size = 400.0
        top_right = (63980.14 + 9 * cell_size, 31086.91 + 3 * cell_size)
        return cls(
            grid=GridConfig(
                origin_corner=top_right,
                cell_size=cell_size,
                column_count=math.ceil(top_right[0] / cell_size),
                row_count=math.ceil(top_right[1] / cell_size),
                sweep=(-1, -1),
            ),
            top_k=4,
            split_area_tolerance=0.1,
            rendering=RenderConfig(pixels_per_unit=0.02),
        )

    @classmethod
    def from_dict(cls, data: dict) -> "AnalysisConfig":
        """
        Build configuration from a parsed mapping.

        Raises:
            ConfigurationError: If a required key is missing
        """
        try:
            grid_data = data["grid"]
            grid = GridConfig(
                origin_corner=tuple(float(v) for v in grid_data["origin_corner"]),
                cell_size=float(grid_data["cell_size"]),
                column_count=grid_data["column_count"],
                row_count=grid_data["row_count"],
                sweep=tuple(grid_data.get("sweep", (-1, -1))),
            )
            rendering = RenderConfig(**data.get("rendering", {}))
            return cls(
                grid=grid,
                top_k=data["top_k"],
                split_area_tolerance=float(data["split_area_tolerance"]),
                rendering=rendering,
            )
        except ConfigurationError:
            raise
        except KeyError as e:
            raise ConfigurationError(f"Missing required configuration key: {e}") from e
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid configuration value: {e}") from e

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "AnalysisConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            grid:
              origin_corner: [67580.14, 32286.91]
              cell_size: 400
              column_count: 169
              row_count: 81
              sweep: [-1, -1]

            top_k: 4
            split_area_tolerance: 0.1

            rendering:
              pixels_per_unit: 0.02
              margin_px: 20
        """
        path = Path(yaml_path)
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {yaml_path}")

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {yaml_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {yaml_path} must contain a mapping")

        return cls.from_dict(data)

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict."""
        return {
            "grid": {
                "origin_corner": list(self.grid.origin_corner),
                "cell_size": self.grid.cell_size,
                "column_count": int(self.grid.column_count),
                "row_count": int(self.grid.row_count),
                "sweep": list(self.grid.sweep),
            },
            "top_k": int(self.top_k),
            "split_area_tolerance": self.split_area_tolerance,
            "rendering": asdict(self.rendering),
        }
