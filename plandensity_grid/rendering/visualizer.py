"""
Heatmap Visualizer Module
=========================

Pure visualization layer for classified cells.

Design:
- Stateless rendering (pure functions of the report)
- No business logic
- Configurable styles
- Uses supervision drawing utilities

Dependencies:
- supervision (draw utilities, Color, Point)
- numpy (canvas)
- opencv (cell fill, blending, PNG output)
"""

import math
from pathlib import Path
from typing import Dict, Optional, Tuple

import cv2
import numpy as np
import supervision as sv

from plandensity_grid.analytics.classifier import SeverityBand
from plandensity_grid.config import RenderConfig
from plandensity_grid.logging import LogEvent, StructuredLogger, create_logger
from plandensity_grid.schemas import AnalysisReport, CellResult

# Fill colour per band, coolest to hottest
BAND_COLORS: Dict[SeverityBand, sv.Color] = {
    SeverityBand.BAND_0: sv.Color(r=0, g=0, b=255),      # blue
    SeverityBand.BAND_1: sv.Color(r=0, g=128, b=0),      # green
    SeverityBand.BAND_2: sv.Color(r=255, g=255, b=0),    # yellow
    SeverityBand.BAND_3: sv.Color(r=255, g=165, b=0),    # orange
    SeverityBand.BAND_4: sv.Color(r=255, g=0, b=0),      # red
}

# Labels are unreadable below this cell size
MIN_LABEL_CELL_PX = 16


class HeatmapVisualizer:
    """
    Stateless visualizer that draws classified cells on a raster canvas.

    World coordinates are mapped with a uniform scale and the y axis
    flipped, so the image reads like the plan.

    Usage:
        visualizer = HeatmapVisualizer(RenderConfig(pixels_per_unit=0.02))
        frame = visualizer.draw_report(report)
    """

    def __init__(
        self,
        render_config: Optional[RenderConfig] = None,
        background_color: sv.Color = sv.Color(r=255, g=255, b=255),
        outline_color: sv.Color = sv.Color(r=64, g=64, b=64),
        text_color: sv.Color = sv.Color(r=0, g=0, b=0),
        thickness: int = 1,
        text_thickness: int = 1,
        text_padding: int = 2,
    ):
        """
        Initialize visualizer with style configuration.

        Args:
            render_config: Scale, margin, fill opacity and text scale
            background_color: Canvas colour
            outline_color: Cell outline colour
            text_color: Hit counter label colour
            thickness: Outline thickness
            text_thickness: Thickness for text
            text_padding: Padding for text background
        """
        self.render_config = render_config or RenderConfig()
        self.background_color = background_color
        self.outline_color = outline_color
        self.text_color = text_color
        self.thickness = thickness
        self.text_thickness = text_thickness
        self.text_padding = text_padding

    def canvas_size(self, extent: Tuple[float, float, float, float]) -> Tuple[int, int]:
        """(width, height) in pixels for a world extent."""
        min_x, min_y, max_x, max_y = extent
        scale = self.render_config.pixels_per_unit
        margin = self.render_config.margin_px
        width = int(math.ceil((max_x - min_x) * scale)) + 2 * margin
        height = int(math.ceil((max_y - min_y) * scale)) + 2 * margin
        return width, height

    def to_pixels(
        self,
        coordinates: np.ndarray,
        extent: Tuple[float, float, float, float],
    ) -> np.ndarray:
        """
        Map Nx2 world coordinates to Nx2 int pixel coordinates.
        """
        min_x, _, _, max_y = extent
        scale = self.render_config.pixels_per_unit
        margin = self.render_config.margin_px
        pixels = np.empty_like(coordinates, dtype=np.float64)
        pixels[:, 0] = margin + (coordinates[:, 0] - min_x) * scale
        pixels[:, 1] = margin + (max_y - coordinates[:, 1]) * scale
        return np.round(pixels).astype(np.int32)

    def draw_report(self, report: AnalysisReport) -> np.ndarray:
        """
        Draw every cell of the report on a fresh canvas.

        Args:
            report: Analysis report with classified cells

        Returns:
            BGR image (H, W, 3) uint8
        """
        extent = _report_extent(report)
        width, height = self.canvas_size(extent)
        frame = np.full((height, width, 3), self.background_color.as_bgr(), dtype=np.uint8)

        # Fill in place on one overlay, blend once
        overlay = frame.copy()
        for cell in report.cells:
            cv2.fillPoly(
                overlay,
                [self._cell_polygon(cell, extent).reshape((-1, 1, 2))],
                color=BAND_COLORS[cell.band].as_bgr(),
            )
        opacity = self.render_config.opacity
        frame = cv2.addWeighted(overlay, opacity, frame, 1 - opacity, 0)

        for cell in report.cells:
            frame = self.draw_cell(frame, cell, extent)

        return frame

    def draw_cell(
        self,
        frame: np.ndarray,
        cell: CellResult,
        extent: Tuple[float, float, float, float],
    ) -> np.ndarray:
        """
        Draw the outline and hit counter label of one cell.

        Returns:
            Frame with the cell drawn
        """
        polygon = self._cell_polygon(cell, extent)

        frame = sv.draw_polygon(
            scene=frame,
            polygon=polygon,
            color=self.outline_color,
            thickness=self.thickness,
        )

        cell_px = int(polygon[:, 0].max() - polygon[:, 0].min())
        if self.render_config.draw_labels and cell_px >= MIN_LABEL_CELL_PX:
            center = polygon.mean(axis=0)
            frame = sv.draw_text(
                scene=frame,
                text=str(cell.hit_counter),
                text_anchor=sv.Point(x=int(center[0]), y=int(center[1])),
                text_color=self.text_color,
                text_scale=self.render_config.text_scale,
                text_thickness=self.text_thickness,
                text_padding=self.text_padding,
                background_color=BAND_COLORS[cell.band],
            )

        return frame

    def _cell_polygon(
        self,
        cell: CellResult,
        extent: Tuple[float, float, float, float],
    ) -> np.ndarray:
        # Exterior ring without the closing vertex
        ring = np.asarray(cell.boundary.exterior.coords)[:-1, :2]
        return self.to_pixels(ring, extent)


def _report_extent(report: AnalysisReport) -> Tuple[float, float, float, float]:
    if not report.cells:
        raise ValueError("Report has no cells to draw")
    bounds = np.array([cell.bounds for cell in report.cells])
    return (
        float(bounds[:, 0].min()),
        float(bounds[:, 1].min()),
        float(bounds[:, 2].max()),
        float(bounds[:, 3].max()),
    )


class HeatmapImageSink:
    """
    Result sink writing the heatmap as an image file (PNG by default).

    Usage:
        sink = HeatmapImageSink("runs/heatmap.png", visualizer=HeatmapVisualizer())
        sink.write(report)
    """

    def __init__(
        self,
        output_path: str,
        visualizer: Optional[HeatmapVisualizer] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        self.output_path = Path(output_path)
        self.visualizer = visualizer or HeatmapVisualizer()
        self.logger = logger or create_logger("sink")

    def write(self, report: AnalysisReport) -> None:
        """
        Render and save the report.

        Raises:
            IOError: If OpenCV cannot write the file
        """
        frame = self.visualizer.draw_report(report)
        self.output_path.parent.mkdir(parents=True, exist_ok=True)

        if not cv2.imwrite(str(self.output_path), frame):
            raise IOError(f"Could not write heatmap image: {self.output_path}")

        self.logger.info(
            event=LogEvent.SINK_WRITTEN,
            message=f"Heatmap written to {self.output_path}",
            metadata={
                'path': str(self.output_path),
                'width': frame.shape[1],
                'height': frame.shape[0],
            }
        )
