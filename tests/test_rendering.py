import json

import cv2
import numpy as np
import pytest

from plandensity_grid import (
    AnalysisReport,
    HeatmapImageSink,
    HeatmapVisualizer,
    JsonReportSink,
    SkippedMarker,
    classify_cells,
)
from plandensity_grid.config import RenderConfig


@pytest.fixture
def report(quad_lattice):
    # Cell 1 ([0, 10] x [10, 20]) hot, everything else cold
    counts = np.array([0, 12, 0, 3])
    return AnalysisReport(
        cells=classify_cells(quad_lattice, counts),
        skipped=[SkippedMarker("open", "curve is not closed", stage="source")],
        markers_processed=5,
        top_k=1,
    )


@pytest.fixture
def visualizer():
    return HeatmapVisualizer(RenderConfig(pixels_per_unit=10, margin_px=5, draw_labels=False))


def test_canvas_covers_extent_plus_margin(visualizer, report):
    frame = visualizer.draw_report(report)

    assert frame.shape == (210, 210, 3)
    assert frame.dtype == np.uint8


def test_world_to_pixel_flips_y(visualizer):
    extent = (0.0, 0.0, 20.0, 20.0)

    pixels = visualizer.to_pixels(np.array([[0.0, 20.0], [20.0, 0.0]]), extent)

    assert pixels.tolist() == [[5, 5], [205, 205]]


def test_cells_are_filled_with_band_colour(visualizer, report):
    frame = visualizer.draw_report(report)

    # BGR; cell 1 is top-left in the image, cell 0 bottom-left
    b, g, r = frame[30, 30]
    assert r > b

    b, g, r = frame[180, 30]
    assert b > r


def test_labels_do_not_break_rendering(report):
    visualizer = HeatmapVisualizer(RenderConfig(pixels_per_unit=10, margin_px=5))

    frame = visualizer.draw_report(report)

    assert frame.shape == (210, 210, 3)


def test_empty_report_cannot_be_drawn(visualizer):
    with pytest.raises(ValueError):
        visualizer.draw_report(AnalysisReport(cells=[]))


def test_image_sink_writes_png(tmp_path, visualizer, report):
    path = tmp_path / "out" / "heatmap.png"

    HeatmapImageSink(str(path), visualizer=visualizer).write(report)

    image = cv2.imread(str(path))
    assert image is not None
    assert image.shape == (210, 210, 3)


def test_json_sink_writes_report(tmp_path, report):
    path = tmp_path / "report.json"

    JsonReportSink(str(path)).write(report)

    data = json.loads(path.read_text())
    assert [c["hit_counter"] for c in data["cells"]] == [0, 12, 0, 3]
    assert [c["band"] for c in data["cells"]] == [0, 4, 0, 1]
    assert data["skipped"] == [
        {"marker_id": "open", "reason": "curve is not closed", "stage": "source"}
    ]
    assert data["markers_processed"] == 5
