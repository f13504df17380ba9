"""
Plan Density Demo
=================

Runs the sample ward configuration against the sample markers and prints
the band histogram.

Architecture:
- geometry: Lattice, Marker, OverlapEngine
- analytics: HitAccumulator, classify
- rendering: HeatmapVisualizer, JsonReportSink
- pipeline: Orchestration
"""

from plandensity_grid import (
    AnalysisConfig,
    HeatmapImageSink,
    HeatmapVisualizer,
    JsonReportSink,
    MarkerSource,
    PipelineBuilder,
    REFERENCE_MARKER_COLOR,
)
from plandensity_grid.utils import get_target_run_folder

CONFIG_PATH = "./config/analysis.yaml"
MARKERS_PATH = "./config/markers.yaml"


def main():
    """Run the sample analysis."""

    # 1. Load configuration
    config = AnalysisConfig.from_yaml(CONFIG_PATH)

    # 2. Markers drawn in the selection colour only
    source = MarkerSource.from_file(MARKERS_PATH, color_filter=REFERENCE_MARKER_COLOR)

    # 3. Build pipeline
    output_folder = get_target_run_folder(application_name="plandensity_demo")
    pipeline = (
        PipelineBuilder()
        .with_config(config)
        .add_sink(HeatmapImageSink(
            f"{output_folder}/heatmap.png",
            visualizer=HeatmapVisualizer(config.rendering),
        ))
        .add_sink(JsonReportSink(f"{output_folder}/report.json"))
        .build()
    )

    # 4. Run
    report = pipeline.process_source(source)

    print()
    print("✓ Analysis completed!")
    print(f"  Output: {output_folder}")
    for band, count in report.band_histogram.items():
        print(f"  {band.name}: {count}")
    for skipped in report.skipped:
        print(f"  skipped {skipped.marker_id}: {skipped.reason}")


if __name__ == "__main__":
    main()
