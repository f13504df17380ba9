"""
plandensity CLI - Main entry point.

Runs an analysis pass from a YAML configuration and a marker file, and
writes the heatmap image and JSON report.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from plandensity_grid import (
    AnalysisConfig,
    ConfigurationError,
    HeatmapImageSink,
    HeatmapVisualizer,
    JsonReportSink,
    MarkerSource,
    PipelineBuilder,
    PlanDensityError,
)
from plandensity_grid.logging import LogEvent, create_logger
from plandensity_grid.utils import get_target_run_folder


def run_analysis(args: argparse.Namespace) -> int:
    """
    Execute the analyze command.

    Returns:
        Process exit code
    """
    level = getattr(logging, args.log_level)
    logger = create_logger("cli", level=level)

    try:
        config = AnalysisConfig.from_yaml(Path(args.config))
    except ConfigurationError as e:
        logger.error(
            event=LogEvent.CONFIGURATION_ERROR,
            message=f"Invalid analysis configuration: {args.config}",
            metadata={'path': str(args.config)},
            exc_info=e,
        )
        raise

    source = MarkerSource.from_file(
        Path(args.markers),
        color_filter=tuple(args.color) if args.color else None,
        logger=create_logger("source", level=level),
    )

    if args.image is None or args.json is None:
        run_folder = get_target_run_folder(application_name="plandensity")
        image_path = args.image or f"{run_folder}/heatmap.png"
        json_path = args.json or f"{run_folder}/report.json"
    else:
        image_path, json_path = args.image, args.json

    pipeline = (
        PipelineBuilder()
        .with_config(config)
        .with_logger(create_logger("pipeline", level=level))
        .add_sink(HeatmapImageSink(
            image_path,
            visualizer=HeatmapVisualizer(config.rendering),
            logger=create_logger("sink", level=level),
        ))
        .add_sink(JsonReportSink(json_path, logger=create_logger("sink", level=level)))
        .build()
    )

    report = pipeline.process_source(source)

    print(f"✓ Analysis completed: {report.markers_processed} markers, "
          f"{len(report.skipped)} skipped")
    for band, count in report.band_histogram.items():
        print(f"  {band.name}: {count} cells")
    print(f"  Image: {image_path}")
    print(f"  Report: {json_path}")

    if report.skipped:
        logger.warning(
            event=LogEvent.MARKER_SKIPPED,
            message=f"{len(report.skipped)} markers were skipped",
            metadata={'marker_ids': [s.marker_id for s in report.skipped]}
        )

    return 0


def dump_reference_config(args: argparse.Namespace) -> int:
    """Print the reference floor-plan configuration as YAML."""
    data = AnalysisConfig.reference().to_dict()
    yaml.safe_dump(data, sys.stdout, sort_keys=False)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plandensity",
        description="Plan density grid analysis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Analyse markers, outputs go to ./runs/plandensity/<timestamp>/
  plandensity analyze config/analysis.yaml config/markers.yaml

  # Only markers drawn in the selection colour, explicit outputs
  plandensity analyze config/analysis.yaml markers.json --color 36 146 251 \\
      --image heatmap.png --json report.json

  # Print the reference configuration
  plandensity reference-config > analysis.yaml
"""
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    analyze = subparsers.add_parser('analyze', help='Run an analysis pass')
    analyze.add_argument('config', help='Path to analysis config YAML')
    analyze.add_argument('markers', help='Path to marker file (YAML or JSON)')
    analyze.add_argument('--image', default=None, help='Heatmap PNG output path')
    analyze.add_argument('--json', default=None, help='JSON report output path')
    analyze.add_argument(
        '--color',
        type=int,
        nargs=3,
        metavar=('R', 'G', 'B'),
        default=None,
        help='Only use markers drawn in this colour'
    )
    analyze.add_argument(
        '--log-level',
        default='WARNING',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Structured log level (default: WARNING)'
    )

    subparsers.add_parser('reference-config', help='Print the reference configuration')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.command == 'analyze':
            return run_analysis(args)
        elif args.command == 'reference-config':
            return dump_reference_config(args)
    except (PlanDensityError, OSError) as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1

    return 1


if __name__ == '__main__':
    sys.exit(main())
