"""
JSON Report Sink
================

Writes the per-cell results of a pass as a JSON document.

Output:
    {
        "markers_processed": 42,
        "top_k": 4,
        "config": {...},
        "band_histogram": {"BAND_0": 13500, ...},
        "cells": [{"index": 0, "bounds": [...], "band": 0, "hit_counter": 0}, ...],
        "skipped": [{"marker_id": "nurse_07", "reason": "...", "stage": "source"}]
    }
"""

import json
from pathlib import Path
from typing import Optional

from plandensity_grid.logging import LogEvent, StructuredLogger, create_logger
from plandensity_grid.schemas import AnalysisReport


class JsonReportSink:
    """Result sink writing AnalysisReport.to_dict() to a file."""

    def __init__(
        self,
        output_path: str,
        indent: Optional[int] = 2,
        logger: Optional[StructuredLogger] = None,
    ):
        self.output_path = Path(output_path)
        self.indent = indent
        self.logger = logger or create_logger("sink")

    def write(self, report: AnalysisReport) -> None:
        payload = report.to_dict()
        self.output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.output_path, "w") as f:
            json.dump(payload, f, indent=self.indent)

        self.logger.info(
            event=LogEvent.SINK_WRITTEN,
            message=f"Report written to {self.output_path}",
            metadata={'path': str(self.output_path), 'cell_count': len(report.cells)}
        )
