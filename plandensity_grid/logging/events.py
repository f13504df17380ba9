"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

Typed event names for structured logging of an analysis pass.

Event Naming Convention:
    <component>.<action>

    component: grid, marker, pass, source, sink, error

Example Log Query (CloudWatch Insights):
    fields @timestamp, event, message, metadata.marker_id
    | filter event = "marker.skipped"
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - grid.*: Lattice construction
    - marker.*: Per-marker overlap processing
    - pass.*: Analysis pass lifecycle
    - source.*: Marker loading and filtering
    - sink.*: Result export
    - error.*: Error conditions
    """

    # ========== Grid Events ==========
    GRID_BUILT = "grid.built"
    """Lattice constructed from configuration."""

    # ========== Marker Events ==========
    MARKER_PROCESSED = "marker.processed"
    """Marker overlap computed and counters updated."""

    MARKER_SKIPPED = "marker.skipped"
    """Marker excluded from accumulation."""

    # ========== Pass Events ==========
    PASS_STARTED = "pass.started"
    """Analysis pass started."""

    PASS_COMPLETED = "pass.completed"
    """All markers processed and cells classified."""

    # ========== Source Events ==========
    SOURCE_LOADED = "source.loaded"
    """Marker candidates loaded from a file."""

    SOURCE_CANDIDATE_REJECTED = "source.candidate_rejected"
    """Candidate filtered out (open curve, wrong colour, invalid region)."""

    # ========== Sink Events ==========
    SINK_WRITTEN = "sink.written"
    """Analysis results written by a result sink."""

    # ========== Error Events ==========
    CONFIGURATION_ERROR = "error.configuration"
    """Invalid configuration, pass aborted."""

    GEOMETRY_ERROR = "error.geometry"
    """Geometry provider failure on a cell, pass aborted."""
