"""
Structured Logging for plandensity
==================================

Bounded Context: Observability

JSON-structured logging for analysis passes.

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: JSON logger implementation
    create_logger: Factory function

Example:
    >>> from plandensity_grid.logging import StructuredLogger, LogEvent
    >>> logger = StructuredLogger(component="pipeline")
    >>> logger.info(
    ...     event=LogEvent.MARKER_PROCESSED,
    ...     message="Processed marker nurse_03",
    ...     metadata={'marker_id': 'nurse_03', 'selected': [12, 13, 40, 41]}
    ... )

Output:
    {
        "timestamp": "2025-10-24T15:30:45.123456",
        "level": "INFO",
        "component": "pipeline",
        "event": "marker.processed",
        "message": "Processed marker nurse_03",
        "metadata": {"marker_id": "nurse_03", "selected": [12, 13, 40, 41]}
    }
"""

from .events import LogEvent
from .structured import StructuredLogger, create_logger

__all__ = [
    'LogEvent',
    'StructuredLogger',
    'create_logger',
]
