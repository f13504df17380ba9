"""
Error Types
===========

Bounded Context: Failure taxonomy for an analysis pass.

Propagation policy:
- ConfigurationError: invalid configuration, raised before any processing
- GeometryError: the geometry provider could not build a region.
  Fatal for the pass when it happens on a cell (the lattice is malformed),
  converted into a MarkerSkipped record when it happens on a marker
- MarkerSkipped: a marker was excluded from accumulation; the pass continues
"""


class PlanDensityError(Exception):
    """Base class for all plandensity errors."""


class ConfigurationError(PlanDensityError, ValueError):
    """Invalid lattice or analysis configuration."""


class GeometryError(PlanDensityError):
    """The geometry provider failed to build or operate on a region."""


class MarkerSkipped(PlanDensityError):
    """
    A marker could not be built or projected and was left out of the pass.

    Attributes:
        marker_id: Identifier of the offending marker
        reason: Human-readable cause
    """

    def __init__(self, marker_id: str, reason: str):
        super().__init__(f"Marker '{marker_id}' skipped: {reason}")
        self.marker_id = marker_id
        self.reason = reason
