"""
Analytics Layer
===============

Bounded Context: Hit counting and severity classification.

Responsibilities:
- Rank cells per marker and accumulate hit counters (mutable state)
- Generate immutable statistics snapshots
- Map counters to severity bands

Design Philosophy:
- Mutable accumulator (HitAccumulator)
- Immutable outputs (HitStats)
- Pure classification function
"""

from plandensity_grid.analytics.accumulator import HitAccumulator, HitStats
from plandensity_grid.analytics.classifier import SeverityBand, classify, BAND_UPPER_BOUNDS

__all__ = [
    "HitAccumulator",
    "HitStats",
    "SeverityBand",
    "classify",
    "BAND_UPPER_BOUNDS",
]
