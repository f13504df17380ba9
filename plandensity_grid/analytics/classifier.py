"""
Severity Classifier Module
==========================

Maps accumulated hit counters to ordered severity bands.

Bands (inclusive upper bounds):
    <= 2   BAND_0
    <= 5   BAND_1
    <= 8   BAND_2
    <= 11  BAND_3
    else   BAND_4
"""

from bisect import bisect_left
from enum import IntEnum


class SeverityBand(IntEnum):
    """Ordered severity bands, BAND_0 lowest."""

    BAND_0 = 0
    BAND_1 = 1
    BAND_2 = 2
    BAND_3 = 3
    BAND_4 = 4


# Inclusive upper bound of every band but the last
BAND_UPPER_BOUNDS = (2, 5, 8, 11)


def classify(hit_counter: int) -> SeverityBand:
    """
    Severity band for a hit counter.

    Args:
        hit_counter: Accumulated hits of one cell

    Returns:
        SeverityBand
    """
    return SeverityBand(bisect_left(BAND_UPPER_BOUNDS, hit_counter))
