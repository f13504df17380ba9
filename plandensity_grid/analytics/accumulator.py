"""
Hit Accumulator Module
======================

Ranking accumulator: per-marker top-K selection and hit counters.

Design:
- Mutable state (counters, private)
- Immutable snapshots (HitStats)
- Stable ranking: descending area, ascending cell index on ties
- Exactly top_k cells are incremented per marker, zero-area cells included.
  With fewer than top_k overlapping cells the remainder is filled with
  the lowest-index non-overlapping cells.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from plandensity_grid.config import is_positive_int
from plandensity_grid.errors import ConfigurationError


@dataclass(frozen=True)
class HitStats:
    """
    Immutable snapshot of the accumulated counters.

    Attributes:
        counts: Hit counter per cell index
        markers_processed: Number of update() calls so far
        top_k: Cells incremented per marker
    """

    counts: Tuple[int, ...]
    markers_processed: int
    top_k: int

    @property
    def total_hits(self) -> int:
        return sum(self.counts)

    def __str__(self) -> str:
        return (
            f"markers={self.markers_processed}, top_k={self.top_k}, "
            f"max_hits={max(self.counts, default=0)}"
        )


class HitAccumulator:
    """
    Stateful hit counters for one analysis pass.

    Counters only ever increase. Each pass owns a fresh accumulator.

    Usage:
        accumulator = HitAccumulator(cell_count=len(lattice), top_k=4)

        # Per marker
        selected = accumulator.update(overlap_areas)

        # Snapshot
        stats = accumulator.get_stats()
    """

    def __init__(self, cell_count: int, top_k: int):
        """
        Args:
            cell_count: Number of cells in the lattice
            top_k: Cells incremented per marker
        """
        if not is_positive_int(cell_count):
            raise ConfigurationError(f"cell_count must be > 0, got {cell_count}")
        if not is_positive_int(top_k):
            raise ConfigurationError(f"top_k must be a positive integer, got {top_k}")

        self.cell_count = int(cell_count)
        self.top_k = int(top_k)
        self._counts = np.zeros(cell_count, dtype=np.int64)
        self._markers_processed = 0

    @staticmethod
    def rank(overlap_areas: np.ndarray) -> np.ndarray:
        """
        Cell indices ordered by descending overlap area.

        Ties keep ascending index order (stable sort).
        """
        return np.argsort(-np.asarray(overlap_areas, dtype=np.float64), kind="stable")

    def update(self, overlap_areas: np.ndarray) -> np.ndarray:
        """
        Increment the counters of the top_k cells for one marker.

        Args:
            overlap_areas: Per-cell overlap areas of the current marker

        Returns:
            Indices of the incremented cells, best first

        Raises:
            ValueError: If the array length does not match cell_count
        """
        if len(overlap_areas) != self.cell_count:
            raise ValueError(
                f"Expected {self.cell_count} overlap areas, got {len(overlap_areas)}"
            )

        selected = self.rank(overlap_areas)[: self.top_k]
        self._counts[selected] += 1
        self._markers_processed += 1

        return selected

    @property
    def counts(self) -> np.ndarray:
        """Copy of the hit counters indexed by cell index."""
        return self._counts.copy()

    @property
    def markers_processed(self) -> int:
        return self._markers_processed

    def get_stats(self) -> HitStats:
        """
        Get immutable statistics snapshot.

        Returns:
            Frozen HitStats with current state
        """
        return HitStats(
            counts=tuple(int(c) for c in self._counts),
            markers_processed=self._markers_processed,
            top_k=self.top_k,
        )
