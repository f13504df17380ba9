import numpy as np
import pytest

from plandensity_grid import ConfigurationError, HitAccumulator


def test_selects_top_k_by_descending_area():
    accumulator = HitAccumulator(cell_count=6, top_k=2)

    selected = accumulator.update(np.array([1.0, 9.0, 3.0, 0.0, 7.0, 2.0]))

    assert list(selected) == [1, 4]
    assert list(accumulator.counts) == [0, 1, 0, 0, 1, 0]


def test_ties_keep_ascending_index_order():
    accumulator = HitAccumulator(cell_count=5, top_k=3)

    selected = accumulator.update(np.array([5.0, 8.0, 5.0, 8.0, 5.0]))

    assert list(selected) == [1, 3, 0]


def test_zero_area_cells_still_incremented():
    accumulator = HitAccumulator(cell_count=4, top_k=4)

    accumulator.update(np.zeros(4))

    assert list(accumulator.counts) == [1, 1, 1, 1]


def test_fewer_overlaps_than_k_fills_with_lowest_indices():
    accumulator = HitAccumulator(cell_count=6, top_k=3)

    selected = accumulator.update(np.array([0.0, 0.0, 0.0, 0.0, 4.0, 0.0]))

    assert list(selected) == [4, 0, 1]


def test_top_k_larger_than_lattice_increments_every_cell_once():
    accumulator = HitAccumulator(cell_count=3, top_k=10)

    selected = accumulator.update(np.array([1.0, 2.0, 3.0]))

    assert len(selected) == 3
    assert list(accumulator.counts) == [1, 1, 1]


def test_counters_never_decrease_across_markers():
    rng = np.random.default_rng(seed=7)
    accumulator = HitAccumulator(cell_count=20, top_k=4)
    previous = accumulator.counts

    for _ in range(30):
        accumulator.update(rng.random(20))
        current = accumulator.counts
        assert np.all(current >= previous)
        assert current.sum() == previous.sum() + 4
        previous = current

    assert accumulator.markers_processed == 30


def test_counts_is_a_copy():
    accumulator = HitAccumulator(cell_count=2, top_k=1)
    counts = accumulator.counts
    counts[0] = 99

    assert accumulator.counts[0] == 0


def test_length_mismatch_raises():
    accumulator = HitAccumulator(cell_count=4, top_k=1)

    with pytest.raises(ValueError):
        accumulator.update(np.zeros(3))


@pytest.mark.parametrize("top_k", [0, -2, 1.5, True])
def test_invalid_top_k_raises(top_k):
    with pytest.raises(ConfigurationError):
        HitAccumulator(cell_count=4, top_k=top_k)


def test_stats_snapshot_is_detached():
    accumulator = HitAccumulator(cell_count=3, top_k=1)
    accumulator.update(np.array([0.0, 1.0, 0.0]))
    accumulator.update(np.array([0.0, 1.0, 0.0]))

    stats = accumulator.get_stats()
    accumulator.update(np.array([1.0, 0.0, 0.0]))

    assert stats.counts == (0, 2, 0)
    assert stats.total_hits == 2
    assert stats.markers_processed == 2
    assert accumulator.get_stats().counts == (1, 2, 0)


def test_numpy_integer_sizes_accepted():
    accumulator = HitAccumulator(cell_count=np.int64(3), top_k=np.int32(1))

    accumulator.update(np.array([0.0, 0.0, 5.0]))

    assert accumulator.top_k == 1
    assert list(accumulator.counts) == [0, 0, 1]
