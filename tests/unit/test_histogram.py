"""Tests for the measurement distribution histogram."""

import math

import numpy as np
import pytest

from spcinsight.core.engine.histogram import bin_indices, calculate_distribution


class TestBinLayout:
    """Bin count, width, and edges."""

    @pytest.mark.parametrize("n, expected_bins", [
        (1, 1),
        (2, 2),
        (4, 2),
        (5, 3),
        (10, 4),
        (16, 4),
        (17, 5),
    ])
    def test_bin_count_is_ceil_sqrt(self, n: int, expected_bins: int):
        data = [float(i) for i in range(n)]
        dist = calculate_distribution(data, lsl=0.0, usl=float(n))
        assert len(dist.bins) == expected_bins
        assert len(dist.stats.bin_edges) == expected_bins + 1

    def test_edges_start_at_lsl_when_below_data(self):
        data = [10.0, 12.0, 11.0, 13.0]
        dist = calculate_distribution(data, lsl=5.0, usl=15.0)
        # width = (13 - 10) / 2 = 1.5, anchored at LSL 5
        assert dist.stats.bin_edges == pytest.approx([5.0, 6.5, 8.0])

    def test_edges_start_at_min_when_lsl_above_data(self):
        data = [1.0, 2.0, 3.0, 4.0]
        dist = calculate_distribution(data, lsl=2.5, usl=5.0)
        assert dist.stats.bin_edges[0] == 1.0

    def test_bin_centers(self):
        data = [1.0, 2.0, 3.0, 4.0]
        dist = calculate_distribution(data, lsl=1.0, usl=5.0)
        assert [b.center for b in dist.bins] == pytest.approx([1.75, 3.25])


class TestBinAssignment:
    """Which bin each value lands in."""

    def test_counts_are_conserved_when_lsl_not_below_data(self):
        data = [4.1, 5.3, 4.8, 6.0, 5.5, 4.4, 5.9, 5.0, 4.6, 5.2, 5.7, 4.9]
        dist = calculate_distribution(data, lsl=4.1, usl=6.5)
        assert dist.stats.bin_edges[0] == min(data)
        assert dist.total_count == len(data)

    def test_maximum_lands_in_last_bin(self):
        data = [0.0, 1.0, 2.0, 3.0]
        dist = calculate_distribution(data, lsl=0.0, usl=3.0)
        assert dist.bins[-1].count >= 1
        assert bin_indices(np.array([3.0]), 3.0, 0.0, 1.5, 2).tolist() == [1]

    def test_values_beyond_last_edge_are_dropped(self):
        """Anchoring at a low LSL keeps the data-derived width, so upper values can fall off."""
        data = [10.0, 12.0, 11.0, 13.0, 10.0, 12.0, 11.0, 13.0, 10.0, 12.0]
        dist = calculate_distribution(data, lsl=5.0, usl=15.0)
        assert [b.count for b in dist.bins] == [0, 0, 0, 2]
        assert dist.total_count == 2

    def test_constant_series_goes_to_first_bin(self):
        data = [7.0] * 9
        dist = calculate_distribution(data, lsl=6.0, usl=8.0)
        assert [b.count for b in dist.bins] == [9, 0, 0]
        assert all(math.isfinite(e) for e in dist.stats.bin_edges)

    def test_single_value(self):
        dist = calculate_distribution([3.0], lsl=1.0, usl=5.0)
        assert [b.count for b in dist.bins] == [1]

    def test_bin_indices_flag_out_of_range(self):
        values = np.array([-1.0, 0.0, 2.4, 2.5, 11.0, 10.0])
        assert bin_indices(values, 10.0, 0.0, 2.5, 4).tolist() == [-1, 0, 0, 1, -1, 3]

    def test_zero_width_sends_everything_to_first_bin(self):
        assert bin_indices(np.array([5.0, 5.0]), 5.0, 4.0, 0.0, 2).tolist() == [0, 0]

    def test_counts_are_plain_ints(self):
        dist = calculate_distribution([1.0, 2.0, 3.0, 4.0], lsl=1.0, usl=5.0)
        assert all(type(b.count) is int for b in dist.bins)


class TestDistributionStats:

    def test_stats(self):
        data = [1.0, 2.0, 3.0, 6.0]
        dist = calculate_distribution(data, lsl=0.0, usl=10.0)
        assert dist.stats.mean == pytest.approx(3.0)
        assert dist.stats.target == pytest.approx(5.0)
        assert dist.stats.min == 1.0
        assert dist.stats.max == 6.0

    def test_empty_data(self):
        dist = calculate_distribution([], lsl=2.0, usl=4.0)
        assert dist.bins == []
        assert dist.stats.target == 3.0
        assert dist.stats.bin_edges == []
