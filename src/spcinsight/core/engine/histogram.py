"""Distribution histogram of raw measurements.

The bin count is ceil(sqrt(n)). The histogram starts at the lower
specification limit when that lies below the data, so the chart always shows
the LSL; the bin width is still derived from the data range alone.
"""

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np


@dataclass(frozen=True)
class HistogramBin:
    """A histogram bar.

    Attributes:
        center: Midpoint of the bin
        count: Number of measurements in the bin
    """
    center: float
    count: int


@dataclass(frozen=True)
class DistributionStats:
    """Summary statistics shown alongside the histogram."""
    mean: float
    target: float
    bin_edges: list[float]
    min: float
    max: float


@dataclass(frozen=True)
class Distribution:
    """Histogram bins plus their summary statistics."""
    bins: list[HistogramBin]
    stats: DistributionStats

    @property
    def total_count(self) -> int:
        return sum(b.count for b in self.bins)


def bin_indices(
    values: np.ndarray, data_max: float, bin_start: float, bin_width: float, bin_count: int
) -> np.ndarray:
    """Return the bin of each value, -1 where a value lands outside the range.

    With a zero bin width (all values equal) everything goes to bin 0.
    Otherwise the series maximum always goes to the last bin.

    Examples:
        >>> bin_indices(np.array([-1.0, 0.0, 4.0, 10.0]), 10.0, 0.0, 2.5, 4).tolist()
        [-1, 0, 1, 3]
    """
    values = np.asarray(values, dtype=np.float64)
    if bin_width == 0:
        return np.zeros(values.size, dtype=np.intp)

    indices = np.floor((values - bin_start) / bin_width).astype(np.intp)
    indices[(indices < 0) | (indices >= bin_count)] = -1
    indices[values == data_max] = bin_count - 1
    return indices


def calculate_distribution(data: Sequence[float], lsl: float, usl: float) -> Distribution:
    """Build the measurement histogram.

    Args:
        data: Finite measurement values
        lsl: Lower specification limit
        usl: Upper specification limit

    Returns:
        Distribution with bin centers/counts and summary statistics.
        Empty input yields no bins and zeroed stats.

    Examples:
        >>> dist = calculate_distribution([1.0, 2.0, 3.0, 4.0], lsl=1.0, usl=5.0)
        >>> [b.count for b in dist.bins]
        [2, 2]
    """
    target = (usl + lsl) / 2
    if len(data) == 0:
        return Distribution(
            bins=[],
            stats=DistributionStats(mean=0.0, target=target, bin_edges=[], min=0.0, max=0.0),
        )

    arr = np.asarray(data, dtype=np.float64)
    data_min = float(arr.min())
    data_max = float(arr.max())

    bin_count = max(1, math.ceil(math.sqrt(arr.size)))
    bin_width = (data_max - data_min) / bin_count
    bin_start = min(data_min, lsl)
    bin_edges = [bin_start + i * bin_width for i in range(bin_count + 1)]

    indices = bin_indices(arr, data_max, bin_start, bin_width, bin_count)
    counts = np.bincount(indices[indices >= 0], minlength=bin_count)

    bins = [
        HistogramBin(center=bin_edges[i] + bin_width / 2, count=int(count))
        for i, count in enumerate(counts)
    ]

    return Distribution(
        bins=bins,
        stats=DistributionStats(
            mean=float(np.mean(arr)),
            target=target,
            bin_edges=bin_edges,
            min=data_min,
            max=data_max,
        ),
    )
