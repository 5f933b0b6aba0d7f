"""Statistical functions for SPC control chart calculations.

This module provides functions for:
- Moment statistics (mean, population standard deviation) over finite values
- Subgrouping (subgroup means, subgroup ranges, moving ranges)
- Control limit calculations (X-bar R, with moving ranges for n=1)
- Process capability and performance indices (Cp, Cpk, Pp, Ppk)
"""

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .constants import ShewhartConstants

DEFAULT_ZERO_SIGMA_EPSILON = 1e-6


@dataclass(frozen=True)
class ControlLimits:
    """Control limits for a control chart.

    Attributes:
        center_line: Center line (average) of the charted statistic
        ucl: Upper Control Limit
        lcl: Lower Control Limit
    """
    center_line: float
    ucl: float
    lcl: float

    def is_outside(self, value: float) -> bool:
        """Return True if value lies strictly beyond either limit."""
        return value > self.ucl or value < self.lcl


@dataclass(frozen=True)
class XbarRLimits:
    """Control limits for X-bar and R charts.

    Attributes:
        xbar_limits: Control limits for the X-bar (means) chart
        r_limits: Control limits for the R (range) chart
    """
    xbar_limits: ControlLimits
    r_limits: ControlLimits


@dataclass(frozen=True)
class CapabilityIndices:
    """Capability (within) and performance (overall) indices.

    Attributes:
        within_std_dev: Short-term sigma estimate (R-bar / d2), unguarded
        overall_std_dev: Long-term sigma around the grand mean, unguarded
        cp, cpu, cpl, cpk: Indices from within_std_dev
        pp, ppu, ppl, ppk: Indices from overall_std_dev
    """
    within_std_dev: float
    overall_std_dev: float
    cp: float
    cpu: float
    cpl: float
    cpk: float
    pp: float
    ppu: float
    ppl: float
    ppk: float


def _finite(values: Sequence[float]) -> np.ndarray:
    arr = np.asarray(values, dtype=np.float64)
    return arr[np.isfinite(arr)]


def mean(values: Sequence[float]) -> float | None:
    """Arithmetic mean over the finite values of a sequence.

    Args:
        values: Numbers to average; NaN and infinities are ignored

    Returns:
        The mean, or None if there are no finite values

    Examples:
        >>> mean([1.0, 2.0, float("nan"), 3.0])
        2.0
    """
    finite = _finite(values)
    if finite.size == 0:
        return None
    return float(np.mean(finite))


def stddev(values: Sequence[float], mean_override: float | None = None) -> float | None:
    """Population standard deviation (divides by N, no Bessel correction).

    Squared deviations that are not finite are dropped before averaging.

    Args:
        values: Numbers to measure
        mean_override: Center to measure deviations from; defaults to mean(values)

    Returns:
        The standard deviation, or None for empty input

    Examples:
        >>> stddev([2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0])
        2.0
    """
    if len(values) == 0:
        return None

    center = mean_override if mean_override is not None else mean(values)
    if center is None:
        return None

    arr = np.asarray(values, dtype=np.float64)
    with np.errstate(invalid="ignore", over="ignore"):
        squared = _finite((arr - center) ** 2)
    if squared.size == 0:
        return None
    return math.sqrt(float(np.mean(squared)))


def moving_ranges(values: Sequence[float]) -> list[float]:
    """Absolute differences between consecutive values.

    Examples:
        >>> moving_ranges([5.0, 7.0, 6.0])
        [2.0, 1.0]
    """
    if len(values) < 2:
        return []
    arr = np.asarray(values, dtype=np.float64)
    return np.abs(np.diff(arr)).tolist()


def _chunks(values: Sequence[float], size: int) -> list[Sequence[float]]:
    return [values[i:i + size] for i in range(0, len(values), size)]


def subgroup_means(values: Sequence[float], sample_size: int) -> list[float]:
    """Means of consecutive subgroups of ``sample_size`` values.

    For ``sample_size == 1`` each value is its own subgroup. Otherwise the
    final subgroup may be shorter than ``sample_size``; it is still averaged
    over the values it actually holds.
    """
    if sample_size == 1:
        return [float(v) for v in values]
    return [float(np.mean(chunk)) for chunk in _chunks(values, sample_size)]


def subgroup_ranges(values: Sequence[float], sample_size: int) -> list[float]:
    """Ranges (max - min) of consecutive subgroups.

    For ``sample_size == 1`` the moving ranges are returned instead. A
    trailing single-value subgroup has no range and is skipped rather than
    counted as zero.
    """
    if sample_size == 1:
        return moving_ranges(values)
    return [
        float(np.ptp(chunk))
        for chunk in _chunks(values, sample_size)
        if len(chunk) > 1
    ]


def calculate_xbar_r_limits(
    means: Sequence[float],
    ranges: Sequence[float],
    constants: ShewhartConstants,
) -> XbarRLimits:
    """Calculate X-bar and R chart control limits.

    Unlike a textbook X-bar/R chart the two series may differ in length: a
    short trailing subgroup contributes a mean but possibly no range, and in
    moving-range mode there is one range fewer than there are points.

    Args:
        means: Subgroup means (individual values when n=1)
        ranges: Subgroup ranges (moving ranges when n=1); may be empty
        constants: Shewhart constants for the active sample size

    Returns:
        XbarRLimits containing control limits for both X-bar and R charts

    Raises:
        ValueError: If means is empty

    Examples:
        >>> from spcinsight.utils.constants import get_constants
        >>> limits = calculate_xbar_r_limits([11.6, 11.6], [3.0, 3.0], get_constants(5))
        >>> round(limits.xbar_limits.ucl, 3)
        13.331
    """
    grand_mean = mean(means)
    if grand_mean is None:
        raise ValueError("Subgroup means cannot be empty")

    r_bar = mean(ranges)
    if r_bar is None:
        r_bar = 0.0

    xbar_limits = ControlLimits(
        center_line=grand_mean,
        ucl=grand_mean + constants.A2 * r_bar,
        lcl=grand_mean - constants.A2 * r_bar,
    )

    r_limits = ControlLimits(
        center_line=r_bar,
        ucl=constants.D4 * r_bar,
        lcl=constants.D3 * r_bar,
    )

    return XbarRLimits(xbar_limits=xbar_limits, r_limits=r_limits)


def guard_sigma(sigma: float, epsilon: float = DEFAULT_ZERO_SIGMA_EPSILON) -> float:
    """Replace an exactly-zero sigma estimate with a small positive epsilon."""
    return epsilon if sigma == 0 else sigma


def _indices(usl: float, lsl: float, center: float, sigma: float) -> tuple[float, float, float, float]:
    spread = (usl - lsl) / (6 * sigma)
    upper = (usl - center) / (3 * sigma)
    lower = (center - lsl) / (3 * sigma)
    return spread, upper, lower, min(upper, lower)


def calculate_capability(
    measurements: Sequence[float],
    grand_mean: float,
    avg_range: float,
    lsl: float,
    usl: float,
    constants: ShewhartConstants,
    epsilon: float = DEFAULT_ZERO_SIGMA_EPSILON,
) -> CapabilityIndices:
    """Calculate Cp/Cpk from within-subgroup sigma and Pp/Ppk from overall sigma.

    Within sigma is R-bar / d2 for every sample size, including moving-range
    mode where d2(1) equals d2(2). Overall sigma is the population standard
    deviation of the raw measurements around the grand mean of the subgroup
    means. A sigma that is exactly zero is replaced by ``epsilon`` before
    dividing, so indices come out large and finite instead of inf or NaN.

    Args:
        measurements: Raw measurement series
        grand_mean: Mean of the subgroup means
        avg_range: Mean of the subgroup (or moving) ranges
        lsl: Lower specification limit
        usl: Upper specification limit
        constants: Shewhart constants for the active sample size
        epsilon: Substitute for a zero sigma estimate

    Returns:
        CapabilityIndices with unguarded sigmas and unrounded indices
    """
    within = avg_range / constants.d2
    overall = stddev(measurements, grand_mean)
    if overall is None:
        overall = 0.0

    cp, cpu, cpl, cpk = _indices(usl, lsl, grand_mean, guard_sigma(within, epsilon))
    pp, ppu, ppl, ppk = _indices(usl, lsl, grand_mean, guard_sigma(overall, epsilon))

    return CapabilityIndices(
        within_std_dev=within,
        overall_std_dev=overall,
        cp=cp,
        cpu=cpu,
        cpl=cpl,
        cpk=cpk,
        pp=pp,
        ppu=ppu,
        ppl=ppl,
        ppk=ppk,
    )
