"""SPC analysis orchestrator.

Runs one complete analysis pass over a measurement feed:
1. Extracts finite measurements and specification limits
2. Splits measurements into subgroups (moving ranges for n=1)
3. Derives X-bar and Range control limits
4. Computes capability (Cp, Cpk) and performance (Pp, Ppk) indices
5. Bins the raw measurements into a histogram
6. Scans the X-bar chart for out-of-limit points, runs, and trends
7. Interprets the indices and signals

The result carries full-precision values; rounding happens in
``spcinsight.api.schemas.analysis``.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

import structlog

from spcinsight.core.config import Settings, get_settings
from spcinsight.core.engine.extraction import extract_measurements
from spcinsight.core.engine.histogram import Distribution, calculate_distribution
from spcinsight.core.engine.interpretation import (
    ProcessInterpretation,
    SpecialCauseAnalysis,
    interpret_process,
    interpret_special_causes,
)
from spcinsight.core.engine.run_rules import SpecialCauseSummary, detect_special_causes
from spcinsight.core.records import InspectionRecord
from spcinsight.utils.constants import get_constants
from spcinsight.utils.statistics import (
    CapabilityIndices,
    XbarRLimits,
    calculate_capability,
    calculate_xbar_r_limits,
    guard_sigma,
    subgroup_means,
    subgroup_ranges,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ChartPoint:
    """A control chart point; x is the 1-based subgroup number."""
    x: int
    y: float


@dataclass(frozen=True)
class Metrics:
    """Scalar summary of the process.

    Attributes:
        x_bar: Grand mean of the subgroup means
        std_dev_overall: Population sigma of the measurements around x_bar
        std_dev_within: R-bar / d2
        avg_range: Mean of the subgroup (or moving) ranges
        indices: Capability and performance indices
        lsl: Lower specification limit
        usl: Upper specification limit
        target: Midpoint of the specification limits
    """
    x_bar: float
    std_dev_overall: float
    std_dev_within: float
    avg_range: float
    indices: CapabilityIndices
    lsl: float
    usl: float
    target: float


@dataclass(frozen=True)
class ControlCharts:
    """X-bar and Range chart points with their limits.

    Attributes:
        xbar_data: Subgroup means
        range_data: Subgroup or moving ranges
        limits: X-bar and Range control limits
        mean_deviation_ratio: |x_bar - raw mean| in units of overall sigma
    """
    xbar_data: list[ChartPoint]
    range_data: list[ChartPoint]
    limits: XbarRLimits
    mean_deviation_ratio: float


@dataclass(frozen=True)
class DataQuality:
    """How much of the input feed made it into the analysis."""
    total_records: int
    valid_records: int
    dropped_records: int
    sample_size: int


@dataclass(frozen=True)
class AnalysisResult:
    """Complete result of one SPC analysis pass."""
    metrics: Metrics
    control_charts: ControlCharts
    distribution: Distribution
    signals: SpecialCauseSummary
    ss_analysis: SpecialCauseAnalysis
    process_interpretation: ProcessInterpretation
    data_quality: DataQuality


def calculate_analysis(
    records: Iterable[InspectionRecord | Mapping[str, Any]],
    sample_size: int | None = None,
    settings: Settings | None = None,
) -> AnalysisResult:
    """Run the full SPC analysis over an ordered inspection feed.

    Args:
        records: Inspection records in process order
        sample_size: Subgroup size 1-5 (default: configured default, 5)
        settings: Settings to use (default: cached environment settings)

    Returns:
        AnalysisResult with metrics, charts, histogram, and verdicts

    Raises:
        InvalidSampleSizeError: If sample_size is not between 1 and 5
        InsufficientDataError: If fewer than sample_size records are valid

    Example:
        >>> records = [
        ...     {"ActualSpecification": v, "FromSpecification": "5", "ToSpecification": "15"}
        ...     for v in ["10", "12", "11", "13", "10", "12", "11", "13", "10", "12"]
        ... ]
        >>> result = calculate_analysis(records, sample_size=5)
        >>> round(result.metrics.x_bar, 2)
        11.4
    """
    settings = settings or get_settings()
    if sample_size is None:
        sample_size = settings.default_sample_size

    constants = get_constants(sample_size)
    extracted = extract_measurements(records, sample_size)
    measurements = extracted.measurements
    lsl, usl = extracted.lsl, extracted.usl

    means = subgroup_means(measurements, sample_size)
    ranges = subgroup_ranges(measurements, sample_size)

    limits = calculate_xbar_r_limits(means, ranges, constants)
    grand_mean = limits.xbar_limits.center_line
    avg_range = limits.r_limits.center_line

    indices = calculate_capability(
        measurements,
        grand_mean=grand_mean,
        avg_range=avg_range,
        lsl=lsl,
        usl=usl,
        constants=constants,
        epsilon=settings.zero_sigma_epsilon,
    )

    distribution = calculate_distribution(measurements, lsl, usl)
    signals = detect_special_causes(means, ranges, limits)

    overall_sigma = guard_sigma(indices.overall_std_dev, settings.zero_sigma_epsilon)
    control_charts = ControlCharts(
        xbar_data=[ChartPoint(x=i + 1, y=m) for i, m in enumerate(means)],
        range_data=[ChartPoint(x=i + 1, y=r) for i, r in enumerate(ranges)],
        limits=limits,
        mean_deviation_ratio=abs(grand_mean - distribution.stats.mean) / overall_sigma,
    )

    metrics = Metrics(
        x_bar=grand_mean,
        std_dev_overall=indices.overall_std_dev,
        std_dev_within=indices.within_std_dev,
        avg_range=avg_range,
        indices=indices,
        lsl=lsl,
        usl=usl,
        target=(usl + lsl) / 2,
    )

    logger.debug(
        "spc_analysis_completed",
        sample_size=sample_size,
        measurements=len(measurements),
        subgroups=len(means),
        cpk=indices.cpk,
        violations=[v.rule_name for v in signals.violations],
    )

    return AnalysisResult(
        metrics=metrics,
        control_charts=control_charts,
        distribution=distribution,
        signals=signals,
        ss_analysis=interpret_special_causes(indices, signals),
        process_interpretation=interpret_process(indices, signals),
        data_quality=DataQuality(
            total_records=extracted.total_records,
            valid_records=extracted.valid_records,
            dropped_records=extracted.dropped_records,
            sample_size=sample_size,
        ),
    )
