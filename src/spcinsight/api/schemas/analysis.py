"""Pydantic schemas for the SPC analysis response.

This is the single presentation boundary of the analysis: all rounding and
the replacement of non-finite numbers happen here, never in the engine.
Fields serialize with camelCase aliases (``model_dump(by_alias=True)``).
"""

import math

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from spcinsight.core.config import Settings, get_settings
from spcinsight.core.engine.analysis import AnalysisResult, ChartPoint
from spcinsight.core.engine.interpretation import (
    CapabilityRating,
    DecisionRemark,
    ShiftPresence,
    SpecialCause,
    Stability,
    YesNo,
)


def round_finite(value: float, digits: int) -> float:
    """Round for display, mapping NaN and infinities to 0.

    Examples:
        >>> round_finite(1.23456, 2)
        1.23
        >>> round_finite(float("inf"), 2)
        0.0
    """
    if not math.isfinite(value):
        return 0.0
    return round(value, digits)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MetricsResponse(_CamelModel):
    """Scalar summary: statistics (4 dp), indices (2 dp), spec limits (3 dp)."""

    x_bar: float
    std_dev_overall: float
    std_dev_within: float
    avg_range: float
    cp: float
    cpu: float
    cpl: float
    cpk: float
    pp: float
    ppu: float
    ppl: float
    ppk: float
    lsl: float
    usl: float
    target: float


class PointResponse(BaseModel):
    """A plotted point."""

    x: float
    y: float


class ControlLimitsResponse(_CamelModel):
    """X-bar and Range chart limits."""

    x_bar_ucl: float
    x_bar_mean: float
    x_bar_lcl: float
    range_ucl: float
    range_mean: float
    range_lcl: float
    mean_deviation_ratio: float


class ViolationResponse(_CamelModel):
    """A triggered special-cause rule on the X-bar chart.

    Attributes:
        rule_id: Rule number (1-3)
        rule_name: Human-readable rule name
        severity: Violation severity (WARNING or CRITICAL)
        involved_points: 1-based X-bar chart indices behind the signal
        message: Human-readable description
    """

    rule_id: int
    rule_name: str
    severity: str
    involved_points: list[int]
    message: str


class ControlChartsResponse(_CamelModel):
    x_bar_data: list[PointResponse]
    range_data: list[PointResponse]
    limits: ControlLimitsResponse
    violations: list[ViolationResponse]


class DistributionStatsResponse(_CamelModel):
    mean: float
    target: float
    bin_edges: list[float]
    min: float
    max: float


class DistributionResponse(_CamelModel):
    """Histogram as bin-center/count points."""

    data: list[PointResponse]
    stats: DistributionStatsResponse


class SsAnalysisResponse(_CamelModel):
    """Shift, spread, and special-cause labels."""

    process_shift: YesNo
    process_spread: YesNo
    special_cause_present: SpecialCause
    points_outside_limits: str
    range_points_outside_limits: str
    eight_consecutive_points: YesNo
    six_consecutive_trend: YesNo


class ProcessInterpretationResponse(_CamelModel):
    decision_remark: DecisionRemark
    process_potential: CapabilityRating
    process_performance: CapabilityRating
    process_stability: Stability
    process_shift: ShiftPresence


class DataQualityResponse(_CamelModel):
    total_records: int
    valid_records: int
    dropped_records: int
    sample_size: int


class AnalysisResponse(_CamelModel):
    """Schema for the complete SPC analysis response.

    Attributes:
        metrics: Scalar process summary
        control_charts: X-bar and Range chart points and limits
        distribution: Histogram of the raw measurements
        ss_analysis: Shift/spread/special-cause labels
        process_interpretation: Capability and stability verdicts
        data_quality: Record counts of the analysed feed
    """

    metrics: MetricsResponse
    control_charts: ControlChartsResponse
    distribution: DistributionResponse
    ss_analysis: SsAnalysisResponse
    process_interpretation: ProcessInterpretationResponse
    data_quality: DataQualityResponse

    @classmethod
    def from_result(
        cls, result: AnalysisResult, settings: Settings | None = None
    ) -> "AnalysisResponse":
        """Round and package an AnalysisResult for display.

        Args:
            result: Full-precision analysis result
            settings: Settings providing the decimal places (default: cached settings)

        Returns:
            AnalysisResponse ready for ``model_dump(by_alias=True)``
        """
        settings = settings or get_settings()
        stat = settings.stat_decimals
        index = settings.index_decimals
        spec = settings.spec_decimals

        metrics = result.metrics
        indices = metrics.indices
        limits = result.control_charts.limits
        dist = result.distribution

        def points(data: list[ChartPoint]) -> list[PointResponse]:
            return [PointResponse(x=p.x, y=round_finite(p.y, stat)) for p in data]

        return cls(
            metrics=MetricsResponse(
                x_bar=round_finite(metrics.x_bar, stat),
                std_dev_overall=round_finite(metrics.std_dev_overall, stat),
                std_dev_within=round_finite(metrics.std_dev_within, stat),
                avg_range=round_finite(metrics.avg_range, stat),
                cp=round_finite(indices.cp, index),
                cpu=round_finite(indices.cpu, index),
                cpl=round_finite(indices.cpl, index),
                cpk=round_finite(indices.cpk, index),
                pp=round_finite(indices.pp, index),
                ppu=round_finite(indices.ppu, index),
                ppl=round_finite(indices.ppl, index),
                ppk=round_finite(indices.ppk, index),
                lsl=round_finite(metrics.lsl, spec),
                usl=round_finite(metrics.usl, spec),
                target=round_finite(metrics.target, spec),
            ),
            control_charts=ControlChartsResponse(
                x_bar_data=points(result.control_charts.xbar_data),
                range_data=points(result.control_charts.range_data),
                limits=ControlLimitsResponse(
                    x_bar_ucl=round_finite(limits.xbar_limits.ucl, stat),
                    x_bar_mean=round_finite(limits.xbar_limits.center_line, stat),
                    x_bar_lcl=round_finite(limits.xbar_limits.lcl, stat),
                    range_ucl=round_finite(limits.r_limits.ucl, stat),
                    range_mean=round_finite(limits.r_limits.center_line, stat),
                    range_lcl=round_finite(limits.r_limits.lcl, stat),
                    mean_deviation_ratio=round_finite(
                        result.control_charts.mean_deviation_ratio, stat
                    ),
                ),
                violations=[
                    ViolationResponse(
                        rule_id=v.rule_id,
                        rule_name=v.rule_name,
                        severity=v.severity.value,
                        involved_points=v.involved_points,
                        message=v.message,
                    )
                    for v in result.signals.violations
                ],
            ),
            distribution=DistributionResponse(
                data=[
                    PointResponse(x=round_finite(b.center, stat), y=b.count)
                    for b in dist.bins
                ],
                stats=DistributionStatsResponse(
                    mean=round_finite(dist.stats.mean, stat),
                    target=round_finite(dist.stats.target, spec),
                    bin_edges=[round_finite(e, stat) for e in dist.stats.bin_edges],
                    min=round_finite(dist.stats.min, stat),
                    max=round_finite(dist.stats.max, stat),
                ),
            ),
            ss_analysis=SsAnalysisResponse(**vars(result.ss_analysis)),
            process_interpretation=ProcessInterpretationResponse(
                **vars(result.process_interpretation)
            ),
            data_quality=DataQualityResponse(**vars(result.data_quality)),
        )
