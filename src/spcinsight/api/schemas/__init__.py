"""Pydantic schemas for SPC analysis responses."""

from spcinsight.api.schemas.analysis import (
    AnalysisResponse,
    ControlChartsResponse,
    ControlLimitsResponse,
    DataQualityResponse,
    DistributionResponse,
    DistributionStatsResponse,
    MetricsResponse,
    PointResponse,
    ProcessInterpretationResponse,
    SsAnalysisResponse,
    ViolationResponse,
    round_finite,
)

__all__ = [
    "AnalysisResponse",
    "ControlChartsResponse",
    "ControlLimitsResponse",
    "DataQualityResponse",
    "DistributionResponse",
    "DistributionStatsResponse",
    "MetricsResponse",
    "PointResponse",
    "ProcessInterpretationResponse",
    "SsAnalysisResponse",
    "ViolationResponse",
    "round_finite",
]
