"""SPC Engine - Statistical Process Control analysis pipeline."""

from .analysis import (
    AnalysisResult,
    ChartPoint,
    ControlCharts,
    DataQuality,
    Metrics,
    calculate_analysis,
)
from .extraction import ExtractionResult, extract_measurements
from .histogram import Distribution, DistributionStats, HistogramBin, calculate_distribution
from .interpretation import (
    CapabilityRating,
    DecisionRemark,
    ProcessInterpretation,
    ShiftPresence,
    SpecialCause,
    SpecialCauseAnalysis,
    Stability,
    YesNo,
)
from .run_rules import (
    ChartSeries,
    Rule1OutsideLimits,
    Rule2Run,
    Rule3Trend,
    RuleResult,
    Severity,
    SpecialCauseRuleLibrary,
    SpecialCauseSummary,
    detect_special_causes,
)

__all__ = [
    # Orchestrator
    "calculate_analysis",
    "AnalysisResult",
    "ChartPoint",
    "ControlCharts",
    "DataQuality",
    "Metrics",
    # Extraction
    "extract_measurements",
    "ExtractionResult",
    # Histogram
    "calculate_distribution",
    "Distribution",
    "DistributionStats",
    "HistogramBin",
    # Interpretation
    "CapabilityRating",
    "DecisionRemark",
    "ProcessInterpretation",
    "ShiftPresence",
    "SpecialCause",
    "SpecialCauseAnalysis",
    "Stability",
    "YesNo",
    # Special-cause rules
    "detect_special_causes",
    "ChartSeries",
    "Rule1OutsideLimits",
    "Rule2Run",
    "Rule3Trend",
    "RuleResult",
    "Severity",
    "SpecialCauseRuleLibrary",
    "SpecialCauseSummary",
]
