"""SPC Insight - control charts, capability indices and process verdicts."""

from spcinsight.api.analysis import analyze_inspection_data
from spcinsight.core.engine.analysis import AnalysisResult, calculate_analysis
from spcinsight.core.exceptions import (
    InsufficientDataError,
    InvalidSampleSizeError,
    SpcAnalysisError,
)
from spcinsight.core.records import InspectionRecord

__version__ = "0.1.0"

__all__ = [
    "analyze_inspection_data",
    "calculate_analysis",
    "AnalysisResult",
    "InspectionRecord",
    "SpcAnalysisError",
    "InvalidSampleSizeError",
    "InsufficientDataError",
]
