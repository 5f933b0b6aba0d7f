"""Dashboard-facing entry point for SPC analysis.

Hosting surfaces (HTTP handlers, CLIs, notebooks) call this with the raw
inspection feed and get back a JSON-ready dict in the dashboard's camelCase
layout.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from spcinsight.api.schemas.analysis import AnalysisResponse
from spcinsight.core.config import Settings, get_settings
from spcinsight.core.engine.analysis import calculate_analysis
from spcinsight.core.records import InspectionRecord


def analyze_inspection_data(
    records: Iterable[InspectionRecord | Mapping[str, Any]],
    sample_size: int | None = None,
    settings: Settings | None = None,
) -> dict[str, Any]:
    """Analyse an inspection feed and return the rounded, serialized result.

    Args:
        records: Inspection records in process order
        sample_size: Subgroup size 1-5 (default: configured default, 5)
        settings: Settings to use (default: cached environment settings)

    Returns:
        Dict with metrics, controlCharts, distribution, ssAnalysis,
        processInterpretation and dataQuality keys

    Raises:
        InvalidSampleSizeError: If sample_size is not between 1 and 5
        InsufficientDataError: If fewer than sample_size records are valid
    """
    settings = settings or get_settings()
    result = calculate_analysis(records, sample_size=sample_size, settings=settings)
    response = AnalysisResponse.from_result(result, settings=settings)
    return response.model_dump(mode="json", by_alias=True)
