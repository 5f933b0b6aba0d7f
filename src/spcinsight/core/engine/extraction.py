"""Measurement extraction from raw inspection records.

Records whose three fields do not all parse to finite numbers are dropped.
The specification limits of the first retained record apply to the whole
series.
"""

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

import structlog
from pydantic import ValidationError

from spcinsight.core.exceptions import InsufficientDataError
from spcinsight.core.records import InspectionRecord
from spcinsight.utils.constants import get_constants

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ExtractionResult:
    """Measurements and specification limits pulled from a record feed.

    Attributes:
        measurements: Finite measured values in feed order
        lsl: Lower specification limit of the first valid record
        usl: Upper specification limit of the first valid record
        total_records: Number of records received
        dropped_records: Records skipped because a field was not a finite number
    """
    measurements: list[float]
    lsl: float
    usl: float
    total_records: int
    dropped_records: int

    @property
    def valid_records(self) -> int:
        return len(self.measurements)


def parse_finite(text: str | None) -> float | None:
    """Parse text as a float, returning None unless the result is finite."""
    if text is None:
        return None
    try:
        value = float(text)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def _as_record(record: InspectionRecord | Mapping[str, Any]) -> InspectionRecord | None:
    if isinstance(record, InspectionRecord):
        return record
    try:
        return InspectionRecord.model_validate(record)
    except ValidationError:
        return None


def extract_measurements(
    records: Iterable[InspectionRecord | Mapping[str, Any]],
    sample_size: int = 5,
) -> ExtractionResult:
    """Extract the measurement series and specification limits.

    Args:
        records: Inspection records (models or plain mappings) in process order
        sample_size: Subgroup size the series will be analysed with

    Returns:
        ExtractionResult with the measurements and the first valid record's limits

    Raises:
        InvalidSampleSizeError: If sample_size is not between 1 and 5
        InsufficientDataError: If fewer than sample_size records are valid
    """
    get_constants(sample_size)

    measurements: list[float] = []
    limits: tuple[float, float] | None = None
    total = 0

    for raw in records:
        total += 1
        record = _as_record(raw)
        if record is None:
            continue
        actual = parse_finite(record.actual_specification)
        lsl = parse_finite(record.from_specification)
        usl = parse_finite(record.to_specification)
        if actual is None or lsl is None or usl is None:
            continue
        if limits is None:
            limits = (lsl, usl)
        measurements.append(actual)

    dropped = total - len(measurements)
    if dropped:
        logger.warning(
            "dropped_invalid_records",
            total_records=total,
            dropped_records=dropped,
        )

    if limits is None or len(measurements) < sample_size:
        raise InsufficientDataError(
            "Insufficient valid data for analysis",
            details={
                "sample_size": sample_size,
                "valid_records": len(measurements),
                "dropped_records": dropped,
            },
        )

    return ExtractionResult(
        measurements=measurements,
        lsl=limits[0],
        usl=limits[1],
        total_records=total,
        dropped_records=dropped,
    )
