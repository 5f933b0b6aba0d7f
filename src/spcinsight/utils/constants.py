"""Shewhart constants for X-bar/R control chart calculations.

Factors for subgroup sizes 1-5. D3, D4 and d2 are the ASTM E2587 values.
A2 for n=3..5 follows the inspection dashboard table (1.772, 0.796, 0.691),
not the textbook 3/(d2*sqrt(n)). The n=1 row carries the moving-range
(span 2) factors used for individuals charts.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from spcinsight.core.exceptions import InvalidSampleSizeError


@dataclass(frozen=True)
class ShewhartConstants:
    """Control chart factors for a given subgroup size.

    Attributes:
        n: Subgroup size
        A2: Factor for X-bar chart control limits from R-bar
        D3: Lower control limit factor for R chart
        D4: Upper control limit factor for R chart
        d2: Average range factor (used for sigma estimation from R-bar)
    """
    n: int
    A2: float
    D3: float
    D4: float
    d2: float


SHEWHART_CONSTANTS: Mapping[int, ShewhartConstants] = MappingProxyType({
    1: ShewhartConstants(n=1, A2=2.660, D3=0.0, D4=3.267, d2=1.128),
    2: ShewhartConstants(n=2, A2=1.880, D3=0.0, D4=3.267, d2=1.128),
    3: ShewhartConstants(n=3, A2=1.772, D3=0.0, D4=2.574, d2=1.693),
    4: ShewhartConstants(n=4, A2=0.796, D3=0.0, D4=2.282, d2=2.059),
    5: ShewhartConstants(n=5, A2=0.691, D3=0.0, D4=2.114, d2=2.326),
})

SUPPORTED_SAMPLE_SIZES = tuple(SHEWHART_CONSTANTS)


def get_constants(sample_size: int) -> ShewhartConstants:
    """Get Shewhart constants for a given sample size.

    Args:
        sample_size: The subgroup size (n), must be between 1 and 5

    Returns:
        ShewhartConstants containing A2, D3, D4, d2 for the given n

    Raises:
        InvalidSampleSizeError: If sample_size has no entry in the table

    Examples:
        >>> get_constants(5).d2
        2.326
    """
    # bool is an int subclass; True would otherwise resolve to the n=1 row
    if isinstance(sample_size, bool) or sample_size not in SHEWHART_CONSTANTS:
        raise InvalidSampleSizeError(
            "Sample size must be between 1 and 5",
            details={"sample_size": sample_size},
        )

    return SHEWHART_CONSTANTS[sample_size]
