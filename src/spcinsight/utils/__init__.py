"""Utilities for SPC statistical calculations."""

from .constants import (
    SHEWHART_CONSTANTS,
    SUPPORTED_SAMPLE_SIZES,
    ShewhartConstants,
    get_constants,
)

from .statistics import (
    CapabilityIndices,
    ControlLimits,
    XbarRLimits,
    calculate_capability,
    calculate_xbar_r_limits,
    guard_sigma,
    mean,
    moving_ranges,
    stddev,
    subgroup_means,
    subgroup_ranges,
)

__all__ = [
    # Constants
    "SHEWHART_CONSTANTS",
    "SUPPORTED_SAMPLE_SIZES",
    "ShewhartConstants",
    "get_constants",
    # Data classes
    "CapabilityIndices",
    "ControlLimits",
    "XbarRLimits",
    # Moment statistics
    "mean",
    "stddev",
    # Subgrouping
    "moving_ranges",
    "subgroup_means",
    "subgroup_ranges",
    # Limits and capability
    "calculate_xbar_r_limits",
    "calculate_capability",
    "guard_sigma",
]
