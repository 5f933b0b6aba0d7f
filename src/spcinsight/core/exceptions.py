"""Exception classes for SPC analysis.

- SpcAnalysisError: Base exception for all analysis errors
- InvalidSampleSizeError: Sample size has no Shewhart constants entry
- InsufficientDataError: Fewer valid measurements than the sample size

All of them subclass ValueError, so callers treating bad input generically
keep working.
"""

from typing import Any


class SpcAnalysisError(ValueError):
    """Base exception for SPC analysis errors.

    Attributes:
        message: Human-readable error message
        details: Dictionary with additional error context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class InvalidSampleSizeError(SpcAnalysisError):
    """Raised when the sample size is outside the supported 1-5 range."""


class InsufficientDataError(SpcAnalysisError):
    """Raised when there are fewer valid measurements than the sample size.

    ``details`` carries ``valid_records`` and ``dropped_records`` so a feed
    made entirely of malformed records can be told apart from a short one.
    """
