"""Presentation layer for SPC analysis results."""

from spcinsight.api.analysis import analyze_inspection_data

__all__ = ["analyze_inspection_data"]
