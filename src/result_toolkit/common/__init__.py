"""Common configuration shared across the toolkit."""

from __future__ import annotations

from .thresholds import (
    ANALYSIS_THRESHOLDS,
    GRADE_BOUNDARIES,
    AnalysisThresholds,
    GradeBoundaries,
)

__all__ = [
    "ANALYSIS_THRESHOLDS",
    "GRADE_BOUNDARIES",
    "AnalysisThresholds",
    "GradeBoundaries",
]
