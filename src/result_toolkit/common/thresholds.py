"""Centralized threshold and boundary configuration.

This module contains every cutoff, ratio and magic number used by the
ranking and analytics engines. Keeping them in one place guarantees that
e.g. the pass mark used for pass/fail rates is the same one reused when
insights are generated.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Tuple


@dataclass(frozen=True)
class GradeBoundaries:
    """Letter-grade table, highest grade first.

    Each entry is ``(minimum_percentage, letter)``. A percentage receives
    the first letter whose minimum it meets; anything below every minimum
    receives ``fallback``.
    """

    bands: Tuple[Tuple[float, str], ...] = (
        (90.0, "A+"),
        (80.0, "A"),
        (70.0, "B"),
        (60.0, "C"),
        (40.0, "D"),
    )
    fallback: str = "F"
    top_grades: Tuple[str, ...] = ("A+", "A")  # Grades that make a student a high performer

    def __post_init__(self) -> None:
        minimums = [minimum for minimum, _ in self.bands]
        if any(a <= b for a, b in zip(minimums, minimums[1:])):
            raise ValueError(f"Grade bands must be strictly descending: {minimums}")
        if any(m < 0 or m > 100 for m in minimums):
            raise ValueError(f"Grade band minimums must be within 0-100: {minimums}")

    @property
    def letters(self) -> Tuple[str, ...]:
        """All letters, best first, fallback last."""
        return tuple(letter for _, letter in self.bands) + (self.fallback,)

    def letter_for(self, percentage: float) -> str:
        """Map a 0-100 percentage to its letter grade."""
        for minimum, letter in self.bands:
            if percentage >= minimum:
                return letter
        return self.fallback


@dataclass(frozen=True)
class AnalysisThresholds:
    """Thresholds shared by the ranking and analytics engines."""

    # Pass/fail
    passing_percentage: float = 40.0  # Overall percentage needed to pass
    passing_marks: float = 40.0  # Subject marks needed to pass that subject
    difficulty_passing_marks: float = 40.0  # Fixed pass mark for difficulty analysis

    # Segmentation
    excellence_threshold: float = 85.0  # Subject marks counted as "excellent"
    min_failures: int = 2  # Failed subjects before a student is "struggling"
    high_performer_share: float = 0.3  # Share of class that triggers advanced-learning advice

    # Ranking
    consistency_variance: float = 5.0  # Max rank variance for a consistent performer
    default_top_count: int = 10  # Default slice size for top/bottom lists

    # Difficulty bands: (min pass rate %, min average marks)
    easy_band: Tuple[float, float] = (90.0, 75.0)
    moderate_band: Tuple[float, float] = (75.0, 60.0)
    difficult_band: Tuple[float, float] = (50.0, 45.0)

    # Class performance bands on the class-average percentage
    excellent_average: float = 85.0
    good_average: float = 70.0
    average_average: float = 55.0
    below_average_average: float = 40.0
    review_curriculum_below: float = 60.0  # Class average that triggers curriculum advice

    # Trends
    trend_change: float = 5.0  # First-to-last change needed to call a trend
    trend_spread: float = 10.0  # Max-min spread flagged as high variance

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            parts = value if isinstance(value, tuple) else (value,)
            if not all(isinstance(p, (int, float)) and not isinstance(p, bool) for p in parts):
                raise ValueError(f"{f.name} must be numeric: {value!r}")
            is_pair = isinstance(value, tuple) and len(value) == 2
            wants_pair = isinstance(f.default, tuple)
            if wants_pair != is_pair:
                shape = "a (pass rate, average) pair" if wants_pair else "a single number"
                raise ValueError(f"{f.name} must be {shape}: {value!r}")
        for name in (
            "passing_percentage",
            "passing_marks",
            "difficulty_passing_marks",
            "excellence_threshold",
            "consistency_variance",
            "trend_change",
            "trend_spread",
        ):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative: {value}")
        if self.min_failures < 0:
            raise ValueError(f"min_failures must be non-negative: {self.min_failures}")
        if not 0 <= self.high_performer_share <= 1:
            raise ValueError(
                f"high_performer_share must be within 0-1: {self.high_performer_share}"
            )
        averages = [
            self.excellent_average,
            self.good_average,
            self.average_average,
            self.below_average_average,
        ]
        if any(a < b for a, b in zip(averages, averages[1:])):
            raise ValueError(f"Class performance bands must be descending: {averages}")

    # ─────────────────────────────────────────────────────────────────────────
    # Factory Methods
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AnalysisThresholds:
        """
        Build thresholds from a mapping of overrides.

        Keys not present keep their defaults. Band values may be given as
        two-element lists (as they arrive from JSON).

        Raises:
            ValueError: If a key is not a known threshold or a value is not numeric
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown threshold keys: {unknown}")
        values = {
            key: tuple(value) if isinstance(value, (list, tuple)) else value
            for key, value in data.items()
        }
        return cls(**values)

    def with_overrides(self, **overrides: Any) -> AnalysisThresholds:
        """Return a copy with the given (non-None) values replaced."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        return replace(self, **changes)

    def to_dict(self) -> dict:
        """Serialize to a JSON-friendly dictionary."""
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            data[f.name] = list(value) if isinstance(value, tuple) else value
        return data


# Global instances for easy import
GRADE_BOUNDARIES = GradeBoundaries()
ANALYSIS_THRESHOLDS = AnalysisThresholds()
