"""
Module: percentage

Purpose:
    Provides the Percentage dataclass - an immutable 0-100 value with a
    letter-grade mapping driven by the GradeBoundaries table.

Key Functions:
    - Percentage.zero(): The empty-population percentage
    - Percentage.from_fraction(n, d): n / d * 100, rounded half-up to 2 places
    - Percentage.letter_grade(): Letter from the configured grade table

Dependencies:
    - decimal (std)
    - common.thresholds.GradeBoundaries

Used By:
    - core.models.students.StudentResult
    - analytics.engine
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from result_toolkit.common.thresholds import GRADE_BOUNDARIES, GradeBoundaries


def round_half_up(value: float, places: int = 2) -> float:
    """Round like a report card does (2.345 -> 2.35), not banker's rounding."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


@dataclass(frozen=True, slots=True, order=True)
class Percentage:
    """
    Immutable percentage in [0, 100].

    Invariants:
        - 0 <= value <= 100

    Example:
        >>> Percentage.from_fraction(2, 3).value
        66.67
        >>> Percentage(91.5).letter_grade()
        'A+'
    """

    value: float

    def __post_init__(self) -> None:
        """Validate range on construction."""
        if not 0 <= self.value <= 100:
            raise ValueError(f"Percentage must be within 0-100: {self.value}")

    @classmethod
    def zero(cls) -> Percentage:
        """Zero percent."""
        return cls(0.0)

    @classmethod
    def from_fraction(cls, numerator: float, denominator: float) -> Percentage:
        """
        Build a percentage from a fraction.

        Args:
            numerator: Part of the whole (e.g. students passed)
            denominator: The whole (e.g. total students)

        Returns:
            numerator / denominator * 100 rounded half-up to 2 decimals,
            or zero when denominator is not positive
        """
        if denominator <= 0:
            return cls.zero()
        return cls(round_half_up(numerator / denominator * 100))

    def letter_grade(self, boundaries: GradeBoundaries = GRADE_BOUNDARIES) -> str:
        """Letter grade for this percentage."""
        return boundaries.letter_for(self.value)

    def is_top_grade(self, boundaries: GradeBoundaries = GRADE_BOUNDARIES) -> bool:
        """True when the letter grade is one of the table's top grades."""
        return self.letter_grade(boundaries) in boundaries.top_grades

    def __float__(self) -> float:
        return float(self.value)

    def __str__(self) -> str:
        return f"{self.value:.2f}%"
