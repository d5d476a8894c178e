"""
Module: marks

Purpose:
    Provides the Marks dataclass - the validated, single source of truth
    for one student's score in one subject. Every mark that reaches the
    ranking or analytics engines has passed through this class.

Key Functions:
    - Marks.of(raw): Parse a raw ingestion value (number or numeric string)
    - Marks.zero(): Create zero marks

Dependencies:
    - dataclasses (std)
    - math (std)
    - numbers (std)

Used By:
    - core.models.students.StudentResult
    - core.models.results.Result.build
    - analytics.engine
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Any

DEFAULT_MAX_MARKS = 100


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


@dataclass(frozen=True, slots=True)
class Marks:
    """
    Validated mark for one (student, subject) pair.

    Attributes:
        value: Score obtained, 0 <= value <= max_marks
        max_marks: Maximum score available in the subject

    Invariants:
        - value is a real number (bools rejected), never NaN
        - 0 <= value <= max_marks
        - max_marks > 0

    Example:
        >>> m = Marks(72)
        >>> m.value
        72
        >>> Marks.of(" 64.5 ").value
        64.5
    """

    value: float
    max_marks: float = DEFAULT_MAX_MARKS

    def __post_init__(self) -> None:
        """Validate marks on construction."""
        if not _is_number(self.max_marks) or not self.max_marks > 0:
            raise ValueError(f"Maximum marks must be a positive number: {self.max_marks!r}")
        if not _is_number(self.value) or math.isnan(self.value):
            raise ValueError(f"Marks must be numeric: {self.value!r}")
        if self.value < 0:
            raise ValueError(f"Marks cannot be negative: {self.value}")
        if self.value > self.max_marks:
            raise ValueError(
                f"Marks cannot exceed maximum of {self.max_marks}: {self.value}"
            )

    # ─────────────────────────────────────────────────────────────────────────
    # Factory Methods
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def of(cls, raw: Any, max_marks: float = DEFAULT_MAX_MARKS) -> Marks:
        """
        Create marks from a raw ingestion value.

        Accepts numbers and numeric strings (surrounding whitespace is
        ignored). Integral strings stay integers so totals remain exact.

        Args:
            raw: Value read from an uploaded sheet
            max_marks: Maximum score available in the subject

        Returns:
            Validated Marks

        Raises:
            ValueError: If raw is not numeric, negative or above max_marks
        """
        if isinstance(raw, str):
            text = raw.strip()
            try:
                raw = int(text)
            except ValueError:
                try:
                    raw = float(text)
                except ValueError:
                    raise ValueError(f"Marks must be numeric: {raw!r}") from None
        return cls(value=raw, max_marks=max_marks)

    @classmethod
    def zero(cls, max_marks: float = DEFAULT_MAX_MARKS) -> Marks:
        """Zero marks out of max_marks."""
        return cls(value=0, max_marks=max_marks)

    # ─────────────────────────────────────────────────────────────────────────
    # Calculated Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def fraction(self) -> float:
        """Share of the maximum obtained, 0.0 - 1.0."""
        return self.value / self.max_marks

    # ─────────────────────────────────────────────────────────────────────────
    # Operators
    # ─────────────────────────────────────────────────────────────────────────

    def __add__(self, other: Marks) -> Marks:
        """
        Add two marks.

        Both the obtained values and the maxima are summed, so the result
        stays within its own maximum.
        """
        if not isinstance(other, Marks):
            return NotImplemented
        return Marks(
            value=self.value + other.value,
            max_marks=self.max_marks + other.max_marks,
        )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return f"Marks({self.value}/{self.max_marks})"
