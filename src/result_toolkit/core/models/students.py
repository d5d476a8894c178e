"""
Module: students

Purpose:
    Identity and per-student outcome models: Subject, StudentId, Student
    and StudentResult. A StudentResult never stores its total or its
    percentage - both are always calculated from its marks.

Key Classes:
    - Subject: A gradable topic, unique by name within a Result
    - StudentId: Stable identity key used to match students across Results
    - Student: Name, identity and optional class/section
    - StudentResult: One student's marks plus derived totals

Dependencies:
    - dataclasses (std)
    - functools (std)
    - types (std)
    - .marks.Marks
    - .percentage.Percentage

Used By:
    - core.models.results.Result
    - ranking.engine
    - analytics.engine
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .marks import Marks
from .percentage import Percentage


@dataclass(frozen=True, slots=True)
class Subject:
    """A gradable topic, identified by its name."""

    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError(f"Subject name must be a non-empty string: {self.name!r}")
        object.__setattr__(self, "name", self.name.strip())

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True, order=True)
class StudentId:
    """
    Identity key for matching the same student across Results.

    Matching is exact and case-sensitive; only surrounding whitespace is
    ignored. "R-01" and "r-01" are different students.

    Example:
        >>> StudentId(" 042 ") == StudentId("042")
        True
    """

    roll_number: str

    def __post_init__(self) -> None:
        roll = self.roll_number
        if isinstance(roll, int) and not isinstance(roll, bool):
            roll = str(roll)
        if not isinstance(roll, str) or not roll.strip():
            raise ValueError(f"Roll number must be a non-empty string: {self.roll_number!r}")
        object.__setattr__(self, "roll_number", roll.strip())

    def __str__(self) -> str:
        return self.roll_number


@dataclass(frozen=True, slots=True)
class Student:
    """Who a StudentResult belongs to."""

    name: str
    student_id: StudentId
    class_name: Optional[str] = None
    section: Optional[str] = None

    @property
    def roll_number(self) -> str:
        return self.student_id.roll_number


@dataclass(frozen=True)
class StudentResult:
    """
    One student's outcome for a Result.

    Attributes:
        student: Identity of the student
        marks: Subject name -> Marks (read-only after construction)

    Invariants:
        - marks is never mutated after construction
        - total_marks == sum of marks values (calculated, never stored)
        - percentage == total_marks / max_total_marks * 100, rounded half-up

    Example:
        >>> sr = StudentResult(
        ...     Student("Asha", StudentId("1")),
        ...     {"Maths": Marks(90), "Science": Marks(80)},
        ... )
        >>> sr.total_marks, sr.percentage.value
        (170, 85.0)
    """

    student: Student
    marks: Mapping[str, Marks] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        for subject_name, marks in self.marks.items():
            if not isinstance(marks, Marks):
                raise ValueError(
                    f"Marks for {subject_name!r} of {self.student.roll_number} "
                    f"must be a Marks instance: {marks!r}"
                )
        object.__setattr__(self, "marks", MappingProxyType(dict(self.marks)))

    # ─────────────────────────────────────────────────────────────────────────
    # Calculated Properties (NEVER stored)
    # ─────────────────────────────────────────────────────────────────────────

    @cached_property
    def total_marks(self) -> float:
        """Sum of obtained marks across all subjects."""
        return sum(m.value for m in self.marks.values())

    @cached_property
    def max_total_marks(self) -> float:
        """Sum of maximum marks across all subjects."""
        return sum(m.max_marks for m in self.marks.values())

    @cached_property
    def percentage(self) -> Percentage:
        """Overall percentage; zero when the student has no marks."""
        return Percentage.from_fraction(self.total_marks, self.max_total_marks)

    @property
    def letter_grade(self) -> str:
        return self.percentage.letter_grade()

    @property
    def student_id(self) -> StudentId:
        return self.student.student_id

    @property
    def roll_number(self) -> str:
        return self.student.roll_number

    @property
    def name(self) -> str:
        return self.student.name

    @property
    def subject_names(self) -> Tuple[str, ...]:
        return tuple(self.marks)

    def marks_for(self, subject_name: str) -> Optional[Marks]:
        """Marks for a subject, or None when the student has no entry."""
        return self.marks.get(subject_name)

    def __repr__(self) -> str:
        return (
            f"StudentResult({self.roll_number!r}, "
            f"total={self.total_marks}, pct={self.percentage.value})"
        )
