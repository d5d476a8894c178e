"""
Module: ranking.models

Purpose:
    Immutable records produced by the ranking engine. Ranks are attached
    to students through RankedStudent instead of being written onto the
    StudentResult objects, so two ranking passes can never clobber
    each other.

Key Classes:
    - RankedStudent: A student paired with an overall or subject rank
    - RankChange: Movement of one student between two Results
    - RankComparison: improved / declined / maintained buckets
    - ConsistentPerformer: Rank history with low variance
    - RankDistribution: Quartile bucket sizes

Used By:
    - ranking.engine
    - report.builder
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from result_toolkit.core.models import StudentId, StudentResult

UNRANKED = 0


@dataclass(frozen=True)
class RankedStudent:
    """
    A student with an assigned dense rank.

    Attributes:
        student: The ranked student
        rank: Dense rank starting at 1; 0 means unranked
        subject: Subject the rank applies to, None for the overall rank
    """

    student: StudentResult
    rank: int
    subject: Optional[str] = None

    def __post_init__(self) -> None:
        if self.rank < UNRANKED:
            raise ValueError(f"Rank cannot be negative: {self.rank}")

    @classmethod
    def unranked(cls, student: StudentResult) -> RankedStudent:
        return cls(student=student, rank=UNRANKED)

    @property
    def is_ranked(self) -> bool:
        return self.rank > UNRANKED

    @property
    def student_id(self) -> StudentId:
        return self.student.student_id

    @property
    def is_subject_rank(self) -> bool:
        return self.subject is not None

    def to_dict(self) -> dict:
        """Serialize to a JSON-friendly dictionary."""
        d = {
            "rank": self.rank,
            "name": self.student.name,
            "roll_number": self.student.roll_number,
            "total_marks": self.student.total_marks,
            "percentage": self.student.percentage.value,
            "grade": self.student.letter_grade,
        }
        if self.subject is not None:
            d["subject"] = self.subject
            marks = self.student.marks_for(self.subject)
            d["subject_marks"] = marks.value if marks is not None else None
        return d


@dataclass(frozen=True)
class RankChange:
    """How one student moved between a previous and a current Result."""

    student: StudentResult
    current_rank: int
    previous_rank: int

    @property
    def change(self) -> int:
        """previous - current; positive when the student moved up."""
        return self.previous_rank - self.current_rank

    @property
    def magnitude(self) -> int:
        return abs(self.change)


@dataclass(frozen=True)
class RankComparison:
    """Students present in both Results, split by direction of movement."""

    improved: Tuple[RankChange, ...] = ()
    declined: Tuple[RankChange, ...] = ()
    maintained: Tuple[RankChange, ...] = ()

    @property
    def matched_count(self) -> int:
        return len(self.improved) + len(self.declined) + len(self.maintained)


@dataclass(frozen=True)
class ConsistentPerformer:
    """A student whose rank barely moved across every Result."""

    student_id: StudentId
    ranks: Tuple[int, ...]
    variance: float


@dataclass(frozen=True)
class RankDistribution:
    """Number of students in each quartile band, best band first."""

    top_quartile: int = 0
    second_quartile: int = 0
    third_quartile: int = 0
    bottom_quartile: int = 0

    @property
    def total(self) -> int:
        return (
            self.top_quartile
            + self.second_quartile
            + self.third_quartile
            + self.bottom_quartile
        )

    def to_dict(self) -> dict:
        return {
            "top_quartile": self.top_quartile,
            "second_quartile": self.second_quartile,
            "third_quartile": self.third_quartile,
            "bottom_quartile": self.bottom_quartile,
        }
