"""
Module: analytics.models

Purpose:
    Immutable records returned by the analytics engine. All of them
    serialize to plain JSON types via ``to_dict()`` so that storage and
    presentation layers never touch live domain objects.

Key Classes:
    - Difficulty, ClassPerformance, Trend: Classification labels
    - PassFailRates, SubjectPassFailRate: Pass/fail statistics
    - StrugglingStudent, HighPerformer: Cohort segments
    - SubjectDifficulty: Per-subject difficulty analysis
    - InsightStatistics, PerformanceInsights: Narrative summary
    - PerformanceTrend: Change across ordered Results
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from result_toolkit.core.models import Percentage, StudentResult


class Difficulty(str, Enum):
    """Subject difficulty, easiest first."""
    EASY = "Easy"
    MODERATE = "Moderate"
    DIFFICULT = "Difficult"
    VERY_DIFFICULT = "Very Difficult"

    @property
    def ordinal(self) -> int:
        return _DIFFICULTY_ORDER.index(self)

    def __str__(self) -> str:
        return self.value


_DIFFICULTY_ORDER = tuple(Difficulty)


class ClassPerformance(str, Enum):
    """Qualitative band for a class average."""
    EXCELLENT = "Excellent"
    GOOD = "Good"
    AVERAGE = "Average"
    BELOW_AVERAGE = "Below Average"
    POOR = "Poor"

    def __str__(self) -> str:
        return self.value


class Trend(str, Enum):
    """Direction of class performance across Results."""
    IMPROVING = "Improving"
    DECLINING = "Declining"
    STABLE = "Stable"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PassFailRates:
    """Overall pass/fail counts for a Result."""

    total_students: int
    passed: int
    failed: int
    pass_percentage: Percentage
    fail_percentage: Percentage

    @classmethod
    def empty(cls) -> PassFailRates:
        return cls(0, 0, 0, Percentage.zero(), Percentage.zero())

    def to_dict(self) -> dict:
        return {
            "total_students": self.total_students,
            "passed": self.passed,
            "failed": self.failed,
            "pass_percentage": self.pass_percentage.value,
            "fail_percentage": self.fail_percentage.value,
        }


@dataclass(frozen=True)
class SubjectPassFailRate:
    """Pass/fail counts for one subject. A missing mark counts as not passed."""

    subject_name: str
    total_students: int
    passed: int
    failed: int
    pass_percentage: Percentage

    def to_dict(self) -> dict:
        return {
            "subject_name": self.subject_name,
            "total_students": self.total_students,
            "passed": self.passed,
            "failed": self.failed,
            "pass_percentage": self.pass_percentage.value,
        }


@dataclass(frozen=True)
class StrugglingStudent:
    """A student failing at least the configured number of subjects."""

    student: StudentResult
    failed_subjects: Tuple[str, ...]

    @property
    def total_failures(self) -> int:
        return len(self.failed_subjects)

    def to_dict(self) -> dict:
        return {
            "name": self.student.name,
            "roll_number": self.student.roll_number,
            "failed_subjects": list(self.failed_subjects),
            "total_failures": self.total_failures,
        }


@dataclass(frozen=True)
class HighPerformer:
    """A student excelling in half their subjects or holding a top grade."""

    student: StudentResult
    excellent_subjects: Tuple[str, ...]
    overall_grade: str

    def to_dict(self) -> dict:
        return {
            "name": self.student.name,
            "roll_number": self.student.roll_number,
            "percentage": self.student.percentage.value,
            "excellent_subjects": list(self.excellent_subjects),
            "overall_grade": self.overall_grade,
        }


@dataclass(frozen=True)
class SubjectDifficulty:
    """
    Class-level performance in one subject.

    Only students with a mark for the subject contribute; a missing mark
    is never counted as zero.
    """

    subject_name: str
    average_marks: float
    pass_rate: Percentage
    difficulty: Difficulty
    students_count: int
    highest_marks: float = 0
    lowest_marks: float = 0

    def to_dict(self) -> dict:
        return {
            "subject_name": self.subject_name,
            "average_marks": self.average_marks,
            "pass_rate": self.pass_rate.value,
            "difficulty": self.difficulty.value,
            "students_count": self.students_count,
            "highest_marks": self.highest_marks,
            "lowest_marks": self.lowest_marks,
        }


@dataclass(frozen=True)
class InsightStatistics:
    """Numbers the narrative insights were generated from."""

    total_students: int = 0
    class_average: float = 0.0
    top_performers: int = 0
    struggling_students: int = 0
    most_difficult_subject: str = ""
    easiest_subject: str = ""

    def to_dict(self) -> dict:
        return {
            "total_students": self.total_students,
            "class_average": self.class_average,
            "top_performers": self.top_performers,
            "struggling_students": self.struggling_students,
            "most_difficult_subject": self.most_difficult_subject,
            "easiest_subject": self.easiest_subject,
        }


@dataclass(frozen=True)
class PerformanceInsights:
    """Qualitative band plus ordered insight and recommendation strings."""

    class_performance: ClassPerformance
    key_insights: Tuple[str, ...]
    recommendations: Tuple[str, ...]
    statistics: InsightStatistics

    def to_dict(self) -> dict:
        return {
            "class_performance": self.class_performance.value,
            "key_insights": list(self.key_insights),
            "recommendations": list(self.recommendations),
            "statistics": self.statistics.to_dict(),
        }


@dataclass(frozen=True)
class PerformanceTrend:
    """Class-average movement from the first to the last Result."""

    trend: Trend
    average_change: float
    insights: Tuple[str, ...]
    averages: Tuple[float, ...] = ()

    def to_dict(self) -> dict:
        return {
            "trend": self.trend.value,
            "average_change": self.average_change,
            "insights": list(self.insights),
            "averages": list(self.averages),
        }
