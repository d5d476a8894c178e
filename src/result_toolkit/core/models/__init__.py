"""
Core Models Package

Immutable, validated data models that serve as the single source of truth
for every analysis run.

All models in this package are frozen dataclasses. Totals and percentages
are always calculated from marks, never stored, and ranks live on separate
records produced by the ranking engine rather than on the students.
"""

from .marks import Marks
from .percentage import Percentage
from .students import Student, StudentId, StudentResult, Subject
from .results import Result

__all__ = [
    "Marks",
    "Percentage",
    "Student",
    "StudentId",
    "StudentResult",
    "Subject",
    "Result",
]
