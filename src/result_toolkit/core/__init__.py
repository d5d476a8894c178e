"""
Result Toolkit Core Package

Shared data models and validation used by the ranking and analytics
engines.

1. **Immutable Data Models**
   - Frozen dataclasses; a new instance is created for any change

2. **Calculated Totals (Never Stored)**
   - total marks and percentage are always derived from marks

3. **Ranks Live Outside Students**
   - ranking returns RankedStudent records instead of mutating students
"""

from .models import Marks, Percentage, Result, Student, StudentId, StudentResult, Subject
from .schemas import ValidationError

__all__ = [
    "Marks",
    "Percentage",
    "Result",
    "Student",
    "StudentId",
    "StudentResult",
    "Subject",
    "ValidationError",
]
