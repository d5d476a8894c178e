"""
Module: results

Purpose:
    Provides the Result aggregate - one analysis run's subjects and the
    mark sheet of every student. This is the only input the ranking and
    analytics engines consume.

Key Functions:
    - Result.build(subjects, rows): Assemble a Result from ingestion rows
    - Result.declared_marks(sr): A student's marks restricted to declared subjects

Dependencies:
    - dataclasses (std)
    - logging (std)
    - .marks.Marks
    - .students

Used By:
    - ranking.engine
    - analytics.engine
    - report.builder
    - core.utils.serialization
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Tuple

from .marks import DEFAULT_MAX_MARKS, Marks
from .students import Student, StudentId, StudentResult, Subject

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Result:
    """
    Aggregate for one analysis run.

    Attributes:
        subjects: Ordered, uniquely named subjects
        students: Ordered student results
        title: Optional label (e.g. "Term 1 - Grade 8")

    Invariants:
        - subject names are unique
        - subjects and students are immutable tuples
        - students carry marks for declared subjects only (others are
          stripped on construction, so totals and percentages ignore them)

    Example:
        >>> result = Result.build(
        ...     ["Maths", "Science"],
        ...     [{"name": "Asha", "roll_number": "1",
        ...       "marks": {"Maths": 90, "Science": 80}}],
        ... )
        >>> result.student_count
        1
    """

    subjects: Tuple[Subject, ...]
    students: Tuple[StudentResult, ...]
    title: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "subjects", tuple(self.subjects))
        seen = set()
        duplicates = []
        for subject in self.subjects:
            if subject.name in seen:
                duplicates.append(subject.name)
            seen.add(subject.name)
        if duplicates:
            raise ValueError(f"Duplicate subject names: {duplicates}")

        # Totals and percentages only ever see declared subjects
        students = []
        for student in self.students:
            undeclared = [name for name in student.marks if name not in seen]
            if undeclared:
                logger.warning(
                    "%s: ignoring marks for undeclared subjects %s",
                    student.roll_number, undeclared,
                )
                student = StudentResult(
                    student=student.student,
                    marks={n: m for n, m in student.marks.items() if n in seen},
                )
            students.append(student)
        object.__setattr__(self, "students", tuple(students))

    # ─────────────────────────────────────────────────────────────────────────
    # Factory Methods
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def build(
        cls,
        subjects: Sequence[str | Subject],
        rows: Iterable[Mapping[str, Any]],
        *,
        max_marks: float = DEFAULT_MAX_MARKS,
        title: str = "",
    ) -> Result:
        """
        Assemble a Result from normalized ingestion rows.

        Each row carries ``name``, ``roll_number``, optional ``class_name``
        and ``section``, and ``marks`` (subject name -> raw value). Blank or
        None marks are treated as missing; marks for undeclared subjects
        are dropped with a warning.

        Args:
            subjects: Ordered subject names
            rows: One mapping per student
            max_marks: Maximum marks for every subject
            title: Optional label for the run

        Returns:
            Result

        Raises:
            ValueError: If a row lacks identity fields or carries invalid marks
        """
        subject_list = tuple(s if isinstance(s, Subject) else Subject(s) for s in subjects)
        declared = {s.name for s in subject_list}

        students = []
        for index, row in enumerate(rows, 1):
            try:
                student = Student(
                    name=str(row["name"]).strip(),
                    student_id=StudentId(row["roll_number"]),
                    class_name=row.get("class_name"),
                    section=row.get("section"),
                )
            except KeyError as e:
                raise ValueError(f"Row {index} is missing field {e.args[0]!r}") from None

            marks: Dict[str, Marks] = {}
            for subject_name, raw in (row.get("marks") or {}).items():
                subject_name = str(subject_name).strip()
                if subject_name not in declared:
                    logger.warning(
                        "Row %d (%s): dropping marks for undeclared subject %r",
                        index, student.roll_number, subject_name,
                    )
                    continue
                if raw is None or (isinstance(raw, str) and not raw.strip()):
                    continue
                try:
                    marks[subject_name] = Marks.of(raw, max_marks=max_marks)
                except ValueError as e:
                    raise ValueError(
                        f"Row {index} ({student.roll_number}), {subject_name}: {e}"
                    ) from e
            students.append(StudentResult(student=student, marks=marks))

        logger.debug(
            "Built result %r: %d subjects, %d students",
            title, len(subject_list), len(students),
        )
        return cls(subjects=subject_list, students=tuple(students), title=title)

    # ─────────────────────────────────────────────────────────────────────────
    # Accessors
    # ─────────────────────────────────────────────────────────────────────────

    @cached_property
    def subject_names(self) -> Tuple[str, ...]:
        return tuple(s.name for s in self.subjects)

    @property
    def student_count(self) -> int:
        return len(self.students)

    @property
    def subject_count(self) -> int:
        return len(self.subjects)

    @property
    def is_empty(self) -> bool:
        return not self.students

    def has_subject(self, subject_name: str) -> bool:
        return subject_name in self.subject_names

    def declared_marks(self, student: StudentResult) -> Dict[str, Marks]:
        """
        A student's marks restricted to this Result's subjects.

        Order follows the declared subject order, not the student's
        mapping order.
        """
        return {
            name: student.marks[name]
            for name in self.subject_names
            if name in student.marks
        }

    def find_student(self, student_id: StudentId | str) -> Optional[StudentResult]:
        """First student with the given identity, or None."""
        if not isinstance(student_id, StudentId):
            student_id = StudentId(student_id)
        for student in self.students:
            if student.student_id == student_id:
                return student
        return None

    def __repr__(self) -> str:
        return (
            f"Result({self.title!r}, subjects={self.subject_count}, "
            f"students={self.student_count})"
        )
