import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import result_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from result_toolkit.core.models import Marks, Result, Student, StudentId, StudentResult, Subject


def make_student(roll: str, marks: dict, name: str | None = None) -> StudentResult:
    """Build a StudentResult from plain subject -> value pairs."""
    return StudentResult(
        student=Student(name=name or f"Student {roll}", student_id=StudentId(roll)),
        marks={subject: Marks(value) for subject, value in marks.items()},
    )


def make_result(subjects: list, students: list, title: str = "") -> Result:
    """Build a Result from subject names and StudentResults."""
    return Result(
        subjects=tuple(Subject(s) for s in subjects),
        students=tuple(students),
        title=title,
    )


def single_subject_result(percentages: list, title: str = "") -> Result:
    """One subject out of 100, so each mark is also the student's percentage."""
    students = [
        make_student(str(i + 1), {"Overall": value})
        for i, value in enumerate(percentages)
    ]
    return make_result(["Overall"], students, title=title)


# Common test fixtures
@pytest.fixture
def class_result() -> Result:
    """Five students, four subjects, with a tie and one struggling student."""
    subjects = ["Maths", "Science", "English", "History"]
    students = [
        make_student("001", {"Maths": 95, "Science": 92, "English": 88, "History": 90}, "Asha"),
        make_student("002", {"Maths": 70, "Science": 65, "English": 72, "History": 68}, "Ben"),
        make_student("003", {"Maths": 70, "Science": 65, "English": 72, "History": 68}, "Chloe"),
        make_student("004", {"Maths": 35, "Science": 30, "English": 55, "History": 60}, "Dev"),
        make_student("005", {"Maths": 50, "Science": 45, "English": 38, "History": 62}, "Eve"),
    ]
    return make_result(subjects, students, title="Term 1")


@pytest.fixture
def empty_result() -> Result:
    """A Result with subjects but no students."""
    return make_result(["Maths", "Science"], [])
