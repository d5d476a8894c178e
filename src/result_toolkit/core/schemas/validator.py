"""
Schema Validation Utilities

Validates JSON data crossing the toolkit's boundary: result input
payloads handed over by the ingestion layer and report snapshots handed
to storage.

Basic checks (required fields, version, mark values) always run and
produce precise paths. Strict mode additionally validates the whole
document against the bundled JSON Schemas with ``jsonschema``.
"""

from __future__ import annotations

import json
from numbers import Real
from pathlib import Path
from typing import Any

import jsonschema


# Schema version constants
RESULT_SCHEMA_VERSION = 1
REPORT_SCHEMA_VERSION = 1


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def _require(data: dict[str, Any], required: list[str], path: str = "") -> None:
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path=path,
            errors=[f"Missing field: {f}" for f in missing],
        )


def _check_version(data: dict[str, Any], expected: int, kind: str) -> None:
    version = data.get("schema_version")
    if version != expected:
        raise ValidationError(
            f"Unsupported {kind} schema version: {version} (expected {expected})",
            path="schema_version",
        )


def _strict_validate(data: dict[str, Any], schema_name: str) -> None:
    schema = _load_schema(schema_name)
    try:
        jsonschema.validate(data, schema)
    except jsonschema.ValidationError as e:
        raise ValidationError(
            f"Schema validation failed: {e.message}",
            path=".".join(str(p) for p in e.absolute_path),
            errors=[e.message],
        ) from e


def validate_result_data(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate a result input payload.

    Args:
        data: Result dictionary to validate
        strict: If True, also validate against result.schema.json

    Raises:
        ValidationError: If data is invalid
    """
    _require(data, ["schema_version", "subjects", "students"])
    _check_version(data, RESULT_SCHEMA_VERSION, "result")

    subjects = data.get("subjects")
    if not isinstance(subjects, list) or not all(isinstance(s, str) for s in subjects):
        raise ValidationError("subjects must be a list of names", path="subjects")
    duplicates = sorted({s for s in subjects if subjects.count(s) > 1})
    if duplicates:
        raise ValidationError(f"Duplicate subject names: {duplicates}", path="subjects")

    students = data.get("students")
    if not isinstance(students, list):
        raise ValidationError("students must be a list", path="students")
    for i, student in enumerate(students):
        _validate_student(student, f"students[{i}]")

    if strict:
        _strict_validate(data, "result")


def _validate_student(data: Any, path: str) -> None:
    """Validate one student row."""
    if not isinstance(data, dict):
        raise ValidationError("student must be an object", path=path)
    _require(data, ["name", "roll_number", "marks"], path)

    marks = data.get("marks")
    if not isinstance(marks, dict):
        raise ValidationError("marks must be an object", path=f"{path}.marks")
    for subject, value in marks.items():
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, Real) or value < 0:
            raise ValidationError(
                f"Invalid marks: {value!r} (must be a non-negative number)",
                path=f"{path}.marks.{subject}",
            )


def validate_report(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate a report snapshot.

    Args:
        data: Report dictionary to validate
        strict: If True, also validate against report.schema.json

    Raises:
        ValidationError: If data is invalid
    """
    _require(
        data,
        [
            "schema_version", "title", "summary", "student_rankings",
            "subject_analysis", "performance_insights",
        ],
    )
    _check_version(data, REPORT_SCHEMA_VERSION, "report")

    rankings = data.get("student_rankings")
    if not isinstance(rankings, list):
        raise ValidationError("student_rankings must be a list", path="student_rankings")
    previous = 0
    for i, row in enumerate(rankings):
        rank = row.get("rank") if isinstance(row, dict) else None
        if not isinstance(rank, int) or rank < 1:
            raise ValidationError(
                f"Invalid rank: {rank!r} (must be a positive integer)",
                path=f"student_rankings[{i}].rank",
            )
        if rank not in (previous, previous + 1):
            raise ValidationError(
                f"Ranks must be dense and ordered: {previous} then {rank}",
                path=f"student_rankings[{i}].rank",
            )
        previous = rank

    if strict:
        _strict_validate(data, "report")
