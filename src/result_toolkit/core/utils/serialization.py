"""
Serialization Utilities

Provides to/from JSON utilities for Results and report snapshots.

- ``serialize_result`` / ``deserialize_result`` convert between a Result
  and the input contract the ingestion layer produces
- ``serialize_report`` turns an AnalysisReport into its storage snapshot
- ``load_*`` / ``save_*`` read and write those dictionaries as JSON files
- Totals and percentages are never stored for Results; they are always
  recalculated from marks on load
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..models.marks import DEFAULT_MAX_MARKS
from ..models.results import Result
from ..schemas.validator import (
    RESULT_SCHEMA_VERSION,
    ValidationError,
    validate_report,
    validate_result_data,
)

if TYPE_CHECKING:
    from result_toolkit.report.builder import AnalysisReport


# ─────────────────────────────────────────────────────────────────────────────
# Result Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_result(result: Result) -> dict[str, Any]:
    """
    Serialize a Result to the input-contract dictionary.

    The input contract carries one ``max_marks`` for every subject (100
    when there are no marks).

    Raises:
        ValueError: If marks use more than one maximum
    """
    maxima = sorted({m.max_marks for s in result.students for m in s.marks.values()})
    if len(maxima) > 1:
        raise ValueError(f"Cannot serialize marks with mixed maximums: {maxima}")
    max_marks = maxima[0] if maxima else DEFAULT_MAX_MARKS
    students = []
    for student in result.students:
        row: dict[str, Any] = {
            "name": student.name,
            "roll_number": student.roll_number,
            "marks": {name: marks.value for name, marks in student.marks.items()},
        }
        if student.student.class_name is not None:
            row["class_name"] = student.student.class_name
        if student.student.section is not None:
            row["section"] = student.student.section
        students.append(row)

    return {
        "schema_version": RESULT_SCHEMA_VERSION,
        "title": result.title,
        "max_marks": max_marks,
        "subjects": list(result.subject_names),
        "students": students,
    }


def deserialize_result(
    data: dict[str, Any],
    *,
    validate: bool = True,
) -> Result:
    """
    Deserialize a Result from an input-contract dictionary.

    Args:
        data: Dictionary from JSON
        validate: Whether to validate before building

    Returns:
        Result instance

    Raises:
        ValidationError: If validate=True and data is invalid
        ValueError: If a mark cannot be built (e.g. above max_marks)
    """
    if validate:
        validate_result_data(data, strict=True)

    return Result.build(
        data["subjects"],
        data["students"],
        max_marks=data.get("max_marks", DEFAULT_MAX_MARKS),
        title=data.get("title", ""),
    )


# ─────────────────────────────────────────────────────────────────────────────
# Report Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_report(report: AnalysisReport, *, validate: bool = True) -> dict[str, Any]:
    """
    Serialize an AnalysisReport to its storage snapshot.

    Raises:
        ValidationError: If validate=True and the snapshot is malformed
    """
    data = report.to_dict()
    if validate:
        validate_report(data, strict=True)
    return data


# ─────────────────────────────────────────────────────────────────────────────
# JSON Files
# ─────────────────────────────────────────────────────────────────────────────

def _read_json(path: Path, kind: str) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"{kind} file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(
                f"Invalid JSON in {path}: {e}",
                path=str(path),
                errors=[str(e)],
            ) from e


def _write_json(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def load_result_json(path: Path, *, validate: bool = True) -> Result:
    """
    Load a Result from a JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValidationError: If the file is not valid JSON or fails validation
    """
    return deserialize_result(_read_json(path, "Result"), validate=validate)


def save_result_json(result: Result, path: Path) -> None:
    """Save a Result to a JSON file."""
    _write_json(path, serialize_result(result))


def save_report_json(report: AnalysisReport, path: Path) -> None:
    """Save a report snapshot to a JSON file."""
    _write_json(path, serialize_report(report))


def load_report_json(path: Path, *, validate: bool = True) -> dict[str, Any]:
    """
    Load a report snapshot from a JSON file.

    Snapshots are returned as plain dictionaries; they are read-only views
    of a past analysis, not live objects.
    """
    data = _read_json(path, "Report")
    if validate:
        validate_report(data, strict=True)
    return data
