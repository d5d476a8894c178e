"""
Utils Package

Serialization and utility functions.
"""

from .serialization import (
    serialize_result,
    deserialize_result,
    serialize_report,
    load_result_json,
    save_result_json,
    load_report_json,
    save_report_json,
)

__all__ = [
    "serialize_result",
    "deserialize_result",
    "serialize_report",
    "load_result_json",
    "save_result_json",
    "load_report_json",
    "save_report_json",
]
