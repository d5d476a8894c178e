"""
Schemas Package

JSON schema definitions and validation utilities.
"""

from .validator import (
    validate_result_data,
    validate_report,
    ValidationError,
    RESULT_SCHEMA_VERSION,
    REPORT_SCHEMA_VERSION,
)

__all__ = [
    "validate_result_data",
    "validate_report",
    "ValidationError",
    "RESULT_SCHEMA_VERSION",
    "REPORT_SCHEMA_VERSION",
]
