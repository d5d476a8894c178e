"""Combined ranking + analytics report snapshots."""

from .builder import AnalysisReport, ReportSummary, build_report

__all__ = [
    "AnalysisReport",
    "ReportSummary",
    "build_report",
]
