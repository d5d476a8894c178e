"""
Module: report.builder

Purpose:
    Runs the ranking and analytics engines over one Result and bundles
    their output into an immutable AnalysisReport. The report's
    ``to_dict()`` is the snapshot handed to storage and presentation
    layers; they never receive live domain objects.

Key Functions:
    - build_report(): Main entry point

Key Classes:
    - ReportSummary: Headline numbers
    - AnalysisReport: Complete ranking + analytics bundle

Dependencies:
    - ranking.engine
    - analytics.engine
    - common.thresholds

Used By:
    - core.utils.serialization (snapshot writing)
    - scripts/analyze_results.py
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from result_toolkit.analytics import (
    HighPerformer,
    PassFailRates,
    PerformanceInsights,
    StrugglingStudent,
    SubjectDifficulty,
    SubjectPassFailRate,
    analyze_subject_difficulty,
    calculate_class_average,
    calculate_grade_distribution,
    calculate_pass_fail_rates,
    calculate_subject_pass_fail_rates,
    generate_performance_insights,
    identify_high_performers,
    identify_struggling_students,
)
from result_toolkit.common.thresholds import (
    ANALYSIS_THRESHOLDS,
    GRADE_BOUNDARIES,
    AnalysisThresholds,
    GradeBoundaries,
)
from result_toolkit.core.models import Result, StudentId
from result_toolkit.core.models.percentage import round_half_up
from result_toolkit.core.schemas.validator import REPORT_SCHEMA_VERSION
from result_toolkit.ranking import (
    RankDistribution,
    RankedStudent,
    calculate_percentile,
    calculate_percentiles,
    calculate_rank_distribution,
    rank_by_percentage,
)

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Result Analysis"


@dataclass(frozen=True)
class ReportSummary:
    """Headline numbers shown at the top of a report."""

    total_students: int
    total_subjects: int
    class_average: float
    pass_percentage: float
    highest_percentage: float
    lowest_percentage: float

    def to_dict(self) -> dict:
        return {
            "total_students": self.total_students,
            "total_subjects": self.total_subjects,
            "class_average": self.class_average,
            "pass_percentage": self.pass_percentage,
            "highest_percentage": self.highest_percentage,
            "lowest_percentage": self.lowest_percentage,
        }


@dataclass(frozen=True)
class AnalysisReport:
    """
    Ranking and analytics output for one Result.

    Invariants:
        - rankings are dense and best first
        - every section was computed with the same thresholds
    """

    title: str
    summary: ReportSummary
    rankings: Tuple[RankedStudent, ...]
    percentiles: Dict[StudentId, float]
    rank_distribution: RankDistribution
    pass_fail: PassFailRates
    subject_pass_fail: Dict[str, SubjectPassFailRate]
    subject_analysis: Tuple[SubjectDifficulty, ...]
    grade_distribution: Dict[str, int]
    struggling_students: Tuple[StrugglingStudent, ...]
    high_performers: Tuple[HighPerformer, ...]
    insights: PerformanceInsights
    thresholds: AnalysisThresholds = ANALYSIS_THRESHOLDS

    def to_dict(self) -> dict:
        """
        Serialize to the report snapshot (plain JSON types only).

        The output passes ``validate_report``.
        """
        rankings = []
        for entry in self.rankings:
            row = entry.to_dict()
            row["percentile"] = round_half_up(calculate_percentile(entry, self.rankings))
            rankings.append(row)

        return {
            "schema_version": REPORT_SCHEMA_VERSION,
            "title": self.title,
            "summary": self.summary.to_dict(),
            "student_rankings": rankings,
            "rank_distribution": self.rank_distribution.to_dict(),
            "pass_fail": self.pass_fail.to_dict(),
            "subject_pass_fail": [r.to_dict() for r in self.subject_pass_fail.values()],
            "subject_analysis": [a.to_dict() for a in self.subject_analysis],
            "grade_distribution": [
                {"grade": grade, "count": count}
                for grade, count in self.grade_distribution.items()
            ],
            "struggling_students": [s.to_dict() for s in self.struggling_students],
            "high_performers": [h.to_dict() for h in self.high_performers],
            "performance_insights": self.insights.to_dict(),
            "thresholds": self.thresholds.to_dict(),
        }


def build_report(
    result: Result,
    *,
    title: Optional[str] = None,
    thresholds: AnalysisThresholds = ANALYSIS_THRESHOLDS,
    boundaries: GradeBoundaries = GRADE_BOUNDARIES,
) -> AnalysisReport:
    """
    Run every ranking and analytics pass over a Result.

    Args:
        result: Result to report on
        title: Report title; defaults to the Result's title
        thresholds: Thresholds used by every section
        boundaries: Letter-grade table

    Returns:
        AnalysisReport (empty sections for a Result without students)
    """
    rankings = rank_by_percentage(result.students)
    pass_fail = calculate_pass_fail_rates(result, thresholds=thresholds)
    percentages = [s.percentage.value for s in result.students]

    summary = ReportSummary(
        total_students=result.student_count,
        total_subjects=result.subject_count,
        class_average=round_half_up(calculate_class_average(result)),
        pass_percentage=pass_fail.pass_percentage.value,
        highest_percentage=max(percentages, default=0.0),
        lowest_percentage=min(percentages, default=0.0),
    )

    report = AnalysisReport(
        title=title or result.title or DEFAULT_TITLE,
        summary=summary,
        rankings=rankings,
        percentiles=calculate_percentiles(rankings),
        rank_distribution=calculate_rank_distribution(result),
        pass_fail=pass_fail,
        subject_pass_fail=calculate_subject_pass_fail_rates(result, thresholds=thresholds),
        subject_analysis=tuple(analyze_subject_difficulty(result, thresholds=thresholds)),
        grade_distribution=calculate_grade_distribution(result, boundaries=boundaries),
        struggling_students=tuple(identify_struggling_students(result, thresholds=thresholds)),
        high_performers=tuple(
            identify_high_performers(result, thresholds=thresholds, boundaries=boundaries)
        ),
        insights=generate_performance_insights(
            result, thresholds=thresholds, boundaries=boundaries
        ),
        thresholds=thresholds,
    )
    logger.info(
        "Built report %r: %d students, class average %.2f%%",
        report.title, summary.total_students, summary.class_average,
    )
    return report
