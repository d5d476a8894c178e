"""
Module: analytics.engine

Purpose:
    Classify and summarize a Result's outcomes against configurable
    thresholds: pass/fail rates, subject difficulty, struggling and
    high-performing students, narrative insights and multi-Result trends.

Key Functions:
    - calculate_pass_fail_rates(): Overall pass/fail counts
    - calculate_subject_pass_fail_rates(): Per-subject pass/fail counts
    - identify_struggling_students(): Students failing several subjects
    - identify_high_performers(): Students excelling broadly or with a top grade
    - analyze_subject_difficulty(): Easy / Moderate / Difficult / Very Difficult
    - generate_performance_insights(): Band, insight and recommendation text
    - analyze_performance_trends(): Improving / Declining / Stable
    - calculate_grade_distribution(): Students per letter grade

Dependencies:
    - numpy: Averages across students and Results
    - common.thresholds: Every cutoff used here
    - analytics.insights: Message templates

Used By:
    - report.builder

Every function is total over a structurally valid Result: empty
populations produce explicit zero/empty records instead of errors, and
no input is ever modified.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

import numpy as np

from result_toolkit.common.thresholds import (
    ANALYSIS_THRESHOLDS,
    GRADE_BOUNDARIES,
    AnalysisThresholds,
    GradeBoundaries,
)
from result_toolkit.core.models import Percentage, Result
from result_toolkit.core.models.percentage import round_half_up

from . import insights as messages
from .models import (
    ClassPerformance,
    Difficulty,
    HighPerformer,
    InsightStatistics,
    PassFailRates,
    PerformanceInsights,
    PerformanceTrend,
    StrugglingStudent,
    SubjectDifficulty,
    SubjectPassFailRate,
    Trend,
)

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Class-Level Numbers
# ─────────────────────────────────────────────────────────────────────────────

def calculate_class_average(result: Result) -> float:
    """Mean overall percentage of the class, 0.0 when there are no students."""
    if result.is_empty:
        return 0.0
    return float(np.mean([s.percentage.value for s in result.students]))


def calculate_grade_distribution(
    result: Result,
    *,
    boundaries: GradeBoundaries = GRADE_BOUNDARIES,
) -> Dict[str, int]:
    """Number of students holding each letter grade, best grade first (zero-filled)."""
    distribution = {letter: 0 for letter in boundaries.letters}
    for student in result.students:
        distribution[student.percentage.letter_grade(boundaries)] += 1
    return distribution


def calculate_pass_fail_rates(
    result: Result,
    passing_percentage: Optional[float] = None,
    *,
    thresholds: AnalysisThresholds = ANALYSIS_THRESHOLDS,
) -> PassFailRates:
    """
    Count students whose overall percentage meets the pass threshold.

    Args:
        result: Result to analyze
        passing_percentage: Overrides thresholds.passing_percentage

    Returns:
        PassFailRates; all zeros for an empty Result

    Invariants:
        - passed + failed == total_students
    """
    if passing_percentage is None:
        passing_percentage = thresholds.passing_percentage

    total = result.student_count
    if total == 0:
        return PassFailRates.empty()

    passed = sum(1 for s in result.students if s.percentage.value >= passing_percentage)
    failed = total - passed
    return PassFailRates(
        total_students=total,
        passed=passed,
        failed=failed,
        pass_percentage=Percentage.from_fraction(passed, total),
        fail_percentage=Percentage.from_fraction(failed, total),
    )


def calculate_subject_pass_fail_rates(
    result: Result,
    passing_marks: Optional[float] = None,
    *,
    thresholds: AnalysisThresholds = ANALYSIS_THRESHOLDS,
) -> Dict[str, SubjectPassFailRate]:
    """
    Pass/fail counts for every declared subject, in declared order.

    A student without a mark for a subject counts as not having passed it.
    """
    if passing_marks is None:
        passing_marks = thresholds.passing_marks

    total = result.student_count
    rates: Dict[str, SubjectPassFailRate] = {}
    for subject_name in result.subject_names:
        passed = 0
        for student in result.students:
            marks = student.marks_for(subject_name)
            if marks is not None and marks.value >= passing_marks:
                passed += 1
        rates[subject_name] = SubjectPassFailRate(
            subject_name=subject_name,
            total_students=total,
            passed=passed,
            failed=total - passed,
            pass_percentage=Percentage.from_fraction(passed, total),
        )
    return rates


# ─────────────────────────────────────────────────────────────────────────────
# Cohort Segments
# ─────────────────────────────────────────────────────────────────────────────

def identify_struggling_students(
    result: Result,
    passing_marks: Optional[float] = None,
    min_failures: Optional[int] = None,
    *,
    thresholds: AnalysisThresholds = ANALYSIS_THRESHOLDS,
) -> List[StrugglingStudent]:
    """
    Students failing at least ``min_failures`` declared subjects.

    Returns:
        StrugglingStudent list, most failures first (ties keep class order)
    """
    if passing_marks is None:
        passing_marks = thresholds.passing_marks
    if min_failures is None:
        min_failures = thresholds.min_failures

    struggling: List[StrugglingStudent] = []
    for student in result.students:
        failed = tuple(
            name
            for name, marks in result.declared_marks(student).items()
            if marks.value < passing_marks
        )
        if len(failed) >= min_failures:
            struggling.append(StrugglingStudent(student=student, failed_subjects=failed))

    struggling.sort(key=lambda s: s.total_failures, reverse=True)
    return struggling


def identify_high_performers(
    result: Result,
    excellence_threshold: Optional[float] = None,
    *,
    thresholds: AnalysisThresholds = ANALYSIS_THRESHOLDS,
    boundaries: GradeBoundaries = GRADE_BOUNDARIES,
) -> List[HighPerformer]:
    """
    Students who excel in at least half their subjects or hold a top grade.

    A subject is excellent when its marks reach ``excellence_threshold``.
    The half-of-subjects rule needs at least one subject; a top overall
    grade (A or A+) qualifies on its own.

    Returns:
        HighPerformer list, highest overall percentage first
    """
    if excellence_threshold is None:
        excellence_threshold = thresholds.excellence_threshold

    performers: List[HighPerformer] = []
    for student in result.students:
        declared = result.declared_marks(student)
        excellent = tuple(
            name for name, marks in declared.items() if marks.value >= excellence_threshold
        )
        grade = student.percentage.letter_grade(boundaries)
        half = (len(declared) + 1) // 2
        broad_excellence = bool(declared) and len(excellent) >= half
        if broad_excellence or grade in boundaries.top_grades:
            performers.append(
                HighPerformer(student=student, excellent_subjects=excellent, overall_grade=grade)
            )

    performers.sort(key=lambda p: p.student.percentage.value, reverse=True)
    return performers


# ─────────────────────────────────────────────────────────────────────────────
# Subject Difficulty
# ─────────────────────────────────────────────────────────────────────────────

def classify_difficulty(
    pass_rate: float,
    average_marks: float,
    *,
    thresholds: AnalysisThresholds = ANALYSIS_THRESHOLDS,
) -> Difficulty:
    """Joint rule on (pass rate %, average marks); both minimums must be met."""
    bands = (
        (thresholds.easy_band, Difficulty.EASY),
        (thresholds.moderate_band, Difficulty.MODERATE),
        (thresholds.difficult_band, Difficulty.DIFFICULT),
    )
    for (min_pass_rate, min_average), difficulty in bands:
        if pass_rate >= min_pass_rate and average_marks >= min_average:
            return difficulty
    return Difficulty.VERY_DIFFICULT


def analyze_subject_difficulty(
    result: Result,
    *,
    thresholds: AnalysisThresholds = ANALYSIS_THRESHOLDS,
) -> List[SubjectDifficulty]:
    """
    Classify every declared subject by class performance.

    Only students holding a mark for the subject contribute to its
    average and pass rate. The pass mark is thresholds.difficulty_passing_marks.

    Returns:
        SubjectDifficulty list, easiest first; subjects sharing a
        difficulty keep their declared order
    """
    analysis: List[SubjectDifficulty] = []
    for subject_name in result.subject_names:
        values = [
            marks.value
            for marks in (s.marks_for(subject_name) for s in result.students)
            if marks is not None
        ]
        if values:
            average = float(np.mean(values))
            passed = sum(1 for v in values if v >= thresholds.difficulty_passing_marks)
            highest, lowest = max(values), min(values)
        else:
            average, passed, highest, lowest = 0.0, 0, 0, 0

        pass_rate = Percentage.from_fraction(passed, len(values))
        analysis.append(
            SubjectDifficulty(
                subject_name=subject_name,
                average_marks=round_half_up(average),
                pass_rate=pass_rate,
                difficulty=classify_difficulty(pass_rate.value, average, thresholds=thresholds),
                students_count=len(values),
                highest_marks=highest,
                lowest_marks=lowest,
            )
        )

    analysis.sort(key=lambda a: a.difficulty.ordinal)
    return analysis


# ─────────────────────────────────────────────────────────────────────────────
# Insights
# ─────────────────────────────────────────────────────────────────────────────

def classify_class_performance(
    class_average: float,
    *,
    thresholds: AnalysisThresholds = ANALYSIS_THRESHOLDS,
) -> ClassPerformance:
    """Five-level qualitative band for a class-average percentage."""
    if class_average >= thresholds.excellent_average:
        return ClassPerformance.EXCELLENT
    if class_average >= thresholds.good_average:
        return ClassPerformance.GOOD
    if class_average >= thresholds.average_average:
        return ClassPerformance.AVERAGE
    if class_average >= thresholds.below_average_average:
        return ClassPerformance.BELOW_AVERAGE
    return ClassPerformance.POOR


def generate_performance_insights(
    result: Result,
    *,
    thresholds: AnalysisThresholds = ANALYSIS_THRESHOLDS,
    boundaries: GradeBoundaries = GRADE_BOUNDARIES,
) -> PerformanceInsights:
    """
    Summarize a Result as a band plus insight and recommendation strings.

    High performers and struggling students are counted with the same
    thresholds object, so the pass mark here always matches the one used
    for pass/fail rates.

    Returns:
        PerformanceInsights; a fixed "no data" response for zero students
    """
    total = result.student_count
    if total == 0:
        return PerformanceInsights(
            class_performance=ClassPerformance.POOR,
            key_insights=(messages.NO_DATA_INSIGHT,),
            recommendations=(messages.NO_DATA_RECOMMENDATION,),
            statistics=InsightStatistics(),
        )

    class_average = calculate_class_average(result)
    band = classify_class_performance(class_average, thresholds=thresholds)
    top_performers = len(
        identify_high_performers(result, thresholds=thresholds, boundaries=boundaries)
    )
    struggling = len(identify_struggling_students(result, thresholds=thresholds))

    difficulty = analyze_subject_difficulty(result, thresholds=thresholds)
    hardest = difficulty[-1].subject_name if difficulty else ""
    easiest = difficulty[0].subject_name if difficulty else ""

    key_insights = [messages.class_average(class_average, band.value)]
    recommendations: List[str] = []

    if top_performers > 0:
        key_insights.append(messages.high_performers(top_performers, total))

    if struggling > 0:
        key_insights.append(messages.struggling_students(struggling, total))
        recommendations.append(messages.COACHING_RECOMMENDATION)

    if hardest:
        key_insights.append(messages.hardest_subject(hardest))
        recommendations.append(messages.focus_subject(hardest))
    if easiest and easiest != hardest:
        key_insights.append(messages.strongest_subject(easiest))

    if class_average < thresholds.review_curriculum_below:
        recommendations.extend(messages.CURRICULUM_RECOMMENDATIONS)

    if top_performers > total * thresholds.high_performer_share:
        recommendations.append(messages.ADVANCED_LEARNING_RECOMMENDATION)

    logger.debug(
        "Insights: average=%.2f band=%s top=%d struggling=%d",
        class_average, band.value, top_performers, struggling,
    )
    return PerformanceInsights(
        class_performance=band,
        key_insights=tuple(key_insights),
        recommendations=tuple(recommendations),
        statistics=InsightStatistics(
            total_students=total,
            class_average=round_half_up(class_average),
            top_performers=top_performers,
            struggling_students=struggling,
            most_difficult_subject=hardest,
            easiest_subject=easiest,
        ),
    )


# ─────────────────────────────────────────────────────────────────────────────
# Trends
# ─────────────────────────────────────────────────────────────────────────────

def analyze_performance_trends(
    results: Sequence[Result],
    *,
    thresholds: AnalysisThresholds = ANALYSIS_THRESHOLDS,
) -> PerformanceTrend:
    """
    Compare class averages across ordered Results (oldest first).

    The trend compares only the first and last averages: a change above
    +trend_change is Improving, below -trend_change is Declining, and
    anything else (including exactly ±trend_change) is Stable. A spread
    between the best and worst period above trend_spread adds a note.

    Returns:
        PerformanceTrend; Stable with an explanatory note for fewer than
        two Results
    """
    if len(results) < 2:
        return PerformanceTrend(
            trend=Trend.STABLE,
            average_change=0.0,
            insights=(messages.NOT_ENOUGH_RESULTS,),
        )

    averages = [calculate_class_average(r) for r in results]
    change = averages[-1] - averages[0]

    if change > thresholds.trend_change:
        trend = Trend.IMPROVING
        notes = [messages.improved(change)]
    elif change < -thresholds.trend_change:
        trend = Trend.DECLINING
        notes = [messages.declined(change)]
    else:
        trend = Trend.STABLE
        notes = [messages.STABLE_TREND]

    highest, lowest = max(averages), min(averages)
    if highest - lowest > thresholds.trend_spread:
        notes.append(messages.high_variance(lowest, highest))

    return PerformanceTrend(
        trend=trend,
        average_change=round_half_up(change),
        insights=tuple(notes),
        averages=tuple(round_half_up(a) for a in averages),
    )
