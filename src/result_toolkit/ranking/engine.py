"""
Module: ranking.engine

Purpose:
    Deterministic ordering of students with dense ranking, plus the
    statistics derived from ranks: percentiles, quartile distribution,
    cross-period comparison and consistency across several Results.

Key Functions:
    - rank_by_percentage(): Overall dense ranking
    - rank_by_subject(): Dense ranking on a single subject's marks
    - get_top_students() / get_bottom_students(): Slices of the overall ranking
    - get_students_by_rank_range(): Filter by assigned rank
    - calculate_percentile(): Standing of one ranked student
    - compare_with_previous_result(): improved / declined / maintained
    - find_consistent_performers(): Low rank variance across Results
    - calculate_rank_distribution(): Quartile bucket sizes

Algorithm (dense ranking):
    1. Sort by percentage descending, then total marks descending
    2. Walk the sorted list; the rank advances by exactly 1 whenever
       either key differs from the previous student
    3. Students equal on both keys share a rank; no rank is skipped

Dependencies:
    - numpy: Rank variance
    - core.models: Result, StudentResult, StudentId

Used By:
    - report.builder
"""

from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from result_toolkit.common.thresholds import ANALYSIS_THRESHOLDS, AnalysisThresholds
from result_toolkit.core.models import Result, StudentId, StudentResult
from result_toolkit.core.models.percentage import round_half_up

from .models import (
    ConsistentPerformer,
    RankChange,
    RankComparison,
    RankDistribution,
    RankedStudent,
)

logger = logging.getLogger(__name__)


def _overall_key(student: StudentResult) -> Tuple[float, float]:
    return (student.percentage.value, student.total_marks)


# ─────────────────────────────────────────────────────────────────────────────
# Ranking
# ─────────────────────────────────────────────────────────────────────────────

def rank_by_percentage(students: Iterable[StudentResult]) -> Tuple[RankedStudent, ...]:
    """
    Rank students by overall percentage, then total marks.

    Args:
        students: Students to rank (not modified)

    Returns:
        New tuple of RankedStudent, best first, with dense ranks

    Example:
        >>> [r.rank for r in rank_by_percentage(students)]  # 90/270, 90/270, 75/225
        [1, 1, 2]
    """
    ordered = sorted(students, key=_overall_key, reverse=True)

    ranked: List[RankedStudent] = []
    current_rank = 0
    previous_key = None
    for student in ordered:
        key = _overall_key(student)
        if key != previous_key:
            current_rank += 1
            previous_key = key
        ranked.append(RankedStudent(student=student, rank=current_rank))

    logger.debug("Ranked %d students into %d distinct ranks", len(ranked), current_rank)
    return tuple(ranked)


def rank_by_subject(
    students: Iterable[StudentResult],
    subject_name: str,
) -> Tuple[RankedStudent, ...]:
    """
    Rank students on one subject's marks.

    Students without a mark for the subject are excluded rather than
    ranked last. The returned records carry a subject-scoped rank; the
    overall ranking is unaffected.

    Args:
        students: Students to rank (not modified)
        subject_name: Subject to rank on

    Returns:
        New tuple of RankedStudent with ``subject`` set, best first
    """
    with_subject = [s for s in students if s.marks_for(subject_name) is not None]
    with_subject.sort(key=lambda s: s.marks[subject_name].value, reverse=True)

    ranked: List[RankedStudent] = []
    current_rank = 0
    previous_value: Optional[float] = None
    for student in with_subject:
        value = student.marks[subject_name].value
        if value != previous_value:
            current_rank += 1
            previous_value = value
        ranked.append(RankedStudent(student=student, rank=current_rank, subject=subject_name))

    return tuple(ranked)


def rank_table(ranked: Iterable[RankedStudent]) -> Dict[StudentId, int]:
    """
    Index ranks by student identity.

    When the same identity appears more than once, the first (best)
    occurrence wins.
    """
    table: Dict[StudentId, int] = {}
    for entry in ranked:
        table.setdefault(entry.student_id, entry.rank)
    return table


# ─────────────────────────────────────────────────────────────────────────────
# Slices
# ─────────────────────────────────────────────────────────────────────────────

def get_top_students(
    result: Result,
    count: Optional[int] = None,
    *,
    thresholds: AnalysisThresholds = ANALYSIS_THRESHOLDS,
) -> Tuple[RankedStudent, ...]:
    """
    First ``count`` students of the overall ranking.

    A count larger than the population returns everyone; a count of zero
    or less returns an empty tuple.
    """
    if count is None:
        count = thresholds.default_top_count
    if count <= 0:
        return ()
    return rank_by_percentage(result.students)[:count]


def get_bottom_students(
    result: Result,
    count: Optional[int] = None,
    *,
    thresholds: AnalysisThresholds = ANALYSIS_THRESHOLDS,
) -> Tuple[RankedStudent, ...]:
    """Last ``count`` students of the overall ranking, worst first."""
    if count is None:
        count = thresholds.default_top_count
    if count <= 0:
        return ()
    ranked = rank_by_percentage(result.students)
    return tuple(reversed(ranked[-count:]))


def get_students_by_rank_range(
    result: Result,
    start_rank: int,
    end_rank: int,
) -> Tuple[RankedStudent, ...]:
    """
    Students whose overall rank lies in [start_rank, end_rank].

    Ranks are dense, so ties can make the result longer than
    ``end_rank - start_rank + 1``.
    """
    return tuple(
        entry
        for entry in rank_by_percentage(result.students)
        if start_rank <= entry.rank <= end_rank
    )


# ─────────────────────────────────────────────────────────────────────────────
# Statistics
# ─────────────────────────────────────────────────────────────────────────────

def calculate_percentile(student: RankedStudent, population: Sequence) -> float:
    """
    Percentage of the population at or below the student's rank.

    ``((N - rank + 1) / N) * 100``. Returns 0 for an empty population or
    an unranked student.
    """
    total = len(population)
    if total == 0 or not student.is_ranked:
        return 0.0
    return (total - student.rank + 1) / total * 100


def calculate_percentiles(ranked: Sequence[RankedStudent]) -> Dict[StudentId, float]:
    """Percentile of every ranked student, keyed by identity, rounded to 2 places."""
    percentiles: Dict[StudentId, float] = {}
    for entry in ranked:
        percentiles.setdefault(
            entry.student_id,
            round_half_up(calculate_percentile(entry, ranked)),
        )
    return percentiles


def calculate_rank_distribution(result: Result) -> RankDistribution:
    """
    Split the population into four quartile bands.

    Each band holds ceil(N / 4) students, clamped so that the bands never
    add up to more than N. The bottom band absorbs the shortfall.
    """
    total = result.student_count
    if total == 0:
        return RankDistribution()

    size = math.ceil(total / 4)
    return RankDistribution(
        top_quartile=min(size, total),
        second_quartile=min(size, max(0, total - size)),
        third_quartile=min(size, max(0, total - 2 * size)),
        bottom_quartile=min(size, max(0, total - 3 * size)),
    )


# ─────────────────────────────────────────────────────────────────────────────
# Cross-Result Comparison
# ─────────────────────────────────────────────────────────────────────────────

def compare_with_previous_result(current: Result, previous: Result) -> RankComparison:
    """
    Compare overall ranks of the same students in two Results.

    Students are matched by StudentId. Anyone present in only one of the
    Results is left out of every bucket.

    Returns:
        RankComparison with improved (moved up), declined (moved down) and
        maintained (same rank) entries, in current-rank order
    """
    previous_ranks = rank_table(rank_by_percentage(previous.students))

    improved: List[RankChange] = []
    declined: List[RankChange] = []
    maintained: List[RankChange] = []
    for entry in rank_by_percentage(current.students):
        previous_rank = previous_ranks.get(entry.student_id)
        if previous_rank is None:
            continue
        change = RankChange(
            student=entry.student,
            current_rank=entry.rank,
            previous_rank=previous_rank,
        )
        if change.change > 0:
            improved.append(change)
        elif change.change < 0:
            declined.append(change)
        else:
            maintained.append(change)

    logger.debug(
        "Compared results: %d improved, %d declined, %d maintained",
        len(improved), len(declined), len(maintained),
    )
    return RankComparison(
        improved=tuple(improved),
        declined=tuple(declined),
        maintained=tuple(maintained),
    )


def find_consistent_performers(
    results: Sequence[Result],
    variance_threshold: Optional[float] = None,
    *,
    thresholds: AnalysisThresholds = ANALYSIS_THRESHOLDS,
) -> Tuple[ConsistentPerformer, ...]:
    """
    Students whose overall rank varies little across every Result.

    A student must appear in all Results. The population variance of
    their ranks must not exceed the threshold.

    Args:
        results: Ordered Results (oldest first)
        variance_threshold: Maximum variance; defaults to the configured one

    Returns:
        ConsistentPerformer tuple, most consistent first; empty when fewer
        than two Results are given
    """
    if len(results) < 2:
        return ()
    if variance_threshold is None:
        variance_threshold = thresholds.consistency_variance

    tables = [rank_table(rank_by_percentage(r.students)) for r in results]

    performers: List[ConsistentPerformer] = []
    for student_id in tables[0]:
        if not all(student_id in table for table in tables[1:]):
            continue
        ranks = tuple(table[student_id] for table in tables)
        variance = float(np.var(ranks))
        if variance <= variance_threshold:
            performers.append(
                ConsistentPerformer(
                    student_id=student_id,
                    ranks=ranks,
                    variance=round_half_up(variance),
                )
            )

    performers.sort(key=lambda p: p.variance)
    return tuple(performers)
