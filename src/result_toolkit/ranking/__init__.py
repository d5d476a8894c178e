"""
Ranking Package

Dense ranking of students and the statistics derived from ranks.
Every function is pure: inputs are never modified and a new tuple of
RankedStudent records is returned.
"""

from .engine import (
    calculate_percentile,
    calculate_percentiles,
    calculate_rank_distribution,
    compare_with_previous_result,
    find_consistent_performers,
    get_bottom_students,
    get_students_by_rank_range,
    get_top_students,
    rank_by_percentage,
    rank_by_subject,
    rank_table,
)
from .models import (
    ConsistentPerformer,
    RankChange,
    RankComparison,
    RankDistribution,
    RankedStudent,
)

__all__ = [
    # engine
    "calculate_percentile",
    "calculate_percentiles",
    "calculate_rank_distribution",
    "compare_with_previous_result",
    "find_consistent_performers",
    "get_bottom_students",
    "get_students_by_rank_range",
    "get_top_students",
    "rank_by_percentage",
    "rank_by_subject",
    "rank_table",
    # models
    "ConsistentPerformer",
    "RankChange",
    "RankComparison",
    "RankDistribution",
    "RankedStudent",
]
