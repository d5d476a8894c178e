"""
Analytics Package

Pass/fail statistics, subject difficulty, cohort segmentation, narrative
insights and multi-Result trends. Functions never modify their input
and are safe to call in any order against the same Result.
"""

from .engine import (
    analyze_performance_trends,
    analyze_subject_difficulty,
    calculate_class_average,
    calculate_grade_distribution,
    calculate_pass_fail_rates,
    calculate_subject_pass_fail_rates,
    classify_class_performance,
    classify_difficulty,
    generate_performance_insights,
    identify_high_performers,
    identify_struggling_students,
)
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

__all__ = [
    # engine
    "analyze_performance_trends",
    "analyze_subject_difficulty",
    "calculate_class_average",
    "calculate_grade_distribution",
    "calculate_pass_fail_rates",
    "calculate_subject_pass_fail_rates",
    "classify_class_performance",
    "classify_difficulty",
    "generate_performance_insights",
    "identify_high_performers",
    "identify_struggling_students",
    # models
    "ClassPerformance",
    "Difficulty",
    "HighPerformer",
    "InsightStatistics",
    "PassFailRates",
    "PerformanceInsights",
    "PerformanceTrend",
    "StrugglingStudent",
    "SubjectDifficulty",
    "SubjectPassFailRate",
    "Trend",
]
