"""
Narrative templates for performance insights and trends.

The analytics engine decides WHICH messages apply; this module only
turns the computed values into text, so the wording lives in one place.
"""

from __future__ import annotations

NO_DATA_INSIGHT = "No student data available"
NO_DATA_RECOMMENDATION = "Upload student results to get insights"
NOT_ENOUGH_RESULTS = "Need at least two results to analyze trends"

COACHING_RECOMMENDATION = "Provide extra coaching for struggling students"
CURRICULUM_RECOMMENDATIONS = (
    "Consider reviewing curriculum difficulty and teaching pace",
    "Implement regular assessment and feedback cycles",
)
ADVANCED_LEARNING_RECOMMENDATION = "Consider advanced learning opportunities for high performers"
STABLE_TREND = "Class performance has remained relatively stable"


def _share(count: int, total: int) -> int:
    # Whole-percent share, rounded half-up like the rest of the report
    return int(count * 100 / total + 0.5) if total else 0


def class_average(average: float, band: str) -> str:
    return f"Class average is {average:.1f}% ({band})"


def high_performers(count: int, total: int) -> str:
    return f"{count} students ({_share(count, total)}%) are high performers"


def struggling_students(count: int, total: int) -> str:
    return f"{count} students ({_share(count, total)}%) need additional support"


def hardest_subject(subject: str) -> str:
    return f"{subject} is the most challenging subject for students"


def strongest_subject(subject: str) -> str:
    return f"{subject} is the strongest subject for students"


def focus_subject(subject: str) -> str:
    return f"Focus on improving teaching methods for {subject}"


def improved(change: float) -> str:
    return f"Class performance has improved by {change:.1f}% over time"


def declined(change: float) -> str:
    return f"Class performance has declined by {abs(change):.1f}% over time"


def high_variance(lowest: float, highest: float) -> str:
    return f"Performance varies significantly across periods ({lowest:.1f}% to {highest:.1f}%)"
