"""
Unit tests for the analytics engine.

Covers pass/fail statistics, cohort segmentation, subject difficulty and
grade distribution.
"""

import pytest

from result_toolkit.analytics import (
    Difficulty,
    analyze_subject_difficulty,
    calculate_class_average,
    calculate_grade_distribution,
    calculate_pass_fail_rates,
    calculate_subject_pass_fail_rates,
    classify_class_performance,
    classify_difficulty,
    identify_high_performers,
    identify_struggling_students,
)
from result_toolkit.analytics.models import ClassPerformance
from result_toolkit.common.thresholds import AnalysisThresholds
from result_toolkit.ranking import rank_by_percentage

from conftest import make_result, make_student, single_subject_result


# ─────────────────────────────────────────────────────────────────────────────
# Pass / Fail
# ─────────────────────────────────────────────────────────────────────────────

class TestPassFailRates:
    """Tests for overall pass/fail rates."""

    def test_rates_when_on_threshold_then_inclusive(self):
        """A percentage equal to the pass mark passes; 39.9 does not."""
        # Arrange
        result = single_subject_result([40.0, 39.9, 100.0, 0.0])

        # Act
        rates = calculate_pass_fail_rates(result)

        # Assert
        assert rates.total_students == 4
        assert rates.passed == 2
        assert rates.failed == 2
        assert rates.pass_percentage.value == 50.0
        assert rates.fail_percentage.value == 50.0

    @pytest.mark.parametrize("threshold", [0, 35, 50, 68.75, 95, 100])
    def test_rates_when_any_threshold_then_counts_complement(self, class_result, threshold):
        rates = calculate_pass_fail_rates(class_result, passing_percentage=threshold)
        assert rates.passed + rates.failed == rates.total_students == 5

    def test_rates_when_threshold_override_then_uses_it(self, class_result):
        rates = calculate_pass_fail_rates(class_result, passing_percentage=60)
        assert rates.passed == 3

    def test_rates_when_thresholds_object_given_then_uses_its_pass_mark(self, class_result):
        config = AnalysisThresholds(passing_percentage=46)
        assert calculate_pass_fail_rates(class_result, thresholds=config).failed == 1

    def test_rates_when_undeclared_subject_then_ignored_everywhere(self):
        """An undeclared Drama mark cannot lift a failing student over the pass mark."""
        # Arrange
        result = make_result(["Maths"], [
            make_student("a", {"Maths": 30, "Drama": 100}),
            make_student("b", {"Maths": 35}),
        ])

        # Act
        rates = calculate_pass_fail_rates(result)
        ranked = rank_by_percentage(result.students)

        # Assert
        assert rates.passed == 0
        assert calculate_class_average(result) == pytest.approx(32.5)
        assert [(e.student.roll_number, e.rank) for e in ranked] == [("b", 1), ("a", 2)]

    def test_rates_when_empty_then_all_zero(self, empty_result):
        rates = calculate_pass_fail_rates(empty_result)
        assert rates.to_dict() == {
            "total_students": 0,
            "passed": 0,
            "failed": 0,
            "pass_percentage": 0.0,
            "fail_percentage": 0.0,
        }


class TestSubjectPassFailRates:
    """Tests for per-subject pass/fail rates."""

    def test_rates_when_class_given_then_one_entry_per_subject(self, class_result):
        rates = calculate_subject_pass_fail_rates(class_result)

        assert list(rates) == ["Maths", "Science", "English", "History"]
        assert rates["Maths"].passed == 4
        assert rates["Maths"].pass_percentage.value == 80.0
        assert rates["History"].failed == 0

    def test_rates_when_mark_missing_then_counts_as_not_passed(self):
        result = make_result(["Maths", "Science"], [
            make_student("1", {"Maths": 80, "Science": 90}),
            make_student("2", {"Maths": 80}),
        ])

        rates = calculate_subject_pass_fail_rates(result)

        assert rates["Science"].passed == 1
        assert rates["Science"].failed == 1
        assert rates["Science"].total_students == 2

    def test_rates_when_empty_then_zero_percentages(self, empty_result):
        rates = calculate_subject_pass_fail_rates(empty_result)
        assert rates["Maths"].pass_percentage.value == 0.0


class TestClassAverage:
    """Tests for class average and performance band."""

    def test_average_when_class_given_then_mean_percentage(self, class_result):
        assert calculate_class_average(class_result) == pytest.approx(64.5)

    def test_average_when_empty_then_zero(self, empty_result):
        assert calculate_class_average(empty_result) == 0.0

    @pytest.mark.parametrize(
        "average, band",
        [
            (85.0, ClassPerformance.EXCELLENT),
            (84.99, ClassPerformance.GOOD),
            (70.0, ClassPerformance.GOOD),
            (55.0, ClassPerformance.AVERAGE),
            (40.0, ClassPerformance.BELOW_AVERAGE),
            (39.99, ClassPerformance.POOR),
        ],
    )
    def test_classify_when_on_boundary_then_upper_band(self, average, band):
        assert classify_class_performance(average) is band


# ─────────────────────────────────────────────────────────────────────────────
# Segmentation
# ─────────────────────────────────────────────────────────────────────────────

class TestStrugglingStudents:
    """Tests for identify_struggling_students."""

    def test_identify_when_exactly_min_failures_then_included(self):
        """Two failures out of four subjects meets the default minimum of two."""
        # Arrange
        result = make_result(["A", "B", "C", "D"], [
            make_student("two", {"A": 30, "B": 20, "C": 60, "D": 70}),
            make_student("one", {"A": 30, "B": 60, "C": 60, "D": 70}),
        ])

        # Act
        struggling = identify_struggling_students(result)

        # Assert
        assert [s.student.roll_number for s in struggling] == ["two"]
        assert struggling[0].failed_subjects == ("A", "B")
        assert struggling[0].total_failures == 2

    def test_identify_when_several_then_most_failures_first(self):
        result = make_result(["A", "B", "C"], [
            make_student("x", {"A": 10, "B": 10, "C": 90}),
            make_student("y", {"A": 10, "B": 10, "C": 10}),
            make_student("z", {"A": 10, "B": 10, "C": 90}),
        ])

        struggling = identify_struggling_students(result)

        assert [s.student.roll_number for s in struggling] == ["y", "x", "z"]

    def test_identify_when_mark_missing_then_not_a_failure(self):
        result = make_result(["A", "B"], [make_student("1", {"A": 10})])
        assert identify_struggling_students(result) == []

    def test_identify_when_overrides_given_then_used(self, class_result):
        struggling = identify_struggling_students(class_result, passing_marks=50, min_failures=1)
        assert [s.student.roll_number for s in struggling] == ["004", "005"]

    def test_identify_when_class_given_then_finds_dev(self, class_result):
        struggling = identify_struggling_students(class_result)
        assert [s.student.name for s in struggling] == ["Dev"]
        assert struggling[0].to_dict()["failed_subjects"] == ["Maths", "Science"]


class TestHighPerformers:
    """Tests for identify_high_performers."""

    def test_identify_when_half_subjects_excellent_then_included(self):
        """2 of 4 subjects at 85+ qualifies even with a modest overall grade."""
        result = make_result(["A", "B", "C", "D"], [
            make_student("1", {"A": 90, "B": 85, "C": 40, "D": 40}),
        ])

        performers = identify_high_performers(result)

        assert len(performers) == 1
        assert performers[0].excellent_subjects == ("A", "B")
        assert performers[0].overall_grade == "C"

    def test_identify_when_odd_subject_count_then_rounds_half_up(self):
        """With 3 subjects, half means 2; a single excellent subject is not enough."""
        result = make_result(["A", "B", "C"], [
            make_student("1", {"A": 90, "B": 50, "C": 50}),
        ])
        assert identify_high_performers(result) == []

    def test_identify_when_top_grade_then_included(self):
        result = make_result(["A", "B"], [make_student("1", {"A": 84, "B": 80})])

        performers = identify_high_performers(result)

        assert performers[0].overall_grade == "A"
        assert performers[0].excellent_subjects == ()

    def test_identify_when_no_declared_marks_then_excluded(self):
        result = make_result(["A"], [make_student("1", {})])
        assert identify_high_performers(result) == []

    def test_identify_when_several_then_highest_percentage_first(self):
        result = make_result(["A"], [
            make_student("1", {"A": 86}),
            make_student("2", {"A": 99}),
            make_student("3", {"A": 20}),
        ])

        performers = identify_high_performers(result)

        assert [p.student.roll_number for p in performers] == ["2", "1"]

    def test_identify_when_class_given_then_only_asha(self, class_result):
        performers = identify_high_performers(class_result)
        assert [p.student.name for p in performers] == ["Asha"]
        assert performers[0].overall_grade == "A+"


# ─────────────────────────────────────────────────────────────────────────────
# Difficulty
# ─────────────────────────────────────────────────────────────────────────────

class TestClassifyDifficulty:
    """Tests for the joint (pass rate, average) rule."""

    @pytest.mark.parametrize(
        "pass_rate, average, expected",
        [
            (90.0, 75.0, Difficulty.EASY),
            (100.0, 74.9, Difficulty.MODERATE),
            (89.9, 95.0, Difficulty.MODERATE),
            (75.0, 60.0, Difficulty.MODERATE),
            (74.9, 80.0, Difficulty.DIFFICULT),
            (50.0, 45.0, Difficulty.DIFFICULT),
            (49.9, 90.0, Difficulty.VERY_DIFFICULT),
            (100.0, 44.9, Difficulty.VERY_DIFFICULT),
        ],
    )
    def test_classify_when_values_given_then_band(self, pass_rate, average, expected):
        assert classify_difficulty(pass_rate, average) is expected


class TestAnalyzeSubjectDifficulty:
    """Tests for analyze_subject_difficulty."""

    def test_analyze_when_class_given_then_easiest_first(self, class_result):
        # Arrange / Act
        analysis = analyze_subject_difficulty(class_result)

        # Assert
        assert [a.subject_name for a in analysis] == ["Maths", "English", "History", "Science"]
        assert [a.difficulty for a in analysis] == [
            Difficulty.MODERATE,
            Difficulty.MODERATE,
            Difficulty.MODERATE,
            Difficulty.DIFFICULT,
        ]
        science = analysis[-1]
        assert science.average_marks == 59.4
        assert science.pass_rate.value == 80.0
        assert (science.highest_marks, science.lowest_marks) == (92, 30)

    def test_analyze_when_called_twice_then_identical(self, class_result):
        first = analyze_subject_difficulty(class_result)
        assert analyze_subject_difficulty(class_result) == first

    def test_analyze_when_marks_missing_then_excluded_from_average(self):
        result = make_result(["Maths"], [
            make_student("1", {"Maths": 80}),
            make_student("2", {}),
        ])

        analysis = analyze_subject_difficulty(result)

        assert analysis[0].students_count == 1
        assert analysis[0].average_marks == 80.0
        assert analysis[0].pass_rate.value == 100.0

    def test_analyze_when_no_marks_then_very_difficult_with_zero_count(self, empty_result):
        analysis = analyze_subject_difficulty(empty_result)

        assert [a.students_count for a in analysis] == [0, 0]
        assert all(a.difficulty is Difficulty.VERY_DIFFICULT for a in analysis)

    def test_analyze_when_custom_bands_then_used(self, class_result):
        config = AnalysisThresholds(easy_band=(75.0, 60.0))
        analysis = analyze_subject_difficulty(class_result, thresholds=config)
        assert analysis[0].difficulty is Difficulty.EASY


class TestGradeDistribution:
    """Tests for calculate_grade_distribution."""

    def test_distribution_when_class_given_then_counts_each_grade(self, class_result):
        distribution = calculate_grade_distribution(class_result)

        assert list(distribution) == ["A+", "A", "B", "C", "D", "F"]
        assert distribution == {"A+": 1, "A": 0, "B": 0, "C": 2, "D": 2, "F": 0}

    def test_distribution_when_empty_then_zero_filled(self, empty_result):
        assert sum(calculate_grade_distribution(empty_result).values()) == 0
