"""
Unit tests for the threshold configuration.
"""

import pytest

from result_toolkit.common.thresholds import (
    ANALYSIS_THRESHOLDS,
    GRADE_BOUNDARIES,
    AnalysisThresholds,
    GradeBoundaries,
)


class TestAnalysisThresholds:
    """Tests for AnalysisThresholds dataclass."""

    def test_defaults_when_created_then_match_documented_values(self):
        """Defaults are the documented pass/excellence/failure thresholds."""
        # Act
        config = AnalysisThresholds()

        # Assert
        assert config.passing_percentage == 40
        assert config.passing_marks == 40
        assert config.excellence_threshold == 85
        assert config.min_failures == 2
        assert config.trend_change == 5
        assert config.trend_spread == 10

    def test_init_when_negative_threshold_then_raises_error(self):
        with pytest.raises(ValueError, match="passing_marks must be non-negative"):
            AnalysisThresholds(passing_marks=-1)

    def test_init_when_share_out_of_range_then_raises_error(self):
        with pytest.raises(ValueError, match="high_performer_share"):
            AnalysisThresholds(high_performer_share=1.5)

    def test_init_when_bands_not_descending_then_raises_error(self):
        with pytest.raises(ValueError, match="Class performance bands"):
            AnalysisThresholds(good_average=90)

    def test_from_dict_when_overrides_given_then_applies_them(self):
        # Arrange
        data = {"passing_marks": 35, "easy_band": [95, 80]}

        # Act
        config = AnalysisThresholds.from_dict(data)

        # Assert
        assert config.passing_marks == 35
        assert config.easy_band == (95, 80)
        assert config.excellence_threshold == 85

    def test_from_dict_when_unknown_key_then_raises_error(self):
        with pytest.raises(ValueError, match="Unknown threshold keys"):
            AnalysisThresholds.from_dict({"pass_mark": 35})

    @pytest.mark.parametrize(
        "data",
        [
            {"passing_marks": "40"},
            {"min_failures": True},
            {"easy_band": [90, "75"]},
            {"easy_band": [90]},
        ],
    )
    def test_from_dict_when_wrong_type_then_raises_value_error(self, data):
        """Badly typed values from a JSON file fail as ValueError, not TypeError."""
        with pytest.raises(ValueError, match="must be"):
            AnalysisThresholds.from_dict(data)

    def test_with_overrides_when_none_values_then_keeps_defaults(self):
        config = ANALYSIS_THRESHOLDS.with_overrides(passing_marks=None)
        assert config is ANALYSIS_THRESHOLDS

    def test_with_overrides_when_value_given_then_returns_copy(self):
        config = ANALYSIS_THRESHOLDS.with_overrides(min_failures=3)
        assert config.min_failures == 3
        assert ANALYSIS_THRESHOLDS.min_failures == 2

    def test_to_dict_when_called_then_round_trips_through_from_dict(self):
        config = AnalysisThresholds(passing_marks=33)
        assert AnalysisThresholds.from_dict(config.to_dict()) == config


class TestGradeBoundaries:
    """Tests for GradeBoundaries table."""

    def test_letters_when_default_then_best_first_with_fallback(self):
        assert GRADE_BOUNDARIES.letters == ("A+", "A", "B", "C", "D", "F")

    def test_letter_for_when_below_all_bands_then_fallback(self):
        assert GRADE_BOUNDARIES.letter_for(10) == "F"

    def test_init_when_not_descending_then_raises_error(self):
        with pytest.raises(ValueError, match="strictly descending"):
            GradeBoundaries(bands=((50.0, "B"), (60.0, "A")))

    def test_init_when_out_of_range_then_raises_error(self):
        with pytest.raises(ValueError, match="within 0-100"):
            GradeBoundaries(bands=((120.0, "A"),))
