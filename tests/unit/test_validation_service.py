"""Unit tests for check-in value validation."""

import math

import pytest
from pydantic import ValidationError

from checkin_scoring.core.errors import InvalidRawValueError, InvalidTimeError
from checkin_scoring.domain.checkin import CheckinValue
from checkin_scoring.services.validation_service import validate_checkin_value


@pytest.mark.unit
class TestValidateCheckinValue:
    """Tests for validate_checkin_value."""

    def test_matching_numeric_value(self, steps_template):
        """Test a numeric value within range passes."""
        validate_checkin_value(template=steps_template, value=CheckinValue(numeric_value=8420))

    def test_empty_value_passes(self, steps_template):
        """Test an empty check-in is accepted."""
        validate_checkin_value(template=steps_template, value=CheckinValue())

    def test_wrong_field_for_input_kind(self, journaling_template):
        """Test a numeric value on a binary task is rejected."""
        with pytest.raises(InvalidRawValueError) as exc_info:
            validate_checkin_value(template=journaling_template, value=CheckinValue(numeric_value=1))

        assert exc_info.value.field == "numeric_value"
        assert exc_info.value.input_kind == "binary"

    def test_duration_task_rejects_numeric_field(self, workout_template):
        """Test a duration task expects duration_minutes."""
        with pytest.raises(InvalidRawValueError):
            validate_checkin_value(template=workout_template, value=CheckinValue(numeric_value=30))

    def test_below_minimum(self, steps_template):
        """Test a negative step count is rejected."""
        with pytest.raises(InvalidRawValueError, match="below the minimum"):
            validate_checkin_value(template=steps_template, value=CheckinValue(numeric_value=-5))

    def test_above_maximum(self, workout_template):
        """Test a workout longer than the template allows is rejected."""
        with pytest.raises(InvalidRawValueError, match="above the maximum"):
            validate_checkin_value(template=workout_template, value=CheckinValue(duration_minutes=601))

    def test_bounds_are_inclusive(self, workout_template):
        """Test the min and max values themselves are accepted."""
        validate_checkin_value(template=workout_template, value=CheckinValue(duration_minutes=0))
        validate_checkin_value(template=workout_template, value=CheckinValue(duration_minutes=600))

    def test_negative_duration_rejected(self, deep_work_template):
        """Test negative durations are rejected."""
        template = deep_work_template.model_copy(update={"min_value": None})

        with pytest.raises(InvalidRawValueError, match="negative duration"):
            validate_checkin_value(template=template, value=CheckinValue(duration_minutes=-10))

    def test_non_finite_rejected(self, steps_template):
        """Test NaN is never scored."""
        with pytest.raises(InvalidRawValueError, match="non-finite"):
            validate_checkin_value(template=steps_template, value=CheckinValue(numeric_value=math.nan))

    def test_invalid_time(self, wake_template):
        """Test a malformed time raises InvalidTimeError."""
        with pytest.raises(InvalidTimeError):
            validate_checkin_value(template=wake_template, value=CheckinValue(time_value="6:3"))

    def test_valid_time(self, bedtime_template):
        """Test a valid time passes."""
        validate_checkin_value(template=bedtime_template, value=CheckinValue(time_value="23:05"))


@pytest.mark.unit
def test_checkin_allows_only_one_value_field():
    """Test a check-in cannot carry two primary values."""
    with pytest.raises(ValidationError, match="Only one value field"):
        CheckinValue(numeric_value=10, duration_minutes=10)
