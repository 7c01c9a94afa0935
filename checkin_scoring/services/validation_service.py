"""Raw check-in value validation, run before any scoring is attempted."""

import math

from checkin_scoring.core.errors import InvalidRawValueError
from checkin_scoring.core.time_utils import parse_time
from checkin_scoring.domain.checkin import CheckinValue
from checkin_scoring.domain.template import InputKind, TaskTemplate


EXPECTED_FIELD: dict[InputKind, str] = {
    InputKind.BINARY: "boolean_value",
    InputKind.NUMERIC: "numeric_value",
    InputKind.TIME: "time_value",
    InputKind.DURATION: "duration_minutes",
}


def validate_checkin_value(*, template: TaskTemplate, value: CheckinValue) -> None:
    """Check a check-in value has the shape and range the template declares.

    An empty check-in (no value field set) is accepted and later scores zero.

    Raises:
        InvalidRawValueError: If the wrong field is set or the value is out of range
        InvalidTimeError: If a time value is not a valid HH:MM time
    """
    field = value.populated_field
    if field is None:
        return

    expected = EXPECTED_FIELD[template.input_kind]
    if field != expected:
        msg = f"Task {template.id} records {expected}, got {field}"
        raise InvalidRawValueError(msg, input_kind=template.input_kind, field=field)

    if template.input_kind == InputKind.TIME:
        parse_time(value.time_value)
        return

    if template.input_kind == InputKind.BINARY:
        return

    quantity = getattr(value, field)
    if not math.isfinite(quantity):
        msg = f"Task {template.id} received a non-finite {field}"
        raise InvalidRawValueError(msg, input_kind=template.input_kind, field=field)

    if template.input_kind == InputKind.DURATION and quantity < 0:
        msg = f"Task {template.id} received a negative duration ({quantity})"
        raise InvalidRawValueError(msg, input_kind=template.input_kind, field=field)

    if template.min_value is not None and quantity < template.min_value:
        msg = f"Task {template.id} value {quantity} is below the minimum of {template.min_value}"
        raise InvalidRawValueError(msg, input_kind=template.input_kind, field=field)

    if template.max_value is not None and quantity > template.max_value:
        msg = f"Task {template.id} value {quantity} is above the maximum of {template.max_value}"
        raise InvalidRawValueError(msg, input_kind=template.input_kind, field=field)
