"""Exception taxonomy for the scoring engine and user-facing error classification."""

from enum import Enum

from pydantic import BaseModel


class ScoringEngineError(Exception):
    """Base class for errors raised by the scoring engine."""


class ConfigurationError(ScoringEngineError):
    """A task configuration is missing a required field or holds an invalid one.

    Not recoverable inside the engine: callers should refuse to save or display
    the task rather than score it as zero.
    """

    def __init__(
        self,
        message: str,
        *,
        archetype: str | None = None,
        missing_fields: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.archetype = archetype
        self.missing_fields = missing_fields or []


class InvalidRawValueError(ScoringEngineError):
    """A check-in value has the wrong shape for the task or is out of range."""

    def __init__(self, message: str, *, input_kind: str | None = None, field: str | None = None) -> None:
        super().__init__(message)
        self.input_kind = input_kind
        self.field = field


class InvalidTimeError(InvalidRawValueError):
    """A time string is not a valid "HH:MM" clock time."""


class PowerUpAlreadyUsedError(ScoringEngineError):
    """A power-up that has already been consumed was presented for consumption again."""

    def __init__(self, message: str, *, powerup_id: str | None = None) -> None:
        super().__init__(message)
        self.powerup_id = powerup_id


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCode:
    """Error codes for specific error conditions."""

    # Configuration errors
    ERR_INVALID_TASK_CONFIG = "ERR_INVALID_TASK_CONFIG"

    # Check-in errors
    ERR_INVALID_CHECKIN_VALUE = "ERR_INVALID_CHECKIN_VALUE"
    ERR_INVALID_TIME = "ERR_INVALID_TIME"

    # Power-up errors
    ERR_POWERUP_ALREADY_USED = "ERR_POWERUP_ALREADY_USED"

    # Generic errors
    ERR_UNKNOWN = "ERR_UNKNOWN"


class ErrorResponse(BaseModel):
    """Structured error response with user-friendly messaging."""

    code: str
    message: str
    suggestion: str
    severity: ErrorSeverity


def classify_error_with_response(exception: Exception) -> ErrorResponse:
    """Classify an engine error and return a structured response with recovery suggestions.

    Args:
        exception: The exception raised while validating, resolving or scoring

    Returns:
        ErrorResponse with code, message, suggestion, and severity
    """
    if isinstance(exception, ConfigurationError):
        missing = ", ".join(exception.missing_fields)
        message = "This task is not configured correctly."
        if missing:
            message = f"This task is missing required settings: {missing}."
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_TASK_CONFIG,
            message=message,
            suggestion="Ask a league admin to review the task settings before checking in.",
            severity=ErrorSeverity.HIGH,
        )

    if isinstance(exception, InvalidTimeError):
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_TIME,
            message="That time could not be understood.",
            suggestion="Enter the time as HH:MM, for example 06:30 or 22:45.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, InvalidRawValueError):
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_CHECKIN_VALUE,
            message="That value can't be recorded for this task.",
            suggestion="Check the value is within the allowed range and try again.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, PowerUpAlreadyUsedError):
        return ErrorResponse(
            code=ErrorCode.ERR_POWERUP_ALREADY_USED,
            message="This power-up has already been used.",
            suggestion="Pick another power-up from your inventory.",
            severity=ErrorSeverity.LOW,
        )

    return ErrorResponse(
        code=ErrorCode.ERR_UNKNOWN,
        message="An unexpected error occurred.",
        suggestion="Please try again later. If the problem persists, contact support.",
        severity=ErrorSeverity.MEDIUM,
    )
