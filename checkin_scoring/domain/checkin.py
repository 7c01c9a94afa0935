"""Check-in value and verification metadata models."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CheckinSource(StrEnum):
    """Where a check-in value came from."""

    MANUAL = "manual"
    APPLE_HEALTH = "apple_health"
    GOOGLE_FIT = "google_fit"
    SCREEN_TIME = "screen_time"
    WHOOP = "whoop"
    TIMER = "timer"


class VerificationMetadata(BaseModel):
    """Free-form check-in metadata; the fields below are the ones verification reads."""

    model_config = ConfigDict(extra="allow")

    verification_method: str | None = None
    verified_at: str | None = None
    source: str | None = None
    confirmed: bool | None = None
    manual_override: bool | None = None
    admin_override: bool | None = None
    override_reason: str | None = None
    # Time-capture tasks
    bedtime_pressed_at: str | None = None
    wake_pressed_at: str | None = None
    # Timer-based tasks
    duration_seconds: float | None = Field(default=None, ge=0)
    timer_started_at: str | None = None
    timer_completed_at: str | None = None


PRIMARY_VALUE_FIELDS = ("boolean_value", "numeric_value", "time_value", "duration_minutes")


class CheckinValue(BaseModel):
    """A user's submission for one task on one calendar date.

    At most one primary value field is populated; a check-in with none is an
    empty submission (e.g. a cleared time field saved by auto-save).
    """

    boolean_value: bool | None = None
    numeric_value: float | None = None
    time_value: str | None = None
    duration_minutes: float | None = None
    metadata: VerificationMetadata | None = None

    @model_validator(mode="after")
    def validate_single_value(self) -> "CheckinValue":
        """Validate no more than one primary value field is set."""
        populated = [name for name in PRIMARY_VALUE_FIELDS if getattr(self, name) is not None]
        if len(populated) > 1:
            raise ValueError(f"Only one value field may be set per check-in, got: {', '.join(populated)}")
        return self

    @property
    def populated_field(self) -> str | None:
        """Name of the primary value field that is set, or None for an empty check-in."""
        return next((name for name in PRIMARY_VALUE_FIELDS if getattr(self, name) is not None), None)

    @property
    def quantity(self) -> float | None:
        """Numeric reading of the check-in: numeric_value, else duration_minutes."""
        if self.numeric_value is not None:
            return self.numeric_value
        return self.duration_minutes
