"""Task configuration models: league overrides, rule configs and the resolved config."""

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from checkin_scoring.core.errors import InvalidTimeError
from checkin_scoring.core.time_utils import parse_time
from checkin_scoring.domain.template import ScoringArchetype, VerificationConfig


class ScoringMode(StrEnum):
    """Whether a task scores on completion only or on the archetype's metrics."""

    BINARY = "binary"
    DETAILED = "detailed"


def _validate_clock_time(value: str) -> str:
    try:
        parse_time(value)
    except InvalidTimeError as e:
        raise ValueError(str(e)) from e
    return value


class TaskConfigOverrides(BaseModel):
    """League-level customization layered onto a template's defaults."""

    scoring_mode: ScoringMode | None = Field(default=None, description="Binary or detailed scoring")
    target_time: str | None = Field(default=None, description="Target time (HH:MM) for time tasks")
    threshold: float | None = Field(default=None, ge=0, description="Threshold for threshold-like tasks")
    target: float | None = Field(default=None, ge=0, description="Daily target for linear tasks")
    points: float | None = Field(default=None, description="Headline points for the task's archetype")
    binary_points: float | None = Field(default=None, ge=0, description="Points per completion in binary mode")

    @field_validator("target_time")
    @classmethod
    def validate_target_time(cls, v: str | None) -> str | None:
        """Validate target_time is a 24-hour HH:MM time."""
        return _validate_clock_time(v) if v is not None else v


class BinaryRule(BaseModel):
    """Fixed points for a yes/no completion."""

    model_config = ConfigDict(frozen=True)

    archetype: Literal["binary_yesno"] = "binary_yesno"
    points: float


class LinearRule(BaseModel):
    """Points per unit of progress, capped daily."""

    model_config = ConfigDict(frozen=True)

    archetype: Literal["linear_per_unit"] = "linear_per_unit"
    unit_size: float = Field(default=1, gt=0)
    points_per_unit: float = Field(..., ge=0)
    daily_cap: float = Field(..., ge=0)
    target: float | None = Field(default=None, ge=0)


class ThresholdRule(BaseModel):
    """Points once a threshold is reached, with an optional capped bonus beyond it."""

    model_config = ConfigDict(frozen=True)

    archetype: Literal["threshold"] = "threshold"
    threshold: float = Field(..., ge=0)
    points_at_threshold: float
    bonus_per_unit: float | None = Field(default=None, ge=0)
    max_bonus: float | None = Field(default=None, ge=0)


class _TimeRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    target_time: str
    points_on_time: float
    penalty_per_minute: float | None = Field(default=None, ge=0)

    @field_validator("target_time")
    @classmethod
    def validate_target_time(cls, v: str) -> str:
        """Validate target_time is a 24-hour HH:MM time."""
        return _validate_clock_time(v)


class TimeBeforeRule(_TimeRule):
    """Be done by a clock time; the window wraps past midnight (bedtime)."""

    archetype: Literal["time_before"] = "time_before"


class TimeAfterRule(_TimeRule):
    """Be done by a clock time measured within the same day (wake time)."""

    archetype: Literal["time_after"] = "time_after"


class Tier(BaseModel):
    """Half-open band [min, max) of raw values and the points it awards."""

    model_config = ConfigDict(frozen=True)

    min: float
    max: float | None = None
    points: float

    @model_validator(mode="after")
    def validate_bounds(self) -> "Tier":
        """Validate the band is non-empty."""
        if self.max is not None and self.max <= self.min:
            raise ValueError(f"Tier max ({self.max}) must be greater than min ({self.min})")
        return self

    def contains(self, value: float) -> bool:
        """Return True if value falls inside this band."""
        return self.min <= value and (self.max is None or value < self.max)


class TieredRule(BaseModel):
    """Ordered bands; the first band containing the value wins."""

    model_config = ConfigDict(frozen=True)

    archetype: Literal["tiered"] = "tiered"
    tiers: tuple[Tier, ...] = Field(..., min_length=1)


class DiminishingRule(BaseModel):
    """Threshold-like rule whose points grow with the square root of progress past the threshold."""

    model_config = ConfigDict(frozen=True)

    archetype: Literal["diminishing"] = "diminishing"
    threshold: float = Field(..., gt=0)
    points_at_threshold: float = Field(..., ge=0)
    max_points: float = Field(..., ge=0)


RuleConfig = Annotated[
    BinaryRule | LinearRule | ThresholdRule | TimeBeforeRule | TimeAfterRule | TieredRule | DiminishingRule,
    Field(discriminator="archetype"),
]


class ResolvedTaskConfig(BaseModel):
    """Fully-populated configuration the scoring rules read for one check-in."""

    model_config = ConfigDict(frozen=True)

    archetype: ScoringArchetype
    scoring_mode: ScoringMode
    rule: RuleConfig
    binary_points: float = Field(..., ge=0)
    commitment: float | None = Field(
        default=None, description="Committed value a binary-mode check-in must reach"
    )
    verification: VerificationConfig | None = None
    timer_duration_minutes: float | None = Field(
        default=None, description="Timer-measured duration that replaces the typed duration"
    )
