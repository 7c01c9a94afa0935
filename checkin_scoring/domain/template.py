"""Task template domain models and enums."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, model_validator


class TaskCategory(StrEnum):
    """Catalog grouping for task templates."""

    FITNESS = "fitness"
    WELLNESS = "wellness"
    LEARNING = "learning"
    PRODUCTIVITY = "productivity"
    SLEEP = "sleep"
    NUTRITION = "nutrition"
    MINDFULNESS = "mindfulness"
    SOCIAL = "social"
    CUSTOM = "custom"


class ScoringArchetype(StrEnum):
    """Scoring rule shape chosen for a task."""

    BINARY_YESNO = "binary_yesno"
    LINEAR_PER_UNIT = "linear_per_unit"
    THRESHOLD = "threshold"
    TIME_BEFORE = "time_before"
    TIME_AFTER = "time_after"
    TIERED = "tiered"
    DIMINISHING = "diminishing"


class InputKind(StrEnum):
    """Which check-in value field a task records."""

    BINARY = "binary"
    NUMERIC = "numeric"
    TIME = "time"
    DURATION = "duration"


class Unit(StrEnum):
    """Unit a task's raw value is measured in."""

    STEPS = "steps"
    MINUTES = "minutes"
    HOURS = "hours"
    PAGES = "pages"
    COUNT = "count"
    BEDTIME_TIME = "bedtime_time"
    WAKETIME_TIME = "waketime_time"
    BOOLEAN = "boolean"
    WORDS = "words"
    MILES = "miles"
    CALORIES = "calories"


class VerificationMethod(StrEnum):
    """How a check-in's raw value is trusted."""

    MANUAL_ACTION = "manual_action"  # User presses an explicit confirmation button
    AUTO_IMPORT = "auto_import"  # Value comes from a health/screen-time integration
    TIMER_BASED = "timer_based"  # Value is measured by an in-app timer


class VerificationConfig(BaseModel):
    """Verification policy stored under a template's default_config["verification"]."""

    method: VerificationMethod = Field(..., description="Verification method for the task")
    allowed_sources: list[str] = Field(default_factory=list, description="Sources accepted for the value")
    requires_confirmation: bool = Field(default=False, description="Check-in must carry confirmed=true")
    manual_requires_flag: bool = Field(
        default=False, description="Manual entries on auto-import tasks must be flagged manual_override"
    )
    confirmation_action: str | None = Field(default=None, description="Key into the confirmation label table")
    auto_import_only: bool = Field(default=False, description="Reject manual entries outright")
    captures_timestamp: bool = Field(default=False, description="Confirmation records a wall-clock timestamp")
    min_duration_seconds: int | None = Field(
        default=None, ge=0, description="Minimum timer session length for timer-based tasks"
    )
    description: str = Field(default="", description="Human-readable verification summary")


class TaskTemplate(BaseModel):
    """Catalog entry describing a task and its default scoring configuration."""

    id: str = Field(..., description="Unique template ID")
    name: str = Field(..., description="Template name (e.g., 'Steps')")
    description: str = Field(default="", description="Detailed template description")
    icon: str = Field(default="activity", description="Icon key for display")
    category: TaskCategory = Field(..., description="Catalog category")
    archetype: ScoringArchetype = Field(..., description="Scoring archetype")
    input_kind: InputKind = Field(..., description="Check-in input kind")
    unit: Unit = Field(..., description="Unit of the raw value")
    default_config: dict[str, Any] = Field(default_factory=dict, description="Archetype-specific defaults")
    min_value: float | None = Field(default=None, description="Smallest accepted raw value")
    max_value: float | None = Field(default=None, description="Largest accepted raw value")
    is_active: bool = Field(default=True, description="Whether the template is offered in the catalog")

    @model_validator(mode="after")
    def validate_value_range(self) -> "TaskTemplate":
        """Validate min_value does not exceed max_value."""
        if self.min_value is not None and self.max_value is not None and self.min_value > self.max_value:
            raise ValueError("min_value cannot be greater than max_value")
        return self
