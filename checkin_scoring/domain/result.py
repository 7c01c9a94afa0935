"""Scoring result models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RuleOutcome(BaseModel):
    """Output of a single scoring rule before modifiers and rounding."""

    model_config = ConfigDict(frozen=True)

    points: float
    points_before_cap: float
    is_complete: bool
    rule: str
    derived_values: dict[str, Any] = Field(default_factory=dict)


class ScoringResult(BaseModel):
    """Immutable record of one scoring computation."""

    model_config = ConfigDict(frozen=True)

    points_awarded: float = Field(..., description="Final points after cap and modifier")
    points_before_cap: float = Field(..., description="Points before the archetype's cap (diagnostic)")
    is_complete: bool = Field(..., description="Whether the task counts as completed")
    rule_applied: str = Field(..., description="Archetype and branch that produced the points")
    derived_values: dict[str, Any] = Field(default_factory=dict, description="Diagnostic values")
    verified: bool = Field(default=True, description="Whether the check-in passed verification")
