"""Power-up domain models and the static power-up type table."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class PowerUpType(StrEnum):
    """Kind of modifier a power-up applies to a scoring result."""

    MULTIPLIER = "multiplier"
    BOOST = "boost"
    SHIELD = "shield"
    FORGIVENESS = "forgiveness"


class PowerUp(BaseModel):
    """One-time consumable modifier owned by a user for a matchup week."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique power-up ID")
    powerup_type: PowerUpType = Field(..., description="Modifier kind")
    modifier_value: float = Field(default=0, description="Multiplier factor or boost amount")
    is_used: bool = Field(default=False, description="Whether the power-up has been consumed")
    used_at: str | None = Field(default=None, description="When it was consumed (ISO format)")
    week_id: str | None = Field(default=None, description="Matchup week the power-up belongs to")
    task_instance_id: str | None = Field(default=None, description="Task instance it was spent on")


class PowerUpInfo(BaseModel):
    """Display metadata for a power-up type."""

    name: str
    description: str
    icon: str


POWERUP_TYPES: dict[PowerUpType, PowerUpInfo] = {
    PowerUpType.MULTIPLIER: PowerUpInfo(
        name="2x Multiplier",
        description="Double points on your next task completion",
        icon="⚡",
    ),
    PowerUpType.BOOST: PowerUpInfo(
        name="Point Boost",
        description="Add bonus points to any task",
        icon="🚀",
    ),
    PowerUpType.SHIELD: PowerUpInfo(
        name="Penalty Shield",
        description="Block one missed task penalty",
        icon="🛡️",
    ),
    PowerUpType.FORGIVENESS: PowerUpInfo(
        name="Forgiveness Pass",
        description="Excuse one missed binary task",
        icon="🎫",
    ),
}
