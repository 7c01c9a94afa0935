"""Configuration management for checkin_scoring."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")
    environment: str = Field(default="production", description="Deployment environment tag for spans")

    # Scoring Configuration
    points_decimal_places: int = Field(
        default=2, ge=0, description="Decimal places kept on awarded points after modifiers"
    )
    default_binary_points: int = Field(
        default=20, ge=0, description="Points per completion in binary mode when no config provides any"
    )

    # Verification Configuration
    timer_min_duration_seconds: int = Field(
        default=60, ge=0, description="Minimum timer session length when the task config does not state one"
    )


# Application Constants
class Constants:
    """Application-wide constants."""

    # Clock arithmetic
    MINUTES_PER_HOUR: int = 60
    MINUTES_PER_DAY: int = 24 * 60
    HALF_DAY_MINUTES: int = 12 * 60  # Window used to decide whether a past-midnight time is late or early
    SECONDS_PER_MINUTE: int = 60

    # Diminishing returns
    DIMINISHING_DEFAULT_CAP_FACTOR: float = 2.0  # max_points defaults to 2x points_at_threshold

    # Scoring preview
    PREVIEW_EARLY_MINUTES: int = 15
    PREVIEW_LATE_MINUTES: tuple[int, ...] = (30, 60)
    PREVIEW_BONUS_UNITS: int = 20


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
