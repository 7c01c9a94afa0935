from checkin_scoring.services import (
    config_resolution_service,
    difficulty_service,
    powerup_service,
    preview_service,
    scoring_rules,
    scoring_service,
    validation_service,
    verification_service,
)


__all__ = [
    "config_resolution_service",
    "difficulty_service",
    "powerup_service",
    "preview_service",
    "scoring_rules",
    "scoring_service",
    "validation_service",
    "verification_service",
]
