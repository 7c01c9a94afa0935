"""Difficulty presets that derive league overrides from a template's defaults."""

import math
from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel

from checkin_scoring.core.time_utils import add_minutes
from checkin_scoring.domain.task_config import TaskConfigOverrides
from checkin_scoring.domain.template import ScoringArchetype
from checkin_scoring.services.config_resolution_service import normalize_config_keys


class DifficultyLevel(StrEnum):
    """Per-task difficulty an admin can pick."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class DifficultyPreset(BaseModel):
    """Scaling applied to a template's defaults for one difficulty level."""

    label: str
    description: str
    points_multiplier: float
    time_adjustment: int  # minutes added to wake targets; negated for bedtime targets
    threshold_multiplier: float


DIFFICULTY_PRESETS: dict[DifficultyLevel, DifficultyPreset] = {
    DifficultyLevel.EASY: DifficultyPreset(
        label="Easy",
        description="Relaxed targets for beginners",
        points_multiplier=0.6,
        time_adjustment=30,
        threshold_multiplier=0.7,
    ),
    DifficultyLevel.MEDIUM: DifficultyPreset(
        label="Medium",
        description="Balanced challenge",
        points_multiplier=1.0,
        time_adjustment=0,
        threshold_multiplier=1.0,
    ),
    DifficultyLevel.HARD: DifficultyPreset(
        label="Hard",
        description="For serious grinders only",
        points_multiplier=1.5,
        time_adjustment=-15,
        threshold_multiplier=1.3,
    ),
}

# Checked in order; the first one present in the defaults is scaled
_POINTS_FIELDS: tuple[tuple[str, str], ...] = (
    ("points_on_time", "points"),
    ("points_at_threshold", "points"),
    ("max_points", "points"),
    ("daily_cap", "points"),
    ("binary_points", "binary_points"),
)


def _scale(value: float, multiplier: float) -> float:
    """Scale and round half up; a 1.0 multiplier returns the value untouched."""
    if multiplier == 1.0:
        return value
    return math.floor(value * multiplier + 0.5)


def _shift(time_value: str, minutes: int) -> str:
    if minutes == 0:
        return time_value
    return add_minutes(time_value, minutes)


def apply_difficulty(
    archetype: ScoringArchetype,
    default_config: Mapping[str, Any],
    level: DifficultyLevel | None,
) -> TaskConfigOverrides:
    """Derive league overrides for a difficulty level from a template's default config.

    Args:
        archetype: The template's scoring archetype
        default_config: The template's default_config (not modified)
        level: Difficulty level, or None for no preset

    Returns:
        Overrides holding only the fields the preset changes
    """
    if level is None:
        return TaskConfigOverrides()

    preset = DIFFICULTY_PRESETS[DifficultyLevel(level)]
    config = normalize_config_keys(archetype, default_config)
    result: dict[str, Any] = {}

    for source, target in _POINTS_FIELDS:
        if config.get(source):
            result[target] = _scale(config[source], preset.points_multiplier)
            break

    if config.get("target_time"):
        if archetype == ScoringArchetype.TIME_AFTER:
            result["target_time"] = _shift(config["target_time"], preset.time_adjustment)
        elif archetype == ScoringArchetype.TIME_BEFORE:
            result["target_time"] = _shift(config["target_time"], -preset.time_adjustment)

    if config.get("threshold"):
        result["threshold"] = _scale(config["threshold"], preset.threshold_multiplier)

    if config.get("target"):
        result["target"] = _scale(config["target"], preset.threshold_multiplier)

    return TaskConfigOverrides(**result)


class QuickStartDifficulty(StrEnum):
    """League-wide quick start levels that pre-configure the starter tasks."""

    EASY = "easy"
    MEDIUM = "medium"
    EXTREME = "extreme"


QUICK_START_PRESETS: dict[QuickStartDifficulty, dict[str, TaskConfigOverrides]] = {
    QuickStartDifficulty.EASY: {
        "Wake Time": TaskConfigOverrides(target_time="07:30"),
        "Workout": TaskConfigOverrides(threshold=20),
        "Reading": TaskConfigOverrides(threshold=15),
        "Steps": TaskConfigOverrides(target=5000),
        "Journaling": TaskConfigOverrides(binary_points=10),
    },
    QuickStartDifficulty.MEDIUM: {
        "Wake Time": TaskConfigOverrides(target_time="06:30"),
        "Workout": TaskConfigOverrides(threshold=30),
        "Reading": TaskConfigOverrides(threshold=20),
        "Steps": TaskConfigOverrides(target=8000),
        "Journaling": TaskConfigOverrides(binary_points=10),
    },
    QuickStartDifficulty.EXTREME: {
        "Wake Time": TaskConfigOverrides(target_time="05:30"),
        "Workout": TaskConfigOverrides(threshold=45),
        "Reading": TaskConfigOverrides(threshold=30),
        "Steps": TaskConfigOverrides(target=12000),
        "Journaling": TaskConfigOverrides(binary_points=10),
    },
}


def quick_start_overrides(template_name: str, difficulty: QuickStartDifficulty) -> TaskConfigOverrides | None:
    """Overrides a quick start level assigns to a starter task, or None if the task is not a starter."""
    overrides = QUICK_START_PRESETS[QuickStartDifficulty(difficulty)].get(template_name)
    return overrides.model_copy() if overrides is not None else None
