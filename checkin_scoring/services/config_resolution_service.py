"""Config resolution: template defaults + league overrides + per-check-in timer data.

Precedence, highest first: timer-measured duration from the check-in's metadata,
league overrides, template default_config. This is the single defaulting pass:
the scoring rules never see a missing field. The template's default_config is
never mutated.
"""

import copy
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import TypeAdapter, ValidationError

from checkin_scoring.core.config import constants, settings
from checkin_scoring.core.errors import ConfigurationError
from checkin_scoring.core.logging import log_with_context, span
from checkin_scoring.domain.checkin import VerificationMetadata
from checkin_scoring.domain.task_config import (
    BinaryRule,
    DiminishingRule,
    LinearRule,
    ResolvedTaskConfig,
    RuleConfig,
    ScoringMode,
    TaskConfigOverrides,
    ThresholdRule,
)
from checkin_scoring.domain.template import ScoringArchetype, TaskTemplate, VerificationMethod
from checkin_scoring.services.verification_service import get_verification_config


logger = logging.getLogger(__name__)

_RULE_ADAPTER: TypeAdapter[RuleConfig] = TypeAdapter(RuleConfig)

TIME_ARCHETYPES = frozenset({ScoringArchetype.TIME_BEFORE, ScoringArchetype.TIME_AFTER})
THRESHOLD_ARCHETYPES = frozenset({ScoringArchetype.THRESHOLD, ScoringArchetype.DIMINISHING})

# Older catalog entries used these key names
LEGACY_KEY_ALIASES: dict[ScoringArchetype, dict[str, str]] = {
    ScoringArchetype.BINARY_YESNO: {"points_per_completion": "points"},
    ScoringArchetype.LINEAR_PER_UNIT: {"max_points": "daily_cap"},
    ScoringArchetype.THRESHOLD: {"points_for_threshold": "points_at_threshold"},
    ScoringArchetype.DIMINISHING: {"points_for_threshold": "points_at_threshold"},
    ScoringArchetype.TIME_BEFORE: {"points_for_success": "points_on_time"},
    ScoringArchetype.TIME_AFTER: {"points_for_success": "points_on_time"},
    ScoringArchetype.TIERED: {},
}

REQUIRED_FIELDS: dict[ScoringArchetype, tuple[str, ...]] = {
    ScoringArchetype.BINARY_YESNO: ("points",),
    ScoringArchetype.LINEAR_PER_UNIT: ("points_per_unit", "daily_cap"),
    ScoringArchetype.THRESHOLD: ("threshold", "points_at_threshold"),
    ScoringArchetype.DIMINISHING: ("threshold", "points_at_threshold"),
    ScoringArchetype.TIME_BEFORE: ("target_time", "points_on_time"),
    ScoringArchetype.TIME_AFTER: ("target_time", "points_on_time"),
    ScoringArchetype.TIERED: ("tiers",),
}

# Field the league-level "points" override lands on
HEADLINE_POINTS_FIELD: dict[ScoringArchetype, str | None] = {
    ScoringArchetype.BINARY_YESNO: "points",
    ScoringArchetype.LINEAR_PER_UNIT: "daily_cap",
    ScoringArchetype.THRESHOLD: "points_at_threshold",
    ScoringArchetype.DIMINISHING: "points_at_threshold",
    ScoringArchetype.TIME_BEFORE: "points_on_time",
    ScoringArchetype.TIME_AFTER: "points_on_time",
    ScoringArchetype.TIERED: None,
}


def normalize_config_keys(archetype: ScoringArchetype, config: Mapping[str, Any]) -> dict[str, Any]:
    """Return a deep copy of config with legacy key names mapped to canonical ones.

    A canonical key already present wins over its legacy alias.
    """
    normalized = copy.deepcopy(dict(config))
    for legacy, canonical in LEGACY_KEY_ALIASES[archetype].items():
        if legacy in normalized:
            value = normalized.pop(legacy)
            normalized.setdefault(canonical, value)
    return normalized


def _apply_overrides(
    archetype: ScoringArchetype,
    merged: dict[str, Any],
    overrides: TaskConfigOverrides,
    task_id: str,
) -> None:
    if overrides.points is not None:
        field = HEADLINE_POINTS_FIELD[archetype]
        if field is None:
            log_with_context(logger, "debug", "Ignored points override for tiered task", task_id=task_id)
        else:
            merged[field] = overrides.points
        # A binary task's headline points are its per-completion points
        if archetype == ScoringArchetype.BINARY_YESNO and overrides.binary_points is None:
            merged["binary_points"] = overrides.points

    if overrides.target_time is not None:
        if archetype in TIME_ARCHETYPES:
            merged["target_time"] = overrides.target_time
        else:
            log_with_context(logger, "debug", "Ignored target_time override", task_id=task_id)

    if overrides.threshold is not None and archetype in THRESHOLD_ARCHETYPES:
        merged["threshold"] = overrides.threshold

    if overrides.target is not None and archetype == ScoringArchetype.LINEAR_PER_UNIT:
        merged["target"] = overrides.target

    if overrides.binary_points is not None:
        merged["binary_points"] = overrides.binary_points

    if overrides.scoring_mode is not None:
        merged["scoring_mode"] = overrides.scoring_mode


def _fill_defaults(archetype: ScoringArchetype, merged: dict[str, Any]) -> None:
    if archetype == ScoringArchetype.LINEAR_PER_UNIT and not merged.get("unit_size"):
        merged["unit_size"] = 1

    if (
        archetype == ScoringArchetype.DIMINISHING
        and merged.get("max_points") is None
        and merged.get("points_at_threshold") is not None
    ):
        merged["max_points"] = merged["points_at_threshold"] * constants.DIMINISHING_DEFAULT_CAP_FACTOR


def _build_rule(archetype: ScoringArchetype, merged: dict[str, Any]) -> RuleConfig:
    missing = [field for field in REQUIRED_FIELDS[archetype] if merged.get(field) is None]
    if missing:
        msg = f"{archetype} config is missing required fields: {', '.join(missing)}"
        raise ConfigurationError(msg, archetype=str(archetype), missing_fields=missing)

    try:
        return _RULE_ADAPTER.validate_python({**merged, "archetype": str(archetype)})
    except ValidationError as e:
        invalid = sorted({str(err["loc"][1]) for err in e.errors() if len(err["loc"]) > 1})
        msg = f"{archetype} config is invalid: {e}"
        raise ConfigurationError(msg, archetype=str(archetype), missing_fields=invalid) from e


def _resolve_scoring_mode(archetype: ScoringArchetype, merged: Mapping[str, Any]) -> ScoringMode:
    mode = merged.get("scoring_mode")
    if mode is None:
        return ScoringMode.BINARY if archetype == ScoringArchetype.BINARY_YESNO else ScoringMode.DETAILED
    try:
        return ScoringMode(mode)
    except ValueError as e:
        msg = f"Unknown scoring_mode: {mode}"
        raise ConfigurationError(msg, archetype=str(archetype), missing_fields=["scoring_mode"]) from e


def _resolve_binary_points(merged: Mapping[str, Any], rule: RuleConfig) -> float:
    if merged.get("binary_points") is not None:
        return merged["binary_points"]
    if isinstance(rule, BinaryRule):
        return rule.points
    return settings.default_binary_points


def _resolve_commitment(rule: RuleConfig, overrides: TaskConfigOverrides) -> float | None:
    if overrides.target is not None:
        return overrides.target
    if overrides.threshold is not None:
        return overrides.threshold
    if isinstance(rule, LinearRule):
        return rule.target
    if isinstance(rule, ThresholdRule | DiminishingRule):
        return rule.threshold
    return None


def resolve_config(
    *,
    template: TaskTemplate,
    overrides: TaskConfigOverrides | None = None,
    metadata: VerificationMetadata | None = None,
) -> ResolvedTaskConfig:
    """Merge template defaults, league overrides and timer metadata into one config.

    Args:
        template: Task template supplying default_config
        overrides: League-level overrides for this season's task
        metadata: The check-in's metadata (read only for timer-based tasks)

    Returns:
        A fully-populated ResolvedTaskConfig

    Raises:
        ConfigurationError: If a required field is missing or a value is invalid
    """
    with span("config_resolution_service.resolve_config"):
        archetype = template.archetype
        overrides = overrides or TaskConfigOverrides()

        merged = normalize_config_keys(archetype, template.default_config)
        merged.pop("verification", None)
        _apply_overrides(archetype, merged, overrides, template.id)
        _fill_defaults(archetype, merged)

        try:
            rule = _build_rule(archetype, merged)
        except ConfigurationError as e:
            log_with_context(
                logger, "warning", "Task config rejected", task_id=template.id, missing=e.missing_fields
            )
            raise

        scoring_mode = _resolve_scoring_mode(archetype, merged)
        verification = get_verification_config(template.default_config)

        timer_minutes = None
        if (
            verification is not None
            and verification.method == VerificationMethod.TIMER_BASED
            and metadata is not None
            and metadata.duration_seconds is not None
        ):
            timer_minutes = metadata.duration_seconds / constants.SECONDS_PER_MINUTE

        return ResolvedTaskConfig(
            archetype=archetype,
            scoring_mode=scoring_mode,
            rule=rule,
            binary_points=_resolve_binary_points(merged, rule),
            commitment=_resolve_commitment(rule, overrides) if scoring_mode == ScoringMode.BINARY else None,
            verification=verification,
            timer_duration_minutes=timer_minutes,
        )
