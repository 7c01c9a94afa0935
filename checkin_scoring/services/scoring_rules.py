"""Pure scoring rules, one per archetype.

Every function here is deterministic and side-effect free: the same resolved
config and check-in value always produce the same RuleOutcome. Configs reaching
these functions have already been defaulted and validated by config resolution,
so no fallback literals live here.
"""

import math
from collections.abc import Callable

from checkin_scoring.core.errors import ConfigurationError, InvalidRawValueError
from checkin_scoring.core.time_utils import parse_time, signed_offset
from checkin_scoring.domain.checkin import CheckinValue
from checkin_scoring.domain.result import RuleOutcome
from checkin_scoring.domain.task_config import (
    BinaryRule,
    DiminishingRule,
    LinearRule,
    ResolvedTaskConfig,
    ScoringMode,
    ThresholdRule,
    TieredRule,
    TimeAfterRule,
    TimeBeforeRule,
)
from checkin_scoring.domain.template import ScoringArchetype


def score_binary(rule: BinaryRule, completed: bool) -> RuleOutcome:
    """Award the rule's points for a yes, nothing for a no."""
    points = rule.points if completed else 0.0
    return RuleOutcome(
        points=points,
        points_before_cap=points,
        is_complete=completed,
        rule="binary_yesno",
    )


def score_linear(rule: LinearRule, quantity: float) -> RuleOutcome:
    """Points per unit of progress, capped at daily_cap."""
    units = quantity / rule.unit_size
    uncapped = units * rule.points_per_unit
    points = min(uncapped, rule.daily_cap)
    return RuleOutcome(
        points=points,
        points_before_cap=uncapped,
        is_complete=points >= rule.daily_cap,
        rule="linear_per_unit:capped" if uncapped > rule.daily_cap else "linear_per_unit",
        derived_values={"units": units, "daily_cap": rule.daily_cap},
    )


def score_threshold(rule: ThresholdRule, quantity: float) -> RuleOutcome:
    """Flat points once the threshold is met, plus an optional capped bonus per unit beyond it."""
    if quantity < rule.threshold:
        return RuleOutcome(
            points=0.0,
            points_before_cap=0.0,
            is_complete=False,
            rule="threshold:below",
            derived_values={"remaining": rule.threshold - quantity},
        )

    if rule.bonus_per_unit is None:
        return RuleOutcome(
            points=rule.points_at_threshold,
            points_before_cap=rule.points_at_threshold,
            is_complete=True,
            rule="threshold:met",
        )

    excess = quantity - rule.threshold
    raw_bonus = excess * rule.bonus_per_unit
    bonus = raw_bonus if rule.max_bonus is None else min(raw_bonus, rule.max_bonus)
    return RuleOutcome(
        points=rule.points_at_threshold + bonus,
        points_before_cap=rule.points_at_threshold + raw_bonus,
        is_complete=True,
        rule="threshold:bonus" if excess > 0 else "threshold:met",
        derived_values={"excess": excess, "bonus": bonus},
    )


def minutes_late(rule: TimeBeforeRule | TimeAfterRule, time_value: str) -> int:
    """Minutes past the target (negative when early).

    Bedtime targets are compared on a wrapping clock so 00:30 is late for a
    22:30 target; wake targets are compared within the same day.
    """
    value_minutes = parse_time(time_value)
    target_minutes = parse_time(rule.target_time)
    if rule.archetype == ScoringArchetype.TIME_BEFORE:
        return signed_offset(value_minutes, target_minutes)
    return value_minutes - target_minutes


def score_time(rule: TimeBeforeRule | TimeAfterRule, time_value: str) -> RuleOutcome:
    """Full points at or before the target; lateness loses penalty_per_minute, floored at zero."""
    late = minutes_late(rule, time_value)
    if late <= 0:
        return RuleOutcome(
            points=rule.points_on_time,
            points_before_cap=rule.points_on_time,
            is_complete=True,
            rule=f"{rule.archetype}:on_time",
            derived_values={"minutes_late": 0, "minutes_early": -late},
        )

    if rule.penalty_per_minute is None:
        return RuleOutcome(
            points=0.0,
            points_before_cap=0.0,
            is_complete=False,
            rule=f"{rule.archetype}:late",
            derived_values={"minutes_late": late},
        )

    penalty = late * rule.penalty_per_minute
    unfloored = rule.points_on_time - penalty
    return RuleOutcome(
        points=max(unfloored, 0.0),
        points_before_cap=unfloored,
        is_complete=False,
        rule=f"{rule.archetype}:late_penalty",
        derived_values={"minutes_late": late, "penalty": penalty},
    )


def score_tiered(rule: TieredRule, quantity: float) -> RuleOutcome:
    """First tier (in declaration order) containing the value wins; no match scores zero."""
    for index, tier in enumerate(rule.tiers):
        if tier.contains(quantity):
            return RuleOutcome(
                points=tier.points,
                points_before_cap=tier.points,
                is_complete=tier.points > 0,
                rule=f"tiered:{index}",
                derived_values={"tier_index": index, "tier_min": tier.min, "tier_max": tier.max},
            )

    return RuleOutcome(
        points=0.0,
        points_before_cap=0.0,
        is_complete=False,
        rule="tiered:no_match",
    )


def score_diminishing(rule: DiminishingRule, quantity: float) -> RuleOutcome:
    """Zero below threshold; above it points grow with sqrt(value / threshold), capped at max_points."""
    if quantity < rule.threshold:
        return RuleOutcome(
            points=0.0,
            points_before_cap=0.0,
            is_complete=False,
            rule="diminishing:below",
            derived_values={"remaining": rule.threshold - quantity},
        )

    ratio = quantity / rule.threshold
    uncapped = rule.points_at_threshold * math.sqrt(ratio)
    points = min(uncapped, rule.max_points)
    return RuleOutcome(
        points=points,
        points_before_cap=uncapped,
        is_complete=True,
        rule="diminishing:capped" if uncapped > rule.max_points else "diminishing",
        derived_values={"ratio": ratio},
    )


def _require_boolean(raw_value: CheckinValue) -> bool:
    if raw_value.boolean_value is None:
        msg = f"Binary task expects boolean_value, got {raw_value.populated_field}"
        raise InvalidRawValueError(msg, input_kind="binary", field=raw_value.populated_field)
    return raw_value.boolean_value


def _require_time(raw_value: CheckinValue) -> str:
    if raw_value.time_value is None:
        msg = f"Time task expects time_value, got {raw_value.populated_field}"
        raise InvalidRawValueError(msg, input_kind="time", field=raw_value.populated_field)
    return raw_value.time_value


def _require_quantity(config: ResolvedTaskConfig, raw_value: CheckinValue) -> float:
    if config.timer_duration_minutes is not None:
        return config.timer_duration_minutes
    quantity = raw_value.quantity
    if quantity is None:
        msg = f"{config.archetype} task expects numeric_value or duration_minutes, got {raw_value.populated_field}"
        raise InvalidRawValueError(msg, field=raw_value.populated_field)
    return quantity


def _commitment_met(config: ResolvedTaskConfig, raw_value: CheckinValue) -> bool:
    """Whether a binary-mode check-in reaches the task's committed value."""
    if raw_value.boolean_value is not None:
        return raw_value.boolean_value

    if raw_value.time_value is not None:
        rule = config.rule
        if isinstance(rule, TimeBeforeRule | TimeAfterRule):
            return minutes_late(rule, raw_value.time_value) <= 0
        parse_time(raw_value.time_value)
        return True

    quantity = _require_quantity(config, raw_value)
    if config.commitment is not None:
        return quantity >= config.commitment
    return quantity > 0


def score_binary_mode(config: ResolvedTaskConfig, raw_value: CheckinValue) -> RuleOutcome:
    """Completion-only scoring: binary_points when the commitment is met, regardless of archetype."""
    completed = _commitment_met(config, raw_value)
    points = config.binary_points if completed else 0.0
    derived: dict[str, object] = {}
    if config.commitment is not None:
        derived["commitment"] = config.commitment
    return RuleOutcome(
        points=points,
        points_before_cap=points,
        is_complete=completed,
        rule="binary_mode",
        derived_values=derived,
    )


_DETAILED_RULES: dict[ScoringArchetype, Callable[[ResolvedTaskConfig, CheckinValue], RuleOutcome]] = {
    ScoringArchetype.BINARY_YESNO: lambda c, v: score_binary(c.rule, _require_boolean(v)),
    ScoringArchetype.LINEAR_PER_UNIT: lambda c, v: score_linear(c.rule, _require_quantity(c, v)),
    ScoringArchetype.THRESHOLD: lambda c, v: score_threshold(c.rule, _require_quantity(c, v)),
    ScoringArchetype.TIME_BEFORE: lambda c, v: score_time(c.rule, _require_time(v)),
    ScoringArchetype.TIME_AFTER: lambda c, v: score_time(c.rule, _require_time(v)),
    ScoringArchetype.TIERED: lambda c, v: score_tiered(c.rule, _require_quantity(c, v)),
    ScoringArchetype.DIMINISHING: lambda c, v: score_diminishing(c.rule, _require_quantity(c, v)),
}


def score(*, archetype: ScoringArchetype, config: ResolvedTaskConfig, raw_value: CheckinValue) -> RuleOutcome:
    """Score one check-in value against a resolved task config.

    Args:
        archetype: Scoring archetype the caller expects the config to carry
        config: Resolved configuration from config resolution
        raw_value: The check-in value

    Returns:
        RuleOutcome with points, completion flag and the rule branch that fired

    Raises:
        ConfigurationError: If the config does not belong to the archetype
        InvalidRawValueError: If the value has the wrong shape for the archetype
    """
    if config.archetype != archetype or config.rule.archetype != archetype:
        msg = f"Config for {config.rule.archetype} cannot be scored as {archetype}"
        raise ConfigurationError(msg, archetype=str(archetype))

    if raw_value.populated_field is None and config.timer_duration_minutes is None:
        return RuleOutcome(points=0.0, points_before_cap=0.0, is_complete=False, rule="no_value")

    if config.scoring_mode == ScoringMode.BINARY:
        return score_binary_mode(config, raw_value)

    return _DETAILED_RULES[archetype](config, raw_value)
