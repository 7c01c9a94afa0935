"""Scoring examples and display names for configured tasks.

Examples are computed with the real scoring rules, so what an admin previews
is what check-ins will earn.
"""

from pydantic import BaseModel

from checkin_scoring.core.config import constants
from checkin_scoring.core.time_utils import add_minutes, format_time, subtract_minutes
from checkin_scoring.domain.checkin import CheckinValue
from checkin_scoring.domain.task_config import (
    BinaryRule,
    DiminishingRule,
    LinearRule,
    ResolvedTaskConfig,
    ScoringMode,
    TaskConfigOverrides,
    ThresholdRule,
    TieredRule,
    TimeAfterRule,
    TimeBeforeRule,
)
from checkin_scoring.domain.template import TaskTemplate, Unit
from checkin_scoring.services import scoring_rules
from checkin_scoring.services.config_resolution_service import resolve_config


class ScoringExample(BaseModel):
    """One labelled example check-in and what it would earn."""

    scenario: str
    points: float
    is_complete: bool


def unit_label(unit: Unit, value: float | None = None) -> str:
    """Short unit label for display, pluralised where it reads naturally."""
    singular = value == 1
    match unit:
        case Unit.MINUTES:
            return "min"
        case Unit.HOURS:
            return "hour" if singular else "hours"
        case Unit.STEPS:
            return "steps"
        case Unit.PAGES:
            return "page" if singular else "pages"
        case Unit.WORDS:
            return "word" if singular else "words"
        case Unit.MILES:
            return "mile" if singular else "miles"
        case Unit.CALORIES:
            return "cal"
        case Unit.COUNT:
            return "time" if singular else "times"
    return ""


def _format_number(value: float) -> str:
    return f"{value:,.0f}" if float(value).is_integer() else f"{value:,g}"


def _with_unit(template: TaskTemplate, value: float) -> str:
    label = unit_label(template.unit, value)
    return f"{_format_number(value)} {label}".rstrip()


def _example(config: ResolvedTaskConfig, scenario: str, value: CheckinValue) -> ScoringExample:
    outcome = scoring_rules.score(archetype=config.archetype, config=config, raw_value=value)
    return ScoringExample(scenario=scenario, points=outcome.points, is_complete=outcome.is_complete)


def _time_verb(template: TaskTemplate) -> str:
    if template.unit == Unit.WAKETIME_TIME:
        return "Wake at"
    if template.unit == Unit.BEDTIME_TIME:
        return "In bed by"
    return "Done at"


def _time_examples(
    template: TaskTemplate, config: ResolvedTaskConfig, rule: TimeBeforeRule | TimeAfterRule
) -> list[ScoringExample]:
    verb = _time_verb(template)
    early = subtract_minutes(rule.target_time, constants.PREVIEW_EARLY_MINUTES)
    examples = [
        _example(config, f"{verb} {format_time(early)} (early)", CheckinValue(time_value=early)),
        _example(config, f"{verb} {format_time(rule.target_time)} (on time)", CheckinValue(time_value=rule.target_time)),
    ]
    for late_minutes in constants.PREVIEW_LATE_MINUTES:
        late = add_minutes(rule.target_time, late_minutes)
        examples.append(
            _example(config, f"{verb} {format_time(late)} (+{late_minutes} min late)", CheckinValue(time_value=late))
        )
    return examples


def _threshold_examples(
    template: TaskTemplate, config: ResolvedTaskConfig, rule: ThresholdRule | DiminishingRule
) -> list[ScoringExample]:
    below = rule.threshold // 2
    beyond = rule.threshold + constants.PREVIEW_BONUS_UNITS
    return [
        _example(config, f"{_with_unit(template, below)} (below goal)", CheckinValue(numeric_value=below)),
        _example(config, f"{_with_unit(template, rule.threshold)} (hit goal)", CheckinValue(numeric_value=rule.threshold)),
        _example(
            config,
            f"{_with_unit(template, beyond)} (+{constants.PREVIEW_BONUS_UNITS} past goal)",
            CheckinValue(numeric_value=beyond),
        ),
    ]


def _linear_examples(template: TaskTemplate, config: ResolvedTaskConfig, rule: LinearRule) -> list[ScoringExample]:
    if rule.target:
        target = rule.target
    elif rule.points_per_unit:
        target = rule.daily_cap / rule.points_per_unit * rule.unit_size
    else:
        target = rule.unit_size
    return [
        _example(config, f"{_with_unit(template, share * target)} ({pct}% of goal)", CheckinValue(numeric_value=share * target))
        for share, pct in ((0.5, 50), (1.0, 100), (1.5, 150))
    ]


def _tier_label(template: TaskTemplate, low: float, high: float | None) -> str:
    if high is None:
        return f"Over {_with_unit(template, low)}"
    if low <= 0:
        return f"Under {_with_unit(template, high)}"
    return f"{_format_number(low)}-{_with_unit(template, high)}"


def _tiered_examples(template: TaskTemplate, config: ResolvedTaskConfig, rule: TieredRule) -> list[ScoringExample]:
    return [
        _example(config, _tier_label(template, tier.min, tier.max), CheckinValue(numeric_value=tier.min))
        for tier in rule.tiers
    ]


def scoring_examples(*, template: TaskTemplate, overrides: TaskConfigOverrides | None = None) -> list[ScoringExample]:
    """Generate labelled example check-ins and the points each would earn.

    Raises:
        ConfigurationError: If the task config does not resolve
    """
    config = resolve_config(template=template, overrides=overrides)
    rule = config.rule

    if config.scoring_mode == ScoringMode.BINARY:
        return [
            _example(config, "Completed", CheckinValue(boolean_value=True)),
            _example(config, "Not completed", CheckinValue(boolean_value=False)),
        ]

    match rule:
        case TimeBeforeRule() | TimeAfterRule():
            return _time_examples(template, config, rule)
        case ThresholdRule() | DiminishingRule():
            return _threshold_examples(template, config, rule)
        case LinearRule():
            return _linear_examples(template, config, rule)
        case TieredRule():
            return _tiered_examples(template, config, rule)
        case BinaryRule():
            return [
                _example(config, "Completed", CheckinValue(boolean_value=True)),
                _example(config, "Not completed", CheckinValue(boolean_value=False)),
            ]
    return []


def _base_name(template: TaskTemplate) -> str:
    if template.unit == Unit.WAKETIME_TIME:
        return "Wake up"
    if template.unit == Unit.BEDTIME_TIME:
        return "Be in bed"
    return template.name.strip()


def configured_task_name(*, template: TaskTemplate, overrides: TaskConfigOverrides | None = None) -> str:
    """Short label for a configured task.

    Examples: "Wake up by 6:30 AM", "Steps — 8,000 steps", "Workout — 30 min".
    """
    config = resolve_config(template=template, overrides=overrides)
    rule = config.rule
    base = _base_name(template)

    if isinstance(rule, TimeBeforeRule | TimeAfterRule) and template.unit in (Unit.BEDTIME_TIME, Unit.WAKETIME_TIME):
        return f"{base} by {format_time(rule.target_time)}"

    value = config.commitment
    if value is None and isinstance(rule, LinearRule):
        value = rule.target
    if value is None and isinstance(rule, ThresholdRule | DiminishingRule):
        value = rule.threshold

    if value:
        return f"{base} — {_with_unit(template, value)}"
    return base
