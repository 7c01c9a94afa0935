"""Check-in scoring pipeline.

validate value -> verification gate -> config resolution -> scoring rule ->
power-up modifier -> rounded ScoringResult. Stateless: repeated calls for the
same (user, task, date) with revised values simply score the latest value.
"""

import logging

from checkin_scoring.core.config import settings
from checkin_scoring.core.logging import log_with_context, span
from checkin_scoring.domain.checkin import CheckinValue
from checkin_scoring.domain.powerup import PowerUp, PowerUpType
from checkin_scoring.domain.result import RuleOutcome, ScoringResult
from checkin_scoring.domain.task_config import ResolvedTaskConfig, TaskConfigOverrides
from checkin_scoring.domain.template import ScoringArchetype, TaskTemplate
from checkin_scoring.services import scoring_rules
from checkin_scoring.services.config_resolution_service import resolve_config
from checkin_scoring.services.powerup_service import apply_powerup
from checkin_scoring.services.validation_service import validate_checkin_value
from checkin_scoring.services.verification_service import (
    get_verification_config,
    is_checkin_verified,
    needs_review,
)


logger = logging.getLogger(__name__)


def _round(points: float) -> float:
    # Normalise -0.0 so a zero result always compares and serialises as 0
    return round(points, settings.points_decimal_places) + 0.0


def unverified_result() -> ScoringResult:
    """Zero-point result for a check-in that is recorded but pending verification."""
    return ScoringResult(
        points_awarded=0.0,
        points_before_cap=0.0,
        is_complete=False,
        rule_applied="unverified",
        derived_values={"pending": True},
        verified=False,
    )


def to_result(outcome: RuleOutcome, *, flagged_for_review: bool = False) -> ScoringResult:
    """Convert a rule outcome into a rounded, verified ScoringResult."""
    derived = dict(outcome.derived_values)
    if flagged_for_review:
        derived["flagged_for_review"] = True
    return ScoringResult(
        points_awarded=_round(outcome.points),
        points_before_cap=_round(outcome.points_before_cap),
        is_complete=outcome.is_complete,
        rule_applied=outcome.rule,
        derived_values=derived,
        verified=True,
    )


def _apply_rounded(result: ScoringResult, powerup: PowerUp, config: ResolvedTaskConfig) -> ScoringResult:
    modified = apply_powerup(result, powerup, config=config)
    return modified.model_copy(update={"points_awarded": _round(modified.points_awarded)})


def _forgives_miss(template: TaskTemplate, checkin: CheckinValue, powerup: PowerUp | None) -> bool:
    # A pending "yes" stays pending; only a no or an empty check-in is a miss
    return (
        powerup is not None
        and not powerup.is_used
        and powerup.powerup_type == PowerUpType.FORGIVENESS
        and template.archetype == ScoringArchetype.BINARY_YESNO
        and checkin.boolean_value is not True
    )


def forgive_missed(
    *,
    template: TaskTemplate,
    powerup: PowerUp,
    overrides: TaskConfigOverrides | None = None,
) -> ScoringResult:
    """Score a missed binary task with a forgiveness power-up.

    Used when there is no verified check-in to score, e.g. the user never
    pressed the confirmation button. The miss scores zero and the power-up
    then awards the task's full binary credit.
    """
    config = resolve_config(template=template, overrides=overrides)
    missed = to_result(RuleOutcome(points=0.0, points_before_cap=0.0, is_complete=False, rule="missed"))
    result = _apply_rounded(missed, powerup, config)
    log_with_context(
        logger,
        "info",
        "Missed check-in forgiven",
        task_id=template.id,
        powerup_id=powerup.id,
        points=result.points_awarded,
    )
    return result


def evaluate_checkin(
    *,
    template: TaskTemplate,
    checkin: CheckinValue,
    overrides: TaskConfigOverrides | None = None,
    powerup: PowerUp | None = None,
) -> ScoringResult:
    """Score one check-in end to end.

    Args:
        template: Template of the task being checked in
        checkin: The check-in value and its metadata
        overrides: League-level config overrides for the task
        powerup: Optional unused power-up to apply to the result

    Returns:
        The final ScoringResult; verified=False with zero points when the
        check-in fails verification, unless a forgiveness power-up covers a
        missed binary task

    Raises:
        InvalidRawValueError: If the value has the wrong shape or is out of range
        ConfigurationError: If the resolved task config is invalid
    """
    with span("scoring_service.evaluate_checkin"):
        validate_checkin_value(template=template, value=checkin)

        verification = get_verification_config(template.default_config)
        if not is_checkin_verified(checkin.metadata, verification):
            if _forgives_miss(template, checkin, powerup):
                return forgive_missed(template=template, powerup=powerup, overrides=overrides)
            log_with_context(logger, "info", "Check-in pending verification", task_id=template.id)
            return unverified_result()

        config = resolve_config(template=template, overrides=overrides, metadata=checkin.metadata)

        with span("scoring_rules.score"):
            outcome = scoring_rules.score(archetype=template.archetype, config=config, raw_value=checkin)

        result = to_result(outcome, flagged_for_review=needs_review(checkin.metadata, verification))

        if powerup is not None:
            result = _apply_rounded(result, powerup, config)

        log_with_context(
            logger,
            "debug",
            "Check-in scored",
            task_id=template.id,
            rule=result.rule_applied,
            points=result.points_awarded,
            complete=result.is_complete,
        )
        return result
