"""Power-up modifier and one-time consumption.

Applying a power-up is pure: it returns a new ScoringResult and never touches
the power-up record. Consuming one (flagging it used) is a separate one-time
transition the caller performs atomically against its store.
"""

import logging
from datetime import UTC, datetime

from checkin_scoring.core.errors import PowerUpAlreadyUsedError
from checkin_scoring.domain.powerup import PowerUp, PowerUpType
from checkin_scoring.domain.result import ScoringResult
from checkin_scoring.domain.task_config import ResolvedTaskConfig, ScoringMode
from checkin_scoring.domain.template import ScoringArchetype


logger = logging.getLogger(__name__)


def _full_binary_credit(config: ResolvedTaskConfig) -> float:
    if config.scoring_mode == ScoringMode.BINARY:
        return config.binary_points
    return config.rule.points


def is_applicable(
    result: ScoringResult,
    powerup: PowerUp,
    *,
    config: ResolvedTaskConfig | None = None,
) -> bool:
    """Whether applying the power-up would change this result.

    Callers use this to decide whether to spend the power-up at all.
    """
    if powerup.is_used or "powerup_id" in result.derived_values or not result.verified:
        return False

    match powerup.powerup_type:
        case PowerUpType.MULTIPLIER | PowerUpType.BOOST:
            return True
        case PowerUpType.SHIELD:
            return result.points_awarded < 0
        case PowerUpType.FORGIVENESS:
            return (
                config is not None
                and config.archetype == ScoringArchetype.BINARY_YESNO
                and not result.is_complete
            )
    return False


def apply_powerup(
    result: ScoringResult,
    powerup: PowerUp | None,
    *,
    config: ResolvedTaskConfig | None = None,
) -> ScoringResult:
    """Apply a power-up's modifier to a scoring result, at most once.

    Args:
        result: Base scoring result
        powerup: Power-up to apply (None leaves the result unchanged)
        config: Resolved task config, required for forgiveness

    Returns:
        A new ScoringResult, or the base result when the power-up is used,
        already applied, or has nothing to act on
    """
    if powerup is None:
        return result

    if powerup.is_used:
        logger.info("Power-up %s already used; result left unchanged", powerup.id)
        return result

    if not is_applicable(result, powerup, config=config):
        logger.info("Power-up %s (%s) not applicable to this result", powerup.id, powerup.powerup_type)
        return result

    points = result.points_awarded
    is_complete = result.is_complete
    match powerup.powerup_type:
        case PowerUpType.MULTIPLIER:
            points = points * powerup.modifier_value
        case PowerUpType.BOOST:
            points = points + powerup.modifier_value
        case PowerUpType.SHIELD:
            points = 0.0
        case PowerUpType.FORGIVENESS:
            points = _full_binary_credit(config)
            is_complete = True

    return result.model_copy(
        update={
            "points_awarded": points,
            "is_complete": is_complete,
            "rule_applied": f"{result.rule_applied}+{powerup.powerup_type}",
            "derived_values": {
                **result.derived_values,
                "powerup_id": powerup.id,
                "powerup_type": str(powerup.powerup_type),
                "points_before_powerup": result.points_awarded,
            },
        }
    )


def consume_powerup(
    powerup: PowerUp,
    *,
    task_instance_id: str | None = None,
    now: datetime | None = None,
) -> PowerUp:
    """Return the used version of a power-up, locking in where and when it was spent.

    The caller must persist this with a compare-and-swap (only if still unused).

    Raises:
        PowerUpAlreadyUsedError: If the power-up was already consumed
    """
    if powerup.is_used:
        msg = f"Power-up {powerup.id} was already used at {powerup.used_at}"
        raise PowerUpAlreadyUsedError(msg, powerup_id=powerup.id)

    used_at = (now or datetime.now(UTC)).isoformat()
    logger.info("Consumed power-up %s (%s)", powerup.id, powerup.powerup_type)
    return powerup.model_copy(
        update={"is_used": True, "used_at": used_at, "task_instance_id": task_instance_id},
    )
