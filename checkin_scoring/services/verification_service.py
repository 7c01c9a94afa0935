"""Verification gate for check-ins.

Each task has a verification method (manual_action, auto_import, timer_based)
stored in its template's default_config["verification"]. A check-in must carry
matching metadata to receive points; admin overrides bypass every rule. The
gate runs before scoring.
"""

import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from checkin_scoring.core.config import settings
from checkin_scoring.core.errors import ConfigurationError
from checkin_scoring.domain.checkin import CheckinSource, VerificationMetadata
from checkin_scoring.domain.template import VerificationConfig, VerificationMethod


logger = logging.getLogger(__name__)


CONFIRMATION_LABELS: dict[str, tuple[str, str]] = {
    "complete_workout": ("Complete Workout", "💪"),
    "complete_pushups": ("Complete Pushups", "🏋️"),
    "finish_reading": ("Finished Reading", "📚"),
    "complete_practice": ("Practice Completed", "🎯"),
    "complete_journaling": ("Done Journaling", "📝"),
    "complete_meditation": ("Meditation Complete", "🧘"),
    "going_to_bed": ("Going to Bed", "🌙"),
    "im_awake": ("I'm Awake", "☀️"),
    "log_water": ("Log Water", "💧"),
}


def get_verification_config(config: Mapping[str, Any] | None) -> VerificationConfig | None:
    """Extract the verification policy from a template's default config.

    Raises:
        ConfigurationError: If a verification block is present but malformed
    """
    if not config or not config.get("verification"):
        return None
    try:
        return VerificationConfig.model_validate(config["verification"])
    except ValidationError as e:
        msg = f"Invalid verification config: {e}"
        raise ConfigurationError(msg, missing_fields=["verification"]) from e


def _min_timer_seconds(verification_config: VerificationConfig) -> int:
    if verification_config.min_duration_seconds is not None:
        return verification_config.min_duration_seconds
    return settings.timer_min_duration_seconds


def is_checkin_verified(
    metadata: VerificationMetadata | None,
    verification_config: VerificationConfig | None,
) -> bool:
    """Check whether a check-in's metadata satisfies the task's verification policy.

    Args:
        metadata: Verification metadata attached to the check-in (may be None)
        verification_config: The task's verification policy (None means unrestricted)

    Returns:
        True if the check-in may be scored
    """
    # No verification config = allow (backwards compatibility)
    if verification_config is None:
        return True

    meta = metadata or VerificationMetadata()

    if meta.admin_override:
        return True

    if verification_config.auto_import_only and meta.source == CheckinSource.MANUAL:
        logger.info("Rejected manual entry on auto-import-only task")
        return False

    if verification_config.requires_confirmation and not meta.confirmed:
        logger.info("Rejected unconfirmed check-in")
        return False

    # Timer tasks need a measured session whatever the source claims
    if verification_config.method == VerificationMethod.TIMER_BASED:
        min_seconds = _min_timer_seconds(verification_config)
        if meta.duration_seconds is None or meta.duration_seconds < min_seconds:
            logger.info("Rejected timer task without a session of at least %s seconds", min_seconds)
            return False

    return True


def needs_review(metadata: VerificationMetadata | None, verification_config: VerificationConfig | None) -> bool:
    """Whether a manual entry on an auto-import task should be flagged for review.

    Flagged entries still score; the flag is surfaced to the display layer.
    """
    if verification_config is None or not verification_config.manual_requires_flag:
        return False
    meta = metadata or VerificationMetadata()
    return meta.source == CheckinSource.MANUAL and not meta.admin_override


def _now_iso(now: datetime | None) -> str:
    return (now or datetime.now(UTC)).isoformat()


def _merge(existing: Mapping[str, Any] | VerificationMetadata | None, **fields: Any) -> VerificationMetadata:
    if isinstance(existing, VerificationMetadata):
        base = existing.model_dump(exclude_none=True)
    else:
        base = dict(existing or {})
    return VerificationMetadata.model_validate({**base, **fields})


def create_confirmed_metadata(
    existing: Mapping[str, Any] | VerificationMetadata | None = None,
    *,
    now: datetime | None = None,
) -> VerificationMetadata:
    """Metadata for a manual check-in confirmed with the task's action button."""
    return _merge(
        existing,
        verification_method=VerificationMethod.MANUAL_ACTION,
        verified_at=_now_iso(now),
        source=CheckinSource.MANUAL,
        confirmed=True,
    )


def create_time_capture_metadata(
    action: str,
    existing: Mapping[str, Any] | VerificationMetadata | None = None,
    *,
    now: datetime | None = None,
) -> VerificationMetadata:
    """Metadata for a bedtime/wake button press, recording when it was pressed.

    Raises:
        ValueError: If action is not "bedtime" or "wake"
    """
    if action not in ("bedtime", "wake"):
        msg = f"Unknown time capture action: {action}"
        raise ValueError(msg)
    pressed_at = _now_iso(now)
    return _merge(
        existing,
        verification_method=VerificationMethod.MANUAL_ACTION,
        verified_at=pressed_at,
        source=CheckinSource.MANUAL,
        confirmed=True,
        **{f"{action}_pressed_at": pressed_at},
    )


def create_timer_metadata(
    duration_seconds: float,
    timer_started_at: str,
    existing: Mapping[str, Any] | VerificationMetadata | None = None,
    *,
    now: datetime | None = None,
) -> VerificationMetadata:
    """Metadata for a session measured by the in-app timer."""
    completed_at = _now_iso(now)
    return _merge(
        existing,
        verification_method=VerificationMethod.TIMER_BASED,
        verified_at=completed_at,
        source=CheckinSource.TIMER,
        confirmed=True,
        duration_seconds=duration_seconds,
        timer_started_at=timer_started_at,
        timer_completed_at=completed_at,
    )


def create_auto_import_metadata(
    source: CheckinSource,
    existing: Mapping[str, Any] | VerificationMetadata | None = None,
    *,
    now: datetime | None = None,
) -> VerificationMetadata:
    """Metadata for a value imported from a health or screen-time integration."""
    return _merge(
        existing,
        verification_method=VerificationMethod.AUTO_IMPORT,
        verified_at=_now_iso(now),
        source=source,
        confirmed=True,
    )


def create_flagged_manual_metadata(
    existing: Mapping[str, Any] | VerificationMetadata | None = None,
    *,
    now: datetime | None = None,
) -> VerificationMetadata:
    """Metadata for a manual entry on an auto-import task (flagged for potential review)."""
    return _merge(
        existing,
        verification_method=VerificationMethod.MANUAL_ACTION,
        verified_at=_now_iso(now),
        source=CheckinSource.MANUAL,
        confirmed=True,
        manual_override=True,
    )
