"""Domain models and DTOs."""

from checkin_scoring.domain.checkin import CheckinSource, CheckinValue, VerificationMetadata
from checkin_scoring.domain.powerup import POWERUP_TYPES, PowerUp, PowerUpType
from checkin_scoring.domain.result import RuleOutcome, ScoringResult
from checkin_scoring.domain.task_config import (
    BinaryRule,
    DiminishingRule,
    LinearRule,
    ResolvedTaskConfig,
    ScoringMode,
    TaskConfigOverrides,
    ThresholdRule,
    Tier,
    TieredRule,
    TimeAfterRule,
    TimeBeforeRule,
)
from checkin_scoring.domain.template import (
    InputKind,
    ScoringArchetype,
    TaskCategory,
    TaskTemplate,
    Unit,
    VerificationConfig,
    VerificationMethod,
)


__all__ = [
    "POWERUP_TYPES",
    "BinaryRule",
    "CheckinSource",
    "CheckinValue",
    "DiminishingRule",
    "InputKind",
    "LinearRule",
    "PowerUp",
    "PowerUpType",
    "ResolvedTaskConfig",
    "RuleOutcome",
    "ScoringArchetype",
    "ScoringMode",
    "ScoringResult",
    "TaskCategory",
    "TaskConfigOverrides",
    "TaskTemplate",
    "ThresholdRule",
    "Tier",
    "TieredRule",
    "TimeAfterRule",
    "TimeBeforeRule",
    "Unit",
    "VerificationConfig",
    "VerificationMetadata",
    "VerificationMethod",
]
