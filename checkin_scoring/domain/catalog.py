"""Seed catalog of task templates offered to new leagues."""

from checkin_scoring.domain.template import InputKind, ScoringArchetype, TaskCategory, TaskTemplate, Unit


_SEED_TEMPLATES = [
    TaskTemplate(
        id="journaling",
        name="Journaling",
        description="Write in your journal for at least 5 minutes",
        icon="pencil",
        category=TaskCategory.MINDFULNESS,
        archetype=ScoringArchetype.BINARY_YESNO,
        input_kind=InputKind.BINARY,
        unit=Unit.BOOLEAN,
        default_config={
            "points": 10,
            "binary_points": 10,
            "verification": {
                "method": "manual_action",
                "requires_confirmation": True,
                "confirmation_action": "complete_journaling",
                "description": "Tap 'Done Journaling' when you finish",
            },
        },
    ),
    TaskTemplate(
        id="steps",
        name="Steps",
        description="Walk 10,000 steps today",
        icon="footprints",
        category=TaskCategory.FITNESS,
        archetype=ScoringArchetype.LINEAR_PER_UNIT,
        input_kind=InputKind.NUMERIC,
        unit=Unit.STEPS,
        min_value=0,
        max_value=100_000,
        default_config={
            "unit_size": 1000,
            "points_per_unit": 1,
            "daily_cap": 10,
            "target": 10_000,
            "verification": {
                "method": "auto_import",
                "allowed_sources": ["apple_health", "google_fit"],
                "manual_requires_flag": True,
                "description": "Imported from your health app; manual entries are flagged",
            },
        },
    ),
    TaskTemplate(
        id="pushups",
        name="Pushups",
        description="Do pushups and earn points for every rep",
        icon="chevrons-up",
        category=TaskCategory.FITNESS,
        archetype=ScoringArchetype.LINEAR_PER_UNIT,
        input_kind=InputKind.NUMERIC,
        unit=Unit.COUNT,
        min_value=0,
        max_value=2000,
        default_config={
            "unit_size": 1,
            "points_per_unit": 0.1,
            "daily_cap": 5,
            "verification": {
                "method": "manual_action",
                "requires_confirmation": True,
                "confirmation_action": "complete_pushups",
            },
        },
    ),
    TaskTemplate(
        id="workout",
        name="Workout",
        description="Complete at least 30 minutes of exercise",
        icon="dumbbell",
        category=TaskCategory.FITNESS,
        archetype=ScoringArchetype.THRESHOLD,
        input_kind=InputKind.DURATION,
        unit=Unit.MINUTES,
        min_value=0,
        max_value=600,
        default_config={
            "threshold": 30,
            "points_at_threshold": 50,
            "bonus_per_unit": 1,
            "max_bonus": 20,
            "verification": {
                "method": "manual_action",
                "requires_confirmation": True,
                "confirmation_action": "complete_workout",
            },
        },
    ),
    TaskTemplate(
        id="reading",
        name="Reading",
        description="Read for at least 20 minutes",
        icon="book-open",
        category=TaskCategory.LEARNING,
        archetype=ScoringArchetype.THRESHOLD,
        input_kind=InputKind.DURATION,
        unit=Unit.MINUTES,
        min_value=0,
        max_value=600,
        default_config={
            "threshold": 20,
            "points_at_threshold": 40,
            "verification": {
                "method": "timer_based",
                "requires_confirmation": True,
                "min_duration_seconds": 300,
                "description": "Run the in-app timer while you read",
            },
        },
    ),
    TaskTemplate(
        id="meditation",
        name="Meditation",
        description="Meditate and earn points per 5 minutes",
        icon="brain",
        category=TaskCategory.MINDFULNESS,
        archetype=ScoringArchetype.LINEAR_PER_UNIT,
        input_kind=InputKind.DURATION,
        unit=Unit.MINUTES,
        min_value=0,
        max_value=240,
        default_config={
            "unit_size": 5,
            "points_per_unit": 0.2,
            "daily_cap": 5,
            "verification": {
                "method": "timer_based",
                "requires_confirmation": True,
                "min_duration_seconds": 60,
                "confirmation_action": "complete_meditation",
            },
        },
    ),
    TaskTemplate(
        id="deep_work",
        name="Deep Work",
        description="Focused work sessions, with returns tapering off after the first hour",
        icon="target",
        category=TaskCategory.PRODUCTIVITY,
        archetype=ScoringArchetype.DIMINISHING,
        input_kind=InputKind.DURATION,
        unit=Unit.MINUTES,
        min_value=0,
        max_value=720,
        default_config={
            "threshold": 60,
            "points_at_threshold": 30,
            "max_points": 60,
        },
    ),
    TaskTemplate(
        id="bedtime",
        name="Bedtime",
        description="Get to bed before 10:30 PM",
        icon="moon",
        category=TaskCategory.SLEEP,
        archetype=ScoringArchetype.TIME_BEFORE,
        input_kind=InputKind.TIME,
        unit=Unit.BEDTIME_TIME,
        default_config={
            "target_time": "22:30",
            "points_on_time": 50,
            "penalty_per_minute": 1,
            "verification": {
                "method": "manual_action",
                "requires_confirmation": True,
                "captures_timestamp": True,
                "confirmation_action": "going_to_bed",
            },
        },
    ),
    TaskTemplate(
        id="wake_time",
        name="Wake Time",
        description="Wake up by 6:30 AM",
        icon="sun",
        category=TaskCategory.SLEEP,
        archetype=ScoringArchetype.TIME_AFTER,
        input_kind=InputKind.TIME,
        unit=Unit.WAKETIME_TIME,
        default_config={
            "target_time": "06:30",
            "points_on_time": 50,
            "penalty_per_minute": 1,
            "verification": {
                "method": "manual_action",
                "requires_confirmation": True,
                "captures_timestamp": True,
                "confirmation_action": "im_awake",
            },
        },
    ),
    TaskTemplate(
        id="screen_time",
        name="Screen Time",
        description="Keep screen time under 2 hours",
        icon="smartphone",
        category=TaskCategory.PRODUCTIVITY,
        archetype=ScoringArchetype.TIERED,
        input_kind=InputKind.NUMERIC,
        unit=Unit.MINUTES,
        min_value=0,
        max_value=1440,
        default_config={
            "tiers": [
                {"min": 0, "max": 60, "points": 5},
                {"min": 60, "max": 120, "points": 3},
                {"min": 120, "max": 180, "points": 0},
                {"min": 180, "max": None, "points": -3},
            ],
            "verification": {
                "method": "auto_import",
                "allowed_sources": ["screen_time"],
                "auto_import_only": True,
                "description": "Read from your phone's screen time report",
            },
        },
    ),
]

DEFAULT_TEMPLATES: dict[str, TaskTemplate] = {template.id: template for template in _SEED_TEMPLATES}


def get_template(template_id: str) -> TaskTemplate:
    """Look up a seeded template by ID.

    Raises:
        KeyError: If no template with that ID exists
    """
    try:
        return DEFAULT_TEMPLATES[template_id]
    except KeyError:
        msg = f"Task template not found: {template_id}"
        raise KeyError(msg) from None


def list_templates(*, category: TaskCategory | None = None) -> list[TaskTemplate]:
    """List active seeded templates, optionally filtered by category, ordered by category then name."""
    templates = [
        t for t in DEFAULT_TEMPLATES.values() if t.is_active and (category is None or t.category == category)
    ]
    return sorted(templates, key=lambda t: (t.category.value, t.name))
