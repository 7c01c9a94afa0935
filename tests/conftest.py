"""Pytest configuration and shared fixtures."""

import logfire
import pytest

from checkin_scoring.domain.catalog import get_template
from checkin_scoring.domain.template import TaskTemplate


# Spans are created by the services; keep them local during tests
logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture
def steps_template() -> TaskTemplate:
    """Linear steps task: 1 point per 1000 steps, capped at 10."""
    return get_template("steps")


@pytest.fixture
def workout_template() -> TaskTemplate:
    """Threshold workout task: 50 points at 30 minutes, +1/minute up to +20."""
    return get_template("workout")


@pytest.fixture
def reading_template() -> TaskTemplate:
    """Timer-verified threshold reading task."""
    return get_template("reading")


@pytest.fixture
def journaling_template() -> TaskTemplate:
    """Binary journaling task that requires confirmation."""
    return get_template("journaling")


@pytest.fixture
def bedtime_template() -> TaskTemplate:
    """Time-before bedtime task with a 22:30 target."""
    return get_template("bedtime")


@pytest.fixture
def wake_template() -> TaskTemplate:
    """Time-after wake task with a 06:30 target."""
    return get_template("wake_time")


@pytest.fixture
def screen_time_template() -> TaskTemplate:
    """Tiered screen time task, auto-import only."""
    return get_template("screen_time")


@pytest.fixture
def deep_work_template() -> TaskTemplate:
    """Diminishing-returns deep work task."""
    return get_template("deep_work")
