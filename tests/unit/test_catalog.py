"""Unit tests for the seeded task catalog."""

import pytest

from checkin_scoring.domain.catalog import DEFAULT_TEMPLATES, get_template, list_templates
from checkin_scoring.domain.template import ScoringArchetype, TaskCategory
from checkin_scoring.services.config_resolution_service import resolve_config
from checkin_scoring.services.verification_service import CONFIRMATION_LABELS, get_verification_config


@pytest.mark.unit
class TestCatalog:
    """Tests for catalog lookups."""

    def test_get_template(self):
        """Test a seeded template is found by ID."""
        assert get_template("wake_time").archetype == ScoringArchetype.TIME_AFTER

    def test_get_missing_template(self):
        """Test unknown IDs raise KeyError."""
        with pytest.raises(KeyError, match="Task template not found: yodeling"):
            get_template("yodeling")

    def test_list_by_category(self):
        """Test filtering by category."""
        templates = list_templates(category=TaskCategory.SLEEP)

        assert [t.id for t in templates] == ["bedtime", "wake_time"]

    def test_list_is_ordered(self):
        """Test the full list is ordered by category then name."""
        templates = list_templates()

        keys = [(t.category.value, t.name) for t in templates]
        assert keys == sorted(keys)
        assert len(templates) == len(DEFAULT_TEMPLATES)

    def test_inactive_templates_hidden(self, monkeypatch):
        """Test inactive templates are not listed."""
        retired = get_template("pushups").model_copy(update={"is_active": False})
        monkeypatch.setitem(DEFAULT_TEMPLATES, "pushups", retired)

        assert "pushups" not in [t.id for t in list_templates()]

    def test_every_archetype_is_seeded(self):
        """Test the catalog exercises every scoring archetype."""
        assert {t.archetype for t in DEFAULT_TEMPLATES.values()} == set(ScoringArchetype)

    @pytest.mark.parametrize("template_id", sorted(DEFAULT_TEMPLATES))
    def test_seeded_templates_resolve(self, template_id):
        """Test every seeded template resolves to a valid config."""
        template = get_template(template_id)

        assert resolve_config(template=template).archetype == template.archetype

    @pytest.mark.parametrize("template_id", sorted(DEFAULT_TEMPLATES))
    def test_confirmation_actions_have_labels(self, template_id):
        """Test every confirmation action has a button label."""
        verification = get_verification_config(get_template(template_id).default_config)

        if verification is not None and verification.confirmation_action is not None:
            assert verification.confirmation_action in CONFIRMATION_LABELS
