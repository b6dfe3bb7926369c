"""Unit tests for TemplateVariableValidator."""

from opsflow_core.types import EntityType
from opsflow_core.workflow import (
    TemplateVariableValidator,
    build_context_fields_list,
    is_field_available,
)


class TestIsFieldAvailable:
    def test_exact_match(self):
        assert is_field_available("contact.email", ["contact.email"])

    def test_descendant_of_listed_field(self):
        assert is_field_available("contact.company.name", ["contact"])

    def test_prefix_without_dot_is_not_descendant(self):
        assert not is_field_available("contacts.email", ["contact"])

    def test_ancestor_is_not_available(self):
        assert not is_field_available("contact", ["contact.email"])


class TestTemplateVariableValidator:
    """Tests for TemplateVariableValidator.validate()."""

    def test_flags_unknown_field(self):
        validator = TemplateVariableValidator()
        result = validator.validate(
            {"body": "{{contact.nonexistent_field}}"},
            ["contact.email", "contact.first_name"],
        )

        assert result.valid is False
        assert result.missing_fields == ["contact.nonexistent_field"]

    def test_accepts_known_field(self):
        validator = TemplateVariableValidator()
        result = validator.validate(
            {"to": "{{contact.email}}"}, ["contact.email", "contact.first_name"]
        )

        assert result.valid is True
        assert result.missing_fields == []

    def test_walks_nested_structures_and_dedupes(self):
        validator = TemplateVariableValidator()
        config = {
            "subject": "{{user.name}}",
            "meta": {"tags": ["{{user.name}}", "{{deal.size}}"], "count": 3},
        }

        result = validator.validate(config, ["contact"])

        assert result.missing_fields == ["user.name", "deal.size"]

    def test_plain_string_config(self):
        validator = TemplateVariableValidator()
        result = validator.validate("Hi {{contact.first_name}} {{x}}", ["contact"])
        assert result.missing_fields == ["x"]

    def test_primitives_have_no_variables(self):
        validator = TemplateVariableValidator()
        assert validator.validate(42, []).valid is True
        assert validator.validate(None, []).valid is True

    def test_extract_variables(self):
        validator = TemplateVariableValidator()
        assert validator.extract_variables("{{a}} and {{ b.c }} and {{a}}") == ["a", "b.c"]
        assert validator.extract_variables(None) == []


class TestBuildContextFieldsList:
    """Tests for build_context_fields_list()."""

    def test_standard_fields_only(self):
        fields = build_context_fields_list()
        assert "steps" in fields
        assert "trigger.entity_id" in fields
        assert "contact.email" not in fields

    def test_entity_fields_added(self):
        fields = build_context_fields_list(EntityType.TASK)
        assert "task.due_date" in fields
        assert "contact.email" not in fields

    def test_string_entity_type(self):
        assert "contact.lead_status" in build_context_fields_list("contact")

    def test_unknown_entity_type_ignored(self):
        assert build_context_fields_list("spaceship") == build_context_fields_list()

    def test_returns_fresh_list(self):
        fields = build_context_fields_list()
        fields.append("extra")
        assert "extra" not in build_context_fields_list()
