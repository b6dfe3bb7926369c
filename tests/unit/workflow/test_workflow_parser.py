"""Unit tests for workflow parsing."""

import pytest

from opsflow_core.errors import OpsflowError
from opsflow_core.types import ActionType, EntityType, StepType, TriggerType
from opsflow_core.workflow import parse_workflow_dict, parse_workflow_yaml

WORKFLOW_YAML = """
name: Qualify new leads
description: Categorize and summarize incoming contacts
trigger_type: event
entity_type: contact
trigger_config:
  event_type: contact.created
steps:
  - id: categorize
    action_type: ai_categorize
    config:
      field_to_analyze: contact.notes
      categories: [Hot, Warm, Cold]
      output_field: temperature
  - id: is_hot
    step_type: condition
    config:
      field: steps.categorize.output.temperature
      operator: equals
      value: Hot
    else_goto_step: 3
  - step_type: delay
    config:
      delay_type: days
      delay_value: 1
  - id: 3
    action_type: ai_summarize
    config:
      field_to_summarize: contact.notes
      output_field: summary
"""


class TestParseWorkflowYaml:
    """Tests for parse_workflow_yaml()."""

    def test_full_workflow(self):
        workflow = parse_workflow_yaml(WORKFLOW_YAML)

        assert workflow.name == "Qualify new leads"
        assert workflow.trigger_type == TriggerType.EVENT
        assert workflow.entity_type == EntityType.CONTACT
        assert workflow.trigger_config == {"event_type": "contact.created"}
        assert [s.id for s in workflow.steps] == ["categorize", "is_hot", "2", "3"]

    def test_step_types(self):
        workflow = parse_workflow_yaml(WORKFLOW_YAML)

        categorize = workflow.get_step("categorize")
        assert categorize is not None
        assert categorize.step_type == StepType.ACTION
        assert categorize.action_type == ActionType.AI_CATEGORIZE
        assert categorize.config["categories"] == ["Hot", "Warm", "Cold"]

        condition = workflow.get_step("is_hot")
        assert condition is not None
        assert condition.step_type == StepType.CONDITION
        assert condition.action_type is None
        assert condition.else_goto_step == "3"

    def test_get_step_missing(self):
        assert parse_workflow_yaml(WORKFLOW_YAML).get_step("nope") is None

    def test_invalid_yaml(self):
        with pytest.raises(OpsflowError) as exc_info:
            parse_workflow_yaml("name: [unclosed")
        assert exc_info.value.code == "INPUT_INVALID"
        assert "Invalid YAML" in (exc_info.value.detail or "")


class TestParseWorkflowDict:
    """Tests for parse_workflow_dict()."""

    def test_minimal(self):
        workflow = parse_workflow_dict({"name": "Empty"})

        assert workflow.trigger_type == TriggerType.MANUAL
        assert workflow.entity_type is None
        assert workflow.steps == []

    @pytest.mark.parametrize(
        "data",
        [
            None,
            [],
            {"description": "no name"},
            {"name": "x", "trigger_type": "carrier_pigeon"},
            {"name": "x", "entity_type": "spaceship"},
            {"name": "x", "steps": {"a": 1}},
            {"name": "x", "steps": ["not a dict"]},
            {"name": "x", "steps": [{"step_type": "teleport"}]},
            {"name": "x", "steps": [{"action_type": "launch_rocket"}]},
            {"name": "x", "steps": [{"action_type": "ai_generate", "config": "oops"}]},
        ],
    )
    def test_invalid_structures(self, data):
        with pytest.raises(OpsflowError) as exc_info:
            parse_workflow_dict(data)
        assert exc_info.value.code == "INPUT_INVALID"
