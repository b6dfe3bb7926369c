"""YAML / dict workflow parsing."""

from typing import Any

import yaml

from opsflow_core.errors import create_error
from opsflow_core.types import ActionType, EntityType, StepType, TriggerType

from .types import StepDefinition, WorkflowDefinition


def parse_workflow_yaml(yaml_content: str) -> WorkflowDefinition:
    """Parse YAML content into WorkflowDefinition.

    Args:
        yaml_content: YAML content to parse

    Returns:
        Parsed workflow definition

    Raises:
        OpsflowError(INPUT_INVALID) if YAML is invalid
    """
    try:
        data = yaml.safe_load(yaml_content)
    except yaml.YAMLError as e:
        raise create_error("INPUT_INVALID", detail=f"Invalid YAML: {e}") from e

    return parse_workflow_dict(data)


def parse_workflow_dict(data: Any) -> WorkflowDefinition:
    """Parse a plain mapping (e.g. a stored workflow row) into WorkflowDefinition.

    Step configs are kept as raw dicts; their contents are checked by
    WorkflowValidator, not here.

    Args:
        data: Workflow mapping

    Returns:
        Parsed workflow definition

    Raises:
        OpsflowError(INPUT_INVALID) if the structure is invalid
    """
    if not isinstance(data, dict):
        raise create_error("INPUT_INVALID", detail="Workflow must be a dictionary")

    name = data.get("name")
    if not name:
        raise create_error("INPUT_INVALID", detail="Workflow name is required")

    try:
        trigger_type = TriggerType(data.get("trigger_type", "manual"))
        entity_type = EntityType(data["entity_type"]) if data.get("entity_type") else None
    except ValueError as e:
        raise create_error("INPUT_INVALID", detail=str(e)) from e

    raw_steps = data.get("steps") or []
    if not isinstance(raw_steps, list):
        raise create_error("INPUT_INVALID", detail="steps must be a list")

    steps = [_parse_step(index, step_data) for index, step_data in enumerate(raw_steps)]

    return WorkflowDefinition(
        name=name,
        trigger_type=trigger_type,
        entity_type=entity_type,
        description=data.get("description"),
        trigger_config=data.get("trigger_config") or {},
        steps=steps,
    )


def _parse_step(index: int, step_data: Any) -> StepDefinition:
    if not isinstance(step_data, dict):
        raise create_error("INPUT_INVALID", detail=f"steps[{index}] must be a dictionary")

    # Steps without an explicit id are addressed by position
    step_id = str(step_data.get("id", index))

    try:
        step_type = StepType(step_data.get("step_type", "action"))
        action_type = (
            ActionType(step_data["action_type"]) if step_data.get("action_type") else None
        )
    except ValueError as e:
        raise create_error("INPUT_INVALID", detail=f"steps[{index}]: {e}") from e

    config = step_data.get("config") or {}
    if not isinstance(config, dict):
        raise create_error("INPUT_INVALID", detail=f"steps[{index}].config must be a dictionary")

    else_goto = step_data.get("else_goto_step")

    return StepDefinition(
        id=step_id,
        step_type=step_type,
        action_type=action_type,
        config=config,
        else_goto_step=str(else_goto) if else_goto is not None else None,
    )
