"""Workflow definitions, parsing and save-time validation."""

from .conditions import describe_condition, evaluate_condition, evaluate_conditions
from .fields import ENTITY_FIELDS, STANDARD_CONTEXT_FIELDS, build_context_fields_list
from .parser import parse_workflow_dict, parse_workflow_yaml
from .types import (
    ACTION_CONFIG_TYPES,
    RESERVED_OUTPUT_KEYS,
    ActionConfig,
    AICategorizeConfig,
    AIGenerateConfig,
    AISummarizeConfig,
    ConditionConfig,
    StepDefinition,
    WorkflowDefinition,
    check_action_config,
    parse_action_config,
)
from .validator import WorkflowValidator
from .variables import TemplateVariableValidator, VariableCheckResult, is_field_available

__all__ = [
    # Types
    "ActionConfig",
    "AIGenerateConfig",
    "AICategorizeConfig",
    "AISummarizeConfig",
    "ACTION_CONFIG_TYPES",
    "RESERVED_OUTPUT_KEYS",
    "ConditionConfig",
    "StepDefinition",
    "WorkflowDefinition",
    "check_action_config",
    "parse_action_config",
    # Fields
    "STANDARD_CONTEXT_FIELDS",
    "ENTITY_FIELDS",
    "build_context_fields_list",
    # Variables
    "TemplateVariableValidator",
    "VariableCheckResult",
    "is_field_available",
    # Parser
    "parse_workflow_yaml",
    "parse_workflow_dict",
    # Validator
    "WorkflowValidator",
    # Conditions
    "evaluate_condition",
    "evaluate_conditions",
    "describe_condition",
]
