"""Workflow data model types."""

from dataclasses import dataclass, field
from typing import Any, ClassVar

from opsflow_core.errors import create_error
from opsflow_core.types import ActionType, ConditionOperator, EntityType, StepType, TriggerType


# Keys every action output carries; output_field may not shadow them
RESERVED_OUTPUT_KEYS: frozenset[str] = frozenset({"success", "skipped", "reason"})


def _require_text(data: dict[str, Any], key: str, problems: list[str]) -> None:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        problems.append(f"{key}: is required")


def _check_output_field(
    data: dict[str, Any], metadata: frozenset[str], problems: list[str]
) -> None:
    _require_text(data, "output_field", problems)
    value = data.get("output_field")
    if isinstance(value, str) and value in RESERVED_OUTPUT_KEYS | metadata:
        problems.append(f"output_field: '{value}' is reserved")


@dataclass
class AIGenerateConfig:
    """Generate free text (or JSON) from a prompt template."""

    action_type: ClassVar[ActionType] = ActionType.AI_GENERATE
    output_metadata: ClassVar[frozenset[str]] = frozenset({"prompt_used", "generated_at"})

    prompt_template: str
    output_field: str
    structured: bool = False

    @classmethod
    def check(cls, data: dict[str, Any]) -> list[str]:
        problems: list[str] = []
        _require_text(data, "prompt_template", problems)
        _check_output_field(data, cls.output_metadata, problems)
        if "structured" in data and not isinstance(data["structured"], bool):
            problems.append("structured: must be a boolean")
        return problems

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AIGenerateConfig":
        return cls(
            prompt_template=data["prompt_template"],
            output_field=data["output_field"],
            structured=data.get("structured", False),
        )


@dataclass
class AICategorizeConfig:
    """Classify the text at a context path into one of several categories."""

    action_type: ClassVar[ActionType] = ActionType.AI_CATEGORIZE
    output_metadata: ClassVar[frozenset[str]] = frozenset({"analyzed_text", "categorized_at"})

    field_to_analyze: str  # e.g. "contact.notes"
    categories: list[str]
    output_field: str

    @classmethod
    def check(cls, data: dict[str, Any]) -> list[str]:
        problems: list[str] = []
        _require_text(data, "field_to_analyze", problems)
        categories = data.get("categories")
        if not isinstance(categories, list) or not all(isinstance(c, str) for c in categories):
            problems.append("categories: must be a list of strings")
        elif len(categories) < 2:
            problems.append("categories: at least 2 categories are required")
        _check_output_field(data, cls.output_metadata, problems)
        return problems

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AICategorizeConfig":
        return cls(
            field_to_analyze=data["field_to_analyze"],
            categories=list(data["categories"]),
            output_field=data["output_field"],
        )


@dataclass
class AISummarizeConfig:
    """Summarize the text at a context path."""

    action_type: ClassVar[ActionType] = ActionType.AI_SUMMARIZE
    output_metadata: ClassVar[frozenset[str]] = frozenset(
        {"original_length", "summary_length", "summarized_at"}
    )

    field_to_summarize: str
    output_field: str
    max_length: int | None = None  # Characters; executor default applies when unset

    @classmethod
    def check(cls, data: dict[str, Any]) -> list[str]:
        problems: list[str] = []
        _require_text(data, "field_to_summarize", problems)
        _check_output_field(data, cls.output_metadata, problems)
        max_length = data.get("max_length")
        if max_length is not None and (
            not isinstance(max_length, int) or isinstance(max_length, bool) or max_length < 1
        ):
            problems.append("max_length: must be a positive integer")
        return problems

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AISummarizeConfig":
        return cls(
            field_to_summarize=data["field_to_summarize"],
            output_field=data["output_field"],
            max_length=data.get("max_length"),
        )


ActionConfig = AIGenerateConfig | AICategorizeConfig | AISummarizeConfig

ACTION_CONFIG_TYPES: dict[ActionType, type[ActionConfig]] = {
    ActionType.AI_GENERATE: AIGenerateConfig,
    ActionType.AI_CATEGORIZE: AICategorizeConfig,
    ActionType.AI_SUMMARIZE: AISummarizeConfig,
}


def check_action_config(action_type: ActionType | str, data: Any) -> list[str]:
    """List problems with an action config without raising.

    Action types without a typed config accept any mapping.

    Args:
        action_type: Action the config belongs to
        data: Raw config

    Returns:
        Problem messages (empty if valid)
    """
    if not isinstance(data, dict):
        return ["config: must be a dictionary"]

    config_type = ACTION_CONFIG_TYPES.get(ActionType(action_type))
    if config_type is None:
        return []
    return config_type.check(data)


def parse_action_config(action_type: ActionType | str, data: Any) -> ActionConfig:
    """Build the typed config for an action.

    Args:
        action_type: Action with a typed config (the AI actions)
        data: Resolved config

    Returns:
        Typed config variant

    Raises:
        OpsflowError(STEP_CONFIG_INVALID): If the config is malformed or the
            action has no typed config
    """
    action = ActionType(action_type)
    config_type = ACTION_CONFIG_TYPES.get(action)
    if config_type is None:
        raise create_error(
            "STEP_CONFIG_INVALID",
            action_type=action.value,
            detail=f"No typed configuration for action '{action.value}'",
        )

    problems = check_action_config(action, data)
    if problems:
        raise create_error(
            "STEP_CONFIG_INVALID",
            action_type=action.value,
            detail="; ".join(problems),
        )
    return config_type.from_dict(data)


@dataclass
class ConditionConfig:
    """Condition step configuration."""

    field: str  # Context path, e.g. "contact.lead_status"
    operator: ConditionOperator
    value: Any = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConditionConfig":
        return cls(
            field=data["field"],
            operator=ConditionOperator(data["operator"]),
            value=data.get("value"),
        )


@dataclass
class StepDefinition:
    """Workflow step definition."""

    id: str
    step_type: StepType = StepType.ACTION
    action_type: ActionType | None = None
    config: dict[str, Any] = field(default_factory=dict)
    else_goto_step: str | None = None  # Condition steps: where to go when false


@dataclass
class WorkflowDefinition:
    """Complete workflow definition."""

    name: str
    trigger_type: TriggerType = TriggerType.MANUAL
    entity_type: EntityType | None = None
    description: str | None = None
    trigger_config: dict[str, Any] = field(default_factory=dict)
    steps: list[StepDefinition] = field(default_factory=list)

    def get_step(self, step_id: str) -> StepDefinition | None:
        """Get step by ID."""
        for step in self.steps:
            if step.id == step_id:
                return step
        return None
