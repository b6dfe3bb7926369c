"""Save-time workflow validation."""

from typing import Any

from opsflow_core.template.paths import normalize_path
from opsflow_core.types import ConditionOperator, StepType, ValidationIssue, ValidationResult

from .fields import build_context_fields_list
from .types import StepDefinition, WorkflowDefinition, check_action_config
from .variables import TemplateVariableValidator

DELAY_TYPES = ("minutes", "hours", "days")
MAX_LOOP_ITERATIONS = 1000


class WorkflowValidator:
    """Validate workflow definitions before they are saved."""

    def __init__(self, variable_validator: TemplateVariableValidator | None = None):
        """Initialize validator.

        Args:
            variable_validator: Template variable checker (defaults to a new one)
        """
        self._variables = variable_validator or TemplateVariableValidator()

    def validate(self, workflow: WorkflowDefinition) -> ValidationResult:
        """Validate workflow definition.

        Checks:
        - Name present
        - Unique step IDs
        - Action steps declare an action_type
        - Per-kind config shape (AI actions, condition, delay, loop)
        - else_goto_step targets exist
        - Template variables resolve against the entity's field catalog
        - steps.<id> references point at earlier steps (warning)

        Args:
            workflow: Workflow to validate

        Returns:
            ValidationResult with errors and warnings
        """
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        if not workflow.name:
            errors.append(ValidationIssue(path="name", message="Workflow name is required"))

        step_ids = [step.id for step in workflow.steps]
        duplicates = sorted({sid for sid in step_ids if step_ids.count(sid) > 1})
        if duplicates:
            errors.append(
                ValidationIssue(
                    path="steps",
                    message=f"Duplicate step IDs: {', '.join(duplicates)}",
                )
            )

        available_fields = build_context_fields_list(workflow.entity_type)
        earlier_steps: list[str] = []

        for step in workflow.steps:
            path = f"steps.{step.id}"

            for message in self._check_step_config(step):
                errors.append(ValidationIssue(path=f"{path}.config", message=message))

            if step.else_goto_step is not None and step.else_goto_step not in step_ids:
                errors.append(
                    ValidationIssue(
                        path=f"{path}.else_goto_step",
                        message=f"Step '{step.else_goto_step}' not found",
                    )
                )

            check = self._variables.validate(step.config, available_fields)
            for missing in check.missing_fields:
                errors.append(
                    ValidationIssue(
                        path=f"{path}.config",
                        message=f"Template variable '{missing}' is not available",
                    )
                )

            for reference in self._variables_in(step.config):
                referenced = self._referenced_step(reference)
                if referenced is not None and referenced not in earlier_steps:
                    warnings.append(
                        ValidationIssue(
                            path=f"{path}.config",
                            message=(
                                f"Template variable '{reference}' refers to step "
                                f"'{referenced}', which does not run before this step"
                            ),
                            severity="warning",
                        )
                    )

            earlier_steps.append(step.id)

        return ValidationResult(valid=not errors, errors=errors, warnings=warnings)

    def _check_step_config(self, step: StepDefinition) -> list[str]:
        config = step.config

        if step.step_type == StepType.ACTION:
            if step.action_type is None:
                return ["Action steps must have an action_type"]
            return check_action_config(step.action_type, config)

        if step.step_type == StepType.CONDITION:
            return self._check_condition(config)
        if step.step_type == StepType.DELAY:
            return self._check_delay(config)
        if step.step_type == StepType.LOOP:
            return self._check_loop(config)
        return []

    def _check_condition(self, config: dict[str, Any]) -> list[str]:
        problems: list[str] = []
        if not isinstance(config.get("field"), str) or not config["field"]:
            problems.append("field: is required")
        operators = [op.value for op in ConditionOperator]
        if config.get("operator") not in operators:
            problems.append(f"operator: must be one of {', '.join(operators)}")
        return problems

    def _check_delay(self, config: dict[str, Any]) -> list[str]:
        problems: list[str] = []
        if config.get("delay_type") not in DELAY_TYPES:
            problems.append(f"delay_type: must be one of {', '.join(DELAY_TYPES)}")
        value = config.get("delay_value")
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            problems.append("delay_value: must be at least 1")
        return problems

    def _check_loop(self, config: dict[str, Any]) -> list[str]:
        problems: list[str] = []
        for key in ("collection_field", "item_variable"):
            if not isinstance(config.get(key), str) or not config[key]:
                problems.append(f"{key}: is required")
        max_iterations = config.get("max_iterations")
        if max_iterations is not None and (
            not isinstance(max_iterations, int)
            or isinstance(max_iterations, bool)
            or not 1 <= max_iterations <= MAX_LOOP_ITERATIONS
        ):
            problems.append(f"max_iterations: must be between 1 and {MAX_LOOP_ITERATIONS}")
        return problems

    def _variables_in(self, value: Any) -> list[str]:
        found: list[str] = []
        if isinstance(value, str):
            found.extend(self._variables.extract_variables(value))
        elif isinstance(value, dict):
            for item in value.values():
                found.extend(self._variables_in(item))
        elif isinstance(value, (list, tuple)):
            for item in value:
                found.extend(self._variables_in(item))
        return found

    @staticmethod
    def _referenced_step(reference: str) -> str | None:
        segments = normalize_path(reference)
        if len(segments) >= 2 and segments[0] == "steps":
            return segments[1]
        return None
