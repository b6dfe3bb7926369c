"""Static checking of template variables against available fields."""

from dataclasses import dataclass, field
from typing import Any

from opsflow_core.template.parser import extract_variables


@dataclass
class VariableCheckResult:
    """Outcome of checking a config's template variables."""

    valid: bool
    missing_fields: list[str] = field(default_factory=list)


def is_field_available(path: str, available_fields: list[str]) -> bool:
    """Check a path against the available fields.

    A path is available if it equals a field or is a descendant of one
    (``contact.email`` is available when ``contact`` is listed).

    Args:
        path: Template path
        available_fields: Field paths known to exist

    Returns:
        True if the path is covered
    """
    return any(path == f or path.startswith(f"{f}.") for f in available_fields)


class TemplateVariableValidator:
    """Check template references in a step config without a live context.

    Run whenever a step's configuration is created or edited; it reports
    problems as data and never raises.
    """

    def extract_variables(self, text: Any) -> list[str]:
        """Extract unique {{ }} paths from a string.

        Args:
            text: String to scan; other values yield []

        Returns:
            Unique paths in order of first appearance
        """
        return extract_variables(text)

    def validate(self, config: Any, available_fields: list[str]) -> VariableCheckResult:
        """Check every template path in a config.

        Args:
            config: str, dict, list, or primitive
            available_fields: Field paths known to exist at this step

        Returns:
            VariableCheckResult with deduplicated missing paths
        """
        missing_fields: list[str] = []

        def check_value(value: Any) -> None:
            if isinstance(value, str):
                for variable in self.extract_variables(value):
                    if not is_field_available(variable, available_fields) and (
                        variable not in missing_fields
                    ):
                        missing_fields.append(variable)
            elif isinstance(value, dict):
                for item in value.values():
                    check_value(item)
            elif isinstance(value, (list, tuple)):
                for item in value:
                    check_value(item)

        check_value(config)

        return VariableCheckResult(valid=not missing_fields, missing_fields=missing_fields)
