"""Template engine implementation."""

import json
import logging
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from opsflow_core.errors import create_error
from opsflow_core.types import LogLevel

from .parser import TEMPLATE_PATTERN, extract_all_references, has_templates
from .paths import get_nested_value
from .types import RenderResult

if TYPE_CHECKING:
    from opsflow_core.logging import OpsflowLogger

logger = logging.getLogger(__name__)

# Re-expansion passes allowed after the first one
MAX_TEMPLATE_DEPTH = 10


def stringify(value: Any) -> str:
    """Convert a resolved value to its substitution text.

    None → "", dicts/lists → compact JSON, bools → "true"/"false",
    everything else → str().
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
    return str(value)


class TemplateEngine:
    """Resolve {{ path }} tokens in workflow step configuration.

    Supports:
    - Variable access: {{ contact.first_name }}
    - Array access: {{ items[0].email }}
    - Step outputs: {{ steps.draft.output.summary }}

    Does NOT support filters, expressions or control flow. Missing values
    render as an empty string; substituted values that contain tokens
    themselves are expanded again, up to ``max_depth`` extra passes.
    """

    def __init__(
        self,
        max_depth: int = MAX_TEMPLATE_DEPTH,
        logger: "OpsflowLogger | None" = None,
    ) -> None:
        """Initialize template engine.

        Args:
            max_depth: Maximum recursive re-expansion passes
            logger: Optional logger (falls back to the module logger)
        """
        self._max_depth = max_depth
        self._logger = logger

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def interpolate(self, template: str, context: Any, depth: int = 0) -> str:
        """Interpolate {{ }} tokens in a string.

        Args:
            template: String with template tokens
            context: Context to resolve paths against
            depth: Current recursion depth

        Returns:
            Interpolated string

        Raises:
            OpsflowError(TEMPLATE_INVALID): If template is not a string
        """
        if not isinstance(template, str):
            raise create_error("TEMPLATE_INVALID", value_type=type(template).__name__)

        if depth > self._max_depth:
            self._warn(
                "Max template depth exceeded, returning as-is",
                {"max_depth": self._max_depth},
            )
            return template

        def replace(match: re.Match[str]) -> str:
            return stringify(get_nested_value(context, match.group(1).strip()))

        result = TEMPLATE_PATTERN.sub(replace, template)

        # A substituted value introduced new tokens
        if has_templates(result) and result != template:
            return self.interpolate(result, context, depth + 1)

        return result

    def interpolate_object(self, value: Any, context: Any) -> Any:
        """Interpolate every string inside a value.

        Strings are interpolated, lists and dicts are copied with their
        items interpolated, anything else is returned unchanged. The input
        is never mutated.

        Args:
            value: str, dict, list, or primitive
            context: Context to resolve paths against

        Returns:
            Fully resolved copy
        """
        if isinstance(value, str):
            return self.interpolate(value, context)
        if isinstance(value, (list, tuple)):
            return [self.interpolate_object(item, context) for item in value]
        if isinstance(value, Mapping):
            return {key: self.interpolate_object(item, context) for key, item in value.items()}
        return value

    def render(self, value: Any, context: Any) -> RenderResult:
        """Interpolate a value and report which paths it referenced.

        Args:
            value: str, dict, list, or primitive
            context: Context to resolve paths against

        Returns:
            RenderResult with the resolved copy
        """
        references = extract_all_references(value)
        return RenderResult(
            value=self.interpolate_object(value, context),
            had_templates=bool(references),
            templates_rendered=references,
        )

    def extract_references(self, value: Any) -> list[str]:
        """Extract all variable references from a value.

        E.g., "Hi {{ contact.first_name }}" → ["contact.first_name"]
        """
        return extract_all_references(value)

    def _warn(self, message: str, context: dict[str, Any]) -> None:
        if self._logger:
            self._logger._log(LogLevel.WARN, "template", message, context)
        else:
            logger.warning("%s %s", message, context)
