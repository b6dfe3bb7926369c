"""AI actions: generate, categorize and summarize text."""

import json
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from opsflow_core.config import AIConfig
from opsflow_core.errors import create_error
from opsflow_core.template.paths import get_nested_value
from opsflow_core.types import ActionType
from opsflow_core.workflow.types import (
    RESERVED_OUTPUT_KEYS,
    AICategorizeConfig,
    AIGenerateConfig,
    AISummarizeConfig,
    parse_action_config,
)

from .types import ActionExecutor, ActionResult, TextGenerator

if TYPE_CHECKING:
    from opsflow_core.logging import ActionLogger

logger = logging.getLogger(__name__)

ANALYZED_TEXT_PREVIEW_CHARS = 100


def _now() -> str:
    return datetime.now(UTC).isoformat()


def _preview(text: str, limit: int) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")


def _text_at(context: dict[str, Any], path: str) -> str | None:
    """Read the text an action works on; non-strings are rendered as JSON."""
    value = get_nested_value(context, path)
    if not value:
        return None
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)


class AIAction(ActionExecutor):
    """Shared plumbing for actions backed by a TextGenerator."""

    def __init__(self, generator: TextGenerator | None = None, config: AIConfig | None = None):
        """Initialize AI action.

        Args:
            generator: Text generation capability (None if AI is not set up)
            config: AI limits and defaults (defaults to AIConfig())
        """
        self._generator = generator
        self._config = config or AIConfig()

    def _require_generator(self) -> TextGenerator:
        if self._generator is None:
            raise create_error("AI_NOT_CONFIGURED", action_type=self.action_type.value)
        return self._generator

    def _warn(
        self,
        action_logger: "ActionLogger | None",
        message: str,
        details: dict[str, Any],
    ) -> None:
        if action_logger:
            action_logger.warning(message, details)
        else:
            logger.warning("%s: %s %s", self.action_type.value, message, details)

    @staticmethod
    def _skip_without_input(
        config: dict[str, Any], context: dict[str, Any], field_key: str
    ) -> ActionResult | None:
        """Skip result when the text to work on is absent, else None.

        Runs before the config is parsed so that a missing input skips even
        when the rest of the config would not pass the typed checks.
        """
        field_path = config.get(field_key) if isinstance(config, dict) else None
        if not isinstance(field_path, str) or not field_path.strip():
            return None
        if _text_at(context, field_path) is not None:
            return None

        output_field = config.get("output_field")
        if not isinstance(output_field, str) or output_field in RESERVED_OUTPUT_KEYS:
            output_field = None
        return ActionResult.skip(f"No text found at {field_path}", output_field=output_field)

    @staticmethod
    def _expect_text(response: Any, action_type: ActionType) -> str:
        if not isinstance(response, str):
            raise create_error(
                "AI_RESPONSE_INVALID",
                action_type=action_type.value,
                detail=f"Expected text, got {type(response).__name__}",
            )
        return response


class AIGenerateAction(AIAction):
    """Generate content from a prompt template.

    The prompt arrives already rendered. In structured mode the generator's
    JSON answer is stored as a JSON string: its ``result`` member when
    present, otherwise the whole answer.
    """

    action_type = ActionType.AI_GENERATE

    async def run(
        self,
        config: dict[str, Any],
        context: dict[str, Any],
        logger: "ActionLogger | None" = None,
    ) -> ActionResult:
        typed: AIGenerateConfig = parse_action_config(self.action_type, config)  # type: ignore[assignment]
        generator = self._require_generator()
        prompt = typed.prompt_template

        if logger:
            logger.invoking(
                {
                    "output_field": typed.output_field,
                    "prompt_length": len(prompt),
                    "structured": typed.structured,
                }
            )

        if typed.structured:
            response = await generator.generate_structured(prompt)
            payload = response
            if isinstance(response, dict) and "result" in response:
                payload = response["result"]
            try:
                generated = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
            except (TypeError, ValueError) as e:
                raise create_error(
                    "AI_RESPONSE_INVALID",
                    action_type=self.action_type.value,
                    detail=f"Structured response is not JSON: {e}",
                ) from e
        else:
            generated = self._expect_text(await generator.generate(prompt), self.action_type)

        return ActionResult.ok(
            **{
                typed.output_field: generated,
                "prompt_used": _preview(prompt, self._config.prompt_preview_chars),
                "generated_at": _now(),
            }
        )


class AICategorizeAction(AIAction):
    """Pick one of a fixed set of categories for the text at a context path."""

    action_type = ActionType.AI_CATEGORIZE

    def build_prompt(self, text: str, categories: list[str]) -> str:
        return (
            "Analyze the following text and categorize it into one of these categories: "
            f"{', '.join(categories)}.\n\n"
            f'Text: "{text[: self._config.categorize_text_limit]}"\n\n'
            "Respond with ONLY the category name, nothing else. "
            "The category must be exactly one of the options listed above."
        )

    async def run(
        self,
        config: dict[str, Any],
        context: dict[str, Any],
        logger: "ActionLogger | None" = None,
    ) -> ActionResult:
        skipped = self._skip_without_input(config, context, "field_to_analyze")
        if skipped:
            return skipped

        typed: AICategorizeConfig = parse_action_config(self.action_type, config)  # type: ignore[assignment]
        text = _text_at(context, typed.field_to_analyze) or ""

        generator = self._require_generator()
        if logger:
            logger.invoking(
                {
                    "field": typed.field_to_analyze,
                    "categories": typed.categories,
                    "text_length": len(text),
                }
            )

        response = self._expect_text(
            await generator.generate(self.build_prompt(text, typed.categories)), self.action_type
        )
        answer = response.strip()

        category = next((c for c in typed.categories if c.lower() == answer.lower()), None)
        if category is None:
            self._warn(
                logger,
                "AI returned a category outside the configured list",
                {"returned": answer, "valid": typed.categories},
            )
            category = answer

        return ActionResult.ok(
            **{
                typed.output_field: category,
                "analyzed_text": _preview(text, ANALYZED_TEXT_PREVIEW_CHARS),
                "categorized_at": _now(),
            }
        )


class AISummarizeAction(AIAction):
    """Summarize the text at a context path."""

    action_type = ActionType.AI_SUMMARIZE

    def build_prompt(self, text: str, max_length: int) -> str:
        return (
            f"Summarize the following text in {max_length} characters or less. "
            "Be concise and capture the key points.\n\n"
            f'Text: "{text[: self._config.summarize_text_limit]}"\n\n'
            "Summary:"
        )

    async def run(
        self,
        config: dict[str, Any],
        context: dict[str, Any],
        logger: "ActionLogger | None" = None,
    ) -> ActionResult:
        skipped = self._skip_without_input(config, context, "field_to_summarize")
        if skipped:
            return skipped

        typed: AISummarizeConfig = parse_action_config(self.action_type, config)  # type: ignore[assignment]
        text = _text_at(context, typed.field_to_summarize) or ""

        generator = self._require_generator()
        max_length = typed.max_length or self._config.default_summary_length
        if logger:
            logger.invoking(
                {
                    "field": typed.field_to_summarize,
                    "text_length": len(text),
                    "max_length": max_length,
                }
            )

        response = self._expect_text(
            await generator.generate(self.build_prompt(text, max_length)), self.action_type
        )
        summary = response.strip()

        return ActionResult.ok(
            **{
                typed.output_field: summary,
                "original_length": len(text),
                "summary_length": len(summary),
                "summarized_at": _now(),
            }
        )
