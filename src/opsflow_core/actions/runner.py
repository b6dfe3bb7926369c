"""Step runner - resolve a step's config, run its action, merge the output."""

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from opsflow_core.config import OpsflowConfig
from opsflow_core.errors import ErrorFactory, get_error_factory
from opsflow_core.template import TemplateEngine, WorkflowContext, merge_step_output
from opsflow_core.types import ActionType

from .registry import ActionRegistry, create_default_registry
from .types import ActionResult, TextGenerator

if TYPE_CHECKING:
    from opsflow_core.logging import OpsflowLogger, RunLogger


@dataclass
class StepRunResult:
    """Result of running one action step."""

    result: ActionResult
    context: WorkflowContext  # New context with steps.<id>.output merged in
    duration_ms: int = 0


class StepRunner:
    """Run single action steps against a workflow context.

    The caller's context is never modified; each call returns the next
    context. Faults come back as OpsflowError carrying the step id and the
    original exception message.
    """

    def __init__(
        self,
        registry: ActionRegistry,
        template_engine: TemplateEngine | None = None,
        error_factory: ErrorFactory | None = None,
    ):
        """Initialize step runner.

        Args:
            registry: Action registry used for dispatch
            template_engine: Engine that resolves config templates
            error_factory: Factory converting faults to OpsflowError
        """
        self._registry = registry
        self._template_engine = template_engine or TemplateEngine()
        self._error_factory = error_factory or get_error_factory()

    @classmethod
    def from_config(
        cls,
        config: OpsflowConfig,
        generator: TextGenerator | None = None,
        logger: "OpsflowLogger | None" = None,
    ) -> "StepRunner":
        """Build a runner with the built-in actions from loaded configuration.

        Args:
            config: Loaded configuration (template depth, AI limits)
            generator: Text generation capability for the AI actions
            logger: Optional logger for template warnings

        Returns:
            StepRunner
        """
        return cls(
            create_default_registry(generator, config.ai),
            template_engine=TemplateEngine(max_depth=config.template.max_depth, logger=logger),
        )

    async def run_step(
        self,
        step_id: str,
        action_type: ActionType | str,
        raw_config: dict[str, Any],
        context: WorkflowContext,
        run_logger: "RunLogger | None" = None,
    ) -> StepRunResult:
        """Run one action step.

        Args:
            step_id: Step identifier (output lands at steps.<step_id>.output)
            action_type: Action to run
            raw_config: Step config as declared, templates unresolved
            context: Current workflow context
            run_logger: Optional logger of the enclosing run

        Returns:
            StepRunResult with the action result and the merged context

        Raises:
            OpsflowError for any fault (unknown action, bad config, capability error)
        """
        action_name = action_type.value if isinstance(action_type, ActionType) else action_type
        step_logger = run_logger.step(step_id) if run_logger else None
        if step_logger:
            step_logger.started(action_name)

        start = time.perf_counter()
        try:
            resolved = self._template_engine.interpolate_object(raw_config, context)
            result = await self._registry.execute(action_type, resolved, context, step_logger)
        except Exception as e:
            error = self._error_factory.from_exception(
                e, step_id=step_id, action_type=action_name
            )
            if step_logger:
                step_logger.failed(error)
            raise error from e

        duration_ms = int((time.perf_counter() - start) * 1000)
        if step_logger:
            if result.skipped:
                step_logger.skipped(result.reason or "")
            else:
                step_logger.completed(duration_ms, output_keys=list(result.output))

        return StepRunResult(
            result=result,
            context=merge_step_output(context, step_id, result.output),
            duration_ms=duration_ms,
        )
