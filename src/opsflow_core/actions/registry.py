"""Action registry - dispatch from action type to executor."""

import logging
import time
from typing import TYPE_CHECKING, Any

from opsflow_core.config import AIConfig
from opsflow_core.errors import create_error
from opsflow_core.types import ActionType

from .ai import AICategorizeAction, AIGenerateAction, AISummarizeAction
from .types import ActionExecutor, ActionResult, TextGenerator

if TYPE_CHECKING:
    from opsflow_core.logging import StepLogger

logger = logging.getLogger(__name__)

ACTION_DESCRIPTIONS: dict[ActionType, str] = {
    ActionType.SEND_EMAIL: "Send Email",
    ActionType.SEND_NOTIFICATION: "Send In-App Notification",
    ActionType.SEND_PUSH: "Send Push Notification",
    ActionType.CREATE_TASK: "Create Task",
    ActionType.UPDATE_TASK: "Update Task",
    ActionType.CREATE_CONTACT: "Create Contact",
    ActionType.UPDATE_CONTACT: "Update Contact",
    ActionType.ADD_TAG: "Add Tag",
    ActionType.REMOVE_TAG: "Remove Tag",
    ActionType.UPDATE_OPPORTUNITY: "Update Opportunity",
    ActionType.CREATE_PROJECT: "Create Project",
    ActionType.AI_GENERATE: "AI Generate Content",
    ActionType.AI_CATEGORIZE: "AI Categorize",
    ActionType.AI_SUMMARIZE: "AI Summarize",
    ActionType.WEBHOOK_CALL: "Call Webhook",
    ActionType.CREATE_ACTIVITY: "Create Activity Log",
    ActionType.SEND_SLACK: "Send Slack Message",
}

# Actions that call out to services outside the database
EXTERNAL_ACTIONS: frozenset[ActionType] = frozenset(
    {
        ActionType.SEND_EMAIL,
        ActionType.WEBHOOK_CALL,
        ActionType.AI_GENERATE,
        ActionType.AI_CATEGORIZE,
        ActionType.AI_SUMMARIZE,
        ActionType.SEND_SLACK,
    }
)


def _coerce(action_type: ActionType | str) -> ActionType | None:
    try:
        return ActionType(action_type)
    except ValueError:
        return None


def get_action_description(action_type: ActionType | str) -> str:
    """Human-readable action name; unknown types are returned as given."""
    action = _coerce(action_type)
    if action is None:
        return str(action_type)
    return ACTION_DESCRIPTIONS.get(action, action.value)


def is_external_action(action_type: ActionType | str) -> bool:
    """Check whether an action reaches an external service."""
    return _coerce(action_type) in EXTERNAL_ACTIONS


class ActionRegistry:
    """Registry of action executors.

    Executors are registered per ActionType. ``execute`` is the single
    dispatch point used by StepRunner.
    """

    def __init__(self) -> None:
        self._executors: dict[ActionType, ActionExecutor] = {}

    def register(self, executor: ActionExecutor) -> None:
        """Register an executor, replacing any previous one for its type."""
        self._executors[executor.action_type] = executor

    def unregister(self, action_type: ActionType | str) -> None:
        action = _coerce(action_type)
        if action is not None:
            self._executors.pop(action, None)

    def get(self, action_type: ActionType | str) -> ActionExecutor | None:
        action = _coerce(action_type)
        if action is None:
            return None
        return self._executors.get(action)

    def get_or_raise(self, action_type: ActionType | str) -> ActionExecutor:
        """Get executor for an action type.

        Raises:
            OpsflowError(ACTION_NOT_FOUND) if nothing is registered
        """
        executor = self.get(action_type)
        if executor is None:
            value = action_type.value if isinstance(action_type, ActionType) else action_type
            raise create_error("ACTION_NOT_FOUND", action_type=value)
        return executor

    def has(self, action_type: ActionType | str) -> bool:
        return self.get(action_type) is not None

    def list_action_types(self) -> list[ActionType]:
        return list(self._executors)

    async def execute(
        self,
        action_type: ActionType | str,
        config: dict[str, Any],
        context: dict[str, Any],
        step_logger: "StepLogger | None" = None,
    ) -> ActionResult:
        """Run the executor registered for an action type.

        Args:
            action_type: Action to run
            config: Resolved action configuration
            context: Workflow context (not modified)
            step_logger: Optional logger of the step running the action

        Returns:
            ActionResult from the executor

        Raises:
            OpsflowError(ACTION_NOT_FOUND) if the type is not registered;
            any fault raised by the executor, unchanged
        """
        executor = self.get_or_raise(action_type)
        name = executor.action_type.value
        action_logger = step_logger.action(name) if step_logger else None

        start = time.perf_counter()
        try:
            result = await executor.run(config, context, action_logger)
        except Exception as e:
            duration_ms = int((time.perf_counter() - start) * 1000)
            if action_logger:
                action_logger.error(str(e), duration_ms)
            else:
                logger.debug("Action %s failed after %dms: %s", name, duration_ms, e)
            raise

        duration_ms = int((time.perf_counter() - start) * 1000)
        if action_logger:
            action_logger.result(result.output, duration_ms)
        else:
            logger.debug("Action %s finished in %dms", name, duration_ms)
        return result


def create_default_registry(
    generator: TextGenerator | None = None,
    config: AIConfig | None = None,
) -> ActionRegistry:
    """Create a registry with the built-in AI actions.

    Args:
        generator: Text generation capability shared by the AI actions
        config: AI limits and defaults

    Returns:
        ActionRegistry
    """
    registry = ActionRegistry()
    for action_class in (AIGenerateAction, AICategorizeAction, AISummarizeAction):
        registry.register(action_class(generator, config))
    return registry
