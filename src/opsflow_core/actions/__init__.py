"""Action executors, dispatch and step running."""

from .ai import AIAction, AICategorizeAction, AIGenerateAction, AISummarizeAction
from .registry import (
    ACTION_DESCRIPTIONS,
    EXTERNAL_ACTIONS,
    ActionRegistry,
    create_default_registry,
    get_action_description,
    is_external_action,
)
from .runner import StepRunner, StepRunResult
from .types import ActionExecutor, ActionResult, TextGenerator

__all__ = [
    # Types
    "ActionResult",
    "ActionExecutor",
    "TextGenerator",
    # AI actions
    "AIAction",
    "AIGenerateAction",
    "AICategorizeAction",
    "AISummarizeAction",
    # Registry
    "ActionRegistry",
    "create_default_registry",
    "get_action_description",
    "is_external_action",
    "ACTION_DESCRIPTIONS",
    "EXTERNAL_ACTIONS",
    # Runner
    "StepRunner",
    "StepRunResult",
]
