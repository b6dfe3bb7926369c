"""Workflow context construction and merging.

Contexts are threaded through steps as values: every merge returns a new
top-level dict and leaves the previous context untouched.
"""

import copy
from datetime import UTC, datetime
from typing import Any

from .paths import set_nested_value
from .types import WorkflowContext

ENTITY_SNAPSHOT_KEYS = ("contact", "opportunity", "task", "project", "company")


def build_initial_context(
    trigger_type: str,
    trigger_data: dict[str, Any],
    organization_id: str,
    triggered_at: datetime | None = None,
) -> WorkflowContext:
    """Build the context a run starts with.

    Args:
        trigger_type: What started the run (event, schedule, manual, webhook)
        trigger_data: Raw trigger payload
        organization_id: Tenant the run belongs to
        triggered_at: Trigger time (defaults to now, UTC)

    Returns:
        New workflow context
    """
    when = triggered_at or datetime.now(UTC)
    context: WorkflowContext = {
        "trigger": {
            "type": trigger_type,
            "event_type": trigger_data.get("event_type"),
            "entity_type": trigger_data.get("entity_type"),
            "entity_id": trigger_data.get("entity_id"),
            "data": trigger_data,
        },
        "steps": {},
        "organization_id": organization_id,
        "triggered_by_user_id": trigger_data.get("user_id"),
        "triggered_at": when.isoformat(),
    }

    # Entity snapshots at trigger time
    for key in ENTITY_SNAPSHOT_KEYS:
        if trigger_data.get(key) is not None:
            context[key] = trigger_data[key]

    return context


def merge_step_output(context: WorkflowContext, step_id: str, output: Any) -> WorkflowContext:
    """Return a new context with a step's output under ``steps.<step_id>.output``.

    Args:
        context: Current context (not modified)
        step_id: Step identifier
        output: ActionResult output to expose to later steps

    Returns:
        New workflow context
    """
    steps = context.get("steps")
    return {
        **context,
        "steps": {**(steps if isinstance(steps, dict) else {}), step_id: {"output": output}},
    }


def set_context_value(context: WorkflowContext, path: str, value: Any) -> WorkflowContext:
    """Return a deep copy of the context with ``value`` set at ``path``.

    Args:
        context: Current context (not modified)
        path: Dot/bracket path
        value: Value to set

    Returns:
        New workflow context
    """
    updated = copy.deepcopy(context)
    set_nested_value(updated, path, value)
    return updated


class ContextBuilder:
    """Build a WorkflowContext incrementally during one run."""

    def __init__(self, context: WorkflowContext | None = None):
        """Initialize context builder.

        Args:
            context: Starting context (defaults to an empty one)
        """
        self._context: WorkflowContext = context if context is not None else {"steps": {}}

    @classmethod
    def from_trigger(
        cls,
        trigger_type: str,
        trigger_data: dict[str, Any],
        organization_id: str,
    ) -> "ContextBuilder":
        """Start a builder from trigger data."""
        return cls(build_initial_context(trigger_type, trigger_data, organization_id))

    def add_step_output(self, step_id: str, output: Any) -> WorkflowContext:
        """Merge a completed step's output.

        Args:
            step_id: Step identifier
            output: Step output

        Returns:
            The new current context
        """
        self._context = merge_step_output(self._context, step_id, output)
        return self._context

    def set(self, path: str, value: Any) -> WorkflowContext:
        """Set an arbitrary context value (e.g., loop.item).

        Returns:
            The new current context
        """
        self._context = set_context_value(self._context, path, value)
        return self._context

    def get_context(self) -> WorkflowContext:
        """Get current context."""
        return self._context
