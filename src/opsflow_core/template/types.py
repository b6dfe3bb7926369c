"""Template engine type definitions."""

from dataclasses import dataclass, field
from typing import Any

# Per-run data bag templates resolve against. Conventional top-level keys:
# trigger, contact, opportunity, task, project, company, steps, loop,
# organization_id, triggered_by_user_id, triggered_at.
WorkflowContext = dict[str, Any]


@dataclass
class RenderResult:
    """Result of rendering a configuration value."""

    value: Any  # Rendered copy
    had_templates: bool  # Whether any templates were found
    templates_rendered: list[str] = field(default_factory=list)  # Paths referenced
