"""Template engine for workflow step configuration."""

from .context import (
    ContextBuilder,
    build_initial_context,
    merge_step_output,
    set_context_value,
)
from .engine import MAX_TEMPLATE_DEPTH, TemplateEngine, stringify
from .parser import (
    TEMPLATE_PATTERN,
    extract_all_references,
    extract_templates,
    extract_variables,
    has_templates,
)
from .paths import get_nested_value, has_nested_value, normalize_path, set_nested_value
from .types import RenderResult, WorkflowContext

__all__ = [
    "TemplateEngine",
    "RenderResult",
    "WorkflowContext",
    "MAX_TEMPLATE_DEPTH",
    "stringify",
    # Paths
    "normalize_path",
    "get_nested_value",
    "has_nested_value",
    "set_nested_value",
    # Parsing
    "TEMPLATE_PATTERN",
    "extract_templates",
    "extract_variables",
    "extract_all_references",
    "has_templates",
    # Context
    "ContextBuilder",
    "build_initial_context",
    "merge_step_output",
    "set_context_value",
]
