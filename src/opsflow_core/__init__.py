"""Opsflow Core - workflow context templating and action execution.

Resolves {{ path }} templates in step configurations against a per-run
context and runs pluggable actions whose outputs feed later steps.
"""

from opsflow_core.actions import ActionRegistry, ActionResult, StepRunner
from opsflow_core.template import TemplateEngine
from opsflow_core.workflow import TemplateVariableValidator

__version__ = "0.4.0"
__all__ = [
    "__version__",
    "ActionRegistry",
    "ActionResult",
    "StepRunner",
    "TemplateEngine",
    "TemplateVariableValidator",
]
