"""Shared types for Opsflow.

Import from here rather than submodules:
    from opsflow_core.types import ActionType, LogLevel, ValidationResult
"""

from .enums import (
    ActionType,
    ConditionOperator,
    EntityType,
    LogFormat,
    LogLevel,
    StepType,
    TriggerType,
)
from .validation import ValidationIssue, ValidationResult

__all__ = [
    # Enums
    "LogLevel",
    "LogFormat",
    "EntityType",
    "TriggerType",
    "StepType",
    "ActionType",
    "ConditionOperator",
    # Validation
    "ValidationIssue",
    "ValidationResult",
]
