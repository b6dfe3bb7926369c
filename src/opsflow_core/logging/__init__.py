"""Opsflow logging - hierarchical colored logging for workflow runs."""

from .colors import CYAN, GREEN, LIGHT_BLUE, MAGENTA, ORANGE, RED, RESET, YELLOW
from .logger import ActionLogger, LogConfig, OpsflowLogger, RunLogger, StepLogger

__all__ = [
    # Logger classes
    "OpsflowLogger",
    "RunLogger",
    "StepLogger",
    "ActionLogger",
    "LogConfig",
    # Colors
    "RESET",
    "GREEN",
    "RED",
    "YELLOW",
    "ORANGE",
    "LIGHT_BLUE",
    "CYAN",
    "MAGENTA",
]
