"""Opsflow logger - hierarchical colored logging for workflow runs."""

import json
import sys
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, TextIO

from opsflow_core.logging.colors import (
    CYAN,
    GREEN,
    LIGHT_BLUE,
    MAGENTA,
    ORANGE,
    RED,
    RESET,
    YELLOW,
)
from opsflow_core.types import LogFormat, LogLevel


@dataclass
class LogConfig:
    """Logger configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.COLORED
    show_params: bool = True
    truncate_at: int = 200
    components: dict[str, bool] = field(default_factory=dict)
    output: TextIO = field(default=sys.stdout)

    def __post_init__(self) -> None:
        """Initialize default components if not provided."""
        if not self.components:
            self.components = {
                "run": True,
                "step": True,
                "action": True,
                "template": True,
            }


class OpsflowLogger:
    """Main logger facade. Creates component-specific loggers."""

    def __init__(self, config: LogConfig | None = None):
        """Initialize logger with configuration.

        Args:
            config: Logger configuration (defaults to LogConfig())
        """
        self.config = config or LogConfig()
        self._level_order = {
            LogLevel.DEBUG: 0,
            LogLevel.INFO: 1,
            LogLevel.WARN: 2,
            LogLevel.ERROR: 3,
        }

    def run(self, workflow_id: str, run_id: str) -> "RunLogger":
        """Get a logger scoped to one workflow run.

        Args:
            workflow_id: Workflow identifier
            run_id: Run identifier

        Returns:
            RunLogger instance
        """
        return RunLogger(self, workflow_id, run_id)

    def configure(self, config: LogConfig) -> None:
        """Replace configuration."""
        self.config = config

    def _should_log(self, level: LogLevel) -> bool:
        return self._level_order.get(level, 0) >= self._level_order.get(self.config.level, 1)

    def _log(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Internal logging method.

        Args:
            level: Log level
            component: Component name (run, step, action, template)
            message: Log message
            context: Additional context data
        """
        if not self._should_log(level):
            return

        if not self.config.components.get(component, True):
            return

        if self.config.format == LogFormat.JSON:
            self._log_json(level, component, message, context)
        else:
            self._log_colored(level, component, message, context)

    def _log_json(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": level.value,
            "component": component,
            "message": message,
        }
        if context:
            log_entry.update(context)

        print(json.dumps(log_entry, default=str), file=self.config.output)

    def _log_colored(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        level_colors = {
            LogLevel.DEBUG: LIGHT_BLUE,
            LogLevel.INFO: CYAN,
            LogLevel.WARN: YELLOW,
            LogLevel.ERROR: RED,
        }

        color = level_colors.get(level, RESET)
        component_color = {
            "run": MAGENTA,
            "step": CYAN,
            "action": ORANGE,
            "template": GREEN,
        }.get(component, RESET)

        # Format: [COMPONENT] message
        output = f"{component_color}[{component.upper()}]{RESET} {color}{message}{RESET}"

        if context and self.config.show_params:
            context_str = str(context)
            if len(context_str) > self.config.truncate_at:
                context_str = context_str[: self.config.truncate_at] + "..."
            output += f" {LIGHT_BLUE}{context_str}{RESET}"

        print(output, file=self.config.output)


class RunLogger:
    """Logger for run-level events."""

    def __init__(self, parent: OpsflowLogger, workflow_id: str, run_id: str):
        self.parent = parent
        self.workflow_id = workflow_id
        self.run_id = run_id

    def _context(self, event: str, **extra: Any) -> dict[str, Any]:
        return {"workflow_id": self.workflow_id, "run_id": self.run_id, "event": event, **extra}

    def started(self, step_count: int) -> None:
        """Log run start.

        Args:
            step_count: Number of steps the caller intends to run
        """
        self.parent._log(
            LogLevel.INFO,
            "run",
            f"Workflow '{self.workflow_id}' started ({step_count} steps)",
            self._context("run_started", step_count=step_count),
        )

    def completed(self, duration_ms: int, step_count: int) -> None:
        """Log run completion with summary."""
        duration_s = duration_ms / 1000
        self.parent._log(
            LogLevel.INFO,
            "run",
            f"Workflow '{self.workflow_id}' completed ({step_count} steps, {duration_s:.2f}s) ✓",
            self._context("run_completed", duration_ms=duration_ms, step_count=step_count),
        )

    def failed(self, error: Exception, duration_ms: int) -> None:
        """Log run failure."""
        duration_s = duration_ms / 1000
        self.parent._log(
            LogLevel.ERROR,
            "run",
            f"Workflow '{self.workflow_id}' failed ({duration_s:.2f}s): {error}",
            self._context(
                "run_failed",
                duration_ms=duration_ms,
                error=str(error),
                error_type=type(error).__name__,
            ),
        )

    def step(self, step_id: str) -> "StepLogger":
        """Get a logger scoped to a step."""
        return StepLogger(self, step_id)


class StepLogger:
    """Logger for step-level events."""

    def __init__(self, parent: RunLogger, step_id: str):
        self.parent = parent
        self.step_id = step_id

    def _context(self, event: str, **extra: Any) -> dict[str, Any]:
        return {
            "workflow_id": self.parent.workflow_id,
            "run_id": self.parent.run_id,
            "step_id": self.step_id,
            "event": event,
            **extra,
        }

    def started(self, action_type: str) -> None:
        """Log step start.

        Args:
            action_type: Action the step runs
        """
        self.parent.parent._log(
            LogLevel.INFO,
            "step",
            f"Step '{self.step_id}' started (action: {action_type})",
            self._context("step_started", action_type=action_type),
        )

    def completed(self, duration_ms: int, output_keys: list[str] | None = None) -> None:
        """Log step completion.

        Args:
            duration_ms: Execution duration in milliseconds
            output_keys: Keys the step merged into context
        """
        context = self._context("step_completed", duration_ms=duration_ms)
        if output_keys:
            context["output_keys"] = output_keys

        duration_s = duration_ms / 1000
        self.parent.parent._log(
            LogLevel.INFO,
            "step",
            f"Step '{self.step_id}' completed ({duration_s:.2f}s) ✓",
            context,
        )

    def skipped(self, reason: str) -> None:
        """Log step skip."""
        self.parent.parent._log(
            LogLevel.INFO,
            "step",
            f"Step '{self.step_id}' skipped: {reason}",
            self._context("step_skipped", reason=reason),
        )

    def failed(self, error: Exception) -> None:
        """Log step failure."""
        self.parent.parent._log(
            LogLevel.ERROR,
            "step",
            f"Step '{self.step_id}' failed: {error}",
            self._context("step_failed", error=str(error), error_type=type(error).__name__),
        )

    def action(self, action_type: str) -> "ActionLogger":
        """Get a logger for the action within this step."""
        return ActionLogger(self, action_type)


class ActionLogger:
    """Logger for action executor events."""

    def __init__(self, parent: StepLogger, action_type: str):
        self.parent = parent
        self.action_type = action_type

    @property
    def _root(self) -> OpsflowLogger:
        return self.parent.parent.parent

    def _context(self, event: str, **extra: Any) -> dict[str, Any]:
        return self.parent._context(event, action_type=self.action_type, **extra)

    def invoking(self, details: dict[str, Any] | None = None) -> None:
        """Log capability invocation.

        Args:
            details: Optional non-sensitive invocation details (lengths, fields)
        """
        self._root._log(
            LogLevel.INFO,
            "action",
            f"Invoking '{self.action_type}'",
            self._context("action_invoking", **(details or {})),
        )

    def warning(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Log a non-fatal action problem (e.g. an unexpected AI answer)."""
        self._root._log(
            LogLevel.WARN,
            "action",
            f"Action '{self.action_type}': {message}",
            self._context("action_warning", **(details or {})),
        )

    def result(self, output: dict[str, Any], duration_ms: int) -> None:
        """Log action output."""
        context = self._context("action_result", duration_ms=duration_ms)
        preview = str(output)
        if len(preview) > self._root.config.truncate_at:
            preview = preview[: self._root.config.truncate_at] + "..."
        context["output"] = preview

        duration_s = duration_ms / 1000
        self._root._log(
            LogLevel.INFO,
            "action",
            f"Action '{self.action_type}' completed ({duration_s:.2f}s) ✓",
            context,
        )

    def error(self, error: str, duration_ms: int) -> None:
        """Log action fault."""
        duration_s = duration_ms / 1000
        self._root._log(
            LogLevel.ERROR,
            "action",
            f"Action '{self.action_type}' failed ({duration_s:.2f}s): {error}",
            self._context("action_error", duration_ms=duration_ms, error=error),
        )
