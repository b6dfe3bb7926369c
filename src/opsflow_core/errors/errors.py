"""Opsflow error types."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error source categories."""

    TEMPLATE = "TEMPLATE"
    ACTION = "ACTION"
    VALIDATION = "VALIDATION"
    SYSTEM = "SYSTEM"


@dataclass
class OpsflowError(Exception):
    """Structured error with context. Base exception for all Opsflow errors."""

    # Identity
    code: str  # e.g., "AI_NOT_CONFIGURED"
    category: ErrorCategory

    # Messages
    message: str  # Human-readable summary
    detail: str | None = None  # Extended explanation
    suggestion: str | None = None  # Actionable fix

    # Context
    retryable: bool = False
    step_id: str | None = None  # Which step failed
    action_type: str | None = None  # Which action failed
    run_id: str | None = None  # Workflow run identifier

    cause: "OpsflowError | None" = None

    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Set Exception message."""
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the calling workflow layer.

        Returns:
            Dictionary representation of the error
        """
        return {
            "code": self.code,
            "category": self.category.value,
            "message": self.message,
            "detail": self.detail,
            "suggestion": self.suggestion,
            "retryable": self.retryable,
            "step_id": self.step_id,
            "action_type": self.action_type,
            "run_id": self.run_id,
            "timestamp": self.timestamp.isoformat(),
            "cause": self.cause.to_dict() if self.cause else None,
        }

    def with_context(
        self,
        step_id: str | None = None,
        action_type: str | None = None,
        run_id: str | None = None,
    ) -> "OpsflowError":
        """Return copy with additional context.

        Args:
            step_id: Optional step identifier
            action_type: Optional action type
            run_id: Optional run identifier

        Returns:
            New OpsflowError instance with updated context
        """
        return OpsflowError(
            code=self.code,
            category=self.category,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
            retryable=self.retryable,
            step_id=step_id or self.step_id,
            action_type=action_type or self.action_type,
            run_id=run_id or self.run_id,
            cause=self.cause,
            timestamp=self.timestamp,
        )


@dataclass
class ErrorTemplate:
    """Template for creating errors."""

    code: str
    category: ErrorCategory
    message_template: str  # "Unknown action type '{action_type}'"
    detail_template: str | None = None
    suggestion_template: str | None = None
    default_retryable: bool = False


@dataclass
class MatchResult:
    """Result of matching an exception."""

    code: str
    context: dict[str, Any]
    retryable: bool | None = None  # None = use template default


class ErrorMatcher(ABC):
    """Base class for exception matchers."""

    @abstractmethod
    def matches(self, error: Exception) -> bool:
        """Check if this matcher handles the error.

        Args:
            error: Exception to check

        Returns:
            True if this matcher can handle the error
        """

    @abstractmethod
    def extract(self, error: Exception) -> MatchResult:
        """Extract error info from the exception.

        Args:
            error: Exception to extract from

        Returns:
            MatchResult with error code and context
        """
