"""Error matchers for converting exceptions to OpsflowErrors."""

import asyncio

from .errors import ErrorMatcher, MatchResult


class TimeoutErrorMatcher(ErrorMatcher):
    """Matches timeouts raised around an action's capability call."""

    def matches(self, error: Exception) -> bool:
        return isinstance(error, (asyncio.TimeoutError, TimeoutError))

    def extract(self, error: Exception) -> MatchResult:
        return MatchResult(
            code="ACTION_TIMEOUT",
            context={"detail": str(error) or "timed out"},
            retryable=True,
        )


class GenericErrorMatcher(ErrorMatcher):
    """Fallback matcher for any exception.

    Keeps the original message verbatim so it can be surfaced to whoever
    triggered the workflow.
    """

    def matches(self, error: Exception) -> bool:
        return True

    def extract(self, error: Exception) -> MatchResult:
        message = str(error) or type(error).__name__
        return MatchResult(
            code="ACTION_FAILED",
            context={"message": message, "error_type": type(error).__name__},
            retryable=False,
        )


class ErrorMatcherChain:
    """Ordered chain of matchers. First match wins."""

    def __init__(self) -> None:
        """Initialize matcher chain with built-in matchers."""
        self.matchers: list[ErrorMatcher] = []
        self._load_builtin_matchers()

    def match(self, error: Exception) -> MatchResult:
        """Find first matching matcher and extract result.

        Args:
            error: Exception to match

        Returns:
            MatchResult from first matching matcher
        """
        for matcher in self.matchers:
            if matcher.matches(error):
                return matcher.extract(error)

        # Unreachable while GenericErrorMatcher is last
        return MatchResult(code="INTERNAL_ERROR", context={"detail": str(error)})

    def _load_builtin_matchers(self) -> None:
        """Load built-in matchers in priority order."""
        self.matchers = [
            TimeoutErrorMatcher(),
            GenericErrorMatcher(),  # Fallback - must be last
        ]
