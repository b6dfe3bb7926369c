"""Error factory for creating OpsflowErrors from any exception type."""

from typing import Any

from .errors import OpsflowError
from .matchers import ErrorMatcherChain
from .registry import ErrorRegistry


class ErrorFactory:
    """Creates OpsflowErrors from any exception type."""

    def __init__(
        self,
        registry: ErrorRegistry | None = None,
        matcher_chain: ErrorMatcherChain | None = None,
    ):
        """Initialize error factory.

        Args:
            registry: Error registry (defaults to new ErrorRegistry())
            matcher_chain: Matcher chain (defaults to new ErrorMatcherChain())
        """
        self.registry = registry or ErrorRegistry()
        self.matcher_chain = matcher_chain or ErrorMatcherChain()

    def from_exception(
        self,
        error: Exception,
        step_id: str | None = None,
        action_type: str | None = None,
        run_id: str | None = None,
    ) -> OpsflowError:
        """Convert any exception to OpsflowError.

        Args:
            error: Exception to convert
            step_id: Optional step identifier
            action_type: Optional action type
            run_id: Optional run identifier

        Returns:
            OpsflowError instance
        """
        if isinstance(error, OpsflowError):
            return error.with_context(step_id=step_id, action_type=action_type, run_id=run_id)

        match_result = self.matcher_chain.match(error)

        context = match_result.context.copy()
        if step_id:
            context["step_id"] = step_id
        if action_type:
            context["action_type"] = action_type
        if run_id:
            context["run_id"] = run_id

        opsflow_error = self.registry.create(code=match_result.code, context=context)

        if match_result.retryable is not None:
            opsflow_error.retryable = match_result.retryable

        return opsflow_error

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> OpsflowError:
        """Create OpsflowError directly from code.

        Args:
            code: Error code
            context: Context variables for template interpolation
            **kwargs: Additional context variables

        Returns:
            OpsflowError instance
        """
        merged_context = dict(context or {})
        merged_context.update(kwargs)

        return self.registry.create(code=code, context=merged_context)


# Convenience singleton
_default_factory: ErrorFactory | None = None


def get_error_factory() -> ErrorFactory:
    """Get default error factory singleton."""
    global _default_factory  # noqa: PLW0603
    if _default_factory is None:
        _default_factory = ErrorFactory()
    return _default_factory


def create_error(code: str, **context: Any) -> OpsflowError:
    """Convenience function to create error.

    Args:
        code: Error code
        **context: Context variables for template interpolation

    Returns:
        OpsflowError instance
    """
    return get_error_factory().create(code, context)
