"""Error registry for creating errors from templates."""

from typing import Any

from .errors import ErrorCategory, ErrorTemplate, OpsflowError


class ErrorRegistry:
    """Registry of error templates. Creates errors from templates + context."""

    def __init__(self) -> None:
        """Initialize error registry with built-in templates."""
        self._templates: dict[str, ErrorTemplate] = {}
        self._load_builtin_templates()

    def get_template(self, code: str) -> ErrorTemplate | None:
        """Get template by error code."""
        return self._templates.get(code)

    def list_codes(self) -> list[str]:
        """List all registered error codes."""
        return list(self._templates.keys())

    def register(self, template: ErrorTemplate) -> None:
        """Register (or replace) an error template.

        Args:
            template: Template to register under its code
        """
        self._templates[template.code] = template

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
        cause: OpsflowError | None = None,
    ) -> OpsflowError:
        """Create error instance from template + context.

        An explicit ``detail`` in the context wins over the template's
        detail text.

        Args:
            code: Error code
            context: Context variables for template interpolation
            cause: Optional cause error

        Returns:
            OpsflowError instance

        Raises:
            ValueError: If error code not found
        """
        template = self.get_template(code)
        if not template:
            msg = f"Unknown error code: {code}"
            raise ValueError(msg)

        context = context or {}

        message = self._interpolate(template.message_template, context)
        detail = context.get("detail") or self._interpolate(template.detail_template, context)
        suggestion = self._interpolate(template.suggestion_template, context)

        if message is None:
            message = f"Error {code}"

        return OpsflowError(
            code=template.code,
            category=template.category,
            message=message,
            detail=detail,
            suggestion=suggestion,
            retryable=template.default_retryable,
            step_id=context.get("step_id"),
            action_type=context.get("action_type"),
            run_id=context.get("run_id"),
            cause=cause,
        )

    def _interpolate(
        self,
        template: str | None,
        context: dict[str, Any],
    ) -> str | None:
        """Safe string interpolation.

        Args:
            template: Template string with {var} placeholders
            context: Context variables

        Returns:
            Interpolated string or None if template is None
        """
        if template is None:
            return None

        try:
            return template.format(**context)
        except (KeyError, IndexError):
            # Missing context variable - return template as-is
            return template

    def _load_builtin_templates(self) -> None:
        """Load hardcoded built-in templates."""
        # TEMPLATE Errors
        self._templates["TEMPLATE_INVALID"] = ErrorTemplate(
            code="TEMPLATE_INVALID",
            category=ErrorCategory.TEMPLATE,
            message_template="Template must be a string, got {value_type}",
            detail_template="A non-string value was passed where a template string was expected",
            suggestion_template="Use interpolate_object() for dicts and lists",
        )

        # ACTION Errors
        self._templates["ACTION_NOT_FOUND"] = ErrorTemplate(
            code="ACTION_NOT_FOUND",
            category=ErrorCategory.ACTION,
            message_template="Unknown action type: {action_type}",
            detail_template="No executor is registered for this action type",
            suggestion_template="Register an executor or check the step's action_type",
        )

        self._templates["ACTION_FAILED"] = ErrorTemplate(
            code="ACTION_FAILED",
            category=ErrorCategory.ACTION,
            message_template="{message}",
            detail_template="Action '{action_type}' raised {error_type} during execution",
            suggestion_template="Check the action's external service and configuration",
        )

        self._templates["ACTION_TIMEOUT"] = ErrorTemplate(
            code="ACTION_TIMEOUT",
            category=ErrorCategory.ACTION,
            message_template="Action '{action_type}' timed out",
            detail_template="The external capability did not respond in time",
            suggestion_template="Retry the step or raise the caller's timeout",
            default_retryable=True,
        )

        self._templates["AI_NOT_CONFIGURED"] = ErrorTemplate(
            code="AI_NOT_CONFIGURED",
            category=ErrorCategory.ACTION,
            message_template="AI text generator not configured",
            detail_template="Action '{action_type}' needs a text generator but none was supplied",
            suggestion_template="Set ai.api_key in the configuration or pass a generator",
        )

        self._templates["AI_RESPONSE_INVALID"] = ErrorTemplate(
            code="AI_RESPONSE_INVALID",
            category=ErrorCategory.ACTION,
            message_template="AI returned a malformed response",
            detail_template="The response from the text generator could not be used",
            suggestion_template="Check the prompt and the generator's output format",
            default_retryable=True,
        )

        # VALIDATION Errors
        self._templates["STEP_CONFIG_INVALID"] = ErrorTemplate(
            code="STEP_CONFIG_INVALID",
            category=ErrorCategory.VALIDATION,
            message_template="Invalid configuration for action '{action_type}'",
            detail_template="The step configuration is missing required fields",
            suggestion_template="Validate the workflow before running it",
        )

        self._templates["INPUT_INVALID"] = ErrorTemplate(
            code="INPUT_INVALID",
            category=ErrorCategory.VALIDATION,
            message_template="Invalid workflow definition",
            detail_template="The workflow definition could not be parsed",
            suggestion_template="Check the workflow YAML against the documented format",
        )

        # SYSTEM Errors
        self._templates["CONFIG_INVALID"] = ErrorTemplate(
            code="CONFIG_INVALID",
            category=ErrorCategory.SYSTEM,
            message_template="Invalid configuration",
            detail_template="The Opsflow configuration is invalid",
            suggestion_template="Check the configuration file and fix errors",
        )

        self._templates["INTERNAL_ERROR"] = ErrorTemplate(
            code="INTERNAL_ERROR",
            category=ErrorCategory.SYSTEM,
            message_template="Internal Opsflow error",
            detail_template="An unexpected error occurred",
            suggestion_template="Check the logs and report this issue",
        )
