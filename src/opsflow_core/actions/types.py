"""Action executor types."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from opsflow_core.types import ActionType

if TYPE_CHECKING:
    from opsflow_core.logging import ActionLogger


@dataclass
class ActionResult:
    """Output of a single action run.

    ``output`` is what gets merged into the context under
    ``steps.<id>.output``. It always carries ``success``; a skipped
    action also carries ``skipped=True`` and a ``reason``.
    """

    output: dict[str, Any] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return bool(self.output.get("success", False))

    @property
    def skipped(self) -> bool:
        return bool(self.output.get("skipped", False))

    @property
    def reason(self) -> str | None:
        return self.output.get("reason")

    @classmethod
    def ok(cls, **values: Any) -> "ActionResult":
        """Successful result with the given output values."""
        return cls(output={"success": True, **values})

    @classmethod
    def skip(cls, reason: str, output_field: str | None = None) -> "ActionResult":
        """Result for an action that had nothing to work on.

        Args:
            reason: Human-readable reason, e.g. "No text found at task.notes"
            output_field: Output key to null out, if the action declares one
        """
        output: dict[str, Any] = {"success": False, "skipped": True, "reason": reason}
        if output_field and output_field not in output:
            output[output_field] = None
        return cls(output=output)


@runtime_checkable
class TextGenerator(Protocol):
    """Text generation capability used by the AI actions."""

    async def generate(self, prompt: str) -> str:
        """Return free text for a prompt."""
        ...

    async def generate_structured(self, prompt: str) -> Any:
        """Return parsed JSON for a prompt."""
        ...


class ActionExecutor(ABC):
    """Base class for action executors.

    Executors receive an already-resolved config (templates rendered) and
    the read-only workflow context. Missing input is reported by returning
    ``ActionResult.skip``; anything else that goes wrong is raised.
    """

    action_type: ActionType

    @abstractmethod
    async def run(
        self,
        config: dict[str, Any],
        context: dict[str, Any],
        logger: "ActionLogger | None" = None,
    ) -> ActionResult:
        """Run the action.

        Args:
            config: Resolved action configuration
            context: Workflow context (not modified)
            logger: Optional scoped action logger

        Returns:
            ActionResult
        """
