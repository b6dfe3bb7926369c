"""Unit tests for ActionRegistry."""

import json
from typing import Any

import pytest

from opsflow_core.actions import (
    ActionExecutor,
    ActionRegistry,
    ActionResult,
    create_default_registry,
    get_action_description,
    is_external_action,
)
from opsflow_core.errors import OpsflowError
from opsflow_core.types import ActionType


class RecordingAction(ActionExecutor):
    """Executor that echoes its resolved config."""

    action_type = ActionType.SEND_NOTIFICATION

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def run(self, config, context, logger=None) -> ActionResult:
        self.calls.append(config)
        if self.error is not None:
            raise self.error
        return ActionResult.ok(notification_id="n-1", message=config.get("message"))


class TestActionRegistry:
    """Tests for registration and lookup."""

    def test_default_registry(self, generator):
        registry = create_default_registry(generator)

        assert set(registry.list_action_types()) == {
            ActionType.AI_GENERATE,
            ActionType.AI_CATEGORIZE,
            ActionType.AI_SUMMARIZE,
        }
        assert registry.has("ai_summarize")
        assert not registry.has(ActionType.SEND_EMAIL)

    def test_register_and_unregister(self):
        registry = ActionRegistry()
        registry.register(RecordingAction())

        assert registry.get("send_notification") is not None
        registry.unregister(ActionType.SEND_NOTIFICATION)
        assert registry.get("send_notification") is None

    def test_unknown_string(self):
        assert ActionRegistry().get("launch_rocket") is None

    @pytest.mark.parametrize("action_type", [ActionType.SEND_EMAIL, "launch_rocket"])
    def test_get_or_raise(self, action_type):
        with pytest.raises(OpsflowError) as exc_info:
            ActionRegistry().get_or_raise(action_type)

        assert exc_info.value.code == "ACTION_NOT_FOUND"
        assert exc_info.value.action_type in ("send_email", "launch_rocket")


class TestActionRegistryExecute:
    """Tests for ActionRegistry.execute()."""

    @pytest.mark.asyncio
    async def test_dispatches(self):
        action = RecordingAction()
        registry = ActionRegistry()
        registry.register(action)

        result = await registry.execute("send_notification", {"message": "hi"}, {})

        assert result.output == {"success": True, "notification_id": "n-1", "message": "hi"}
        assert action.calls == [{"message": "hi"}]

    @pytest.mark.asyncio
    async def test_unknown_action(self):
        with pytest.raises(OpsflowError) as exc_info:
            await ActionRegistry().execute(ActionType.SEND_SLACK, {}, {})
        assert exc_info.value.code == "ACTION_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_logs_result(self, json_logger, log_output):
        registry = ActionRegistry()
        registry.register(RecordingAction())
        step_logger = json_logger.run("wf", "r").step("notify")

        await registry.execute("send_notification", {"message": "hi"}, {}, step_logger)

        entries = [json.loads(line) for line in log_output.getvalue().splitlines()]
        assert entries[-1]["event"] == "action_result"
        assert entries[-1]["step_id"] == "notify"
        assert "duration_ms" in entries[-1]

    @pytest.mark.asyncio
    async def test_fault_logged_and_reraised(self, json_logger, log_output):
        registry = ActionRegistry()
        registry.register(RecordingAction(error=ValueError("bad recipient")))
        step_logger = json_logger.run("wf", "r").step("notify")

        with pytest.raises(ValueError, match="bad recipient"):
            await registry.execute("send_notification", {}, {}, step_logger)

        entries = [json.loads(line) for line in log_output.getvalue().splitlines()]
        assert entries[-1]["event"] == "action_error"
        assert entries[-1]["error"] == "bad recipient"


class TestActionMetadata:
    def test_descriptions(self):
        assert get_action_description(ActionType.AI_GENERATE) == "AI Generate Content"
        assert get_action_description("send_slack") == "Send Slack Message"
        assert get_action_description("launch_rocket") == "launch_rocket"

    def test_every_action_has_description(self):
        for action_type in ActionType:
            assert get_action_description(action_type) != action_type.value

    def test_external_actions(self):
        assert is_external_action("ai_summarize") is True
        assert is_external_action(ActionType.WEBHOOK_CALL) is True
        assert is_external_action(ActionType.ADD_TAG) is False
        assert is_external_action("launch_rocket") is False
