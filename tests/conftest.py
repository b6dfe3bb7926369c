"""
Pytest configuration and shared fixtures for Opsflow tests.
"""

import io
import sys
from pathlib import Path
from typing import Any

import pytest

# Add src (and the project root, for tests.mocks) to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent))

from opsflow_core.logging import LogConfig, OpsflowLogger  # noqa: E402
from opsflow_core.types import LogFormat, LogLevel  # noqa: E402
from tests.mocks import FakeTextGenerator  # noqa: E402

# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def tests_dir() -> Path:
    """Return the tests directory."""
    return Path(__file__).parent


# =============================================================================
# Context Fixtures
# =============================================================================


@pytest.fixture
def contact_context() -> dict[str, Any]:
    """A run context triggered for a contact."""
    return {
        "trigger": {
            "type": "event",
            "event_type": "contact.created",
            "entity_type": "contact",
            "entity_id": "c-1",
            "data": {},
        },
        "contact": {
            "id": "c-1",
            "first_name": "Ana",
            "last_name": "Lee",
            "email": "ana@example.com",
            "notes": "Asked for a quote on the enterprise plan.",
        },
        "task": {"status": "open"},
        "steps": {},
        "organization_id": "org-1",
    }


# =============================================================================
# Logging Fixtures
# =============================================================================


@pytest.fixture
def log_output() -> io.StringIO:
    """Buffer that captures OpsflowLogger output."""
    return io.StringIO()


@pytest.fixture
def json_logger(log_output: io.StringIO) -> OpsflowLogger:
    """OpsflowLogger writing JSON lines to ``log_output``."""
    return OpsflowLogger(
        LogConfig(level=LogLevel.DEBUG, format=LogFormat.JSON, output=log_output)
    )


# =============================================================================
# AI Fixtures
# =============================================================================


@pytest.fixture
def generator() -> FakeTextGenerator:
    """Fake text generator returning a fixed answer."""
    return FakeTextGenerator(text="generated text")


# =============================================================================
# Markers Configuration
# =============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "property: Property-based tests")
    config.addinivalue_line("markers", "template: Template engine tests")
    config.addinivalue_line("markers", "workflow: Workflow definition tests")
    config.addinivalue_line("markers", "actions: Action executor tests")
