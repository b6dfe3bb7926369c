"""Test mocks for opsflow-core.

Provides mock implementations for testing:
- FakeTextGenerator: Scripted TextGenerator for the AI actions
"""

from .fake_generator import FakeTextGenerator

__all__ = ["FakeTextGenerator"]
