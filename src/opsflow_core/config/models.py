"""Opsflow configuration models."""

from dataclasses import dataclass, field

from opsflow_core.types import LogFormat, LogLevel


@dataclass
class TemplateConfig:
    """Template rendering configuration."""

    max_depth: int = 10  # Recursive re-expansion passes before giving up


@dataclass
class AIConfig:
    """AI action configuration.

    The API key is only checked for presence here; the text generator
    client that uses it lives outside this package.
    """

    api_key: str | None = None
    model: str = "gemini-2.0-flash"
    prompt_preview_chars: int = 200
    categorize_text_limit: int = 2000
    summarize_text_limit: int = 5000
    default_summary_length: int = 500


@dataclass
class LoggingComponentsConfig:
    """Logging components configuration."""

    run: bool = True
    step: bool = True
    action: bool = True
    template: bool = True


@dataclass
class LoggingOptionsConfig:
    """Logging options configuration."""

    show_params: bool = True
    truncate_at: int = 200


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.COLORED
    components: LoggingComponentsConfig = field(default_factory=LoggingComponentsConfig)
    options: LoggingOptionsConfig = field(default_factory=LoggingOptionsConfig)


@dataclass
class OpsflowConfig:
    """Root configuration."""

    template: TemplateConfig = field(default_factory=TemplateConfig)
    ai: AIConfig = field(default_factory=AIConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
