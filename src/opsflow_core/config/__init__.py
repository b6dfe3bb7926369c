"""Opsflow configuration - config loading and management."""

from .loader import (
    ConfigLoader,
    build_log_config,
    deep_merge,
    get_config_loader,
    load_config,
    resolve_env_vars,
)
from .models import (
    AIConfig,
    LoggingComponentsConfig,
    LoggingConfig,
    LoggingOptionsConfig,
    OpsflowConfig,
    TemplateConfig,
)

__all__ = [
    # Config models
    "OpsflowConfig",
    "TemplateConfig",
    "AIConfig",
    "LoggingConfig",
    "LoggingComponentsConfig",
    "LoggingOptionsConfig",
    # Loader
    "ConfigLoader",
    "get_config_loader",
    "load_config",
    "build_log_config",
    # Utilities
    "resolve_env_vars",
    "deep_merge",
]
