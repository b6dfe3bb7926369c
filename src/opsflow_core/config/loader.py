"""Opsflow configuration loader."""

import os
import re
import typing
from dataclasses import asdict, fields
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from opsflow_core.errors import create_error
from opsflow_core.logging import LogConfig
from opsflow_core.types import ValidationIssue, ValidationResult

from .models import LoggingConfig, OpsflowConfig

# ${VAR}, ${VAR:-default}, ${VAR:?error}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::([?-])([^}]*))?\}")

VALID_TOP_LEVEL_KEYS = {"template", "ai", "logging"}


def resolve_env_vars(value: str) -> str:
    """Resolve environment variable references in string.

    Supports:
    - ${VAR} - Required, error if not set
    - ${VAR:-default} - With default value
    - ${VAR:?error message} - Required with custom error

    Args:
        value: String with potential env var references

    Returns:
        String with env vars resolved

    Raises:
        OpsflowError(CONFIG_INVALID): If a required var is not set
    """

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        operator = match.group(2)
        operand = match.group(3)

        env_value = os.environ.get(var_name)
        if env_value is not None:
            return env_value

        if operator == "-":
            return operand or ""
        if operator == "?":
            error_msg = operand or f"Required environment variable {var_name} not set"
            raise create_error("CONFIG_INVALID", detail=error_msg)
        raise create_error(
            "CONFIG_INVALID",
            detail=f"Required environment variable {var_name} not set",
        )

    return ENV_VAR_PATTERN.sub(replacer, value)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def _resolve_env_vars_recursive(data: Any) -> Any:
    if isinstance(data, dict):
        return {k: _resolve_env_vars_recursive(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_vars_recursive(item) for item in data]
    elif isinstance(data, str):
        return resolve_env_vars(data)
    else:
        return data


class ConfigLoader:
    """Load and validate Opsflow configuration."""

    def __init__(self) -> None:
        self._config: OpsflowConfig | None = None
        self._config_path: Path | None = None

    def load(self, path: str | Path | None = None, use_defaults: bool = True) -> OpsflowConfig:
        """Load configuration from file.

        Resolution order if path not specified:
        1. OPSFLOW_CONFIG_PATH environment variable
        2. ./opsflow-config.yaml
        3. ~/.opsflow/config.yaml
        4. If use_defaults=True and no file found, default configuration

        Args:
            path: Optional path to config file
            use_defaults: Fall back to defaults when no file is found

        Returns:
            Loaded OpsflowConfig instance

        Raises:
            OpsflowError(CONFIG_INVALID): If the file is missing (and
                use_defaults=False) or invalid
        """
        if path is None:
            path = self._resolve_config_path()

        config_path = Path(path)

        if not config_path.exists():
            if use_defaults:
                return self.load_defaults()
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Configuration file not found: {config_path}",
            )

        try:
            with config_path.open() as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Invalid YAML in config file: {e}",
            ) from e

        if not isinstance(data, dict):
            raise create_error("CONFIG_INVALID", detail="Configuration root must be a mapping")

        data = _resolve_env_vars_recursive(data)

        return self.load_from_dict(data, config_path)

    def load_defaults(self) -> OpsflowConfig:
        """Load default configuration without a file."""
        return self.load_from_dict({})

    def load_from_dict(self, data: dict[str, Any], config_path: Path | None = None) -> OpsflowConfig:
        """Load configuration from dictionary.

        Args:
            data: Configuration dictionary
            config_path: Optional path to config file (for tracking)

        Returns:
            Loaded OpsflowConfig instance

        Raises:
            OpsflowError(CONFIG_INVALID): If configuration is invalid
        """
        validation = self.validate(data)
        if not validation.valid:
            error_messages = [f"- {issue.message}" for issue in validation.errors]
            raise create_error(
                "CONFIG_INVALID",
                detail="Configuration validation failed:\n" + "\n".join(error_messages),
            )

        try:
            config = self._convert_field(OpsflowConfig, data)
        except (TypeError, ValueError) as e:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Failed to parse configuration: {e}",
            ) from e

        self._config = config
        self._config_path = config_path
        return config

    def validate(self, data: dict[str, Any]) -> ValidationResult:
        """Validate config data without loading.

        Args:
            data: Configuration dictionary

        Returns:
            ValidationResult with errors and warnings
        """
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        for key in data:
            if key not in VALID_TOP_LEVEL_KEYS:
                warnings.append(
                    ValidationIssue(
                        path=key,
                        message=f"Unknown configuration key: {key}",
                        severity="warning",
                    )
                )

        for section in VALID_TOP_LEVEL_KEYS:
            if section in data and not isinstance(data[section], dict):
                errors.append(
                    ValidationIssue(path=section, message=f"{section} must be a dictionary")
                )

        template = data.get("template")
        if isinstance(template, dict) and "max_depth" in template:
            max_depth = template["max_depth"]
            if not isinstance(max_depth, int) or isinstance(max_depth, bool) or max_depth < 0:
                errors.append(
                    ValidationIssue(
                        path="template.max_depth",
                        message="max_depth must be a non-negative integer",
                    )
                )

        ai = data.get("ai")
        if isinstance(ai, dict):
            for limit_key in [
                "prompt_preview_chars",
                "categorize_text_limit",
                "summarize_text_limit",
                "default_summary_length",
            ]:
                if limit_key in ai:
                    value = ai[limit_key]
                    if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                        errors.append(
                            ValidationIssue(
                                path=f"ai.{limit_key}",
                                message=f"{limit_key} must be a positive integer",
                            )
                        )

        return ValidationResult(valid=True, errors=errors, warnings=warnings)

    def get(self) -> OpsflowConfig:
        """Get current configuration.

        Raises:
            OpsflowError(CONFIG_INVALID): If configuration not loaded
        """
        if self._config is None:
            raise create_error("CONFIG_INVALID", detail="Configuration not loaded")
        return self._config

    def to_dict(self) -> dict[str, Any]:
        """Current configuration as plain data (enums as values)."""

        def plain(value: Any) -> Any:
            if isinstance(value, Enum):
                return value.value
            if isinstance(value, dict):
                return {k: plain(v) for k, v in value.items()}
            return value

        return plain(asdict(self.get()))

    def _resolve_config_path(self) -> Path:
        env_path = os.environ.get("OPSFLOW_CONFIG_PATH")
        if env_path:
            return Path(env_path)

        local_path = Path("opsflow-config.yaml")
        if local_path.exists():
            return local_path

        home_path = Path.home() / ".opsflow" / "config.yaml"
        if home_path.exists():
            return home_path

        return local_path

    def _convert_field(self, field_type: Any, value: Any) -> Any:
        """Convert a raw value to the declared field type.

        Handles nested dataclasses, enums and ``X | None`` unions; everything
        else is returned as-is.
        """
        if value is None:
            return None

        # X | None
        args = typing.get_args(field_type)
        if args and type(None) in args:
            non_none = [arg for arg in args if arg is not type(None)]
            if len(non_none) == 1:
                return self._convert_field(non_none[0], value)
            return value

        if hasattr(field_type, "__dataclass_fields__"):
            if not isinstance(value, dict):
                raise TypeError(f"expected a mapping for {field_type.__name__}")
            kwargs = {}
            for f in fields(field_type):
                if f.name in value:
                    kwargs[f.name] = self._convert_field(f.type, value[f.name])
            return field_type(**kwargs)

        if isinstance(field_type, type) and issubclass(field_type, Enum):
            return field_type(value)

        return value


def build_log_config(logging_config: LoggingConfig) -> LogConfig:
    """Translate the logging section into a LogConfig for OpsflowLogger.

    Args:
        logging_config: Loaded logging section

    Returns:
        LogConfig ready to pass to OpsflowLogger
    """
    return LogConfig(
        level=logging_config.level,
        format=logging_config.format,
        show_params=logging_config.options.show_params,
        truncate_at=logging_config.options.truncate_at,
        components=asdict(logging_config.components),
    )


# Convenience singleton
_default_loader: ConfigLoader | None = None


def get_config_loader() -> ConfigLoader:
    """Get default config loader singleton."""
    global _default_loader  # noqa: PLW0603
    if _default_loader is None:
        _default_loader = ConfigLoader()
    return _default_loader


def load_config(path: str | Path | None = None) -> OpsflowConfig:
    """Convenience function to load config.

    Args:
        path: Optional path to config file

    Returns:
        Loaded OpsflowConfig instance
    """
    return get_config_loader().load(path)
