"""Unit tests for ConfigLoader."""

import pytest

from opsflow_core.config import (
    ConfigLoader,
    OpsflowConfig,
    build_log_config,
    deep_merge,
    resolve_env_vars,
)
from opsflow_core.errors import OpsflowError
from opsflow_core.types import LogFormat, LogLevel


class TestResolveEnvVars:
    """Tests for ${VAR} resolution."""

    def test_set_variable(self, monkeypatch):
        monkeypatch.setenv("OPSFLOW_TEST_KEY", "secret")
        assert resolve_env_vars("key=${OPSFLOW_TEST_KEY}") == "key=secret"

    def test_default(self, monkeypatch):
        monkeypatch.delenv("OPSFLOW_TEST_MISSING", raising=False)
        assert resolve_env_vars("${OPSFLOW_TEST_MISSING:-fallback}") == "fallback"

    def test_required_missing(self, monkeypatch):
        monkeypatch.delenv("OPSFLOW_TEST_MISSING", raising=False)
        with pytest.raises(OpsflowError) as exc_info:
            resolve_env_vars("${OPSFLOW_TEST_MISSING}")
        assert exc_info.value.code == "CONFIG_INVALID"
        assert "OPSFLOW_TEST_MISSING" in (exc_info.value.detail or "")

    def test_required_custom_message(self, monkeypatch):
        monkeypatch.delenv("OPSFLOW_TEST_MISSING", raising=False)
        with pytest.raises(OpsflowError) as exc_info:
            resolve_env_vars("${OPSFLOW_TEST_MISSING:?set the AI key}")
        assert exc_info.value.detail == "set the AI key"


class TestDeepMerge:
    def test_nested(self):
        base = {"ai": {"model": "a", "api_key": None}, "template": {"max_depth": 10}}
        override = {"ai": {"model": "b"}}

        merged = deep_merge(base, override)

        assert merged == {"ai": {"model": "b", "api_key": None}, "template": {"max_depth": 10}}
        assert base["ai"]["model"] == "a"


class TestConfigLoaderLoad:
    """Tests for ConfigLoader.load()."""

    def test_load_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("OPSFLOW_TEST_AI_KEY", "k-123")
        config_file = tmp_path / "opsflow-config.yaml"
        config_file.write_text(
            """
template:
  max_depth: 4
ai:
  api_key: ${OPSFLOW_TEST_AI_KEY}
  summarize_text_limit: 1000
logging:
  level: DEBUG
  format: json
  components:
    template: false
"""
        )

        config = ConfigLoader().load(config_file)

        assert config.template.max_depth == 4
        assert config.ai.api_key == "k-123"
        assert config.ai.summarize_text_limit == 1000
        assert config.ai.categorize_text_limit == 2000
        assert config.logging.level == LogLevel.DEBUG
        assert config.logging.format == LogFormat.JSON
        assert config.logging.components.template is False
        assert config.logging.components.step is True

    def test_missing_file_uses_defaults(self, tmp_path):
        config = ConfigLoader().load(tmp_path / "absent.yaml")
        assert config == OpsflowConfig()

    def test_missing_file_without_defaults(self, tmp_path):
        with pytest.raises(OpsflowError) as exc_info:
            ConfigLoader().load(tmp_path / "absent.yaml", use_defaults=False)
        assert exc_info.value.code == "CONFIG_INVALID"

    def test_env_path_resolution(self, tmp_path, monkeypatch):
        config_file = tmp_path / "custom.yaml"
        config_file.write_text("template:\n  max_depth: 2\n")
        monkeypatch.setenv("OPSFLOW_CONFIG_PATH", str(config_file))

        assert ConfigLoader().load().template.max_depth == 2

    def test_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "bad.yaml"
        config_file.write_text("template: [unclosed")

        with pytest.raises(OpsflowError) as exc_info:
            ConfigLoader().load(config_file)
        assert "Invalid YAML" in (exc_info.value.detail or "")

    def test_non_mapping_root(self, tmp_path):
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- a\n- b\n")

        with pytest.raises(OpsflowError):
            ConfigLoader().load(config_file)


class TestConfigLoaderValidate:
    """Tests for ConfigLoader.validate() and load_from_dict()."""

    def test_unknown_key_is_warning(self):
        result = ConfigLoader().validate({"server": {}})

        assert result.valid is True
        assert result.warnings[0].path == "server"

    @pytest.mark.parametrize(
        "data",
        [
            {"template": []},
            {"template": {"max_depth": -1}},
            {"template": {"max_depth": "10"}},
            {"ai": {"categorize_text_limit": 0}},
            {"ai": {"default_summary_length": True}},
        ],
    )
    def test_invalid_values(self, data):
        assert ConfigLoader().validate(data).valid is False
        with pytest.raises(OpsflowError) as exc_info:
            ConfigLoader().load_from_dict(data)
        assert exc_info.value.code == "CONFIG_INVALID"

    def test_bad_enum_value(self):
        with pytest.raises(OpsflowError) as exc_info:
            ConfigLoader().load_from_dict({"logging": {"level": "LOUD"}})
        assert "Failed to parse configuration" in (exc_info.value.detail or "")

    def test_zero_max_depth_allowed(self):
        assert ConfigLoader().load_from_dict({"template": {"max_depth": 0}}).template.max_depth == 0


class TestConfigLoaderAccess:
    def test_get_before_load(self):
        with pytest.raises(OpsflowError):
            ConfigLoader().get()

    def test_to_dict(self):
        loader = ConfigLoader()
        loader.load_from_dict({"logging": {"level": "WARN"}})

        data = loader.to_dict()

        assert data["logging"]["level"] == "WARN"
        assert data["template"] == {"max_depth": 10}


class TestBuildLogConfig:
    def test_translates_section(self):
        config = ConfigLoader().load_from_dict(
            {"logging": {"format": "json", "options": {"truncate_at": 50, "show_params": False}}}
        )

        log_config = build_log_config(config.logging)

        assert log_config.format == LogFormat.JSON
        assert log_config.truncate_at == 50
        assert log_config.show_params is False
        assert log_config.components == {
            "run": True,
            "step": True,
            "action": True,
            "template": True,
        }
