"""Tests for configuration loading and models."""

from pathlib import Path

import pytest
from pydantic import SecretStr, ValidationError

from fingercount.config import (
    AnalysisConfig,
    AppConfig,
    ConfigError,
    LoggingConfig,
    get_config_path,
    get_default_config,
    load_config,
)
from fingercount.config.loader import _resolve_env_secrets, api_key_from_env
from fingercount.defaults import DEFAULT_MODEL, DEFAULT_THINKING_BUDGET


class TestAnalysisConfig:
    def test_defaults(self):
        config = AnalysisConfig()
        assert config.model == DEFAULT_MODEL
        assert config.thinking == DEFAULT_THINKING_BUDGET
        assert config.request_timeout_seconds is None

    def test_thinking_level_is_normalized(self):
        assert AnalysisConfig(thinking="HIGH").thinking == "high"

    def test_unknown_thinking_level_rejected(self):
        with pytest.raises(ValidationError):
            AnalysisConfig(thinking="maximum")

    def test_budget_below_dynamic_rejected(self):
        with pytest.raises(ValidationError):
            AnalysisConfig(thinking=-5)

    @pytest.mark.parametrize("timeout", [0, -1.5])
    def test_non_positive_timeout_rejected(self, timeout):
        with pytest.raises(ValidationError):
            AnalysisConfig(request_timeout_seconds=timeout)

    def test_blank_model_rejected(self):
        with pytest.raises(ValidationError):
            AnalysisConfig(model="  ")


class TestLoggingConfig:
    def test_invalid_level_rejected(self):
        with pytest.raises(ValidationError):
            LoggingConfig(level="TRACE")


class TestEnvSecrets:
    def test_env_var_order(self, monkeypatch):
        monkeypatch.setenv("API_KEY", "generic")
        monkeypatch.setenv("GOOGLE_API_KEY", "google")
        assert api_key_from_env().get_secret_value() == "google"

        monkeypatch.setenv("GEMINI_API_KEY", "gemini")
        assert api_key_from_env().get_secret_value() == "gemini"

    def test_no_env_key(self):
        assert api_key_from_env() is None

    def test_config_value_is_not_overridden(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "from-env")
        raw = _resolve_env_secrets({"gemini": {"api_key": "from-file"}})
        assert raw["gemini"]["api_key"] == "from-file"

    def test_missing_section_is_created(self, monkeypatch):
        monkeypatch.setenv("API_KEY", "from-env")
        raw = _resolve_env_secrets({})
        assert isinstance(raw["gemini"]["api_key"], SecretStr)


class TestLoadConfig:
    def test_no_files_uses_defaults(self):
        config = load_config()
        assert config == get_default_config()
        assert config.resolve_api_key() is None

    def test_explicit_missing_path_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.toml")

    def test_loads_explicit_file(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text(
            """
[gemini]
api_key = "file-key"

[analysis]
model = "gemini-2.5-flash"
thinking = "minimal"
request_timeout_seconds = 30

[logging]
level = "DEBUG"
"""
        )

        config = load_config(path)

        assert config.resolve_api_key().get_secret_value() == "file-key"
        assert config.analysis.model == "gemini-2.5-flash"
        assert config.analysis.thinking == "minimal"
        assert config.analysis.request_timeout_seconds == 30
        assert config.logging.level == "DEBUG"

    def test_finds_file_in_current_directory(self):
        Path("config.toml").write_text('[analysis]\nthinking = 512\n')
        assert load_config().analysis.thinking == 512

    def test_finds_file_in_home(self):
        home_config = get_config_path()
        home_config.parent.mkdir(parents=True)
        home_config.write_text('[analysis]\nmodel = "from-home"\n')

        assert load_config().analysis.model == "from-home"

    def test_environment_key_fills_file_config(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        path = tmp_path / "custom.toml"
        path.write_text("[analysis]\nthinking = 0\n")

        config = load_config(path)

        assert config.gemini.api_key.get_secret_value() == "env-key"

    def test_invalid_file_raises(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text('[analysis]\nthinking = "nope"\n')
        with pytest.raises(ValidationError):
            load_config(path)


class TestAppConfig:
    def test_blank_config_key_falls_back_to_environment(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "env-key")
        config = AppConfig.model_validate({"gemini": {"api_key": ""}})
        assert config.resolve_api_key().get_secret_value() == "env-key"


class TestConfigErrors:
    def test_invalid_toml_raises_config_error(self, tmp_path):
        path = tmp_path / "broken.toml"
        path.write_text("not valid toml [[[")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(path)

    def test_config_error_is_a_value_error(self):
        assert issubclass(ConfigError, ValueError)
