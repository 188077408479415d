"""Configuration loading from TOML files and environment variables."""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import SecretStr

from fingercount.config.models import AppConfig, ConfigError
from fingercount.config.paths import get_config_path

logger = logging.getLogger(__name__)

# Checked in order; the first non-empty value wins.
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")


def _get_default_config_paths() -> list[Path]:
    """Get ordered list of default config file locations."""
    return [
        Path("config.toml"),  # Current directory
        get_config_path(),  # ~/.fingercount/config.toml (or FINGERCOUNT_HOME)
        Path("/etc/fingercount/config.toml"),  # System-wide
    ]


def api_key_from_env() -> SecretStr | None:
    """Read the Gemini API key from the process environment."""
    for env_var in API_KEY_ENV_VARS:
        value = os.environ.get(env_var)
        if value:
            return SecretStr(value)
    return None


def _resolve_env_secrets(config: dict[str, Any]) -> dict[str, Any]:
    """Resolve the API key from environment variables where not set in config."""
    section = config.get("gemini")
    if section is None:
        section = {}
        config["gemini"] = section
    if not section.get("api_key"):
        if secret := api_key_from_env():
            section["api_key"] = secret
    return config


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from a TOML file.

    Args:
        path: Explicit path to config file. If None, searches default locations
            and falls back to the built-in defaults when none exist.

    Returns:
        Validated AppConfig instance.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
        ConfigError: If the file is not valid TOML.
        ValidationError: If the values are invalid.
    """
    config_path: Path | None = None

    if path is not None:
        config_path = Path(path).expanduser()
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        for default_path in _get_default_config_paths():
            expanded = default_path.expanduser()
            if expanded.exists():
                config_path = expanded
                break

    if config_path is None:
        logger.debug("config_defaults_used")
        return get_default_config()

    try:
        with config_path.open("rb") as f:
            raw_config = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e

    raw_config = _resolve_env_secrets(raw_config)
    logger.debug("config_loaded", extra={"config.path": str(config_path)})

    return AppConfig.model_validate(raw_config)


def get_default_config() -> AppConfig:
    """Get the default configuration, with the API key taken from the environment."""
    return AppConfig.model_validate(_resolve_env_secrets({}))
