"""Configuration module."""

from fingercount.config.loader import get_default_config, load_config
from fingercount.config.models import (
    AnalysisConfig,
    AppConfig,
    ConfigError,
    LoggingConfig,
    ProviderConfig,
)
from fingercount.config.paths import (
    get_config_path,
    get_fingercount_home,
    get_logs_path,
)

__all__ = [
    "AnalysisConfig",
    "AppConfig",
    "ConfigError",
    "LoggingConfig",
    "ProviderConfig",
    "get_config_path",
    "get_default_config",
    "get_fingercount_home",
    "get_logs_path",
    "load_config",
]
