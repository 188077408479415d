"""Centralized path management for Finger Count.

All local state (config, logs) lives under a single base directory.
The base directory can be overridden with the FINGERCOUNT_HOME environment variable.

Default locations:
- Linux/macOS: ~/.fingercount
- Windows: %USERPROFILE%\\.fingercount
"""

import os
from functools import lru_cache
from pathlib import Path

ENV_VAR = "FINGERCOUNT_HOME"


@lru_cache(maxsize=1)
def get_fingercount_home() -> Path:
    """Get the base directory for all Finger Count data.

    Resolution order:
    1. FINGERCOUNT_HOME environment variable (if set)
    2. Platform default (~/.fingercount)
    """
    if env_home := os.environ.get(ENV_VAR):
        return Path(env_home).expanduser().resolve()

    return Path.home() / ".fingercount"


def get_config_path() -> Path:
    """Get the default config file path."""
    return get_fingercount_home() / "config.toml"


def get_logs_path() -> Path:
    """Get the default logs directory path."""
    return get_fingercount_home() / "logs"
