"""Shared setup for CLI commands."""

from __future__ import annotations

import os
from pathlib import Path

from fingercount.analysis.client import AnalysisClient
from fingercount.config import AppConfig, load_config
from fingercount.logging import LOG_LEVEL_ENV_VAR, configure_logging
from fingercount.workflow.machine import WorkflowStateMachine


def load_runtime_config(config_path: Path | None, *, verbose: bool = False) -> AppConfig:
    """Load config and configure logging for an interactive command.

    The console stays quiet (WARNING) unless the config, the
    FINGERCOUNT_LOG_LEVEL env var or ``--verbose`` asks for more.
    """
    config = load_config(config_path)
    if verbose:
        level = "DEBUG"
    else:
        level = config.logging.level or os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING")
    configure_logging(level=level, use_rich=True, log_to_file=config.logging.log_to_file)
    return config


def create_workflow(config: AppConfig) -> WorkflowStateMachine:
    """Build a state machine backed by the configured analysis client."""
    return WorkflowStateMachine(AnalysisClient(config))
