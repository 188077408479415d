"""Configuration models using Pydantic."""

import logging
from typing import Literal

from pydantic import BaseModel, Field, SecretStr, field_validator

from fingercount.defaults import (
    DEFAULT_INSTRUCTION,
    DEFAULT_MODEL,
    DEFAULT_THINKING_BUDGET,
)
from fingercount.errors import FingerCountError

logger = logging.getLogger(__name__)


class ProviderConfig(BaseModel):
    """Provider-level configuration."""

    api_key: SecretStr | None = None


class AnalysisConfig(BaseModel):
    """Configuration for the hand analysis request.

    ``thinking`` accepts a level name ("off", "minimal", "low", "medium",
    "high", "dynamic") or an explicit token budget.
    """

    model: str = DEFAULT_MODEL
    thinking: int | str = DEFAULT_THINKING_BUDGET
    instruction: str = DEFAULT_INSTRUCTION
    # None = wait for the service indefinitely
    request_timeout_seconds: float | None = None

    @field_validator("model", "instruction")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("thinking")
    @classmethod
    def _valid_thinking(cls, value: int | str) -> int | str:
        from fingercount.analysis.thinking import ThinkingLevel

        if isinstance(value, str):
            try:
                ThinkingLevel(value.lower())
            except ValueError:
                valid = ", ".join(level.value for level in ThinkingLevel)
                raise ValueError(f"unknown thinking level (valid: {valid})") from None
            return value.lower()
        if value < -1:
            raise ValueError("thinking budget must be >= -1")
        return value

    @field_validator("request_timeout_seconds")
    @classmethod
    def _positive_timeout(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            raise ValueError("timeout must be positive")
        return value


class LoggingConfig(BaseModel):
    """Configuration for log output."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None
    log_to_file: bool = False


class ConfigError(FingerCountError, ValueError):
    """Configuration error."""


class AppConfig(BaseModel):
    """Root configuration model."""

    gemini: ProviderConfig = Field(default_factory=ProviderConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def resolve_api_key(self) -> SecretStr | None:
        """Resolve the Gemini API key.

        Config values win over the environment. Environment variables are
        checked in order: GEMINI_API_KEY, GOOGLE_API_KEY, API_KEY.
        """
        from fingercount.config.loader import api_key_from_env

        if self.gemini.api_key is not None and self.gemini.api_key.get_secret_value():
            return self.gemini.api_key
        return api_key_from_env()
