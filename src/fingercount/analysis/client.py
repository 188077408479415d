"""Analysis client: one request/response cycle per call."""

from __future__ import annotations

import asyncio
import logging
import time

from fingercount.analysis.base import AnalysisProvider
from fingercount.analysis.thinking import resolve_thinking
from fingercount.analysis.types import AnalysisRequest, AnalysisResult
from fingercount.config.models import AppConfig
from fingercount.defaults import ANALYSIS_FAILED_TEXT, NO_ANALYSIS_TEXT
from fingercount.errors import AnalysisError, MissingImageError
from fingercount.images.types import ImageAsset

logger = logging.getLogger(__name__)


def error_message(error: BaseException) -> str:
    """Human-readable text for a failed call."""
    if isinstance(error, TimeoutError):
        return "The analysis request timed out."
    message = getattr(error, "message", None)
    if isinstance(message, str) and message.strip():
        return message.strip()
    text = str(error).strip()
    return text or ANALYSIS_FAILED_TEXT


class AnalysisClient:
    """Builds the hand analysis request and performs one provider round trip.

    There is no internal retry; a retry is the caller invoking ``analyze``
    again with the same asset.
    """

    def __init__(
        self,
        config: AppConfig,
        provider: AnalysisProvider | None = None,
    ) -> None:
        self._config = config
        if provider is None:
            from fingercount.analysis.gemini import GeminiAnalysisProvider

            api_key = config.resolve_api_key()
            gemini = GeminiAnalysisProvider(
                api_key=api_key.get_secret_value() if api_key else None
            )
            if not gemini.has_api_key:
                logger.warning("gemini_api_key_missing")
            provider = gemini
        self._provider = provider
        self._thinking = resolve_thinking(config.analysis.thinking)

    @property
    def provider(self) -> AnalysisProvider:
        return self._provider

    def build_request(self, asset: ImageAsset | None) -> AnalysisRequest:
        if asset is None:
            raise MissingImageError("An image must be uploaded before analysis.")
        settings = self._config.analysis
        return AnalysisRequest(
            image=asset,
            instruction=settings.instruction,
            model=settings.model,
            thinking=self._thinking,
            timeout_seconds=settings.request_timeout_seconds,
        )

    async def analyze(self, asset: ImageAsset | None) -> AnalysisResult:
        """Analyze ``asset``.

        Raises:
            MissingImageError: If no asset is given; raised before any network call.
            AnalysisError: If the provider call fails for any reason.
        """
        request = self.build_request(asset)

        started = time.monotonic()
        logger.info(
            "analysis_started",
            extra={"gemini.model": request.model, "provider": self._provider.name},
        )
        try:
            if request.timeout_seconds is None:
                text = await self._provider.analyze(request)
            else:
                text = await asyncio.wait_for(
                    self._provider.analyze(request), timeout=request.timeout_seconds
                )
        except Exception as e:
            duration_ms = int((time.monotonic() - started) * 1000)
            message = error_message(e)
            logger.warning(
                "analysis_failed",
                extra={
                    "error.type": type(e).__name__,
                    "error.message": message,
                    "duration_ms": duration_ms,
                },
            )
            raise AnalysisError(message) from e

        duration_ms = int((time.monotonic() - started) * 1000)
        if not text:
            logger.info("analysis_empty_response", extra={"duration_ms": duration_ms})
            text = NO_ANALYSIS_TEXT
        else:
            logger.info(
                "analysis_succeeded",
                extra={"duration_ms": duration_ms, "output.length": len(text)},
            )
        return AnalysisResult(
            text=text, provider=self._provider.name, model=request.model
        )
