"""Gemini-backed hand analysis provider."""

from __future__ import annotations

import logging
from typing import Any

from google import genai
from google.genai import types

from fingercount.analysis.base import AnalysisProvider
from fingercount.analysis.types import AnalysisRequest

logger = logging.getLogger(__name__)


class MissingAPIKeyError(ValueError):
    """No Gemini API key was configured."""


def build_contents(request: AnalysisRequest) -> list[types.Content]:
    """Build the single user turn: inline image first, then the instruction."""
    image = request.image
    return [
        types.Content(
            role="user",
            parts=[
                types.Part.from_bytes(data=image.decode(), mime_type=image.mime_type),
                types.Part.from_text(text=request.instruction),
            ],
        )
    ]


def build_config(request: AnalysisRequest) -> types.GenerateContentConfig:
    return types.GenerateContentConfig(thinking_config=request.thinking.to_gemini())


class GeminiAnalysisProvider(AnalysisProvider):
    """Google Gemini implementation using the google-genai async client."""

    def __init__(
        self,
        api_key: str | None = None,
        *,
        client: genai.Client | Any | None = None,
    ) -> None:
        self._api_key = api_key
        self._client = client

    @property
    def name(self) -> str:
        return "gemini"

    @property
    def has_api_key(self) -> bool:
        return bool(self._api_key) or self._client is not None

    def _get_client(self) -> genai.Client | Any:
        if self._client is None:
            if not self._api_key:
                raise MissingAPIKeyError(
                    "No Gemini API key configured. Set GEMINI_API_KEY or [gemini].api_key."
                )
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    async def analyze(self, request: AnalysisRequest) -> str | None:
        client = self._get_client()
        logger.debug(
            "gemini_request",
            extra={
                "gemini.model": request.model,
                "image.mime_type": request.image.mime_type,
                "thinking.budget": request.thinking.tokens,
            },
        )
        response = await client.aio.models.generate_content(
            model=request.model,
            contents=build_contents(request),
            config=build_config(request),
        )
        return getattr(response, "text", None)
