"""Analysis provider interface."""

from __future__ import annotations

from typing import Protocol

from fingercount.analysis.types import AnalysisRequest


class AnalysisProvider(Protocol):
    """Provider contract for a single model round trip."""

    @property
    def name(self) -> str:
        """Stable provider name."""
        ...

    async def analyze(self, request: AnalysisRequest) -> str | None:
        """Send the request and return the response text, if any."""
        ...
