"""Types for hand image analysis."""

from __future__ import annotations

from dataclasses import dataclass

from fingercount.analysis.thinking import ThinkingBudget
from fingercount.images.types import ImageAsset


@dataclass(frozen=True, slots=True)
class AnalysisRequest:
    """A single-turn multimodal request: one image plus the instruction."""

    image: ImageAsset
    instruction: str
    model: str
    thinking: ThinkingBudget
    timeout_seconds: float | None = None


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Model output. ``text`` is shown as-is and never parsed."""

    text: str
    provider: str = "unknown"
    model: str | None = None
