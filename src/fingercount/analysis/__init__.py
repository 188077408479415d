"""Hand image analysis against a remote vision-language model."""

from fingercount.analysis.base import AnalysisProvider
from fingercount.analysis.client import AnalysisClient
from fingercount.analysis.gemini import GeminiAnalysisProvider
from fingercount.analysis.thinking import ThinkingBudget, ThinkingLevel, resolve_thinking
from fingercount.analysis.types import AnalysisRequest, AnalysisResult

__all__ = [
    "AnalysisClient",
    "AnalysisProvider",
    "AnalysisRequest",
    "AnalysisResult",
    "GeminiAnalysisProvider",
    "ThinkingBudget",
    "ThinkingLevel",
    "resolve_thinking",
]
