"""Thinking budget configuration for Gemini models.

Gemini thinking models reason internally before answering. The budget
bounds how many tokens that reasoning may use.

Budget levels:
- off: 0 tokens - No thinking (where the model allows it)
- minimal: 1K tokens - Quick verification
- low: 4K tokens - Simple reasoning
- medium: 16K tokens - Moderate complexity
- high: 24K tokens - Complex multi-step reasoning
- dynamic: -1 - Let the model decide
"""

from dataclasses import dataclass
from enum import Enum

from google.genai import types


class ThinkingLevel(str, Enum):
    """Thinking budget levels."""

    OFF = "off"
    MINIMAL = "minimal"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    DYNAMIC = "dynamic"


THINKING_BUDGETS = {
    ThinkingLevel.OFF: 0,
    ThinkingLevel.MINIMAL: 1024,
    ThinkingLevel.LOW: 4096,
    ThinkingLevel.MEDIUM: 16384,
    ThinkingLevel.HIGH: 24576,
    ThinkingLevel.DYNAMIC: -1,
}


@dataclass(frozen=True)
class ThinkingBudget:
    """A resolved thinking budget.

    Example usage:
        # Use a preset level
        budget = ThinkingBudget.from_level("medium")

        # Or an exact token count
        budget = ThinkingBudget(tokens=1000)

        # Gemini request config
        thinking_config = budget.to_gemini()
    """

    tokens: int

    @property
    def dynamic(self) -> bool:
        return self.tokens < 0

    @property
    def enabled(self) -> bool:
        return self.tokens != 0

    def to_gemini(self) -> types.ThinkingConfig:
        """Convert to the Gemini SDK thinking config."""
        return types.ThinkingConfig(thinking_budget=self.tokens)

    @classmethod
    def from_level(cls, level: "str | ThinkingLevel") -> "ThinkingBudget":
        if isinstance(level, str):
            level = ThinkingLevel(level.lower())
        return cls(tokens=THINKING_BUDGETS[level])


ThinkingParam = ThinkingBudget | ThinkingLevel | str | int


def resolve_thinking(param: ThinkingParam) -> ThinkingBudget:
    """Resolve a level name, enum, token count or budget to a ThinkingBudget."""
    if isinstance(param, ThinkingBudget):
        return param
    # bool is an int subclass; treat it as on/off rather than 1/0 tokens
    if isinstance(param, bool):
        return ThinkingBudget.from_level(
            ThinkingLevel.DYNAMIC if param else ThinkingLevel.OFF
        )
    if isinstance(param, int):
        return ThinkingBudget(tokens=max(param, -1))
    return ThinkingBudget.from_level(param)
