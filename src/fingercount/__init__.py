"""Finger Count - hand image analysis with Gemini vision models."""

__version__ = "0.1.0"
