"""Text generation configuration."""

from __future__ import annotations

from .routing import GROQ_KEY_ENV, TEXT_STANDARD, TOGETHER_KEY_ENV

__all__ = [
    "GROQ_KEY_ENV",
    "TEXT_STANDARD",
    "TOGETHER_KEY_ENV",
]
