"""Text-to-speech configuration."""

from __future__ import annotations

from .routing import HF_TOKEN_ENV, VOICE_STANDARD

__all__ = ["HF_TOKEN_ENV", "VOICE_STANDARD"]
