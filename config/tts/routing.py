"""Ranked voice (TTS) providers."""

from __future__ import annotations

HF_TOKEN_ENV = "HF_TOKEN"

# (provider, model, priority, required env var); lower priority wins
VOICE_STANDARD = (
    ("huggingface", "hexgrad/Kokoro-82M", 1, HF_TOKEN_ENV),
)

__all__ = ["HF_TOKEN_ENV", "VOICE_STANDARD"]
