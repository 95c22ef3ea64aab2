"""Ranked text (LLM) providers, used for prompt enhancement."""

from __future__ import annotations

GROQ_KEY_ENV = "GROQ_API_KEY"
TOGETHER_KEY_ENV = "TOGETHER_API_KEY"

# (provider, model, priority, required env var); lower priority wins
TEXT_STANDARD = (
    ("groq", "llama-3.3-70b-versatile", 1, GROQ_KEY_ENV),
    ("together", "meta-llama/Llama-3.1-70B-Instruct-Turbo", 2, TOGETHER_KEY_ENV),
)

__all__ = ["GROQ_KEY_ENV", "TEXT_STANDARD", "TOGETHER_KEY_ENV"]
