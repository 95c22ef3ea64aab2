"""Pollinations.ai image configuration."""

from __future__ import annotations

PROMPT_BASE_URL = "https://image.pollinations.ai/prompt"

DEFAULT_MODEL = "flux"
SIZE_MULTIPLE = 8
MIN_DIMENSION = 64
MAX_DIMENSION = 1024

# Last-resort provider: generous per-attempt timeout and simple linear retry
REQUEST_TIMEOUT_SECONDS = 120.0
MAX_RETRIES = 2
RETRY_BACKOFF_SECONDS = 2.0

SUPPORTED_TOOLS = ("generate",)
SUPPORTS_SEED = True
SUPPORTS_NEGATIVE_PROMPT = True
FREE = True

LABEL = "Pollinations.ai"
DESCRIPTION = "Free FLUX generation. No account, no key, no limits."
DOCS_URL = "https://pollinations.ai"
FREE_CREDITS_NOTE = "Completely free, no account needed"

__all__ = [
    "PROMPT_BASE_URL",
    "DEFAULT_MODEL",
    "SIZE_MULTIPLE",
    "MIN_DIMENSION",
    "MAX_DIMENSION",
    "REQUEST_TIMEOUT_SECONDS",
    "MAX_RETRIES",
    "RETRY_BACKOFF_SECONDS",
    "SUPPORTED_TOOLS",
    "SUPPORTS_SEED",
    "SUPPORTS_NEGATIVE_PROMPT",
    "FREE",
    "LABEL",
    "DESCRIPTION",
    "DOCS_URL",
    "FREE_CREDITS_NOTE",
]
