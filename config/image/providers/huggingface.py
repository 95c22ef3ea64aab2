"""Hugging Face Inference Router image configuration."""

from __future__ import annotations

ROUTER_BASE_URL = "https://router.huggingface.co/hf-inference/models"

DEFAULT_MODEL = "black-forest-labs/FLUX.1-schnell"
SCHNELL_STEPS = 4
DEFAULT_STEPS = 20
SIZE_MULTIPLE = 64
MIN_DIMENSION = 64
MAX_DIMENSION = 1024
REQUEST_TIMEOUT_SECONDS = 120.0

# Cold-start handling: 503 "model is loading" responses
LOADING_MAX_RETRIES = 3
LOADING_RETRY_DELAY_SECONDS = 3.0

SUPPORTED_TOOLS = ("generate",)
SUPPORTS_SEED = True
SUPPORTS_NEGATIVE_PROMPT = True
FREE = True

LABEL = "Hugging Face"
DESCRIPTION = "Free FLUX.1-schnell via HF Inference API. Free account token required."
DOCS_URL = "https://huggingface.co/settings/tokens"
FREE_CREDITS_NOTE = "Free with a free HF account"

__all__ = [
    "ROUTER_BASE_URL",
    "DEFAULT_MODEL",
    "SCHNELL_STEPS",
    "DEFAULT_STEPS",
    "SIZE_MULTIPLE",
    "MIN_DIMENSION",
    "MAX_DIMENSION",
    "REQUEST_TIMEOUT_SECONDS",
    "LOADING_MAX_RETRIES",
    "LOADING_RETRY_DELAY_SECONDS",
    "SUPPORTED_TOOLS",
    "SUPPORTS_SEED",
    "SUPPORTS_NEGATIVE_PROMPT",
    "FREE",
    "LABEL",
    "DESCRIPTION",
    "DOCS_URL",
    "FREE_CREDITS_NOTE",
]
