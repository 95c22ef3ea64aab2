"""Together.ai image configuration."""

from __future__ import annotations

API_BASE_URL = "https://api.together.xyz/v1"
IMAGES_ENDPOINT = "/images/generations"

DEFAULT_MODEL = "black-forest-labs/FLUX.1-schnell-Free"
# FLUX.1-schnell-Free rejects more than 4 steps
MAX_STEPS = 4
SIZE_MULTIPLE = 64
MIN_DIMENSION = 256
MAX_DIMENSION = 1024
REQUEST_TIMEOUT_SECONDS = 120.0

SUPPORTED_TOOLS = ("generate", "scene")
SUPPORTS_SEED = True
SUPPORTS_NEGATIVE_PROMPT = False
FREE = True

LABEL = "Together.ai"
DESCRIPTION = "FLUX.1-schnell-Free, unlimited free image generation."
DOCS_URL = "https://api.together.xyz/settings/api-keys"
FREE_CREDITS_NOTE = "FLUX.1-schnell-Free is fully free"

__all__ = [
    "API_BASE_URL",
    "IMAGES_ENDPOINT",
    "DEFAULT_MODEL",
    "MAX_STEPS",
    "SIZE_MULTIPLE",
    "MIN_DIMENSION",
    "MAX_DIMENSION",
    "REQUEST_TIMEOUT_SECONDS",
    "SUPPORTED_TOOLS",
    "SUPPORTS_SEED",
    "SUPPORTS_NEGATIVE_PROMPT",
    "FREE",
    "LABEL",
    "DESCRIPTION",
    "DOCS_URL",
    "FREE_CREDITS_NOTE",
]
