"""Replicate image configuration."""

from __future__ import annotations

API_BASE_URL = "https://api.replicate.com/v1"
PREDICTIONS_ENDPOINT = "/predictions"

# Versioned model per studio tool ("<owner>/<name>:<version>")
TOOL_MODELS = {
    "generate": "stability-ai/sdxl:39ed52f2a78e934b3ba6e2a89f5b1c712de7dfea535525255b1aa35c5565e08b",
    "scene": "stability-ai/sdxl:39ed52f2a78e934b3ba6e2a89f5b1c712de7dfea535525255b1aa35c5565e08b",
    "rotate": "stability-ai/sdxl:39ed52f2a78e934b3ba6e2a89f5b1c712de7dfea535525255b1aa35c5565e08b",
    "inpaint": "stability-ai/stable-diffusion-inpainting:95b7223104132402a9ae91cc677285bc5eb997834bd2349fa486f53910fd68b3",
    "animate": "lucataco/animate-diff:1531004ee4c98894ab11f8a4ce6206099e5a4133bc5d27b3c2d1bb8f5bb6b345",
}

DEFAULT_STEPS = 20
SIZE_MULTIPLE = 8
MIN_DIMENSION = 256
MAX_DIMENSION = 1024

POLL_INITIAL_DELAY_SECONDS = 2.0
POLL_BACKOFF_MULTIPLIER = 1.3
POLL_MAX_DELAY_SECONDS = 8.0
POLL_DEADLINE_SECONDS = 300.0

SUPPORTED_TOOLS = ("generate", "animate", "rotate", "inpaint", "scene")
SUPPORTS_SEED = True
SUPPORTS_NEGATIVE_PROMPT = True
FREE = False

LABEL = "Replicate"
DESCRIPTION = "Run SDXL and FLUX models in the cloud. Free credits for new users."
DOCS_URL = "https://replicate.com/account/api-tokens"
FREE_CREDITS_NOTE = "Free credits for new accounts"

__all__ = [
    "API_BASE_URL",
    "PREDICTIONS_ENDPOINT",
    "TOOL_MODELS",
    "DEFAULT_STEPS",
    "SIZE_MULTIPLE",
    "MIN_DIMENSION",
    "MAX_DIMENSION",
    "POLL_INITIAL_DELAY_SECONDS",
    "POLL_BACKOFF_MULTIPLIER",
    "POLL_MAX_DELAY_SECONDS",
    "POLL_DEADLINE_SECONDS",
    "SUPPORTED_TOOLS",
    "SUPPORTS_SEED",
    "SUPPORTS_NEGATIVE_PROMPT",
    "FREE",
    "LABEL",
    "DESCRIPTION",
    "DOCS_URL",
    "FREE_CREDITS_NOTE",
]
