"""Stable Horde image configuration."""

from __future__ import annotations

API_BASE_URL = "https://stablehorde.net/api/v2"
CLIENT_AGENT = "asset-generation-backend:1.0.0:ops@example.com"

# Works without an account, at low queue priority
ANONYMOUS_API_KEY = "0000000000"

# Tried in order; worker availability on the volunteer network varies by model
CANDIDATE_MODELS = (
    "Deliberate",
    "DreamShaper",
    "stable_diffusion",
    "Realistic Vision",
    "SDXL 1.0",
)

DEFAULT_NEGATIVE_PROMPT = "nsfw, blurry, low quality, watermark, text, logo, signature"
SAMPLER_NAME = "k_euler_a"
CFG_SCALE = 7
DEFAULT_STEPS = 20
SIZE_MULTIPLE = 64
MIN_DIMENSION = 64
MAX_DIMENSION = 1024
REQUEST_TIMEOUT_SECONDS = 60.0

POLL_INITIAL_DELAY_SECONDS = 3.0
POLL_BACKOFF_MULTIPLIER = 1.3
POLL_MAX_DELAY_SECONDS = 8.0
POLL_DEADLINE_SECONDS = 120.0

SUPPORTED_TOOLS = ("generate",)
SUPPORTS_SEED = True
SUPPORTS_NEGATIVE_PROMPT = True
FREE = True

LABEL = "Stable Horde"
DESCRIPTION = "Federated volunteer GPU network. 300+ open-source models. Free, no account needed."
DOCS_URL = "https://stablehorde.net"
FREE_CREDITS_NOTE = "Anonymous key works; a free account key gets priority"

__all__ = [
    "API_BASE_URL",
    "CLIENT_AGENT",
    "ANONYMOUS_API_KEY",
    "CANDIDATE_MODELS",
    "DEFAULT_NEGATIVE_PROMPT",
    "SAMPLER_NAME",
    "CFG_SCALE",
    "DEFAULT_STEPS",
    "SIZE_MULTIPLE",
    "MIN_DIMENSION",
    "MAX_DIMENSION",
    "REQUEST_TIMEOUT_SECONDS",
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
