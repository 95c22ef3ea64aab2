"""Prodia image configuration."""

from __future__ import annotations

API_BASE_URL = "https://api.prodia.com/v1"
GENERATE_ENDPOINT = "/sd/generate"
JOB_ENDPOINT = "/job"

DEFAULT_MODEL = "dreamshaper_8.safetensors [9d40847d]"

# Style preset -> checkpoint filename
STYLE_MODELS = {
    "portrait": "deliberate_v3.safetensors [afd9d2d4]",
    "isometric": "dynavision_0.614.safetensors [8a7d9c8f]",
    "character_idle": "deliberate_v3.safetensors [afd9d2d4]",
    "character_side": "deliberate_v3.safetensors [afd9d2d4]",
    "top_down_char": "edge_of_realism_eorV20.safetensors [3ed5de15]",
    "chibi": "meinamix_meinaV11.safetensors [b56ce717]",
    "horror": "dynavision_0.614.safetensors [8a7d9c8f]",
    "sci_fi": "dreamshaper_8.safetensors [9d40847d]",
    "rpg_icon": "Anything-V3.0-pruned.ckpt [2700c435]",
    "badge_icon": "Anything-V3.0-pruned.ckpt [2700c435]",
    "weapon_icon": "Anything-V3.0-pruned.ckpt [2700c435]",
    "emoji": "Anything-V3.0-pruned.ckpt [2700c435]",
    "animated_effect": "openjourney_V4.ckpt [ca2f377f]",
}

SAMPLER = "DPM++ 2M Karras"
DEFAULT_STEPS = 20
DEFAULT_CFG_SCALE = 7.0
SIZE_MULTIPLE = 8
MIN_DIMENSION = 256
MAX_DIMENSION = 1024
SUBMIT_TIMEOUT_SECONDS = 15.0
STATUS_TIMEOUT_SECONDS = 10.0

POLL_INITIAL_DELAY_SECONDS = 2.0
POLL_BACKOFF_MULTIPLIER = 1.3
POLL_MAX_DELAY_SECONDS = 6.0
POLL_DEADLINE_SECONDS = 120.0

SUPPORTED_TOOLS = ("generate",)
SUPPORTS_SEED = True
SUPPORTS_NEGATIVE_PROMPT = True
FREE = True

LABEL = "Prodia"
DESCRIPTION = "Free Stable Diffusion API. PRODIA_API_KEY unlocks higher rate limits."
DOCS_URL = "https://docs.prodia.com"
FREE_CREDITS_NOTE = "Free without a key; a key unlocks higher rate limits"

__all__ = [
    "API_BASE_URL",
    "GENERATE_ENDPOINT",
    "JOB_ENDPOINT",
    "DEFAULT_MODEL",
    "STYLE_MODELS",
    "SAMPLER",
    "DEFAULT_STEPS",
    "DEFAULT_CFG_SCALE",
    "SIZE_MULTIPLE",
    "MIN_DIMENSION",
    "MAX_DIMENSION",
    "SUBMIT_TIMEOUT_SECONDS",
    "STATUS_TIMEOUT_SECONDS",
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
