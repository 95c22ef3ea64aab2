"""Local ComfyUI image configuration."""

from __future__ import annotations

DEFAULT_CHECKPOINT = "v1-5-pruned-emaonly.safetensors"
SAMPLER_NAME = "euler"
SCHEDULER = "normal"
CFG_SCALE = 7.0
DEFAULT_STEPS = 20
FILENAME_PREFIX = "asset"

SIZE_MULTIPLE = 8
MIN_DIMENSION = 64
MAX_DIMENSION = 2048

HEALTH_TIMEOUT_SECONDS = 5.0
REQUEST_TIMEOUT_SECONDS = 30.0

POLL_INITIAL_DELAY_SECONDS = 1.5
POLL_BACKOFF_MULTIPLIER = 1.3
POLL_MAX_DELAY_SECONDS = 6.0
POLL_DEADLINE_SECONDS = 300.0

SUPPORTED_TOOLS = ("generate", "animate", "rotate", "inpaint", "scene")
SUPPORTS_SEED = True
SUPPORTS_NEGATIVE_PROMPT = True
FREE = True

LABEL = "ComfyUI (Local)"
DESCRIPTION = "Run your own local ComfyUI instance. Free, runs on your GPU."
DOCS_URL = "https://github.com/comfyanonymous/ComfyUI"
FREE_CREDITS_NOTE = "Fully free, runs locally"

__all__ = [
    "DEFAULT_CHECKPOINT",
    "SAMPLER_NAME",
    "SCHEDULER",
    "CFG_SCALE",
    "DEFAULT_STEPS",
    "FILENAME_PREFIX",
    "SIZE_MULTIPLE",
    "MIN_DIMENSION",
    "MAX_DIMENSION",
    "HEALTH_TIMEOUT_SECONDS",
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
