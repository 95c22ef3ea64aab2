"""fal.ai image configuration."""

from __future__ import annotations

QUEUE_BASE_URL = "https://queue.fal.run"

TOOL_MODELS = {
    "generate": "fal-ai/flux/schnell",
    "scene": "fal-ai/flux/schnell",
    "rotate": "fal-ai/flux/schnell",
    "inpaint": "fal-ai/flux/dev/image-to-image",
    "animate": "fal-ai/animatediff-v2v",
}

DEFAULT_STEPS = 4
SIZE_MULTIPLE = 8
MIN_DIMENSION = 256
MAX_DIMENSION = 1024

POLL_INITIAL_DELAY_SECONDS = 1.5
POLL_BACKOFF_MULTIPLIER = 1.3
POLL_MAX_DELAY_SECONDS = 6.0
POLL_DEADLINE_SECONDS = 180.0

SUCCESS_STATUSES = {"COMPLETED"}
FAILURE_STATUSES = {"FAILED", "ERROR", "CANCELLED"}

SUPPORTED_TOOLS = ("generate", "rotate", "scene")
SUPPORTS_SEED = True
SUPPORTS_NEGATIVE_PROMPT = True
FREE = False

LABEL = "fal.ai"
DESCRIPTION = "Fast inference with FLUX models. Free trial credits available."
DOCS_URL = "https://fal.ai/dashboard/keys"
FREE_CREDITS_NOTE = "Free trial credits on signup"

__all__ = [
    "QUEUE_BASE_URL",
    "TOOL_MODELS",
    "DEFAULT_STEPS",
    "SIZE_MULTIPLE",
    "MIN_DIMENSION",
    "MAX_DIMENSION",
    "POLL_INITIAL_DELAY_SECONDS",
    "POLL_BACKOFF_MULTIPLIER",
    "POLL_MAX_DELAY_SECONDS",
    "POLL_DEADLINE_SECONDS",
    "SUCCESS_STATUSES",
    "FAILURE_STATUSES",
    "SUPPORTED_TOOLS",
    "SUPPORTS_SEED",
    "SUPPORTS_NEGATIVE_PROMPT",
    "FREE",
    "LABEL",
    "DESCRIPTION",
    "DOCS_URL",
    "FREE_CREDITS_NOTE",
]
