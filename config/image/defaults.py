"""Image generation configuration defaults."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

# Credential environment variables
REPLICATE_TOKEN_ENV = "REPLICATE_API_TOKEN"
FAL_KEY_ENV = "FAL_KEY"
TOGETHER_KEY_ENV = "TOGETHER_API_KEY"
HF_TOKEN_ENV = "HF_TOKEN"
STABLE_HORDE_KEY_ENV = "STABLE_HORDE_KEY"
PRODIA_KEY_ENV = "PRODIA_API_KEY"
COMFYUI_HOST_ENV = "COMFYUI_HOST"
GENERATION_TIMEOUT_ENV = "GENERATION_TIMEOUT_MS"

# Provider -> env var holding its API key (None: keyless provider)
PROVIDER_KEY_ENV_VARS: Mapping[str, str | None] = MappingProxyType(
    {
        "replicate": REPLICATE_TOKEN_ENV,
        "fal": FAL_KEY_ENV,
        "together": TOGETHER_KEY_ENV,
        "huggingface": HF_TOKEN_ENV,
        "pollinations": None,
        "stablehorde": STABLE_HORDE_KEY_ENV,
        "prodia": PRODIA_KEY_ENV,
        "comfyui": None,
    }
)

# Providers that cannot run without a key (Stable Horde and Prodia keys are optional)
KEY_REQUIRED_PROVIDERS = frozenset({"replicate", "fal", "together", "huggingface"})

# Always-available provider used as the unconditional last resort
KEYLESS_FALLBACK_PROVIDER = "pollinations"

DEFAULT_COMFYUI_HOST = "http://127.0.0.1:8188"
DEFAULT_TIMEOUT_MS = 300_000

DEFAULT_WIDTH = 512
DEFAULT_HEIGHT = 512

# Where users paste their own keys in the web UI
BYOK_SETTINGS_LOCATION = "Settings -> API Keys"

__all__ = [
    "BYOK_SETTINGS_LOCATION",
    "COMFYUI_HOST_ENV",
    "DEFAULT_COMFYUI_HOST",
    "DEFAULT_HEIGHT",
    "DEFAULT_TIMEOUT_MS",
    "DEFAULT_WIDTH",
    "FAL_KEY_ENV",
    "GENERATION_TIMEOUT_ENV",
    "HF_TOKEN_ENV",
    "KEYLESS_FALLBACK_PROVIDER",
    "KEY_REQUIRED_PROVIDERS",
    "PRODIA_KEY_ENV",
    "PROVIDER_KEY_ENV_VARS",
    "REPLICATE_TOKEN_ENV",
    "STABLE_HORDE_KEY_ENV",
    "TOGETHER_KEY_ENV",
]
