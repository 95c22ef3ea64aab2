"""Image provider-specific configuration modules.

Each vendor module shares the same constant names (``LABEL``, ``SIZE_MULTIPLE``,
``MAX_DIMENSION`` ...), so they are exposed as modules rather than star-imported.
"""

from . import comfyui, fal, huggingface, pollinations, prodia, replicate, stablehorde, together

PROVIDER_CONFIG_MODULES = {
    "replicate": replicate,
    "fal": fal,
    "together": together,
    "huggingface": huggingface,
    "pollinations": pollinations,
    "stablehorde": stablehorde,
    "prodia": prodia,
    "comfyui": comfyui,
}

__all__ = [
    "PROVIDER_CONFIG_MODULES",
    "comfyui",
    "fal",
    "huggingface",
    "pollinations",
    "prodia",
    "replicate",
    "stablehorde",
    "together",
]
