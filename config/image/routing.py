"""Quality-aware provider routing tables.

Each cell maps ``mode -> tool -> ordered preferences``. The first provider whose
required credential is present (or which requires none) wins. The standard tier
prefers free providers (Together, Hugging Face, Pollinations); the HD tier
prefers premium queue providers (fal.ai, Replicate).

Provider tool coverage:
    together:     generate, scene; no negative prompt
    huggingface:  generate; negative prompt
    pollinations: generate; no key required
    fal:          generate, rotate, scene; needs FAL_KEY
    replicate:    every tool; needs REPLICATE_API_TOKEN

The tables are data. Adding a provider or changing a priority is a table edit.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

from config.image.defaults import (
    FAL_KEY_ENV,
    HF_TOKEN_ENV,
    KEYLESS_FALLBACK_PROVIDER,
    REPLICATE_TOKEN_ENV,
    TOGETHER_KEY_ENV,
)


@dataclass(frozen=True, slots=True)
class ProviderPreference:
    """One ranked routing entry; ``requires`` names the env var it needs."""

    provider: str
    requires: str | None = None


@dataclass(frozen=True, slots=True)
class StyleOverride:
    """Preferred provider per quality tier for a style hint."""

    standard: str | None = None
    hd: str | None = None


PreferenceList = Tuple[ProviderPreference, ...]
ToolMatrix = Mapping[str, PreferenceList]
TierMatrix = Mapping[str, ToolMatrix]

_TOGETHER = ProviderPreference("together", TOGETHER_KEY_ENV)
_HUGGINGFACE = ProviderPreference("huggingface", HF_TOKEN_ENV)
_FAL = ProviderPreference("fal", FAL_KEY_ENV)
_REPLICATE = ProviderPreference("replicate", REPLICATE_TOKEN_ENV)
_POLLINATIONS = ProviderPreference(KEYLESS_FALLBACK_PROVIDER)

KEYLESS_FALLBACK: PreferenceList = (_POLLINATIONS,)

# Unknown modes route through this mode's cells.
FALLBACK_MODE = "business"


def _tools(**cells: PreferenceList) -> ToolMatrix:
    return MappingProxyType(dict(cells))


STANDARD_MATRIX: TierMatrix = MappingProxyType(
    {
        "pixel": _tools(
            generate=(_TOGETHER, _HUGGINGFACE, _POLLINATIONS),
            # Only free provider that returns sequential frames.
            animate=(_POLLINATIONS,),
            rotate=(_TOGETHER, _POLLINATIONS),
            inpaint=(_TOGETHER, _POLLINATIONS),
            scene=(_TOGETHER, _HUGGINGFACE, _POLLINATIONS),
        ),
        "business": _tools(
            generate=(_TOGETHER, _HUGGINGFACE, _POLLINATIONS),
            animate=(_POLLINATIONS,),
            rotate=(_TOGETHER, _POLLINATIONS),
            inpaint=(_TOGETHER, _POLLINATIONS),
            scene=(_TOGETHER, _POLLINATIONS),
        ),
        "vector": _tools(
            generate=(_TOGETHER, _HUGGINGFACE, _POLLINATIONS),
            animate=(_POLLINATIONS,),
            rotate=(_TOGETHER, _POLLINATIONS),
            inpaint=(_TOGETHER, _POLLINATIONS),
            scene=(_TOGETHER, _POLLINATIONS),
        ),
        "emoji": _tools(
            generate=(_TOGETHER, _HUGGINGFACE, _POLLINATIONS),
            animate=(_POLLINATIONS,),
            rotate=(_TOGETHER, _POLLINATIONS),
            inpaint=(_TOGETHER, _POLLINATIONS),
            scene=(_POLLINATIONS,),
        ),
    }
)

HD_MATRIX: TierMatrix = MappingProxyType(
    {
        "pixel": _tools(
            generate=(_FAL, _REPLICATE, _TOGETHER, _POLLINATIONS),
            animate=(_REPLICATE, _FAL, _POLLINATIONS),
            rotate=(_FAL, _REPLICATE, _POLLINATIONS),
            inpaint=(_FAL, _REPLICATE, _TOGETHER, _POLLINATIONS),
            scene=(_FAL, _REPLICATE, _TOGETHER, _POLLINATIONS),
        ),
        "business": _tools(
            generate=(_FAL, _REPLICATE, _TOGETHER, _POLLINATIONS),
            animate=(_REPLICATE, _FAL, _POLLINATIONS),
            rotate=(_FAL, _REPLICATE, _POLLINATIONS),
            inpaint=(_FAL, _REPLICATE, _POLLINATIONS),
            scene=(_FAL, _REPLICATE, _TOGETHER, _POLLINATIONS),
        ),
        "vector": _tools(
            # Replicate first: Recraft V3 produces true SVG output.
            generate=(_REPLICATE, _FAL, _TOGETHER, _POLLINATIONS),
            animate=(_REPLICATE, _POLLINATIONS),
            rotate=(_FAL, _POLLINATIONS),
            inpaint=(_FAL, _POLLINATIONS),
            scene=(_FAL, _POLLINATIONS),
        ),
        "emoji": _tools(
            generate=(_FAL, _REPLICATE, _TOGETHER, _POLLINATIONS),
            animate=(_REPLICATE, _POLLINATIONS),
            rotate=(_FAL, _POLLINATIONS),
            inpaint=(_FAL, _POLLINATIONS),
            scene=(_FAL, _POLLINATIONS),
        ),
    }
)

# Consulted before the tier matrices. A style may name a provider for one tier
# only; ``None`` means the style has no opinion for that tier.
STYLE_OVERRIDES: Mapping[str, StyleOverride] = MappingProxyType(
    {
        "dithered": StyleOverride(standard="pollinations", hd="replicate"),
        "pixel-art": StyleOverride(standard="together", hd="replicate"),
        "logo": StyleOverride(standard="together", hd="fal"),
        "banner": StyleOverride(standard="together", hd="fal"),
        "icon": StyleOverride(standard="pollinations", hd="replicate"),
        "isometric": StyleOverride(standard="huggingface", hd="fal"),
        "portrait": StyleOverride(standard="huggingface", hd="replicate"),
        "sprite-sheet": StyleOverride(hd="replicate"),
        "photoreal": StyleOverride(hd="fal"),
    }
)


def tier_matrix(use_hd: bool) -> TierMatrix:
    """Return the routing matrix for the requested quality tier."""

    return HD_MATRIX if use_hd else STANDARD_MATRIX


__all__ = [
    "FALLBACK_MODE",
    "HD_MATRIX",
    "KEYLESS_FALLBACK",
    "PreferenceList",
    "ProviderPreference",
    "STANDARD_MATRIX",
    "STYLE_OVERRIDES",
    "StyleOverride",
    "TierMatrix",
    "ToolMatrix",
    "tier_matrix",
]
