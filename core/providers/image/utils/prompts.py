"""Prompt assembly shared by every image adapter."""

from __future__ import annotations

from typing import Iterable, List, Optional

from config.image.styles import (
    ASSET_CATEGORY_TOKENS,
    BACKGROUND_MODE_TOKENS,
    COMPACT_TOOL_PREFIXES,
    GLOBAL_NEGATIVES,
    OUTLINE_STYLE_TOKENS,
    PIXEL_ERA_TOKENS,
    STYLE_PRESET_TOKENS,
    SUPPORTED_PALETTE_SIZES,
    TOOL_NEGATIVES,
    TOOL_PREFIXES,
)
from core.providers.types import GenerateParams


def _lookup(table, value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    return table.get(str(value).strip().lower())


def semantic_hints(params: GenerateParams) -> List[str]:
    """Translate the request's semantic fields into prompt fragments."""

    hints = [
        _lookup(ASSET_CATEGORY_TOKENS, params.asset_category),
        _lookup(PIXEL_ERA_TOKENS, params.pixel_era),
        _lookup(BACKGROUND_MODE_TOKENS, params.background_mode),
        _lookup(OUTLINE_STYLE_TOKENS, params.outline_style),
    ]
    if params.palette_size in SUPPORTED_PALETTE_SIZES:
        hints.append(f"{params.palette_size}-color palette")
    return [hint for hint in hints if hint]


def _join(parts: Iterable[Optional[str]]) -> str:
    return ", ".join(part.strip() for part in parts if part and part.strip())


def build_prompt(params: GenerateParams, *, compact: bool = False) -> str:
    """Return tool prefix, preset tokens and hints followed by the user prompt.

    ``compact`` keeps only the short prefix and preset tokens, for vendors that
    embed the prompt in a URL.
    """

    tool = params.tool.value
    preset = STYLE_PRESET_TOKENS.get(params.style_preset.value) if params.style_preset else None

    if compact:
        return _join([COMPACT_TOOL_PREFIXES.get(tool), preset, params.prompt])
    return _join([TOOL_PREFIXES.get(tool), preset, *semantic_hints(params), params.prompt])


def build_negative_prompt(params: GenerateParams) -> str:
    """Merge global and tool exclusions with the user's own negatives, de-duplicated."""

    terms: List[str] = []
    user_terms = (params.negative_prompt or "").split(",")
    for term in (*GLOBAL_NEGATIVES, *TOOL_NEGATIVES.get(params.tool.value, ()), *user_terms):
        term = term.strip()
        if term and term.lower() not in {existing.lower() for existing in terms}:
            terms.append(term)
    return ", ".join(terms)


__all__ = ["build_negative_prompt", "build_prompt", "semantic_hints"]
