"""Provider capability declarations."""

from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Tuple

from core.providers.types import Tool


@dataclass(frozen=True, slots=True)
class ProviderCapabilities:
    """Capabilities supported by an image provider."""

    tools: Tuple[Tool, ...] = (Tool.GENERATE,)
    max_width: int = 1024
    max_height: int = 1024
    supports_seed: bool = False
    supports_negative_prompt: bool = False
    free: bool = False
    requires_key: bool = False


def capabilities_from_config(settings: ModuleType, *, requires_key: bool) -> ProviderCapabilities:
    """Build capabilities from a ``config.image.providers`` vendor module."""

    return ProviderCapabilities(
        tools=tuple(Tool(name) for name in settings.SUPPORTED_TOOLS),
        max_width=settings.MAX_DIMENSION,
        max_height=settings.MAX_DIMENSION,
        supports_seed=settings.SUPPORTS_SEED,
        supports_negative_prompt=settings.SUPPORTS_NEGATIVE_PROMPT,
        free=settings.FREE,
        requires_key=requires_key,
    )


__all__ = ["ProviderCapabilities", "capabilities_from_config"]
