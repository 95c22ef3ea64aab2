"""Provider Registries - Global registry for image adapters."""

from __future__ import annotations

from typing import Dict, FrozenSet, Type

from core.providers.base import BaseImageProvider
from core.providers.types import ProviderName

_image_providers: Dict[ProviderName, Type[BaseImageProvider]] = {}


def register_image_provider(name: ProviderName | str, provider_class: Type[BaseImageProvider]) -> None:
    """Register an image provider implementation."""
    _image_providers[ProviderName(name)] = provider_class


def registered_image_providers() -> FrozenSet[ProviderName]:
    """Return the names that currently have an adapter."""
    return frozenset(_image_providers)


__all__ = ["register_image_provider", "registered_image_providers"]
