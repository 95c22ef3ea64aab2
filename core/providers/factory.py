"""Provider Factory - Single dispatch point for image generation
Callers never import adapters directly. They pick a provider name (usually via
``core.providers.routing.resolve_optimal_provider``), build a ``ProviderConfig``
and hand both to ``generate()``, which looks the adapter up in the registry.
Architecture Overview:
    1. core/providers/__init__.py registers one adapter per ProviderName
    2. verify_registry() runs right after registration and fails the import
       when any ProviderName has no adapter
    3. generate() resolves the adapter class and runs one request
Registration Pattern:
    # In core/providers/__init__.py
    register_image_provider(ProviderName.FAL, FalImageProvider)
    # In service code
    result = await generate(ProviderName.FAL, params, config)
See Also:
    - core/providers/__init__.py: Provider registration
    - core/providers/base.py: Adapter interface
    - core/providers/resolvers.py: Config resolution and adapter lookup
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from core.exceptions import ConfigurationError
from core.providers.registries import register_image_provider, registered_image_providers
from core.providers.resolvers import get_image_provider
from core.providers.types import GenerateParams, GenerateResult, ProviderConfig, ProviderName

logger = logging.getLogger(__name__)


def verify_registry() -> None:
    """Fail fast when a ``ProviderName`` has no registered adapter."""

    missing = [name.value for name in ProviderName if name not in registered_image_providers()]
    if missing:
        raise ConfigurationError(
            f"Image providers without an adapter: {', '.join(missing)}",
            key="provider.registry",
        )


async def generate(
    provider: ProviderName | str,
    params: GenerateParams,
    config: ProviderConfig,
    *,
    cancel_event: Optional[asyncio.Event] = None,
) -> GenerateResult:
    """Run ``params`` on ``provider`` and return the normalised result."""

    adapter = get_image_provider(provider)
    logger.info(
        "Dispatching %s request to %s (%sx%s)",
        params.tool.value,
        adapter.provider_name.value,
        params.width,
        params.height,
    )
    return await adapter.generate(params, config, cancel_event=cancel_event)


__all__ = ["generate", "get_image_provider", "register_image_provider", "verify_registry"]
