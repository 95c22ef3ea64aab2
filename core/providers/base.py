"""Base Provider Interface - Abstract Contract for All Image Adapters
Every backend (cloud queue, single-call REST, volunteer network, local
ComfyUI) is wrapped in an adapter that accepts the same ``GenerateParams`` and
returns the same ``GenerateResult``.

Adapter Contract:
    1. Snap width/height to the vendor's legal multiple and clamp silently
    2. Use a caller seed verbatim, otherwise randomise and report it back
    3. Assemble the prompt from the shared vocabulary in ``config.image.styles``
    4. Raise ``ProviderError`` on every failure, with ``skip_provider`` set when
       the caller should move on to the next ranked provider
    5. Never return a partial result

Provider Lifecycle:
    1. Adapter class registered via register_image_provider() at import time
    2. core.providers.factory.generate() looks the class up and instantiates it
    3. generate() runs one request using a fresh httpx.AsyncClient

See Also:
    - core/providers/__init__.py: Provider registration
    - core/providers/factory.py: Dispatch
    - core/providers/image/utils/: Shared prompt, sizing, seed, HTTP and polling helpers
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional

from core.exceptions import ProviderError
from core.providers.capabilities import ProviderCapabilities
from core.providers.types import GenerateParams, GenerateResult, ProviderConfig, ProviderName

logger = logging.getLogger(__name__)


class BaseImageProvider(ABC):
    """Base interface for image generation providers."""

    provider_name: ProviderName
    capabilities: ProviderCapabilities

    @abstractmethod
    async def generate(
        self,
        params: GenerateParams,
        config: ProviderConfig,
        *,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> GenerateResult:
        """Run one generation and return the normalised result."""

        raise NotImplementedError

    def require_api_key(self, config: ProviderConfig) -> str:
        """Return the configured key or raise a skip-worthy ``ProviderError``."""

        if not config.has_key:
            raise ProviderError(
                f"{self.provider_name.value} API key not configured",
                provider=self.provider_name.value,
                skip_provider=True,
            )
        return config.api_key.strip()


__all__ = ["BaseImageProvider"]
