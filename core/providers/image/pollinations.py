"""Pollinations.ai image generation provider.

Keyless and always routable, so it is the last resort for every request. The
prompt travels in the URL path, which is why the compact prompt form is used.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from config.image.providers import pollinations as settings
from core.exceptions import ProviderError
from core.providers.base import BaseImageProvider
from core.providers.capabilities import capabilities_from_config
from core.providers.types import GenerateParams, GenerateResult, ProviderConfig, ProviderName

from .utils import polling
from .utils.http import raise_for_status, to_data_uri, transport_error
from .utils.prompts import build_negative_prompt, build_prompt
from .utils.seeds import resolve_seed
from .utils.sizing import snap_size

logger = logging.getLogger(__name__)


class PollinationsImageProvider(BaseImageProvider):
    """Generate images with Pollinations' URL-parameterised GET API."""

    provider_name = ProviderName.POLLINATIONS

    def __init__(self) -> None:
        self.capabilities = capabilities_from_config(settings, requires_key=False)

    def build_request(self, params: GenerateParams, seed: int) -> tuple[str, Dict[str, Any]]:
        width, height = snap_size(params, settings)
        url = f"{settings.PROMPT_BASE_URL}/{quote(build_prompt(params, compact=True), safe='')}"
        query: Dict[str, Any] = {
            "width": width,
            "height": height,
            "seed": seed,
            "model": params.model_override or settings.DEFAULT_MODEL,
            "nologo": "true",
            "private": "true",
        }
        negative = build_negative_prompt(params)
        if negative:
            query["negative_prompt"] = negative
        return url, query

    async def generate(
        self,
        params: GenerateParams,
        config: ProviderConfig,
        *,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> GenerateResult:
        started = polling.monotonic()
        seed = resolve_seed(params.seed)
        url, query = self.build_request(params, seed)

        response: Optional[httpx.Response] = None
        async with httpx.AsyncClient(
            timeout=min(config.timeout_seconds, settings.REQUEST_TIMEOUT_SECONDS),
            follow_redirects=True,
        ) as client:
            for attempt in range(settings.MAX_RETRIES + 1):
                retry_delay = settings.RETRY_BACKOFF_SECONDS * (attempt + 1)
                try:
                    response = await client.get(url, params=query)
                except httpx.TransportError as exc:
                    if attempt == settings.MAX_RETRIES:
                        raise transport_error(self.provider_name.value, exc) from exc
                    logger.warning(
                        "Pollinations request failed (%s); retry %d/%d in %.0fs",
                        exc.__class__.__name__,
                        attempt + 1,
                        settings.MAX_RETRIES,
                        retry_delay,
                    )
                    await polling.sleep(retry_delay)
                    continue
                except httpx.HTTPError as exc:
                    raise transport_error(self.provider_name.value, exc) from exc

                if response.status_code < 500 or attempt == settings.MAX_RETRIES:
                    break
                logger.warning(
                    "Pollinations returned HTTP %s; retry %d/%d in %.0fs",
                    response.status_code,
                    attempt + 1,
                    settings.MAX_RETRIES,
                    retry_delay,
                )
                await polling.sleep(retry_delay)

        raise_for_status(self.provider_name.value, response)

        content_type = response.headers.get("content-type", "")
        if not content_type.startswith("image/") or not response.content:
            raise ProviderError(
                f"Pollinations returned no image (content-type={content_type or 'unknown'})",
                self.provider_name.value,
                status_code=response.status_code,
                skip_provider=True,
            )

        data_uri = to_data_uri(response.content, content_type)
        return GenerateResult(
            provider=self.provider_name,
            result_url=data_uri,
            result_urls=(data_uri,),
            duration_ms=polling.elapsed_ms(started),
            resolved_seed=seed,
        )


__all__ = ["PollinationsImageProvider"]
