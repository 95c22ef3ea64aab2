"""Together.ai image generation provider (OpenAI-compatible images endpoint)."""

from __future__ import annotations

import asyncio
import base64
import binascii
import logging
from typing import Any, Dict, List, Optional

import httpx

from config.image.providers import together as settings
from core.exceptions import ProviderError
from core.providers.base import BaseImageProvider
from core.providers.capabilities import capabilities_from_config
from core.providers.types import GenerateParams, GenerateResult, ProviderConfig, ProviderName

from .utils import polling
from .utils.http import json_body, raise_for_status, to_data_uri, transport_error
from .utils.prompts import build_prompt
from .utils.seeds import resolve_seed
from .utils.sizing import snap_size

logger = logging.getLogger(__name__)


def _decode_outputs(provider: str, data: List[Dict[str, Any]]) -> List[str]:
    urls: List[str] = []
    for item in data:
        if not isinstance(item, dict):
            continue
        if item.get("b64_json"):
            try:
                content = base64.b64decode(item["b64_json"], validate=True)
            except binascii.Error as exc:
                raise ProviderError(
                    "Together returned invalid base64 image data", provider, exc, skip_provider=True
                ) from exc
            urls.append(to_data_uri(content, "image/png"))
        elif item.get("url"):
            urls.append(str(item["url"]))
    return urls


class TogetherImageProvider(BaseImageProvider):
    """Generate images with FLUX.1-schnell-Free on Together.ai.

    Together ignores negative prompts, so none is sent.
    """

    provider_name = ProviderName.TOGETHER

    def __init__(self) -> None:
        self.capabilities = capabilities_from_config(settings, requires_key=True)

    async def generate(
        self,
        params: GenerateParams,
        config: ProviderConfig,
        *,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> GenerateResult:
        api_key = self.require_api_key(config)
        started = polling.monotonic()
        seed = resolve_seed(params.seed)
        width, height = snap_size(params, settings)
        model = params.model_override or settings.DEFAULT_MODEL

        body: Dict[str, Any] = {
            "model": model,
            "prompt": build_prompt(params),
            "width": width,
            "height": height,
            "steps": min(params.steps or settings.MAX_STEPS, settings.MAX_STEPS),
            "n": 1,
            "seed": seed,
            "response_format": "b64_json",
        }
        headers = {"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"}

        logger.info("Requesting Together image (model=%s, %sx%s)", model, width, height)

        try:
            async with httpx.AsyncClient(
                timeout=min(config.timeout_seconds, settings.REQUEST_TIMEOUT_SECONDS)
            ) as client:
                response = await client.post(
                    f"{settings.API_BASE_URL}{settings.IMAGES_ENDPOINT}",
                    json=body,
                    headers=headers,
                )
        except httpx.HTTPError as exc:
            raise transport_error(self.provider_name.value, exc) from exc

        raise_for_status(self.provider_name.value, response)
        payload = json_body(self.provider_name.value, response)
        urls = _decode_outputs(self.provider_name.value, payload.get("data") or [])
        if not urls:
            raise ProviderError(
                "Together returned no image data", self.provider_name.value, skip_provider=True
            )

        return GenerateResult(
            provider=self.provider_name,
            result_url=urls[0],
            provider_job_id=payload.get("id"),
            result_urls=tuple(urls),
            duration_ms=polling.elapsed_ms(started),
            resolved_seed=seed,
        )


__all__ = ["TogetherImageProvider"]
