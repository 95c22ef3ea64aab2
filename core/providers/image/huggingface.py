"""Hugging Face Inference Router image generation provider."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from config.image.providers import huggingface as settings
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


def is_model_loading(response: httpx.Response) -> bool:
    """True for the 503 the router sends while a cold model warms up."""

    if response.status_code != 503:
        return False
    try:
        payload = response.json()
    except ValueError:
        return "loading" in (response.text or "").lower()
    if not isinstance(payload, dict):
        return False
    return "estimated_time" in payload or "loading" in str(payload.get("error", "")).lower()


class HuggingFaceImageProvider(BaseImageProvider):
    """Generate images through the Hugging Face Inference Router.

    A "model is loading" 503 is retried a fixed number of times with a fixed
    pause. Any other failure, or a loading response past the retry budget, is
    classified like an ordinary HTTP error.
    """

    provider_name = ProviderName.HUGGINGFACE

    def __init__(self) -> None:
        self.capabilities = capabilities_from_config(settings, requires_key=True)

    def build_payload(self, params: GenerateParams, model: str, seed: int) -> Dict[str, Any]:
        width, height = snap_size(params, settings)
        steps = settings.SCHNELL_STEPS if "schnell" in model.lower() else settings.DEFAULT_STEPS
        parameters: Dict[str, Any] = {
            "negative_prompt": build_negative_prompt(params),
            "width": width,
            "height": height,
            "num_inference_steps": params.steps or steps,
            "seed": seed,
        }
        if params.guidance is not None:
            parameters["guidance_scale"] = params.guidance
        return {"inputs": build_prompt(params), "parameters": parameters}

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
        model = params.model_override or settings.DEFAULT_MODEL
        url = f"{settings.ROUTER_BASE_URL}/{model}"
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "Accept": "image/png",
        }
        body = self.build_payload(params, model, seed)

        try:
            async with httpx.AsyncClient(
                timeout=min(config.timeout_seconds, settings.REQUEST_TIMEOUT_SECONDS)
            ) as client:
                for attempt in range(settings.LOADING_MAX_RETRIES + 1):
                    response = await client.post(url, json=body, headers=headers)
                    if not is_model_loading(response) or attempt == settings.LOADING_MAX_RETRIES:
                        break
                    logger.info(
                        "Hugging Face model %s is loading; retry %d/%d in %.0fs",
                        model,
                        attempt + 1,
                        settings.LOADING_MAX_RETRIES,
                        settings.LOADING_RETRY_DELAY_SECONDS,
                    )
                    await polling.sleep(settings.LOADING_RETRY_DELAY_SECONDS)
        except httpx.HTTPError as exc:
            raise transport_error(self.provider_name.value, exc) from exc

        raise_for_status(self.provider_name.value, response)

        content_type = response.headers.get("content-type", "")
        if not content_type.startswith("image/") or not response.content:
            raise ProviderError(
                f"Hugging Face returned no image (content-type={content_type or 'unknown'})",
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


__all__ = ["HuggingFaceImageProvider", "is_model_loading"]
