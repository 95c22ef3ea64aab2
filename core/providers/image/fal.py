"""fal.ai queue image generation provider."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

import httpx

from config.image.providers import fal as settings
from core.exceptions import ProviderError
from core.providers.base import BaseImageProvider
from core.providers.capabilities import capabilities_from_config
from core.providers.types import GenerateParams, GenerateResult, ProviderConfig, ProviderName

from .utils import polling
from .utils.http import json_body, raise_for_status, transport_error
from .utils.prompts import build_negative_prompt, build_prompt
from .utils.seeds import resolve_seed
from .utils.sizing import snap_size

logger = logging.getLogger(__name__)

POLL_POLICY = polling.PollPolicy(
    initial_delay=settings.POLL_INITIAL_DELAY_SECONDS,
    multiplier=settings.POLL_BACKOFF_MULTIPLIER,
    max_delay=settings.POLL_MAX_DELAY_SECONDS,
    deadline=settings.POLL_DEADLINE_SECONDS,
)


def _classify(status: Dict[str, Any]) -> polling.JobState:
    value = str(status.get("status") or "").upper()
    if value in settings.SUCCESS_STATUSES:
        return polling.JobState.SUCCEEDED
    if value in settings.FAILURE_STATUSES:
        return polling.JobState.FAILED
    return polling.JobState.PROCESSING


def _describe_failure(status: Dict[str, Any]) -> str:
    return str(status.get("error") or status.get("status") or "request failed")


def _image_urls(payload: Dict[str, Any]) -> List[str]:
    urls: List[str] = []
    for image in payload.get("images") or []:
        if isinstance(image, dict) and image.get("url"):
            urls.append(str(image["url"]))
        elif isinstance(image, str) and image:
            urls.append(image)
    single = payload.get("image") or payload.get("video")
    if isinstance(single, dict) and single.get("url"):
        urls.append(str(single["url"]))
    return urls


class FalImageProvider(BaseImageProvider):
    """Generate images through the fal.ai queue API."""

    provider_name = ProviderName.FAL

    def __init__(self) -> None:
        self.capabilities = capabilities_from_config(settings, requires_key=True)

    def build_payload(self, params: GenerateParams, seed: int) -> Dict[str, Any]:
        width, height = snap_size(params, settings)
        payload: Dict[str, Any] = {
            "prompt": build_prompt(params),
            "negative_prompt": build_negative_prompt(params),
            "image_size": {"width": width, "height": height},
            "num_inference_steps": params.steps or settings.DEFAULT_STEPS,
            "seed": seed,
            "num_images": 1,
        }
        if params.guidance is not None:
            payload["guidance_scale"] = params.guidance

        if params.inpaint:
            payload["image_url"] = params.inpaint.image_url
            payload["mask_url"] = params.inpaint.mask_url
        elif params.rotate and params.rotate.reference_image_url:
            payload["image_url"] = params.rotate.reference_image_url
        elif params.animate:
            payload["num_frames"] = params.animate.frames
            payload["fps"] = params.animate.fps
            if params.animate.source_image_url:
                payload["video_url"] = params.animate.source_image_url
        return payload

    async def generate(
        self,
        params: GenerateParams,
        config: ProviderConfig,
        *,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> GenerateResult:
        """Queue a request, poll its status URL and fetch the response."""

        api_key = self.require_api_key(config)
        started = polling.monotonic()
        seed = resolve_seed(params.seed)
        model = params.model_override or settings.TOOL_MODELS[params.tool.value]
        submit_url = f"{settings.QUEUE_BASE_URL}/{model}"
        headers = {"Authorization": f"Key {api_key}", "Content-Type": "application/json"}
        policy = POLL_POLICY.bounded(config.timeout_seconds)
        request_id: Optional[str] = None

        logger.info("Submitting fal.ai request (tool=%s, model=%s)", params.tool.value, model)

        try:
            async with httpx.AsyncClient(timeout=min(config.timeout_seconds, 60.0)) as client:
                response = await client.post(submit_url, json=self.build_payload(params, seed), headers=headers)
                raise_for_status(self.provider_name.value, response)
                queued = json_body(self.provider_name.value, response)
                request_id = queued.get("request_id")
                if not request_id:
                    raise ProviderError(
                        "fal.ai did not return a request id",
                        self.provider_name.value,
                        skip_provider=True,
                    )
                status_url = queued.get("status_url") or f"{submit_url}/requests/{request_id}/status"
                response_url = queued.get("response_url") or f"{submit_url}/requests/{request_id}"

                async def fetch_status() -> Dict[str, Any]:
                    status_response = await client.get(status_url, headers=headers)
                    raise_for_status(self.provider_name.value, status_response, provider_job_id=request_id)
                    return json_body(self.provider_name.value, status_response, provider_job_id=request_id)

                await polling.poll_until_complete(
                    fetch_status,
                    _classify,
                    provider=self.provider_name.value,
                    job_id=request_id,
                    policy=policy,
                    cancel_event=cancel_event,
                    describe_failure=_describe_failure,
                )

                result_response = await client.get(response_url, headers=headers)
                raise_for_status(self.provider_name.value, result_response, provider_job_id=request_id)
                payload = json_body(self.provider_name.value, result_response, provider_job_id=request_id)
        except httpx.HTTPError as exc:
            raise transport_error(self.provider_name.value, exc, provider_job_id=request_id) from exc

        urls = _image_urls(payload)
        if not urls:
            raise ProviderError(
                "fal.ai response contained no images",
                self.provider_name.value,
                provider_job_id=request_id,
                skip_provider=True,
            )

        logger.info("fal.ai request %s completed with %d image(s)", request_id, len(urls))
        return GenerateResult(
            provider=self.provider_name,
            result_url=urls[0],
            provider_job_id=request_id,
            result_urls=tuple(urls),
            duration_ms=polling.elapsed_ms(started),
            resolved_seed=seed,
        )


__all__ = ["FalImageProvider"]
