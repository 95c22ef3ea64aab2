"""Replicate image generation provider."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

import httpx

from config.image.providers import replicate as settings
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

_SUCCESS_STATUSES = {"succeeded"}
_FAILURE_STATUSES = {"failed", "canceled"}

POLL_POLICY = polling.PollPolicy(
    initial_delay=settings.POLL_INITIAL_DELAY_SECONDS,
    multiplier=settings.POLL_BACKOFF_MULTIPLIER,
    max_delay=settings.POLL_MAX_DELAY_SECONDS,
    deadline=settings.POLL_DEADLINE_SECONDS,
)


def _classify(prediction: Dict[str, Any]) -> polling.JobState:
    status = str(prediction.get("status") or "").lower()
    if status in _SUCCESS_STATUSES:
        return polling.JobState.SUCCEEDED
    if status in _FAILURE_STATUSES:
        return polling.JobState.FAILED
    return polling.JobState.PROCESSING


def _describe_failure(prediction: Dict[str, Any]) -> str:
    return str(prediction.get("error") or prediction.get("status") or "prediction failed")


def _output_urls(output: Any) -> List[str]:
    if isinstance(output, str):
        return [output] if output else []
    if isinstance(output, list):
        return [item for item in output if isinstance(item, str) and item]
    if isinstance(output, dict):
        return _output_urls(output.get("images") or output.get("image") or output.get("video"))
    return []


class ReplicateImageProvider(BaseImageProvider):
    """Generate images through Replicate's predictions API."""

    provider_name = ProviderName.REPLICATE

    def __init__(self) -> None:
        self.capabilities = capabilities_from_config(settings, requires_key=True)

    def build_input(self, params: GenerateParams, seed: int) -> Dict[str, Any]:
        width, height = snap_size(params, settings)
        payload: Dict[str, Any] = {
            "prompt": build_prompt(params),
            "negative_prompt": build_negative_prompt(params),
            "width": width,
            "height": height,
            "num_inference_steps": params.steps or settings.DEFAULT_STEPS,
            "seed": seed,
        }
        if params.guidance is not None:
            payload["guidance_scale"] = params.guidance

        if params.inpaint:
            payload["image"] = params.inpaint.image_url
            payload["mask"] = params.inpaint.mask_url
        elif params.rotate and params.rotate.reference_image_url:
            payload["image"] = params.rotate.reference_image_url
        elif params.animate:
            payload["frames"] = params.animate.frames
            payload["fps"] = params.animate.fps
            payload["loop"] = params.animate.loop
            if params.animate.source_image_url:
                payload["init_image"] = params.animate.source_image_url
        return payload

    async def generate(
        self,
        params: GenerateParams,
        config: ProviderConfig,
        *,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> GenerateResult:
        """Submit a prediction and poll it to completion."""

        api_key = self.require_api_key(config)
        started = polling.monotonic()
        seed = resolve_seed(params.seed)
        model = params.model_override or settings.TOOL_MODELS[params.tool.value]
        version = model.split(":", 1)[1] if ":" in model else model

        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "Prefer": "wait",
        }
        body = {"version": version, "input": self.build_input(params, seed)}
        policy = POLL_POLICY.bounded(config.timeout_seconds)
        job_id: Optional[str] = None

        logger.info(
            "Submitting Replicate prediction (tool=%s, model=%s)", params.tool.value, model.split(":", 1)[0]
        )

        try:
            async with httpx.AsyncClient(timeout=min(config.timeout_seconds, 90.0)) as client:
                response = await client.post(
                    f"{settings.API_BASE_URL}{settings.PREDICTIONS_ENDPOINT}",
                    json=body,
                    headers=headers,
                )
                raise_for_status(self.provider_name.value, response)
                prediction = json_body(self.provider_name.value, response)
                job_id = prediction.get("id")
                poll_url = (prediction.get("urls") or {}).get("get") or (
                    f"{settings.API_BASE_URL}{settings.PREDICTIONS_ENDPOINT}/{job_id}"
                )

                state = _classify(prediction)
                if state is polling.JobState.FAILED:
                    raise ProviderError(
                        f"replicate job failed: {_describe_failure(prediction)}",
                        self.provider_name.value,
                        provider_job_id=job_id,
                        skip_provider=True,
                    )
                if state is not polling.JobState.SUCCEEDED:

                    async def fetch_status() -> Dict[str, Any]:
                        status_response = await client.get(poll_url, headers=headers)
                        raise_for_status(self.provider_name.value, status_response, provider_job_id=job_id)
                        return json_body(self.provider_name.value, status_response, provider_job_id=job_id)

                    prediction = await polling.poll_until_complete(
                        fetch_status,
                        _classify,
                        provider=self.provider_name.value,
                        job_id=job_id,
                        policy=policy,
                        cancel_event=cancel_event,
                        describe_failure=_describe_failure,
                    )
        except httpx.HTTPError as exc:
            raise transport_error(self.provider_name.value, exc, provider_job_id=job_id) from exc

        urls = _output_urls(prediction.get("output"))
        if not urls:
            raise ProviderError(
                "Replicate prediction returned no output",
                self.provider_name.value,
                provider_job_id=job_id,
                skip_provider=True,
            )

        logger.info("Replicate prediction %s succeeded with %d output(s)", job_id, len(urls))
        return GenerateResult(
            provider=self.provider_name,
            result_url=urls[0],
            provider_job_id=job_id,
            result_urls=tuple(urls),
            duration_ms=polling.elapsed_ms(started),
            resolved_seed=seed,
        )


__all__ = ["ReplicateImageProvider"]
