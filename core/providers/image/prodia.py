"""Prodia image generation provider."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from config.image.providers import prodia as settings
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

_SUCCESS_STATUSES = {"succeeded", "completed"}
_FAILURE_STATUSES = {"failed", "error"}

POLL_POLICY = polling.PollPolicy(
    initial_delay=settings.POLL_INITIAL_DELAY_SECONDS,
    multiplier=settings.POLL_BACKOFF_MULTIPLIER,
    max_delay=settings.POLL_MAX_DELAY_SECONDS,
    deadline=settings.POLL_DEADLINE_SECONDS,
)


def _classify(job: Dict[str, Any]) -> polling.JobState:
    status = str(job.get("status") or "").lower()
    if status in _SUCCESS_STATUSES:
        return polling.JobState.SUCCEEDED
    if status in _FAILURE_STATUSES:
        return polling.JobState.FAILED
    return polling.JobState.PROCESSING


def select_model(params: GenerateParams) -> str:
    """Return the checkpoint for the request's style preset."""

    if params.model_override:
        return params.model_override
    if params.style_preset is not None:
        return settings.STYLE_MODELS.get(params.style_preset.value, settings.DEFAULT_MODEL)
    return settings.DEFAULT_MODEL


class ProdiaImageProvider(BaseImageProvider):
    """Generate images with Prodia's Stable Diffusion job API. The key is optional."""

    provider_name = ProviderName.PRODIA

    def __init__(self) -> None:
        self.capabilities = capabilities_from_config(settings, requires_key=False)

    async def generate(
        self,
        params: GenerateParams,
        config: ProviderConfig,
        *,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> GenerateResult:
        started = polling.monotonic()
        seed = resolve_seed(params.seed)
        width, height = snap_size(params, settings)
        model = select_model(params)

        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if config.has_key:
            headers["X-Prodia-Key"] = config.api_key.strip()

        body = {
            "model": model,
            "prompt": build_prompt(params),
            "negative_prompt": build_negative_prompt(params),
            "steps": params.steps or settings.DEFAULT_STEPS,
            "cfg_scale": params.guidance if params.guidance is not None else settings.DEFAULT_CFG_SCALE,
            "seed": seed,
            "sampler": settings.SAMPLER,
            "width": width,
            "height": height,
        }
        policy = POLL_POLICY.bounded(config.timeout_seconds)
        job_id: Optional[str] = None

        logger.info("Submitting Prodia job (model=%s, %sx%s)", model, width, height)

        try:
            async with httpx.AsyncClient(timeout=settings.SUBMIT_TIMEOUT_SECONDS) as client:
                response = await client.post(
                    f"{settings.API_BASE_URL}{settings.GENERATE_ENDPOINT}", json=body, headers=headers
                )
                raise_for_status(self.provider_name.value, response)
                job_id = json_body(self.provider_name.value, response).get("job")
                if not job_id:
                    raise ProviderError(
                        "Prodia did not return a job id", self.provider_name.value, skip_provider=True
                    )

                async def fetch_job() -> Dict[str, Any]:
                    job_response = await client.get(
                        f"{settings.API_BASE_URL}{settings.JOB_ENDPOINT}/{job_id}",
                        headers=headers,
                        timeout=settings.STATUS_TIMEOUT_SECONDS,
                    )
                    raise_for_status(self.provider_name.value, job_response, provider_job_id=job_id)
                    return json_body(self.provider_name.value, job_response, provider_job_id=job_id)

                job = await polling.poll_until_complete(
                    fetch_job,
                    _classify,
                    provider=self.provider_name.value,
                    job_id=job_id,
                    policy=policy,
                    cancel_event=cancel_event,
                )
        except httpx.HTTPError as exc:
            raise transport_error(self.provider_name.value, exc, provider_job_id=job_id) from exc

        image_url = job.get("imageUrl")
        if not image_url:
            raise ProviderError(
                "Prodia job succeeded without an image URL",
                self.provider_name.value,
                provider_job_id=job_id,
                skip_provider=True,
            )

        return GenerateResult(
            provider=self.provider_name,
            result_url=image_url,
            provider_job_id=job_id,
            result_urls=(image_url,),
            duration_ms=polling.elapsed_ms(started),
            resolved_seed=seed,
        )


__all__ = ["ProdiaImageProvider", "select_model"]
