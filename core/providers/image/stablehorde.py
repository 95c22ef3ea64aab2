"""Stable Horde (volunteer GPU network) image generation provider.

Worker availability differs per model, so the adapter walks a list of
candidate models and runs the whole submit, poll and fetch cycle for each until
one produces an image. All attempts share one overall deadline.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

import httpx

from config.image.providers import stablehorde as settings
from core.exceptions import ProviderError, ProviderTimeoutError
from core.providers.base import BaseImageProvider
from core.providers.capabilities import capabilities_from_config
from core.providers.types import GenerateParams, GenerateResult, ProviderConfig, ProviderName

from .utils import polling
from .utils.http import json_body, raise_for_status, to_data_uri, transport_error
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


def _classify(check: Dict[str, Any]) -> polling.JobState:
    if check.get("faulted") or check.get("is_possible") is False:
        return polling.JobState.FAILED
    if check.get("done"):
        return polling.JobState.SUCCEEDED
    if check.get("processing") or check.get("finished"):
        return polling.JobState.PROCESSING
    return polling.JobState.SUBMITTED


def _describe_failure(check: Dict[str, Any]) -> str:
    if check.get("is_possible") is False:
        return "no worker can serve this request"
    return "generation faulted"


def _image_url(generation: Dict[str, Any]) -> Optional[str]:
    img = generation.get("img")
    if not isinstance(img, str) or not img:
        return None
    if img.startswith("http"):
        return img
    # Inline results are base64 webp.
    return f"data:image/webp;base64,{img}"


def _parse_seed(value: Any, fallback: int) -> int:
    try:
        seed = int(value)
    except (TypeError, ValueError):
        return fallback
    return seed if seed > 0 else fallback


class StableHordeImageProvider(BaseImageProvider):
    """Generate images on the Stable Horde, anonymously when no key is set."""

    provider_name = ProviderName.STABLEHORDE

    def __init__(self) -> None:
        self.capabilities = capabilities_from_config(settings, requires_key=False)

    def build_payload(self, params: GenerateParams, model: str, seed: int) -> Dict[str, Any]:
        width, height = snap_size(params, settings)
        negative = build_negative_prompt(params) or settings.DEFAULT_NEGATIVE_PROMPT
        return {
            "prompt": f"{build_prompt(params)} ### {negative}",
            "params": {
                "sampler_name": settings.SAMPLER_NAME,
                "cfg_scale": params.guidance if params.guidance is not None else settings.CFG_SCALE,
                "steps": params.steps or settings.DEFAULT_STEPS,
                "width": width,
                "height": height,
                "seed": str(seed),
                "karras": True,
                "n": 1,
            },
            "models": [model],
            "nsfw": False,
            "censor_nsfw": True,
            "r2": True,
        }

    async def _run_model(
        self,
        client: httpx.AsyncClient,
        headers: Dict[str, str],
        params: GenerateParams,
        model: str,
        seed: int,
        policy: polling.PollPolicy,
        cancel_event: Optional[asyncio.Event],
    ) -> GenerateResult:
        started = polling.monotonic()
        job_id: Optional[str] = None
        try:
            response = await client.post(
                f"{settings.API_BASE_URL}/generate/async",
                json=self.build_payload(params, model, seed),
                headers=headers,
            )
            raise_for_status(self.provider_name.value, response)
            job_id = json_body(self.provider_name.value, response).get("id")
            if not job_id:
                raise ProviderError(
                    "Stable Horde did not return a job id", self.provider_name.value, skip_provider=True
                )
            logger.info("Stable Horde job %s submitted (model=%s)", job_id, model)

            async def fetch_check() -> Dict[str, Any]:
                check = await client.get(f"{settings.API_BASE_URL}/generate/check/{job_id}", headers=headers)
                raise_for_status(self.provider_name.value, check, provider_job_id=job_id)
                return json_body(self.provider_name.value, check, provider_job_id=job_id)

            await polling.poll_until_complete(
                fetch_check,
                _classify,
                provider=self.provider_name.value,
                job_id=job_id,
                policy=policy,
                cancel_event=cancel_event,
                describe_failure=_describe_failure,
            )

            status = await client.get(f"{settings.API_BASE_URL}/generate/status/{job_id}", headers=headers)
            raise_for_status(self.provider_name.value, status, provider_job_id=job_id)
            payload = json_body(self.provider_name.value, status, provider_job_id=job_id)
        except httpx.HTTPError as exc:
            raise transport_error(self.provider_name.value, exc, provider_job_id=job_id) from exc

        generations: List[Dict[str, Any]] = [
            item for item in payload.get("generations") or [] if isinstance(item, dict)
        ]
        urls = [url for url in (_image_url(item) for item in generations) if url]
        if payload.get("faulted") or not urls:
            raise ProviderError(
                "Stable Horde job finished without an image",
                self.provider_name.value,
                provider_job_id=job_id,
                skip_provider=True,
            )

        return GenerateResult(
            provider=self.provider_name,
            result_url=urls[0],
            provider_job_id=job_id,
            result_urls=tuple(urls),
            duration_ms=polling.elapsed_ms(started),
            resolved_seed=seed if seed == params.seed else _parse_seed(generations[0].get("seed"), seed),
        )

    async def generate(
        self,
        params: GenerateParams,
        config: ProviderConfig,
        *,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> GenerateResult:
        seed = resolve_seed(params.seed)
        headers = {
            "apikey": config.api_key.strip() or settings.ANONYMOUS_API_KEY,
            "Client-Agent": settings.CLIENT_AGENT,
            "Content-Type": "application/json",
        }
        models = (params.model_override,) if params.model_override else settings.CANDIDATE_MODELS
        started = polling.monotonic()
        last_error: Optional[ProviderError] = None

        async with httpx.AsyncClient(
            timeout=min(config.timeout_seconds, settings.REQUEST_TIMEOUT_SECONDS)
        ) as client:
            for model in models:
                remaining = config.timeout_seconds - (polling.monotonic() - started)
                if remaining <= 0:
                    break
                try:
                    return await self._run_model(
                        client,
                        headers,
                        params,
                        model,
                        seed,
                        POLL_POLICY.bounded(remaining),
                        cancel_event,
                    )
                except ProviderError as exc:
                    # A rejected request or key fails the same way on every model.
                    if not exc.skip_provider:
                        raise
                    logger.warning("Stable Horde model %s failed: %s", model, exc)
                    last_error = exc

        if isinstance(last_error, ProviderTimeoutError):
            raise last_error
        raise ProviderError(
            f"Stable Horde: no candidate model produced an image ({len(models)} tried)",
            self.provider_name.value,
            last_error,
            status_code=last_error.status_code if last_error else None,
            provider_job_id=last_error.provider_job_id if last_error else None,
            skip_provider=True,
        )


__all__ = ["StableHordeImageProvider"]
