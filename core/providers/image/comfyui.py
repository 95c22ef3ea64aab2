"""Local ComfyUI image generation provider.

The only self-hosted backend. A ``/system_stats`` probe runs before anything is
submitted so that "ComfyUI is not running" is reported as
``ProviderUnreachableError`` rather than as a failed job.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import httpx

from config.image.defaults import DEFAULT_COMFYUI_HOST
from config.image.providers import comfyui as settings
from core.exceptions import ProviderError, ProviderUnreachableError
from core.providers.base import BaseImageProvider
from core.providers.capabilities import capabilities_from_config
from core.providers.types import GenerateParams, GenerateResult, ProviderConfig, ProviderName

from .utils import polling
from .utils.http import json_body, raise_for_status, to_data_uri, transport_error
from .utils.prompts import build_negative_prompt, build_prompt
from .utils.seeds import resolve_seed
from .utils.sizing import snap_size

logger = logging.getLogger(__name__)

SAVE_NODE_ID = "9"

POLL_POLICY = polling.PollPolicy(
    initial_delay=settings.POLL_INITIAL_DELAY_SECONDS,
    multiplier=settings.POLL_BACKOFF_MULTIPLIER,
    max_delay=settings.POLL_MAX_DELAY_SECONDS,
    deadline=settings.POLL_DEADLINE_SECONDS,
)


def build_workflow(params: GenerateParams, seed: int) -> Dict[str, Any]:
    """Return the checkpoint -> CLIP -> KSampler -> VAE -> SaveImage graph."""

    width, height = snap_size(params, settings)
    batch_size = params.animate.frames if params.animate else 1
    return {
        "3": {
            "class_type": "KSampler",
            "inputs": {
                "seed": seed,
                "steps": params.steps or settings.DEFAULT_STEPS,
                "cfg": params.guidance if params.guidance is not None else settings.CFG_SCALE,
                "sampler_name": settings.SAMPLER_NAME,
                "scheduler": settings.SCHEDULER,
                "denoise": 1.0,
                "model": ["4", 0],
                "positive": ["6", 0],
                "negative": ["7", 0],
                "latent_image": ["5", 0],
            },
        },
        "4": {
            "class_type": "CheckpointLoaderSimple",
            "inputs": {"ckpt_name": params.model_override or settings.DEFAULT_CHECKPOINT},
        },
        "5": {
            "class_type": "EmptyLatentImage",
            "inputs": {"width": width, "height": height, "batch_size": batch_size},
        },
        "6": {
            "class_type": "CLIPTextEncode",
            "inputs": {"text": build_prompt(params), "clip": ["4", 1]},
        },
        "7": {
            "class_type": "CLIPTextEncode",
            "inputs": {"text": build_negative_prompt(params), "clip": ["4", 1]},
        },
        "8": {
            "class_type": "VAEDecode",
            "inputs": {"samples": ["3", 0], "vae": ["4", 2]},
        },
        SAVE_NODE_ID: {
            "class_type": "SaveImage",
            "inputs": {"filename_prefix": settings.FILENAME_PREFIX, "images": ["8", 0]},
        },
    }


def _history_entry(history: Dict[str, Any], prompt_id: str) -> Dict[str, Any]:
    entry = history.get(prompt_id)
    return entry if isinstance(entry, dict) else {}


def _output_images(entry: Dict[str, Any]) -> List[Dict[str, Any]]:
    images: List[Dict[str, Any]] = []
    for node_output in (entry.get("outputs") or {}).values():
        for image in (node_output or {}).get("images") or []:
            if isinstance(image, dict) and image.get("filename"):
                images.append(image)
    return images


class ComfyUIImageProvider(BaseImageProvider):
    """Generate images on a local ComfyUI server."""

    provider_name = ProviderName.COMFYUI

    def __init__(self) -> None:
        self.capabilities = capabilities_from_config(settings, requires_key=False)

    async def probe(self, client: httpx.AsyncClient, host: str) -> None:
        """Raise ``ProviderUnreachableError`` unless ComfyUI answers ``/system_stats``."""

        message = f"ComfyUI is not reachable. Is ComfyUI running and listening on {host}?"
        try:
            response = await client.get(f"{host}/system_stats", timeout=settings.HEALTH_TIMEOUT_SECONDS)
        except httpx.HTTPError as exc:
            logger.warning("ComfyUI probe failed for %s: %s", host, exc)
            raise ProviderUnreachableError(message, self.provider_name.value, host) from exc
        if response.status_code >= 400:
            logger.warning("ComfyUI probe returned HTTP %s for %s", response.status_code, host)
            raise ProviderUnreachableError(message, self.provider_name.value, host)

    async def generate(
        self,
        params: GenerateParams,
        config: ProviderConfig,
        *,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> GenerateResult:
        started = polling.monotonic()
        host = (config.comfyui_host or DEFAULT_COMFYUI_HOST).rstrip("/")
        seed = resolve_seed(params.seed)
        policy = POLL_POLICY.bounded(config.timeout_seconds)
        prompt_id: Optional[str] = None

        async with httpx.AsyncClient(timeout=settings.REQUEST_TIMEOUT_SECONDS) as client:
            await self.probe(client, host)

            try:
                response = await client.post(
                    f"{host}/prompt",
                    json={"prompt": build_workflow(params, seed), "client_id": uuid.uuid4().hex},
                )
                raise_for_status(self.provider_name.value, response)
                queued = json_body(self.provider_name.value, response)
                if queued.get("node_errors"):
                    raise ProviderError(
                        f"ComfyUI rejected the workflow: {queued['node_errors']}",
                        self.provider_name.value,
                        status_code=400,
                    )
                prompt_id = queued.get("prompt_id")
                if not prompt_id:
                    raise ProviderError(
                        "ComfyUI did not return a prompt id", self.provider_name.value, skip_provider=True
                    )
                logger.info("ComfyUI prompt %s queued on %s", prompt_id, host)

                async def fetch_history() -> Dict[str, Any]:
                    history = await client.get(f"{host}/history/{prompt_id}")
                    raise_for_status(self.provider_name.value, history, provider_job_id=prompt_id)
                    return _history_entry(
                        json_body(self.provider_name.value, history, provider_job_id=prompt_id), prompt_id
                    )

                def classify(entry: Dict[str, Any]) -> polling.JobState:
                    if not entry:
                        return polling.JobState.SUBMITTED
                    status = entry.get("status") or {}
                    if status.get("status_str") == "error":
                        return polling.JobState.FAILED
                    if _output_images(entry) or status.get("completed"):
                        return polling.JobState.SUCCEEDED
                    return polling.JobState.PROCESSING

                entry = await polling.poll_until_complete(
                    fetch_history,
                    classify,
                    provider=self.provider_name.value,
                    job_id=prompt_id,
                    policy=policy,
                    cancel_event=cancel_event,
                    describe_failure=lambda _: "workflow execution error",
                )

                images = _output_images(entry)
                if not images:
                    raise ProviderError(
                        "ComfyUI finished without saving an image",
                        self.provider_name.value,
                        provider_job_id=prompt_id,
                        skip_provider=True,
                    )
                view_urls = [
                    f"{host}/view?"
                    + urlencode(
                        {
                            "filename": image["filename"],
                            "subfolder": image.get("subfolder", ""),
                            "type": image.get("type", "output"),
                        }
                    )
                    for image in images
                ]
                first = await client.get(view_urls[0])
                raise_for_status(self.provider_name.value, first, provider_job_id=prompt_id)
            except httpx.HTTPError as exc:
                raise transport_error(self.provider_name.value, exc, provider_job_id=prompt_id) from exc

        return GenerateResult(
            provider=self.provider_name,
            result_url=to_data_uri(first.content, first.headers.get("content-type")),
            provider_job_id=prompt_id,
            result_urls=tuple(view_urls),
            duration_ms=polling.elapsed_ms(started),
            resolved_seed=seed,
        )


__all__ = ["ComfyUIImageProvider", "build_workflow"]
