"""Asset generation HTTP routes."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException

from core.exceptions import ConfigurationError, ProviderError, ValidationError
from core.http.errors import format_error, status_code_for
from core.pydantic_schemas import ok
from features.generation.dependencies import get_generation_service
from features.generation.schemas import (
    BatchGenerationRequest,
    BatchGenerationResponse,
    BatchItemResult,
    GenerationRequest,
    GenerationResponse,
    ModalityProviderResponse,
    ProviderStatusResponse,
)
from features.generation.service import GenerationJob, GenerationOutcome, GenerationService

router = APIRouter(prefix="/api/v1/generation", tags=["generation"])
logger = logging.getLogger(__name__)


def _prompt_preview(prompt: str) -> str:
    text = (prompt or "").strip().replace("\n", " ")
    return text[:120] + ("..." if len(text) > 120 else "")


def _build_job(request: GenerationRequest) -> GenerationJob:
    return GenerationJob(
        params=request.to_params(),
        mode=request.mode,
        use_hd=request.use_hd,
        style=request.style,
        provider=request.provider,
        failover=request.failover,
        byok_key=request.api_key,
        byok_host=request.comfyui_host,
    )


def _to_response(outcome: GenerationOutcome) -> GenerationResponse:
    result = outcome.result
    return GenerationResponse(
        provider=result.provider,
        result_url=result.result_url,
        result_urls=list(result.result_urls),
        provider_job_id=result.provider_job_id,
        seed=result.resolved_seed,
        duration_ms=result.duration_ms,
        attempted=list(outcome.attempted),
    )


def _http_error(exc: Exception, route: str) -> HTTPException:
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error("%s failed in %s: %s", type(exc).__name__, route, exc)
    else:
        logger.warning("%s in %s: %s", type(exc).__name__, route, exc)
    return HTTPException(status_code=status_code, detail=format_error(exc))


@router.post("/generate")
async def generate_asset(
    request: GenerationRequest,
    service: GenerationService = Depends(get_generation_service),
) -> Dict[str, Any]:
    """Generate one asset, failing over between providers when allowed."""

    logger.info(
        "POST /generation/generate received (mode=%s, tool=%s, hd=%s, provider=%s, prompt='%s')",
        request.mode,
        request.tool.value,
        request.use_hd,
        request.provider.value if request.provider else "auto",
        _prompt_preview(request.prompt),
    )

    try:
        job = _build_job(request)
        outcome = await service.generate_with_failover(job)
    except (ValidationError, ConfigurationError, ProviderError) as exc:
        raise _http_error(exc, "/generation/generate") from exc

    response = _to_response(outcome)
    logger.info(
        "Generation successful (provider=%s, attempts=%d, duration_ms=%d)",
        response.provider.value,
        len(response.attempted),
        response.duration_ms,
    )
    return ok("Asset generated", data=response)


@router.post("/batch")
async def generate_batch(
    request: BatchGenerationRequest,
    service: GenerationService = Depends(get_generation_service),
) -> Dict[str, Any]:
    """Generate several assets concurrently; partial failures are reported per item."""

    logger.info("POST /generation/batch received (items=%d)", len(request.items))

    try:
        jobs = [_build_job(item) for item in request.items]
        outcomes = await service.generate_batch(jobs)
    except (ValidationError, ProviderError) as exc:
        raise _http_error(exc, "/generation/batch") from exc

    results: List[BatchItemResult] = []
    for index, outcome in enumerate(outcomes):
        if isinstance(outcome, Exception):
            results.append(BatchItemResult(index=index, success=False, error=format_error(outcome)))
        else:
            results.append(BatchItemResult(index=index, success=True, result=_to_response(outcome)))

    succeeded = sum(1 for item in results if item.success)
    response = BatchGenerationResponse(
        results=results,
        succeeded=succeeded,
        failed=len(results) - succeeded,
        total=len(results),
    )
    return ok(
        "Batch processed",
        data=response,
        meta={"succeeded": response.succeeded, "failed": response.failed},
    )


@router.get("/providers")
async def list_providers(
    service: GenerationService = Depends(get_generation_service),
) -> Dict[str, Any]:
    """Describe every image provider plus the active voice and text providers."""

    image = [
        ProviderStatusResponse(
            provider=status.provider,
            label=status.label,
            description=status.description,
            docs_url=status.docs_url,
            key_env_var=status.key_env_var,
            requires_key=status.requires_key,
            free=status.free,
            free_credits_note=status.free_credits_note,
            configured=status.configured,
            tools=list(status.tools),
            max_width=status.max_width,
            max_height=status.max_height,
            supports_seed=status.supports_seed,
            supports_negative_prompt=status.supports_negative_prompt,
        )
        for status in service.provider_status()
    ]

    def _modality(entry) -> ModalityProviderResponse | None:
        if entry is None:
            return None
        return ModalityProviderResponse(
            provider=entry.provider, model=entry.model, priority=entry.priority
        )

    return ok(
        "Providers listed",
        data={
            "image": image,
            "text": _modality(service.text_provider()),
            "voice": _modality(service.voice_provider()),
        },
    )


__all__ = ["router"]
