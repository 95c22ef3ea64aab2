"""HTTP failure classification and payload helpers for image adapters."""

from __future__ import annotations

import base64
import logging
from typing import Any, Optional

import httpx

from core.exceptions import ProviderError, ProviderTimeoutError, RateLimitError

logger = logging.getLogger(__name__)

# Quota and credit exhaustion: the provider is unusable right now, not the request.
SKIP_STATUS_CODES = frozenset({402, 429})


def is_skip_status(status_code: int) -> bool:
    return status_code in SKIP_STATUS_CODES or status_code >= 500


def _retry_after(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    try:
        return max(int(float(value)), 0)
    except ValueError:
        return None


def response_detail(response: httpx.Response, limit: int = 300) -> str:
    """Return the vendor's error message, or a trimmed body."""

    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        for key in ("detail", "error", "message"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value[:limit]
            if isinstance(value, dict) and value.get("message"):
                return str(value["message"])[:limit]

    text = (response.text or "").strip()
    return text[:limit] or f"HTTP {response.status_code}"


def classify_http_failure(
    provider: str,
    status_code: int,
    detail: str,
    *,
    provider_job_id: Optional[str] = None,
    retry_after: Optional[int] = None,
) -> ProviderError:
    """Return the ``ProviderError`` for an HTTP error status.

    429, 402 and 5xx mean the provider is unusable for now and are marked
    ``skip_provider``; other 4xx are request-shape problems and are not.
    """

    message = f"{provider} returned HTTP {status_code}: {detail}"
    if status_code == 429:
        return RateLimitError(
            message,
            retry_after=retry_after,
            provider=provider,
            provider_job_id=provider_job_id,
        )
    return ProviderError(
        message,
        provider,
        status_code=status_code,
        provider_job_id=provider_job_id,
        skip_provider=is_skip_status(status_code),
    )


def raise_for_status(
    provider: str,
    response: httpx.Response,
    *,
    provider_job_id: Optional[str] = None,
) -> None:
    """Raise a classified ``ProviderError`` when ``response`` is an error."""

    if response.status_code < 400:
        return
    detail = response_detail(response)
    logger.error("%s API error %s: %s", provider, response.status_code, detail)
    raise classify_http_failure(
        provider,
        response.status_code,
        detail,
        provider_job_id=provider_job_id,
        retry_after=_retry_after(response.headers.get("retry-after")),
    )


def transport_error(
    provider: str,
    exc: httpx.HTTPError,
    *,
    provider_job_id: Optional[str] = None,
) -> ProviderError:
    """Wrap an httpx transport failure. Always skip-worthy."""

    if isinstance(exc, httpx.TimeoutException):
        return ProviderTimeoutError(
            f"{provider} request timed out",
            provider,
            provider_job_id=provider_job_id,
            original_error=exc,
        )
    return ProviderError(
        f"{provider} request failed: {exc.__class__.__name__}: {exc}",
        provider,
        exc,
        provider_job_id=provider_job_id,
        skip_provider=True,
    )


def json_body(provider: str, response: httpx.Response, *, provider_job_id: Optional[str] = None) -> Any:
    """Decode a JSON body, treating garbage as a provider fault."""

    try:
        return response.json()
    except ValueError as exc:
        raise ProviderError(
            f"{provider} returned a non-JSON response",
            provider,
            exc,
            status_code=response.status_code,
            provider_job_id=provider_job_id,
            skip_provider=True,
        ) from exc


def to_data_uri(content: bytes, content_type: Optional[str] = None) -> str:
    """Encode raw image bytes as a ``data:`` URI."""

    mime = (content_type or "image/png").split(";", 1)[0].strip() or "image/png"
    return f"data:{mime};base64," + base64.b64encode(content).decode("ascii")


__all__ = [
    "SKIP_STATUS_CODES",
    "classify_http_failure",
    "is_skip_status",
    "json_body",
    "raise_for_status",
    "response_detail",
    "to_data_uri",
    "transport_error",
]
