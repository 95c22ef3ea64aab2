"""Structured HTTP error payloads for service exceptions.

Routes translate typed exceptions into ``HTTPException`` details with the
shape ``{"error": <kind>, "message": <text>, "context": {...}}``; ``context``
is omitted when empty. Batch results embed the same payload per failed item.
"""

from __future__ import annotations

from typing import Any, Dict

from core.exceptions import (
    ConfigurationError,
    ProviderError,
    ServiceError,
    ValidationError,
)

# Request-level failures are the caller's to fix; provider failures are upstream.
_STATUS_BY_KIND = (
    (ValidationError, 400),
    (ConfigurationError, 400),
    (ProviderError, 502),
)


def _payload(kind: str, exc: Exception, context: Dict[str, Any] | None = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"error": kind, "message": str(exc)}
    if context:
        payload["context"] = context
    return payload


def format_validation_error(exc: ValidationError) -> Dict[str, Any]:
    """Return a standard payload for :class:`ValidationError`."""

    return _payload("validation_error", exc, {"field": exc.field} if exc.field else None)


def format_configuration_error(exc: ConfigurationError) -> Dict[str, Any]:
    """Return a standard payload for :class:`ConfigurationError`.

    ``context.key`` names the environment variable the operator (or the user,
    via BYOK) has to supply.
    """

    return _payload("configuration_error", exc, {"key": exc.key} if exc.key else None)


def format_provider_error(exc: ProviderError) -> Dict[str, Any]:
    """Return a standard payload for :class:`ProviderError`.

    ``skip_provider`` is always present so clients can tell a provider outage
    from a request the provider rejected.
    """

    context: Dict[str, Any] = {}
    if exc.provider:
        context["provider"] = exc.provider
    if exc.status_code is not None:
        context["status_code"] = exc.status_code
    if exc.provider_job_id:
        context["provider_job_id"] = exc.provider_job_id
    if exc.original_error is not None:
        context["original_error"] = str(exc.original_error)
    context["skip_provider"] = exc.skip_provider
    retry_after = getattr(exc, "retry_after", None)
    if retry_after is not None:
        context["retry_after"] = retry_after
    return _payload("provider_error", exc, context)


def format_service_error(exc: ServiceError) -> Dict[str, Any]:
    """Return a standard payload for generic service errors."""

    return _payload("service_error", exc)


def format_error(exc: Exception) -> Dict[str, Any]:
    """Dispatch to the matching formatter; unknown errors are not echoed back."""

    if isinstance(exc, ValidationError):
        return format_validation_error(exc)
    if isinstance(exc, ConfigurationError):
        return format_configuration_error(exc)
    if isinstance(exc, ProviderError):
        return format_provider_error(exc)
    if isinstance(exc, ServiceError):
        return format_service_error(exc)
    return {"error": "internal_error", "message": "Internal server error"}


def status_code_for(exc: Exception) -> int:
    for kind, status_code in _STATUS_BY_KIND:
        if isinstance(exc, kind):
            return status_code
    return 500


__all__ = [
    "format_configuration_error",
    "format_error",
    "format_provider_error",
    "format_service_error",
    "format_validation_error",
    "status_code_for",
]
