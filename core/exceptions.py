"""Custom exception hierarchy for the generation backend.
This module defines a typed exception hierarchy that enables precise error
handling and structured error responses across the application.

Exception Handling Flow:
    1. Provider adapters and services raise typed exceptions
    2. The generation service decides between failover and surfacing the error
    3. Route handlers convert them to structured JSON responses
    4. Client receives error envelope with code, message, and context

Failover contract:
    ``ProviderError.skip_provider`` is True when the provider itself is unusable
    for this request right now (quota, credit, 5xx, faulted job, timeout). The
    caller should move on to the next ranked provider. When False the request
    itself is likely malformed and retrying elsewhere would not help.
"""

from __future__ import annotations


class ServiceError(Exception):
    """Base exception for all service layer errors."""


class ValidationError(ServiceError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(self.message)


class ProviderError(ServiceError):
    """Raised when an external generation provider fails."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        original_error: Exception | None = None,
        *,
        status_code: int | None = None,
        provider_job_id: str | None = None,
        skip_provider: bool = False,
    ):
        self.message = message
        self.provider = provider
        self.original_error = original_error
        self.status_code = status_code
        self.provider_job_id = provider_job_id
        self.skip_provider = skip_provider
        super().__init__(self.message)


class ProviderTimeoutError(ProviderError):
    """Raised when a provider job does not reach a terminal state in time."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        *,
        provider_job_id: str | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(
            message,
            provider,
            original_error,
            provider_job_id=provider_job_id,
            skip_provider=True,
        )


class ProviderUnreachableError(ProviderError):
    """Raised when a self-hosted provider cannot be reached before submission."""

    def __init__(self, message: str, provider: str | None = None, host: str | None = None):
        super().__init__(message, provider, skip_provider=True)
        self.host = host


class RateLimitError(ProviderError):
    """Raised when a provider rate limit is exceeded."""

    def __init__(
        self,
        message: str,
        retry_after: int | None = None,
        provider: str | None = None,
        *,
        status_code: int | None = 429,
        provider_job_id: str | None = None,
    ):
        super().__init__(
            message,
            provider,
            status_code=status_code,
            provider_job_id=provider_job_id,
            skip_provider=True,
        )
        self.retry_after = retry_after


class ConfigurationError(ServiceError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, key: str | None = None):
        self.message = message
        self.key = key
        super().__init__(self.message)


__all__ = [
    "ConfigurationError",
    "ProviderError",
    "ProviderTimeoutError",
    "ProviderUnreachableError",
    "RateLimitError",
    "ServiceError",
    "ValidationError",
]
