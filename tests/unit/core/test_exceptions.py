"""Unit tests for custom exception hierarchy."""

from core.exceptions import (
    ConfigurationError,
    ProviderError,
    ProviderTimeoutError,
    ProviderUnreachableError,
    RateLimitError,
    ServiceError,
    ValidationError,
)


def test_validation_error():
    """ValidationError should capture message and field."""

    error = ValidationError("Invalid width", field="width")
    assert error.message == "Invalid width"
    assert error.field == "width"
    assert isinstance(error, ServiceError)


def test_provider_error():
    """ProviderError should retain provider and original exception."""

    original = ValueError("API failed")
    error = ProviderError("fal error", provider="fal", original_error=original)

    assert error.message == "fal error"
    assert error.provider == "fal"
    assert error.original_error is original
    assert error.skip_provider is False
    assert error.status_code is None
    assert isinstance(error, ServiceError)


def test_provider_timeout_is_always_skip_worthy():
    error = ProviderTimeoutError("too slow", "replicate", provider_job_id="p1")

    assert isinstance(error, ProviderError)
    assert error.skip_provider is True
    assert error.provider_job_id == "p1"


def test_provider_unreachable_keeps_host():
    error = ProviderUnreachableError("down", "comfyui", "http://127.0.0.1:8188")

    assert error.host == "http://127.0.0.1:8188"
    assert error.skip_provider is True


def test_configuration_error_required_key():
    """ConfigurationError should store the missing key."""

    error = ConfigurationError("Missing key", key="FAL_KEY")
    assert error.key == "FAL_KEY"


def test_rate_limit_error():
    """RateLimitError should include retry interval."""

    error = RateLimitError("Too many requests", retry_after=30)
    assert error.retry_after == 30
    assert error.status_code == 429
    assert error.skip_provider is True
