"""Tests for the Together.ai adapter."""

import base64

import pytest

from config.image.providers import together as settings
from core.exceptions import ProviderError, RateLimitError
from core.providers.image import TogetherImageProvider
from core.providers.types import ProviderName
from tests.helpers import FakeAsyncClient, FakeResponse, install_fake_client

PNG = b"\x89PNG\r\n\x1a\nfake"


@pytest.mark.anyio
async def test_returns_data_uri_and_caps_steps(monkeypatch, make_params, keyed_config):
    client = install_fake_client(
        monkeypatch,
        FakeAsyncClient(
            post=[FakeResponse(200, {"id": "tg-1", "data": [{"b64_json": base64.b64encode(PNG).decode()}]})]
        ),
    )

    result = await TogetherImageProvider().generate(
        make_params(steps=30, seed=11, width=600, negative_prompt="people"), keyed_config
    )

    assert result.provider is ProviderName.TOGETHER
    assert result.result_url == "data:image/png;base64," + base64.b64encode(PNG).decode()
    assert result.provider_job_id == "tg-1"
    assert result.resolved_seed == 11

    url, kwargs = client.requests("POST")[0]
    assert url == f"{settings.API_BASE_URL}{settings.IMAGES_ENDPOINT}"
    body = kwargs["json"]
    assert body["model"] == settings.DEFAULT_MODEL
    assert body["steps"] == settings.MAX_STEPS
    assert body["width"] == 576
    assert body["seed"] == 11
    assert "negative_prompt" not in body


@pytest.mark.anyio
async def test_url_outputs_are_passed_through(monkeypatch, make_params, keyed_config):
    install_fake_client(
        monkeypatch, FakeAsyncClient(post=[FakeResponse(200, {"data": [{"url": "https://together.cdn/x.png"}]})])
    )

    result = await TogetherImageProvider().generate(make_params(), keyed_config)

    assert result.result_url == "https://together.cdn/x.png"


@pytest.mark.anyio
async def test_rate_limit_is_skip_worthy(monkeypatch, make_params, keyed_config):
    install_fake_client(monkeypatch, FakeAsyncClient(post=[FakeResponse(429, {"error": {"message": "rate limited"}})]))

    with pytest.raises(RateLimitError) as excinfo:
        await TogetherImageProvider().generate(make_params(), keyed_config)

    assert excinfo.value.skip_provider is True


@pytest.mark.anyio
async def test_empty_data_is_an_error(monkeypatch, make_params, keyed_config):
    install_fake_client(monkeypatch, FakeAsyncClient(post=[FakeResponse(200, {"data": []})]))

    with pytest.raises(ProviderError):
        await TogetherImageProvider().generate(make_params(), keyed_config)
