"""Tests for the keyless Pollinations adapter."""

from urllib.parse import unquote

import httpx
import pytest

from config.image.providers import pollinations as settings
from core.exceptions import ProviderError
from core.providers.image import PollinationsImageProvider
from core.providers.image.utils.prompts import build_negative_prompt
from core.providers.types import ProviderConfig, ProviderName, StylePreset
from tests.helpers import FakeAsyncClient, FakeResponse, install_fake_client

IMAGE = FakeResponse(200, content=b"jpeg-bytes", headers={"Content-Type": "image/jpeg"})


@pytest.mark.anyio
async def test_prompt_in_path_and_options_in_query(monkeypatch, fake_clock, make_params):
    client = install_fake_client(monkeypatch, FakeAsyncClient(get=[IMAGE]))
    params = make_params(
        prompt="sword / shield",
        seed=21,
        width=250,
        style_preset=StylePreset.RAW,
        negative_prompt="text",
    )

    result = await PollinationsImageProvider().generate(params, ProviderConfig())

    assert result.provider is ProviderName.POLLINATIONS
    assert result.result_url.startswith("data:image/jpeg;base64,")
    assert result.resolved_seed == 21

    url, kwargs = client.requests("GET")[0]
    assert url.startswith(f"{settings.PROMPT_BASE_URL}/")
    assert "/" not in url[len(settings.PROMPT_BASE_URL) + 1 :]
    assert unquote(url.rsplit("/", 1)[1]) == "pixel art, crisp edges, sword / shield"
    assert kwargs["params"] == {
        "width": 248,
        "height": 512,
        "seed": 21,
        "model": settings.DEFAULT_MODEL,
        "nologo": "true",
        "private": "true",
        "negative_prompt": build_negative_prompt(params),
    }
    assert kwargs["params"]["negative_prompt"].endswith("text")
    assert client.init_kwargs["follow_redirects"] is True


@pytest.mark.anyio
async def test_default_exclusions_are_sent_without_user_negatives(monkeypatch, fake_clock, make_params):
    client = install_fake_client(monkeypatch, FakeAsyncClient(get=[IMAGE]))
    params = make_params()

    await PollinationsImageProvider().generate(params, ProviderConfig())

    sent = client.requests("GET")[0][1]["params"]
    assert sent["negative_prompt"] == build_negative_prompt(params)
    assert sent["negative_prompt"]
    assert "negative" not in sent


@pytest.mark.anyio
async def test_server_errors_are_retried_with_growing_pauses(monkeypatch, fake_clock, make_params):
    client = install_fake_client(
        monkeypatch, FakeAsyncClient(get=[FakeResponse(502, text="bad gateway"), httpx.ReadError("reset"), IMAGE])
    )

    result = await PollinationsImageProvider().generate(make_params(), ProviderConfig())

    assert result.result_url.startswith("data:image/jpeg")
    assert fake_clock.sleeps == [2.0, 4.0]
    assert len(client.requests("GET")) == 3


@pytest.mark.anyio
async def test_persistent_server_error_surfaces_after_retries(monkeypatch, fake_clock, make_params):
    client = install_fake_client(monkeypatch, FakeAsyncClient(get=[FakeResponse(500, text="down")]))

    with pytest.raises(ProviderError) as excinfo:
        await PollinationsImageProvider().generate(make_params(), ProviderConfig())

    assert excinfo.value.status_code == 500
    assert excinfo.value.skip_provider is True
    assert len(client.requests("GET")) == settings.MAX_RETRIES + 1


@pytest.mark.anyio
async def test_client_errors_are_not_retried(monkeypatch, fake_clock, make_params):
    client = install_fake_client(monkeypatch, FakeAsyncClient(get=[FakeResponse(400, text="prompt too long")]))

    with pytest.raises(ProviderError) as excinfo:
        await PollinationsImageProvider().generate(make_params(), ProviderConfig())

    assert excinfo.value.skip_provider is False
    assert len(client.requests("GET")) == 1


@pytest.mark.anyio
@pytest.mark.parametrize(
    "failure",
    [httpx.TooManyRedirects("redirect loop"), httpx.DecodingError("bad gzip")],
)
async def test_non_transport_http_errors_are_wrapped(monkeypatch, fake_clock, make_params, failure):
    client = install_fake_client(monkeypatch, FakeAsyncClient(get=[failure]))

    with pytest.raises(ProviderError) as excinfo:
        await PollinationsImageProvider().generate(make_params(), ProviderConfig())

    assert excinfo.value.skip_provider is True
    assert excinfo.value.original_error is failure
    assert len(client.requests("GET")) == 1
    assert fake_clock.sleeps == []


@pytest.mark.anyio
async def test_oversize_request_is_clamped_silently(monkeypatch, fake_clock, make_params):
    client = install_fake_client(monkeypatch, FakeAsyncClient(get=[IMAGE]))

    await PollinationsImageProvider().generate(make_params(width=8192, height=5000), ProviderConfig())

    sent = client.requests("GET")[0][1]["params"]
    assert (sent["width"], sent["height"]) == (settings.MAX_DIMENSION, settings.MAX_DIMENSION)
