"""HTTP tests for the generation routes."""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from core.exceptions import ProviderError
from core.providers.types import GenerateResult, ProviderName
from core.utils.credentials import StaticCredentialStore
from features.generation import service as service_module
from features.generation.dependencies import get_generation_service
from features.generation.service import GenerationService
from main import app

BASE = "/api/v1/generation"


@pytest.fixture
def service_factory():
    def _install(**env: str) -> GenerationService:
        service = GenerationService(StaticCredentialStore(env))
        app.dependency_overrides[get_generation_service] = lambda: service
        return service

    yield _install
    app.dependency_overrides.clear()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def _fake_generate(monkeypatch, *, error: Exception | None = None) -> AsyncMock:
    async def _generate(provider, params, config, *, cancel_event=None):
        if error is not None:
            raise error
        if "broken" in params.prompt:
            raise ProviderError("bad request", ProviderName(provider).value, status_code=400)
        return GenerateResult(
            provider=ProviderName(provider),
            result_url="https://cdn.example/out.png",
            provider_job_id="job-1",
            result_urls=("https://cdn.example/out.png",),
            duration_ms=1200,
            resolved_seed=params.seed or 77,
        )

    fake = AsyncMock(side_effect=_generate)
    monkeypatch.setattr(service_module, "generate", fake)
    return fake


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_generate_routes_to_configured_provider(client, service_factory, monkeypatch):
    service_factory(TOGETHER_API_KEY="tk")
    fake = _fake_generate(monkeypatch)

    response = client.post(f"{BASE}/generate", json={"prompt": "a healing potion", "mode": "pixel", "seed": 5})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["provider"] == "together"
    assert body["data"]["attempted"] == ["together"]
    assert body["data"]["seed"] == 5
    assert body["data"]["result_urls"] == ["https://cdn.example/out.png"]
    params = fake.await_args_list[0].args[1]
    assert params.prompt == "a healing potion"


def test_generate_with_tool_extra(client, service_factory, monkeypatch):
    service_factory(REPLICATE_API_TOKEN="r", FAL_KEY="f")
    fake = _fake_generate(monkeypatch)

    response = client.post(
        f"{BASE}/generate",
        json={"prompt": "walk cycle", "tool": "animate", "use_hd": True, "extra": {"frames": 8, "fps": 12}},
    )

    assert response.status_code == 200
    assert response.json()["data"]["provider"] == "replicate"
    params = fake.await_args_list[0].args[1]
    assert params.animate.frames == 8
    assert params.animate.fps == 12


def test_extra_for_wrong_tool_is_a_validation_error(client, service_factory, monkeypatch):
    service_factory()
    _fake_generate(monkeypatch)

    response = client.post(f"{BASE}/generate", json={"prompt": "knight", "extra": {"frames": 8}})

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["error"] == "validation_error"
    assert detail["context"]["field"] == "extra"


def test_missing_inpaint_mask_is_a_validation_error(client, service_factory, monkeypatch):
    service_factory()
    _fake_generate(monkeypatch)

    response = client.post(
        f"{BASE}/generate",
        json={"prompt": "fix the hat", "tool": "inpaint", "extra": {"image_url": "https://u/i.png"}},
    )

    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "validation_error"


def test_empty_prompt_is_rejected_by_schema(client, service_factory):
    service_factory()

    response = client.post(f"{BASE}/generate", json={"prompt": ""})

    assert response.status_code == 422


def test_pinned_provider_without_key_is_a_configuration_error(client, service_factory, monkeypatch):
    service_factory()
    fake = _fake_generate(monkeypatch)

    response = client.post(f"{BASE}/generate", json={"prompt": "logo", "provider": "fal"})

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["error"] == "configuration_error"
    assert detail["context"]["key"] == "FAL_KEY"
    assert "Settings -> API Keys" in detail["message"]
    assert fake.await_count == 0


def test_pinned_provider_with_byok_key(client, service_factory, monkeypatch):
    service_factory()
    fake = _fake_generate(monkeypatch)

    response = client.post(
        f"{BASE}/generate", json={"prompt": "logo", "provider": "fal", "api_key": "user-key"}
    )

    assert response.status_code == 200
    assert fake.await_args_list[0].args[2].api_key == "user-key"


def test_provider_failure_maps_to_502(client, service_factory, monkeypatch):
    service_factory()
    _fake_generate(monkeypatch, error=ProviderError("boom", "pollinations", status_code=500, skip_provider=True))

    response = client.post(f"{BASE}/generate", json={"prompt": "castle"})

    assert response.status_code == 502
    detail = response.json()["detail"]
    assert detail["error"] == "provider_error"
    assert detail["context"]["provider"] == "pollinations"
    assert detail["context"]["skip_provider"] is True


def test_batch_reports_each_item(client, service_factory, monkeypatch):
    service_factory()
    _fake_generate(monkeypatch)

    response = client.post(
        f"{BASE}/batch",
        json={"items": [{"prompt": "sword"}, {"prompt": "broken shield"}, {"prompt": "bow"}]},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert (data["succeeded"], data["failed"], data["total"]) == (2, 1, 3)
    assert [item["success"] for item in data["results"]] == [True, False, True]
    assert data["results"][1]["error"]["error"] == "provider_error"
    assert data["results"][0]["result"]["provider"] == "pollinations"


def test_batch_with_every_item_failing_maps_to_502(client, service_factory, monkeypatch):
    service_factory()
    _fake_generate(monkeypatch)

    response = client.post(f"{BASE}/batch", json={"items": [{"prompt": "broken"}, {"prompt": "broken too"}]})

    assert response.status_code == 502


def test_batch_size_is_limited(client, service_factory):
    service_factory()

    response = client.post(f"{BASE}/batch", json={"items": [{"prompt": f"item {i}"} for i in range(17)]})

    assert response.status_code == 422


def test_providers_listing(client, service_factory):
    service_factory(FAL_KEY="f", HF_TOKEN="h")

    response = client.get(f"{BASE}/providers")

    assert response.status_code == 200
    data = response.json()["data"]
    assert [item["provider"] for item in data["image"]] == [name.value for name in ProviderName]
    fal = next(item for item in data["image"] if item["provider"] == "fal")
    assert fal["configured"] is True
    assert fal["key_env_var"] == "FAL_KEY"
    assert data["text"] is None
    assert data["voice"] == {"provider": "huggingface", "model": "hexgrad/Kokoro-82M", "priority": 1}


def test_oversize_dimensions_are_left_for_the_provider_to_clamp(client, service_factory, monkeypatch):
    service_factory()
    fake = _fake_generate(monkeypatch)

    response = client.post(f"{BASE}/generate", json={"prompt": "banner", "width": 8192, "height": 5000})

    assert response.status_code == 200
    params = fake.await_args_list[0].args[1]
    assert (params.width, params.height) == (8192, 5000)
