"""Tests for provider failover and batch generation."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from core.exceptions import ConfigurationError, ProviderError, RateLimitError
from core.providers.types import GenerateResult, ProviderName
from core.utils.credentials import StaticCredentialStore
from features.generation import service as service_module
from features.generation.service import GenerationJob, GenerationOutcome, GenerationService

HD_KEYS = StaticCredentialStore({"FAL_KEY": "env-fal", "REPLICATE_API_TOKEN": "env-rep", "TOGETHER_API_KEY": "env-tg"})


def _result(provider: ProviderName) -> GenerateResult:
    return GenerateResult(provider=provider, result_url=f"https://cdn.example/{provider.value}.png", resolved_seed=1)


def _dispatcher(outcomes):
    """Build a fake ``generate`` that replays ``outcomes[provider]``."""

    async def _generate(provider, params, config, *, cancel_event=None):
        outcome = outcomes[ProviderName(provider).value]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    return AsyncMock(side_effect=_generate)


@pytest.fixture
def hd_job(make_params):
    return GenerationJob(params=make_params(), mode="pixel", use_hd=True)


@pytest.mark.anyio
async def test_skip_worthy_failure_moves_to_next_candidate(monkeypatch, hd_job):
    fake = _dispatcher(
        {
            "fal": RateLimitError("quota", provider="fal"),
            "replicate": ProviderError("502", "replicate", status_code=502, skip_provider=True),
            "together": _result(ProviderName.TOGETHER),
        }
    )
    monkeypatch.setattr(service_module, "generate", fake)

    outcome = await GenerationService(HD_KEYS).generate_with_failover(hd_job)

    assert isinstance(outcome, GenerationOutcome)
    assert outcome.result.provider is ProviderName.TOGETHER
    assert outcome.attempted == (ProviderName.FAL, ProviderName.REPLICATE, ProviderName.TOGETHER)
    assert [call.args[0] for call in fake.await_args_list] == list(outcome.attempted)


@pytest.mark.anyio
async def test_non_skip_failure_is_raised_immediately(monkeypatch, hd_job):
    fake = _dispatcher({"fal": ProviderError("bad prompt", "fal", status_code=422)})
    monkeypatch.setattr(service_module, "generate", fake)

    with pytest.raises(ProviderError) as excinfo:
        await GenerationService(HD_KEYS).generate_with_failover(hd_job)

    assert excinfo.value.status_code == 422
    assert fake.await_count == 1


@pytest.mark.anyio
async def test_all_candidates_failing_raises_last_error(monkeypatch, hd_job):
    fake = _dispatcher(
        {
            name: ProviderError(f"{name} down", name, status_code=503, skip_provider=True)
            for name in ("fal", "replicate", "together", "pollinations")
        }
    )
    monkeypatch.setattr(service_module, "generate", fake)

    with pytest.raises(ProviderError) as excinfo:
        await GenerationService(HD_KEYS).generate_with_failover(hd_job)

    assert excinfo.value.provider == "pollinations"
    assert fake.await_count == 4


@pytest.mark.anyio
async def test_failover_disabled_tries_only_first_candidate(monkeypatch, make_params):
    fake = _dispatcher({"fal": ProviderError("down", "fal", skip_provider=True)})
    monkeypatch.setattr(service_module, "generate", fake)
    job = GenerationJob(params=make_params(), use_hd=True, failover=False)

    with pytest.raises(ProviderError):
        await GenerationService(HD_KEYS).generate_with_failover(job)

    assert fake.await_count == 1


@pytest.mark.anyio
async def test_byok_key_only_reaches_first_candidate(monkeypatch, hd_job):
    fake = _dispatcher(
        {
            "fal": ProviderError("down", "fal", skip_provider=True),
            "replicate": _result(ProviderName.REPLICATE),
        }
    )
    monkeypatch.setattr(service_module, "generate", fake)
    job = GenerationJob(params=hd_job.params, use_hd=True, byok_key="user-fal-key")

    await GenerationService(HD_KEYS).generate_with_failover(job)

    first_config = fake.await_args_list[0].args[2]
    second_config = fake.await_args_list[1].args[2]
    assert first_config.api_key == "user-fal-key"
    assert second_config.api_key == "env-rep"


@pytest.mark.anyio
async def test_pinned_provider_uses_byok_and_skips_routing(monkeypatch, make_params):
    fake = _dispatcher({"replicate": _result(ProviderName.REPLICATE)})
    monkeypatch.setattr(service_module, "generate", fake)
    job = GenerationJob(params=make_params(), provider=ProviderName.REPLICATE, byok_key="mine")

    outcome = await GenerationService(StaticCredentialStore()).generate_with_failover(job)

    assert outcome.attempted == (ProviderName.REPLICATE,)
    assert fake.await_args_list[0].args[2].api_key == "mine"


@pytest.mark.anyio
async def test_pinned_provider_without_key_raises_configuration_error(monkeypatch, make_params):
    fake = _dispatcher({})
    monkeypatch.setattr(service_module, "generate", fake)
    job = GenerationJob(params=make_params(), provider=ProviderName.FAL)

    with pytest.raises(ConfigurationError) as excinfo:
        await GenerationService(StaticCredentialStore()).generate_with_failover(job)

    assert excinfo.value.key == "FAL_KEY"
    assert fake.await_count == 0


@pytest.mark.anyio
async def test_no_credentials_lands_on_keyless_fallback(monkeypatch, make_params):
    fake = _dispatcher({"pollinations": _result(ProviderName.POLLINATIONS)})
    monkeypatch.setattr(service_module, "generate", fake)

    outcome = await GenerationService(StaticCredentialStore()).generate_with_failover(
        GenerationJob(params=make_params())
    )

    assert outcome.attempted == (ProviderName.POLLINATIONS,)


@pytest.mark.anyio
async def test_batch_returns_partial_results(monkeypatch, make_params):
    async def _generate(provider, params, config, *, cancel_event=None):
        if "fail" in params.prompt:
            raise ProviderError("bad request", provider.value, status_code=400)
        return _result(ProviderName(provider))

    monkeypatch.setattr(service_module, "generate", AsyncMock(side_effect=_generate))
    jobs = [
        GenerationJob(params=make_params(prompt="sword")),
        GenerationJob(params=make_params(prompt="fail me")),
        GenerationJob(params=make_params(prompt="shield")),
    ]

    results = await GenerationService(StaticCredentialStore()).generate_batch(jobs)

    assert len(results) == 3
    assert isinstance(results[0], GenerationOutcome)
    assert isinstance(results[1], ProviderError)
    assert isinstance(results[2], GenerationOutcome)


@pytest.mark.anyio
async def test_batch_runs_items_concurrently(monkeypatch, make_params):
    running = 0
    peak = 0

    async def _generate(provider, params, config, *, cancel_event=None):
        nonlocal running, peak
        running += 1
        peak = max(peak, running)
        await asyncio.sleep(0)
        running -= 1
        return _result(ProviderName(provider))

    monkeypatch.setattr(service_module, "generate", AsyncMock(side_effect=_generate))
    jobs = [GenerationJob(params=make_params(prompt=f"item {i}")) for i in range(4)]

    await GenerationService(StaticCredentialStore()).generate_batch(jobs)

    assert peak == 4


@pytest.mark.anyio
async def test_batch_raises_when_every_item_fails(monkeypatch, make_params):
    fake = _dispatcher({"pollinations": ProviderError("down", "pollinations", status_code=500, skip_provider=True)})
    monkeypatch.setattr(service_module, "generate", fake)
    jobs = [GenerationJob(params=make_params()) for _ in range(2)]

    with pytest.raises(ProviderError) as excinfo:
        await GenerationService(StaticCredentialStore()).generate_batch(jobs)

    assert "All 2 batch items failed" in str(excinfo.value)
    assert excinfo.value.status_code == 500


@pytest.mark.anyio
async def test_batch_propagates_cancellation(monkeypatch, make_params):
    fake = _dispatcher({"pollinations": asyncio.CancelledError()})
    monkeypatch.setattr(service_module, "generate", fake)

    with pytest.raises(asyncio.CancelledError):
        await GenerationService(StaticCredentialStore()).generate_batch([GenerationJob(params=make_params())])


@pytest.mark.anyio
async def test_empty_batch_returns_empty_list():
    assert await GenerationService(StaticCredentialStore()).generate_batch([]) == []


def test_provider_lookups_use_injected_credentials():
    service = GenerationService(StaticCredentialStore({"GROQ_API_KEY": "g"}))

    assert service.text_provider().provider == "groq"
    assert service.voice_provider() is None
    assert len(service.provider_status()) == len(ProviderName)
