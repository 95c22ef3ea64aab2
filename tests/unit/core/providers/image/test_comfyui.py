"""Tests for the local ComfyUI adapter."""

import httpx
import pytest

from core.exceptions import ProviderError, ProviderTimeoutError, ProviderUnreachableError
from core.providers.image import ComfyUIImageProvider
from core.providers.image.comfyui import build_workflow
from core.providers.types import AnimateExtra, ProviderConfig, ProviderName, Tool
from tests.helpers import FakeAsyncClient, FakeResponse, install_fake_client

HOST = "http://gpu-box:8188"
STATS = FakeResponse(200, {"system": {"os": "posix"}})
QUEUED = FakeResponse(200, {"prompt_id": "c1", "number": 1, "node_errors": {}})
HISTORY_DONE = FakeResponse(
    200,
    {
        "c1": {
            "status": {"status_str": "success", "completed": True},
            "outputs": {"9": {"images": [{"filename": "asset_00001_.png", "subfolder": "", "type": "output"}]}},
        }
    },
)
VIEW = FakeResponse(200, content=b"png-bytes", headers={"Content-Type": "image/png"})


@pytest.mark.anyio
async def test_probe_submit_poll_and_download(monkeypatch, fake_clock, make_params):
    client = install_fake_client(
        monkeypatch,
        FakeAsyncClient(post=[QUEUED], get=[STATS, FakeResponse(200, {}), HISTORY_DONE, VIEW]),
    )

    result = await ComfyUIImageProvider().generate(
        make_params(seed=123), ProviderConfig(comfyui_host=HOST + "/")
    )

    assert result.provider is ProviderName.COMFYUI
    assert result.provider_job_id == "c1"
    assert result.resolved_seed == 123
    assert result.result_url.startswith("data:image/png;base64,")
    assert result.result_urls == (f"{HOST}/view?filename=asset_00001_.png&subfolder=&type=output",)

    gets = [url for url, _ in client.requests("GET")]
    assert gets[0] == f"{HOST}/system_stats"
    assert gets[1:3] == [f"{HOST}/history/c1", f"{HOST}/history/c1"]
    url, submit = client.requests("POST")[0]
    assert url == f"{HOST}/prompt"
    assert submit["json"]["prompt"]["3"]["inputs"]["seed"] == 123


@pytest.mark.anyio
async def test_unreachable_host_is_reported_before_submission(monkeypatch, fake_clock, make_params):
    client = install_fake_client(monkeypatch, FakeAsyncClient(get=[httpx.ConnectError("refused")], post=[QUEUED]))

    with pytest.raises(ProviderUnreachableError) as excinfo:
        await ComfyUIImageProvider().generate(make_params(), ProviderConfig(comfyui_host=HOST))

    assert excinfo.value.skip_provider is True
    assert excinfo.value.host == HOST
    assert HOST in str(excinfo.value)
    assert client.requests("POST") == []


@pytest.mark.anyio
async def test_workflow_validation_errors_are_not_skip_worthy(monkeypatch, fake_clock, make_params):
    install_fake_client(
        monkeypatch,
        FakeAsyncClient(
            get=[STATS],
            post=[FakeResponse(200, {"prompt_id": "c1", "node_errors": {"4": {"errors": ["ckpt not found"]}}})],
        ),
    )

    with pytest.raises(ProviderError) as excinfo:
        await ComfyUIImageProvider().generate(make_params(), ProviderConfig(comfyui_host=HOST))

    assert excinfo.value.skip_provider is False
    assert excinfo.value.status_code == 400


@pytest.mark.anyio
async def test_history_that_never_fills_times_out(monkeypatch, fake_clock, make_params):
    install_fake_client(
        monkeypatch, FakeAsyncClient(post=[QUEUED], get=[STATS, FakeResponse(200, {})])
    )

    with pytest.raises(ProviderTimeoutError) as excinfo:
        await ComfyUIImageProvider().generate(make_params(), ProviderConfig(comfyui_host=HOST, timeout_ms=25_000))

    assert excinfo.value.provider_job_id == "c1"
    assert fake_clock.now == pytest.approx(25.0)


def test_workflow_graph_wiring(make_params):
    params = make_params(
        tool=Tool.ANIMATE,
        extra=AnimateExtra(frames=12),
        width=1000,
        negative_prompt="blood",
        model_override="sdxl.safetensors",
    )

    workflow = build_workflow(params, seed=9)

    assert set(workflow) == {"3", "4", "5", "6", "7", "8", "9"}
    assert workflow["3"]["inputs"]["seed"] == 9
    assert workflow["4"]["inputs"]["ckpt_name"] == "sdxl.safetensors"
    assert workflow["5"]["inputs"] == {"width": 1000, "height": 512, "batch_size": 12}
    assert workflow["7"]["inputs"]["text"].endswith("blood")
    assert workflow["9"]["class_type"] == "SaveImage"
    assert workflow["8"]["inputs"]["samples"] == ["3", 0]
