"""Tests for prompt, sizing, seed and HTTP helpers shared by the adapters."""

import httpx
import pytest

from config.image.styles import GLOBAL_NEGATIVES, STYLE_PRESET_TOKENS, TOOL_PREFIXES
from core.exceptions import ProviderError, ProviderTimeoutError, RateLimitError
from core.providers.image.utils.http import (
    classify_http_failure,
    is_skip_status,
    json_body,
    raise_for_status,
    response_detail,
    to_data_uri,
    transport_error,
)
from core.providers.image.utils.prompts import build_negative_prompt, build_prompt, semantic_hints
from core.providers.image.utils.seeds import MAX_SEED, resolve_seed
from core.providers.image.utils.sizing import snap_dimension
from core.providers.types import StylePreset, Tool
from tests.helpers import FakeResponse


@pytest.mark.parametrize(
    "value,expected",
    [
        (512, 512),
        (515, 512),
        (516, 520),
        (10, 256),
        (-5, 256),
        (5000, 1024),
    ],
)
def test_snap_dimension_rounds_and_clamps(value, expected):
    assert snap_dimension(value, 8, 256, 1024) == expected


def test_snap_dimension_with_coarse_multiple():
    assert snap_dimension(700, 64, 64, 1024) == 704
    assert snap_dimension(671, 64, 64, 1024) == 640


def test_explicit_seed_passes_through():
    assert resolve_seed(1234) == 1234


@pytest.mark.parametrize("seed", [None, 0, -3])
def test_missing_seed_is_randomised_in_range(seed):
    values = {resolve_seed(seed) for _ in range(20)}

    assert all(1 <= value < MAX_SEED for value in values)
    assert len(values) > 1


def test_build_prompt_orders_prefix_preset_hints_then_prompt(make_params):
    params = make_params(
        prompt="healing potion",
        style_preset=StylePreset.RPG_ICON,
        asset_category="item",
        pixel_era="snes",
        palette_size=16,
    )

    prompt = build_prompt(params)

    assert prompt.startswith(TOOL_PREFIXES["generate"])
    assert STYLE_PRESET_TOKENS["rpg_icon"] in prompt
    assert "16-bit SNES palette" in prompt
    assert "16-color palette" in prompt
    assert prompt.endswith("healing potion")


def test_compact_prompt_drops_semantic_hints(make_params):
    params = make_params(prompt="castle", asset_category="tile", pixel_era="nes")

    assert build_prompt(params, compact=True) == "pixel art, crisp edges, castle"


def test_raw_preset_adds_nothing(make_params):
    params = make_params(prompt="castle", style_preset="raw")

    assert build_prompt(params, compact=True) == "pixel art, crisp edges, castle"


def test_semantic_hints_ignore_unknown_values(make_params):
    params = make_params(asset_category="spaceship", palette_size=12, outline_style="Bold")

    assert semantic_hints(params) == ["bold black outline"]


def test_negative_prompt_merges_and_deduplicates(make_params):
    params = make_params(tool=Tool.SCENE, negative_prompt="Blurry, people , ")

    negative = build_negative_prompt(params).split(", ")

    assert negative[: len(GLOBAL_NEGATIVES)] == list(GLOBAL_NEGATIVES)
    assert "visible seams" in negative
    assert negative.count("blurry") == 1
    assert "Blurry" not in negative
    assert negative[-1] == "people"


@pytest.mark.parametrize("status", [402, 429, 500, 502, 503])
def test_quota_and_server_errors_are_skip_worthy(status):
    assert is_skip_status(status)


@pytest.mark.parametrize("status", [400, 401, 403, 404, 422])
def test_request_errors_are_not_skip_worthy(status):
    assert not is_skip_status(status)


def test_429_becomes_rate_limit_error():
    error = classify_http_failure("fal", 429, "slow down", retry_after=12)

    assert isinstance(error, RateLimitError)
    assert error.skip_provider is True
    assert error.retry_after == 12
    assert error.status_code == 429


def test_raise_for_status_reads_vendor_detail_and_retry_after():
    response = FakeResponse(429, {"detail": "quota exceeded"}, headers={"Retry-After": "30"})

    with pytest.raises(RateLimitError) as excinfo:
        raise_for_status("replicate", response, provider_job_id="p1")

    assert "quota exceeded" in str(excinfo.value)
    assert excinfo.value.retry_after == 30
    assert excinfo.value.provider_job_id == "p1"


def test_raise_for_status_ignores_success():
    raise_for_status("fal", FakeResponse(200, {}))


def test_response_detail_falls_back_to_text():
    assert response_detail(FakeResponse(500, text="upstream exploded")) == "upstream exploded"
    assert response_detail(FakeResponse(500, {"error": {"message": "boom"}})) == "boom"
    assert response_detail(FakeResponse(502)) == "HTTP 502"


def test_transport_errors_are_skip_worthy():
    timeout = transport_error("fal", httpx.ReadTimeout("slow"))
    refused = transport_error("fal", httpx.ConnectError("refused"))

    assert isinstance(timeout, ProviderTimeoutError)
    assert timeout.skip_provider is True
    assert refused.skip_provider is True
    assert isinstance(refused.original_error, httpx.ConnectError)


def test_json_body_rejects_non_json():
    with pytest.raises(ProviderError) as excinfo:
        json_body("prodia", FakeResponse(200, content=b"<html>"))

    assert excinfo.value.skip_provider is True


def test_to_data_uri_strips_content_type_parameters():
    assert to_data_uri(b"\x89PNG", "image/png; charset=binary") == "data:image/png;base64,iVBORw=="
    assert to_data_uri(b"abc").startswith("data:image/png;base64,")
