"""Test configuration helpers."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Callable, List

import pytest

# Explicitly opt-in to the AnyIO plugin so ``@pytest.mark.anyio`` works even
# when plugin auto-discovery is disabled via ``PYTEST_DISABLE_PLUGIN_AUTOLOAD``.
pytest_plugins = ("anyio",)

# Ensure the repository root is importable so ``import core`` and
# ``import tests.helpers`` succeed from arbitrary working directories.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from core.providers.types import GenerateParams, ProviderConfig, Tool  # noqa: E402
from core.utils.credentials import StaticCredentialStore  # noqa: E402


class FakeClock:
    """Deterministic replacement for ``polling.monotonic`` and ``polling.sleep``."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: List[float] = []

    def monotonic(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def anyio_backend() -> str:
    """Default AnyIO backend used when tests do not override the fixture."""

    return "asyncio"


@pytest.fixture(scope="session", autouse=True)
def suppress_asyncio_debug_logging() -> None:
    """Prevent asyncio debug logs from writing to closed pytest capture streams."""

    logger = logging.getLogger("asyncio")
    if logger.getEffectiveLevel() < logging.INFO:
        logger.setLevel(logging.INFO)


@pytest.fixture
def fake_clock(monkeypatch) -> FakeClock:
    """Drive every poll loop and retry pause without real waiting."""

    from core.providers.image.utils import polling

    clock = FakeClock()
    monkeypatch.setattr(polling, "monotonic", clock.monotonic)
    monkeypatch.setattr(polling, "sleep", clock.sleep)
    return clock


@pytest.fixture
def credentials() -> Callable[..., StaticCredentialStore]:
    """Factory for credential stores: ``credentials(FAL_KEY="x")``."""

    def _factory(**values: str) -> StaticCredentialStore:
        return StaticCredentialStore(values)

    return _factory


@pytest.fixture
def make_params() -> Callable[..., GenerateParams]:
    def _factory(**overrides) -> GenerateParams:
        values = {"tool": Tool.GENERATE, "prompt": "a red potion bottle"}
        values.update(overrides)
        return GenerateParams(**values)

    return _factory


@pytest.fixture
def keyed_config() -> ProviderConfig:
    return ProviderConfig(api_key="test-key", timeout_ms=300_000)
