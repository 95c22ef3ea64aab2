import logging

import pytest

from core.logging import setup_logging


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
    logging.getLogger("core.providers").setLevel(logging.NOTSET)


def test_provider_loggers_follow_their_own_level(monkeypatch, restore_logging):
    monkeypatch.setenv("BACKEND_LOG_LEVEL", "WARNING")
    monkeypatch.setenv("BACKEND_PROVIDER_LOG_LEVEL", "debug")
    monkeypatch.delenv("BACKEND_LOG_DIR", raising=False)

    setup_logging(force=True)

    assert logging.getLogger().level == logging.WARNING
    assert logging.getLogger("core.providers.image.fal").getEffectiveLevel() == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING


def test_invalid_levels_fall_back_to_defaults(monkeypatch, restore_logging):
    monkeypatch.setenv("BACKEND_LOG_LEVEL", "chatty")
    monkeypatch.delenv("BACKEND_PROVIDER_LOG_LEVEL", raising=False)
    monkeypatch.delenv("BACKEND_LOG_DIR", raising=False)

    setup_logging(force=True)

    assert logging.getLogger().level == logging.INFO
    assert logging.getLogger("core.providers").level == logging.INFO


def test_file_handler_is_added_when_log_dir_is_set(monkeypatch, tmp_path, restore_logging):
    monkeypatch.delenv("BACKEND_LOG_LEVEL", raising=False)
    monkeypatch.delenv("BACKEND_LOG_FILE_LEVEL", raising=False)
    monkeypatch.setenv("BACKEND_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("BACKEND_LOG_FILE", "generation.log")

    setup_logging(force=True)
    logging.getLogger("core.providers.routing").warning("routing check")
    for handler in logging.getLogger().handlers:
        handler.flush()

    log_file = tmp_path / "logs" / "generation.log"
    assert log_file.exists()
    assert "routing check" in log_file.read_text(encoding="utf-8")
