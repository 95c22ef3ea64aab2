"""Shared fakes for provider and service tests."""

from .fake_http import FakeAsyncClient, FakeResponse, install_fake_client

__all__ = ["FakeAsyncClient", "FakeResponse", "install_fake_client"]
