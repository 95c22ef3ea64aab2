"""Credential presence lookups used by the provider routers.

Routers only need to know whether a credential is present, so they talk to a
small ``CredentialStore`` instead of ``os.environ``. The environment-backed
store reads on every call, so rotated keys take effect without a restart.
"""

from __future__ import annotations

from typing import Mapping, Protocol, runtime_checkable

from core.utils.env import get_env

__all__ = [
    "CredentialStore",
    "EnvironmentCredentialStore",
    "StaticCredentialStore",
    "default_credentials",
]


@runtime_checkable
class CredentialStore(Protocol):
    """Capability query against a source of secrets."""

    def has(self, name: str) -> bool:
        ...

    def get(self, name: str) -> str | None:
        ...


class EnvironmentCredentialStore:
    """Credential store backed by the process environment."""

    def get(self, name: str) -> str | None:
        value = get_env(name)
        if value is None:
            return None
        value = value.strip()
        return value or None

    def has(self, name: str) -> bool:
        return self.get(name) is not None


class StaticCredentialStore:
    """Credential store backed by an explicit mapping (tests, per-request overrides)."""

    def __init__(self, values: Mapping[str, str | None] | None = None) -> None:
        self._values = {
            key: value.strip()
            for key, value in (values or {}).items()
            if value and value.strip()
        }

    def get(self, name: str) -> str | None:
        return self._values.get(name)

    def has(self, name: str) -> bool:
        return name in self._values

    def __repr__(self) -> str:
        # Only names, never values.
        return f"StaticCredentialStore(names={sorted(self._values)})"


_ENVIRONMENT_STORE = EnvironmentCredentialStore()


def default_credentials(credentials: CredentialStore | None = None) -> CredentialStore:
    """Return ``credentials`` or the shared environment-backed store."""

    return credentials if credentials is not None else _ENVIRONMENT_STORE
