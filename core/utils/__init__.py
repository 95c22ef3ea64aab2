"""Utility helpers shared across core packages.

Kept limited to environment and credential helpers so that ``config`` and
``core.providers`` can import them without pulling in feature modules.
"""

from .credentials import (
    CredentialStore,
    EnvironmentCredentialStore,
    StaticCredentialStore,
    default_credentials,
)
from .env import get_env, get_node_env, is_production

__all__ = [
    "CredentialStore",
    "EnvironmentCredentialStore",
    "StaticCredentialStore",
    "default_credentials",
    "get_env",
    "get_node_env",
    "is_production",
]
