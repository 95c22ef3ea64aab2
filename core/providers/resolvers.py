"""Provider Resolvers - Adapter lookup and per-request provider configuration.

``resolve_provider_config`` turns environment values plus optional BYOK
("bring your own key") overrides into a ``ProviderConfig``. BYOK always wins,
and nothing here is cached, so a key supplied by one tenant never outlives its
request.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from config.image.defaults import (
    BYOK_SETTINGS_LOCATION,
    COMFYUI_HOST_ENV,
    DEFAULT_COMFYUI_HOST,
    DEFAULT_TIMEOUT_MS,
    GENERATION_TIMEOUT_ENV,
    KEY_REQUIRED_PROVIDERS,
    PROVIDER_KEY_ENV_VARS,
)
from config.image.providers import PROVIDER_CONFIG_MODULES
from core.exceptions import ConfigurationError
from core.providers.base import BaseImageProvider
from core.providers.registries import _image_providers
from core.providers.types import ProviderConfig, ProviderName, ProviderStatus
from core.utils.credentials import CredentialStore, default_credentials

logger = logging.getLogger(__name__)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def get_image_provider(provider: ProviderName | str) -> BaseImageProvider:
    """Return an adapter instance for ``provider``."""

    try:
        name = ProviderName(provider)
    except ValueError as exc:
        raise ConfigurationError(f"Unknown image provider: {provider}", key="provider") from exc

    if name not in _image_providers:
        raise ConfigurationError(
            f"Image provider {name.value} not registered. Available: {sorted(p.value for p in _image_providers)}",
            key=f"provider.{name.value}",
        )

    provider_class = _image_providers[name]
    logger.debug(
        "Resolved image provider instance %s for provider name %s",
        provider_class.__name__,
        name.value,
    )
    return provider_class()


def _timeout_ms(credentials: CredentialStore) -> int:
    raw = credentials.get(GENERATION_TIMEOUT_ENV)
    if raw is None:
        return DEFAULT_TIMEOUT_MS
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value <= 0:
        logger.warning(
            "Ignoring invalid %s=%r; using %d ms", GENERATION_TIMEOUT_ENV, raw, DEFAULT_TIMEOUT_MS
        )
        return DEFAULT_TIMEOUT_MS
    return value


def resolve_provider_config(
    provider: ProviderName | str,
    byok_key: Optional[str] = None,
    byok_host: Optional[str] = None,
    credentials: CredentialStore | None = None,
) -> ProviderConfig:
    """Build the per-request config. Total: unknown providers get an empty key."""

    credentials = default_credentials(credentials)
    name = str(provider.value if isinstance(provider, ProviderName) else provider).strip().lower()

    api_key = _clean(byok_key)
    if api_key is None:
        env_var = PROVIDER_KEY_ENV_VARS.get(name)
        api_key = (credentials.get(env_var) if env_var else None) or ""

    comfyui_host = None
    if name == ProviderName.COMFYUI.value:
        comfyui_host = _clean(byok_host) or credentials.get(COMFYUI_HOST_ENV) or DEFAULT_COMFYUI_HOST

    return ProviderConfig(
        api_key=api_key,
        comfyui_host=comfyui_host,
        timeout_ms=_timeout_ms(credentials),
    )


def assert_key_present(provider: ProviderName | str, config: ProviderConfig) -> None:
    """Raise ``ConfigurationError`` when a key-requiring provider has no key."""

    name = str(provider.value if isinstance(provider, ProviderName) else provider).strip().lower()
    if name not in KEY_REQUIRED_PROVIDERS or config.has_key:
        return

    env_var = PROVIDER_KEY_ENV_VARS[name]
    raise ConfigurationError(
        f"{name} requires an API key. Set {env_var} in the server environment "
        f"or add your own key under {BYOK_SETTINGS_LOCATION}.",
        key=env_var,
    )


def list_provider_status(credentials: CredentialStore | None = None) -> List[ProviderStatus]:
    """Describe every provider for the settings UI, in enum order."""

    credentials = default_credentials(credentials)
    statuses: List[ProviderStatus] = []
    for provider in ProviderName:
        settings = PROVIDER_CONFIG_MODULES[provider.value]
        env_var = PROVIDER_KEY_ENV_VARS.get(provider.value)
        capabilities = get_image_provider(provider).capabilities
        requires_key = capabilities.requires_key
        if provider is ProviderName.COMFYUI:
            configured = credentials.has(COMFYUI_HOST_ENV)
        elif requires_key:
            configured = credentials.has(env_var)
        else:
            configured = True
        statuses.append(
            ProviderStatus(
                provider=provider,
                label=settings.LABEL,
                description=settings.DESCRIPTION,
                docs_url=settings.DOCS_URL,
                key_env_var=env_var,
                requires_key=requires_key,
                free=capabilities.free,
                free_credits_note=settings.FREE_CREDITS_NOTE,
                configured=configured,
                tools=capabilities.tools,
                max_width=capabilities.max_width,
                max_height=capabilities.max_height,
                supports_seed=capabilities.supports_seed,
                supports_negative_prompt=capabilities.supports_negative_prompt,
            )
        )
    return statuses


__all__ = [
    "assert_key_present",
    "get_image_provider",
    "list_provider_status",
    "resolve_provider_config",
]
