"""Credential-aware provider selection.

The resolvers here are pure lookups over the static tables in ``config``: no
I/O, no caching, and they never raise. Credential presence is asked of a
``CredentialStore`` on every call, so a rotated key takes effect immediately.
The image resolver always returns a provider because the keyless fallback is
always usable; the voice and text resolvers return ``None`` when nothing is
configured.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from config.image.defaults import KEY_REQUIRED_PROVIDERS, KEYLESS_FALLBACK_PROVIDER, PROVIDER_KEY_ENV_VARS
from config.image.routing import (
    FALLBACK_MODE,
    KEYLESS_FALLBACK,
    STYLE_OVERRIDES,
    PreferenceList,
    ProviderPreference,
    tier_matrix,
)
from config.text.routing import TEXT_STANDARD
from config.tts.routing import VOICE_STANDARD
from core.providers.types import ProviderEntry, ProviderName, Tool
from core.utils.credentials import CredentialStore, default_credentials

logger = logging.getLogger(__name__)


def _key(value: object) -> str:
    if isinstance(value, (Tool, ProviderName)):
        return value.value
    return str(value or "").strip().lower()


def _is_usable(preference: ProviderPreference, credentials: CredentialStore) -> bool:
    return preference.requires is None or credentials.has(preference.requires)


def _required_env(provider: str) -> Optional[str]:
    """Env var a provider cannot run without, or None for keyless/optional-key providers."""

    if provider in KEY_REQUIRED_PROVIDERS:
        return PROVIDER_KEY_ENV_VARS.get(provider)
    return None


def preference_list(mode: str, tool: Tool | str, use_hd: bool) -> PreferenceList:
    """Return the ranked preferences for ``(mode, tool)`` in the requested tier."""

    matrix = tier_matrix(use_hd)
    tool_key = _key(tool)
    mode_cells = matrix.get(_key(mode)) or matrix[FALLBACK_MODE]
    preferences = mode_cells.get(tool_key) or matrix[FALLBACK_MODE].get(tool_key)
    return preferences or KEYLESS_FALLBACK


def resolve_style_provider(
    style: Optional[str],
    use_hd: bool,
    credentials: CredentialStore | None = None,
) -> Optional[ProviderName]:
    """Return the style override provider, degrading across tiers, or ``None``.

    The requested tier's provider wins when usable. When it is named but its
    credential is missing, the other tier's provider is tried before giving up.
    A tier with no entry means the style has no opinion for that tier.
    """

    if not style:
        return None
    override = STYLE_OVERRIDES.get(_key(style))
    if override is None:
        return None

    credentials = default_credentials(credentials)
    requested, other = (override.hd, override.standard) if use_hd else (override.standard, override.hd)
    if requested is None:
        return None

    for candidate in (requested, other):
        if candidate is None:
            continue
        if _is_usable(ProviderPreference(candidate, _required_env(candidate)), credentials):
            if candidate != requested:
                logger.debug(
                    "Style override '%s' degraded to other tier provider %s", style, candidate
                )
            return ProviderName(candidate)
    return None


def resolve_optimal_provider(
    mode: str,
    tool: Tool | str,
    use_hd: bool,
    style: Optional[str] = None,
    credentials: CredentialStore | None = None,
) -> ProviderName:
    """Return the best usable image provider for the request. Never raises."""

    credentials = default_credentials(credentials)

    styled = resolve_style_provider(style, use_hd, credentials)
    if styled is not None:
        return styled

    for preference in preference_list(mode, tool, use_hd):
        if _is_usable(preference, credentials):
            return ProviderName(preference.provider)

    return ProviderName(KEYLESS_FALLBACK_PROVIDER)


def rank_providers(
    mode: str,
    tool: Tool | str,
    use_hd: bool,
    style: Optional[str] = None,
    credentials: CredentialStore | None = None,
) -> List[ProviderName]:
    """Return every usable candidate in resolver order, for failover.

    The first element always equals ``resolve_optimal_provider`` for the same
    arguments, and the keyless fallback is always included.
    """

    credentials = default_credentials(credentials)
    ranked: List[ProviderName] = []

    def _add(names: Iterable[str]) -> None:
        for name in names:
            provider = ProviderName(name)
            if provider not in ranked:
                ranked.append(provider)

    styled = resolve_style_provider(style, use_hd, credentials)
    if styled is not None:
        _add([styled.value])

    _add(
        preference.provider
        for preference in preference_list(mode, tool, use_hd)
        if _is_usable(preference, credentials)
    )
    _add([KEYLESS_FALLBACK_PROVIDER])
    return ranked


def _first_usable_entry(
    table: Iterable[tuple], credentials: CredentialStore
) -> Optional[ProviderEntry]:
    entries = sorted(
        (ProviderEntry(provider, model, priority, requires) for provider, model, priority, requires in table),
        key=lambda entry: entry.priority,
    )
    for entry in entries:
        if entry.requires is None or credentials.has(entry.requires):
            return entry
    return None


def resolve_voice_provider(credentials: CredentialStore | None = None) -> Optional[ProviderEntry]:
    """Return the first configured TTS provider, or ``None``."""

    return _first_usable_entry(VOICE_STANDARD, default_credentials(credentials))


def resolve_text_provider(credentials: CredentialStore | None = None) -> Optional[ProviderEntry]:
    """Return the first configured LLM provider, or ``None``."""

    return _first_usable_entry(TEXT_STANDARD, default_credentials(credentials))


__all__ = [
    "preference_list",
    "rank_providers",
    "resolve_optimal_provider",
    "resolve_style_provider",
    "resolve_text_provider",
    "resolve_voice_provider",
]
