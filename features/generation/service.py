"""Business logic for asset generation: provider failover and batch fan-out."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

from core.exceptions import ConfigurationError, ProviderError
from core.providers import (
    assert_key_present,
    generate,
    list_provider_status,
    rank_providers,
    resolve_provider_config,
    resolve_text_provider,
    resolve_voice_provider,
)
from core.providers.types import GenerateParams, GenerateResult, ProviderEntry, ProviderName, ProviderStatus
from core.utils.credentials import CredentialStore, default_credentials

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GenerationJob:
    """One request plus its routing inputs and optional BYOK overrides."""

    params: GenerateParams
    mode: str = "pixel"
    use_hd: bool = False
    style: Optional[str] = None
    provider: Optional[ProviderName] = None
    failover: bool = True
    byok_key: Optional[str] = field(default=None, repr=False)
    byok_host: Optional[str] = None


@dataclass(frozen=True, slots=True)
class GenerationOutcome:
    result: GenerateResult
    attempted: Tuple[ProviderName, ...]


BatchOutcome = Union[GenerationOutcome, Exception]


class GenerationService:
    """Coordinate routing, credential checks and adapter dispatch."""

    def __init__(self, credentials: CredentialStore | None = None) -> None:
        self._credentials = default_credentials(credentials)

    def candidates(self, job: GenerationJob) -> List[ProviderName]:
        """Providers to try, in order."""

        if job.provider is not None:
            return [ProviderName(job.provider)]
        ranked = rank_providers(
            job.mode, job.params.tool, job.use_hd, job.style, credentials=self._credentials
        )
        return ranked if job.failover else ranked[:1]

    async def generate_with_failover(
        self,
        job: GenerationJob,
        *,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> GenerationOutcome:
        """Run ``job`` on the ranked candidates until one succeeds.

        A ``ProviderError`` with ``skip_provider`` moves on to the next candidate;
        any other error is raised immediately. The BYOK key only applies to the
        first candidate, which is the pinned provider when one is given.
        """

        candidates = self.candidates(job)
        attempted: List[ProviderName] = []
        last_error: Optional[ProviderError] = None
        config_error: Optional[ConfigurationError] = None

        for index, provider in enumerate(candidates):
            config = resolve_provider_config(
                provider,
                byok_key=job.byok_key if index == 0 else None,
                byok_host=job.byok_host,
                credentials=self._credentials,
            )
            try:
                assert_key_present(provider, config)
            except ConfigurationError as exc:
                if len(candidates) == 1:
                    raise
                logger.warning("Skipping %s: %s", provider.value, exc)
                config_error = config_error or exc
                continue

            attempted.append(provider)
            try:
                result = await generate(provider, job.params, config, cancel_event=cancel_event)
            except ProviderError as exc:
                if not exc.skip_provider:
                    raise
                logger.warning(
                    "Provider %s failed (status=%s, job_id=%s); trying next candidate",
                    provider.value,
                    exc.status_code,
                    exc.provider_job_id,
                    extra={"provider": provider.value, "attempt": len(attempted)},
                )
                last_error = exc
                continue

            if len(attempted) > 1:
                logger.info(
                    "Generation succeeded on %s after %d attempt(s)", provider.value, len(attempted)
                )
            return GenerationOutcome(result=result, attempted=tuple(attempted))

        if last_error is not None:
            raise last_error
        if config_error is not None:
            raise config_error
        raise ProviderError("No provider candidates available", skip_provider=False)

    async def generate_batch(
        self,
        jobs: Sequence[GenerationJob],
        *,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> List[BatchOutcome]:
        """Run ``jobs`` concurrently; partial success is returned as-is.

        Each element is either a ``GenerationOutcome`` or the exception that item
        raised. Raises only when every item failed.
        """

        results = await asyncio.gather(
            *(self.generate_with_failover(job, cancel_event=cancel_event) for job in jobs),
            return_exceptions=True,
        )

        for item in results:
            if isinstance(item, asyncio.CancelledError):
                raise item
            if isinstance(item, BaseException) and not isinstance(item, Exception):
                raise item

        failures = [item for item in results if isinstance(item, Exception)]
        if jobs and len(failures) == len(results):
            logger.error("All %d batch items failed", len(results))
            first = failures[0]
            raise ProviderError(
                f"All {len(results)} batch items failed: {first}",
                getattr(first, "provider", None),
                first,
                status_code=getattr(first, "status_code", None),
            )

        logger.info("Batch finished: %d/%d succeeded", len(results) - len(failures), len(results))
        return list(results)

    def provider_status(self) -> List[ProviderStatus]:
        return list_provider_status(self._credentials)

    def text_provider(self) -> Optional[ProviderEntry]:
        return resolve_text_provider(self._credentials)

    def voice_provider(self) -> Optional[ProviderEntry]:
        return resolve_voice_provider(self._credentials)


__all__ = ["BatchOutcome", "GenerationJob", "GenerationOutcome", "GenerationService"]
