"""Bounded exponential-backoff polling shared by every async-job adapter.

Replicate, fal.ai, Stable Horde, Prodia and ComfyUI all submit a job and poll
for it. Only the status request and the reading of its payload differ, so each
adapter passes a ``fetch_status`` coroutine and a ``classify`` function and the
state machine below does the rest::

    SUBMITTED -> PROCESSING -> SUCCEEDED   (return the last status payload)
                            -> FAILED      (ProviderError, skip_provider=True)
                            -> TIMED_OUT   (ProviderTimeoutError)

``sleep`` and ``monotonic`` are module attributes so tests can drive the loop
with a fake clock.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Awaitable, Callable, Optional, TypeVar

from core.exceptions import ProviderError, ProviderTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")

sleep = asyncio.sleep
monotonic = time.monotonic


class JobState(str, Enum):
    SUBMITTED = "submitted"
    PROCESSING = "processing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class PollPolicy:
    """Backoff schedule: ``initial_delay`` grows by ``multiplier`` up to ``max_delay``."""

    initial_delay: float
    multiplier: float
    max_delay: float
    deadline: float

    def bounded(self, seconds: float) -> "PollPolicy":
        """Return a copy whose deadline does not exceed ``seconds``."""

        if seconds <= 0 or seconds >= self.deadline:
            return self
        return replace(self, deadline=seconds)

    def next_delay(self, delay: float) -> float:
        return min(delay * self.multiplier, self.max_delay)


def elapsed_ms(started: float) -> int:
    """Milliseconds since ``started`` (a ``monotonic()`` reading)."""

    return int((monotonic() - started) * 1000)


async def poll_until_complete(
    fetch_status: Callable[[], Awaitable[T]],
    classify: Callable[[T], JobState],
    *,
    provider: str,
    job_id: Optional[str],
    policy: PollPolicy,
    cancel_event: Optional[asyncio.Event] = None,
    describe_failure: Optional[Callable[[T], str]] = None,
) -> T:
    """Poll until ``classify`` reports a terminal state or the deadline passes."""

    started = monotonic()
    delay = policy.initial_delay
    attempt = 0

    while True:
        if cancel_event is not None and cancel_event.is_set():
            logger.info(
                "%s job cancelled locally (job_id=%s, attempt=%d)", provider, job_id, attempt
            )
            raise asyncio.CancelledError(f"{provider} generation cancelled")

        remaining = policy.deadline - (monotonic() - started)
        if remaining <= 0:
            logger.warning(
                "%s job timed out after %.0fs (job_id=%s, polls=%d)",
                provider,
                policy.deadline,
                job_id,
                attempt,
            )
            raise ProviderTimeoutError(
                f"{provider} job did not finish within {policy.deadline:.0f}s",
                provider,
                provider_job_id=job_id,
            )

        await sleep(min(delay, remaining))
        delay = policy.next_delay(delay)
        attempt += 1

        status = await fetch_status()
        state = classify(status)
        logger.debug("%s poll %d (job_id=%s): %s", provider, attempt, job_id, state.value)

        if state is JobState.SUCCEEDED:
            return status
        if state is JobState.FAILED:
            detail = describe_failure(status) if describe_failure else "job failed"
            raise ProviderError(
                f"{provider} job failed: {detail}",
                provider,
                provider_job_id=job_id,
                skip_provider=True,
            )


__all__ = [
    "JobState",
    "PollPolicy",
    "elapsed_ms",
    "monotonic",
    "poll_until_complete",
    "sleep",
]
