"""
Pacing -- admission policy for outbound LLM calls within one request.

The pipeline asks the pacer before each call; the pacer decides how long
to wait. The default policy is a fixed delay between consecutive calls,
which keeps a single request from bursting the provider's rate limit.
Swapping the policy (token bucket, no delay) does not touch the pipeline.

Create one pacer per request: pacers hold per-run state.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None]]


@runtime_checkable
class Pacer(Protocol):
    """Interface for call admission policies."""

    async def acquire(self) -> None: ...

    def reset(self) -> None: ...


class FixedIntervalPacer:
    """
    First acquisition is immediate; every later one waits `interval_seconds`.

    Usage:
        pacer = FixedIntervalPacer(0.5)
        for rule in rules:
            await pacer.acquire()
            await evaluator.evaluate(rule, text)
    """

    def __init__(self, interval_seconds: float = 0.5, sleep: SleepFn | None = None):
        if interval_seconds < 0:
            raise ValueError(f"interval_seconds must be >= 0 (got {interval_seconds})")
        self._interval = interval_seconds
        self._sleep = sleep or asyncio.sleep
        self._acquired = 0

    @property
    def acquired(self) -> int:
        """Number of acquisitions since creation or the last reset."""
        return self._acquired

    async def acquire(self) -> None:
        if self._acquired > 0 and self._interval > 0:
            logger.debug(f"[Pacer] Waiting {self._interval:.2f}s before next call")
            await self._sleep(self._interval)
        self._acquired += 1

    def reset(self) -> None:
        self._acquired = 0


class NoopPacer:
    """Never waits. For tests and self-hosted models without rate limits."""

    async def acquire(self) -> None:
        return None

    def reset(self) -> None:
        return None
