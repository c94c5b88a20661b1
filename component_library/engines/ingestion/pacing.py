"""Fixed-interval pacing for sequential requests against a rate-limited host."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable

import structlog

log = structlog.get_logger("component_library.ingestion")


class FixedIntervalPacer:
    """Keep at least *interval* seconds between consecutive paced calls.

    Used as an async context manager around each request: entering waits
    for whatever is left of the interval since the previous call finished,
    leaving records the finish time. The first call never waits.
    """

    def __init__(
        self,
        interval: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] | None = None,
    ) -> None:
        if interval < 0:
            raise ValueError("interval must be >= 0")
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._last_finished: float | None = None

    async def wait(self) -> float:
        """Sleep until the next call is allowed; return the seconds slept."""
        if self._last_finished is None:
            return 0.0
        remaining = self.interval - (self._clock() - self._last_finished)
        if remaining <= 0:
            return 0.0
        log.debug("pacer.wait", seconds=round(remaining, 3))
        sleep = self._sleep or asyncio.sleep
        await sleep(remaining)
        return remaining

    def mark(self) -> None:
        """Record that a paced call has just finished."""
        self._last_finished = self._clock()

    def reset(self) -> None:
        self._last_finished = None

    async def __aenter__(self) -> FixedIntervalPacer:
        await self.wait()
        return self

    async def __aexit__(self, *exc: object) -> None:
        # failed calls count too: the host saw the request either way
        self.mark()
