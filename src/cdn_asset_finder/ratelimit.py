from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Tuple

import httpx

logger = logging.getLogger(__name__)

RATE_LIMIT_FALLBACK_WAIT = 60.0

QuotaLookup = Callable[[], Awaitable[Tuple[int, float]]]


@dataclass
class RateLimitState:
    """Epoch seconds at which the exhausted quota resets, or None."""

    reset_at: Optional[float] = None


class RateLimiter:
    """Blocks callers until the API quota has capacity.

    ``quota`` returns ``(remaining, reset_epoch_seconds)`` for the bucket being
    guarded. Every remote call should ``await ensure_capacity()`` first; it
    never raises, the worst case is a delay.
    """

    def __init__(
        self,
        quota: QuotaLookup,
        state: Optional[RateLimitState] = None,
        *,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        fallback_wait: float = RATE_LIMIT_FALLBACK_WAIT,
    ):
        self._quota = quota
        self.state = state if state is not None else RateLimitState()
        self._clock = clock
        self._sleep = sleep
        self._fallback_wait = fallback_wait

    async def ensure_capacity(self) -> None:
        reset_at = self.state.reset_at
        if reset_at is not None and self._clock() < reset_at:
            await self._wait_until(reset_at, "Rate limit exceeded.")

        try:
            remaining, reset = await self._quota()
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
            logger.error("Error fetching rate limit: %s", e)
            self.state.reset_at = self._clock() + self._fallback_wait
            await self._wait_until(self.state.reset_at, "Rate limit unknown.")
            return

        if remaining == 0:
            self.state.reset_at = float(reset)
            await self._wait_until(self.state.reset_at, "Rate limit exceeded.")
        else:
            self.state.reset_at = None

    async def _wait_until(self, reset_at: float, reason: str) -> None:
        to_wait = max(0.0, reset_at - self._clock())
        logger.warning("%s Waiting for %.1f seconds.", reason, to_wait)
        if to_wait > 0:
            await self._sleep(to_wait)
