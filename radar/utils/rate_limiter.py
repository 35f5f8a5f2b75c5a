"""Request limiter bounding both concurrency and request rate against an external provider."""

import asyncio
import logging
import time
from typing import Optional

logger = logging.getLogger(__name__)


class RequestLimiter:
    """Concurrency cap plus an optional sliding-window rate limit.

    One instance is created per ingestion run and passed to every
    component that talks to the provider, so the batching policy is
    explicit and there is no module-level state.

    Usage::

        limiter = RequestLimiter(max_concurrency=8, requests_per_minute=240)

        async with limiter:
            await client.fetch(query)
    """

    def __init__(
        self,
        max_concurrency: int = 8,
        requests_per_minute: Optional[int] = None,
        name: str = "default",
    ):
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")
        self._max_concurrency = max_concurrency
        self._rpm = requests_per_minute
        self._name = name
        self._semaphore: Optional[asyncio.Semaphore] = None
        self._window: list[float] = []
        self._window_lock: Optional[asyncio.Lock] = None
        self._total_requests = 0

    @property
    def max_concurrency(self) -> int:
        return self._max_concurrency

    @property
    def total_requests(self) -> int:
        """Number of slots handed out over the limiter's lifetime."""
        return self._total_requests

    def _primitives(self) -> tuple[asyncio.Semaphore, asyncio.Lock]:
        # Created lazily so the limiter can be built outside a running loop.
        if self._semaphore is None:
            self._semaphore = asyncio.Semaphore(self._max_concurrency)
            self._window_lock = asyncio.Lock()
        return self._semaphore, self._window_lock

    def _wait_time(self, now: float) -> float:
        """Seconds until the sliding window admits another request."""
        self._window = [t for t in self._window if now - t < 60.0]
        if self._rpm and len(self._window) >= self._rpm:
            return 60.0 - (now - self._window[0])
        return 0.0

    async def acquire(self) -> None:
        """Wait for a concurrency slot and, if configured, a rate slot."""
        semaphore, lock = self._primitives()
        await semaphore.acquire()
        try:
            async with lock:
                while True:
                    wait = self._wait_time(time.monotonic())
                    if wait <= 0:
                        break
                    logger.debug("RequestLimiter(%s) sleeping %.2fs", self._name, wait)
                    await asyncio.sleep(wait)
                self._window.append(time.monotonic())
        except BaseException:
            semaphore.release()
            raise
        self._total_requests += 1

    def release(self) -> None:
        semaphore, _ = self._primitives()
        semaphore.release()

    async def __aenter__(self):
        await self.acquire()
        return self

    async def __aexit__(self, *args):
        self.release()

    @property
    def requests_in_last_minute(self) -> int:
        """Number of requests admitted in the last 60 seconds."""
        now = time.monotonic()
        return sum(1 for t in self._window if now - t < 60.0)
