"""In-flight request tracking so shutdown can drain before closing the database."""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from src.pnrelease.core.logging import get_logger

logger = get_logger(__name__)


class RequestTracker:
    def __init__(self) -> None:
        self._in_flight = 0
        self._shutting_down = False
        self._lock = asyncio.Lock()
        self._drained = asyncio.Event()

    @property
    def is_shutting_down(self) -> bool:
        return self._shutting_down

    @property
    def in_flight_count(self) -> int:
        return self._in_flight

    @asynccontextmanager
    async def track_request(self) -> AsyncGenerator[None]:
        async with self._lock:
            self._in_flight += 1
        try:
            yield
        finally:
            async with self._lock:
                self._in_flight -= 1
                if self._in_flight == 0 and self._shutting_down:
                    self._drained.set()

    async def start_shutdown(self) -> None:
        """Stop accepting tracked work; drained immediately if nothing is running."""
        self._shutting_down = True
        async with self._lock:
            if self._in_flight == 0:
                self._drained.set()
            else:
                logger.info("Waiting for in-flight requests", in_flight=self._in_flight)

    async def wait_for_drain(self, timeout: float) -> bool:
        """Wait until all tracked requests finished. False on timeout."""
        try:
            await asyncio.wait_for(self._drained.wait(), timeout=timeout)
        except TimeoutError:
            logger.warning(
                "Shutdown timeout, requests still in flight",
                timeout=timeout,
                in_flight=self._in_flight,
            )
            return False
        return True

    def reset(self) -> None:
        """Reset tracker state. For testing only."""
        self._in_flight = 0
        self._shutting_down = False
        self._drained = asyncio.Event()


request_tracker = RequestTracker()
