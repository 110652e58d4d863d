"""archive_scout.gate: counting permit pool bounding concurrent crawl sessions."""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Deque, Tuple

__all__ = ["ConcurrencyGate", "DEFAULT_CAPACITY"]

DEFAULT_CAPACITY = 50


class ConcurrencyGate:
    """Pool of permits shared by every crawl session of one composition root.

    Waiters are served strictly in arrival order, so a request for several
    permits cannot be starved by a stream of single-permit requests.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self._capacity = capacity
        self._in_use = 0
        self._waiters: Deque[Tuple[int, asyncio.Future[None]]] = deque()

    def __repr__(self) -> str:
        return f"<ConcurrencyGate in_use={self._in_use}/{self._capacity} waiting={len(self._waiters)}>"

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def in_use(self) -> int:
        return self._in_use

    @property
    def available(self) -> int:
        return self._capacity - self._in_use

    async def acquire(self, n: int = 1) -> None:
        """Block until *n* permits are free and take them."""
        if not 1 <= n <= self._capacity:
            raise ValueError(f"cannot acquire {n} permits from a gate of {self._capacity}")
        if not self._waiters and self.available >= n:
            self._in_use += n
            return

        fut: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        entry = (n, fut)
        self._waiters.append(entry)
        try:
            await fut
        except asyncio.CancelledError:
            if fut.done() and not fut.cancelled():
                # permits were handed over right before the cancellation
                self._in_use -= n
            elif entry in self._waiters:
                self._waiters.remove(entry)
            self._wake()
            raise

    def release(self, n: int = 1) -> None:
        """Return *n* permits to the pool."""
        if not 1 <= n <= self._in_use:
            raise ValueError(f"cannot release {n} permits, {self._in_use} in use")
        self._in_use -= n
        self._wake()

    def _wake(self) -> None:
        while self._waiters:
            n, fut = self._waiters[0]
            if fut.done():
                self._waiters.popleft()
                continue
            if self.available < n:
                break
            self._waiters.popleft()
            self._in_use += n
            fut.set_result(None)

    @asynccontextmanager
    async def permit(self, n: int = 1) -> AsyncIterator[None]:
        """``async with gate.permit():`` – hold *n* permits for the duration of the block."""
        await self.acquire(n)
        try:
            yield
        finally:
            self.release(n)
