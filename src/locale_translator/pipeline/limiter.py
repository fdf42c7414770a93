# SPDX-License-Identifier: Apache-2.0
"""Process-wide bound on concurrent backend calls."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any, TypeVar

T = TypeVar("T")


class RequestLimiter:
    """Fixed pool of permits shared by every backend call in a run.

    Create one instance per run and pass it to everything that talks to the
    backend. A permit is held only inside :meth:`permit` and is released on
    every exit path, including errors and cancellation.

    Attributes:
        capacity: Number of permits.
        in_flight: Permits currently held.
        peak: Highest ``in_flight`` value observed.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._capacity = capacity
        self._semaphore = asyncio.Semaphore(capacity)
        self._in_flight = 0
        self._peak = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def in_flight(self) -> int:
        return self._in_flight

    @property
    def peak(self) -> int:
        return self._peak

    @asynccontextmanager
    async def permit(self) -> AsyncIterator[None]:
        """Hold one permit for the duration of the ``async with`` block."""
        async with self._semaphore:
            self._in_flight += 1
            self._peak = max(self._peak, self._in_flight)
            try:
                yield
            finally:
                self._in_flight -= 1

    async def run(self, func: Callable[..., Awaitable[T]], *args: Any) -> T:
        """Await ``func(*args)`` while holding a permit."""
        async with self.permit():
            return await func(*args)
