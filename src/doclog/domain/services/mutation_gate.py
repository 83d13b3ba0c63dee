"""Mutation gate - serializes log mutations within one event loop.

Every ``insert`` and ``delete`` holds the gate for its whole
read -> compute -> write cycle, so at most one mutation touches the log
file at a time. Waiters are granted the gate in arrival order
(``asyncio.Lock`` wakes its waiters FIFO).

Reads do not pass through the gate.

Thread Safety:
    Not thread-safe. One gate belongs to one event loop.
"""

from __future__ import annotations

import asyncio
import time
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator

if TYPE_CHECKING:
    from doclog.infrastructure.metrics import MetricsRegistry


class MutationGate:
    """FIFO mutual exclusion for log mutations."""

    def __init__(self, metrics: MetricsRegistry | None = None) -> None:
        self._lock = asyncio.Lock()
        self._metrics = metrics
        self._pending = 0

    @property
    def is_locked(self) -> bool:
        """True while a mutation holds the gate."""
        return self._lock.locked()

    @property
    def pending(self) -> int:
        """Mutations currently queued for or holding the gate."""
        return self._pending

    @asynccontextmanager
    async def hold(self) -> AsyncIterator[None]:
        """Wait for the gate and hold it for the body of the ``async with``."""
        self._enter_queue()
        started = time.perf_counter()
        try:
            await self._lock.acquire()
        except BaseException:
            self._leave_queue()
            raise

        if self._metrics is not None:
            self._metrics.gate_wait_seconds.observe(time.perf_counter() - started)
        try:
            yield
        finally:
            self._lock.release()
            self._leave_queue()

    def _enter_queue(self) -> None:
        self._pending += 1
        if self._metrics is not None:
            self._metrics.gate_waiters.inc()

    def _leave_queue(self) -> None:
        self._pending -= 1
        if self._metrics is not None:
            self._metrics.gate_waiters.dec()
