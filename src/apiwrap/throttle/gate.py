# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Sliding-window rate gates.

A gate admits at most ``limit`` requests per rolling ``period`` seconds and
blocks everyone else until a slot frees up. The window is the list of
admission timestamps still inside ``[now - period, now]``.

Admission loop (both variants)::

    purge timestamps older than now - period
    while len(window) >= limit:
        wait up to (oldest + period - now), releasing the lock
        purge again
    append now, wake all waiters

Waiters are woken by broadcast and re-check the window themselves, so a wake
never implies admission. Admission order under contention is NOT FIFO: any
woken waiter may win the freed slot.

Known limitations:
    - ``limit <= 0`` is a misconfiguration: ``acquire`` then waits forever.
      ClientConfig rejects such values before a gate is ever built.
    - A blocked ``acquire`` cannot be cancelled from the outside (the async
      variant honors task cancellation, the threaded one does not).
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
import time
from collections import deque
from collections.abc import Callable

from ..observability import ClientMetrics

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class _SlidingWindow:
    """Timestamp bookkeeping shared by the threaded and async gates."""

    def __init__(self, limit: int, period: float, clock: Clock) -> None:
        self.limit = limit
        self.period = period
        self.clock = clock
        self.requests: deque[float] = deque()

    def purge(self, now: float) -> None:
        horizon = now - self.period
        while self.requests and self.requests[0] < horizon:
            self.requests.popleft()

    def is_full(self) -> bool:
        return len(self.requests) >= self.limit

    def wait_time(self, now: float) -> float | None:
        """Seconds until the oldest entry expires, or None to wait for a wake."""
        if not self.requests:
            return None
        return self.requests[0] + self.period - now

    def admit(self) -> None:
        self.requests.append(self.clock())


class RateGate:
    """
    Thread-safe blocking rate gate.

    All reads and writes of the window happen under one
    ``threading.Condition``; waiting releases it (monitor pattern).

    Example:
        >>> gate = RateGate(limit=2, period=1.0)
        >>> gate.acquire()  # returns immediately
        >>> gate.acquire()  # returns immediately
        >>> gate.acquire()  # blocks for ~1 second
    """

    def __init__(
        self,
        limit: int,
        period: float,
        clock: Clock = time.monotonic,
        metrics: ClientMetrics | None = None,
    ) -> None:
        """
        Initialize the gate.

        Args:
            limit: Maximum admissions per window
            period: Window length in seconds
            clock: Monotonic clock in fractional seconds
            metrics: Optional sink for wait times
        """
        self._window = _SlidingWindow(limit, period, clock)
        self._condition = threading.Condition()
        self._metrics = metrics

    @property
    def limit(self) -> int:
        return self._window.limit

    @property
    def period(self) -> float:
        return self._window.period

    def acquire(self) -> None:
        window = self._window
        with self._condition:
            started = window.clock()
            waited = False
            window.purge(started)
            while window.is_full():
                timeout = window.wait_time(window.clock())
                if timeout is None or timeout > 0:
                    waited = True
                    self._condition.wait(timeout)
                window.purge(window.clock())
            window.admit()
            self._condition.notify_all()

        if waited:
            elapsed = window.clock() - started
            logger.debug(f"RateGate admitted request after waiting {elapsed:.3f}s")
            if self._metrics is not None:
                self._metrics.record_throttle_wait(elapsed)

    def in_window(self) -> int:
        """Number of admissions currently counted against the window."""
        with self._condition:
            self._window.purge(self._window.clock())
            return len(self._window.requests)


class AsyncRateGate:
    """
    Task-safe rate gate for asyncio code.

    Same algorithm as RateGate, using an ``asyncio.Condition``. A waiting
    task gives up the event loop instead of blocking a thread. Must be used
    from a single event loop.
    """

    def __init__(
        self,
        limit: int,
        period: float,
        clock: Clock = time.monotonic,
        metrics: ClientMetrics | None = None,
    ) -> None:
        self._window = _SlidingWindow(limit, period, clock)
        self._condition: asyncio.Condition | None = None
        self._metrics = metrics

    @property
    def limit(self) -> int:
        return self._window.limit

    @property
    def period(self) -> float:
        return self._window.period

    def _get_condition(self) -> asyncio.Condition:
        # Created lazily so the gate can be built outside a running loop.
        if self._condition is None:
            self._condition = asyncio.Condition()
        return self._condition

    async def acquire(self) -> None:
        window = self._window
        condition = self._get_condition()
        async with condition:
            started = window.clock()
            waited = False
            window.purge(started)
            while window.is_full():
                timeout = window.wait_time(window.clock())
                if timeout is None:
                    waited = True
                    await condition.wait()
                elif timeout > 0:
                    waited = True
                    with contextlib.suppress(asyncio.TimeoutError):
                        await asyncio.wait_for(condition.wait(), timeout)
                window.purge(window.clock())
            window.admit()
            condition.notify_all()

        if waited:
            elapsed = window.clock() - started
            logger.debug(f"AsyncRateGate admitted request after waiting {elapsed:.3f}s")
            if self._metrics is not None:
                self._metrics.record_throttle_wait(elapsed)


__all__ = ["AsyncRateGate", "RateGate"]
