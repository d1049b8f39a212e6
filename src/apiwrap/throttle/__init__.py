# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request throttling.

Available gates:
- RateGate: Thread-safe sliding-window gate for a single process
- AsyncRateGate: asyncio counterpart of RateGate
- RedisRateGate: Window shared across processes through Redis (requires redis extra)

Transport stages:
- RateThrottleTransport: httpx transport that acquires a gate before each request
- AsyncRateThrottleTransport: Async counterpart for httpx.AsyncClient

Note: RedisRateGate is lazily imported to avoid requiring the redis package
when only the in-process gates are used.
"""

from typing import TYPE_CHECKING, cast

from apiwrap.throttle.gate import AsyncRateGate, RateGate
from apiwrap.throttle.transport import AsyncRateThrottleTransport, RateThrottleTransport

# Lazy import for optional redis gate
if TYPE_CHECKING:
    from apiwrap.throttle.redis import RedisRateGate

__all__ = [
    "AsyncRateGate",
    "AsyncRateThrottleTransport",
    "RateGate",
    "RateThrottleTransport",
    # Redis gate (lazy loaded)
    "RedisRateGate",
]


def __getattr__(name: str) -> type:
    """Lazy import for optional redis gate."""
    if name == "RedisRateGate":
        try:
            from apiwrap.throttle import redis as redis_module

            return cast(type, getattr(redis_module, name))
        except ImportError as e:  # pragma: no cover
            raise ImportError(  # pragma: no cover
                f"'{name}' requires the 'redis' extra. "
                "Install with: pip install apiwrap[redis]"
            ) from e
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
