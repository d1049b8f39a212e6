# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Distributed sliding-window rate gate backed by Redis.

RedisRateGate shares one admission window across every process that points
at the same Redis key. The purge / count / admit step runs as one atomic Lua
script over a sorted set scored by Redis server time, so clocks of the
participating hosts never need to agree.

Waiting happens outside Redis: a refused caller sleeps for the wait time the
script returns (capped at ``poll_interval``) and tries again. There is no
cross-process wake-up, so admission order is not FIFO.

Requires the ``redis`` extra::

    pip install apiwrap[redis]
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any

from redis.exceptions import NoScriptError

from ..observability import ClientMetrics

logger = logging.getLogger(__name__)

# KEYS[1]: window key
# ARGV[1]: period (seconds), ARGV[2]: limit, ARGV[3]: unique member
# Returns {1, "0"} when admitted, {0, "<seconds to wait>"} otherwise.
ACQUIRE_SCRIPT = """
local key = KEYS[1]
local period = tonumber(ARGV[1])
local limit = tonumber(ARGV[2])
local member = ARGV[3]

local t = redis.call('TIME')
local now = tonumber(t[1]) + tonumber(t[2]) / 1000000

redis.call('ZREMRANGEBYSCORE', key, '-inf', '(' .. (now - period))

local count = redis.call('ZCARD', key)
if count < limit then
    redis.call('ZADD', key, now, member)
    redis.call('PEXPIRE', key, math.ceil(period * 1000))
    return {1, '0'}
end

local oldest = redis.call('ZRANGE', key, 0, 0, 'WITHSCORES')
local wait = tonumber(oldest[2]) + period - now
return {0, tostring(wait)}
"""


class RedisRateGate:
    """
    Rate gate whose window lives in a Redis sorted set.

    Example:
        >>> import redis
        >>> gate = RedisRateGate(redis.Redis(), key="crm-api", limit=300, period=60)
        >>> client = APIClient(endpoint="https://crm.example.com/", rate_gate=gate)
    """

    def __init__(
        self,
        redis_client: Any,
        key: str,
        limit: int,
        period: float,
        poll_interval: float = 0.5,
        namespace: str = "apiwrap:rate",
        metrics: ClientMetrics | None = None,
    ) -> None:
        """
        Initialize the gate.

        Args:
            redis_client: A synchronous ``redis.Redis`` (or compatible) client
            key: Name of the shared window; processes using the same key share it
            limit: Maximum admissions per window
            period: Window length in seconds
            poll_interval: Longest single sleep between admission attempts
            namespace: Prefix for the Redis key
            metrics: Optional sink for wait times
        """
        self._redis = redis_client
        self.key = f"{namespace}:{key}"
        self.limit = limit
        self.period = period
        self.poll_interval = poll_interval
        self._metrics = metrics
        self._script_sha: str | None = None

    def _load_script(self) -> str:
        self._script_sha = self._redis.script_load(ACQUIRE_SCRIPT)
        return self._script_sha

    def _evalsha_with_reload(self, *args: Any) -> Any:
        """
        Run the acquire script, reloading it once if Redis lost it.

        Raises:
            NoScriptError: If reload and retry also fails
            Other Redis exceptions: Passed through unchanged
        """
        script_sha = self._script_sha or self._load_script()
        try:
            return self._redis.evalsha(script_sha, 1, self.key, *args)
        except NoScriptError:
            logger.warning(
                f"Rate gate script not found in Redis (SHA: {script_sha}). Reloading..."
            )
            return self._redis.evalsha(self._load_script(), 1, self.key, *args)

    def try_acquire(self) -> tuple[bool, float]:
        """
        Make one admission attempt.

        Returns:
            (admitted, seconds until the oldest admission leaves the window)
        """
        member = uuid.uuid4().hex
        admitted, wait = self._evalsha_with_reload(self.period, self.limit, member)
        if isinstance(wait, bytes):
            wait = wait.decode()
        return int(admitted) == 1, max(float(wait), 0.0)

    def acquire(self) -> None:
        started = time.monotonic()
        waited = False
        while True:
            admitted, wait = self.try_acquire()
            if admitted:
                break
            waited = True
            time.sleep(min(max(wait, 0.001), self.poll_interval))

        if waited:
            elapsed = time.monotonic() - started
            logger.debug(f"RedisRateGate '{self.key}' admitted after {elapsed:.3f}s")
            if self._metrics is not None:
                self._metrics.record_throttle_wait(elapsed)

    def in_window(self) -> int:
        """Number of admissions currently stored for this key (unpurged)."""
        return int(self._redis.zcard(self.key))


__all__ = ["ACQUIRE_SCRIPT", "RedisRateGate"]
