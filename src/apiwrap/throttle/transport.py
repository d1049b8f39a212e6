# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
httpx transport stages that pass every request through a rate gate.

The throttle sits in front of the real network transport, so it applies to
every request the client sends no matter which verb method issued it::

    transport = RateThrottleTransport(httpx.HTTPTransport(), RateGate(300, 60))
    client = httpx.Client(base_url="https://api.example.com/", transport=transport)
"""

import httpx

from ..protocols.gate import AsyncRateGateProtocol, RateGateProtocol


class RateThrottleTransport(httpx.BaseTransport):
    """Blocking transport wrapper: ``gate.acquire()`` then delegate."""

    def __init__(self, transport: httpx.BaseTransport, gate: RateGateProtocol) -> None:
        self.transport = transport
        self.gate = gate

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self.gate.acquire()
        return self.transport.handle_request(request)

    def close(self) -> None:
        self.transport.close()


class AsyncRateThrottleTransport(httpx.AsyncBaseTransport):
    """Async transport wrapper: ``await gate.acquire()`` then delegate."""

    def __init__(
        self, transport: httpx.AsyncBaseTransport, gate: AsyncRateGateProtocol
    ) -> None:
        self.transport = transport
        self.gate = gate

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        await self.gate.acquire()
        return await self.transport.handle_async_request(request)

    async def aclose(self) -> None:
        await self.transport.aclose()


__all__ = ["AsyncRateThrottleTransport", "RateThrottleTransport"]
