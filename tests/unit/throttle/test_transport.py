"""Unit tests for the rate throttle transports."""

import time
from unittest.mock import Mock

import httpx
import pytest

from apiwrap import (
    AsyncRateGate,
    AsyncRateThrottleTransport,
    RateGate,
    RateThrottleTransport,
)


def ok(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, text="ok")


class TestRateThrottleTransport:
    def test_acquires_before_each_request(self):
        gate = Mock()
        transport = RateThrottleTransport(httpx.MockTransport(ok), gate)
        with httpx.Client(transport=transport) as client:
            client.get("https://api.example.com/a")
            client.get("https://api.example.com/b")
        assert gate.acquire.call_count == 2

    def test_gate_error_prevents_request(self):
        gate = Mock()
        gate.acquire.side_effect = RuntimeError("closed")
        inner = Mock(wraps=httpx.MockTransport(ok))
        transport = RateThrottleTransport(inner, gate)
        with httpx.Client(transport=transport) as client, pytest.raises(RuntimeError):
            client.get("https://api.example.com/")
        inner.handle_request.assert_not_called()

    def test_close_delegates(self):
        inner = Mock(spec=httpx.BaseTransport)
        RateThrottleTransport(inner, Mock()).close()
        inner.close.assert_called_once()

    def test_throttles_real_gate(self):
        transport = RateThrottleTransport(httpx.MockTransport(ok), RateGate(1, 0.2))
        start = time.monotonic()
        with httpx.Client(transport=transport) as client:
            client.get("https://api.example.com/")
            client.get("https://api.example.com/")
        assert time.monotonic() - start >= 0.2


class TestAsyncRateThrottleTransport:
    @pytest.mark.asyncio
    async def test_throttles_async_client(self):
        transport = AsyncRateThrottleTransport(
            httpx.MockTransport(ok), AsyncRateGate(2, 0.2)
        )
        start = time.monotonic()
        async with httpx.AsyncClient(transport=transport) as client:
            for _ in range(3):
                response = await client.get("https://api.example.com/")
                assert response.status_code == 200
        assert time.monotonic() - start >= 0.2
