"""Shared fixtures: an APIClient wired to a recording httpx.MockTransport."""

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from apiwrap import APIClient, ClientMetrics

ENDPOINT = "https://api.example.com/v1/"


def _json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    if payload is None:
        return httpx.Response(
            status_code, headers={"Content-Type": "application/json"}
        )
    return httpx.Response(status_code, json=payload)


class RecordingHandler:
    """MockTransport handler that remembers every request it saw."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]):
        self.responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def json_response():
    """Build a JSON response; ``None`` gives an empty body with a JSON content type."""
    return _json_response


@pytest.fixture
def make_client():
    """Factory: ``make_client(responder, **options) -> (client, handler)``."""
    clients: list[APIClient] = []

    def factory(
        responder: Callable[[httpx.Request], httpx.Response] | None = None,
        **options: Any,
    ) -> tuple[APIClient, RecordingHandler]:
        handler = RecordingHandler(responder or (lambda request: _json_response({})))
        options.setdefault("endpoint", ENDPOINT)
        connection_options = dict(options.pop("connection_options", {}))
        connection_options["transport"] = httpx.MockTransport(handler)
        client = APIClient(
            connection_options=connection_options,
            metrics=options.pop("metrics", None) or ClientMetrics(),
            **options,
        )
        clients.append(client)
        return client, handler

    yield factory

    for client in clients:
        client.close()
