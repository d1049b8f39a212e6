# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Base API client.

APIClient is what concrete API wrappers subclass or instantiate. It owns a
ClientConfig, the httpx client built from it, and (when throttling is
configured) one rate gate shared by every request the client makes::

    class CRMClient(APIClient):
        def contacts(self):
            return self.get_paged("contacts")

    crm = CRMClient(endpoint="https://crm.example.com/api/", access_token="...")
    for contact in crm.contacts():
        print(contact.email)

Verb defaults: ``get``/``delete`` return entities, ``post``/``put`` return
the raw ``httpx.Response``. Pass ``raw=`` to override per call.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from types import TracebackType
from typing import Any

import httpx
from typing_extensions import Self

from .config import ClientConfig
from .connection import build_http_client
from .exceptions import AuthenticationError
from .observability import ClientMetrics, get_prometheus_client_metrics
from .protocols.gate import RateGateProtocol
from .request import (
    PageConsumer,
    PaginatedFetchLoop,
    RequestDispatcher,
    ResultProjector,
    decode_body,
)
from .throttle.gate import RateGate
from .types.request import RequestHook

logger = logging.getLogger(__name__)


class APIClient:
    """Generic REST client: verb methods, pagination and throttling."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        rate_gate: RateGateProtocol | None = None,
        metrics: ClientMetrics | None = None,
        **options: Any,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: Base configuration; defaults to ClientConfig()
            rate_gate: Gate to use instead of the one built from
                ``rate_limit``/``rate_period`` (e.g. a RedisRateGate)
            metrics: Counter sink; a fresh ClientMetrics by default
            **options: ClientConfig options applied on top of ``config``

        Raises:
            ConfigurationError: If the resulting configuration is invalid
        """
        base = config or ClientConfig()
        self._config = base.with_options(**options) if options else base
        self.metrics = metrics or ClientMetrics(prometheus=get_prometheus_client_metrics())
        self._custom_gate = rate_gate
        self._gate: RateGateProtocol | None = None
        self._http: httpx.Client | None = None
        self._build_components()

    # === Configuration ===

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def is_json(self) -> bool:
        return self._config.is_json

    @property
    def rate_gate(self) -> RateGateProtocol | None:
        return self._gate

    def configure(self, **changes: Any) -> Self:
        """
        Apply option changes between requests.

        The HTTP client is rebuilt on next use. The rate gate, and so its
        window, is kept unless the limit or period changed.

        Not thread-safe: do not call while other threads use this client.
        """
        self._config = self._config.with_options(**changes)
        self._close_http()
        self._build_components()
        return self

    def _build_components(self) -> None:
        config = self._config
        if self._custom_gate is not None:
            self._gate = self._custom_gate
        elif config.is_throttled:
            gate = self._gate
            if not (
                isinstance(gate, RateGate)
                and gate.limit == config.rate_limit
                and gate.period == config.rate_period
            ):
                self._gate = RateGate(
                    config.rate_limit,  # type: ignore[arg-type]
                    config.rate_period,  # type: ignore[arg-type]
                    metrics=self.metrics,
                )
        else:
            self._gate = None

        self._dispatcher = RequestDispatcher(config, self._http_client, self.metrics)
        self._projector = ResultProjector(config)
        self._pages = PaginatedFetchLoop(self._dispatcher, config, self.metrics)

    def _http_client(self) -> httpx.Client:
        if self._http is None:
            self._http = build_http_client(self._config, self._gate)
        return self._http

    # === Verbs ===

    def get(
        self,
        path: str,
        options: Mapping[str, Any] | None = None,
        raw: bool = False,
        customize: RequestHook | None = None,
    ) -> Any:
        response = self._dispatcher.dispatch("GET", path, options, customize)
        return self._projector.project(response, raw)

    def post(
        self,
        path: str,
        options: Any = None,
        raw: bool = True,
        customize: RequestHook | None = None,
    ) -> Any:
        response = self._dispatcher.dispatch("POST", path, options, customize)
        return self._projector.project(response, raw)

    def put(
        self,
        path: str,
        options: Any = None,
        raw: bool = True,
        customize: RequestHook | None = None,
    ) -> Any:
        response = self._dispatcher.dispatch("PUT", path, options, customize)
        return self._projector.project(response, raw)

    def delete(
        self,
        path: str,
        options: Mapping[str, Any] | None = None,
        raw: bool = False,
        customize: RequestHook | None = None,
    ) -> Any:
        response = self._dispatcher.dispatch("DELETE", path, options, customize)
        return self._projector.project(response, raw)

    # === Pagination ===

    def get_paged(
        self,
        path: str,
        options: Mapping[str, Any] | None = None,
        customize: RequestHook | None = None,
        consumer: PageConsumer | None = None,
    ) -> list[Any] | None:
        """
        GET every page of ``path``.

        Returns the accumulated results, or None when ``consumer`` is given
        (each page payload is passed to it instead).

        Raises:
            UnsupportedFormatError: If the client is not JSON (no request is sent)
        """
        return self._pages.run(path, options, customize, consumer)

    def iter_paged(
        self,
        path: str,
        options: Mapping[str, Any] | None = None,
        customize: RequestHook | None = None,
    ) -> Iterator[Any]:
        """Like ``get_paged`` with a consumer, but as a lazy iterator of page payloads."""
        return self._pages.iter_pages(path, options, customize)

    # === Authentication ===

    def authenticate(self, path: str, **options: Any) -> str:
        """
        Obtain an access token with username/password credentials.

        POSTs ``{"username", "password"}`` merged with ``options`` to ``path``,
        stores ``accessToken``, ``tokenType``, ``refreshToken`` and
        ``expiresIn`` from the response in the configuration and returns the
        access token.

        Raises:
            AuthenticationError: If the response is empty or has no access token
        """
        params = {"username": self._config.username, "password": self._config.password}
        params.update(options)
        body = decode_body(self.post(path, params, raw=True))
        if not isinstance(body, Mapping):
            raise AuthenticationError("Token response cannot be empty", response=body)

        token = body.get("accessToken")
        if not token:
            raise AuthenticationError(
                f"Could not find valid accessToken; response {body}", response=body
            )
        self.configure(
            access_token=token,
            token_type=body.get("tokenType") or self._config.token_type,
            refresh_token=body.get("refreshToken"),
            token_expires=body.get("expiresIn"),
        )
        logger.debug(f"Authenticated against {path}")
        return str(token)

    # === Lifecycle ===

    def _close_http(self) -> None:
        if self._http is not None:
            self._http.close()
            self._http = None

    def close(self) -> None:
        self._close_http()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(endpoint={self._config.endpoint!r}, format={self._config.format!r})"


__all__ = ["APIClient"]
