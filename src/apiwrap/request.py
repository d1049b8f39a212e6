# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request pipeline.

Three cooperating pieces turn ``(verb, path, options)`` into a result:

- RequestDispatcher: issues exactly one HTTP call and returns the response
- ResultProjector: turns a response into an Entity, a list of Entities, or
  leaves it raw
- PaginatedFetchLoop: repeats dispatch + projection page by page, driven by
  a pager, either streaming each page to a consumer or accumulating them

Data flow::

    caller -> PaginatedFetchLoop -> RequestDispatcher -> httpx (-> RateGate)
           <- ResultProjector / pager.data <- decoded body
           -> pager.next_page(body) -> loop or return

Errors are never retried here. Non-2xx responses raise
``httpx.HTTPStatusError`` from ``dispatch``; an error on any page aborts the
whole paginated fetch.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Iterator, Mapping
from typing import Any
from urllib.parse import quote, urlencode, urlsplit, urlunsplit

import httpx

from .config import ClientConfig
from .connection import require_endpoint
from .entity import Entity
from .exceptions import DecodingError, UnsupportedFormatError
from .observability import ClientMetrics
from .protocols.pager import PagerProtocol
from .types.request import CONTENT_TYPE_HEADER, RequestHook, RequestSpec

logger = logging.getLogger(__name__)

QUERY_VERBS = frozenset({"GET", "DELETE"})
BODY_VERBS = frozenset({"POST", "PUT"})

# Characters left unescaped in a path: RFC 2396 unreserved + reserved, minus "?" and "#".
_PATH_SAFE = "/;:@&=+$,-_.!~*'()[]"

_JSON_MEDIA_TYPE = re.compile(r"\bjson$")

PageConsumer = Callable[[Any], None]


def create_pager(config: ClientConfig) -> PagerProtocol:
    """Instantiate the configured pagination class with the configured page size."""
    pager: PagerProtocol = config.pagination_class(config.page_size)
    return pager


def escape_path(path: str) -> str:
    """
    Percent-escape the path component of ``path``.

    A query string or fragment already present in ``path`` is kept as is.

    Example:
        >>> escape_path("/users/john doe?fields=a b")
        '/users/john%20doe?fields=a b'
    """
    parts = urlsplit(path or "")
    return urlunsplit(parts._replace(path=quote(parts.path, safe=_PATH_SAFE)))


def decode_body(response: httpx.Response) -> Any:
    """
    Decode a response body according to its Content-Type.

    JSON media types (anything ending in ``json``) are parsed; an empty body
    decodes to None; any other content is returned as text.

    Raises:
        DecodingError: If a JSON-typed body is not valid JSON
    """
    if not response.content:
        return None
    content_type = response.headers.get(CONTENT_TYPE_HEADER)
    media_type = (content_type or "").split(";")[0].strip().lower()
    if _JSON_MEDIA_TYPE.search(media_type):
        try:
            return json.loads(response.content)
        except ValueError as e:
            raise DecodingError(
                f"Could not decode {media_type} response body: {e}",
                content_type=content_type,
            ) from e
    return response.text


class RequestDispatcher:
    """Builds and sends a single HTTP request."""

    def __init__(
        self,
        config: ClientConfig,
        http_client: Callable[[], httpx.Client],
        metrics: ClientMetrics | None = None,
    ) -> None:
        """
        Args:
            config: Client configuration
            http_client: Returns the httpx client to send through; only
                called once the endpoint check has passed
            metrics: Optional request counters
        """
        self.config = config
        self._http_client = http_client
        self._metrics = metrics

    def encode_body(self, options: Any) -> str | None:
        """JSON for JSON clients, URL-form otherwise; None for empty options."""
        if not options:
            return None
        if self.config.is_json:
            return json.dumps(options)
        return urlencode(options, doseq=True)

    def prepare(
        self,
        method: str,
        path: str,
        options: Any = None,
        customize: RequestHook | None = None,
    ) -> RequestSpec:
        """
        Build the outgoing request without sending it.

        The hook runs first; Content-Type is then defaulted only if the hook
        did not set it. For POST/PUT a non-empty ``options`` replaces any body
        the hook set; empty options leave the hook's body (or no body).
        """
        method = method.upper()
        if method not in QUERY_VERBS | BODY_VERBS:
            raise ValueError(f"Unsupported HTTP verb: {method}")

        spec = RequestSpec(method=method, path=escape_path(path))
        if customize is not None:
            customize(spec)

        if not spec.has_header(CONTENT_TYPE_HEADER):
            spec.headers[CONTENT_TYPE_HEADER] = f"application/{self.config.format}"

        if method in QUERY_VERBS:
            if options:
                spec.params = {**spec.params, **options}
        else:
            body = self.encode_body(options)
            if body is not None:
                spec.content = body
        return spec

    def dispatch(
        self,
        method: str,
        path: str,
        options: Any = None,
        customize: RequestHook | None = None,
    ) -> httpx.Response:
        """
        Send one request and return the response.

        Raises:
            ConfigurationError: If no endpoint is configured (before any I/O)
            httpx.HTTPStatusError: On a non-2xx response
            httpx.TransportError: On network failure
        """
        require_endpoint(self.config)
        spec = self.prepare(method, path, options, customize)

        http = self._http_client()
        request = http.build_request(
            spec.method,
            spec.path,
            params=spec.params or None,
            headers=spec.headers,
            content=spec.content,
        )
        logger.debug(f"Dispatching {spec.method} {request.url}")
        response = http.send(request)

        if self._metrics is not None:
            self._metrics.record_request(spec.method, response.status_code)
        response.raise_for_status()
        return response


class ResultProjector:
    """Shapes a response into what the caller asked for."""

    def __init__(self, config: ClientConfig) -> None:
        self.config = config

    def project(self, response: httpx.Response, raw: bool = False) -> Any:
        """
        Args:
            response: Response returned by the dispatcher
            raw: Return the response untouched

        Returns:
            The response itself when ``raw`` or the client is not JSON;
            otherwise the payload extracted by a fresh pager, wrapped by
            Entity.create
        """
        if raw or not self.config.is_json:
            return response
        body = decode_body(response)
        return Entity.create(create_pager(self.config).data(body))


class PaginatedFetchLoop:
    """Fetches every page of a paginated GET, strictly one after another."""

    def __init__(
        self,
        dispatcher: RequestDispatcher,
        config: ClientConfig,
        metrics: ClientMetrics | None = None,
    ) -> None:
        self.dispatcher = dispatcher
        self.config = config
        self._metrics = metrics

    def create_pager(self) -> PagerProtocol:
        return create_pager(self.config)

    def iter_pages(
        self,
        path: str,
        options: Mapping[str, Any] | None = None,
        customize: RequestHook | None = None,
    ) -> Iterator[Any]:
        """
        Lazily yield each non-null page payload, wrapped by Entity.create.

        Raises:
            UnsupportedFormatError: Immediately, if the client is not JSON
        """
        if not self.config.is_json:
            raise UnsupportedFormatError(self.config.format)
        return self._pages(path, dict(options or {}), customize)

    def _pages(
        self,
        path: str,
        options: dict[str, Any],
        customize: RequestHook | None,
    ) -> Iterator[Any]:
        pager = self.create_pager()
        while pager.more_pages():
            page_options = {**options, **pager.page_options()}
            response = self.dispatcher.dispatch("GET", path, page_options, customize)
            body = decode_body(response)
            if self._metrics is not None:
                self._metrics.record_page()

            data = pager.data(body)
            if data is not None:
                yield Entity.create(data)
            pager.next_page(body)

    def run(
        self,
        path: str,
        options: Mapping[str, Any] | None = None,
        customize: RequestHook | None = None,
        consumer: PageConsumer | None = None,
    ) -> list[Any] | None:
        """
        Fetch all pages.

        Args:
            path: Request path
            options: Query parameters sent with every page
            customize: Hook applied to each page request
            consumer: When given, called once per page payload and nothing
                is accumulated

        Returns:
            None in streaming mode; otherwise all results in fetch order, with
            list payloads flattened into the result
        """
        pages = self.iter_pages(path, options, customize)
        if consumer is not None:
            for page in pages:
                consumer(page)
            return None

        result: list[Any] = []
        for page in pages:
            if isinstance(page, list):
                result.extend(page)
            else:
                result.append(page)
        return result


__all__ = [
    "BODY_VERBS",
    "QUERY_VERBS",
    "PaginatedFetchLoop",
    "RequestDispatcher",
    "ResultProjector",
    "create_pager",
    "decode_body",
    "escape_path",
]
