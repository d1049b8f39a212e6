# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
HTTP connection setup.

Builds the ``httpx.Client`` used by the dispatcher from a ClientConfig:

- ``base_url`` is the configured endpoint
- default headers: Accept, User-Agent, and auth headers when credentials exist
- ``connection_options`` are passed through; transport settings (``verify``,
  ``proxy``, ``limits``, ...) go to the ``httpx.HTTPTransport`` built here
- a rate throttle stage wraps the network transport and every mounted
  transport when a gate is given
- request/response logging hooks are installed when a logger is configured
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .config import ClientConfig
from .exceptions import ConfigurationError
from .protocols.gate import RateGateProtocol
from .redaction import build_logging_hooks, merge_event_hooks
from .throttle.transport import RateThrottleTransport

logger = logging.getLogger(__name__)


def require_endpoint(config: ClientConfig) -> str:
    """Return the endpoint or raise ConfigurationError if none is configured."""
    if not config.endpoint:
        raise ConfigurationError("Option for endpoint is not defined")
    return config.endpoint


def build_headers(config: ClientConfig) -> dict[str, str]:
    headers = {
        "Accept": f"application/{config.format}; charset=utf-8",
        "User-Agent": config.user_agent,
    }
    if config.access_token:
        headers["Authorization"] = f"{config.token_type} {config.access_token}"
    if config.client_id:
        headers["client-id"] = config.client_id
    if config.client_secret:
        headers["client-secret"] = config.client_secret
    return headers


# Settings consumed by the network transport, not by httpx.Client.
TRANSPORT_OPTIONS = ("verify", "cert", "http1", "http2", "limits", "retries", "proxy")


def build_transport(options: dict[str, Any]) -> httpx.BaseTransport:
    """
    Pop transport settings from ``options`` and return the network transport.

    A caller-supplied ``transport`` is returned as is. Otherwise an
    ``httpx.HTTPTransport`` is built from ``verify``, ``cert``, ``http1``,
    ``http2``, ``limits``, ``retries``, ``proxy`` and ``trust_env``.
    ``trust_env`` stays in ``options`` since the client uses it as well.

    Raises:
        ConfigurationError: If a custom transport is combined with
            transport settings that it would silently ignore
    """
    transport = options.pop("transport", None)
    transport_options = {
        name: options.pop(name) for name in TRANSPORT_OPTIONS if name in options
    }
    if transport is not None:
        if transport_options:
            raise ConfigurationError(
                f"Connection options {sorted(transport_options)} cannot be combined "
                "with a custom transport"
            )
        return transport

    if "trust_env" in options:
        transport_options["trust_env"] = options["trust_env"]
    return httpx.HTTPTransport(**transport_options)


def build_http_client(
    config: ClientConfig,
    gate: RateGateProtocol | None = None,
) -> httpx.Client:
    """
    Create an ``httpx.Client`` for ``config``.

    Every transport the client can route to, including each entry of a
    ``mounts`` option, is wrapped by the throttle stage when a gate is given.

    Args:
        config: Client configuration; must have an endpoint
        gate: Optional rate gate installed as a transport stage

    Returns:
        A configured httpx client. The caller owns it and must close it.

    Raises:
        ConfigurationError: If no endpoint is configured, or transport
            options conflict
    """
    endpoint = require_endpoint(config)

    options: dict[str, Any] = dict(config.connection_options)
    headers = build_headers(config)
    headers.update(options.pop("headers", None) or {})

    transport = build_transport(options)
    mounts: dict[str, httpx.BaseTransport | None] = dict(options.pop("mounts", None) or {})
    if gate is not None:
        transport = RateThrottleTransport(transport, gate)
        mounts = {
            pattern: None if mounted is None else RateThrottleTransport(mounted, gate)
            for pattern, mounted in mounts.items()
        }

    event_hooks = options.pop("event_hooks", None)
    if config.logger is not None:
        event_hooks = merge_event_hooks(event_hooks, build_logging_hooks(config.logger))

    logger.debug(
        f"Building HTTP client for {endpoint} "
        f"(format={config.format}, throttled={gate is not None}, mounts={len(mounts)})"
    )
    return httpx.Client(
        base_url=endpoint,
        headers=headers,
        transport=transport,
        mounts=mounts or None,
        event_hooks=event_hooks,
        **options,
    )


__all__ = [
    "TRANSPORT_OPTIONS",
    "build_headers",
    "build_http_client",
    "build_transport",
    "require_endpoint",
]
