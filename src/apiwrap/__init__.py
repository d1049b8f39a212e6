# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""apiwrap - Base library for building REST API client wrappers.

This library supplies the shared plumbing of a REST API wrapper so a
concrete client only has to declare its endpoint, credentials and entity
shapes.

Key Features:
    - Immutable, validated client configuration
    - httpx connection setup with auth headers and redacted traffic logging
    - Generic GET/POST/PUT/DELETE returning entities or raw responses
    - Pagination loop with pluggable pagers, streaming or accumulating
    - Dynamic JSON entities with lazy nested wrapping
    - Sliding-window rate gates (threaded, asyncio, Redis) as transport stages

Quick Start:
    >>> from apiwrap import APIClient
    >>>
    >>> client = APIClient(
    ...     endpoint="https://api.example.com/v1/",
    ...     access_token="...",
    ...     rate_limit=300,
    ...     rate_period=60,
    ... )
    >>> user = client.get("users/42")
    >>> user.name
    'Ada'
    >>> for page in client.iter_paged("users"):
    ...     ...

Main Exports:
    - APIClient, ClientFacade: Client base classes
    - ClientConfig: Configuration options
    - Entity: JSON wrapper
    - DefaultPager, PageNumberPager, CursorPager: Pagination strategies
    - RateGate, AsyncRateGate, RedisRateGate: Rate gates

Note: RedisRateGate requires the 'redis' extra. Install with:
    pip install apiwrap[redis]
"""

from typing import TYPE_CHECKING

from ._version import __version__
from .client import APIClient
from .config import ClientConfig
from .entity import Entity, unwrap
from .exceptions import (
    APIWrapperError,
    AuthenticationError,
    ConfigurationError,
    DecodingError,
    TransportError,
    UnsupportedFormatError,
)
from .facade import ClientFacade
from .observability import ClientMetrics
from .pagination import BasePager, CursorPager, DefaultPager, PageNumberPager
from .protocols import PagerProtocol, RateGateProtocol, RequestSpec
from .throttle import (
    AsyncRateGate,
    AsyncRateThrottleTransport,
    RateGate,
    RateThrottleTransport,
)

# Lazy import for optional redis gate
if TYPE_CHECKING:
    from .throttle import RedisRateGate

__all__ = [
    # Exceptions
    "APIWrapperError",
    # Client
    "APIClient",
    "AsyncRateGate",
    "AsyncRateThrottleTransport",
    "AuthenticationError",
    # Pagination
    "BasePager",
    "ClientConfig",
    "ClientFacade",
    "ClientMetrics",
    "ConfigurationError",
    "CursorPager",
    "DecodingError",
    "DefaultPager",
    # Entities
    "Entity",
    "PageNumberPager",
    # Protocols
    "PagerProtocol",
    # Throttling
    "RateGate",
    "RateGateProtocol",
    "RateThrottleTransport",
    "RedisRateGate",  # Lazy loaded - requires redis extra
    "RequestSpec",
    "TransportError",
    "UnsupportedFormatError",
    "__version__",
    "unwrap",
]


def __getattr__(name: str) -> type:
    """Lazy import for optional redis gate."""
    if name == "RedisRateGate":
        from .throttle import RedisRateGate

        return RedisRateGate
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
