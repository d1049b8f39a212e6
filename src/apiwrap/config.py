# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Client configuration for apiwrap.

ClientConfig is an immutable, validated value. A client owns exactly one
configuration at a time; changing options between requests produces a new
value through ``with_options`` instead of mutating shared state::

    base = ClientConfig(endpoint="https://api.example.com/v1/")
    authed = base.with_options(access_token="...")
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from typing_extensions import Self

from ._version import __version__
from .exceptions import ConfigurationError
from .pagination import DEFAULT_PAGE_SIZE, DefaultPager

DEFAULT_FORMAT = "json"
DEFAULT_TOKEN_TYPE = "Bearer"
DEFAULT_USER_AGENT = f"apiwrap Python API wrapper {__version__}"


class ClientConfig(BaseModel):
    """
    Configuration for an API client.

    Invalid values raise ConfigurationError at construction time, before
    any request is attempted.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=True,
    )

    # === Connection ===

    endpoint: str | None = None
    """Base URL every request path is resolved against. Required for requests."""

    format: str = DEFAULT_FORMAT
    """Wire format; drives Accept/Content-Type headers and entity wrapping."""

    user_agent: str = DEFAULT_USER_AGENT
    """User-Agent header value."""

    connection_options: dict[str, Any] = Field(default_factory=dict)
    """Extra keyword arguments passed through to ``httpx.Client``."""

    logger: logging.Logger | None = None
    """When set, requests and responses are logged here with secrets redacted."""

    # === Pagination ===

    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)
    """Page size handed to the pagination class."""

    pagination_class: type[Any] = DefaultPager
    """Pager class instantiated once per paginated call."""

    # === Throttling ===

    rate_limit: int | None = Field(default=None, ge=1)
    """Maximum requests per ``rate_period``. Requires ``rate_period``."""

    rate_period: float | None = Field(default=None, gt=0)
    """Sliding window length in seconds. Requires ``rate_limit``."""

    # === Credentials ===

    access_token: str | None = Field(default=None, repr=False)
    token_type: str = DEFAULT_TOKEN_TYPE
    refresh_token: str | None = Field(default=None, repr=False)
    token_expires: Any = None
    client_id: str | None = None
    client_secret: str | None = Field(default=None, repr=False)
    username: str | None = None
    password: str | None = Field(default=None, repr=False)

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid client configuration: {e}") from e

    @model_validator(mode="after")
    def _validate_rate_settings(self) -> Self:
        """Throttling needs both a limit and a period, or neither."""
        if (self.rate_limit is None) != (self.rate_period is None):
            raise ValueError("rate_limit and rate_period must be configured together")
        return self

    @property
    def is_json(self) -> bool:
        return bool(self.format) and self.format.lower() == "json"

    @property
    def is_throttled(self) -> bool:
        return self.rate_limit is not None and self.rate_period is not None

    def options(self) -> dict[str, Any]:
        """Current option values keyed by option name."""
        return {name: getattr(self, name) for name in type(self).model_fields}

    def with_options(self, **changes: Any) -> Self:
        """Return a validated copy with ``changes`` applied."""
        return type(self)(**{**self.options(), **changes})


__all__ = [
    "DEFAULT_FORMAT",
    "DEFAULT_TOKEN_TYPE",
    "DEFAULT_USER_AGENT",
    "ClientConfig",
]
