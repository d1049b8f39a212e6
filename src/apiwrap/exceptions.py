# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Exception classes for the apiwrap library.

This module defines the exception hierarchy used throughout the library.
All exceptions raised by apiwrap itself inherit from APIWrapperError, making
it easy to catch library errors with a single except clause.

HTTP failures are NOT wrapped: non-2xx responses and network failures
propagate from httpx unmodified. ``TransportError`` is re-exported here as an
alias of ``httpx.HTTPError`` so callers can catch them without importing
httpx directly.
"""

import httpx

TransportError = httpx.HTTPError


class APIWrapperError(Exception):
    """Base exception for all apiwrap errors.

    Example:
        try:
            client.get("/users")
        except APIWrapperError as e:
            logger.error(f"API wrapper error: {e}")
    """

    pass


class ConfigurationError(APIWrapperError):
    """Raised when configuration is missing or invalid.

    This exception is raised before any network I/O takes place, either when
    a ClientConfig is constructed with invalid values or when a request is
    attempted without a configured endpoint. It is never retried.

    Common causes include:
    - No endpoint configured
    - Only one of rate_limit / rate_period supplied
    - Non-positive page size, rate limit or rate period

    Example:
        try:
            client.get("/users")
        except ConfigurationError as e:
            logger.error(f"Client is misconfigured: {e}")
            raise SystemExit(1)
    """

    pass


class UnsupportedFormatError(APIWrapperError):
    """Raised when a paginated fetch is requested on a non-JSON client.

    Pagination is only defined for JSON-decodable envelopes, so the check
    happens before any network call is made.

    Attributes:
        format: The configured wire format that was rejected.
    """

    def __init__(self, format: str):
        super().__init__(
            f"Paged requests should be json formatted (given format '{format}')"
        )
        self.format = format


class DecodingError(APIWrapperError, ValueError):
    """Raised when a response body cannot be decoded per its declared format.

    The original decoder exception is chained as ``__cause__``.

    Attributes:
        content_type: The Content-Type header of the offending response.
            May be None if the response had no Content-Type.
    """

    def __init__(self, message: str, content_type: str | None = None):
        super().__init__(message)
        self.content_type = content_type


class AuthenticationError(APIWrapperError):
    """Raised when a token endpoint does not return a usable access token.

    Attributes:
        response: The decoded token response body, if any.
    """

    def __init__(self, message: str, response: object = None):
        super().__init__(message)
        self.response = response


__all__ = [
    "APIWrapperError",
    "AuthenticationError",
    "ConfigurationError",
    "DecodingError",
    "TransportError",
    "UnsupportedFormatError",
]
