# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request types for the dispatcher.

This module defines the mutable pre-send request object handed to caller
customization hooks before the dispatcher finalizes headers and body.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

CONTENT_TYPE_HEADER = "Content-Type"


@dataclass
class RequestSpec:
    """
    Outgoing request as seen by a customization hook.

    A hook may add or replace headers, set a body, or add query parameters.
    After the hook runs, the dispatcher sets ``Content-Type`` only if the hook
    left it unset, and replaces ``content`` only when request options are
    non-empty.

    Attributes:
        method: Upper-case HTTP verb (GET, POST, PUT, DELETE)
        path: Percent-escaped request path, relative to the endpoint
        params: Query parameters
        headers: Per-request headers layered over the connection defaults
        content: Encoded request body, or None for no body
    """

    method: str
    path: str
    params: dict[str, Any] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    content: str | bytes | None = None

    def has_header(self, name: str) -> bool:
        """Case-insensitive header presence check."""
        lowered = name.lower()
        return any(key.lower() == lowered for key in self.headers)

    def __setitem__(self, name: str, value: str) -> None:
        self.headers[name] = value

    def __getitem__(self, name: str) -> str:
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        raise KeyError(name)


RequestHook = Callable[[RequestSpec], None]
"""Caller-supplied callback that customizes an outgoing request in place."""


__all__ = ["CONTENT_TYPE_HEADER", "RequestHook", "RequestSpec"]
