# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request/response logging with secret redaction.

When a client is configured with a ``logger``, every request and response
is written to it (line, headers and body) at INFO level. Credentials are
replaced by ``[REMOVED]`` before any handler sees the record:

- ``"password": "..."`` in JSON bodies
- ``"access_token"`` / ``"accessToken"`` values in JSON bodies
- ``client-secret`` / ``client_secret`` header, form and query values
- ``Authorization`` header values
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from logging import LogRecord
from typing import Any

import httpx

REDACTED = "[REMOVED]"

REDACTION_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r'("password"\s*:\s*")(.+?)(")', re.IGNORECASE), rf"\1{REDACTED}\3"),
    (
        re.compile(r'("access_?token"\s*:\s*")(.+?)(")', re.IGNORECASE),
        rf"\1{REDACTED}\3",
    ),
    (
        re.compile(r'(client[-_]secret"?\s*[:=]\s*"?)([^&"\s]+)', re.IGNORECASE),
        rf"\1{REDACTED}",
    ),
    (re.compile(r'(authorization:\s*"?)([^&"\n]+)', re.IGNORECASE), rf"\1{REDACTED}"),
)


def redact(text: str) -> str:
    """Replace credential values in ``text`` with ``[REMOVED]``."""
    for pattern, replacement in REDACTION_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


class RedactingFilter(logging.Filter):
    """Render the record message once and redact credentials from it."""

    def filter(self, record: LogRecord) -> bool:  # noqa: D401
        record.msg = redact(record.getMessage())
        record.args = None
        return True


def _ensure_filter(logger: logging.Logger) -> None:
    if not any(isinstance(f, RedactingFilter) for f in logger.filters):
        logger.addFilter(RedactingFilter())


def _format_headers(headers: httpx.Headers) -> str:
    return "\n".join(f'{name}: "{value}"' for name, value in headers.multi_items())


def _format_body(content: bytes) -> str:
    return content.decode("utf-8", errors="replace")


def build_logging_hooks(
    logger: logging.Logger,
) -> dict[str, list[Callable[..., Any]]]:
    """
    Create httpx event hooks that log traffic through ``logger``.

    Args:
        logger: Destination logger; a RedactingFilter is attached to it once

    Returns:
        An ``event_hooks`` mapping for ``httpx.Client``
    """
    _ensure_filter(logger)

    def log_request(request: httpx.Request) -> None:
        logger.info(f"request: {request.method} {request.url}")
        logger.info(f"request: {_format_headers(request.headers)}")
        if request.content:
            logger.info(f"request: {_format_body(request.content)}")

    def log_response(response: httpx.Response) -> None:
        response.read()
        logger.info(f"response: Status {response.status_code}")
        logger.info(f"response: {_format_headers(response.headers)}")
        if response.content:
            logger.info(f"response: {_format_body(response.content)}")

    return {"request": [log_request], "response": [log_response]}


def merge_event_hooks(
    *hook_sets: Mapping[str, list[Callable[..., Any]]] | None,
) -> dict[str, list[Callable[..., Any]]]:
    """Concatenate several ``event_hooks`` mappings, preserving order."""
    merged: dict[str, list[Callable[..., Any]]] = {"request": [], "response": []}
    for hooks in hook_sets:
        for event, callbacks in (hooks or {}).items():
            merged.setdefault(event, []).extend(callbacks)
    return merged


__all__ = [
    "REDACTED",
    "REDACTION_PATTERNS",
    "RedactingFilter",
    "build_logging_hooks",
    "merge_event_hooks",
    "redact",
]
