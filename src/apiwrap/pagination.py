# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Pagination strategies.

A pager drives the paginated fetch loop through the cycle::

    Init -> more_pages() -> Fetch -> data(body) -> next_page(body)
         -> more_pages() ... -> Done

Non-paginated requests also pull their payload out through ``data`` on a
fresh pager instance. The bundled pagers define it as a classmethod, so it is
equally callable on the class.

Available pagers:
- DefaultPager: A single page, then done
- PageNumberPager: ``page`` / ``per_page`` query parameters over an envelope
- CursorPager: Opaque next-cursor tokens read from the response envelope

The parameter and envelope field names of the concrete pagers are class
attributes; subclass and override them to match a particular API.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .types.page import PageCursor

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 500


class BasePager:
    """
    Common state handling for pagers.

    Subclasses override ``page_options``, ``data`` and ``_advance``.
    """

    def __init__(self, page_size: int | None = DEFAULT_PAGE_SIZE) -> None:
        self.page_size = page_size or DEFAULT_PAGE_SIZE
        self.cursor = PageCursor()

    def more_pages(self) -> bool:
        return not self.cursor.done

    def next_page(self, body: Any = None) -> bool:
        self.cursor.advance()
        self._advance(body)
        logger.debug(
            f"{type(self).__name__} advanced to page index {self.cursor.page_index} "
            f"(done={self.cursor.done})"
        )
        return self.more_pages()

    def _advance(self, body: Any) -> None:
        self.cursor.done = True

    def page_options(self) -> dict[str, Any]:
        return {}

    @classmethod
    def data(cls, body: Any) -> Any:
        return body


class DefaultPager(BasePager):
    """
    One-shot pager.

    ``more_pages()`` is True exactly once, before the first ``next_page``,
    and False forever after. Sends no extra parameters and returns the body
    unchanged as the payload.
    """


class PageNumberPager(BasePager):
    """
    Page-number pagination over an enveloped response.

    Sends ``{page_param: n, size_param: page_size}`` starting at
    ``first_page``. The payload is read from ``envelope_key`` when the body is
    a mapping, otherwise the body itself is the payload.

    Paging stops when a page payload is empty or absent, when it holds fewer
    items than ``page_size``, or once ``total_pages_key`` in the envelope says
    the last page has been reached.
    """

    page_param = "page"
    size_param = "per_page"
    envelope_key = "data"
    total_pages_key = "total_pages"
    first_page = 1

    def page_options(self) -> dict[str, Any]:
        return {
            self.page_param: self.first_page + self.cursor.page_index,
            self.size_param: self.page_size,
        }

    def _advance(self, body: Any) -> None:
        items = self.data(body)
        if not items or (isinstance(items, list) and len(items) < self.page_size):
            self.cursor.done = True
            return
        if isinstance(body, Mapping):
            total_pages = body.get(self.total_pages_key)
            if total_pages is not None and self.cursor.page_index >= int(total_pages):
                self.cursor.done = True

    @classmethod
    def data(cls, body: Any) -> Any:
        if isinstance(body, Mapping):
            return body.get(cls.envelope_key)
        return body


class CursorPager(BasePager):
    """
    Token-based pagination.

    The first request sends only ``{limit_param: page_size}``; every further
    request adds ``{cursor_param: token}`` where the token is read from
    ``next_cursor_key`` in the previous response envelope. Paging stops when
    the envelope carries no (or an empty) next cursor.
    """

    cursor_param = "cursor"
    limit_param = "limit"
    next_cursor_key = "next_cursor"
    envelope_key = "data"

    def __init__(self, page_size: int | None = DEFAULT_PAGE_SIZE) -> None:
        super().__init__(page_size)
        self.next_cursor: Any = None

    def page_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {self.limit_param: self.page_size}
        if self.next_cursor:
            options[self.cursor_param] = self.next_cursor
        return options

    def _advance(self, body: Any) -> None:
        next_cursor = None
        if isinstance(body, Mapping):
            next_cursor = body.get(self.next_cursor_key)
        self.next_cursor = next_cursor
        if not next_cursor:
            self.cursor.done = True

    @classmethod
    def data(cls, body: Any) -> Any:
        if isinstance(body, Mapping):
            return body.get(cls.envelope_key)
        return body


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "BasePager",
    "CursorPager",
    "DefaultPager",
    "PageNumberPager",
]
