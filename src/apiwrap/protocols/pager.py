# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for pagination strategies."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class PagerProtocol(Protocol):
    """
    Protocol for pagination strategies.

    A pager decides whether another page should be fetched, which query
    parameters fetch it, and how the payload is pulled out of a page body.
    One pager instance is created per paginated call and never shared.
    """

    def more_pages(self) -> bool:
        """Return True if another fetch should be attempted."""
        ...

    def next_page(self, body: Any = None) -> bool:
        """
        Advance past the page just fetched.

        Called exactly once per fetched page, after its data was consumed.

        Args:
            body: The raw decoded body of that page (not the extracted data)

        Returns:
            Whether more pages remain after advancing
        """
        ...

    def page_options(self) -> dict[str, Any]:
        """Query parameters to merge into the next request."""
        ...

    def data(self, body: Any) -> Any:
        """
        Extract the payload to wrap from a raw decoded body.

        Also used for non-paginated results, on a pager created
        for that single response.
        """
        ...
