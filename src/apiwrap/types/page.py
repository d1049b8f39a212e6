# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Pager cursor state."""

from dataclasses import dataclass


@dataclass
class PageCursor:
    """
    State carried by a pager across one paginated call.

    Created once per paginated call and discarded when the loop exits.

    Attributes:
        page_index: Number of pages advanced past; only ever increases
        done: True once the pager has decided no further page exists.
            Never set before at least one page has been fetched.
    """

    page_index: int = 0
    done: bool = False

    def advance(self) -> None:
        self.page_index += 1


__all__ = ["PageCursor"]
