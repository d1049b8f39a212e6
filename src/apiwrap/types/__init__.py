# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Shared data types.

- RequestSpec: Mutable outgoing request handed to customization hooks
- RequestHook: Callable type for customization hooks
- PageCursor: Pager state for one paginated call
"""

from .page import PageCursor
from .request import CONTENT_TYPE_HEADER, RequestHook, RequestSpec

__all__ = [
    "CONTENT_TYPE_HEADER",
    "PageCursor",
    "RequestHook",
    "RequestSpec",
]
