# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Protocol definitions for pluggable apiwrap components.

Available protocols:
- PagerProtocol: Interface for pagination strategies
- RateGateProtocol: Interface for blocking admission gates
- AsyncRateGateProtocol: Interface for awaitable admission gates

Supporting types:
- RequestSpec: Mutable outgoing request handed to customization hooks
"""

from ..types.request import RequestHook, RequestSpec
from .gate import AsyncRateGateProtocol, RateGateProtocol
from .pager import PagerProtocol

__all__ = [
    "AsyncRateGateProtocol",
    "PagerProtocol",
    "RateGateProtocol",
    "RequestHook",
    "RequestSpec",
]
