# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocols for request admission gates."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class RateGateProtocol(Protocol):
    """
    Blocking admission control.

    On return from ``acquire`` the caller has been admitted and counted
    against the gate's window.
    """

    def acquire(self) -> None:
        """Block until the caller may issue a request."""
        ...


@runtime_checkable
class AsyncRateGateProtocol(Protocol):
    """Awaitable counterpart of RateGateProtocol."""

    async def acquire(self) -> None:
        """Suspend until the caller may issue a request."""
        ...
