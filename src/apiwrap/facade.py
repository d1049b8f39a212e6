# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Module-style entry points for API wrappers.

A ClientFacade lets a wrapper library expose ``crm.get_paged("contacts")``
style calls without a process-wide mutable client. The façade holds one
lazily built client and forwards a fixed set of operations to it::

    class CRM(ClientFacade):
        def client(self, **options):
            return CRMClient(self.config, **options)

    crm = CRM(ClientConfig(endpoint="https://crm.example.com/api/"))
    crm.get_paged("contacts")
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from typing_extensions import Self

from .client import APIClient
from .config import ClientConfig


class ClientFacade:
    """Forwards named operations to a client created by ``client()``."""

    def __init__(self, config: ClientConfig | None = None) -> None:
        self.config = config or ClientConfig()
        self._client: APIClient | None = None

    def client(self, **options: Any) -> APIClient:
        """
        Build the client operations are forwarded to.

        Must be overridden by subclasses.
        """
        raise NotImplementedError(
            f"{type(self).__name__}.client() must be implemented to build an API client"
        )

    @property
    def current_client(self) -> APIClient:
        if self._client is None:
            self._client = self.client()
        return self._client

    def reset(self) -> None:
        """Drop the cached client; the next call builds a fresh one."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def configure(self, **changes: Any) -> Self:
        """Apply changes to the façade defaults and drop the cached client."""
        self.config = self.config.with_options(**changes)
        self.reset()
        return self

    # === Forwarded operations ===

    def get(self, *args: Any, **kwargs: Any) -> Any:
        return self.current_client.get(*args, **kwargs)

    def post(self, *args: Any, **kwargs: Any) -> Any:
        return self.current_client.post(*args, **kwargs)

    def put(self, *args: Any, **kwargs: Any) -> Any:
        return self.current_client.put(*args, **kwargs)

    def delete(self, *args: Any, **kwargs: Any) -> Any:
        return self.current_client.delete(*args, **kwargs)

    def get_paged(self, *args: Any, **kwargs: Any) -> list[Any] | None:
        return self.current_client.get_paged(*args, **kwargs)

    def iter_paged(self, *args: Any, **kwargs: Any) -> Iterator[Any]:
        return self.current_client.iter_paged(*args, **kwargs)

    def authenticate(self, *args: Any, **kwargs: Any) -> str:
        return self.current_client.authenticate(*args, **kwargs)


__all__ = ["ClientFacade"]
