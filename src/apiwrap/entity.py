# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Dynamic wrapper over decoded JSON values.

``Entity.create`` is the factory used by the request layer:

- a mapping becomes a single ``Entity``
- a non-empty sequence whose first element is a mapping becomes a list of
  ``Entity`` objects
- ``None`` stays ``None``
- anything else (scalars, empty lists, lists of scalars) passes through

Nested mappings and lists of mappings are wrapped lazily, on first access,
and the wrapped value replaces the raw value inside the parent. Repeated
access therefore returns the same instance, and mutations made through a
nested entity show up in the parent's ``to_json()``.

Keys are available both as attributes and as items::

    >>> user = Entity.create({"name": "Ada", "address": {"city": "London"}})
    >>> user.name
    'Ada'
    >>> user.address.city = "Paris"
    >>> user["address"]["city"]
    'Paris'

Keys that collide with Entity methods (``items``, ``get``, ...) or start with
an underscore are only reachable through ``get`` / item access.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from typing import Any


def unwrap(value: Any) -> Any:
    """
    Convert a value back to plain JSON-compatible data.

    Entities become dicts and lists become new lists, recursively. The result
    shares no containers with the input.
    """
    if isinstance(value, Entity):
        return {key: unwrap(item) for key, item in value.attributes.items()}
    if isinstance(value, Mapping):
        return {key: unwrap(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [unwrap(item) for item in value]
    return value


class Entity:
    """Attribute-style access over a JSON object with lazy nested wrapping."""

    def __init__(self, attributes: Mapping[Any, Any] | None = None) -> None:
        plain = unwrap(attributes or {})
        object.__setattr__(
            self, "_attributes", {str(key): value for key, value in plain.items()}
        )

    # === Factory ===

    @classmethod
    def create(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, Entity):
            return value
        if isinstance(value, Mapping):
            return cls(value)
        if isinstance(value, (list, tuple)):
            return cls.entify(value)
        return value

    @classmethod
    def entify(cls, items: Any) -> Any:
        """Wrap a list of mappings; other lists are returned as they are."""
        if len(items) > 0 and isinstance(items[0], Mapping):
            return [cls.create(item) for item in items]
        return items

    # === Attribute storage ===

    @property
    def attributes(self) -> dict[str, Any]:
        return self._attributes

    @attributes.setter
    def attributes(self, value: Mapping[Any, Any] | None) -> None:
        object.__setattr__(
            self, "_attributes", {str(key): item for key, item in (value or {}).items()}
        )

    def _accessor(self, key: str) -> Any:
        value = self._attributes[key]
        if isinstance(value, Entity):
            return value
        if isinstance(value, Mapping):
            value = self._attributes[key] = type(self)(value)
        elif isinstance(value, list):
            value = self._attributes[key] = type(self).entify(value)
        return value

    def get(self, key: Any, default: Any = None) -> Any:
        key = str(key)
        if key not in self._attributes:
            return default
        return self._accessor(key)

    def set(self, key: Any, value: Any) -> None:
        self._attributes[str(key)] = value

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails.
        if name.startswith("_"):
            raise AttributeError(name)
        if name in self._attributes:
            return self._accessor(name)
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_") or isinstance(getattr(type(self), name, None), property):
            object.__setattr__(self, name, value)
        else:
            self._attributes[name] = value

    def __delattr__(self, name: str) -> None:
        try:
            del self._attributes[name]
        except KeyError:
            raise AttributeError(name) from None

    def __getitem__(self, key: Any) -> Any:
        key = str(key)
        if key not in self._attributes:
            raise KeyError(key)
        return self._accessor(key)

    def __setitem__(self, key: Any, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: Any) -> None:
        del self._attributes[str(key)]

    def __contains__(self, key: object) -> bool:
        return str(key) in self._attributes

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)

    def __len__(self) -> int:
        return len(self._attributes)

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | {k for k in self._attributes if k.isidentifier()})

    def keys(self) -> Any:
        return self._attributes.keys()

    def items(self) -> Iterator[tuple[str, Any]]:
        for key in self._attributes:
            yield key, self._accessor(key)

    # === Serialization ===

    def to_dict(self) -> dict[str, Any]:
        return unwrap(self)

    def to_json(self, **kwargs: Any) -> str:
        return json.dumps(self.to_dict(), **kwargs)

    def copy(self) -> Entity:
        """Independent deep copy; later mutations on either side do not leak."""
        return type(self)(self.to_dict())

    def __copy__(self) -> Entity:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> Entity:
        return self.copy()

    # === Comparison ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return type(self) is type(other) and self.to_dict() == other.to_dict()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_dict()!r})"


__all__ = ["Entity", "unwrap"]
