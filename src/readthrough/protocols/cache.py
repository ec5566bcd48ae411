"""Protocol definition for cache stores."""

from __future__ import annotations

from collections.abc import Hashable, Iterator
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Key/value store backing a read-through cache.

    Entries are insert-only: once a key holds a value it is never replaced
    for the lifetime of the store.
    """

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Return the value stored under ``key``, or ``default``.

        Parameters:
            key: The cache key.
            default: Returned when no entry exists.

        Returns:
            The stored value, or ``default``.
        """
        ...

    def put_if_absent(self, key: Hashable, value: Any) -> Any:
        """Store ``value`` under ``key`` unless an entry already exists.

        Parameters:
            key: The cache key.
            value: The candidate value.

        Returns:
            The value held by the store after the call. This is the existing
            value when one was already present.
        """
        ...

    def keys(self) -> Iterator[Hashable]:
        """Iterate over a snapshot of the stored keys."""
        ...

    def __contains__(self, key: object) -> bool: ...

    def __len__(self) -> int: ...
