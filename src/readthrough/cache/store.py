"""In-memory cache store implementation."""

from __future__ import annotations

import logging
import threading
from collections.abc import Hashable, Iterator
from typing import Any

logger = logging.getLogger(__name__)


class InMemoryCacheStore:
    """Unbounded, insert-only dict store.

    Thread-safe via a single lock held only for the dict operation itself,
    never while a value is being produced. Entries have no expiry and are
    kept until the store is discarded.

    Implements the ``CacheStore`` protocol.
    """

    __slots__ = ("_data", "_lock")

    def __init__(self) -> None:
        self._data: dict[Hashable, Any] = {}
        self._lock = threading.Lock()

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Return the value stored under ``key``, or ``default``.

        Parameters:
            key: The cache key.
            default: Returned when no entry exists.

        Returns:
            The stored value, or ``default``.
        """
        with self._lock:
            return self._data.get(key, default)

    def put_if_absent(self, key: Hashable, value: Any) -> Any:
        """Store ``value`` under ``key`` unless an entry already exists.

        Parameters:
            key: The cache key.
            value: The candidate value.

        Returns:
            The value held after the call; the earlier value wins.
        """
        with self._lock:
            existing = self._data.setdefault(key, value)
        if existing is not value:
            logger.debug("Kept existing entry for key %r, discarded late value", key)
        return existing

    def keys(self) -> Iterator[Hashable]:
        with self._lock:
            snapshot = list(self._data)
        return iter(snapshot)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(entries={len(self)})"
