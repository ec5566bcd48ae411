"""Registry of named read-through caches."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Hashable
from typing import Any

from readthrough.cache.read_through import ReadThroughCache
from readthrough.cache.store import InMemoryCacheStore
from readthrough.exceptions import CacheNotFoundError
from readthrough.protocols.cache import CacheStore

logger = logging.getLogger(__name__)


class CacheManager:
    """Hands out one ``ReadThroughCache`` per name, creating it on first use.

    The first loader registered under a name is the one the cache keeps;
    later ``get_cache`` calls for that name return the existing cache.

    Parameters:
        single_flight: Passed to every cache the manager creates.
        store_factory: Builds the backing store for each new cache.
    """

    __slots__ = ("_caches", "_lock", "_single_flight", "_store_factory")

    def __init__(
        self,
        *,
        single_flight: bool = True,
        store_factory: Callable[[], CacheStore] = InMemoryCacheStore,
    ) -> None:
        self._single_flight = single_flight
        self._store_factory = store_factory
        self._caches: dict[str, ReadThroughCache[Any, Any]] = {}
        self._lock = threading.Lock()

    def get_cache(
        self,
        name: str,
        loader: Callable[[Hashable], Any] | None = None,
    ) -> ReadThroughCache[Any, Any]:
        """Return the cache registered as ``name``.

        Parameters:
            name: The cache name.
            loader: Loader for a cache that does not exist yet.

        Returns:
            The existing or newly created cache.

        Raises:
            CacheNotFoundError: If ``name`` is unknown and no loader is given.
        """
        with self._lock:
            cache = self._caches.get(name)
            if cache is not None:
                return cache
            if loader is None:
                raise CacheNotFoundError(name)
            cache = ReadThroughCache(
                loader,
                store=self._store_factory(),
                single_flight=self._single_flight,
                name=name,
            )
            self._caches[name] = cache
        logger.debug("Created cache %r", name)
        return cache

    @property
    def cache_names(self) -> list[str]:
        with self._lock:
            return sorted(self._caches)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._caches

    def __len__(self) -> int:
        with self._lock:
            return len(self._caches)

    def __repr__(self) -> str:
        return f"CacheManager(caches={self.cache_names})"
