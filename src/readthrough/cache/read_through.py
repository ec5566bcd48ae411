"""Read-through cache over an expensive single-key loader."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Hashable
from concurrent.futures import Future
from typing import Generic, TypeVar

from pydantic import ValidationError

from readthrough.cache.store import InMemoryCacheStore
from readthrough.exceptions import ConfigurationError
from readthrough.models.settings import CacheSettings
from readthrough.models.stats import CacheStats
from readthrough.protocols.cache import CacheStore

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

_MISSING = object()


class ReadThroughCache(Generic[K, V]):
    """Serve repeated lookups for a key from memory after the first load.

    On a miss the cache calls ``loader(key)`` itself, stores the result and
    returns it. Entries never expire and are never replaced: if two loads for
    the same key race, the first value stored wins and both callers receive it.

    With ``single_flight`` enabled (the default) concurrent misses for one key
    wait on a shared in-flight ``Future`` so the loader runs once. The internal
    lock only guards bookkeeping and is released while the loader runs, so
    misses on unrelated keys proceed in parallel.

    A loader exception is never cached. It is raised to the caller that ran
    the load and to every caller waiting on the same flight; the next ``get``
    for that key starts a fresh load.

    A loader must not call ``get`` for the key it is loading. Under
    single-flight that call would wait on its own load, so it raises
    ``ConfigurationError`` instead.

    Usage::

        repository = SimpleBookRepository()
        books = ReadThroughCache(repository.get_by_isbn, name="books")
        books.get("isbn-1234")  # slow
        books.get("isbn-1234")  # served from memory

    Parameters:
        loader: Callable producing the value for a key.
        store: Backing store. Defaults to a fresh ``InMemoryCacheStore``.
        single_flight: Collapse concurrent misses for a key into one load.
        name: Optional name used in logs.
    """

    __slots__ = (
        "_hits",
        "_in_flight",
        "_load_failures",
        "_loader",
        "_loads",
        "_local",
        "_lock",
        "_misses",
        "_settings",
        "_store",
    )

    def __init__(
        self,
        loader: Callable[[K], V],
        *,
        store: CacheStore | None = None,
        single_flight: bool = True,
        name: str | None = None,
    ) -> None:
        if not callable(loader):
            msg = f"loader must be callable, got {type(loader).__name__}"
            raise ConfigurationError(msg)
        try:
            self._settings = CacheSettings(name=name, single_flight=single_flight)
        except ValidationError as exc:
            raise ConfigurationError(str(exc)) from exc
        self._loader = loader
        self._store: CacheStore = store if store is not None else InMemoryCacheStore()
        self._in_flight: dict[K, Future[V]] = {}
        self._lock = threading.Lock()
        self._local = threading.local()
        self._hits = 0
        self._misses = 0
        self._loads = 0
        self._load_failures = 0

    @classmethod
    def from_settings(
        cls,
        loader: Callable[[K], V],
        settings: CacheSettings,
        store: CacheStore | None = None,
    ) -> ReadThroughCache[K, V]:
        """Build a cache from a ``CacheSettings`` instance."""
        return cls(
            loader,
            store=store,
            single_flight=settings.single_flight,
            name=settings.name,
        )

    @property
    def name(self) -> str | None:
        return self._settings.name

    @property
    def single_flight(self) -> bool:
        return self._settings.single_flight

    @property
    def store(self) -> CacheStore:
        return self._store

    def get(self, key: K) -> V:
        """Return the value for ``key``, loading and storing it on a miss.

        Parameters:
            key: The lookup key.

        Returns:
            The stored value for ``key``.

        Raises:
            Exception: Whatever the loader raised, unchanged. Nothing is stored.
        """
        value = self._store.get(key, _MISSING)
        if value is not _MISSING:
            with self._lock:
                self._hits += 1
            logger.debug("Cache %r hit for key %r", self.name, key)
            return value  # type: ignore[no-any-return]

        if not self._settings.single_flight:
            self._check_reentry(key)
            with self._lock:
                self._misses += 1
            logger.debug("Cache %r miss for key %r", self.name, key)
            return self._load(key)

        return self._get_single_flight(key)

    __call__ = get

    def _get_single_flight(self, key: K) -> V:
        with self._lock:
            # A flight may have finished between the unlocked check and here.
            value = self._store.get(key, _MISSING)
            if value is not _MISSING:
                self._hits += 1
                return value  # type: ignore[no-any-return]
            self._misses += 1
            future = self._in_flight.get(key)
            leader = future is None
            if future is None:
                future = Future()
                self._in_flight[key] = future

        if not leader:
            self._check_reentry(key)
            logger.debug("Cache %r joining in-flight load for key %r", self.name, key)
            return future.result()

        logger.debug("Cache %r miss for key %r", self.name, key)
        try:
            value = self._load(key)
        except BaseException as exc:
            self._end_flight(key)
            future.set_exception(exc)
            raise
        self._end_flight(key)
        future.set_result(value)
        return value  # type: ignore[no-any-return]

    def _loading_keys(self) -> set[K]:
        keys: set[K] | None = getattr(self._local, "keys", None)
        if keys is None:
            keys = set()
            self._local.keys = keys
        return keys

    def _check_reentry(self, key: K) -> None:
        if key in self._loading_keys():
            msg = f"Loader for cache {self.name!r} requested its own key {key!r}"
            raise ConfigurationError(msg)

    def _end_flight(self, key: K) -> None:
        with self._lock:
            self._in_flight.pop(key, None)

    def _load(self, key: K) -> V:
        start = time.perf_counter()
        loading = self._loading_keys()
        loading.add(key)
        try:
            value = self._loader(key)
        except Exception:
            with self._lock:
                self._load_failures += 1
            logger.warning(
                "Cache %r load failed for key %r; result not cached", self.name, key
            )
            raise
        finally:
            loading.discard(key)
        with self._lock:
            self._loads += 1
        stored = self._store.put_if_absent(key, value)
        logger.debug(
            "Cache %r loaded key %r in %.1f ms",
            self.name,
            key,
            (time.perf_counter() - start) * 1000,
        )
        return stored  # type: ignore[no-any-return]

    def stats(self) -> CacheStats:
        """Return a snapshot of the hit/miss/load counters."""
        size = len(self._store)
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                loads=self._loads,
                load_failures=self._load_failures,
                size=size,
            )

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        return (
            f"ReadThroughCache(name={self.name!r}, "
            f"single_flight={self.single_flight}, entries={len(self)})"
        )
