"""Book repository adapter that routes lookups through a read-through cache."""

from __future__ import annotations

from readthrough.cache.manager import CacheManager
from readthrough.cache.read_through import ReadThroughCache
from readthrough.models.book import Book
from readthrough.protocols.repository import BookRepository

BOOKS_CACHE = "books"


class CachingBookRepository:
    """Wrap a ``BookRepository`` so each ISBN is fetched at most once.

    Exposes the same ``get_by_isbn`` signature as the wrapped repository.

    Parameters:
        repository: The slow repository to wrap.
        cache: Cache to route through. Defaults to a new single-flight
            ``ReadThroughCache`` named ``"books"`` over ``repository``.
    """

    __slots__ = ("_cache", "_repository")

    def __init__(
        self,
        repository: BookRepository,
        cache: ReadThroughCache[str, Book] | None = None,
    ) -> None:
        self._repository = repository
        self._cache: ReadThroughCache[str, Book] = (
            cache
            if cache is not None
            else ReadThroughCache(repository.get_by_isbn, name=BOOKS_CACHE)
        )

    @classmethod
    def from_manager(
        cls,
        repository: BookRepository,
        manager: CacheManager,
        name: str = BOOKS_CACHE,
    ) -> CachingBookRepository:
        """Use (or register) the manager's cache called ``name``."""
        return cls(repository, manager.get_cache(name, repository.get_by_isbn))

    @property
    def cache(self) -> ReadThroughCache[str, Book]:
        return self._cache

    @property
    def repository(self) -> BookRepository:
        return self._repository

    def get_by_isbn(self, isbn: str) -> Book:
        return self._cache.get(isbn)

    def __repr__(self) -> str:
        return f"CachingBookRepository(repository={self._repository!r}, cache={self._cache!r})"
