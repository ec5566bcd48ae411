"""Book lookups, plain and cached."""

from .caching import BOOKS_CACHE, CachingBookRepository
from .repository import SimpleBookRepository

__all__ = [
    "BOOKS_CACHE",
    "CachingBookRepository",
    "SimpleBookRepository",
]
