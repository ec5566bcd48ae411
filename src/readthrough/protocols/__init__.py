"""Protocol definitions for readthrough's pluggable pieces."""

from .cache import CacheStore
from .repository import BookRepository

__all__ = [
    "BookRepository",
    "CacheStore",
]
