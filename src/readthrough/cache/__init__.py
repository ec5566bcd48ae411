"""Read-through caching for readthrough."""

from .decorator import read_through
from .manager import CacheManager
from .read_through import ReadThroughCache
from .store import InMemoryCacheStore

__all__ = [
    "CacheManager",
    "InMemoryCacheStore",
    "ReadThroughCache",
    "read_through",
]
