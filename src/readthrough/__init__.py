"""readthrough: read-through caching for slow lookups.

Caching:
    ReadThroughCache, CacheManager, InMemoryCacheStore, read_through

Books:
    SimpleBookRepository, CachingBookRepository, BOOKS_CACHE

Greetings:
    GreetingService, greet

Demo:
    run_demo, build_demo_repository, DEMO_ISBNS, LookupResult

Models:
    Book, Greeting, CacheStats, CacheSettings, LookupSettings

Protocols:
    BookRepository, CacheStore

Exceptions:
    ReadThroughError, ConfigurationError, CacheNotFoundError
"""

from importlib.metadata import PackageNotFoundError, version

from readthrough.books import BOOKS_CACHE, CachingBookRepository, SimpleBookRepository
from readthrough.cache import CacheManager, InMemoryCacheStore, ReadThroughCache, read_through
from readthrough.exceptions import CacheNotFoundError, ConfigurationError, ReadThroughError
from readthrough.greeting import GreetingService, greet
from readthrough.models import Book, CacheSettings, CacheStats, Greeting, LookupSettings
from readthrough.protocols import BookRepository, CacheStore
from readthrough.runner import DEMO_ISBNS, LookupResult, build_demo_repository, run_demo

try:
    __version__ = version("readthrough")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = [
    "BOOKS_CACHE",
    "DEMO_ISBNS",
    "Book",
    "BookRepository",
    "CacheManager",
    "CacheNotFoundError",
    "CacheSettings",
    "CacheStats",
    "CacheStore",
    "CachingBookRepository",
    "ConfigurationError",
    "Greeting",
    "GreetingService",
    "InMemoryCacheStore",
    "LookupResult",
    "LookupSettings",
    "ReadThroughCache",
    "ReadThroughError",
    "SimpleBookRepository",
    "__version__",
    "build_demo_repository",
    "greet",
    "read_through",
    "run_demo",
]
