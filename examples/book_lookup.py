"""Example: Caching a slow book lookup. Run with: python examples/book_lookup.py

Demonstrates three ways of putting a ReadThroughCache in front of the
simulated slow SimpleBookRepository:

1. The CachingBookRepository adapter.
2. The ``@read_through`` decorator on a plain function.
3. Concurrent callers collapsing onto a single load (single-flight).

The delay is shortened to half a second so the example finishes quickly.
"""

from __future__ import annotations

import logging
import threading
import time

from readthrough.books import CachingBookRepository, SimpleBookRepository
from readthrough.cache import CacheManager, read_through
from readthrough.models import Book
from readthrough.runner import run_demo

DELAY = 0.5

# ---------------------------------------------------------------------------
# Example 1: Adapter
# ---------------------------------------------------------------------------


def adapter_example() -> None:
    """Run the six-lookup demo through the caching adapter."""
    print("=== CachingBookRepository ===")
    repository = CachingBookRepository(SimpleBookRepository(DELAY))
    for result in run_demo(repository):
        print(f"  {result.isbn} --> {result.book} ({result.elapsed:.3f} s)")
    print(f"  {repository.cache.stats()}")
    print()


# ---------------------------------------------------------------------------
# Example 2: Decorator
# ---------------------------------------------------------------------------

manager = CacheManager()
backend = SimpleBookRepository(DELAY, title="Decorated book")


@read_through(name="books", manager=manager)
def find_book(isbn: str) -> Book:
    return backend.get_by_isbn(isbn)


def decorator_example() -> None:
    """Call a decorated function twice and time both calls."""
    print("=== @read_through ===")
    for attempt in (1, 2):
        start = time.perf_counter()
        book = find_book("isbn-1234")
        print(f"  call {attempt}: {book} ({time.perf_counter() - start:.3f} s)")
    print(f"  caches registered: {manager.cache_names}")
    print()


# ---------------------------------------------------------------------------
# Example 3: Single-flight
# ---------------------------------------------------------------------------


def single_flight_example() -> None:
    """Eight threads ask for the same uncached ISBN at once."""
    print("=== Single-flight ===")
    slow = SimpleBookRepository(DELAY)
    repository = CachingBookRepository(slow)

    threads = [
        threading.Thread(target=repository.get_by_isbn, args=("isbn-4567",)) for _ in range(8)
    ]
    start = time.perf_counter()
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    print(f"  8 callers finished in {time.perf_counter() - start:.3f} s")
    print(f"  backend calls: {slow.call_count}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING)
    adapter_example()
    decorator_example()
    single_flight_example()
