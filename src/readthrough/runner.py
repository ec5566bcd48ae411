"""Demo runner: fetch a fixed sequence of ISBNs and log how long each took."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable

from pydantic import BaseModel, ConfigDict, Field

from readthrough.books.caching import CachingBookRepository
from readthrough.books.repository import SimpleBookRepository
from readthrough.models.book import Book
from readthrough.protocols.repository import BookRepository

logger = logging.getLogger(__name__)

DEMO_ISBNS: tuple[str, ...] = (
    "isbn-1234",
    "isbn-4567",
    "isbn-1234",
    "isbn-4567",
    "isbn-1234",
    "isbn-1234",
)


class LookupResult(BaseModel):
    """One timed lookup from :func:`run_demo`."""

    model_config = ConfigDict(frozen=True)

    isbn: str
    book: Book
    elapsed: float = Field(ge=0.0)


def build_demo_repository(
    delay: float = 3.0,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> CachingBookRepository:
    """A cached ``SimpleBookRepository`` wired the way the demo uses it."""
    return CachingBookRepository(SimpleBookRepository(delay, sleep=sleep))


def run_demo(
    repository: BookRepository,
    isbns: Iterable[str] = DEMO_ISBNS,
    *,
    clock: Callable[[], float] = time.perf_counter,
) -> list[LookupResult]:
    """Look up each ISBN in order, logging the book and the time taken."""
    logger.info(".... Fetching books")
    results: list[LookupResult] = []
    for isbn in isbns:
        start = clock()
        book = repository.get_by_isbn(isbn)
        elapsed = max(clock() - start, 0.0)
        logger.info("%s --> %s (%.3f s)", isbn, book, elapsed)
        results.append(LookupResult(isbn=isbn, book=book, elapsed=elapsed))
    return results
