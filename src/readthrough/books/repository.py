"""Simulated slow book repository."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

from pydantic import ValidationError

from readthrough.exceptions import ConfigurationError
from readthrough.models.book import Book
from readthrough.models.settings import LookupSettings

logger = logging.getLogger(__name__)


class SimpleBookRepository:
    """Book repository that blocks for a fixed delay on every lookup.

    Stands in for a high-latency backend. Each call sleeps for ``delay``
    seconds and returns ``Book(isbn=isbn, title=title)``; nothing is
    remembered between calls apart from ``call_count``.

    Implements the ``BookRepository`` protocol.

    Parameters:
        delay: Seconds to block per lookup. Default 3.0.
        title: Title given to every book. Default ``"Some book"``.
        sleep: Blocking function used for the delay. Tests pass a fake.
    """

    __slots__ = ("_calls", "_lock", "_settings", "_sleep")

    def __init__(
        self,
        delay: float = 3.0,
        title: str = "Some book",
        *,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        try:
            self._settings = LookupSettings(delay=delay, title=title)
        except ValidationError as exc:
            raise ConfigurationError(str(exc)) from exc
        self._sleep = sleep
        self._calls = 0
        self._lock = threading.Lock()

    @classmethod
    def from_settings(
        cls,
        settings: LookupSettings,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ) -> SimpleBookRepository:
        return cls(settings.delay, settings.title, sleep=sleep)

    @property
    def delay(self) -> float:
        return self._settings.delay

    @property
    def call_count(self) -> int:
        """Number of lookups performed so far."""
        with self._lock:
            return self._calls

    def get_by_isbn(self, isbn: str) -> Book:
        with self._lock:
            self._calls += 1
        logger.debug("Looking up %s (simulated %.2f s delay)", isbn, self.delay)
        self._sleep(self.delay)
        return Book(isbn=isbn, title=self._settings.title)

    def lookup(self, key: str) -> Book:
        """Alias of :meth:`get_by_isbn` for generic loader call sites."""
        return self.get_by_isbn(key)

    def __repr__(self) -> str:
        return f"SimpleBookRepository(delay={self.delay}, calls={self.call_count})"
