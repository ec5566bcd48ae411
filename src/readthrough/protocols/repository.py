"""Protocol definition for book repositories."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from readthrough.models.book import Book


@runtime_checkable
class BookRepository(Protocol):
    """Anything that can resolve an ISBN to a ``Book``."""

    def get_by_isbn(self, isbn: str) -> Book:
        """Return the book for ``isbn``.

        Parameters:
            isbn: The ISBN to look up.

        Returns:
            The matching ``Book``.
        """
        ...
