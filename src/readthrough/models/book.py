"""Book record returned by book repositories."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Book(BaseModel):
    """A book addressed by its ISBN.

    Immutable once produced, so a cached instance can be shared freely
    between threads.
    """

    model_config = ConfigDict(frozen=True)

    isbn: str
    title: str

    def __str__(self) -> str:
        return f"Book{{isbn='{self.isbn}', title='{self.title}'}}"
