"""Data models for readthrough."""

from .book import Book
from .greeting import Greeting
from .settings import CacheSettings, LookupSettings
from .stats import CacheStats

__all__ = [
    "Book",
    "CacheSettings",
    "CacheStats",
    "Greeting",
    "LookupSettings",
]
