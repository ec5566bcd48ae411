"""Custom exceptions for readthrough."""

from __future__ import annotations

__all__ = [
    "CacheNotFoundError",
    "ConfigurationError",
    "ReadThroughError",
]


class ReadThroughError(Exception):
    """Base exception for all readthrough errors."""


class ConfigurationError(ReadThroughError):
    """Raised when a component is constructed with invalid settings."""


class CacheNotFoundError(ReadThroughError):
    """Raised when a named cache is requested that was never registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No cache registered under name {name!r}")
        self.name = name
