"""Process-wide numbered greetings."""

from .service import DEFAULT_NAME, GreetingService, greet

__all__ = [
    "DEFAULT_NAME",
    "GreetingService",
    "greet",
]
