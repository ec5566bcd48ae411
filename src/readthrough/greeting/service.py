"""Numbered greeting service."""

from __future__ import annotations

import itertools
import logging
import threading

from readthrough.exceptions import ConfigurationError
from readthrough.models.greeting import Greeting

logger = logging.getLogger(__name__)

DEFAULT_NAME = "World"
DEFAULT_TEMPLATE = "Hello, %s!"


class GreetingService:
    """Produce greetings with ids that increase by one per call.

    The counter is shared by every thread using the service. Ids start at
    ``start`` (1 by default) and are never reused or skipped.

    Parameters:
        template: ``%``-style template with a single ``%s`` for the name.
        start: The first id handed out. Must be at least 1.
    """

    __slots__ = ("_counter", "_issued", "_lock", "_template")

    def __init__(self, template: str = DEFAULT_TEMPLATE, start: int = 1) -> None:
        try:
            template % DEFAULT_NAME
        except (TypeError, ValueError) as exc:
            msg = f"template must take exactly one '%s' name, got {template!r}"
            raise ConfigurationError(msg) from exc
        if start < 1:
            msg = f"start must be >= 1, got {start}"
            raise ConfigurationError(msg)
        self._template = template
        self._counter = itertools.count(start)
        self._issued = 0
        self._lock = threading.Lock()

    def greet(self, name: str | None = None) -> Greeting:
        """Return the next greeting for ``name`` (``"World"`` when empty)."""
        with self._lock:
            greeting_id = next(self._counter)
            self._issued += 1
        content = self._template % (name or DEFAULT_NAME)
        logger.debug("Issued greeting %d", greeting_id)
        return Greeting(id=greeting_id, content=content)

    @property
    def issued(self) -> int:
        """Number of greetings handed out so far."""
        with self._lock:
            return self._issued

    def __repr__(self) -> str:
        return f"GreetingService(template={self._template!r}, issued={self.issued})"


_default_service = GreetingService()


def greet(name: str | None = None) -> Greeting:
    """Greet using the process-wide service, so ids are numbered per process."""
    return _default_service.greet(name)
