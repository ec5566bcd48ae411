"""Shared fixtures for readthrough tests."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Hashable
from typing import Any

import pytest

from readthrough.books.repository import SimpleBookRepository


class FakeSleep:
    """Records requested delays and advances a fake clock instead of blocking.

    Lets the 3 second lookup be exercised without the test waiting for it.
    Pass ``clock`` wherever a ``time.perf_counter`` replacement is accepted.
    """

    def __init__(self) -> None:
        self.calls: list[float] = []
        self.now = 0.0
        self._lock = threading.Lock()

    def __call__(self, seconds: float) -> None:
        with self._lock:
            self.calls.append(seconds)
            self.now += seconds

    def clock(self) -> float:
        with self._lock:
            return self.now


class CountingLoader:
    """Loader stand-in that counts calls per key.

    Optionally blocks on ``gate`` so concurrent callers can be lined up on a
    miss, and raises ``error`` for keys listed in ``failing``.
    """

    def __init__(
        self,
        gate: threading.Event | None = None,
        failing: set[Hashable] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.gate = gate
        self.failing = failing or set()
        self.error = error or RuntimeError("backend unavailable")
        self.calls: dict[Hashable, int] = {}
        self.entered = threading.Event()
        self._lock = threading.Lock()

    def __call__(self, key: Hashable) -> Any:
        with self._lock:
            self.calls[key] = self.calls.get(key, 0) + 1
        self.entered.set()
        if self.gate is not None:
            self.gate.wait(timeout=5)
        if key in self.failing:
            raise self.error
        return {"key": key, "value": f"value-{key}"}

    @property
    def total_calls(self) -> int:
        with self._lock:
            return sum(self.calls.values())


def wait_until(predicate: Callable[[], bool], timeout: float = 5.0) -> bool:
    """Poll ``predicate`` until it is true or ``timeout`` seconds pass."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.001)
    return predicate()


def run_threads(targets: list[Callable[[], None]]) -> list[BaseException]:
    """Start all callables as threads, wait for them and collect errors."""
    errors: list[BaseException] = []

    def _wrap(fn: Callable[[], None]) -> None:
        try:
            fn()
        except Exception as exc:
            errors.append(exc)

    threads = [threading.Thread(target=_wrap, args=(fn,)) for fn in targets]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)
    return errors


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()


@pytest.fixture
def repository(fake_sleep: FakeSleep) -> SimpleBookRepository:
    return SimpleBookRepository(delay=3.0, sleep=fake_sleep)


@pytest.fixture
def loader() -> CountingLoader:
    return CountingLoader()
