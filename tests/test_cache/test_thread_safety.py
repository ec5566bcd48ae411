"""Concurrency tests for ReadThroughCache.

Covers single-flight collapsing of concurrent misses, shared failures for
waiters of a failed load, independence of unrelated keys, and the
first-value-wins rule when single-flight is disabled.
"""

from __future__ import annotations

import threading
from typing import Any

from readthrough.cache.read_through import ReadThroughCache
from tests.conftest import CountingLoader, run_threads, wait_until

NUM_THREADS = 10


def _collect(cache: ReadThroughCache[Any, Any], key: str, sink: list[Any]) -> None:
    sink.append(cache.get(key))


class TestSingleFlight:
    """Concurrent misses for one key share one load."""

    def test_concurrent_misses_load_once(self) -> None:
        gate = threading.Event()
        loader = CountingLoader(gate=gate)
        cache = ReadThroughCache(loader)
        results: list[Any] = []

        threads = [
            threading.Thread(target=_collect, args=(cache, "isbn-1234", results))
            for _ in range(NUM_THREADS)
        ]
        for t in threads:
            t.start()
        assert wait_until(lambda: cache.stats().misses == NUM_THREADS)
        gate.set()
        for t in threads:
            t.join(timeout=10)

        assert loader.calls == {"isbn-1234": 1}
        assert len(results) == NUM_THREADS
        assert all(r is results[0] for r in results)
        assert cache.store.get("isbn-1234") is results[0]
        stats = cache.stats()
        assert stats.loads == 1
        assert stats.hits == 0

    def test_waiters_share_the_failure(self) -> None:
        gate = threading.Event()
        error = RuntimeError("backend down")
        loader = CountingLoader(gate=gate, failing={"bad"}, error=error)
        cache = ReadThroughCache(loader)
        raised: list[BaseException] = []
        lock = threading.Lock()

        def worker() -> None:
            try:
                cache.get("bad")
            except RuntimeError as exc:
                with lock:
                    raised.append(exc)

        threads = [threading.Thread(target=worker) for _ in range(NUM_THREADS)]
        for t in threads:
            t.start()
        assert wait_until(lambda: cache.stats().misses == NUM_THREADS)
        gate.set()
        for t in threads:
            t.join(timeout=10)

        assert loader.calls == {"bad": 1}
        assert len(raised) == NUM_THREADS
        assert all(exc is error for exc in raised)
        assert "bad" not in cache

    def test_retry_after_shared_failure(self) -> None:
        loader = CountingLoader(failing={"bad"})
        cache = ReadThroughCache(loader)
        errors = run_threads([lambda: cache.get("bad") for _ in range(4)])
        assert len(errors) == 4

        loader.failing.clear()
        assert cache.get("bad") == {"key": "bad", "value": "value-bad"}
        assert "bad" in cache

    def test_unrelated_keys_do_not_wait(self) -> None:
        slow_gate = threading.Event()
        calls: list[str] = []

        def load(key: str) -> str:
            calls.append(key)
            if key == "slow":
                slow_gate.wait(timeout=5)
            return key.upper()

        cache = ReadThroughCache(load)
        slow_thread = threading.Thread(target=cache.get, args=("slow",))
        slow_thread.start()
        assert wait_until(lambda: "slow" in calls)

        # The slow load is still running; a different key completes regardless.
        assert cache.get("fast") == "FAST"
        assert "slow" not in cache

        slow_gate.set()
        slow_thread.join(timeout=10)
        assert cache.get("slow") == "SLOW"

    def test_many_keys_many_threads(self) -> None:
        loader = CountingLoader()
        cache = ReadThroughCache(loader)
        barrier = threading.Barrier(NUM_THREADS)
        keys = [f"k{i}" for i in range(20)]

        def worker() -> None:
            barrier.wait()
            for key in keys:
                assert cache.get(key)["key"] == key

        errors = run_threads([worker for _ in range(NUM_THREADS)])

        assert not errors, f"Thread errors: {errors}"
        assert loader.calls == {key: 1 for key in keys}
        assert len(cache) == len(keys)
        stats = cache.stats()
        assert stats.requests == NUM_THREADS * len(keys)


class TestWithoutSingleFlight:
    """Redundant loads are tolerated but the first stored value wins."""

    def test_concurrent_misses_agree_on_stored_value(self) -> None:
        barrier = threading.Barrier(NUM_THREADS)
        counter = iter(range(1000))
        counter_lock = threading.Lock()

        def load(key: str) -> dict[str, Any]:
            barrier.wait(timeout=5)
            with counter_lock:
                n = next(counter)
            return {"key": key, "load": n}

        cache = ReadThroughCache(load, single_flight=False)
        results: list[Any] = []
        errors = run_threads(
            [lambda: _collect(cache, "isbn-1234", results) for _ in range(NUM_THREADS)]
        )

        assert not errors
        assert len(results) == NUM_THREADS
        stored = cache.store.get("isbn-1234")
        assert all(r is stored for r in results)
        assert cache.stats().loads == NUM_THREADS
        assert cache.get("isbn-1234") is stored
