"""Tests for GreetingService and the process-wide greet()."""

from __future__ import annotations

import threading

import pytest

from readthrough.exceptions import ConfigurationError
from readthrough.greeting import DEFAULT_NAME, GreetingService, greet
from readthrough.models.greeting import Greeting
from tests.conftest import run_threads


class TestGreetingService:
    """Numbered greetings."""

    def test_first_greeting(self) -> None:
        service = GreetingService()
        assert service.greet() == Greeting(id=1, content="Hello, World!")

    def test_ids_increment(self) -> None:
        service = GreetingService()
        ids = [service.greet("Ann").id for _ in range(3)]
        assert ids == [1, 2, 3]
        assert service.issued == 3

    def test_named_greeting(self) -> None:
        assert GreetingService().greet("Ann").content == "Hello, Ann!"

    @pytest.mark.parametrize("name", [None, ""])
    def test_default_name(self, name: str | None) -> None:
        assert GreetingService().greet(name).content == f"Hello, {DEFAULT_NAME}!"

    def test_custom_template_and_start(self) -> None:
        service = GreetingService(template="Hi %s", start=10)
        assert service.greet("Bo") == Greeting(id=10, content="Hi Bo")

    @pytest.mark.parametrize(
        "template", ["Hello!", "%s and %s", "Hi %d %s", "Hi %(name)s", "Hi %"]
    )
    def test_bad_template_rejected_at_construction(self, template: str) -> None:
        with pytest.raises(ConfigurationError, match="template"):
            GreetingService(template=template)

    def test_escaped_percent_template(self) -> None:
        service = GreetingService(template="100%% %s")
        assert service.greet("Ann").content == "100% Ann"
        assert service.greet("50%").content == "100% 50%"

    def test_start_below_one_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            GreetingService(start=0)

    def test_concurrent_ids_unique_and_gap_free(self) -> None:
        service = GreetingService()
        barrier = threading.Barrier(8)
        ids: list[int] = []
        lock = threading.Lock()

        def worker() -> None:
            barrier.wait()
            for _ in range(50):
                greeting = service.greet()
                with lock:
                    ids.append(greeting.id)

        errors = run_threads([worker for _ in range(8)])

        assert not errors
        assert sorted(ids) == list(range(1, 401))


class TestProcessWideGreet:
    """The module-level default service."""

    def test_ids_keep_increasing(self) -> None:
        first = greet("Ann")
        second = greet()
        assert second.id == first.id + 1
        assert first.content == "Hello, Ann!"
        assert second.content == "Hello, World!"
