"""``@read_through`` decorator for wrapping single-key lookup functions."""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable
from typing import Any, overload

from readthrough.cache.manager import CacheManager
from readthrough.cache.read_through import ReadThroughCache
from readthrough.exceptions import ConfigurationError


@overload
def read_through(fn: Callable[[Any], Any]) -> Callable[[Any], Any]: ...


@overload
def read_through(
    fn: None = None,
    *,
    name: str | None = None,
    manager: CacheManager | None = None,
    single_flight: bool = True,
) -> Callable[[Callable[[Any], Any]], Callable[[Any], Any]]: ...


def read_through(
    fn: Callable[[Any], Any] | None = None,
    *,
    name: str | None = None,
    manager: CacheManager | None = None,
    single_flight: bool = True,
) -> Callable[[Any], Any] | Callable[[Callable[[Any], Any]], Callable[[Any], Any]]:
    """Wrap a one-argument lookup function in a read-through cache.

    The wrapper keeps the function's call signature, so the key may be
    passed positionally or by keyword, and exposes the cache as
    ``wrapper.cache``. The function must take exactly one parameter. Supports both bare and parameterised usage::

        @read_through
        def find_book(isbn: str) -> Book: ...

        @read_through(name="books", manager=manager)
        def find_book(isbn: str) -> Book: ...

    Parameters
    ----------
    fn:
        The function to wrap (when used as bare ``@read_through``).
    name:
        Cache name. Defaults to the function's qualified name.
    manager:
        When given, the cache is obtained from (and registered with) this
        manager, so functions decorated with the same name share a cache.
        The manager's own ``single_flight`` setting applies.
    single_flight:
        Collapse concurrent misses for a key into one call of ``fn``.
    """
    if fn is not None:
        return _wrap(fn, name=name, manager=manager, single_flight=single_flight)

    def decorator(func: Callable[[Any], Any]) -> Callable[[Any], Any]:
        return _wrap(func, name=name, manager=manager, single_flight=single_flight)

    return decorator


def _wrap(
    fn: Callable[[Any], Any],
    *,
    name: str | None,
    manager: CacheManager | None,
    single_flight: bool,
) -> Callable[[Any], Any]:
    signature = inspect.signature(fn)
    params = list(signature.parameters.values())
    if len(params) != 1 or params[0].kind in (
        inspect.Parameter.VAR_POSITIONAL,
        inspect.Parameter.VAR_KEYWORD,
        inspect.Parameter.KEYWORD_ONLY,
    ):
        msg = f"{fn.__qualname__} must take exactly one key parameter, got {signature}"
        raise ConfigurationError(msg)
    key_name = params[0].name

    cache_name = name or fn.__qualname__
    if manager is not None:
        cache = manager.get_cache(cache_name, fn)
    else:
        cache = ReadThroughCache(fn, single_flight=single_flight, name=cache_name)

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        bound = signature.bind(*args, **kwargs)
        bound.apply_defaults()
        return cache.get(bound.arguments[key_name])

    wrapper.cache = cache  # type: ignore[attr-defined]
    return wrapper
