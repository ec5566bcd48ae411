"""Validated settings for lookups and caches."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LookupSettings(BaseModel):
    """Settings for the simulated slow book lookup.

    Parameters:
        delay: Seconds each lookup blocks before returning. Default 3.0.
        title: Title assigned to every book produced. Default ``"Some book"``.
    """

    model_config = ConfigDict(frozen=True)

    delay: float = Field(default=3.0, ge=0.0)
    title: str = "Some book"


class CacheSettings(BaseModel):
    """Settings for a read-through cache.

    Parameters:
        name: Optional cache name, used in logs and by ``CacheManager``.
        single_flight: Collapse concurrent misses for one key into a single
            load. When False, concurrent misses may each call the loader and
            the first stored value wins.
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    single_flight: bool = True
