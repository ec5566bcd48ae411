"""Cache statistics snapshot."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CacheStats(BaseModel):
    """Point-in-time counters for a read-through cache.

    Parameters:
        hits: Calls answered from the store.
        misses: Calls that found no stored value, including those that
            joined another caller's in-flight load.
        loads: Successful loader invocations.
        load_failures: Loader invocations that raised.
        size: Number of stored entries.
    """

    model_config = ConfigDict(frozen=True)

    hits: int = Field(default=0, ge=0)
    misses: int = Field(default=0, ge=0)
    loads: int = Field(default=0, ge=0)
    load_failures: int = Field(default=0, ge=0)
    size: int = Field(default=0, ge=0)

    @property
    def requests(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Fraction of calls served from the store, 0.0 when unused."""
        if self.requests == 0:
            return 0.0
        return self.hits / self.requests
