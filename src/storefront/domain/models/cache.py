"""Cache entry model."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """
    Cached payload with the time it was fetched (epoch milliseconds).

    IMPORTANT: Never mutate; a new fetch replaces the entry wholesale.
    Staleness is decided at read time, entries never expire on their own.
    """

    data: T
    timestamp: int
    sequence: int = 0

    def age_ms(self, now_ms: int) -> int:
        """Return how old this entry is at ``now_ms``."""
        return now_ms - self.timestamp

    def is_fresh(self, now_ms: int, duration_ms: int) -> bool:
        """Return True if the entry is younger than ``duration_ms``."""
        return self.age_ms(now_ms) < duration_ms
