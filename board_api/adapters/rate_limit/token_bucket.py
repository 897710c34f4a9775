"""In-memory token bucket rate limiter.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Thread-safe: uses a lock around shared state.
- Each (operation, key) pair owns an independent bucket that starts full.
"""

from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Mapping

from board_api.adapters.rate_limit.base import AbstractRateLimiter, QuotaDefinition, RateLimitResult


@dataclass
class _BucketState:
    tokens: float
    updated_at: float


class InMemoryTokenBucketRateLimiter(AbstractRateLimiter):
    """Token bucket limiter keyed by ``(operation name, partition key)``.

    Tokens refill continuously at ``rate`` per ``window_ms`` and are capped at
    ``capacity``; an admitted call consumes ``cost`` tokens.
    """

    def __init__(
        self,
        definitions: Iterable[QuotaDefinition],
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the limiter.

        Args:
            definitions: One quota definition per operation name.
            clock: Time source returning seconds (monotonic by default).

        Raises:
            ValueError: If no definitions are given or a name is duplicated.
        """
        by_name: dict[str, QuotaDefinition] = {}
        for definition in definitions:
            if definition.name in by_name:
                raise ValueError(f"duplicate quota definition: {definition.name}")
            by_name[definition.name] = definition
        if not by_name:
            raise ValueError("at least one quota definition is required")

        self._definitions = by_name
        self._clock = clock
        self._lock = threading.RLock()
        self._buckets: dict[tuple[str, str], _BucketState] = {}

    @property
    def definitions(self) -> Mapping[str, QuotaDefinition]:
        return dict(self._definitions)

    def _refill_locked(self, definition: QuotaDefinition, bucket_key: tuple[str, str], now: float) -> _BucketState:
        state = self._buckets.get(bucket_key)
        if state is None:
            state = _BucketState(tokens=float(definition.capacity), updated_at=now)
            self._buckets[bucket_key] = state
            return state

        # A stale timestamp never rewinds the bucket
        if now <= state.updated_at:
            return state
        refilled = (now - state.updated_at) * 1000 * definition.rate / definition.window_ms
        state.tokens = min(float(definition.capacity), state.tokens + refilled)
        state.updated_at = now
        return state

    def consume(self, name: str, key: str, *, cost: int = 1) -> RateLimitResult:
        """Take ``cost`` tokens from the bucket or report when to retry.

        Raises:
            ValueError: If the operation is unknown, key is empty or cost < 1.
        """
        definition = self._definitions.get(name)
        if definition is None:
            raise ValueError(f"unknown rate limit operation: {name}")
        if not key:
            raise ValueError("key must be a non-empty string")
        if cost < 1:
            raise ValueError("cost must be >= 1")

        with self._lock:
            now = self._clock()
            state = self._refill_locked(definition, (name, key), now)

            if state.tokens >= cost:
                state.tokens -= cost
                return RateLimitResult(
                    allowed=True,
                    limit=definition.capacity,
                    remaining=int(math.floor(state.tokens)),
                    retry_after_seconds=None,
                )

            missing = cost - state.tokens
            retry_after = max(1, int(math.ceil(missing * definition.window_ms / (definition.rate * 1000))))
            return RateLimitResult(
                allowed=False,
                limit=definition.capacity,
                remaining=0,
                retry_after_seconds=retry_after,
            )

    def reset(self, name: str | None = None, key: str | None = None) -> None:
        with self._lock:
            if name is None and key is None:
                self._buckets.clear()
                return
            for bucket_key in list(self._buckets):
                bucket_name, bucket_partition = bucket_key
                if (name is None or bucket_name == name) and (key is None or bucket_partition == key):
                    del self._buckets[bucket_key]
