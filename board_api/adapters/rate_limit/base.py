"""Rate limiter interfaces and quota definitions.

The API depends on this abstraction (not the concrete implementation) so the
storage backend can be swapped (e.g., Redis) with minimal changes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True)
class QuotaDefinition:
    """Token bucket policy for one operation kind.

    Attributes:
        name: Operation name the policy applies to (e.g., ``sendMessage``).
        rate: Tokens added per window.
        window_ms: Refill window in milliseconds.
        capacity: Maximum tokens the bucket holds (burst size).
    """

    name: str
    rate: int
    window_ms: int
    capacity: int

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("name must be a non-empty string")
        if self.rate < 1:
            raise ValueError("rate must be >= 1")
        if self.window_ms < 1:
            raise ValueError("window_ms must be >= 1")
        # A bucket smaller than one window of refill throttles below `rate`.
        if self.capacity < self.rate:
            raise ValueError("capacity must be >= rate")


@dataclass(frozen=True)
class RateLimitResult:
    """Result of a rate limit consume operation.

    Attributes:
        allowed: Whether the request is allowed to proceed.
        limit: Bucket capacity for the operation.
        remaining: Whole tokens left after this call (0 when blocked).
        retry_after_seconds: Suggested wait time in seconds when blocked.
    """

    allowed: bool
    limit: int
    remaining: int
    retry_after_seconds: int | None


class AbstractRateLimiter(ABC):
    """Interface for the quota component."""

    @property
    @abstractmethod
    def definitions(self) -> Mapping[str, QuotaDefinition]:
        """Quota definitions known to this limiter, keyed by operation name."""
        raise NotImplementedError

    @abstractmethod
    def consume(self, name: str, key: str, *, cost: int = 1) -> RateLimitResult:
        """Consume budget for ``key`` under the named operation's policy.

        Args:
            name: Operation name (must be one of ``definitions``).
            key: Partition key (principal id or ``"anonymous"``).
            cost: Tokens to consume (default 1).

        Returns:
            RateLimitResult describing whether it was allowed.

        Raises:
            ValueError: If the operation is unknown, the key is empty or cost < 1.
        """
        raise NotImplementedError

    @abstractmethod
    def reset(self, name: str | None = None, key: str | None = None) -> None:
        """Drop bucket state, optionally scoped to one operation and/or key."""
        raise NotImplementedError
