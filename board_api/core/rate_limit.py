"""Operation quotas and the rate-limit gate.

This module owns the quota table, the partition key policy and the gate the
services call before admitting a write.

Key policy:
- Authenticated callers are limited per principal id.
- Every caller without a session shares the single ``"anonymous"`` bucket
  of the operation.
"""

from __future__ import annotations

import logging

from board_api.adapters.rate_limit.base import AbstractRateLimiter, QuotaDefinition
from board_api.adapters.rate_limit.token_bucket import InMemoryTokenBucketRateLimiter
from board_api.core.config import settings
from board_api.core.errors import RateLimitAppError
from board_api.core.identity import Principal
from board_api.core.logging import hash_identifier

logger = logging.getLogger(__name__)

ANONYMOUS_RATE_LIMIT_KEY = "anonymous"

MINUTE_MS = 60_000
HOUR_MS = 3_600_000

RATE_LIMIT_DEFS: dict[str, QuotaDefinition] = {
    definition.name: definition
    for definition in (
        # Messages: 10 per minute, burst up to 15
        QuotaDefinition("sendMessage", rate=10, window_ms=MINUTE_MS, capacity=15),
        QuotaDefinition("uploadFile", rate=5, window_ms=MINUTE_MS, capacity=10),
        QuotaDefinition("deleteFile", rate=20, window_ms=MINUTE_MS, capacity=25),
        QuotaDefinition("apiCall", rate=60, window_ms=MINUTE_MS, capacity=80),
        QuotaDefinition("loginAttempt", rate=5, window_ms=MINUTE_MS, capacity=5),
        QuotaDefinition("registerUser", rate=3, window_ms=HOUR_MS, capacity=3),
        QuotaDefinition("sendEmail", rate=10, window_ms=HOUR_MS, capacity=10),
    )
}


_limiter: AbstractRateLimiter | None = None


def get_rate_limiter() -> AbstractRateLimiter:
    """Return the process-wide rate limiter, building it on first use."""

    global _limiter

    if _limiter is None:
        _limiter = InMemoryTokenBucketRateLimiter(RATE_LIMIT_DEFS.values())
    return _limiter


def set_rate_limiter(limiter: AbstractRateLimiter | None) -> None:
    """Replace the process-wide limiter (``None`` rebuilds the default lazily)."""

    global _limiter
    _limiter = limiter


def derive_rate_limit_key(principal: Principal | None) -> str:
    """Map the caller to its rate-limit partition key.

    Args:
        principal: Resolved caller, or None for anonymous traffic.

    Returns:
        The principal id, or ``"anonymous"`` when there is no principal.
    """

    if principal is None:
        return ANONYMOUS_RATE_LIMIT_KEY
    return principal.id


def enforce_rate_limit(
    name: str,
    key: str,
    *,
    limiter: AbstractRateLimiter | None = None,
) -> None:
    """Consume one token for ``key`` under operation ``name``.

    Args:
        name: Operation name from ``RATE_LIMIT_DEFS``.
        key: Partition key from ``derive_rate_limit_key``.
        limiter: Optional limiter override; defaults to the process-wide one.

    Raises:
        RateLimitAppError: When the bucket is empty.
    """

    if not settings.app.rate_limit_enabled:
        return

    active = limiter or get_rate_limiter()
    result = active.consume(name, key)
    log_extra = {
        "operation": name,
        "key_type": "anonymous" if key == ANONYMOUS_RATE_LIMIT_KEY else "principal",
        "key_hash": hash_identifier(key),
        "limit": result.limit,
        "remaining": result.remaining,
    }

    if result.allowed:
        logger.debug("rate_limit.allowed", extra=log_extra)
        return

    retry_after = result.retry_after_seconds or 1
    logger.warning("rate_limit.exceeded", extra={**log_extra, "retry_after_s": retry_after})
    raise RateLimitAppError(
        code="rate_limit_exceeded",
        message="Rate limit exceeded. Try again later.",
        details={"operation": name, "retry_after": retry_after},
        retry_after_seconds=retry_after,
        limit=result.limit,
        remaining=result.remaining,
    )
