"""Unit tests for the in-memory token bucket rate limiter."""

from unittest.mock import Mock

import pytest

from board_api.adapters.rate_limit.base import QuotaDefinition
from board_api.adapters.rate_limit.token_bucket import InMemoryTokenBucketRateLimiter

SEND = QuotaDefinition("sendMessage", rate=10, window_ms=60_000, capacity=15)


def _limiter(*definitions: QuotaDefinition, start: float = 1000.0) -> tuple[InMemoryTokenBucketRateLimiter, Mock]:
    clock = Mock(return_value=start)
    return InMemoryTokenBucketRateLimiter(definitions or (SEND,), clock=clock), clock


def test_full_bucket_admits_capacity_then_rejects() -> None:
    limiter, _ = _limiter()

    results = [limiter.consume("sendMessage", "u1") for _ in range(15)]
    assert all(r.allowed for r in results)
    assert results[-1].remaining == 0

    blocked = limiter.consume("sendMessage", "u1")
    assert blocked.allowed is False
    assert blocked.remaining == 0
    assert blocked.limit == 15
    assert blocked.retry_after_seconds == 6  # one token every 6 seconds


def test_remaining_counts_down() -> None:
    limiter, _ = _limiter()

    assert limiter.consume("sendMessage", "u1").remaining == 14
    assert limiter.consume("sendMessage", "u1").remaining == 13


def test_one_window_restores_rate_tokens() -> None:
    limiter, clock = _limiter()
    for _ in range(15):
        limiter.consume("sendMessage", "u1")
    assert limiter.consume("sendMessage", "u1").allowed is False

    clock.return_value = 1060.0

    admitted = [limiter.consume("sendMessage", "u1").allowed for _ in range(10)]
    assert all(admitted)
    assert limiter.consume("sendMessage", "u1").allowed is False


def test_refill_is_capped_at_capacity() -> None:
    limiter, clock = _limiter()
    limiter.consume("sendMessage", "u1")

    clock.return_value = 1000.0 + 3600

    admitted = sum(limiter.consume("sendMessage", "u1").allowed for _ in range(20))
    assert admitted == 15


def test_partial_refill_is_continuous() -> None:
    limiter, clock = _limiter()
    for _ in range(15):
        limiter.consume("sendMessage", "u1")

    clock.return_value = 1005.0
    assert limiter.consume("sendMessage", "u1").allowed is False

    clock.return_value = 1007.0
    assert limiter.consume("sendMessage", "u1").allowed is True


def test_out_of_order_clock_readings_keep_latest_update() -> None:
    clock = Mock(side_effect=[1000.0] * 15 + [1030.0, 1010.0, 1030.0])
    limiter = InMemoryTokenBucketRateLimiter([SEND], clock=clock)
    for _ in range(15):
        limiter.consume("sendMessage", "u1")

    remaining = [limiter.consume("sendMessage", "u1").remaining for _ in range(3)]

    assert remaining == [4, 3, 2]
    assert clock.call_count == 18


def test_buckets_are_isolated_by_key() -> None:
    limiter, _ = _limiter()
    for _ in range(15):
        limiter.consume("sendMessage", "u1")

    assert limiter.consume("sendMessage", "u1").allowed is False
    assert limiter.consume("sendMessage", "u2").allowed is True


def test_buckets_are_isolated_by_operation() -> None:
    upload = QuotaDefinition("uploadFile", rate=5, window_ms=60_000, capacity=10)
    limiter, _ = _limiter(SEND, upload)
    for _ in range(15):
        limiter.consume("sendMessage", "u1")

    assert limiter.consume("uploadFile", "u1").allowed is True


def test_reset_scoped_to_key() -> None:
    limiter, _ = _limiter()
    for _ in range(15):
        limiter.consume("sendMessage", "u1")
        limiter.consume("sendMessage", "u2")

    limiter.reset(key="u1")

    assert limiter.consume("sendMessage", "u1").allowed is True
    assert limiter.consume("sendMessage", "u2").allowed is False


def test_unknown_operation_is_rejected() -> None:
    limiter, _ = _limiter()
    with pytest.raises(ValueError):
        limiter.consume("nope", "u1")


def test_invalid_consume_args() -> None:
    limiter, _ = _limiter()

    with pytest.raises(ValueError):
        limiter.consume("sendMessage", "")

    with pytest.raises(ValueError):
        limiter.consume("sendMessage", "u1", cost=0)


def test_duplicate_definitions_are_rejected() -> None:
    with pytest.raises(ValueError):
        InMemoryTokenBucketRateLimiter([SEND, SEND])


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": "x", "rate": 0, "window_ms": 60_000, "capacity": 1},
        {"name": "x", "rate": 1, "window_ms": 0, "capacity": 1},
        {"name": "x", "rate": 10, "window_ms": 60_000, "capacity": 9},
        {"name": "", "rate": 1, "window_ms": 60_000, "capacity": 1},
    ],
)
def test_invalid_quota_definitions(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        QuotaDefinition(**kwargs)
