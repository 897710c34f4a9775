"""Application-level exception types.

This module defines domain errors used across services/adapters, enabling
consistent error handling, logging, and API responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients."""

    hint: str
    operation: str
    limit: int
    remaining: int
    retry_after: int
    max_value: int
    actual_value: int
    resource_id: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when input/config validation fails."""


class AuthenticationAppError(AppError):
    """Raised when an operation requires a session and none was resolved."""


class AuthorizationAppError(AppError):
    """Raised when the caller is known but not allowed to act."""


class NotFoundAppError(AppError):
    """Raised when a referenced record does not exist."""


class PayloadTooLargeAppError(AppError):
    """Raised when an upload exceeds the configured size limit."""


class ProviderAppError(AppError):
    """Raised when an upstream collaborator (auth service, store) fails."""


@dataclass
class RateLimitAppError(AppError):
    """Raised when the quota gate rejects an operation.

    Attributes:
        retry_after_seconds: Whole seconds until one token is available again.
        limit: Bucket capacity for the operation.
        remaining: Whole tokens left (0 when blocked).
    """

    retry_after_seconds: int = 0
    limit: int = 0
    remaining: int = 0
