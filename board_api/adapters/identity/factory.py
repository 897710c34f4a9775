"""Factory for session provider instances."""

from board_api.adapters.identity.base import AbstractSessionProvider
from board_api.adapters.identity.http_provider import HttpSessionProvider
from board_api.adapters.identity.in_memory import InMemorySessionProvider
from board_api.core.config import settings
from board_api.core.errors import ValidationAppError


def create_session_provider() -> AbstractSessionProvider:
    """Instantiate the session provider selected by ``AUTH_PROVIDER``.

    Returns:
        AbstractSessionProvider: Configured provider.

    Raises:
        ValidationAppError: If the provider is unknown or misconfigured.
    """
    provider = settings.auth.provider.lower()

    if provider == "memory":
        return InMemorySessionProvider()

    if provider == "http":
        if not settings.auth.base_url:
            raise ValidationAppError(
                code="auth_missing_base_url",
                message="HTTP auth provider requires AUTH_BASE_URL environment variable",
            )
        return HttpSessionProvider(
            settings.auth.base_url,
            session_path=settings.auth.session_path,
            timeout_seconds=settings.auth.timeout_seconds,
        )

    raise ValidationAppError(
        code="auth_unknown_provider",
        message=f"Unknown auth provider: '{provider}'. Supported providers: memory, http",
    )
