"""HTTP session provider backed by a remote auth service."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from board_api.adapters.identity.base import AbstractSessionProvider, SessionUser
from board_api.core.errors import ProviderAppError

logger = logging.getLogger(__name__)


class HttpSessionProvider(AbstractSessionProvider):
    """Resolves session tokens through the auth service's session endpoint.

    The endpoint is called with ``Authorization: Bearer <token>`` and is
    expected to answer ``{"session": {...}, "user": {...}}`` for a live
    session, and ``null`` (or 401) otherwise.
    """

    def __init__(
        self,
        base_url: str,
        *,
        session_path: str = "/api/auth/get-session",
        timeout_seconds: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the async HTTP client.

        Args:
            base_url: Auth service base URL.
            session_path: Path of the session lookup endpoint.
            timeout_seconds: Timeout for each lookup in seconds.
            transport: Optional transport override (used by tests).
        """
        self.session_path = session_path
        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
            transport=transport,
        )

    async def get_session_user(self, token: str) -> SessionUser | None:
        try:
            response = await self.client.get(
                self.session_path,
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.HTTPError as exc:
            raise ProviderAppError(
                code="auth_provider_unavailable",
                message="Identity service could not be reached",
                details={"hint": type(exc).__name__},
            ) from exc

        if response.status_code in (401, 403, 404):
            return None
        if response.status_code >= 400:
            raise ProviderAppError(
                code="auth_provider_error",
                message="Identity service returned an error",
                details={"actual_value": response.status_code},
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise ProviderAppError(
                code="auth_provider_bad_response",
                message="Identity service returned invalid JSON",
            ) from exc

        return self._parse_user(payload)

    @staticmethod
    def _parse_user(payload: Any) -> SessionUser | None:
        if not isinstance(payload, dict):
            return None
        user = payload.get("user")
        if not isinstance(user, dict) or not user.get("id"):
            return None
        return SessionUser(
            id=str(user["id"]),
            name=str(user.get("name") or ""),
            email=str(user.get("email") or ""),
            role=user.get("role"),
        )

    async def aclose(self) -> None:
        await self.client.aclose()
