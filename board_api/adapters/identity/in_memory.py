"""In-memory session provider for development and tests.

Notes:
- Per-process only: sessions vanish on restart.
- Thread-safe: uses a lock around shared state.
"""

from __future__ import annotations

import secrets
import threading
import time
from dataclasses import dataclass
from typing import Callable

from board_api.adapters.identity.base import AbstractSessionProvider, SessionUser


@dataclass
class _Session:
    user: SessionUser
    expires_at: float | None


class InMemorySessionProvider(AbstractSessionProvider):
    """Token -> user map with optional per-session expiry."""

    def __init__(self, *, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._lock = threading.RLock()
        self._sessions: dict[str, _Session] = {}

    def create_session(
        self,
        user: SessionUser,
        *,
        token: str | None = None,
        ttl_seconds: float | None = None,
    ) -> str:
        """Register a session for ``user`` and return its token.

        Raises:
            ValueError: If ``ttl_seconds`` is not positive.
        """
        if ttl_seconds is not None and ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0")

        token = token or secrets.token_urlsafe(32)
        expires_at = self._clock() + ttl_seconds if ttl_seconds is not None else None
        with self._lock:
            self._sessions[token] = _Session(user=user, expires_at=expires_at)
        return token

    def revoke_session(self, token: str) -> None:
        with self._lock:
            self._sessions.pop(token, None)

    async def get_session_user(self, token: str) -> SessionUser | None:
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return None
            if session.expires_at is not None and self._clock() >= session.expires_at:
                del self._sessions[token]
                return None
            return session.user
