"""Identity resolution for incoming requests.

Turns the session token carried by a request into a ``Principal`` or None.
Resolution never raises: missing tokens, unknown tokens and identity service
failures all resolve to None so optional-auth endpoints stay usable by
anonymous traffic.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Iterable, Literal

from board_api.adapters.identity.base import AbstractSessionProvider, SessionUser
from board_api.core.errors import AppError
from board_api.core.logging import hash_identifier

logger = logging.getLogger(__name__)

Role = Literal["member", "admin"]

ROLE_MEMBER: Role = "member"
ROLE_ADMIN: Role = "admin"


@dataclass(frozen=True)
class Principal:
    """Resolved identity of the caller for the duration of one request."""

    id: str
    name: str
    email: str
    role: Role = ROLE_MEMBER

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


@dataclass(frozen=True)
class RequestContext:
    """The parts of a request identity resolution looks at."""

    session_token: str | None = None


def parse_emails(emails_string: str | None) -> set[str]:
    """Parse a comma-separated email list into a normalized set.

    Examples:
        >>> sorted(parse_emails("A@x.io, b@y.io ,"))
        ['a@x.io', 'b@y.io']
        >>> parse_emails(None)
        set()
    """
    if not emails_string:
        return set()
    return {email.strip().lower() for email in emails_string.split(",") if email.strip()}


class AdminPolicy:
    """Reloadable set of admin emails plus an optional extra predicate.

    Emails are compared case-insensitively. The policy is shared by every
    request, so mutations are guarded by a lock.
    """

    def __init__(
        self,
        emails: Iterable[str] = (),
        *,
        predicate: Callable[[SessionUser], bool] | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._emails = {email.strip().lower() for email in emails if email.strip()}
        self._predicate = predicate

    @classmethod
    def from_string(cls, emails_string: str | None) -> "AdminPolicy":
        return cls(parse_emails(emails_string))

    def is_admin(self, user: SessionUser) -> bool:
        """Email list first, then the role stored by the identity service."""
        with self._lock:
            if user.email and user.email.lower() in self._emails:
                return True
        if user.role == ROLE_ADMIN:
            return True
        return bool(self._predicate and self._predicate(user))

    def grant(self, email: str) -> bool:
        """Add ``email``; returns False when it was already an admin email."""
        normalized = email.strip().lower()
        with self._lock:
            if normalized in self._emails:
                return False
            self._emails.add(normalized)
            return True

    def revoke(self, email: str) -> bool:
        """Remove ``email``; returns False when it was not an admin email."""
        normalized = email.strip().lower()
        with self._lock:
            if normalized not in self._emails:
                return False
            self._emails.discard(normalized)
            return True

    def reload(self, emails: Iterable[str]) -> None:
        with self._lock:
            self._emails = {email.strip().lower() for email in emails if email.strip()}

    @property
    def emails(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._emails)


def extract_session_token(
    authorization: str | None,
    cookies: dict[str, str] | None = None,
    *,
    cookie_name: str = "session_token",
) -> str | None:
    """Pick the session token from a Bearer header, else from the cookie."""

    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
    if cookies:
        token = cookies.get(cookie_name)
        if token:
            return token
    return None


class IdentityResolver:
    """Resolves a ``RequestContext`` to a ``Principal`` or None."""

    def __init__(self, provider: AbstractSessionProvider, admin_policy: AdminPolicy) -> None:
        self.provider = provider
        self.admin_policy = admin_policy

    def to_principal(self, user: SessionUser) -> Principal:
        role = ROLE_ADMIN if self.admin_policy.is_admin(user) else ROLE_MEMBER
        return Principal(id=user.id, name=user.name, email=user.email, role=role)

    async def resolve(self, context: RequestContext) -> Principal | None:
        """Resolve the caller; never raises.

        Args:
            context: Request context carrying the optional session token.

        Returns:
            Principal for a live session, otherwise None.
        """
        if not context.session_token:
            return None

        try:
            user = await self.provider.get_session_user(context.session_token)
        except AppError as exc:
            logger.warning(
                "identity.resolve_failed",
                extra={"error_code": exc.code, "fallback": "anonymous"},
            )
            return None
        except Exception as exc:
            logger.warning(
                "identity.resolve_failed",
                extra={"error_type": type(exc).__name__, "fallback": "anonymous"},
            )
            return None

        if user is None:
            logger.debug("identity.unknown_session")
            return None

        principal = self.to_principal(user)
        logger.debug(
            "identity.resolved",
            extra={"principal_hash": hash_identifier(principal.id), "role": principal.role},
        )
        return principal
