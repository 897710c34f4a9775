"""Session provider interface.

Sessions are owned by an external identity service. The API only asks it who
a session token belongs to.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class SessionUser:
    """User record as reported by the identity service.

    Attributes:
        id: Opaque user identifier.
        name: Display name.
        email: Primary email address.
        role: Role stored by the identity service, if any.
    """

    id: str
    name: str
    email: str
    role: str | None = None


class AbstractSessionProvider(ABC):
    """Interface for identity service clients."""

    @abstractmethod
    async def get_session_user(self, token: str) -> SessionUser | None:
        """Look up the user owning ``token``.

        Args:
            token: Opaque session token presented by the caller.

        Returns:
            The session's user, or None if the token is unknown or expired.

        Raises:
            ProviderAppError: If the identity service cannot be reached or
                answers with something unusable.
        """
        raise NotImplementedError

    async def aclose(self) -> None:
        """Release network resources, if any."""
        return None
