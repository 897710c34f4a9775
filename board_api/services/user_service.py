"""Current-user lookups and admin role management."""

from __future__ import annotations

import logging
import re

from board_api.core.auth import require_admin
from board_api.core.errors import ValidationAppError
from board_api.core.identity import AdminPolicy, Principal
from board_api.core.logging import hash_identifier
from board_api.schemas.users import CurrentUser, SetAdminResponse

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(email: str) -> bool:
    """Loose syntactic check: ``local@domain.tld`` without whitespace."""
    return bool(_EMAIL_RE.match(email))


class UserService:
    """Reads the resolved principal and edits the admin policy."""

    def __init__(self, admin_policy: AdminPolicy) -> None:
        self.admin_policy = admin_policy

    def current(self, principal: Principal | None) -> CurrentUser | None:
        if principal is None:
            return None
        return CurrentUser(id=principal.id, name=principal.name, email=principal.email, role=principal.role)

    def is_admin(self, principal: Principal | None) -> bool:
        return principal is not None and principal.is_admin

    def set_admin(self, principal: Principal | None, email: str, is_admin: bool) -> SetAdminResponse:
        """Grant or revoke the admin role for ``email``.

        Only admins may call this. The change is applied to the shared admin
        policy and takes effect on the next request of the affected user.

        Raises:
            AuthenticationAppError: If there is no session.
            AuthorizationAppError: If the caller is not an admin.
            ValidationAppError: If ``email`` is not a valid address.
        """
        actor = require_admin(principal)

        normalized = email.strip().lower()
        if not is_valid_email(normalized):
            raise ValidationAppError(code="invalid_email", message="Invalid email address")

        if is_admin:
            changed = self.admin_policy.grant(normalized)
        else:
            changed = self.admin_policy.revoke(normalized)

        action = "grant" if is_admin else "revoke"
        logger.info(
            "users.admin_changed",
            extra={
                "action": action,
                "changed": changed,
                "actor_hash": hash_identifier(actor.id),
                "target_hash": hash_identifier(normalized),
            },
        )
        return SetAdminResponse(
            email=normalized,
            action=action,
            changed=changed,
            admin_emails=sorted(self.admin_policy.emails),
        )
