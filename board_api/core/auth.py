"""Authorization guards applied on top of identity resolution.

Identity resolution itself never fails (see ``board_api.core.identity``);
these guards are what turn a missing or insufficient principal into an
error for operations that need one.
"""

from __future__ import annotations

import logging

from board_api.core.errors import AuthenticationAppError, AuthorizationAppError
from board_api.core.identity import Principal
from board_api.core.logging import hash_identifier

logger = logging.getLogger(__name__)


def require_principal(principal: Principal | None) -> Principal:
    """Return ``principal`` or raise when the request has no session.

    Raises:
        AuthenticationAppError: If ``principal`` is None.
    """
    if principal is None:
        logger.info("auth.required", extra={"principal_present": False})
        raise AuthenticationAppError(code="authentication_required", message="Authentication required")
    return principal


def require_admin(principal: Principal | None) -> Principal:
    """Return ``principal`` if it holds the admin role.

    Raises:
        AuthenticationAppError: If there is no session.
        AuthorizationAppError: If the caller is not an admin.
    """
    principal = require_principal(principal)
    if not principal.is_admin:
        logger.warning(
            "auth.admin_denied",
            extra={"principal_hash": hash_identifier(principal.id), "role": principal.role},
        )
        raise AuthorizationAppError(code="admin_required", message="Admin access required")
    return principal
