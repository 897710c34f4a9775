"""Message board service: the rate-limited, authenticated write pipeline.

A send runs strictly in this order, and any failing step ends the request
before anything is written:
1. Identity is resolved by the caller (None for anonymous traffic)
2. The rate-limit partition key is derived from it
3. The ``sendMessage`` quota gate admits or rejects
4. The content is trimmed and length-checked
5. The message is inserted, attributed to the principal or the anonymous label
"""

from __future__ import annotations

import logging

from board_api.adapters.rate_limit.base import AbstractRateLimiter
from board_api.core.auth import require_admin, require_principal
from board_api.core.config import settings
from board_api.core.content_validation import validate_message_content
from board_api.core.errors import AuthorizationAppError, NotFoundAppError
from board_api.core.identity import Principal
from board_api.core.logging import hash_identifier
from board_api.core.rate_limit import derive_rate_limit_key, enforce_rate_limit
from board_api.schemas.messages import Message
from board_api.storage.repositories import MessageRepository

logger = logging.getLogger(__name__)

SEND_MESSAGE_OPERATION = "sendMessage"


class MessageService:
    """Send, list and delete board messages.

    Attributes:
        messages: Repository for the ``messages`` table.
        limiter: Optional quota component override (process-wide one if None).
    """

    def __init__(self, messages: MessageRepository, limiter: AbstractRateLimiter | None = None) -> None:
        self.messages = messages
        self.limiter = limiter

    def send(self, principal: Principal | None, content: str) -> Message:
        """Admit, validate and store a new message.

        Args:
            principal: Resolved caller, or None for anonymous traffic.
            content: Raw message body.

        Returns:
            The stored message.

        Raises:
            RateLimitAppError: If the caller's ``sendMessage`` bucket is empty.
            ValidationAppError: If the trimmed content is empty or too long.
        """
        key = derive_rate_limit_key(principal)
        enforce_rate_limit(SEND_MESSAGE_OPERATION, key, limiter=self.limiter)

        trimmed = validate_message_content(content)

        message = self.messages.insert(
            content=trimmed,
            author_id=principal.id if principal else None,
            author_name=principal.name if principal else settings.app.anonymous_author_name,
        )
        logger.info(
            "messages.sent",
            extra={
                "message_id": message.id,
                "anonymous": principal is None,
                "key_hash": hash_identifier(key),
                "char_count": len(trimmed),
            },
        )
        return message

    def list_recent(self, limit: int | None = None) -> list[Message]:
        """Newest messages first."""
        return self.messages.recent(limit or settings.app.recent_messages_limit)

    def _get_or_404(self, message_id: str) -> Message:
        message = self.messages.find_by_id(message_id)
        if message is None:
            raise NotFoundAppError(
                code="message_not_found",
                message="Message not found",
                details={"resource_id": message_id},
            )
        return message

    def remove(self, principal: Principal | None, message_id: str) -> None:
        """Delete a message authored by the caller.

        Raises:
            AuthenticationAppError: If there is no session.
            NotFoundAppError: If the message does not exist.
            AuthorizationAppError: If the caller is not the author.
        """
        principal = require_principal(principal)
        message = self._get_or_404(message_id)

        if message.author_id != principal.id:
            logger.warning(
                "messages.delete_denied",
                extra={"message_id": message_id, "principal_hash": hash_identifier(principal.id)},
            )
            raise AuthorizationAppError(
                code="not_message_author",
                message="Not authorized to delete this message",
                details={"resource_id": message_id},
            )

        self.messages.delete(message_id)
        logger.info("messages.deleted", extra={"message_id": message_id, "by_admin": False})

    def delete_any(self, principal: Principal | None, message_id: str) -> None:
        """Delete any message; admin only.

        Raises:
            AuthenticationAppError: If there is no session.
            AuthorizationAppError: If the caller is not an admin.
            NotFoundAppError: If the message does not exist.
        """
        require_admin(principal)
        self._get_or_404(message_id)
        self.messages.delete(message_id)
        logger.info("messages.deleted", extra={"message_id": message_id, "by_admin": True})
