"""Synchronous payload checks applied before a write is committed."""

from __future__ import annotations

from board_api.core.config import settings
from board_api.core.errors import ValidationAppError

MESSAGE_EMPTY = "Message cannot be empty"

# ECMAScript WhiteSpace and LineTerminator code points. Includes U+FEFF;
# excludes \x1c-\x1f and U+0085, which str.strip() would remove.
TRIM_CHARS = (
    "\t\n\v\f\r \u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def validate_message_content(raw_content: str, *, max_chars: int | None = None) -> str:
    """Trim a message body and check its length.

    Args:
        raw_content: Content as submitted by the caller.
        max_chars: Upper bound after trimming; defaults to ``APP_MAX_MESSAGE_CHARS``.

    Returns:
        The trimmed content.

    Raises:
        ValidationAppError: ``message_empty`` or ``message_too_long``.

    Examples:
        >>> validate_message_content("  ok  ")
        'ok'
    """
    limit = max_chars if max_chars is not None else settings.app.max_message_chars
    trimmed = raw_content.strip(TRIM_CHARS)

    if not trimmed:
        raise ValidationAppError(code="message_empty", message=MESSAGE_EMPTY)
    if len(trimmed) > limit:
        raise ValidationAppError(
            code="message_too_long",
            message=f"Message too long (max {limit} characters)",
            details={"max_value": limit, "actual_value": len(trimmed)},
        )
    return trimmed
