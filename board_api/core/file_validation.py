"""File validation utilities for uploads."""
from __future__ import annotations

import logging

from fastapi import UploadFile

from board_api.core.config import settings
from board_api.core.errors import PayloadTooLargeAppError, ValidationAppError

logger = logging.getLogger(__name__)

MAX_FILE_NAME_CHARS = 255


def _too_large(max_bytes: int, actual: int) -> PayloadTooLargeAppError:
    return PayloadTooLargeAppError(
        code="file_too_large",
        message=f"File too large. Maximum size: {settings.app.max_upload_size_mb}MB",
        details={"max_value": max_bytes, "actual_value": actual},
    )


async def read_upload_file_limited(file: UploadFile) -> bytes:
    """Read an uploaded file in chunks enforcing the max size limit.

    Uses file.size if available (multipart headers), falls back to chunked
    reading with enforcement.

    Args:
        file: FastAPI upload file instance.

    Returns:
        File content as bytes if within the allowed size limit.

    Raises:
        PayloadTooLargeAppError: If the file exceeds the configured size limit.
        ValidationAppError: If the file is empty.
    """
    max_bytes = settings.app.max_upload_size_mb * 1024 * 1024

    file_size = getattr(file, "size", None)
    if file_size is not None and file_size > max_bytes:
        logger.warning(
            "file_validation.rejected_by_header",
            extra={"file_size": file_size, "max_bytes": max_bytes},
        )
        raise _too_large(max_bytes, file_size)

    size = 0
    chunks: list[bytes] = []
    while True:
        chunk = await file.read(8192)
        if not chunk:
            break

        size += len(chunk)
        if size > max_bytes:
            logger.warning(
                "file_validation.rejected_by_chunked_read",
                extra={"size": size, "max_bytes": max_bytes},
            )
            raise _too_large(max_bytes, size)
        chunks.append(chunk)

    if size == 0:
        raise ValidationAppError(code="file_empty", message="File cannot be empty")

    return b"".join(chunks)


def validate_file_name(name: str | None) -> str:
    """Normalize an upload's file name.

    Raises:
        ValidationAppError: If the name is missing or too long.
    """
    cleaned = (name or "").strip().replace("\\", "/").rsplit("/", 1)[-1]
    if not cleaned:
        raise ValidationAppError(code="file_name_missing", message="File name is required")
    if len(cleaned) > MAX_FILE_NAME_CHARS:
        raise ValidationAppError(
            code="file_name_too_long",
            message=f"File name too long (max {MAX_FILE_NAME_CHARS} characters)",
            details={"max_value": MAX_FILE_NAME_CHARS, "actual_value": len(cleaned)},
        )
    return cleaned
