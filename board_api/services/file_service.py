"""Per-user file area: upload, list, download and delete.

Writes go through the same pipeline as messages: the caller must be
authenticated, the quota gate runs before the upload is read, and the record
is only inserted once the contents are stored.
"""

from __future__ import annotations

import logging

from fastapi import UploadFile

from board_api.adapters.rate_limit.base import AbstractRateLimiter
from board_api.adapters.store.base import AbstractBlobStorage
from board_api.core.auth import require_principal
from board_api.core.errors import AuthorizationAppError, NotFoundAppError
from board_api.core.file_validation import read_upload_file_limited, validate_file_name
from board_api.core.identity import Principal
from board_api.core.logging import hash_identifier
from board_api.core.rate_limit import derive_rate_limit_key, enforce_rate_limit
from board_api.schemas.files import FileRecord
from board_api.storage.repositories import FileRepository

logger = logging.getLogger(__name__)

UPLOAD_FILE_OPERATION = "uploadFile"
DELETE_FILE_OPERATION = "deleteFile"

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class FileService:
    """Owner-scoped file storage.

    Attributes:
        files: Repository for the ``files`` table.
        blobs: Storage for file contents.
        limiter: Optional quota component override (process-wide one if None).
    """

    def __init__(
        self,
        files: FileRepository,
        blobs: AbstractBlobStorage,
        limiter: AbstractRateLimiter | None = None,
    ) -> None:
        self.files = files
        self.blobs = blobs
        self.limiter = limiter

    async def upload(self, principal: Principal | None, upload: UploadFile) -> FileRecord:
        """Store an uploaded file for the caller.

        Raises:
            AuthenticationAppError: If there is no session.
            RateLimitAppError: If the caller's ``uploadFile`` bucket is empty.
            PayloadTooLargeAppError: If the file exceeds the size limit.
            ValidationAppError: If the file is empty or has no usable name.
        """
        principal = require_principal(principal)
        enforce_rate_limit(UPLOAD_FILE_OPERATION, derive_rate_limit_key(principal), limiter=self.limiter)

        name = validate_file_name(upload.filename)
        data = await read_upload_file_limited(upload)

        storage_id = self.blobs.put(data)
        record = self.files.insert(
            storage_id=storage_id,
            name=name,
            content_type=upload.content_type or DEFAULT_CONTENT_TYPE,
            size=len(data),
            uploaded_by=principal.id,
        )
        logger.info(
            "files.uploaded",
            extra={
                "file_id": record.id,
                "size": record.size,
                "content_type": record.content_type,
                "principal_hash": hash_identifier(principal.id),
            },
        )
        return record

    def list_mine(self, principal: Principal | None) -> list[FileRecord]:
        principal = require_principal(principal)
        return self.files.find_by_uploader(principal.id)

    def _get_owned(self, principal: Principal, file_id: str) -> FileRecord:
        record = self.files.find_by_id(file_id)
        if record is None:
            raise NotFoundAppError(
                code="file_not_found",
                message="File not found",
                details={"resource_id": file_id},
            )
        if record.uploaded_by != principal.id:
            logger.warning(
                "files.access_denied",
                extra={"file_id": file_id, "principal_hash": hash_identifier(principal.id)},
            )
            raise AuthorizationAppError(
                code="not_file_owner",
                message="Not authorized to access this file",
                details={"resource_id": file_id},
            )
        return record

    def download(self, principal: Principal | None, file_id: str) -> tuple[FileRecord, bytes]:
        """Return the caller's file record and its contents.

        Raises:
            NotFoundAppError: If the record or its contents are missing.
            AuthorizationAppError: If the caller does not own the file.
        """
        principal = require_principal(principal)
        record = self._get_owned(principal, file_id)
        data = self.blobs.get(record.storage_id)
        if data is None:
            raise NotFoundAppError(
                code="file_contents_missing",
                message="File contents not found",
                details={"resource_id": file_id},
            )
        return record, data

    def delete(self, principal: Principal | None, file_id: str) -> None:
        """Delete one of the caller's files.

        Raises:
            RateLimitAppError: If the caller's ``deleteFile`` bucket is empty.
            NotFoundAppError: If the file does not exist.
            AuthorizationAppError: If the caller does not own the file.
        """
        principal = require_principal(principal)
        enforce_rate_limit(DELETE_FILE_OPERATION, derive_rate_limit_key(principal), limiter=self.limiter)

        record = self._get_owned(principal, file_id)
        self.files.delete(file_id)
        self.blobs.delete(record.storage_id)
        logger.info("files.deleted", extra={"file_id": file_id})
