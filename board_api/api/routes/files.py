from __future__ import annotations

from typing import Annotated
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Response, UploadFile, status

from board_api.api.deps import RequiredPrincipal, get_file_service
from board_api.schemas.files import FileListResponse, FileRecord
from board_api.services.file_service import FileService

router = APIRouter(tags=["Files"])

FALLBACK_DOWNLOAD_NAME = "download"


def content_disposition(name: str) -> str:
    """Attachment header safe for any stored file name.

    Header values are Latin-1 on the wire, so the plain ``filename`` carries a
    printable-ASCII approximation and ``filename*`` (RFC 5987) the exact
    UTF-8 name.
    """
    ascii_name = "".join(c if " " <= c <= "~" and c not in '"\\' else "_" for c in name)
    if not ascii_name.strip("_ ."):
        ascii_name = FALLBACK_DOWNLOAD_NAME
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(name, safe='')}"


FileServiceDep = Annotated[FileService, Depends(get_file_service)]


@router.post("/files", response_model=FileRecord, status_code=status.HTTP_201_CREATED)
async def upload_file(
    principal: RequiredPrincipal,
    service: FileServiceDep,
    file: UploadFile = File(..., description="File to store in the caller's area"),
) -> FileRecord:
    """Upload a file.

    Raises:
        RateLimitAppError: 429 when the ``uploadFile`` bucket is empty.
        PayloadTooLargeAppError: 413 when the file exceeds the size limit.
    """
    return await service.upload(principal, file)


@router.get("/files", response_model=FileListResponse)
async def list_my_files(principal: RequiredPrincipal, service: FileServiceDep) -> FileListResponse:
    items = service.list_mine(principal)
    return FileListResponse(items=items, count=len(items), total_size=sum(f.size for f in items))


@router.get("/files/{file_id}/content")
async def download_file(file_id: str, principal: RequiredPrincipal, service: FileServiceDep) -> Response:
    record, data = service.download(principal, file_id)
    return Response(
        content=data,
        media_type=record.content_type,
        headers={"Content-Disposition": content_disposition(record.name)},
    )


@router.delete("/files/{file_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_file(file_id: str, principal: RequiredPrincipal, service: FileServiceDep) -> Response:
    service.delete(principal, file_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
