"""Pydantic schemas for uploaded file records."""

from __future__ import annotations

from pydantic import BaseModel, Field


class FileRecord(BaseModel):
    """Metadata of an uploaded file; contents live in blob storage."""

    id: str = Field(..., description="Opaque file identifier.")
    storage_id: str = Field(..., description="Blob storage reference.")
    name: str = Field(..., description="Original file name (path stripped).")
    content_type: str = Field(..., description="MIME type reported by the client.")
    size: int = Field(..., ge=0, description="Size in bytes.")
    uploaded_by: str = Field(..., description="Principal id of the uploader.")
    created_at: int = Field(..., description="Upload time in epoch milliseconds.")


class FileListResponse(BaseModel):
    items: list[FileRecord] = Field(default_factory=list, description="Newest first.")
    count: int
    total_size: int = Field(..., description="Sum of the listed file sizes in bytes.")
