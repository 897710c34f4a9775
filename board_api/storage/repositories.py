"""Typed repositories over the document store.

``Repository`` is generic over a record model and bound to one table of the
closed ``TableName`` set, so callers get validated pydantic records instead of
raw documents.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from board_api.adapters.store.base import AbstractDocumentStore, TableName
from board_api.schemas.files import FileRecord
from board_api.schemas.messages import Message

RecordT = TypeVar("RecordT", bound=BaseModel)


class Repository(Generic[RecordT]):
    """Common CRUD operations for one table."""

    table: TableName
    model: type[RecordT]

    def __init__(self, store: AbstractDocumentStore) -> None:
        self.store = store

    def _to_record(self, document: dict[str, Any]) -> RecordT:
        return self.model.model_validate(document)

    def insert(self, **fields: Any) -> RecordT:
        return self._to_record(self.store.insert(self.table, fields))

    def find_by_id(self, record_id: str) -> RecordT | None:
        document = self.store.get(self.table, record_id)
        return self._to_record(document) if document is not None else None

    def delete(self, record_id: str) -> bool:
        return self.store.delete(self.table, record_id)

    def find_all(self) -> list[RecordT]:
        """All records, oldest first."""
        return [self._to_record(doc) for doc in self.store.list_documents(self.table)]

    def recent(self, limit: int = 50) -> list[RecordT]:
        """Newest first, at most ``limit`` records."""
        if limit < 1:
            raise ValueError("limit must be >= 1")
        return list(reversed(self.find_all()))[:limit]

    def count(self) -> int:
        return len(self.store.list_documents(self.table))


class MessageRepository(Repository[Message]):
    table: TableName = "messages"
    model = Message

    def find_by_author_id(self, author_id: str, limit: int = 50) -> list[Message]:
        """Messages by ``author_id``, newest first."""
        return [m for m in reversed(self.find_all()) if m.author_id == author_id][:limit]

    def find_in_range(self, start_ms: int, end_ms: int) -> list[Message]:
        """Messages created within ``[start_ms, end_ms]``, oldest first."""
        return [m for m in self.find_all() if start_ms <= m.created_at <= end_ms]


class FileRepository(Repository[FileRecord]):
    table: TableName = "files"
    model = FileRecord

    def find_by_uploader(self, uploader_id: str) -> list[FileRecord]:
        """Files uploaded by ``uploader_id``, newest first."""
        return [f for f in reversed(self.find_all()) if f.uploaded_by == uploader_id]

    def total_size_by_uploader(self, uploader_id: str) -> int:
        return sum(f.size for f in self.find_by_uploader(uploader_id))
