"""Document store and blob storage interfaces.

Documents are plain dicts. The store owns two system fields on every
document: ``id`` and ``created_at`` (epoch milliseconds).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Literal

TableName = Literal["messages", "files"]

Document = dict[str, Any]


class AbstractDocumentStore(ABC):
    """Interface for the document store."""

    @abstractmethod
    def insert(self, table: TableName, data: Document) -> Document:
        """Insert ``data`` and return the stored document (with system fields)."""
        raise NotImplementedError

    @abstractmethod
    def get(self, table: TableName, document_id: str) -> Document | None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, table: TableName, document_id: str) -> bool:
        """Delete a document; returns False if it did not exist."""
        raise NotImplementedError

    @abstractmethod
    def list_documents(self, table: TableName) -> list[Document]:
        """All documents of ``table`` in insertion (creation) order."""
        raise NotImplementedError


class AbstractBlobStorage(ABC):
    """Interface for file contents referenced by file records."""

    @abstractmethod
    def put(self, data: bytes) -> str:
        """Store ``data`` and return its storage id."""
        raise NotImplementedError

    @abstractmethod
    def get(self, storage_id: str) -> bytes | None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, storage_id: str) -> bool:
        raise NotImplementedError
