"""In-memory document store and blob storage.

Notes:
- Per-process only: contents vanish on restart.
- Thread-safe: uses a lock around shared state.
"""

from __future__ import annotations

import copy
import threading
import time
import uuid
from typing import Callable

from board_api.adapters.store.base import AbstractBlobStorage, AbstractDocumentStore, Document, TableName


def _now_ms() -> int:
    return int(time.time() * 1000)


class InMemoryDocumentStore(AbstractDocumentStore):
    """Dict-backed document store; returned documents are copies."""

    def __init__(self, *, clock_ms: Callable[[], int] = _now_ms) -> None:
        self._clock_ms = clock_ms
        self._lock = threading.RLock()
        self._tables: dict[str, dict[str, Document]] = {}

    def insert(self, table: TableName, data: Document) -> Document:
        document = {
            **copy.deepcopy(data),
            "id": uuid.uuid4().hex,
            "created_at": self._clock_ms(),
        }
        with self._lock:
            self._tables.setdefault(table, {})[document["id"]] = document
        return copy.deepcopy(document)

    def get(self, table: TableName, document_id: str) -> Document | None:
        with self._lock:
            document = self._tables.get(table, {}).get(document_id)
            return copy.deepcopy(document) if document is not None else None

    def delete(self, table: TableName, document_id: str) -> bool:
        with self._lock:
            return self._tables.get(table, {}).pop(document_id, None) is not None

    def list_documents(self, table: TableName) -> list[Document]:
        with self._lock:
            return [copy.deepcopy(doc) for doc in self._tables.get(table, {}).values()]


class InMemoryBlobStorage(AbstractBlobStorage):
    """Dict-backed blob storage."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._blobs: dict[str, bytes] = {}

    def put(self, data: bytes) -> str:
        storage_id = uuid.uuid4().hex
        with self._lock:
            self._blobs[storage_id] = bytes(data)
        return storage_id

    def get(self, storage_id: str) -> bytes | None:
        with self._lock:
            return self._blobs.get(storage_id)

    def delete(self, storage_id: str) -> bool:
        with self._lock:
            return self._blobs.pop(storage_id, None) is not None
