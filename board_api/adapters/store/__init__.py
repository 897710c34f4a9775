"""Storage adapters: document store and blob storage."""

from board_api.adapters.store.base import AbstractBlobStorage, AbstractDocumentStore, TableName
from board_api.adapters.store.in_memory import InMemoryBlobStorage, InMemoryDocumentStore

__all__ = [
    "AbstractBlobStorage",
    "AbstractDocumentStore",
    "InMemoryBlobStorage",
    "InMemoryDocumentStore",
    "TableName",
]
