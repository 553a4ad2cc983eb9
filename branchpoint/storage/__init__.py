"""Document store backends"""
from branchpoint.storage.base import TABLE_KEYS, DocumentStore
from branchpoint.storage.memory import InMemoryDocumentStore
from branchpoint.storage.sql import SqlDocumentStore

__all__ = [
    "TABLE_KEYS",
    "DocumentStore",
    "InMemoryDocumentStore",
    "SqlDocumentStore",
]
