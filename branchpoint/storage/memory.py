"""Process-local document store"""
import copy
import logging
from typing import Any, Dict, List, Mapping, Optional

from branchpoint.storage.base import (
    DocumentStore,
    TABLE_KEYS,
    extract_key,
    key_attributes,
    serialize_key,
)

logger = logging.getLogger(__name__)


class InMemoryDocumentStore(DocumentStore):
    """
    Dictionary-backed store.

    Contents live for the lifetime of the process. Every read and write
    copies records so callers never share state with the store.
    """

    def __init__(self):
        self._tables: Dict[str, Dict[str, Dict[str, Any]]] = {
            table: {} for table in TABLE_KEYS
        }

    def _table(self, table: str) -> Dict[str, Dict[str, Any]]:
        key_attributes(table)
        return self._tables[table]

    async def get(self, table: str, key: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        record = self._table(table).get(serialize_key(table, extract_key(table, key)))
        return copy.deepcopy(record) if record is not None else None

    async def put(self, table: str, item: Mapping[str, Any]) -> Dict[str, Any]:
        physical_key = serialize_key(table, extract_key(table, item))
        record = copy.deepcopy(dict(item))
        rows = self._table(table)
        # Replacing keeps the original insertion position
        rows[physical_key] = record
        logger.debug(f"Stored {table} record {physical_key}")
        return copy.deepcopy(record)

    async def query(self, table: str, **conditions: Any) -> List[Dict[str, Any]]:
        return [
            copy.deepcopy(record)
            for record in self._table(table).values()
            if all(record.get(name) == value for name, value in conditions.items())
        ]

    async def update(
        self, table: str, key: Mapping[str, Any], changes: Mapping[str, Any]
    ) -> Optional[Dict[str, Any]]:
        physical_key = serialize_key(table, extract_key(table, key))
        rows = self._table(table)
        record = rows.get(physical_key)
        if record is None:
            return None
        record.update(copy.deepcopy(dict(changes)))
        return copy.deepcopy(record)

    def clear(self) -> None:
        """Drop every record."""
        for rows in self._tables.values():
            rows.clear()
