"""Document store interface shared by every backend"""
import json
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Tuple

from branchpoint.db.enums import Table

# Key attributes per table, in key order
TABLE_KEYS: Dict[str, Tuple[str, ...]] = {
    Table.DECISIONS.value: ("decisionId", "userId"),
    Table.BRANCHES.value: ("branchId",),
    Table.CONVERSATIONS.value: ("conversationId",),
    Table.COMPARISONS.value: ("comparisonId",),
    Table.DECISION_GROUPS.value: ("groupId",),
    Table.EVENTS.value: ("eventId",),
}


def key_attributes(table: str) -> Tuple[str, ...]:
    """
    Key attribute names for a table.

    Raises:
        KeyError: If the table is unknown
    """
    try:
        return TABLE_KEYS[table]
    except KeyError:
        raise KeyError(f"Unknown table: {table}") from None


def extract_key(table: str, record: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Pull the key attributes out of a record.

    Raises:
        ValueError: If any key attribute is missing or empty
    """
    key = {}
    for name in key_attributes(table):
        value = record.get(name)
        if value is None or value == "":
            raise ValueError(f"Record for table '{table}' is missing key attribute '{name}'")
        key[name] = value
    return key


def serialize_key(table: str, key: Mapping[str, Any]) -> str:
    """Stable string form of a key, used as the physical key by backends."""
    return json.dumps([key[name] for name in key_attributes(table)], separators=(",", ":"))


class DocumentStore(ABC):
    """
    Key-based record storage.

    Records are plain JSON-compatible dictionaries. ``get`` and ``update``
    address one record by its full key; ``query`` does equality matching on
    top-level attributes and returns records in insertion order.
    """

    @abstractmethod
    async def get(self, table: str, key: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        """Fetch one record by key, or None."""

    @abstractmethod
    async def put(self, table: str, item: Mapping[str, Any]) -> Dict[str, Any]:
        """Insert or replace a record. Returns the stored record."""

    @abstractmethod
    async def query(self, table: str, **conditions: Any) -> List[Dict[str, Any]]:
        """All records whose attributes equal every condition, oldest first."""

    @abstractmethod
    async def update(
        self, table: str, key: Mapping[str, Any], changes: Mapping[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Shallow-merge ``changes`` into a record. Returns the result or None if missing."""

    async def close(self) -> None:
        """Release backend resources."""
        return None
