"""Unit tests for the in-memory document store"""
import pytest

from branchpoint.storage.base import extract_key, key_attributes, serialize_key
from branchpoint.storage.memory import InMemoryDocumentStore


class TestKeyHelpers:
    """Tests for table key helpers"""

    def test_composite_key(self):
        key = extract_key("decisions", {"decisionId": "d1", "userId": "u1", "title": "T"})

        assert key == {"decisionId": "d1", "userId": "u1"}
        assert serialize_key("decisions", key) == '["d1","u1"]'

    def test_missing_key_attribute(self):
        with pytest.raises(ValueError):
            extract_key("decisions", {"decisionId": "d1"})

    def test_unknown_table(self):
        with pytest.raises(KeyError):
            key_attributes("widgets")


class TestInMemoryDocumentStore:
    """Tests for InMemoryDocumentStore"""

    @pytest.mark.asyncio
    async def test_put_and_get(self, store):
        await store.put("branches", {"branchId": "b1", "decisionId": "d1", "name": "A"})

        record = await store.get("branches", {"branchId": "b1"})

        assert record == {"branchId": "b1", "decisionId": "d1", "name": "A"}

    @pytest.mark.asyncio
    async def test_get_missing(self, store):
        assert await store.get("branches", {"branchId": "nope"}) is None

    @pytest.mark.asyncio
    async def test_composite_key_isolates_owners(self, store):
        """Test the same decision id under another user is a different record"""
        await store.put("decisions", {"decisionId": "d1", "userId": "u1", "title": "Mine"})

        assert await store.get("decisions", {"decisionId": "d1", "userId": "u2"}) is None

    @pytest.mark.asyncio
    async def test_query_matches_every_condition(self, store):
        await store.put("branches", {"branchId": "b1", "decisionId": "d1", "lastSimulatedAt": None})
        await store.put("branches", {"branchId": "b2", "decisionId": "d1", "lastSimulatedAt": "2024"})
        await store.put("branches", {"branchId": "b3", "decisionId": "d2"})

        all_d1 = await store.query("branches", decisionId="d1")
        simulated = await store.query("branches", decisionId="d1", lastSimulatedAt="2024")

        assert [r["branchId"] for r in all_d1] == ["b1", "b2"]
        assert [r["branchId"] for r in simulated] == ["b2"]

    @pytest.mark.asyncio
    async def test_update_merges(self, store):
        await store.put("branches", {"branchId": "b1", "name": "A"})

        updated = await store.update("branches", {"branchId": "b1"}, {"lastSimulatedAt": "now"})

        assert updated == {"branchId": "b1", "name": "A", "lastSimulatedAt": "now"}
        assert await store.update("branches", {"branchId": "missing"}, {"x": 1}) is None

    @pytest.mark.asyncio
    async def test_records_are_copied(self, store):
        """Test mutating a returned record does not change the store"""
        item = {"branchId": "b1", "tags": ["a"]}
        await store.put("branches", item)
        item["tags"].append("b")

        record = await store.get("branches", {"branchId": "b1"})
        record["tags"].append("c")

        assert (await store.get("branches", {"branchId": "b1"}))["tags"] == ["a"]

    @pytest.mark.asyncio
    async def test_clear(self):
        store = InMemoryDocumentStore()
        await store.put("events", {"eventId": "e1"})

        store.clear()

        assert await store.query("events") == []
