"""Tests for the MongoDB store adapter with the driver mocked out."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import OperationFailure, ServerSelectionTimeoutError

from app.core.errors import StoreError, StoreUnavailableError
from app.services.store.mongodb import MongoDocumentStore, _id_candidates


def _open_store(collection) -> MongoDocumentStore:
    store = MongoDocumentStore("mongodb://localhost:27017", "rag_poc")
    store._db = {"containers": collection, "container-vectors": collection}
    return store


class TestIdCandidates:
    def test_hex_strings_also_match_as_object_ids(self):
        oid = ObjectId()
        assert _id_candidates([str(oid)]) == [str(oid), oid]

    def test_plain_strings_and_none(self):
        assert _id_candidates(["q1", None, 7]) == ["q1", 7]


class TestMongoDocumentStore:
    @pytest.mark.asyncio
    async def test_find_decodes_object_ids(self):
        oid = ObjectId()
        cursor = MagicMock()
        cursor.to_list = AsyncMock(return_value=[{"_id": oid, "name": "Pecahan"}])
        collection = MagicMock()
        collection.find.return_value = cursor

        docs = await _open_store(collection).find("containers", {"name": "Pecahan"})

        assert docs == [{"_id": str(oid), "name": "Pecahan"}]
        collection.find.assert_called_once_with({"name": "Pecahan"})

    @pytest.mark.asyncio
    async def test_insert_many_encodes_documents(self):
        collection = MagicMock()
        collection.insert_many = AsyncMock(return_value=MagicMock(inserted_ids=[1]))

        inserted = await _open_store(collection).insert_many(
            "container-vectors", [{"container_id": "c1", "short_id": None}]
        )

        assert inserted == 1
        collection.insert_many.assert_awaited_once_with([{"container_id": "c1"}])

    @pytest.mark.asyncio
    async def test_insert_many_empty_is_noop(self):
        collection = MagicMock()
        collection.insert_many = AsyncMock()
        assert await _open_store(collection).insert_many("container-vectors", []) == 0
        collection.insert_many.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unreachable_server_is_retryable(self):
        collection = MagicMock()
        collection.count_documents = AsyncMock(
            side_effect=ServerSelectionTimeoutError("no servers")
        )
        with pytest.raises(StoreUnavailableError) as exc_info:
            await _open_store(collection).count_documents("containers")
        assert exc_info.value.retryable

    @pytest.mark.asyncio
    async def test_driver_failure_is_store_error(self):
        collection = MagicMock()
        collection.aggregate = AsyncMock(side_effect=OperationFailure("index not found"))
        with pytest.raises(StoreError) as exc_info:
            await _open_store(collection).aggregate("container-vectors", [])
        assert not exc_info.value.retryable

    @pytest.mark.asyncio
    async def test_closed_store_raises(self):
        store = MongoDocumentStore("mongodb://localhost:27017", "rag_poc")
        with pytest.raises(StoreError, match="not open"):
            await store.count_documents("containers")
