"""
MongoDB Document Store

Backed by pymongo's asyncio client. One client is opened per process by
the composition root and shared by every request; the driver does its own
connection pooling.

Every operation is bounded by the client-wide `timeoutMS` so a stuck
server cannot hang a request forever. Driver errors are translated into
StoreError / StoreUnavailableError.
"""

from contextlib import contextmanager

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import AsyncMongoClient
from pymongo.errors import ConnectionFailure, PyMongoError

from app.core.errors import StoreError, StoreUnavailableError
from app.services.store.base import DocumentStore
from app.services.store.codec import from_document, to_document


@contextmanager
def _translate_errors(operation: str, collection: str):
    try:
        yield
    except ConnectionFailure as e:
        raise StoreUnavailableError(f"MongoDB {operation} on {collection} failed: {e}") from e
    except PyMongoError as e:
        if getattr(e, "timeout", False):
            raise StoreUnavailableError(
                f"MongoDB {operation} on {collection} timed out: {e}"
            ) from e
        raise StoreError(f"MongoDB {operation} on {collection} failed: {e}") from e


def _id_candidates(ids: list) -> list:
    """Match string IDs both as-is and as ObjectIds."""
    candidates = []
    for raw in ids:
        if raw is None:
            continue
        candidates.append(raw)
        if isinstance(raw, str):
            try:
                candidates.append(ObjectId(raw))
            except InvalidId:
                pass
    return candidates


class MongoDocumentStore(DocumentStore):
    """DocumentStore implementation on MongoDB / Atlas."""

    store_name = "mongodb"

    def __init__(self, uri: str, database: str, timeout_ms: int = 30_000):
        self.uri = uri
        self.database_name = database
        self.timeout_ms = timeout_ms
        self._client: AsyncMongoClient | None = None
        self._db = None

    async def open(self) -> None:
        print(f"[Mongo] Connecting to MongoDB: {self.database_name}")
        self._client = AsyncMongoClient(self.uri, timeoutMS=self.timeout_ms)
        self._db = self._client[self.database_name]
        print("[Mongo] Connected.")

    async def close(self) -> None:
        if self._client is not None:
            print("[Mongo] Disconnecting...")
            await self._client.close()
        self._client = None
        self._db = None

    def _collection(self, name: str):
        if self._db is None:
            raise StoreError("MongoDB store is not open")
        return self._db[name]

    async def find_all(self, collection: str) -> list[dict]:
        return await self.find(collection, {})

    async def find(self, collection: str, filter: dict) -> list[dict]:
        with _translate_errors("find", collection):
            cursor = self._collection(collection).find(filter)
            docs = await cursor.to_list(None)
        return [from_document(d) for d in docs]

    async def find_by_ids(self, collection: str, ids: list) -> list[dict]:
        candidates = _id_candidates(ids)
        if not candidates:
            return []
        return await self.find(collection, {"_id": {"$in": candidates}})

    async def insert_many(self, collection: str, docs: list) -> int:
        if not docs:
            return 0
        with _translate_errors("insert_many", collection):
            result = await self._collection(collection).insert_many(
                [to_document(d) for d in docs]
            )
        return len(result.inserted_ids)

    async def delete_many(self, collection: str, filter: dict) -> int:
        with _translate_errors("delete_many", collection):
            result = await self._collection(collection).delete_many(to_document(filter))
        return result.deleted_count

    async def aggregate(self, collection: str, pipeline: list[dict]) -> list[dict]:
        with _translate_errors("aggregate", collection):
            cursor = await self._collection(collection).aggregate(
                [to_document(stage) for stage in pipeline]
            )
            docs = await cursor.to_list(None)
        return [from_document(d) for d in docs]

    async def count_documents(self, collection: str) -> int:
        with _translate_errors("count_documents", collection):
            return await self._collection(collection).count_documents({})
