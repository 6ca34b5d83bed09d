"""
Abstract base class for the document store.

The RAG core only talks to this interface; the MongoDB implementation
lives in mongodb.py and tests use an in-memory fake.
"""

from abc import ABC, abstractmethod

# Collection names
CONTAINERS = "containers"
CONTAINER_VECTORS = "container-vectors"
QUESTION_INSTANCES = "question-instances"
VIDEO_INSTANCES = "video-instances"


class DocumentStore(ABC):
    """Abstract base class for document stores."""

    store_name: str = "base"

    async def open(self) -> None:
        """Acquire connections. Default: nothing to do."""

    async def close(self) -> None:
        """Release connections. Default: nothing to do."""

    @abstractmethod
    async def find_all(self, collection: str) -> list[dict]:
        ...

    @abstractmethod
    async def find(self, collection: str, filter: dict) -> list[dict]:
        """
        Find documents matching a filter.

        Filters use MongoDB query syntax; the core relies on equality,
        `$in` and `{"$regex": ..., "$options": "i"}` on string fields.
        """
        ...

    @abstractmethod
    async def find_by_ids(self, collection: str, ids: list) -> list[dict]:
        ...

    @abstractmethod
    async def insert_many(self, collection: str, docs: list) -> int:
        """Insert documents (dicts or pydantic models). Returns the number inserted."""
        ...

    @abstractmethod
    async def delete_many(self, collection: str, filter: dict) -> int:
        """Delete matching documents. Returns the number deleted."""
        ...

    @abstractmethod
    async def aggregate(self, collection: str, pipeline: list[dict]) -> list[dict]:
        """
        Run an aggregation pipeline.

        Must support a `$vectorSearch` stage over an indexed float-vector
        field (index, path, queryVector, numCandidates, limit) followed by
        a `$project` stage that can read `{"$meta": "vectorSearchScore"}`.
        """
        ...

    @abstractmethod
    async def count_documents(self, collection: str) -> int:
        ...
