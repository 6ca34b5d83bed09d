"""
Document store access: abstract interface, MongoDB implementation and
the record <-> document codec.
"""

from app.services.store.base import (
    CONTAINER_VECTORS,
    CONTAINERS,
    QUESTION_INSTANCES,
    VIDEO_INSTANCES,
    DocumentStore,
)
from app.services.store.codec import from_document, to_document

__all__ = [
    "DocumentStore",
    "CONTAINERS",
    "CONTAINER_VECTORS",
    "QUESTION_INSTANCES",
    "VIDEO_INSTANCES",
    "to_document",
    "from_document",
]
