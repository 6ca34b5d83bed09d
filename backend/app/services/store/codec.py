"""
Document codec

Converts between structured records (pydantic models, dicts, lists, enums)
and the plain documents the store driver reads and writes.

Write rules (to_document):
- pydantic models are dumped by alias, then converted like mappings
- mapping keys become strings; None values are omitted
- lists and tuples are converted element-wise (None elements are kept)
- enums become their value
- everything else (str, numbers, datetime, ObjectId) passes through

Read rules (from_document):
- mappings and lists are converted recursively
- ObjectId becomes its hex string
"""

from collections.abc import Mapping
from enum import Enum

from bson import ObjectId
from pydantic import BaseModel


def to_document(value):
    if isinstance(value, BaseModel):
        return to_document(value.model_dump(by_alias=True))
    if isinstance(value, Mapping):
        return {
            str(k.value if isinstance(k, Enum) else k): to_document(v)
            for k, v in value.items()
            if v is not None
        }
    if isinstance(value, (list, tuple)):
        return [to_document(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    return value


def from_document(value):
    if isinstance(value, Mapping):
        return {str(k): from_document(v) for k, v in value.items()}
    if isinstance(value, list):
        return [from_document(v) for v in value]
    if isinstance(value, ObjectId):
        return str(value)
    return value
