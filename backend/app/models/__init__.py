from app.models.catalog import (
    Container,
    ContentInstance,
    InstancesSummary,
    InstanceType,
    QuestionInstance,
    VideoInstance,
)
from app.models.vectors import ContainerVector
from app.models.results import NaiveRAGAnswer, RAGAnswer, SearchResult, Source, Usage

__all__ = [
    "Container",
    "ContentInstance",
    "InstancesSummary",
    "InstanceType",
    "QuestionInstance",
    "VideoInstance",
    "ContainerVector",
    "SearchResult",
    "Source",
    "Usage",
    "RAGAnswer",
    "NaiveRAGAnswer",
]
