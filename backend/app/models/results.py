"""
Query-time result shapes shared by both retrieval strategies.
"""

from pydantic import BaseModel, Field

from app.models.catalog import DocumentId


class SearchResult(BaseModel):
    container_id: DocumentId | None = None
    short_id: str | None = None
    name: str | None = None
    text: str | None = None
    score: float = 0.0

    def to_source(self) -> "Source":
        return Source(
            name=self.name,
            short_id=self.short_id,
            container_id=self.container_id,
            score=self.score,
        )


class Source(BaseModel):
    name: str | None = None
    short_id: str | None = None
    container_id: str | None = None
    score: float


class Usage(BaseModel):
    embedding_tokens: int = 0
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class RAGAnswer(BaseModel):
    answer: str
    sources: list[Source] = Field(default_factory=list)
    usage: Usage = Field(default_factory=Usage)


class NaiveRAGAnswer(RAGAnswer):
    keywords: list[str] = Field(default_factory=list)
