"""
Pydantic result models for generation provider calls.

These are shared across all providers; the retrievers and the
embedding pipeline only ever see these shapes.
"""

from pydantic import BaseModel, Field


class ProviderUsage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class EmbeddingResult(BaseModel):
    embedding: list[float]
    usage: ProviderUsage = Field(default_factory=ProviderUsage)


class IndexedEmbedding(BaseModel):
    index: int
    embedding: list[float] | None = None  # None when the provider dropped it


class ChatResult(BaseModel):
    content: str
    usage: ProviderUsage = Field(default_factory=ProviderUsage)


class StructuredChatResult(BaseModel):
    content: dict
    raw_content: str
    usage: ProviderUsage = Field(default_factory=ProviderUsage)
