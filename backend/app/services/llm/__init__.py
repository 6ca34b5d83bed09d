"""
Generation Provider Layer

A unified interface for the embedding and chat calls the RAG core makes,
with an OpenAI implementation and an embedding model registry.
"""

from app.services.llm.base import GenerationProvider
from app.services.llm.openai_chat import OpenAIChatProvider
from app.services.llm.registry import EMBEDDING_MODEL_REGISTRY, get_embedding_dimensions
from app.services.llm.models import (
    ChatResult,
    EmbeddingResult,
    IndexedEmbedding,
    ProviderUsage,
    StructuredChatResult,
)

__all__ = [
    "GenerationProvider",
    "OpenAIChatProvider",
    "EMBEDDING_MODEL_REGISTRY",
    "get_embedding_dimensions",
    "ChatResult",
    "EmbeddingResult",
    "IndexedEmbedding",
    "ProviderUsage",
    "StructuredChatResult",
]
