"""
Abstract base class for generation providers.

A provider translates the four calls the RAG core needs (single embed,
batch embed, free-text chat, JSON chat) into one vendor's API.
"""

from abc import ABC, abstractmethod

from app.services.llm.models import (
    ChatResult,
    EmbeddingResult,
    IndexedEmbedding,
    StructuredChatResult,
)


class GenerationProvider(ABC):
    """Abstract base class for all generation providers."""

    provider_name: str = "base"

    async def close(self) -> None:
        """Release HTTP resources. Default: nothing to do."""

    @abstractmethod
    async def embed(self, text: str) -> EmbeddingResult:
        """
        Embed a single text.

        Args:
            text: The text to embed

        Returns:
            EmbeddingResult with the vector and token usage
        """
        ...

    @abstractmethod
    async def embed_batch(self, texts: list[str]) -> list[IndexedEmbedding]:
        """
        Embed many texts in one request.

        The returned items carry the index of the input they belong to.
        Their order is NOT guaranteed to match the input order, and an
        item may be missing or carry no embedding.
        """
        ...

    @abstractmethod
    async def chat(self, messages: list[dict]) -> ChatResult:
        """
        Free-text chat completion.

        Args:
            messages: List of message dicts with "role" and "content"
        """
        ...

    @abstractmethod
    async def chat_structured(self, messages: list[dict]) -> StructuredChatResult:
        """Chat completion constrained to a JSON object, returned parsed."""
        ...
