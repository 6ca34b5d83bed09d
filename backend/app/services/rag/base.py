"""
Abstract base class for retrieval strategies.

Both strategies take a question and return an answer with the playlists
that back it. Callers pick one explicitly; there is no default strategy.
"""

from abc import ABC, abstractmethod

from app.core.errors import ValidationError
from app.models.results import RAGAnswer


ASSISTANT_PERSONA = "You are a helpful learning assistant for an Indonesian educational platform."


class Retriever(ABC):
    """Abstract base class for retrieval strategies."""

    strategy_name: str = "base"

    @abstractmethod
    async def query(self, question: str, top_k: int = 5) -> RAGAnswer:
        """
        Answer a question and return the matching playlists.

        Args:
            question: The user's question
            top_k: Maximum number of sources to return

        Returns:
            RAGAnswer (or a subclass) with answer, sources and usage
        """
        ...

    @staticmethod
    def validate(question: str | None, top_k: int) -> str:
        if question is None or not question.strip():
            raise ValidationError("question is required")
        if top_k < 1:
            raise ValidationError("top_k must be at least 1")
        return question
