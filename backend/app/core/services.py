"""
Composition root.

Builds the long-lived service handles once per process and hands them to
whoever owns the process lifetime (the FastAPI lifespan or the ingestion
CLI). Handlers receive them through `get_services`; nothing is stored in
module globals.
"""

from dataclasses import dataclass

from fastapi import Request

from app.core.config import Settings
from app.services.llm.base import GenerationProvider
from app.services.llm.openai_chat import OpenAIChatProvider
from app.services.llm.registry import get_embedding_dimensions
from app.services.rag.ingest import EmbeddingPipeline
from app.services.rag.naive import NaiveRetriever
from app.services.rag.retriever import VectorRetriever
from app.services.store.base import DocumentStore
from app.services.store.mongodb import MongoDocumentStore


@dataclass
class Services:
    settings: Settings
    store: DocumentStore
    provider: GenerationProvider
    vector_retriever: VectorRetriever
    naive_retriever: NaiveRetriever
    pipeline: EmbeddingPipeline

    @classmethod
    def build(
        cls,
        settings: Settings,
        store: DocumentStore | None = None,
        provider: GenerationProvider | None = None,
    ) -> "Services":
        """Wire services from settings; `store`/`provider` override the defaults."""
        if store is None:
            store = MongoDocumentStore(
                settings.mongodb_uri,
                settings.mongodb_database,
                timeout_ms=settings.mongodb_timeout_ms,
            )
        if provider is None:
            provider = OpenAIChatProvider(
                api_key=settings.openai_api_key,
                embedding_model=settings.openai_embedding_model,
                chat_model=settings.openai_chat_model,
                timeout=settings.openai_timeout_seconds,
            )
        dimensions = get_embedding_dimensions(
            settings.openai_embedding_model, settings.embedding_dimensions
        )
        return cls(
            settings=settings,
            store=store,
            provider=provider,
            vector_retriever=VectorRetriever(
                store,
                provider,
                index_name=settings.vector_index_name,
                candidate_ratio=settings.vector_candidate_ratio,
                min_candidates=settings.vector_min_candidates,
                min_score=settings.min_relevance_score,
            ),
            naive_retriever=NaiveRetriever(store, provider),
            pipeline=EmbeddingPipeline(store, provider, dimensions=dimensions),
        )

    async def open(self) -> None:
        await self.store.open()

    async def close(self) -> None:
        await self.provider.close()
        await self.store.close()


def get_services(request: Request) -> Services:
    """FastAPI dependency returning the running app's services."""
    return request.app.state.services
