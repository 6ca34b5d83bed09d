"""
RAG (Retrieval-Augmented Generation) Pipeline

Recommends learning playlists by:
1. Ingesting containers as enriched text + embeddings into container-vectors
2. Retrieving playlists at query time, either by vector similarity or by
   LLM-extracted keywords matched against playlist names
3. Answering the question with the retrieved playlists as context
"""

from app.services.rag.base import Retriever
from app.services.rag.enrichment import TextEnricher, build_enriched_text
from app.services.rag.ingest import EmbeddingPipeline
from app.services.rag.naive import NaiveRetriever
from app.services.rag.retriever import VectorRetriever

__all__ = [
    "Retriever",
    "TextEnricher",
    "build_enriched_text",
    "EmbeddingPipeline",
    "NaiveRetriever",
    "VectorRetriever",
]
