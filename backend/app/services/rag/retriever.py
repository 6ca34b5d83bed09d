"""
Vector RAG Retriever

Answers a question from the playlists closest to it in embedding space.

How retrieval works:
1. The question is embedded with the same model used at ingestion.
2. Atlas $vectorSearch compares it against container-vectors (cosine).
   The approximate index examines a candidate pool much larger than the
   requested top_k, otherwise recall drops.
3. The top_k rows become a numbered context block.
4. The chat model answers using only that context.
"""

from app.core.errors import ConfigurationError
from app.models.results import RAGAnswer, SearchResult, Usage
from app.services.llm.base import GenerationProvider
from app.services.rag.base import ASSISTANT_PERSONA, Retriever
from app.services.store.base import CONTAINER_VECTORS, DocumentStore


# Atlas rejects numCandidates above this
MAX_CANDIDATES = 10_000

NO_RESULTS_CONTEXT = "(No relevant playlists were found in the catalog.)"

SYSTEM_PROMPT = f"""{ASSISTANT_PERSONA}
Your job is to:
1. Answer the user's question clearly and accurately
2. Recommend relevant learning playlists based on the context provided

When recommending playlists:
- Only recommend playlists from the provided context
- Explain briefly why each playlist is relevant
- Include the playlist short ID (e.g., lp17073) for reference
- If the context doesn't contain relevant playlists, say so honestly

Respond in the same language the user uses (Bahasa Indonesia or English).
Keep your response concise and helpful."""


def candidate_pool_size(top_k: int, ratio: int = 20, minimum: int = 100) -> int:
    """numCandidates for a $vectorSearch returning top_k rows."""
    return min(MAX_CANDIDATES, max(minimum, top_k * ratio))


def build_context(results: list[SearchResult]) -> str:
    """Format search results as a numbered context block for the LLM."""
    if not results:
        return NO_RESULTS_CONTEXT
    entries = []
    for rank, result in enumerate(results, start=1):
        entries.append(
            f"{rank}. {result.name} (ID: {result.short_id}, relevance: {result.score:.3f})\n"
            f"   {result.text or ''}"
        )
    return "\n\n".join(entries)


def build_messages(context: str, question: str) -> list[dict]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {
            "role": "user",
            "content": (
                "Context - Available learning playlists:\n\n"
                f"{context}\n\n---\n\n"
                f"User question: {question}"
            ),
        },
    ]


class VectorRetriever(Retriever):
    """Embedding similarity retrieval over container-vectors."""

    strategy_name = "vector"

    def __init__(
        self,
        store: DocumentStore,
        provider: GenerationProvider,
        index_name: str = "container_vector_index",
        candidate_ratio: int = 20,
        min_candidates: int = 100,
        min_score: float = 0.0,
    ):
        if candidate_ratio < 20:
            raise ConfigurationError("vector_candidate_ratio must be at least 20")
        self.store = store
        self.provider = provider
        self.index_name = index_name
        self.candidate_ratio = candidate_ratio
        self.min_candidates = min_candidates
        self.min_score = min_score

    async def vector_search(self, query_embedding: list[float], top_k: int) -> list[SearchResult]:
        """
        Run $vectorSearch against container-vectors.

        Requires an Atlas vector search index (self.index_name) on the
        `embedding` path with cosine similarity and the embedding model's
        dimension.

        Returns at most top_k results ordered by descending score.
        """
        pipeline = [
            {
                "$vectorSearch": {
                    "index": self.index_name,
                    "path": "embedding",
                    "queryVector": list(query_embedding),
                    "numCandidates": candidate_pool_size(
                        top_k, self.candidate_ratio, self.min_candidates
                    ),
                    "limit": top_k,
                }
            },
            {
                "$project": {
                    "_id": 0,
                    "container_id": 1,
                    "short_id": 1,
                    "name": 1,
                    "text": 1,
                    "score": {"$meta": "vectorSearchScore"},
                }
            },
        ]
        rows = await self.store.aggregate(CONTAINER_VECTORS, pipeline)
        results = [SearchResult(**row) for row in rows]
        results = [r for r in results if r.score >= self.min_score]
        results.sort(key=lambda r: r.score, reverse=True)
        return results[:top_k]

    async def query(self, question: str, top_k: int = 5) -> RAGAnswer:
        """
        Execute a full RAG query:
        1. Embed the user's question
        2. Vector search for relevant playlists
        3. Build context from results
        4. Send to LLM with context
        """
        question = self.validate(question, top_k)
        print(f'[RAG] Query: "{question}"')

        embedded = await self.provider.embed(question)
        print(f"[RAG]   Generated query embedding ({len(embedded.embedding)} dims)")

        results = await self.vector_search(embedded.embedding, top_k)
        print(f"[RAG]   Found {len(results)} relevant playlists")

        messages = build_messages(build_context(results), question)
        chat = await self.provider.chat(messages)

        return RAGAnswer(
            answer=chat.content,
            sources=[r.to_source() for r in results],
            usage=Usage(
                embedding_tokens=embedded.usage.total_tokens,
                prompt_tokens=chat.usage.prompt_tokens,
                completion_tokens=chat.usage.completion_tokens,
                total_tokens=embedded.usage.total_tokens + chat.usage.total_tokens,
            ),
        )
