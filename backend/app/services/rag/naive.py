"""
Naive RAG Retriever

Keyword search instead of vector search:
1. One JSON chat call returns both the answer and 2-6 search keywords
2. The keywords become a case-insensitive regex over container names
3. Matches are ranked by how many keywords their name contains

No embeddings are involved, so this works before the pipeline has run.
"""

import re

from app.models.results import NaiveRAGAnswer, SearchResult, Usage
from app.services.llm.base import GenerationProvider
from app.services.rag.base import ASSISTANT_PERSONA, Retriever
from app.services.store.base import CONTAINERS, DocumentStore


KEYWORD_EXTRACTION_PROMPT = f"""{ASSISTANT_PERSONA}

Your task:
1. Answer the user's question clearly and accurately.
2. Extract the most important search keywords from the question that would help find relevant learning playlists. Focus on subject names, topic names, and educational concepts.

Respond ONLY with valid JSON in this exact shape:
{{
  "answer": "<your answer here>",
  "keywords": ["keyword1", "keyword2", "keyword3"]
}}

Rules:
- "answer" should be a helpful, concise response in the same language the user used (Bahasa Indonesia or English).
- "keywords" should be 2–6 short, specific terms (single words or short phrases) relevant to finding educational playlists.
- Do not include filler words like 'how', 'what', 'is', etc. in keywords."""


def clean_keywords(raw) -> list[str]:
    """Keep non-blank string keywords, in order, duplicates included."""
    if not isinstance(raw, list):
        return []
    return [k.strip() for k in raw if isinstance(k, str) and k.strip()]


def keywords_to_pattern(keywords: list[str]) -> str:
    """Regex matching any keyword literally (metacharacters escaped)."""
    return "|".join(re.escape(k) for k in keywords)


def score_name(name: str | None, keywords: list[str]) -> int:
    """Number of keywords contained in the name, case-insensitive."""
    lower = (name or "").lower()
    return sum(1 for k in keywords if k.lower() in lower)


class NaiveRetriever(Retriever):
    """LLM keyword extraction + name substring ranking."""

    strategy_name = "naive"

    def __init__(self, store: DocumentStore, provider: GenerationProvider):
        self.store = store
        self.provider = provider

    async def keyword_search(self, keywords: list[str], top_k: int) -> list[SearchResult]:
        """
        Search containers whose name matches any keyword.

        Returns at most top_k results ordered by descending match score;
        ties keep the store's order.
        """
        if not keywords:
            return []

        docs = await self.store.find(
            CONTAINERS,
            {"name": {"$regex": keywords_to_pattern(keywords), "$options": "i"}},
        )
        results = [
            SearchResult(
                container_id=doc.get("_id"),
                short_id=doc.get("short-id"),
                name=doc.get("name"),
                score=score_name(doc.get("name"), keywords),
            )
            for doc in docs
        ]
        results.sort(key=lambda r: r.score, reverse=True)
        return results[:top_k]

    async def query(self, question: str, top_k: int = 5) -> NaiveRAGAnswer:
        question = self.validate(question, top_k)
        print(f'[NaiveRAG] Query: "{question}"')

        messages = [
            {"role": "system", "content": KEYWORD_EXTRACTION_PROMPT},
            {"role": "user", "content": question},
        ]
        result = await self.provider.chat_structured(messages)
        answer = result.content.get("answer") or ""
        if not isinstance(answer, str):
            answer = str(answer)
        keywords = clean_keywords(result.content.get("keywords"))
        print(f"[NaiveRAG]   LLM answer extracted. Keywords: {keywords}")

        sources = await self.keyword_search(keywords, top_k)
        print(f"[NaiveRAG]   Found {len(sources)} matching containers")

        return NaiveRAGAnswer(
            answer=answer,
            keywords=keywords,
            sources=[s.to_source() for s in sources],
            usage=Usage(
                prompt_tokens=result.usage.prompt_tokens,
                completion_tokens=result.usage.completion_tokens,
                total_tokens=result.usage.total_tokens,
            ),
        )
