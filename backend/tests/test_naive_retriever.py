"""Tests for keyword (naive) retrieval."""

import re

import pytest

from app.services.rag.naive import (
    KEYWORD_EXTRACTION_PROMPT,
    NaiveRetriever,
    clean_keywords,
    keywords_to_pattern,
    score_name,
)
from app.services.store.base import CONTAINERS

from fakes import FakeDocumentStore, FakeGenerationProvider


class TestKeywordPattern:
    def test_metacharacters_match_literally(self):
        pattern = re.compile(keywords_to_pattern(["c++", "a.b"]), re.IGNORECASE)

        assert pattern.search("Belajar C++ Dasar")
        assert pattern.search("Topik A.B")
        assert not pattern.search("Belajar C Dasar")
        assert not pattern.search("Topik axb")

    def test_alternation(self):
        pattern = re.compile(keywords_to_pattern(["pecahan", "aljabar"]), re.IGNORECASE)
        assert pattern.search("Aljabar Lanjutan")


class TestScoring:
    def test_counts_keywords_case_insensitive(self):
        assert score_name("Pecahan dan Aljabar Dasar", ["pecahan", "ALJABAR", "geometri"]) == 2

    def test_duplicates_count_multiple_times(self):
        assert score_name("Pecahan", ["pecahan", "pecahan"]) == 2

    def test_missing_name(self):
        assert score_name(None, ["pecahan"]) == 0


class TestCleanKeywords:
    def test_drops_blank_and_non_strings(self):
        assert clean_keywords(["pecahan", " ", 3, None, " aljabar "]) == ["pecahan", "aljabar"]

    def test_not_a_list(self):
        assert clean_keywords("pecahan") == []
        assert clean_keywords(None) == []


class TestNaiveRetriever:
    @pytest.mark.asyncio
    async def test_ranks_by_keyword_matches(self, store):
        provider = FakeGenerationProvider(
            structured_reply={"answer": "Pecahan adalah...", "keywords": ["pecahan", "aljabar"]}
        )
        result = await NaiveRetriever(store, provider).query("Apa itu pecahan aljabar?", top_k=5)

        assert result.answer == "Pecahan adalah..."
        assert result.keywords == ["pecahan", "aljabar"]
        assert [(s.name, s.score) for s in result.sources] == [
            ("Pecahan dan Aljabar Dasar", 2),
            ("Aljabar Lanjutan", 1),
        ]
        assert result.sources[0].short_id == "lp001"
        assert result.sources[0].container_id == "c1"

    @pytest.mark.asyncio
    async def test_ties_keep_store_order(self):
        store = FakeDocumentStore(
            {
                CONTAINERS: [
                    {"_id": "a", "name": "Aljabar X", "short-id": "lp-a"},
                    {"_id": "b", "name": "Pecahan Aljabar", "short-id": "lp-b"},
                    {"_id": "c", "name": "Aljabar Y", "short-id": "lp-c"},
                ]
            }
        )
        provider = FakeGenerationProvider(
            structured_reply={"answer": "x", "keywords": ["aljabar", "pecahan"]}
        )
        result = await NaiveRetriever(store, provider).query("aljabar pecahan", top_k=5)

        assert [(s.container_id, s.score) for s in result.sources] == [
            ("b", 2),
            ("a", 1),
            ("c", 1),
        ]

    @pytest.mark.asyncio
    async def test_top_k_truncates(self, store):
        provider = FakeGenerationProvider(structured_reply={"answer": "a", "keywords": ["aljabar"]})
        result = await NaiveRetriever(store, provider).query("aljabar", top_k=1)
        assert len(result.sources) == 1

    @pytest.mark.asyncio
    async def test_never_embeds(self, store):
        provider = FakeGenerationProvider(structured_reply={"answer": "a", "keywords": ["geometri"]})
        await NaiveRetriever(store, provider).query("geometri")

        assert provider.called("embed") == []
        assert provider.called("embed_batch") == []
        assert provider.called("chat_structured")[0][0]["content"] == KEYWORD_EXTRACTION_PROMPT

    @pytest.mark.asyncio
    async def test_no_keywords_means_no_search(self, store):
        provider = FakeGenerationProvider(structured_reply={"answer": "Halo!"})
        result = await NaiveRetriever(store, provider).query("halo")

        assert result.answer == "Halo!"
        assert result.keywords == []
        assert result.sources == []
        assert ("find", CONTAINERS) not in store.calls

    @pytest.mark.asyncio
    async def test_missing_fields_default(self, store):
        provider = FakeGenerationProvider(structured_reply={})
        result = await NaiveRetriever(store, provider).query("halo")

        assert result.answer == ""
        assert result.keywords == []

    @pytest.mark.asyncio
    async def test_regex_unsafe_keyword_matches_literally(self):
        store = FakeDocumentStore(
            {
                CONTAINERS: [
                    {"_id": "p1", "name": "Pemrograman C++", "short-id": "lp101"},
                    {"_id": "p2", "name": "Pemrograman C", "short-id": "lp102"},
                ]
            }
        )
        provider = FakeGenerationProvider(structured_reply={"answer": "a", "keywords": ["c++"]})
        result = await NaiveRetriever(store, provider).query("belajar c++")

        assert [s.container_id for s in result.sources] == ["p1"]

    @pytest.mark.asyncio
    async def test_usage_has_no_embedding_tokens(self, store):
        provider = FakeGenerationProvider(structured_reply={"answer": "a", "keywords": ["x"]})
        result = await NaiveRetriever(store, provider).query("x")

        assert result.usage.embedding_tokens == 0
        assert result.usage.total_tokens == 28
