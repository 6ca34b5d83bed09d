"""Pytest fixtures built on the in-memory fakes."""

import pytest

from app.core.config import Settings
from app.core.services import Services

from fakes import DIMENSIONS, FakeDocumentStore, FakeGenerationProvider, catalog


# ── Fixtures ─────────────────────────────────────────────────────────────────

@pytest.fixture
def store():
    return FakeDocumentStore(catalog())


@pytest.fixture
def provider():
    return FakeGenerationProvider()


@pytest.fixture
def settings():
    return Settings(
        openai_api_key="test-key",
        embedding_dimensions=DIMENSIONS,
        service_name="rag-poc",
    )


@pytest.fixture
def services(settings, store, provider):
    return Services.build(settings, store=store, provider=provider)
