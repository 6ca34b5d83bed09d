"""
Embedding Pipeline

Builds enriched text for every container, embeds it with OpenAI and
stores one vector document per container in container-vectors.

How it works:
1. LOAD    – all containers are read from the catalog
2. CLEAR   – existing vectors are deleted (full replace, the default)
3. BATCH   – containers are processed in fixed-size batches, one after another
4. ENRICH  – each container's text is built from its questions and videos;
             one failure aborts the batch (and the run)
5. EMBED   – one embeddings request per batch; results are put back into
             input order using the index the provider tags each item with,
             because providers do not promise to keep request order
6. STORE   – one ContainerVector per container is inserted

Only one run may be in flight per pipeline instance: a second call while
a run is active fails with PipelineBusyError instead of interleaving its
deletes and inserts with the first. The guard is per process: the API
server and the CLI below each build their own pipeline, so do not run the
CLI against a database while the server may be ingesting into it.

Usage:
    cd backend
    python -m app.services.rag.ingest [--batch-size 20] [--no-clear]
"""

import argparse
import asyncio

from pydantic import ValidationError as PydanticValidationError

from app.core.errors import EnrichmentError, PipelineBusyError, ValidationError
from app.models.catalog import Container
from app.models.vectors import ContainerVector
from app.services.llm.base import GenerationProvider
from app.services.llm.models import IndexedEmbedding
from app.services.rag.enrichment import TextEnricher
from app.services.store.base import CONTAINER_VECTORS, CONTAINERS, DocumentStore


DEFAULT_BATCH_SIZE = 20


def partition(items: list, size: int) -> list[list]:
    """Split items into consecutive chunks of `size` (the last may be smaller)."""
    return [items[i:i + size] for i in range(0, len(items), size)]


def align_embeddings(
    count: int, indexed: list[IndexedEmbedding]
) -> list[list[float] | None]:
    """
    Put index-tagged embeddings back into input order.

    Returns a list of length `count` where slot i holds the embedding the
    provider tagged with index i, or None if it sent none.
    """
    aligned: list[list[float] | None] = [None] * count
    for item in indexed:
        if 0 <= item.index < count:
            aligned[item.index] = item.embedding
        else:
            print(f"[Pipeline] WARNING: embedding with out-of-range index {item.index} ignored")
    return aligned


def load_container(doc: dict) -> Container:
    """Parse one stored container, naming it in the error if it is malformed."""
    try:
        return Container(**doc)
    except PydanticValidationError as e:
        print(
            f"[Pipeline] ERROR parsing container "
            f"_id={doc.get('_id')} name={doc.get('name')}"
        )
        raise EnrichmentError(
            f"Malformed container {doc.get('_id')}: {e}",
            container_id=doc.get("_id"),
            name=doc.get("name"),
        ) from e


class EmbeddingPipeline:
    """Full-corpus (re)embedding of containers."""

    def __init__(
        self,
        store: DocumentStore,
        provider: GenerationProvider,
        dimensions: int,
        enricher: TextEnricher | None = None,
    ):
        self.store = store
        self.provider = provider
        self.dimensions = dimensions
        self.enricher = enricher or TextEnricher(store)
        self._lock = asyncio.Lock()

    @property
    def running(self) -> bool:
        return self._lock.locked()

    def _checked(self, container: Container, embedding: list[float] | None) -> list[float]:
        if not embedding:
            print(f"[Pipeline] WARNING: nil embedding for container {container.id}")
            return []
        if len(embedding) != self.dimensions:
            print(
                f"[Pipeline] WARNING: embedding for container {container.id} has "
                f"{len(embedding)} dims, expected {self.dimensions}"
            )
            return []
        return list(embedding)

    async def process_batch(self, containers: list[Container]) -> list[ContainerVector]:
        """Enrich, embed and build vector documents for one batch."""
        print("[Pipeline]   Building enriched texts...")
        texts = []
        for container in containers:
            texts.append(await self.enricher.enrich(container))

        print(f"[Pipeline]   Built {len(texts)} texts. Calling embeddings API...")
        indexed = await self.provider.embed_batch(texts)
        embeddings = align_embeddings(len(texts), indexed)
        print(f"[Pipeline]   Got {sum(e is not None for e in embeddings)} embeddings.")

        return [
            ContainerVector(
                container_id=container.id,
                short_id=container.short_id,
                name=container.name,
                text=text,
                embedding=self._checked(container, embedding),
            )
            for container, text, embedding in zip(containers, texts, embeddings)
        ]

    async def run(
        self,
        batch_size: int = DEFAULT_BATCH_SIZE,
        clear_existing: bool = True,
    ) -> int:
        """
        Run the pipeline.

        Args:
            batch_size: Containers per embeddings request
            clear_existing: Delete all stored vectors first. Without it,
                repeated runs append duplicate vectors per container.

        Returns:
            Total number of vector documents stored after the run
        """
        if batch_size < 1:
            raise ValidationError("batch_size must be at least 1")
        if self._lock.locked():
            raise PipelineBusyError("An embedding pipeline run is already in progress")

        async with self._lock:
            print("[Pipeline] Starting embedding pipeline...")
            containers = [load_container(d) for d in await self.store.find_all(CONTAINERS)]
            print(f"[Pipeline] Found {len(containers)} containers to process.")

            if clear_existing:
                print("[Pipeline] Clearing existing container-vectors...")
                await self.store.delete_many(CONTAINER_VECTORS, {})

            batches = partition(containers, batch_size)
            for idx, batch in enumerate(batches, start=1):
                print(
                    f"[Pipeline] Processing batch {idx}/{len(batches)} "
                    f"({len(batch)} containers)..."
                )
                vector_docs = await self.process_batch(batch)
                inserted = await self.store.insert_many(CONTAINER_VECTORS, vector_docs)
                print(f"[Pipeline]   Inserted {inserted} vector documents.")

            total = await self.store.count_documents(CONTAINER_VECTORS)
            print(f"[Pipeline] Pipeline complete. Total vectors stored: {total}")
            return total


# ── Main ─────────────────────────────────────────────────────────────────────

async def run_ingestion(batch_size: int | None = None, clear_existing: bool = True) -> int:
    """Run the pipeline against the configured MongoDB and OpenAI."""
    from app.core.config import get_settings
    from app.core.services import Services

    settings = get_settings()
    services = Services.build(settings)
    await services.open()
    try:
        return await services.pipeline.run(
            batch_size=batch_size or settings.ingest_batch_size,
            clear_existing=clear_existing,
        )
    finally:
        await services.close()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Generate and store container embeddings")
    parser.add_argument("--batch-size", type=int, default=None)
    parser.add_argument(
        "--no-clear",
        action="store_true",
        help="append to existing vectors instead of replacing them",
    )
    args = parser.parse_args(argv)
    asyncio.run(run_ingestion(args.batch_size, clear_existing=not args.no_clear))


if __name__ == "__main__":
    main()
