"""Pytest fixtures for blogsearch tests."""

from __future__ import annotations

import asyncio
import hashlib
import math
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime, timedelta
from itertools import groupby
from uuid import UUID, uuid4

import pytest
from tenacity import wait_none

from blogsearch.application.dto.chunking_config import ChunkingConfig
from blogsearch.application.dto.search_dto import ChunkCandidate
from blogsearch.application.services.chunk_embedder import ChunkEmbedder
from blogsearch.application.services.embedding_gateway import EmbeddingGateway
from blogsearch.domain.entities import Chunk, Document
from blogsearch.domain.exceptions import StorageFailure
from blogsearch.infrastructure.chunking.boundary_chunker import BoundaryChunker


# --- Fake storage ---


class FakeStore:
    """Committed state shared by every unit of work of a test.

    ``fail_on`` holds operation names (e.g. ``"chunks.create_batch"``) that
    raise StorageFailure when called.
    """

    def __init__(self) -> None:
        self.documents: dict[UUID, Document] = {}
        self.chunks: dict[UUID, list[Chunk]] = {}
        self.fail_on: set[str] = set()
        self.commits = 0
        self.rollbacks = 0

    def add_document(
        self,
        title: str,
        content: str = "Body",
        created_at: datetime | None = None,
        chunks: list[Chunk] | None = None,
    ) -> Document:
        """Seed a committed document (and optionally its chunks)."""
        now = created_at or datetime.now(UTC)
        document = Document(
            id=uuid4(),
            title=title,
            content=content,
            created_at=now,
            updated_at=now,
        )
        self.documents[document.id] = document
        self.chunks[document.id] = list(chunks or [])
        return document

    def chunk_count(self) -> int:
        return sum(len(c) for c in self.chunks.values())

    def check(self, operation: str) -> None:
        if operation in self.fail_on:
            raise StorageFailure(f"Simulated failure in {operation}")


class _Staged:
    """Working copy of the store for one unit of work."""

    def __init__(self, store: FakeStore) -> None:
        self.store = store
        self.documents = dict(store.documents)
        self.chunks = {doc_id: list(c) for doc_id, c in store.chunks.items()}


class FakeDocumentRepository:
    """In-memory document repository."""

    def __init__(self, staged: _Staged) -> None:
        self._staged = staged

    async def create_batch(self, documents: list[Document]) -> list[Document]:
        self._staged.store.check("documents.create_batch")
        for document in documents:
            self._staged.documents[document.id] = document
            self._staged.chunks.setdefault(document.id, [])
        return documents

    async def get_by_id(self, document_id: UUID) -> Document | None:
        return self._staged.documents.get(document_id)

    async def list_all(self) -> list[Document]:
        documents = list(self._staged.documents.values())
        documents.sort(key=lambda d: d.id)
        documents.sort(key=lambda d: d.created_at, reverse=True)
        return documents

    async def list_duplicate_groups(self) -> list[list[Document]]:
        documents = sorted(
            self._staged.documents.values(), key=lambda d: (d.title, d.created_at, d.id)
        )
        groups = [list(g) for _, g in groupby(documents, key=lambda d: d.title)]
        return [g for g in groups if len(g) > 1]

    async def touch(self, document: Document) -> Document:
        self._staged.store.check("documents.touch")
        self._staged.documents[document.id] = document
        return document

    async def delete(self, document_id: UUID) -> bool:
        self._staged.store.check("documents.delete")
        if document_id not in self._staged.documents:
            return False
        del self._staged.documents[document_id]
        self._staged.chunks.pop(document_id, None)
        return True


def cosine_distance(a: list[float], b: list[float]) -> float:
    """``1 - cosine similarity``, as pgvector's ``<=>`` operator computes it."""
    dot = math.fsum(x * y for x, y in zip(a, b))
    norm = math.sqrt(math.fsum(x * x for x in a)) * math.sqrt(math.fsum(y * y for y in b))
    return 1.0 - dot / norm if norm else 1.0


class FakeChunkRepository:
    """In-memory chunk repository; candidates mirror the top-1-per-document query."""

    def __init__(self, staged: _Staged) -> None:
        self._staged = staged

    async def create_batch(self, chunks: list[Chunk]) -> list[Chunk]:
        self._staged.store.check("chunks.create_batch")
        for chunk in chunks:
            self._staged.chunks.setdefault(chunk.document_id, []).append(chunk)
        return chunks

    async def delete_by_document_id(self, document_id: UUID) -> None:
        self._staged.chunks[document_id] = []

    async def get_by_document_id(self, document_id: UUID) -> list[Chunk]:
        return sorted(self._staged.chunks.get(document_id, []), key=lambda c: c.chunk_index)

    async def count_by_document_id(self, document_id: UUID) -> int:
        return len(self._staged.chunks.get(document_id, []))

    async def search_candidates(
        self, query_embedding: list[float], limit: int
    ) -> list[ChunkCandidate]:
        """Nearest chunk per document, nearest *limit* documents first."""
        self._staged.store.check("chunks.search_candidates")
        nearest: list[tuple[float, UUID, ChunkCandidate]] = []
        for doc_id, chunks in self._staged.chunks.items():
            document = self._staged.documents.get(doc_id)
            scored = [
                (cosine_distance(query_embedding, c.embedding), c.chunk_index, c)
                for c in chunks
                if c.embedding
            ]
            if document is None or not scored:
                continue
            distance, _, chunk = min(scored, key=lambda s: (s[0], s[1]))
            nearest.append((distance, doc_id, ChunkCandidate(document=document, chunk=chunk)))
        nearest.sort(key=lambda n: (n[0], n[1]))
        return [candidate for _, _, candidate in nearest[:limit]]


class FakeUnitOfWork:
    """In-memory unit of work; changes reach the store only on commit."""

    def __init__(self, store: FakeStore) -> None:
        self._store = store
        self._staged = _Staged(store)
        self.documents = FakeDocumentRepository(self._staged)
        self.chunks = FakeChunkRepository(self._staged)

    async def commit(self) -> None:
        self._store.documents = self._staged.documents
        self._store.chunks = self._staged.chunks
        self._store.commits += 1

    async def rollback(self) -> None:
        self._store.rollbacks += 1


def make_uow_factory(store: FakeStore):
    """UoW factory with the same commit/rollback behaviour as the Postgres one."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[FakeUnitOfWork]:
        uow = FakeUnitOfWork(store)
        try:
            yield uow
            await uow.commit()
        except BaseException:
            await uow.rollback()
            raise

    return factory


# --- Fake embedding model ---


def hash_vector(text: str, dimensions: int = 384) -> list[float]:
    """Deterministic pseudo-embedding for *text*."""
    values: list[float] = []
    counter = 0
    while len(values) < dimensions:
        digest = hashlib.sha256(f"{counter}:{text}".encode()).digest()
        values.extend(b / 255.0 - 0.5 for b in digest)
        counter += 1
    return values[:dimensions]


class FakeEmbeddingModel:
    """Hash-based embedding model.

    Texts in ``fail_texts`` always raise; texts in ``flaky_texts`` raise the
    given number of times before succeeding.
    """

    name = "fake-hash-model"

    def __init__(
        self,
        dimensions: int = 384,
        fail_texts: set[str] | None = None,
        flaky_texts: dict[str, int] | None = None,
        delay: float = 0.0,
    ) -> None:
        self.dimensions = dimensions
        self.fail_texts = set(fail_texts or ())
        self.flaky_texts = dict(flaky_texts or {})
        self.delay = delay
        self.load_calls = 0
        self.encode_calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def load(self) -> None:
        self.load_calls += 1
        await asyncio.sleep(0)

    async def encode(self, text: str) -> list[float]:
        self.encode_calls.append(text)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            if text in self.fail_texts:
                raise RuntimeError("model exploded")
            if self.flaky_texts.get(text, 0) > 0:
                self.flaky_texts[text] -= 1
                raise RuntimeError("transient model error")
            return hash_vector(text, self.dimensions)
        finally:
            self.in_flight -= 1


# --- Fixtures ---


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def uow_factory(store):
    return make_uow_factory(store)


@pytest.fixture
def embedding_model() -> FakeEmbeddingModel:
    return FakeEmbeddingModel()


@pytest.fixture
def gateway(embedding_model) -> EmbeddingGateway:
    """Gateway that has not been initialized yet."""
    return EmbeddingGateway(embedding_model, dimensions=384)


@pytest.fixture
def chunk_embedder(gateway) -> ChunkEmbedder:
    return ChunkEmbedder(gateway, concurrency=4, retry_wait=wait_none())


@pytest.fixture
def chunker() -> BoundaryChunker:
    return BoundaryChunker()


@pytest.fixture
def chunking_config() -> ChunkingConfig:
    return ChunkingConfig(chunk_size=500, chunk_overlap=100)


def days_ago(days: int) -> datetime:
    return datetime.now(UTC) - timedelta(days=days)
