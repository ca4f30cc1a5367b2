"""Fixtures for API tests."""

import asyncio

import pytest
from falcon.testing import TestClient

from blogsearch.application.use_cases.document.delete_document import DeleteDocumentUseCase
from blogsearch.application.use_cases.document.get_document import GetDocumentUseCase
from blogsearch.application.use_cases.document.ingest_documents import IngestDocumentsUseCase
from blogsearch.application.use_cases.document.list_documents import ListDocumentsUseCase
from blogsearch.application.use_cases.document.reindex_document import ReindexDocumentUseCase
from blogsearch.application.use_cases.search.semantic_search import SemanticSearchUseCase
from blogsearch.interfaces.api.app import create_app
from blogsearch.interfaces.api.resources.documents import (
    DocumentReindexResource,
    DocumentResource,
    DocumentsResource,
)
from blogsearch.interfaces.api.resources.health import HealthResource
from blogsearch.interfaces.api.resources.search import SearchResource


@pytest.fixture
def ready_gateway(gateway):
    """Gateway with its model loaded."""
    asyncio.run(gateway.initialize())
    return gateway


@pytest.fixture
def app(uow_factory, chunker, chunk_embedder, chunking_config, ready_gateway):
    """Falcon ASGI app wired to in-memory fakes."""
    ingest = IngestDocumentsUseCase(
        unit_of_work_factory=uow_factory,
        chunker=chunker,
        chunk_embedder=chunk_embedder,
        chunking_config=chunking_config,
    )
    reindex = ReindexDocumentUseCase(
        unit_of_work_factory=uow_factory,
        chunker=chunker,
        chunk_embedder=chunk_embedder,
        chunking_config=chunking_config,
    )
    return create_app(
        documents_resource=DocumentsResource(
            ingest_documents=ingest,
            list_documents=ListDocumentsUseCase(unit_of_work_factory=uow_factory),
        ),
        document_resource=DocumentResource(
            get_document=GetDocumentUseCase(unit_of_work_factory=uow_factory),
            delete_document=DeleteDocumentUseCase(unit_of_work_factory=uow_factory),
        ),
        reindex_resource=DocumentReindexResource(reindex_document=reindex),
        search_resource=SearchResource(
            semantic_search=SemanticSearchUseCase(
                unit_of_work_factory=uow_factory, embedding_gateway=ready_gateway
            )
        ),
        health_resource=HealthResource(embedding_gateway=ready_gateway),
    )


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
