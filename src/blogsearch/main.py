"""Application entry point and composition root."""

import argparse
import asyncio
import logging
from functools import partial

import falcon.asgi

from blogsearch import __version__
from blogsearch.application.dto.chunking_config import ChunkingConfig
from blogsearch.application.services.chunk_embedder import ChunkEmbedder
from blogsearch.application.services.embedding_gateway import EmbeddingGateway
from blogsearch.application.use_cases.document.delete_document import DeleteDocumentUseCase
from blogsearch.application.use_cases.document.delete_duplicates import (
    DeleteDuplicateDocumentsUseCase,
)
from blogsearch.application.use_cases.document.get_document import GetDocumentUseCase
from blogsearch.application.use_cases.document.ingest_documents import IngestDocumentsUseCase
from blogsearch.application.use_cases.document.list_documents import ListDocumentsUseCase
from blogsearch.application.use_cases.document.reindex_document import ReindexDocumentUseCase
from blogsearch.application.use_cases.search.semantic_search import SemanticSearchUseCase
from blogsearch.config import Settings, get_settings
from blogsearch.infrastructure.chunking.boundary_chunker import BoundaryChunker
from blogsearch.infrastructure.embedding import create_embedding_model
from blogsearch.infrastructure.persistence.postgres.connection import (
    check_connection,
    create_pool,
)
from blogsearch.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from blogsearch.interfaces.api.app import create_app
from blogsearch.interfaces.api.middleware.cors import CORSMiddleware
from blogsearch.interfaces.api.middleware.lifespan import LifespanMiddleware
from blogsearch.interfaces.api.resources.documents import (
    DocumentReindexResource,
    DocumentResource,
    DocumentsResource,
)
from blogsearch.interfaces.api.resources.health import HealthResource
from blogsearch.interfaces.api.resources.search import SearchResource
from blogsearch.logging_config import configure_logging

logger = logging.getLogger(__name__)


def create_blogsearch_app(settings: Settings | None = None) -> falcon.asgi.App:
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    pool = create_pool(
        settings.database_url,
        min_size=settings.database_pool_min_size,
        max_size=settings.database_pool_max_size,
    )
    uow_factory = create_uow_factory(pool)

    embedding_gateway = EmbeddingGateway(
        create_embedding_model(settings),
        dimensions=settings.embedding_dimensions,
    )
    chunk_embedder = ChunkEmbedder(
        embedding_gateway,
        concurrency=settings.embedding_concurrency,
        max_attempts=settings.embedding_max_attempts,
    )
    chunker = BoundaryChunker()
    chunking_config = ChunkingConfig(
        chunk_size=settings.chunk_size,
        chunk_overlap=settings.chunk_overlap,
    )

    ingest_documents = IngestDocumentsUseCase(
        unit_of_work_factory=uow_factory,
        chunker=chunker,
        chunk_embedder=chunk_embedder,
        chunking_config=chunking_config,
    )
    reindex_document = ReindexDocumentUseCase(
        unit_of_work_factory=uow_factory,
        chunker=chunker,
        chunk_embedder=chunk_embedder,
        chunking_config=chunking_config,
    )
    semantic_search = SemanticSearchUseCase(
        unit_of_work_factory=uow_factory,
        embedding_gateway=embedding_gateway,
    )

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    return create_app(
        documents_resource=DocumentsResource(
            ingest_documents, ListDocumentsUseCase(uow_factory)
        ),
        document_resource=DocumentResource(
            GetDocumentUseCase(uow_factory), DeleteDocumentUseCase(uow_factory)
        ),
        reindex_resource=DocumentReindexResource(reindex_document),
        search_resource=SearchResource(semantic_search),
        health_resource=HealthResource(
            database_check=partial(check_connection, pool),
            embedding_gateway=embedding_gateway,
        ),
        middleware=[
            CORSMiddleware(cors_origins),
            LifespanMiddleware(pool, embedding_gateway),
        ],
    )


def run_server(settings: Settings) -> None:
    """Run uvicorn server."""
    import uvicorn

    app = create_blogsearch_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


async def run_dedupe(settings: Settings, dry_run: bool) -> int:
    """Delete documents sharing a title, keeping the oldest."""
    pool = create_pool(settings.database_url, min_size=1, max_size=2)
    await pool.open()
    try:
        use_case = DeleteDuplicateDocumentsUseCase(create_uow_factory(pool))
        result = await use_case.execute(dry_run=dry_run)
    finally:
        await pool.close()

    verb = "Would delete" if result.dry_run else "Deleted"
    print(f"Found {result.groups} duplicate titles. {verb} {len(result.deleted_ids)} documents.")
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(prog="blogsearch", description="Semantic document search")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("serve", help="Run the HTTP API")
    dedupe = subparsers.add_parser("dedupe", help="Delete documents with duplicate titles")
    dedupe.add_argument(
        "--dry-run", action="store_true", help="Show what would be deleted without deleting"
    )
    subparsers.add_parser("version", help="Print version")
    args = parser.parse_args(argv)

    if args.command == "version":
        print(f"blogsearch v{__version__}")
        return 0

    settings = get_settings()
    configure_logging(settings.log_level)
    if args.command == "serve":
        run_server(settings)
        return 0
    return asyncio.run(run_dedupe(settings, args.dry_run))


if __name__ == "__main__":
    raise SystemExit(main())
