"""Unit tests for the PostgreSQL adapters with stubbed connections."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import psycopg
import pytest

from blogsearch.application.ports.repositories import DocumentRepository
from blogsearch.domain.exceptions import InvalidArgument, StorageFailure
from blogsearch.infrastructure.persistence.postgres.document_repository import (
    PostgresDocumentRepository,
)
from blogsearch.infrastructure.persistence.postgres.unit_of_work import create_uow_factory


def _stub_pool(commit_error: Exception | None = None):
    """Pool whose ``connection()`` yields a mocked async connection."""
    conn = MagicMock()
    conn.commit = AsyncMock(side_effect=commit_error)
    conn.rollback = AsyncMock()
    conn_cm = MagicMock()
    conn_cm.__aenter__ = AsyncMock(return_value=conn)
    conn_cm.__aexit__ = AsyncMock(return_value=False)
    pool = MagicMock()
    pool.connection.return_value = conn_cm
    return pool, conn, conn_cm


class TestUnitOfWork:
    """Tests for create_uow_factory."""

    @pytest.mark.asyncio
    async def test_commits_on_success(self) -> None:
        pool, conn, conn_cm = _stub_pool()
        async with create_uow_factory(pool)() as uow:
            assert isinstance(uow.documents, PostgresDocumentRepository)
        conn.commit.assert_awaited_once()
        conn.rollback.assert_not_awaited()
        conn_cm.__aexit__.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_commit_error_rolls_back_and_raises_storage_failure(self) -> None:
        pool, conn, conn_cm = _stub_pool(psycopg.OperationalError("connection lost"))

        with pytest.raises(StorageFailure, match="connection lost") as exc_info:
            async with create_uow_factory(pool)():
                pass

        assert isinstance(exc_info.value.__cause__, psycopg.OperationalError)
        conn.rollback.assert_awaited()
        conn_cm.__aexit__.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_database_error_in_block_becomes_storage_failure(self) -> None:
        pool, conn, _ = _stub_pool()

        with pytest.raises(StorageFailure):
            async with create_uow_factory(pool)():
                raise psycopg.errors.UniqueViolation("duplicate key")

        conn.commit.assert_not_awaited()
        conn.rollback.assert_awaited()

    @pytest.mark.asyncio
    async def test_domain_error_rolls_back_and_propagates_unchanged(self) -> None:
        pool, conn, _ = _stub_pool()

        with pytest.raises(InvalidArgument):
            async with create_uow_factory(pool)():
                raise InvalidArgument("bad input")

        conn.commit.assert_not_awaited()
        conn.rollback.assert_awaited()


class TestDocumentRepository:
    """Tests for PostgresDocumentRepository."""

    def test_list_all_is_part_of_the_port(self) -> None:
        assert hasattr(DocumentRepository, "list_all")
        assert hasattr(PostgresDocumentRepository, "list_all")
        assert not hasattr(PostgresDocumentRepository, "list")

    @pytest.mark.asyncio
    async def test_list_all_maps_rows_newest_first(self) -> None:
        now = datetime.now(UTC)
        rows = [(uuid4(), "New", "Body", now, now), (uuid4(), "Old", "Body", now, now)]
        cursor = MagicMock()
        cursor.fetchall = AsyncMock(return_value=rows)
        conn = MagicMock()
        conn.execute = AsyncMock(return_value=cursor)

        documents = await PostgresDocumentRepository(conn).list_all()

        assert [d.title for d in documents] == ["New", "Old"]
        assert documents[0].id == rows[0][0]
        assert "ORDER BY created_at DESC, id" in conn.execute.await_args.args[0]

    @pytest.mark.asyncio
    async def test_list_duplicate_groups_groups_by_title(self) -> None:
        now = datetime.now(UTC)
        rows = [
            (uuid4(), "A", "1", now, now),
            (uuid4(), "A", "2", now, now),
            (uuid4(), "B", "3", now, now),
            (uuid4(), "B", "4", now, now),
        ]
        cursor = MagicMock()
        cursor.fetchall = AsyncMock(return_value=rows)
        conn = MagicMock()
        conn.execute = AsyncMock(return_value=cursor)

        groups = await PostgresDocumentRepository(conn).list_duplicate_groups()

        assert [[d.content for d in g] for g in groups] == [["1", "2"], ["3", "4"]]

    @pytest.mark.asyncio
    async def test_delete_reports_missing_row(self) -> None:
        conn = MagicMock()
        conn.execute = AsyncMock(return_value=MagicMock(rowcount=0))
        assert await PostgresDocumentRepository(conn).delete(uuid4()) is False
