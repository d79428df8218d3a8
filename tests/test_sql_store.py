"""Tests for the SQLAlchemy-backed store."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from homepress.lib.exceptions import StoreError
from homepress.store.base import ContentSource, OrderingStore, SectionStore
from homepress.store.sql_store import SQLAlchemyStore


@pytest.fixture
def session():
    return AsyncMock()


@pytest.fixture
def session_maker(session):
    maker = MagicMock()
    maker.return_value.__aenter__.return_value = session
    maker.return_value.__aexit__.return_value = False
    return maker


@pytest.fixture
def store(session_maker):
    return SQLAlchemyStore(session_maker)


def db_error():
    return OperationalError("UPDATE", {}, Exception("database is locked"))


def test_implements_store_interfaces(store):
    assert isinstance(store, OrderingStore)
    assert isinstance(store, ContentSource)
    assert isinstance(store, SectionStore)


class TestPersistRank:
    @pytest.mark.asyncio
    async def test_writes_through_service(self, store, session):
        with patch("homepress.store.sql_store.category_service.set_rank", AsyncMock(return_value=True)) as set_rank:
            assert await store.persist_rank("category", 4, "display_order", 1) is True

        set_rank.assert_awaited_once_with(session, 4, "display_order", 1)

    @pytest.mark.asyncio
    async def test_database_error_is_reported_not_raised(self, store):
        with patch("homepress.store.sql_store.section_service.set_rank", AsyncMock(side_effect=db_error())):
            assert await store.persist_rank("section", 4, "display_order", 1) is False

    @pytest.mark.asyncio
    async def test_missing_row_is_a_failure(self, store):
        with patch("homepress.store.sql_store.category_service.set_rank", AsyncMock(return_value=False)):
            assert await store.persist_rank("category", 4, "order_index", 1) is False

    @pytest.mark.asyncio
    async def test_rejects_unknown_field(self, store, session_maker):
        with pytest.raises(ValueError):
            await store.persist_rank("section", 4, "order_index", 1)

        session_maker.assert_not_called()

    @pytest.mark.asyncio
    async def test_each_write_opens_its_own_session(self, store, session_maker):
        with patch("homepress.store.sql_store.category_service.set_rank", AsyncMock(return_value=True)):
            await store.persist_rank("category", 1, "order_index", 0)
            await store.persist_rank("category", 2, "order_index", 1)

        assert session_maker.call_count == 2


class TestReads:
    @pytest.mark.asyncio
    async def test_fetch_sections(self, store, session, make_section):
        rows = [make_section(1)]
        with patch(
            "homepress.store.sql_store.section_service.list_sections", AsyncMock(return_value=rows)
        ) as list_sections:
            assert await store.fetch_sections(active_only=True) == rows

        list_sections.assert_awaited_once_with(session, active_only=True)

    @pytest.mark.asyncio
    async def test_read_failure_is_store_error(self, store):
        with patch("homepress.store.sql_store.article_service.list_articles", AsyncMock(side_effect=db_error())):
            with pytest.raises(StoreError):
                await store.fetch_articles()


class TestSectionWrites:
    @pytest.mark.asyncio
    async def test_write_failure_is_store_error(self, store):
        with patch("homepress.store.sql_store.section_service.create_section", AsyncMock(side_effect=db_error())):
            with pytest.raises(StoreError):
                await store.create_section({"type": "latest_grid"})

    @pytest.mark.asyncio
    async def test_delete(self, store, session):
        with patch(
            "homepress.store.sql_store.section_service.delete_section", AsyncMock(return_value=True)
        ) as delete_section:
            assert await store.delete_section(3) is True

        delete_section.assert_awaited_once_with(session, 3)
