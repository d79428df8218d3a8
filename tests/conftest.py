"""Shared pytest fixtures."""

from datetime import datetime, timedelta, UTC
from unittest.mock import AsyncMock, MagicMock

import pytest

from homepress.auth.permissions import AdminContext
from homepress.config import get_settings
from homepress.db.models import Article, Category, HomepageSection, User, UserPermission

BASE_DATE = datetime(2026, 1, 1, tzinfo=UTC)


@pytest.fixture
def make_category():
    """Factory for transient Category rows."""
    def _make(id, order_index=0, display_order=0, name=None):
        return Category(
            id=id,
            slug=f"category-{id}",
            name=name or f"Category {id}",
            description="",
            topics=[],
            order_index=order_index,
            display_order=display_order,
        )
    return _make


@pytest.fixture
def make_article():
    """Factory for transient Article rows. Larger ``days`` means newer."""
    def _make(id, category_id, days=0, date=None):
        return Article(
            id=id,
            slug=f"article-{id}",
            title=f"Article {id}",
            excerpt="",
            content="",
            type="article",
            category_id=category_id,
            date=date or BASE_DATE + timedelta(days=days),
            is_exclusive=False,
        )
    return _make


@pytest.fixture
def make_section():
    """Factory for transient HomepageSection rows."""
    def _make(id, type="latest_grid", display_order=0, is_active=True, category_id=None, settings=None, title=None):
        return HomepageSection(
            id=id,
            type=type,
            title=title,
            display_order=display_order,
            is_active=is_active,
            category_id=category_id,
            settings=settings if settings is not None else {},
        )
    return _make


@pytest.fixture
def superadmin():
    return User(id=1, username="root", is_superadmin=True)


@pytest.fixture
def editor():
    return User(id=2, username="editor", is_superadmin=False)


@pytest.fixture
def admin_context(superadmin):
    return AdminContext(user=superadmin)


@pytest.fixture
def editor_context(editor):
    """An editor who may only add articles in category 1."""
    return AdminContext(
        user=editor,
        permissions=[
            UserPermission(user_id=2, category_id=1, can_add=True, can_edit=False, can_delete=False),
        ],
    )


@pytest.fixture
def ordering_store():
    """OrderingStore double whose writes all succeed."""
    store = MagicMock()
    store.persist_rank = AsyncMock(return_value=True)
    return store


@pytest.fixture
def mock_db_session():
    """Mock async database session.

    ``execute`` returns a result supporting scalar_one_or_none(),
    scalar_one() and scalars().all().
    """
    session = AsyncMock()

    mock_scalars = MagicMock()
    mock_scalars.all.return_value = []

    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = None
    mock_result.scalar_one.return_value = 0
    mock_result.scalars.return_value = mock_scalars
    mock_result.rowcount = 1

    session.execute = AsyncMock(return_value=mock_result)
    session.commit = AsyncMock()
    session.refresh = AsyncMock()
    session.add = MagicMock()
    session.add_all = MagicMock()
    session.delete = AsyncMock()

    return session


@pytest.fixture
def result_returning():
    """Build an execute() result whose scalar_one_or_none() returns value."""
    def _make(value):
        result = MagicMock()
        result.scalar_one_or_none.return_value = value
        return result
    return _make


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
