"""Tests for permission-gated article writes."""

from unittest.mock import AsyncMock

import pytest

from homepress.auth.permissions import AdminContext
from homepress.db.models import UserPermission
from homepress.db.services import article_service
from homepress.lib.exceptions import PermissionDenied, ValidationError


@pytest.fixture
def writer_context(editor):
    """May edit and delete in category 1, add in category 2."""
    return AdminContext(
        user=editor,
        permissions=[
            UserPermission(user_id=2, category_id=1, can_add=False, can_edit=True, can_delete=True),
            UserPermission(user_id=2, category_id=2, can_add=True, can_edit=False, can_delete=False),
        ],
    )


class TestCreateArticle:
    @pytest.mark.asyncio
    async def test_creates_with_add_permission(
        self, mock_db_session, editor_context, make_category, result_returning
    ):
        mock_db_session.execute = AsyncMock(
            side_effect=[result_returning(make_category(1)), result_returning(None)]
        )

        article = await article_service.create_article(
            mock_db_session, editor_context, category_id=1, slug="hello", title="Hello"
        )

        assert article.category_id == 1
        assert article.slug == "hello"
        assert article.date is not None
        mock_db_session.add.assert_called_once_with(article)
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_denied_without_add(self, mock_db_session, editor_context):
        with pytest.raises(PermissionDenied):
            await article_service.create_article(
                mock_db_session, editor_context, category_id=2, slug="hello", title="Hello"
            )

        mock_db_session.add.assert_not_called()
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_slug_must_be_unique(self, mock_db_session, admin_context, make_article, result_returning):
        mock_db_session.execute = AsyncMock(return_value=result_returning(make_article(9, category_id=1)))

        with pytest.raises(ValidationError, match="already in use"):
            await article_service.create_article(
                mock_db_session, admin_context, category_id=1, slug="article-9", title="Dup"
            )

        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_category_must_exist(self, mock_db_session, admin_context):
        with pytest.raises(ValidationError, match="Category 42 does not exist"):
            await article_service.create_article(
                mock_db_session, admin_context, category_id=42, slug="hello", title="Hello"
            )

        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_author_must_exist(self, mock_db_session, admin_context, make_category, result_returning):
        mock_db_session.execute = AsyncMock(
            side_effect=[result_returning(make_category(1)), result_returning(None), result_returning(None)]
        )

        with pytest.raises(ValidationError, match="Author 7 does not exist"):
            await article_service.create_article(
                mock_db_session, admin_context, category_id=1, slug="hello", title="Hello", author_id=7
            )

        mock_db_session.add.assert_not_called()


class TestUpdateArticle:
    @pytest.mark.asyncio
    async def test_edit_in_place(self, mock_db_session, writer_context, make_article, result_returning):
        article = make_article(5, category_id=1)
        mock_db_session.execute = AsyncMock(return_value=result_returning(article))

        updated = await article_service.update_article(mock_db_session, writer_context, 5, title="New title")

        assert updated is article
        assert article.title == "New title"
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_edit_denied(self, mock_db_session, writer_context, make_article, result_returning):
        article = make_article(5, category_id=2)
        mock_db_session.execute = AsyncMock(return_value=result_returning(article))

        with pytest.raises(PermissionDenied):
            await article_service.update_article(mock_db_session, writer_context, 5, title="Nope")

        assert article.title == "Article 5"

    @pytest.mark.asyncio
    async def test_move_needs_add_on_target(self, mock_db_session, writer_context, make_article, result_returning):
        article = make_article(5, category_id=1)
        mock_db_session.execute = AsyncMock(return_value=result_returning(article))

        await article_service.update_article(mock_db_session, writer_context, 5, category_id=2)
        assert article.category_id == 2

    @pytest.mark.asyncio
    async def test_move_denied_without_add_on_target(
        self, mock_db_session, writer_context, make_article, result_returning
    ):
        article = make_article(5, category_id=1)
        mock_db_session.execute = AsyncMock(return_value=result_returning(article))

        with pytest.raises(PermissionDenied):
            await article_service.update_article(mock_db_session, writer_context, 5, category_id=3)

        assert article.category_id == 1
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_move_to_missing_category(
        self, mock_db_session, admin_context, make_article, result_returning
    ):
        article = make_article(5, category_id=1)
        mock_db_session.execute = AsyncMock(side_effect=[result_returning(article), result_returning(None)])

        with pytest.raises(ValidationError, match="does not exist"):
            await article_service.update_article(mock_db_session, admin_context, 5, category_id=99)

        assert article.category_id == 1

    @pytest.mark.asyncio
    async def test_missing_article(self, mock_db_session, writer_context):
        assert await article_service.update_article(mock_db_session, writer_context, 404, title="x") is None

    @pytest.mark.asyncio
    async def test_unknown_field(self, mock_db_session, admin_context):
        with pytest.raises(ValueError):
            await article_service.update_article(mock_db_session, admin_context, 1, category="sports")


class TestDeleteArticle:
    @pytest.mark.asyncio
    async def test_delete_with_permission(self, mock_db_session, writer_context, make_article, result_returning):
        article = make_article(5, category_id=1)
        mock_db_session.execute = AsyncMock(return_value=result_returning(article))

        assert await article_service.delete_article(mock_db_session, writer_context, 5) is True
        mock_db_session.delete.assert_awaited_once_with(article)

    @pytest.mark.asyncio
    async def test_delete_denied(self, mock_db_session, writer_context, make_article, result_returning):
        mock_db_session.execute = AsyncMock(return_value=result_returning(make_article(5, category_id=2)))

        with pytest.raises(PermissionDenied):
            await article_service.delete_article(mock_db_session, writer_context, 5)

        mock_db_session.delete.assert_not_awaited()
