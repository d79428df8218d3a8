"""Tests for dashboard user management."""

from unittest.mock import AsyncMock

import pytest

from homepress.db.models import User
from homepress.db.services import user_service
from homepress.lib.exceptions import PermissionDenied, ValidationError


class TestCreateUser:
    @pytest.mark.asyncio
    async def test_creates_user(self, mock_db_session, admin_context):
        user = await user_service.create_user(mock_db_session, admin_context, " writer ", is_superadmin=False)

        assert user.username == "writer"
        assert user.is_superadmin is False
        mock_db_session.add.assert_called_once_with(user)

    @pytest.mark.asyncio
    async def test_requires_superadmin(self, mock_db_session, editor_context):
        with pytest.raises(PermissionDenied):
            await user_service.create_user(mock_db_session, editor_context, "writer")

        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_username_taken(self, mock_db_session, admin_context, result_returning):
        mock_db_session.execute = AsyncMock(return_value=result_returning(User(id=5, username="writer")))

        with pytest.raises(ValidationError, match="already taken"):
            await user_service.create_user(mock_db_session, admin_context, "writer")

    @pytest.mark.asyncio
    async def test_username_required(self, mock_db_session, admin_context):
        with pytest.raises(ValidationError):
            await user_service.create_user(mock_db_session, admin_context, "   ")


class TestUpdateUser:
    @pytest.mark.asyncio
    async def test_promote(self, mock_db_session, admin_context, editor, result_returning):
        mock_db_session.execute = AsyncMock(return_value=result_returning(editor))

        user = await user_service.update_user(mock_db_session, admin_context, editor.id, is_superadmin=True)

        assert user.is_superadmin is True
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_cannot_revoke_own_access(self, mock_db_session, admin_context, superadmin, result_returning):
        mock_db_session.execute = AsyncMock(return_value=result_returning(superadmin))

        with pytest.raises(ValidationError):
            await user_service.update_user(mock_db_session, admin_context, superadmin.id, is_superadmin=False)

        assert superadmin.is_superadmin is True

    @pytest.mark.asyncio
    async def test_missing_user(self, mock_db_session, admin_context):
        assert await user_service.update_user(mock_db_session, admin_context, 404, username="x") is None


class TestDeleteUser:
    @pytest.mark.asyncio
    async def test_delete(self, mock_db_session, admin_context, editor, result_returning):
        mock_db_session.execute = AsyncMock(return_value=result_returning(editor))

        assert await user_service.delete_user(mock_db_session, admin_context, editor.id) is True
        mock_db_session.delete.assert_awaited_once_with(editor)

    @pytest.mark.asyncio
    async def test_cannot_delete_self(self, mock_db_session, admin_context, superadmin):
        with pytest.raises(ValidationError):
            await user_service.delete_user(mock_db_session, admin_context, superadmin.id)

        mock_db_session.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_requires_superadmin(self, mock_db_session, editor_context):
        with pytest.raises(PermissionDenied):
            await user_service.delete_user(mock_db_session, editor_context, 1)
