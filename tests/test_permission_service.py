"""Tests for replacing a user's capability matrix."""

import pytest

from homepress.auth.permissions import PermissionGrant
from homepress.db.services import permission_service


class TestReplaceUserPermissions:
    @pytest.mark.asyncio
    async def test_replaces_with_pruned_rows(self, mock_db_session):
        grants = [
            PermissionGrant(1, can_add=True),
            PermissionGrant(2),
            PermissionGrant(3, can_edit=True, can_delete=True),
        ]

        rows = await permission_service.replace_user_permissions(mock_db_session, 2, grants)

        assert [(r.user_id, r.category_id) for r in rows] == [(2, 1), (2, 3)]
        assert (rows[1].can_add, rows[1].can_edit, rows[1].can_delete) == (False, True, True)
        mock_db_session.execute.assert_awaited_once()
        mock_db_session.add_all.assert_called_once_with(rows)
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_all_false_matrix_clears_user(self, mock_db_session):
        rows = await permission_service.replace_user_permissions(mock_db_session, 2, [PermissionGrant(1)])

        assert rows == []
        mock_db_session.add_all.assert_called_once_with([])


class TestGetUserPermissions:
    @pytest.mark.asyncio
    async def test_returns_rows(self, mock_db_session, editor_context):
        mock_db_session.execute.return_value.scalars.return_value.all.return_value = list(editor_context.permissions)

        rows = await permission_service.get_user_permissions(mock_db_session, 2)

        assert [r.category_id for r in rows] == [1]
