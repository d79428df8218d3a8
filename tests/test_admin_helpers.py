"""Tests for building the acting administrator's context."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from litestar.exceptions import NotAuthorizedException

from homepress.admin.helpers import get_admin_context


def make_request(session):
    request = MagicMock()
    request.session = session
    return request


@pytest.fixture
def store(superadmin, editor, editor_context):
    users = {1: superadmin, 2: editor}
    store = MagicMock()
    store.fetch_user = AsyncMock(side_effect=lambda user_id: users.get(user_id))
    store.fetch_permissions = AsyncMock(return_value=list(editor_context.permissions))
    return store


class TestGetAdminContext:
    @pytest.mark.asyncio
    async def test_requires_session(self, store):
        with pytest.raises(NotAuthorizedException):
            await get_admin_context(make_request({}), store)

    @pytest.mark.asyncio
    async def test_unknown_user(self, store):
        with pytest.raises(NotAuthorizedException):
            await get_admin_context(make_request({"user_id": 77}), store)

    @pytest.mark.asyncio
    async def test_superadmin_skips_permission_lookup(self, store):
        context = await get_admin_context(make_request({"user_id": 1}), store)

        assert context.is_superadmin is True
        assert context.permissions == []
        store.fetch_permissions.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_editor_gets_rows(self, store):
        context = await get_admin_context(make_request({"user_id": "2"}), store)

        assert context.can(1, "add") is True
        assert context.can(1, "edit") is False
        store.fetch_permissions.assert_awaited_once_with(2)
