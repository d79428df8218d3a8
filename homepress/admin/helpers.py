"""Shared helpers for admin controllers."""

from __future__ import annotations

from typing import Any

from litestar import Request
from litestar.exceptions import NotAuthorizedException

from homepress.auth.permissions import AdminContext
from homepress.store.base import ContentSource


async def get_admin_context(request: Request, store: ContentSource) -> AdminContext:
    """Build the acting user's context from the session.

    Raises:
        NotAuthorizedException: Without a session or for an unknown user.
    """
    user_id = request.session.get("user_id")
    if not user_id:
        raise NotAuthorizedException("Authentication required")

    user = await store.fetch_user(int(user_id))
    if not user:
        raise NotAuthorizedException("Invalid user session")

    permissions = [] if user.is_superadmin else list(await store.fetch_permissions(user.id))
    return AdminContext(user=user, permissions=permissions)


def serialize(obj: Any) -> dict[str, Any]:
    """Column values of a model as a JSON-friendly dict."""
    return obj.to_dict()
