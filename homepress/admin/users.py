"""User administration: accounts and their permission matrix."""

from __future__ import annotations

from dataclasses import asdict

from litestar import Controller, Request, delete, get, post, put
from litestar.exceptions import NotFoundException
from sqlalchemy.ext.asyncio import AsyncSession

from homepress.admin.helpers import get_admin_context, serialize
from homepress.admin.schemas import PermissionCell, UserData, UserUpdate
from homepress.db.services import permission_service, user_service
from homepress.store.sql_store import SQLAlchemyStore


class UserAdminController(Controller):
    path = "/admin/users"

    @get("/")
    async def list_users(self, request: Request, store: SQLAlchemyStore, db_session: AsyncSession) -> list[dict]:
        ctx = await get_admin_context(request, store)
        ctx.require_superadmin()
        return [serialize(u) for u in await user_service.list_users(db_session)]

    @post("/")
    async def create_user(
        self, request: Request, store: SQLAlchemyStore, db_session: AsyncSession, data: UserData
    ) -> dict:
        ctx = await get_admin_context(request, store)
        user = await user_service.create_user(db_session, ctx, **asdict(data))
        return serialize(user)

    @put("/{user_id:int}")
    async def update_user(
        self,
        request: Request,
        store: SQLAlchemyStore,
        db_session: AsyncSession,
        user_id: int,
        data: UserUpdate,
    ) -> dict:
        ctx = await get_admin_context(request, store)
        user = await user_service.update_user(db_session, ctx, user_id, **asdict(data))
        if not user:
            raise NotFoundException("User not found")
        return serialize(user)

    @delete("/{user_id:int}")
    async def delete_user(
        self, request: Request, store: SQLAlchemyStore, db_session: AsyncSession, user_id: int
    ) -> None:
        """Delete a user and their permission rows."""
        ctx = await get_admin_context(request, store)
        if not await user_service.delete_user(db_session, ctx, user_id):
            raise NotFoundException("User not found")

    @get("/{user_id:int}/permissions")
    async def get_permissions(self, request: Request, store: SQLAlchemyStore, user_id: int) -> list[dict]:
        ctx = await get_admin_context(request, store)
        ctx.require_superadmin()
        return [serialize(p) for p in await store.fetch_permissions(user_id)]

    @put("/{user_id:int}/permissions")
    async def save_permissions(
        self,
        request: Request,
        store: SQLAlchemyStore,
        db_session: AsyncSession,
        user_id: int,
        data: list[PermissionCell],
    ) -> list[dict]:
        """Replace the user's matrix; all-false rows are dropped."""
        ctx = await get_admin_context(request, store)
        ctx.require_superadmin()
        if not await permission_service.get_user_by_id(db_session, user_id):
            raise NotFoundException("User not found")
        rows = await permission_service.replace_user_permissions(db_session, user_id, data)
        return [serialize(r) for r in rows]
