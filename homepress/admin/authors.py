"""Author administration."""

from __future__ import annotations

from dataclasses import asdict

from litestar import Controller, Request, delete, get, post, put
from litestar.exceptions import NotFoundException
from sqlalchemy.ext.asyncio import AsyncSession

from homepress.admin.helpers import get_admin_context, serialize
from homepress.admin.schemas import AuthorData, AuthorUpdate
from homepress.db.services import author_service
from homepress.store.sql_store import SQLAlchemyStore


class AuthorAdminController(Controller):
    path = "/admin/authors"

    @get("/")
    async def list_authors(self, request: Request, store: SQLAlchemyStore, db_session: AsyncSession) -> list[dict]:
        await get_admin_context(request, store)
        return [serialize(a) for a in await author_service.list_authors(db_session)]

    @post("/")
    async def create_author(
        self, request: Request, store: SQLAlchemyStore, db_session: AsyncSession, data: AuthorData
    ) -> dict:
        ctx = await get_admin_context(request, store)
        ctx.require_superadmin()
        author = await author_service.create_author(db_session, **asdict(data))
        return serialize(author)

    @put("/{author_id:int}")
    async def update_author(
        self,
        request: Request,
        store: SQLAlchemyStore,
        db_session: AsyncSession,
        author_id: int,
        data: AuthorUpdate,
    ) -> dict:
        ctx = await get_admin_context(request, store)
        ctx.require_superadmin()
        author = await author_service.update_author(db_session, author_id, **asdict(data))
        if not author:
            raise NotFoundException("Author not found")
        return serialize(author)

    @delete("/{author_id:int}")
    async def delete_author(
        self, request: Request, store: SQLAlchemyStore, db_session: AsyncSession, author_id: int
    ) -> None:
        """Delete an author; their articles lose the byline."""
        ctx = await get_admin_context(request, store)
        ctx.require_superadmin()
        if not await author_service.delete_author(db_session, author_id):
            raise NotFoundException("Author not found")
