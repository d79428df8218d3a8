"""Article administration, scoped by the user's category permissions."""

from __future__ import annotations

from dataclasses import asdict

from litestar import Controller, Request, delete, get, post, put
from litestar.exceptions import NotFoundException
from sqlalchemy.ext.asyncio import AsyncSession

from homepress.admin.helpers import get_admin_context, serialize
from homepress.admin.schemas import ArticleData, ArticleUpdate
from homepress.auth.permissions import can_add_any, filter_visible_articles
from homepress.db.services import article_service
from homepress.store.sql_store import SQLAlchemyStore


class ArticleAdminController(Controller):
    path = "/admin/articles"

    @get("/")
    async def list_articles(self, request: Request, store: SQLAlchemyStore) -> dict:
        """Articles in categories the user holds a permission row for."""
        ctx = await get_admin_context(request, store)
        articles = filter_visible_articles(ctx.user, ctx.permissions, await store.fetch_articles())
        return {
            "can_add": can_add_any(ctx.user, ctx.permissions),
            "articles": [
                {
                    **serialize(a),
                    "can_edit": ctx.can(a.category_id, "edit"),
                    "can_delete": ctx.can(a.category_id, "delete"),
                }
                for a in articles
            ],
        }

    @post("/")
    async def create_article(
        self, request: Request, store: SQLAlchemyStore, db_session: AsyncSession, data: ArticleData
    ) -> dict:
        ctx = await get_admin_context(request, store)
        article = await article_service.create_article(db_session, ctx, **asdict(data))
        return serialize(article)

    @put("/{article_id:int}")
    async def update_article(
        self,
        request: Request,
        store: SQLAlchemyStore,
        db_session: AsyncSession,
        article_id: int,
        data: ArticleUpdate,
    ) -> dict:
        ctx = await get_admin_context(request, store)
        article = await article_service.update_article(db_session, ctx, article_id, **asdict(data))
        if not article:
            raise NotFoundException("Article not found")
        return serialize(article)

    @delete("/{article_id:int}")
    async def delete_article(
        self, request: Request, store: SQLAlchemyStore, db_session: AsyncSession, article_id: int
    ) -> None:
        ctx = await get_admin_context(request, store)
        if not await article_service.delete_article(db_session, ctx, article_id):
            raise NotFoundException("Article not found")
