"""Category administration: list, CRUD and the two orderings."""

from __future__ import annotations

from dataclasses import asdict

from litestar import Controller, Request, delete, get, post, put
from litestar.exceptions import NotFoundException
from sqlalchemy.ext.asyncio import AsyncSession

from homepress.admin.helpers import get_admin_context, serialize
from homepress.admin.schemas import CategoryData, CategoryReorderRequest, CategoryUpdate
from homepress.auth.permissions import filter_visible_categories
from homepress.categories.ordering import CategoryOrderManager
from homepress.db.services import category_service
from homepress.store.sql_store import SQLAlchemyStore


class CategoryAdminController(Controller):
    path = "/admin/categories"

    @get("/")
    async def list_categories(
        self, request: Request, store: SQLAlchemyStore, order_by: str = "id"
    ) -> list[dict]:
        """Categories the user can see, in the requested order."""
        ctx = await get_admin_context(request, store)
        if order_by not in ("id", "order_index", "display_order", "name"):
            order_by = "id"
        categories = await store.fetch_categories(order_by=order_by)
        visible = filter_visible_categories(ctx.user, ctx.permissions, categories)
        return [serialize(c) for c in visible]

    @post("/")
    async def create_category(
        self, request: Request, store: SQLAlchemyStore, db_session: AsyncSession, data: CategoryData
    ) -> dict:
        ctx = await get_admin_context(request, store)
        ctx.require_superadmin()
        category = await category_service.create_category(db_session, **asdict(data))
        return serialize(category)

    @put("/{category_id:int}")
    async def update_category(
        self,
        request: Request,
        store: SQLAlchemyStore,
        db_session: AsyncSession,
        category_id: int,
        data: CategoryUpdate,
    ) -> dict:
        ctx = await get_admin_context(request, store)
        ctx.require_superadmin()
        category = await category_service.update_category(db_session, category_id, **asdict(data))
        if not category:
            raise NotFoundException("Category not found")
        return serialize(category)

    @delete("/{category_id:int}")
    async def delete_category(
        self, request: Request, store: SQLAlchemyStore, db_session: AsyncSession, category_id: int
    ) -> None:
        """Delete a category together with its articles."""
        ctx = await get_admin_context(request, store)
        ctx.require_superadmin()
        if not await category_service.delete_category(db_session, category_id):
            raise NotFoundException("Category not found")

    @post("/reorder")
    async def reorder_categories(
        self, request: Request, store: SQLAlchemyStore, data: CategoryReorderRequest
    ) -> list[dict]:
        """Apply one drag move to the navigation or homepage ordering."""
        ctx = await get_admin_context(request, store)
        categories = await store.fetch_categories(order_by=data.field)
        manager = CategoryOrderManager(store, categories, sort_field=data.field)
        ordered = await manager.reorder(ctx, data.field, data.moved_id, data.from_index, data.to_index)
        return [serialize(c) for c in ordered]
