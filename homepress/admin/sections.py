"""Homepage layout administration."""

from __future__ import annotations

from litestar import Controller, Request, delete, get, post
from litestar.exceptions import NotFoundException

from homepress.admin.helpers import get_admin_context, serialize
from homepress.admin.schemas import ReorderRequest, SectionData
from homepress.homepage.registry import SectionRegistry
from homepress.store.sql_store import SQLAlchemyStore


async def _load_registry(store: SQLAlchemyStore) -> SectionRegistry:
    registry = SectionRegistry(store, store, store)
    await registry.load()
    return registry


class SectionAdminController(Controller):
    path = "/admin/sections"

    @get("/")
    async def list_sections(self, request: Request, store: SQLAlchemyStore) -> dict:
        """All sections, inactive ones included, in display order."""
        ctx = await get_admin_context(request, store)
        ctx.require_superadmin()
        registry = await _load_registry(store)
        return {
            "is_fallback": registry.is_fallback,
            "sections": [serialize(s) for s in registry.sections],
        }

    @post("/")
    async def create_section(self, request: Request, store: SQLAlchemyStore, data: SectionData) -> dict:
        ctx = await get_admin_context(request, store)
        registry = await _load_registry(store)
        section = await registry.create(ctx, data.to_descriptor())
        return serialize(section)

    @post("/reorder")
    async def reorder_sections(self, request: Request, store: SQLAlchemyStore, data: ReorderRequest) -> list[dict]:
        ctx = await get_admin_context(request, store)
        registry = await _load_registry(store)
        sections = await registry.reorder(ctx, data.moved_id, data.from_index, data.to_index)
        return [serialize(s) for s in sections]

    @post("/{section_id:int}/toggle")
    async def toggle_section(self, request: Request, store: SQLAlchemyStore, section_id: int) -> dict:
        ctx = await get_admin_context(request, store)
        registry = await _load_registry(store)
        section = await registry.toggle_active(ctx, section_id)
        if section is None:
            raise NotFoundException("Section not found")
        return serialize(section)

    @delete("/{section_id:int}")
    async def delete_section(self, request: Request, store: SQLAlchemyStore, section_id: int) -> None:
        ctx = await get_admin_context(request, store)
        registry = await _load_registry(store)
        if not await registry.delete(ctx, section_id):
            raise NotFoundException("Section not found")
