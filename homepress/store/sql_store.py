"""SQLAlchemy implementation of the store interfaces.

Each call opens its own session from the session maker, so the concurrent
rank writes issued by a reorder never share a session.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from homepress.db.services import (
    article_service,
    category_service,
    permission_service,
    section_service,
)
from homepress.lib.exceptions import StoreError
from homepress.store.base import CategoryOrder, EntityType, check_rank_field

logger = logging.getLogger(__name__)

_RANK_SERVICES = {
    "category": category_service,
    "section": section_service,
}


class SQLAlchemyStore:
    """OrderingStore, ContentSource and SectionStore over an async session maker."""

    def __init__(self, session_maker: Callable[[], AsyncSession]) -> None:
        self._session_maker = session_maker

    async def _read(self, what: str, fn, *args, **kwargs):
        try:
            async with self._session_maker() as session:
                return await fn(session, *args, **kwargs)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to fetch {what}") from e

    async def persist_rank(
        self, entity_type: EntityType, entity_id: int, field: str, value: int
    ) -> bool:
        check_rank_field(entity_type, field)
        writer = _RANK_SERVICES[entity_type].set_rank
        try:
            async with self._session_maker() as session:
                updated = await writer(session, entity_id, field, value)
        except SQLAlchemyError:
            logger.warning(
                "Failed to persist %s#%s.%s", entity_type, entity_id, field, exc_info=True
            )
            return False

        if not updated:
            logger.warning("%s#%s no longer exists; rank not written", entity_type, entity_id)
        return updated

    async def fetch_categories(self, order_by: CategoryOrder = "order_index"):
        return await self._read("categories", category_service.list_categories, order_by=order_by)

    async def fetch_category(self, category_id: int):
        return await self._read("category", category_service.get_category_by_id, category_id)

    async def fetch_articles(self):
        return await self._read("articles", article_service.list_articles)

    async def fetch_sections(self, active_only: bool = False):
        return await self._read("sections", section_service.list_sections, active_only=active_only)

    async def fetch_user(self, user_id: int):
        return await self._read("user", permission_service.get_user_by_id, user_id)

    async def fetch_permissions(self, user_id: int):
        return await self._read("permissions", permission_service.get_user_permissions, user_id)

    async def _write(self, what: str, fn, *args):
        try:
            async with self._session_maker() as session:
                return await fn(session, *args)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to {what}") from e

    async def create_section(self, values: dict[str, Any]):
        return await self._write("create section", section_service.create_section, values)

    async def update_section(self, section_id: int, values: dict[str, Any]):
        return await self._write("update section", section_service.update_section, section_id, values)

    async def delete_section(self, section_id: int) -> bool:
        return await self._write("delete section", section_service.delete_section, section_id)
