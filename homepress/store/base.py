"""Interfaces between the homepage engine and its backing store."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Literal, Protocol, runtime_checkable

if TYPE_CHECKING:
    from homepress.db.models import Article, Category, HomepageSection, User, UserPermission

EntityType = Literal["category", "section"]

CategoryOrder = Literal["order_index", "display_order", "id", "name"]

# Rank fields each entity type may have written through persist_rank
RANK_FIELDS: dict[str, frozenset[str]] = {
    "category": frozenset({"order_index", "display_order"}),
    "section": frozenset({"display_order"}),
}


def check_rank_field(entity_type: str, field: str) -> None:
    """Raise ValueError for a rank field the entity type does not have."""
    if field not in RANK_FIELDS.get(entity_type, frozenset()):
        raise ValueError(f"{field!r} is not a rank field of {entity_type!r}")


@runtime_checkable
class OrderingStore(Protocol):
    """Get/set of integer rank fields. No business logic."""

    async def persist_rank(
        self, entity_type: EntityType, entity_id: int, field: str, value: int
    ) -> bool:
        """Write one rank. Returns False when the write failed."""
        ...


@runtime_checkable
class ContentSource(Protocol):
    """Read-only collaborators. Failed reads raise StoreError."""

    async def fetch_categories(self, order_by: CategoryOrder = "order_index") -> Sequence[Category]:
        ...

    async def fetch_category(self, category_id: int) -> Category | None:
        ...

    async def fetch_articles(self) -> Sequence[Article]:
        """All articles, newest first."""
        ...

    async def fetch_sections(self, active_only: bool = False) -> Sequence[HomepageSection]:
        """Sections ascending by display_order."""
        ...

    async def fetch_user(self, user_id: int) -> User | None:
        ...

    async def fetch_permissions(self, user_id: int) -> Sequence[UserPermission]:
        ...


@runtime_checkable
class SectionStore(Protocol):
    """Section row writes. Failures propagate as exceptions."""

    async def create_section(self, values: dict[str, Any]) -> HomepageSection:
        ...

    async def update_section(self, section_id: int, values: dict[str, Any]) -> HomepageSection | None:
        ...

    async def delete_section(self, section_id: int) -> bool:
        ...
