"""Navigation order and homepage order over the same set of categories.

Both orderings live on the category row (``order_index`` and
``display_order``). A reorder must splice a list sorted by the field being
reordered; splicing a list sorted by the other field would silently rewrite
the untouched ordering. The manager therefore tracks which field its view is
sorted by and re-sorts before every reorder against a different field.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Literal

from homepress.auth.permissions import AdminContext
from homepress.lib.ordering import apply_ranks, check_moved_item, move_item, persist_ranks
from homepress.store.base import OrderingStore

logger = logging.getLogger(__name__)

RankField = Literal["order_index", "display_order"]
SortField = Literal["order_index", "display_order", "id"]

RANK_FIELDS: tuple[str, ...] = ("order_index", "display_order")


def sort_categories(categories: Iterable[Any], field: SortField) -> list[Any]:
    """Sort by a rank field (missing ranks count as 0), ties by id."""
    return sorted(categories, key=lambda c: (getattr(c, field) or 0, c.id))


class CategoryOrderManager:
    """An administrator's view of the categories and the moves made in it."""

    def __init__(
        self,
        store: OrderingStore,
        categories: Iterable[Any],
        sort_field: SortField = "order_index",
    ) -> None:
        self._store = store
        self._sort_field: SortField = sort_field
        self._categories = sort_categories(categories, sort_field)

    @property
    def sort_field(self) -> SortField:
        return self._sort_field

    @property
    def categories(self) -> list[Any]:
        return list(self._categories)

    def switch_view(self, field: SortField) -> list[Any]:
        """Re-sort the view by field. Nothing is persisted."""
        self._categories = sort_categories(self._categories, field)
        self._sort_field = field
        return self.categories

    async def reorder(
        self,
        context: AdminContext,
        field: RankField,
        moved_id: int,
        from_index: int,
        to_index: int,
    ) -> list[Any]:
        """Move a category within the ordering for field and persist all ranks.

        Returns:
            The categories in their new order

        Raises:
            PermissionDenied: Unless the user is a superadmin.
            ValidationError: If the indexes don't match the current view.
            PersistenceFailure: If any rank write failed. The local view keeps
                the new order; re-fetch to resynchronize.
        """
        context.require_superadmin()
        if field not in RANK_FIELDS:
            raise ValueError(f"{field!r} is not a category rank field")

        if self._sort_field != field:
            self.switch_view(field)

        check_moved_item(self._categories, moved_id, from_index)
        if from_index == to_index:
            return self.categories

        self._categories = move_item(self._categories, from_index, to_index)
        assignments = apply_ranks(self._categories, field)
        logger.info("Moving category #%s in %s from %s to %s", moved_id, field, from_index, to_index)
        await persist_ranks(self._store, "category", field, assignments)
        return self.categories
