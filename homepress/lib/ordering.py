"""Splice-and-re-rank helpers shared by category and section reordering.

A move removes the element at ``from_index`` and reinserts it at
``to_index`` (list splice, not swap). Afterwards every element's rank is its
new zero-based position, and all ``n`` ranks are written back.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, TypeVar

from homepress.lib.exceptions import FailedWrite, PersistenceFailure, ValidationError

if TYPE_CHECKING:
    from homepress.store.base import EntityType, OrderingStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


def move_item(items: Sequence[T], from_index: int, to_index: int) -> list[T]:
    """Return a new list with the element at from_index moved to to_index.

    Raises:
        ValidationError: If either index is outside the list.
    """
    size = len(items)
    if not (0 <= from_index < size) or not (0 <= to_index < size):
        raise ValidationError(
            f"Move {from_index} -> {to_index} is out of range for {size} item(s)"
        )

    moved = list(items)
    item = moved.pop(from_index)
    moved.insert(to_index, item)
    return moved


def check_moved_item(items: Sequence[Any], moved_id: int, from_index: int) -> None:
    """Ensure the caller's view matches ours before splicing.

    Raises:
        ValidationError: If the element at from_index is not moved_id.
    """
    if not (0 <= from_index < len(items)) or items[from_index].id != moved_id:
        raise ValidationError(
            f"Item {moved_id} is not at position {from_index}; refresh and try again"
        )


def apply_ranks(items: Sequence[Any], field: str) -> list[tuple[int, int]]:
    """Set each item's rank field to its position. Returns (id, rank) pairs."""
    assignments = []
    for rank, item in enumerate(items):
        setattr(item, field, rank)
        assignments.append((item.id, rank))
    return assignments


async def persist_ranks(
    store: OrderingStore,
    entity_type: EntityType,
    field: str,
    assignments: Sequence[tuple[int, int]],
) -> None:
    """Write every rank concurrently and report failures as one error.

    Writes are independent; completion order is not guaranteed and nothing
    is rolled back when some of them fail.

    Raises:
        PersistenceFailure: If any write failed.
    """
    results = await asyncio.gather(
        *(
            store.persist_rank(entity_type, entity_id, field, value)
            for entity_id, value in assignments
        ),
        return_exceptions=True,
    )

    failures = []
    for (entity_id, value), result in zip(assignments, results):
        if result is True:
            continue
        if isinstance(result, BaseException):
            logger.warning(
                "Rank write %s#%s.%s=%s raised",
                entity_type,
                entity_id,
                field,
                value,
                exc_info=result,
            )
        else:
            logger.warning(
                "Rank write %s#%s.%s=%s failed", entity_type, entity_id, field, value
            )
        failures.append(FailedWrite(entity_type, entity_id, field, value))

    if failures:
        raise PersistenceFailure(
            f"Saving the new order failed for {len(failures)} of {len(assignments)} item(s).",
            failures,
        )
