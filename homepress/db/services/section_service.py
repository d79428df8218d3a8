"""Homepage section service."""

from typing import Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from homepress.db.models import HomepageSection
from homepress.store.base import check_rank_field

# Columns a section write may touch
SECTION_FIELDS = frozenset({"type", "title", "category_id", "display_order", "is_active", "settings"})


def _clean(values: dict[str, Any]) -> dict[str, Any]:
    unknown = set(values) - SECTION_FIELDS
    if unknown:
        raise ValueError(f"Unknown section field(s): {', '.join(sorted(unknown))}")
    return values


async def list_sections(
    db_session: AsyncSession,
    active_only: bool = False,
) -> list[HomepageSection]:
    """List sections ascending by display_order, ties by id."""
    query = select(HomepageSection)
    if active_only:
        query = query.where(HomepageSection.is_active.is_(True))
    query = query.order_by(HomepageSection.display_order.asc(), HomepageSection.id.asc())

    result = await db_session.execute(query)
    return list(result.scalars().all())


async def get_section_by_id(db_session: AsyncSession, section_id: int) -> HomepageSection | None:
    result = await db_session.execute(select(HomepageSection).where(HomepageSection.id == section_id))
    return result.scalar_one_or_none()


async def create_section(db_session: AsyncSession, values: dict[str, Any]) -> HomepageSection:
    section = HomepageSection(**_clean(values))
    db_session.add(section)
    await db_session.commit()
    await db_session.refresh(section)
    await db_session.refresh(section, attribute_names=["category"])
    return section


async def update_section(
    db_session: AsyncSession,
    section_id: int,
    values: dict[str, Any],
) -> HomepageSection | None:
    """Apply column updates.

    Returns:
        Updated section or None if not found
    """
    section = await get_section_by_id(db_session, section_id)
    if not section:
        return None

    for key, value in _clean(values).items():
        setattr(section, key, value)

    await db_session.commit()
    await db_session.refresh(section)
    await db_session.refresh(section, attribute_names=["category"])
    return section


async def delete_section(db_session: AsyncSession, section_id: int) -> bool:
    """Delete a section. Remaining display_order values are left as they are."""
    section = await get_section_by_id(db_session, section_id)
    if not section:
        return False

    await db_session.delete(section)
    await db_session.commit()
    return True


async def set_rank(db_session: AsyncSession, section_id: int, field: str, value: int) -> bool:
    check_rank_field("section", field)
    result = await db_session.execute(
        update(HomepageSection).where(HomepageSection.id == section_id).values({field: value})
    )
    await db_session.commit()
    return result.rowcount > 0
