"""Category service for CRUD and rank writes."""

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from homepress.db.models import Category
from homepress.store.base import CategoryOrder, check_rank_field


def parse_topics(raw: str | list[str] | None) -> list[str]:
    """Normalize topics from a comma-separated string or a list."""
    if raw is None:
        return []
    items = raw.split(",") if isinstance(raw, str) else raw
    return [t.strip() for t in items if t and t.strip()]


async def list_categories(
    db_session: AsyncSession,
    order_by: CategoryOrder = "order_index",
) -> list[Category]:
    """List all categories.

    Args:
        db_session: Database session
        order_by: "order_index" (navigation), "display_order" (homepage),
            "id" or "name"

    Returns:
        List of Category objects
    """
    column = getattr(Category, order_by)
    result = await db_session.execute(select(Category).order_by(column.asc(), Category.id.asc()))
    return list(result.scalars().all())


async def get_category_by_id(db_session: AsyncSession, category_id: int) -> Category | None:
    result = await db_session.execute(select(Category).where(Category.id == category_id))
    return result.scalar_one_or_none()


async def count_categories(db_session: AsyncSession) -> int:
    result = await db_session.execute(select(func.count()).select_from(Category))
    return result.scalar_one()


async def create_category(
    db_session: AsyncSession,
    slug: str,
    name: str,
    description: str = "",
    image: str | None = None,
    topics: str | list[str] | None = None,
) -> Category:
    """Create a category at the end of both orderings.

    Returns:
        Created Category object
    """
    position = await count_categories(db_session)
    category = Category(
        slug=slug,
        name=name,
        description=description,
        image=image,
        topics=parse_topics(topics),
        order_index=position,
        display_order=position,
    )
    db_session.add(category)
    await db_session.commit()
    await db_session.refresh(category)
    return category


async def update_category(
    db_session: AsyncSession,
    category_id: int,
    slug: str | None = None,
    name: str | None = None,
    description: str | None = None,
    image: str | None = None,
    topics: str | list[str] | None = None,
) -> Category | None:
    """Update a category's content fields. Ranks are changed only by reordering.

    Returns:
        Updated Category object or None if not found
    """
    category = await get_category_by_id(db_session, category_id)
    if not category:
        return None

    if slug is not None:
        category.slug = slug
    if name is not None:
        category.name = name
    if description is not None:
        category.description = description
    if image is not None:
        category.image = image
    if topics is not None:
        category.topics = parse_topics(topics)

    await db_session.commit()
    await db_session.refresh(category)
    return category


async def delete_category(db_session: AsyncSession, category_id: int) -> bool:
    """Delete a category and, by cascade, its articles.

    Returns:
        True if deleted, False if not found
    """
    category = await get_category_by_id(db_session, category_id)
    if not category:
        return False

    await db_session.delete(category)
    await db_session.commit()
    return True


async def set_rank(
    db_session: AsyncSession,
    category_id: int,
    field: str,
    value: int,
) -> bool:
    """Write one rank field.

    Returns:
        True if a row was updated, False if the category no longer exists
    """
    check_rank_field("category", field)
    result = await db_session.execute(
        update(Category).where(Category.id == category_id).values({field: value})
    )
    await db_session.commit()
    return result.rowcount > 0
