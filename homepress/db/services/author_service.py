"""Author service for CRUD operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from homepress.db.models import Author


async def list_authors(db_session: AsyncSession) -> list[Author]:
    """List authors alphabetically by name."""
    result = await db_session.execute(select(Author).order_by(Author.name.asc(), Author.id.asc()))
    return list(result.scalars().all())


async def get_author_by_id(db_session: AsyncSession, author_id: int) -> Author | None:
    result = await db_session.execute(select(Author).where(Author.id == author_id))
    return result.scalar_one_or_none()


async def create_author(
    db_session: AsyncSession,
    name: str,
    bio: str = "",
    image: str | None = None,
) -> Author:
    author = Author(name=name, bio=bio, image=image)
    db_session.add(author)
    await db_session.commit()
    await db_session.refresh(author)
    return author


async def update_author(
    db_session: AsyncSession,
    author_id: int,
    name: str | None = None,
    bio: str | None = None,
    image: str | None = None,
) -> Author | None:
    """Update an author.

    Returns:
        Updated Author object or None if not found
    """
    author = await get_author_by_id(db_session, author_id)
    if not author:
        return None

    if name is not None:
        author.name = name
    if bio is not None:
        author.bio = bio
    if image is not None:
        author.image = image

    await db_session.commit()
    await db_session.refresh(author)
    return author


async def delete_author(db_session: AsyncSession, author_id: int) -> bool:
    """Delete an author. Their articles stay, with no author.

    Returns:
        True if deleted, False if not found
    """
    author = await get_author_by_id(db_session, author_id)
    if not author:
        return False

    await db_session.delete(author)
    await db_session.commit()
    return True
