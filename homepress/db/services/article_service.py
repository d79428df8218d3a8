"""Article service. Every write is gated by the acting user's category rights."""

from datetime import datetime, UTC

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from homepress.auth.permissions import AdminContext
from homepress.db.models import Article
from homepress.db.services.author_service import get_author_by_id
from homepress.db.services.category_service import get_category_by_id
from homepress.lib.exceptions import ValidationError

# Columns set by create/update
ARTICLE_FIELDS = ("slug", "title", "excerpt", "content", "image", "type", "date", "is_exclusive", "author_id")


async def list_articles(db_session: AsyncSession) -> list[Article]:
    """All articles newest first; equal dates keep insertion order."""
    result = await db_session.execute(
        select(Article).order_by(Article.date.desc(), Article.id.asc())
    )
    return list(result.scalars().all())


async def get_article_by_id(db_session: AsyncSession, article_id: int) -> Article | None:
    result = await db_session.execute(select(Article).where(Article.id == article_id))
    return result.scalar_one_or_none()


async def get_article_by_slug(db_session: AsyncSession, slug: str) -> Article | None:
    result = await db_session.execute(select(Article).where(Article.slug == slug))
    return result.scalar_one_or_none()


async def ensure_unique_slug(
    db_session: AsyncSession,
    slug: str,
    article_id: int | None = None,
) -> None:
    """Raise ValidationError if another article already uses slug."""
    existing = await get_article_by_slug(db_session, slug)
    if existing and existing.id != article_id:
        raise ValidationError(f"The slug '{slug}' is already in use")


async def ensure_category_exists(db_session: AsyncSession, category_id: int) -> None:
    if await get_category_by_id(db_session, category_id) is None:
        raise ValidationError(f"Category {category_id} does not exist")


async def ensure_author_exists(db_session: AsyncSession, author_id: int | None) -> None:
    if author_id is not None and await get_author_by_id(db_session, author_id) is None:
        raise ValidationError(f"Author {author_id} does not exist")


async def create_article(
    db_session: AsyncSession,
    context: AdminContext,
    category_id: int,
    slug: str,
    title: str,
    excerpt: str = "",
    content: str = "",
    image: str | None = None,
    type: str = "article",
    date: datetime | None = None,
    is_exclusive: bool = False,
    author_id: int | None = None,
) -> Article:
    """Create an article in a category the user may add to.

    Raises:
        PermissionDenied: Without 'add' on the category.
        ValidationError: If the category or author does not exist, or the slug
            is taken.
    """
    context.require(category_id, "add")
    await ensure_category_exists(db_session, category_id)
    await ensure_unique_slug(db_session, slug)
    await ensure_author_exists(db_session, author_id)

    article = Article(
        category_id=category_id,
        slug=slug,
        title=title,
        excerpt=excerpt,
        content=content,
        image=image,
        type=type,
        date=date or datetime.now(UTC),
        is_exclusive=is_exclusive,
        author_id=author_id,
    )
    db_session.add(article)
    await db_session.commit()
    await db_session.refresh(article)
    return article


async def update_article(
    db_session: AsyncSession,
    context: AdminContext,
    article_id: int,
    category_id: int | None = None,
    **fields,
) -> Article | None:
    """Update an article.

    Needs 'edit' on the current category, and 'add' on the target category
    when the article moves.

    Returns:
        Updated Article or None if not found
    """
    unknown = set(fields) - set(ARTICLE_FIELDS)
    if unknown:
        raise ValueError(f"Unknown article field(s): {', '.join(sorted(unknown))}")

    article = await get_article_by_id(db_session, article_id)
    if not article:
        return None

    context.require(article.category_id, "edit")
    if category_id is not None and category_id != article.category_id:
        context.require(category_id, "add")
        await ensure_category_exists(db_session, category_id)

    slug = fields.get("slug")
    if slug is not None and slug != article.slug:
        await ensure_unique_slug(db_session, slug, article_id=article.id)

    author_id = fields.get("author_id")
    if author_id is not None and author_id != article.author_id:
        await ensure_author_exists(db_session, author_id)

    if category_id is not None:
        article.category_id = category_id
    for key, value in fields.items():
        if value is not None:
            setattr(article, key, value)

    await db_session.commit()
    await db_session.refresh(article)
    return article


async def delete_article(
    db_session: AsyncSession,
    context: AdminContext,
    article_id: int,
) -> bool:
    article = await get_article_by_id(db_session, article_id)
    if not article:
        return False

    context.require(article.category_id, "delete")

    await db_session.delete(article)
    await db_session.commit()
    return True
