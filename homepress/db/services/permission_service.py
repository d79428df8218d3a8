"""User and capability-matrix service."""

from collections.abc import Iterable
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from homepress.auth.permissions import prune_permissions
from homepress.db.models import User, UserPermission


async def get_user_by_id(db_session: AsyncSession, user_id: int) -> User | None:
    result = await db_session.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_permissions(db_session: AsyncSession, user_id: int) -> list[UserPermission]:
    """Get a user's permission rows. No rows means no capability anywhere."""
    result = await db_session.execute(
        select(UserPermission)
        .where(UserPermission.user_id == user_id)
        .order_by(UserPermission.category_id.asc())
    )
    return list(result.scalars().all())


async def replace_user_permissions(
    db_session: AsyncSession,
    user_id: int,
    grants: Iterable[Any],
) -> list[UserPermission]:
    """Replace a user's whole permission matrix.

    All-false rows are never written.

    Returns:
        The rows now stored for the user
    """
    rows = [
        UserPermission(
            user_id=user_id,
            category_id=grant.category_id,
            can_add=grant.can_add,
            can_edit=grant.can_edit,
            can_delete=grant.can_delete,
        )
        for grant in prune_permissions(grants)
    ]

    await db_session.execute(delete(UserPermission).where(UserPermission.user_id == user_id))
    db_session.add_all(rows)
    await db_session.commit()
    return rows
