"""Dashboard user service."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from homepress.auth.permissions import AdminContext
from homepress.db.models import User
from homepress.db.services.permission_service import get_user_by_id
from homepress.lib.exceptions import ValidationError


async def list_users(db_session: AsyncSession) -> list[User]:
    """List users, newest first."""
    result = await db_session.execute(select(User).order_by(User.created_at.desc(), User.id.desc()))
    return list(result.scalars().all())


async def get_user_by_username(db_session: AsyncSession, username: str) -> User | None:
    result = await db_session.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def ensure_unique_username(
    db_session: AsyncSession,
    username: str,
    user_id: int | None = None,
) -> None:
    existing = await get_user_by_username(db_session, username)
    if existing and existing.id != user_id:
        raise ValidationError(f"The username '{username}' is already taken")


async def create_user(
    db_session: AsyncSession,
    context: AdminContext,
    username: str,
    is_superadmin: bool = False,
) -> User:
    """Create a dashboard user. New users hold no category permissions.

    Raises:
        PermissionDenied: Unless the acting user is a superadmin.
        ValidationError: If the username is empty or taken.
    """
    context.require_superadmin()
    username = username.strip()
    if not username:
        raise ValidationError("A username is required")
    await ensure_unique_username(db_session, username)

    user = User(username=username, is_superadmin=is_superadmin)
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


async def update_user(
    db_session: AsyncSession,
    context: AdminContext,
    user_id: int,
    username: str | None = None,
    is_superadmin: bool | None = None,
) -> User | None:
    """Rename a user or change their superadmin flag.

    A superadmin cannot revoke their own superadmin flag.

    Returns:
        Updated User or None if not found
    """
    context.require_superadmin()
    user = await get_user_by_id(db_session, user_id)
    if not user:
        return None

    if is_superadmin is False and user.id == context.user.id:
        raise ValidationError("You cannot revoke your own superadmin access")

    if username is not None:
        username = username.strip()
        if not username:
            raise ValidationError("A username is required")
        if username != user.username:
            await ensure_unique_username(db_session, username, user_id=user.id)
        user.username = username
    if is_superadmin is not None:
        user.is_superadmin = is_superadmin

    await db_session.commit()
    await db_session.refresh(user)
    return user


async def delete_user(db_session: AsyncSession, context: AdminContext, user_id: int) -> bool:
    """Delete a user together with their permission rows.

    Returns:
        True if deleted, False if not found
    """
    context.require_superadmin()
    if user_id == context.user.id:
        raise ValidationError("You cannot delete your own account")

    user = await get_user_by_id(db_session, user_id)
    if not user:
        return False

    await db_session.delete(user)
    await db_session.commit()
    return True
