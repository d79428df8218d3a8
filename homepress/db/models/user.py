from datetime import datetime, UTC
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from homepress.db.base import Base

if TYPE_CHECKING:
    from homepress.db.models.user_permission import UserPermission


class User(Base):
    """Dashboard user. Superadmins bypass per-category permissions."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    is_superadmin: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )

    permissions: Mapped[list["UserPermission"]] = relationship(
        "UserPermission",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
