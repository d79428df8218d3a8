from typing import TYPE_CHECKING

from sqlalchemy import JSON, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from homepress.db.base import Base

if TYPE_CHECKING:
    from homepress.db.models.article import Article


class Category(Base):
    """Article category with two independent rank fields."""

    __tablename__ = "categories"

    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    topics: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    # Top navigation order (read right-to-left)
    order_index: Mapped[int] = mapped_column(Integer, default=0, nullable=False, index=True)
    # Homepage grouping order
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False, index=True)

    articles: Mapped[list["Article"]] = relationship(
        "Article",
        back_populates="category",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
