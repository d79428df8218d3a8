from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from homepress.db.base import Base


class Author(Base):
    __tablename__ = "authors"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    bio: Mapped[str] = mapped_column(Text, nullable=False, default="")
    image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
