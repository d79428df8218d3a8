"""Request bodies accepted by the admin API."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal


@dataclass
class ReorderRequest:
    moved_id: int
    from_index: int
    to_index: int


@dataclass
class CategoryReorderRequest(ReorderRequest):
    field: Literal["order_index", "display_order"] = "order_index"


@dataclass
class CategoryData:
    name: str
    slug: str
    description: str = ""
    image: str | None = None
    topics: str | list[str] | None = None


@dataclass
class CategoryUpdate:
    name: str | None = None
    slug: str | None = None
    description: str | None = None
    image: str | None = None
    topics: str | list[str] | None = None


@dataclass
class SectionData:
    type: str
    title: str = ""
    category_id: int | None = None
    count: int | None = None
    source_type: Literal["latest", "category", "categories"] | None = None
    source_ids: list[int] = field(default_factory=list)
    settings: dict[str, Any] = field(default_factory=dict)

    def to_descriptor(self) -> dict[str, Any]:
        descriptor: dict[str, Any] = {
            "type": self.type,
            "title": self.title,
            "category_id": self.category_id,
            "settings": dict(self.settings),
            "source_ids": self.source_ids,
        }
        if self.count is not None:
            descriptor["count"] = self.count
        if self.source_type is not None:
            descriptor["source_type"] = self.source_type
        return descriptor


@dataclass
class ArticleData:
    category_id: int
    slug: str
    title: str
    excerpt: str = ""
    content: str = ""
    image: str | None = None
    type: str = "article"
    date: datetime | None = None
    is_exclusive: bool = False
    author_id: int | None = None


@dataclass
class ArticleUpdate:
    category_id: int | None = None
    slug: str | None = None
    title: str | None = None
    excerpt: str | None = None
    content: str | None = None
    image: str | None = None
    type: str | None = None
    date: datetime | None = None
    is_exclusive: bool | None = None
    author_id: int | None = None


@dataclass
class PermissionCell:
    category_id: int
    can_add: bool = False
    can_edit: bool = False
    can_delete: bool = False


@dataclass
class AuthorData:
    name: str
    bio: str = ""
    image: str | None = None


@dataclass
class AuthorUpdate:
    name: str | None = None
    bio: str | None = None
    image: str | None = None


@dataclass
class UserData:
    username: str
    is_superadmin: bool = False


@dataclass
class UserUpdate:
    username: str | None = None
    is_superadmin: bool | None = None
