"""Typed homepage section descriptors.

A section row is ``{type, settings, ...}``; ``type`` selects the settings
shape. Rows are parsed into a discriminated union so each resolver branch
sees exactly its own settings, and rows of an unknown or malformed type
parse to ``None`` and render nothing.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator
from sqlalchemy import inspect
from sqlalchemy.exc import NoInspectionAvailable

logger = logging.getLogger(__name__)

SectionType = Literal["carousel", "category_grid", "category_list", "latest_grid", "category_section", "custom"]
SourceType = Literal["latest", "category", "categories"]

CATEGORY_SECTION_TYPES: frozenset[str] = frozenset({"category_grid", "category_list", "category_section"})
SECTION_TYPES: frozenset[str] = frozenset(SectionType.__args__)

DEFAULT_CAROUSEL_COUNT = 5
DEFAULT_LATEST_COUNT = 6
DEFAULT_CATEGORY_COUNT = 4


class CategoryRef(BaseModel):
    """The joined category of a section row."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str = ""
    slug: str = ""


class _CountSettings(BaseModel):
    count: int

    @field_validator("count", mode="before")
    @classmethod
    def default_count(cls, value: Any) -> Any:
        # Missing, null and zero counts all mean "use the default"
        return value or cls.model_fields["count"].default


class CarouselSettings(_CountSettings):
    count: int = DEFAULT_CAROUSEL_COUNT
    source_type: SourceType = "latest"
    source_ids: list[int] | None = None

    @field_validator("source_type", mode="before")
    @classmethod
    def default_source_type(cls, value: Any) -> Any:
        return value or "latest"


class LatestGridSettings(_CountSettings):
    count: int = DEFAULT_LATEST_COUNT


class CategorySettings(_CountSettings):
    count: int = DEFAULT_CATEGORY_COUNT


class _Section(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    title: str | None = None
    category_id: int | None = None
    category: CategoryRef | None = None
    display_order: int = 0
    is_active: bool = True

    @field_validator("settings", mode="before", check_fields=False)
    @classmethod
    def empty_settings(cls, value: Any) -> Any:
        return value if value is not None else {}


class CarouselSection(_Section):
    type: Literal["carousel"]
    settings: CarouselSettings = Field(default_factory=CarouselSettings)


class LatestGridSection(_Section):
    type: Literal["latest_grid"]
    settings: LatestGridSettings = Field(default_factory=LatestGridSettings)


class CategorySection(_Section):
    type: Literal["category_grid", "category_list", "category_section"]
    settings: CategorySettings = Field(default_factory=CategorySettings)

    @property
    def resolved_category_id(self) -> int | None:
        """The section's category, from the row or its joined reference."""
        if self.category_id is not None:
            return self.category_id
        if self.category is not None:
            return self.category.id
        return None


class CustomSection(_Section):
    type: Literal["custom"]
    settings: dict[str, Any] = Field(default_factory=dict)


SectionDescriptor = Annotated[
    Union[CarouselSection, LatestGridSection, CategorySection, CustomSection],
    Field(discriminator="type"),
]

_adapter: TypeAdapter[SectionDescriptor] = TypeAdapter(SectionDescriptor)


def section_payload(row: Any) -> dict[str, Any]:
    """Read a section row (ORM object or mapping) into a plain dict.

    Relationship attributes that were never loaded are treated as absent.
    """
    if isinstance(row, dict):
        return dict(row)

    try:
        unloaded = inspect(row).unloaded
    except NoInspectionAvailable:
        unloaded = set()

    payload = {}
    for name in ("id", "type", "title", "category_id", "display_order", "is_active", "settings", "category"):
        if name in unloaded:
            continue
        payload[name] = getattr(row, name, None)

    category = payload.get("category")
    if category is not None and not isinstance(category, dict):
        payload["category"] = CategoryRef.model_validate(category)
    return {k: v for k, v in payload.items() if v is not None}


def parse_section(row: Any) -> SectionDescriptor | None:
    """Parse a section row into its typed descriptor, or None if it is not renderable."""
    if isinstance(row, (CarouselSection, LatestGridSection, CategorySection, CustomSection)):
        return row

    payload = section_payload(row)
    try:
        return _adapter.validate_python(payload)
    except ValidationError:
        logger.debug("Skipping section %r of type %r", payload.get("id"), payload.get("type"), exc_info=True)
        return None
