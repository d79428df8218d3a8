"""The ordered list of configured homepage sections."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from homepress.auth.permissions import AdminContext
from homepress.db.models import HomepageSection
from homepress.homepage.descriptors import CATEGORY_SECTION_TYPES, SECTION_TYPES
from homepress.lib.exceptions import PersistenceFailure, StoreError, ValidationError
from homepress.lib.ordering import apply_ranks, check_moved_item, move_item, persist_ranks
from homepress.store.base import ContentSource, OrderingStore, SectionStore

logger = logging.getLogger(__name__)

DEFAULT_SECTION_TITLE = "New section"


def default_sections() -> list[HomepageSection]:
    """Sections shown when none are configured or they cannot be fetched."""
    return [
        HomepageSection(id=1, type="carousel", title="Featured", display_order=1, is_active=True, settings={}),
        HomepageSection(id=2, type="latest_grid", title="Latest Articles", display_order=2, is_active=True, settings={}),
    ]


class SectionRegistry:
    """Homepage sections in display order, with CRUD, toggling and reordering.

    The registry holds the administrator's current view. Mutations update it
    optimistically and write through to the store; a failed write raises
    ``PersistenceFailure`` and leaves the local view as it is.
    """

    def __init__(
        self,
        source: ContentSource,
        section_store: SectionStore,
        ordering_store: OrderingStore,
    ) -> None:
        self._source = source
        self._section_store = section_store
        self._ordering_store = ordering_store
        self._sections: list[Any] = []
        self.is_fallback = False
        self._fetch_failed = False

    @property
    def sections(self) -> list[Any]:
        return list(self._sections)

    async def load(self, active_only: bool = False) -> list[Any]:
        """Fetch the configured sections, falling back to the defaults."""
        self._fetch_failed = False
        try:
            rows = list(await self._source.fetch_sections(active_only=active_only))
        except StoreError:
            logger.warning("Could not fetch homepage sections; using defaults", exc_info=True)
            rows = []
            self._fetch_failed = True

        self.is_fallback = not rows
        if self.is_fallback:
            logger.info("No homepage sections configured; using defaults")
            rows = default_sections()

        self._sections = sorted(rows, key=lambda s: (s.display_order, s.id))
        return self.sections

    def _require_configured(self) -> None:
        if self._fetch_failed:
            raise PersistenceFailure("The homepage sections could not be loaded.")
        # The defaults are not rows
        if self.is_fallback:
            raise ValidationError(
                "The homepage is showing default sections; add a section before editing the layout"
            )

    def _find(self, section_id: int) -> Any | None:
        for section in self._sections:
            if section.id == section_id:
                return section
        return None

    async def _build_values(self, descriptor: Mapping[str, Any]) -> dict[str, Any]:
        section_type = descriptor.get("type")
        if section_type not in SECTION_TYPES:
            raise ValidationError(f"Unknown section type: {section_type!r}")

        settings = dict(descriptor.get("settings") or {})
        if "count" in descriptor:
            settings["count"] = descriptor["count"]
        category_id = descriptor.get("category_id") or None

        if section_type == "carousel":
            source_type = settings.get("source_type") or descriptor.get("source_type") or "latest"
            settings["source_type"] = source_type
            if source_type == "categories":
                settings["source_ids"] = list(settings.get("source_ids") or descriptor.get("source_ids") or [])
                category_id = None
            elif source_type == "category":
                if category_id is None:
                    raise ValidationError("A category carousel needs a category")
            else:
                category_id = None

        category = None
        if category_id is not None:
            category = await self._source.fetch_category(category_id)
            if category is None:
                raise ValidationError(f"Category {category_id} does not exist")
        elif section_type in CATEGORY_SECTION_TYPES:
            raise ValidationError(f"A {section_type} section needs a category")

        title = (descriptor.get("title") or "").strip()
        if not title:
            title = category.name if category is not None else DEFAULT_SECTION_TITLE

        return {
            "type": section_type,
            "title": title,
            "category_id": category_id,
            "settings": settings,
            "is_active": bool(descriptor.get("is_active", True)),
        }

    async def create(self, context: AdminContext, descriptor: Mapping[str, Any]) -> Any:
        """Validate and append a new section at the end of the list.

        Raises:
            PermissionDenied: Unless the user is a superadmin.
            ValidationError: Before any write, for a bad descriptor.
            PersistenceFailure: If the sections could not be loaded or the
                store rejected the row.
        """
        context.require_superadmin()
        if self._fetch_failed:
            raise PersistenceFailure("The homepage sections could not be loaded.")
        values = await self._build_values(descriptor)
        if self.is_fallback:
            # A first real section replaces the defaults
            self._sections = []
        values["display_order"] = len(self._sections)

        try:
            section = await self._section_store.create_section(values)
        except StoreError as e:
            raise PersistenceFailure("Saving the new section failed.") from e

        self._sections.append(section)
        self.is_fallback = False
        logger.info("Created %s section #%s at %s", section.type, section.id, section.display_order)
        return section

    async def reorder(
        self, context: AdminContext, moved_id: int, from_index: int, to_index: int
    ) -> list[Any]:
        """Move a section and re-rank the whole list, inactive sections included."""
        context.require_superadmin()
        self._require_configured()
        check_moved_item(self._sections, moved_id, from_index)
        if from_index == to_index:
            return self.sections

        self._sections = move_item(self._sections, from_index, to_index)
        assignments = apply_ranks(self._sections, "display_order")
        logger.info("Moving section #%s from %s to %s", moved_id, from_index, to_index)
        await persist_ranks(self._ordering_store, "section", "display_order", assignments)
        return self.sections

    async def toggle_active(self, context: AdminContext, section_id: int) -> Any | None:
        """Flip is_active. display_order is left alone.

        Returns:
            The updated section or None if not found
        """
        context.require_superadmin()
        self._require_configured()
        section = self._find(section_id)
        if section is None:
            return None

        is_active = not section.is_active
        try:
            updated = await self._section_store.update_section(section_id, {"is_active": is_active})
        except StoreError as e:
            raise PersistenceFailure("Changing the section's visibility failed.") from e
        if updated is None:
            return None

        section.is_active = is_active
        return section

    async def delete(self, context: AdminContext, section_id: int) -> bool:
        """Remove a section. Remaining ranks are not compacted."""
        context.require_superadmin()
        self._require_configured()
        try:
            deleted = await self._section_store.delete_section(section_id)
        except StoreError as e:
            raise PersistenceFailure("Deleting the section failed.") from e

        self._sections = [s for s in self._sections if s.id != section_id]
        return deleted
