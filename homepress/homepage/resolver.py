"""Expand homepage sections against the article pool.

All functions here are pure: they read their arguments, never mutate them,
and keep no state between calls, so the homepage can be recomposed on every
pool refresh.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from homepress.homepage.descriptors import (
    CarouselSection,
    CategorySection,
    LatestGridSection,
    SectionDescriptor,
    parse_section,
)


@dataclass(frozen=True)
class ResolvedSection:
    """A section ready to render, with its non-empty content."""

    section: SectionDescriptor
    articles: list[Any] = field(default_factory=list)

    @property
    def title(self) -> str | None:
        if isinstance(self.section, CategorySection) and self.section.category is not None:
            return self.section.category.name or self.section.title
        return self.section.title


def sort_pool(articles: Iterable[Any]) -> list[Any]:
    """Newest first. Equal dates keep their fetch order (sorted() is stable)."""
    return sorted(articles, key=lambda a: a.date, reverse=True)


def _resolve_carousel(section: CarouselSection, pool: Sequence[Any]) -> list[Any]:
    settings = section.settings
    candidates: Iterable[Any] = pool

    if settings.source_type == "category" and section.category_id is not None:
        candidates = (a for a in pool if a.category_id == section.category_id)
    elif settings.source_type == "categories" and settings.source_ids is not None:
        source_ids = set(settings.source_ids)
        candidates = (a for a in pool if a.category_id in source_ids)

    return _take(candidates, settings.count)


def _resolve_category(section: CategorySection, pool: Sequence[Any]) -> list[Any]:
    category_id = section.resolved_category_id
    if category_id is None:
        return []
    return _take((a for a in pool if a.category_id == category_id), section.settings.count)


def _take(candidates: Iterable[Any], count: int) -> list[Any]:
    taken = []
    if count <= 0:
        return taken
    for article in candidates:
        taken.append(article)
        if len(taken) >= count:
            break
    return taken


def resolve(section: Any, pool: Sequence[Any]) -> list[Any]:
    """Return the ordered articles a section shows.

    ``pool`` must already be newest-first (see ``sort_pool``). An empty
    result means the section is suppressed. Unknown section types, custom
    sections and category sections without a category resolve to nothing.
    """
    descriptor = parse_section(section)

    if isinstance(descriptor, CarouselSection):
        return _resolve_carousel(descriptor, pool)
    if isinstance(descriptor, LatestGridSection):
        return _take(pool, descriptor.settings.count)
    if isinstance(descriptor, CategorySection):
        return _resolve_category(descriptor, pool)
    return []


def compose_homepage(sections: Iterable[Any], articles: Iterable[Any]) -> list[ResolvedSection]:
    """Resolve every active section, top to bottom.

    Sections are ordered by display_order (ties by id); gaps left by deleted
    sections do not matter. Sections that resolve to nothing are left out.
    """
    pool = sort_pool(articles)
    descriptors = [d for d in map(parse_section, sections) if d is not None and d.is_active]
    descriptors.sort(key=lambda d: (d.display_order, d.id if d.id is not None else 0))

    page = []
    for descriptor in descriptors:
        items = resolve(descriptor, pool)
        if items:
            page.append(ResolvedSection(section=descriptor, articles=items))
    return page
