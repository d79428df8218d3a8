"""Public read endpoints for the site front end."""

from __future__ import annotations

from litestar import Controller, get

from homepress.homepage.registry import SectionRegistry
from homepress.homepage.resolver import ResolvedSection, compose_homepage
from homepress.store.sql_store import SQLAlchemyStore


def _render_section(resolved: ResolvedSection) -> dict:
    section = resolved.section
    category = getattr(section, "category", None)
    return {
        "id": section.id,
        "type": section.type,
        "title": resolved.title,
        "category": category.model_dump() if category is not None else None,
        "articles": [
            {
                "id": a.id,
                "slug": a.slug,
                "title": a.title,
                "excerpt": a.excerpt,
                "image": a.image,
                "category_id": a.category_id,
                "date": a.date,
                "is_exclusive": a.is_exclusive,
            }
            for a in resolved.articles
        ],
    }


class WebController(Controller):
    path = "/api"

    @get("/homepage")
    async def homepage(self, store: SQLAlchemyStore) -> list[dict]:
        """The composed homepage: active, non-empty sections top to bottom."""
        registry = SectionRegistry(store, store, store)
        sections = await registry.load(active_only=True)
        articles = await store.fetch_articles()
        return [_render_section(r) for r in compose_homepage(sections, articles)]

    @get("/navigation")
    async def navigation(self, store: SQLAlchemyStore) -> list[dict]:
        """Categories in navigation order."""
        categories = await store.fetch_categories(order_by="order_index")
        return [{"id": c.id, "slug": c.slug, "name": c.name} for c in categories]
