"""ASGI application factory."""

from __future__ import annotations

import hashlib
import logging

from advanced_alchemy.config import EngineConfig
from advanced_alchemy.extensions.litestar import (
    AsyncSessionConfig,
    SQLAlchemyAsyncConfig,
    SQLAlchemyPlugin,
)
from litestar import Litestar
from litestar.di import Provide
from litestar.middleware.session.client_side import CookieBackendConfig
from sqlalchemy import event

from homepress.admin.articles import ArticleAdminController
from homepress.admin.authors import AuthorAdminController
from homepress.admin.categories import CategoryAdminController
from homepress.admin.sections import SectionAdminController
from homepress.admin.users import UserAdminController
from homepress.config import Settings, get_settings
from homepress.controllers.web import WebController
from homepress.db.base import Base
from homepress.lib.exceptions import EXCEPTION_HANDLERS
from homepress.store.sql_store import SQLAlchemyStore

logger = logging.getLogger(__name__)


def create_session_config(
    secret_key: str,
    max_age: int = 86400,
    secure: bool = False,
    cookie_name: str = "homepress_session",
) -> CookieBackendConfig:
    """Create a cookie-backed session config."""
    session_secret = hashlib.sha256(secret_key.encode()).digest()
    return CookieBackendConfig(
        secret=session_secret,
        key=cookie_name,
        max_age=max_age,
        httponly=True,
        secure=secure,
        samesite="lax",
    )


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE clauses unless enabled per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_config(settings: Settings) -> SQLAlchemyAsyncConfig:
    """Build the async database config. SQLite connections enforce foreign keys."""
    db_config = SQLAlchemyAsyncConfig(
        connection_string=settings.db.url,
        metadata=Base.metadata,
        create_all=settings.db.create_all,
        session_config=AsyncSessionConfig(expire_on_commit=False),
        engine_config=EngineConfig(echo=settings.db.echo),
    )
    if "sqlite" in settings.db.url:
        event.listen(db_config.get_engine().sync_engine, "connect", _enable_sqlite_foreign_keys)
    return db_config


def create_app(settings: Settings | None = None) -> Litestar:
    """Create the Litestar application with the store wired in."""
    settings = settings or get_settings()

    db_config = create_db_config(settings)
    store = SQLAlchemyStore(db_config.create_session_maker())

    def provide_store() -> SQLAlchemyStore:
        return store

    session_config = create_session_config(
        secret_key=settings.secret_key,
        max_age=settings.session.max_age,
        secure=settings.session.secure,
        cookie_name=settings.session.cookie_name,
    )

    logger.debug("Creating app for %s", settings.db.url)
    return Litestar(
        route_handlers=[
            WebController,
            CategoryAdminController,
            SectionAdminController,
            ArticleAdminController,
            AuthorAdminController,
            UserAdminController,
        ],
        plugins=[SQLAlchemyPlugin(config=db_config)],
        middleware=[session_config.middleware],
        dependencies={"store": Provide(provide_store, sync_to_thread=False)},
        exception_handlers=EXCEPTION_HANDLERS,
        debug=settings.debug,
    )
