"""CLI commands for homepress."""

import asyncio
import logging

import click


@click.group()
@click.version_option(package_name="homepress")
def cli():
    """homepress - homepage composition and category ordering for a news site."""
    pass


@cli.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to")
@click.option("--port", default=8080, type=int, help="Port to bind to")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Logging level (defaults to logging.level from app.yaml)",
)
def serve(host, port, reload, log_level):
    """Run the homepress server."""
    from hypercorn.config import Config

    from homepress.config import get_settings

    level = (log_level or get_settings().logging.level).upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    config = Config()
    config.application_path = "homepress.app:app"
    config.bind = [f"{host}:{port}"]
    config.loglevel = level

    if reload:
        config.use_reloader = True

    from hypercorn.run import run

    click.echo(f"Serving homepress on http://{host}:{port}")
    run(config)


@cli.command("init-db")
def init_db():
    """Create all database tables."""
    from homepress.asgi import create_db_config
    from homepress.config import get_settings
    from homepress.db.base import Base

    settings = get_settings()
    db_config = create_db_config(settings)

    async def _create():
        engine = db_config.get_engine()
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        await engine.dispose()

    asyncio.run(_create())
    click.echo(f"Created tables in {settings.db.url}")


if __name__ == "__main__":
    cli()
