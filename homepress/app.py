"""ASGI entry point: ``hypercorn homepress.app:app``."""

from homepress.asgi import create_app

app = create_app()
