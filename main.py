"""ASGI entry point: ``uvicorn main:app``."""

from servicedesk.main import create_app

app = create_app()
