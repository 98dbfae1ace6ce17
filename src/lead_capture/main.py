"""ASGI entrypoint: ``uvicorn lead_capture.main:app``."""

from lead_capture.api.fastapi import create_app
from lead_capture.app.core.logging import setup_logging

setup_logging()

app = create_app()
