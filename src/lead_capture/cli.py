from __future__ import annotations

import asyncio
from typing import Optional

import typer

from lead_capture.app.core.logging import setup_logging
from lead_capture.db.nosql.mongo.connection import ClientFactory, MongoConnectionManager
from lead_capture.db.settings import get_mongo_settings
from lead_capture.exceptions import LeadCaptureError
from lead_capture.leads.service import LeadService

app = typer.Typer(no_args_is_help=True, add_completion=False)


@app.command("serve")
def serve(
        host: str = typer.Option("0.0.0.0", help="Interface to bind"),
        port: int = typer.Option(8000, help="Port to listen on"),
        reload: bool = typer.Option(False, help="Reload on code changes (development only)"),
        log_level: Optional[str] = typer.Option(None, help="Override LOG_LEVEL"),
):
    """Run the HTTP API under uvicorn."""
    import uvicorn

    setup_logging(level=log_level)
    uvicorn.run("lead_capture.main:app", host=host, port=port, reload=reload, log_config=None)


async def _count_records(client_factory: Optional[ClientFactory] = None) -> int:
    manager = MongoConnectionManager(get_mongo_settings(), client_factory=client_factory)
    try:
        return await LeadService(manager, default_product="").count()
    finally:
        await manager.dispose()


@app.command("check-db")
def check_db():
    """Connect to MongoDB once and print the number of stored records."""
    setup_logging()
    try:
        count = asyncio.run(_count_records())
    except LeadCaptureError as exc:
        typer.echo(f"✖ {exc.message}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"✔ Connected. {count} record(s) stored.")
