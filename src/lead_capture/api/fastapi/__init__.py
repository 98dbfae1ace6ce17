from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lead_capture.api.fastapi.middleware.errors.catchall import CatchAllExceptionMiddleware
from lead_capture.api.fastapi.middleware.errors.handlers import register_error_handlers
from lead_capture.api.fastapi.routers import register_all_routers
from lead_capture.app.core.env import Env, get_env
from lead_capture.app.settings import AppSettings, get_app_settings
from lead_capture.db.nosql.mongo.connection import ClientFactory, MongoConnectionManager, redact_uri
from lead_capture.db.settings import MongoSettings, get_mongo_settings
from lead_capture.downloads.proxy import DownloadProxy
from lead_capture.downloads.settings import DownloadSettings, get_download_settings
from lead_capture.exceptions import ConfigurationError, DatabaseConnectionError
from lead_capture.leads.service import LeadService

logger = logging.getLogger(__name__)


def validate_settings(
        mongo: MongoSettings,
        downloads: DownloadSettings,
        env: Env | None = None,
) -> None:
    """Fail fast on configuration that must never fall back to a default."""
    env = env or get_env()
    missing = []
    if not mongo.uri_configured and env is Env.PROD:
        missing.append("MONGODB_URI")
    if not downloads.url:
        if env is Env.PROD:
            missing.append("DOWNLOAD_URL")
        else:
            logger.warning("DOWNLOAD_URL is not set; /api/download will fail")
    if missing:
        raise ConfigurationError(f"Missing required configuration: {', '.join(missing)}")


def _add_cors(app: FastAPI, settings: AppSettings) -> None:
    # Explicit policy: every origin may call with credentials. "*" cannot be
    # combined with credentials, so the request Origin is reflected instead.
    if settings.cors_allow_all:
        app.add_middleware(
            CORSMiddleware,
            allow_origin_regex=".*",
            allow_credentials=settings.cors_allow_credentials,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["Content-Disposition"],
        )
    elif settings.cors_origins_list:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins_list,
            allow_credentials=settings.cors_allow_credentials,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["Content-Disposition"],
        )


def _lifespan(manager: MongoConnectionManager, connect_on_startup: bool):
    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        if connect_on_startup:
            try:
                await manager.ensure_connected()
            except DatabaseConnectionError as exc:
                # eager warm-up: the next request retries
                logger.error("Startup MongoDB connection failed: %s", exc)
        try:
            yield
        finally:
            await manager.dispose()

    return lifespan


def create_app(
        *,
        app_settings: Optional[AppSettings] = None,
        mongo_settings: Optional[MongoSettings] = None,
        download_settings: Optional[DownloadSettings] = None,
        client_factory: Optional[ClientFactory] = None,
        download_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    app_settings = app_settings or get_app_settings()
    mongo_settings = mongo_settings or get_mongo_settings()
    download_settings = download_settings or get_download_settings()

    validate_settings(mongo_settings, download_settings)

    manager = MongoConnectionManager(mongo_settings, client_factory=client_factory)

    app = FastAPI(
        title=app_settings.name,
        version=app_settings.version,
        lifespan=_lifespan(manager, mongo_settings.connect_on_startup),
    )
    app.state.mongo = manager
    app.state.lead_service = LeadService(manager, default_product=app_settings.default_product)
    app.state.download_proxy = DownloadProxy(download_settings, transport=download_transport)

    app.add_middleware(CatchAllExceptionMiddleware)
    _add_cors(app, app_settings)
    register_error_handlers(app)
    register_all_routers(app)

    logger.info(
        "App created: mongo=%s collection=%s unique_email=%s download_configured=%s",
        redact_uri(manager.uri),
        mongo_settings.collection,
        mongo_settings.unique_email,
        bool(download_settings.url),
    )
    return app


__all__ = ["create_app", "validate_settings"]
