from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from lead_capture.db.nosql.mongo.connection import MongoConnectionManager
from lead_capture.downloads.proxy import DownloadProxy
from lead_capture.leads.models import ClientInfo
from lead_capture.leads.service import LeadService


def get_connection_manager(request: Request) -> MongoConnectionManager:
    return request.app.state.mongo  # type: ignore[attr-defined]


def get_lead_service(request: Request) -> LeadService:
    return request.app.state.lead_service  # type: ignore[attr-defined]


def get_download_proxy(request: Request) -> DownloadProxy:
    return request.app.state.download_proxy  # type: ignore[attr-defined]


def get_client_info(request: Request) -> ClientInfo:
    """Best-effort caller identity: first forwarded hop, then X-Real-IP, then the socket peer."""
    forwarded = request.headers.get("x-forwarded-for", "")
    ip = (
        forwarded.split(",")[0].strip()
        or request.headers.get("x-real-ip", "").strip()
        or (request.client.host if request.client else "")
        or "unknown"
    )
    return ClientInfo(source_ip=ip, user_agent=request.headers.get("user-agent") or "unknown")


ConnectionManagerDep = Annotated[MongoConnectionManager, Depends(get_connection_manager)]
LeadServiceDep = Annotated[LeadService, Depends(get_lead_service)]
DownloadProxyDep = Annotated[DownloadProxy, Depends(get_download_proxy)]
ClientInfoDep = Annotated[ClientInfo, Depends(get_client_info)]
