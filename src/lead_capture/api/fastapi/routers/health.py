from __future__ import annotations

from fastapi import APIRouter

from lead_capture.app.core.env import get_env
from lead_capture.db.health import mongo_health

from ..dependencies import ConnectionManagerDep, LeadServiceDep

router = APIRouter(prefix="/api", tags=["internal"])


@router.get("/health")
async def health(manager: ConnectionManagerDep):
    """Reports the last-known database state; does not trigger a connection."""
    return {
        "status": "OK",
        "message": "Server is running",
        "environment": get_env().value,
        **mongo_health(manager),
    }


@router.get("/test-db")
async def test_db(manager: ConnectionManagerDep, service: LeadServiceDep):
    count = await service.count()
    return {
        "success": True,
        "message": "Database connection working",
        "userCount": count,
        "connectionState": manager.current_state().value,
    }
