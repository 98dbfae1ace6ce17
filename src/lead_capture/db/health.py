from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from .nosql.mongo.connection import ConnectionState, MongoConnectionManager

_LABELS = {
    ConnectionState.DISCONNECTED: "disconnected",
    ConnectionState.CONNECTING: "connecting",
    ConnectionState.CONNECTED: "connected",
    ConnectionState.ERROR: "error",
}


def state_label(state: ConnectionState) -> str:
    return _LABELS[state]


def mongo_health(manager: MongoConnectionManager) -> dict[str, Any]:
    """Last-known connection status. Never starts a connection attempt."""
    state = manager.current_state()
    return {
        "mongodb": state_label(state),
        "mongoUri": "Set" if manager.settings.uri_configured else "Not Set",
        "isConnected": state is ConnectionState.CONNECTED,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
