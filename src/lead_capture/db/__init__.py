from .health import mongo_health, state_label
from .nosql import ConnectionState, MongoConnectionManager
from .settings import MongoSettings, get_mongo_settings

__all__ = [
    "ConnectionState",
    "MongoConnectionManager",
    "MongoSettings",
    "get_mongo_settings",
    "mongo_health",
    "state_label",
]
