from .connection import ConnectionState, MongoConnectionManager, redact_uri

__all__ = [
    "ConnectionState",
    "MongoConnectionManager",
    "redact_uri",
]
