from .mongo import ConnectionState, MongoConnectionManager

__all__ = [
    "ConnectionState",
    "MongoConnectionManager",
]
