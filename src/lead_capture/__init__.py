from .exceptions import (
    ConfigurationError,
    DatabaseConnectionError,
    DuplicateEmail,
    LeadCaptureError,
    StorageError,
    StorageUnavailable,
    UpstreamFetchError,
    ValidationError,
)

__all__ = [
    "LeadCaptureError",
    "ConfigurationError",
    "DatabaseConnectionError",
    "DuplicateEmail",
    "StorageError",
    "StorageUnavailable",
    "UpstreamFetchError",
    "ValidationError",
]
