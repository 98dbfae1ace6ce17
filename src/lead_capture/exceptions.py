from __future__ import annotations

from typing import Any


class LeadCaptureError(Exception):
    """Base error for the service.

    Every subclass knows how it is reported over HTTP: ``status_code`` and a
    stable ``code`` string. ``extra`` is merged into the JSON error body.
    """

    status_code: int = 500
    code: str = "internal_error"
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, *, extra: dict[str, Any] | None = None):
        self.message = message or self.default_message
        self.extra: dict[str, Any] = dict(extra or {})
        super().__init__(self.message)


class ConfigurationError(LeadCaptureError):
    code = "configuration_error"
    default_message = "Service is misconfigured"


class ValidationError(LeadCaptureError):
    status_code = 400
    code = "validation_error"
    default_message = "Name, email, and phone are required"


class StorageUnavailable(LeadCaptureError):
    code = "storage_unavailable"
    default_message = "Database connection failed"


class StorageError(LeadCaptureError):
    code = "storage_error"
    default_message = "Internal server error"


class DuplicateEmail(StorageError):
    status_code = 400
    code = "duplicate_email"
    default_message = "This email is already registered"


class UpstreamFetchError(LeadCaptureError):
    code = "upstream_fetch_error"
    default_message = "Download failed"


class DatabaseConnectionError(LeadCaptureError, ConnectionError):
    """Raised by ``ensure_connected`` when the attempt does not reach ``connected``."""

    code = "database_connection_error"
    default_message = "Could not connect to MongoDB"


__all__ = [
    "LeadCaptureError",
    "ConfigurationError",
    "ValidationError",
    "StorageUnavailable",
    "StorageError",
    "DuplicateEmail",
    "UpstreamFetchError",
    "DatabaseConnectionError",
]
