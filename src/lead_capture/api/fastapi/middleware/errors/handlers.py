from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse

from lead_capture.exceptions import LeadCaptureError

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, code: str, **extra: Any) -> JSONResponse:
    """Every failure leaves the service in this shape: success flag, message, error code."""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "error": code, **extra},
    )


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(LeadCaptureError)
    async def _handle_lead_capture_error(request: Request, exc: LeadCaptureError):
        level = logging.ERROR if exc.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "%s on %s (%s): %s",
            type(exc).__name__,
            request.url.path,
            exc.status_code,
            exc.message,
            extra={"http_method": request.method, "path": request.url.path, "status_code": exc.status_code},
        )
        return error_response(exc.status_code, exc.message, exc.code, **exc.extra)

    @app.exception_handler(RequestValidationError)
    async def _handle_request_validation(request: Request, exc: RequestValidationError):
        fields = [".".join(str(p) for p in err.get("loc", ()) if p != "body") for err in exc.errors()]
        return error_response(
            400,
            "Invalid request body",
            "validation_error",
            fields=[f for f in fields if f],
        )
