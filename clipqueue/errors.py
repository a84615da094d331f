"""
API error type and exception handlers.

Every error response uses the same envelope:

    {"success": false, "error": "<summary>", "details": "<downstream message>"}

`details` is only present when there is something to add (usually the
message of a failed Supabase or YouTube call).
"""

from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from clipqueue.utils.logging_utils import get_system_logger


class ApiError(HTTPException):
    """HTTPException carrying the envelope's error summary and optional details."""

    def __init__(self, status_code: int, error: str, details: Optional[str] = None):
        super().__init__(status_code=status_code, detail=error)
        self.error = error
        self.details = details


def error_body(error: str, details: Optional[str] = None) -> dict:
    body = {"success": False, "error": error}
    if details is not None:
        body["details"] = details
    return body


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.error, exc.details),
                        headers=getattr(exc, "headers", None))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=error_body(str(exc.detail)),
                        headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return JSONResponse(status_code=400, content=error_body("Invalid request", "; ".join(messages)))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    get_system_logger().exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content=error_body("Internal server error", str(exc)))


def register_exception_handlers(app: FastAPI) -> None:
    """Install the envelope handlers on app."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
