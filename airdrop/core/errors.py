"""
Exception handlers
Every failure is rendered as {success: false, error, timestamp, path, ...}
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from airdrop.repositories import StoreError, StoreUnavailable
from .exceptions import AirdropException
from .logging import scrub_sensitive

logger = logging.getLogger(__name__)

def error_response(
    request: Request,
    status_code: int,
    message: str,
    extra: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    content: Dict[str, Any] = {
        "success": False,
        "error": message,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "path": request.url.path,
    }
    if extra:
        content.update(extra)
    return JSONResponse(status_code=status_code, content=content, headers=headers)

def request_context(request: Request) -> Dict[str, Any]:
    """Redacted request details for server-side error logs"""
    return {
        "method": request.method,
        "path": request.url.path,
        "body": scrub_sensitive(getattr(request.state, "body", None)),
        "params": scrub_sensitive(dict(request.path_params)),
        "query": scrub_sensitive(dict(request.query_params)),
        "ip": request.client.host if request.client else None,
        "user_agent": request.headers.get("user-agent"),
        "request_id": getattr(request.state, "request_id", None),
    }

def validation_details(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    details = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query")]
        message = error.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        details.append({
            "field": ".".join(location),
            "message": message,
            "code": error.get("type", "invalid"),
        })
    return details

def debug_content(request: Request, exc: Exception) -> Dict[str, Any]:
    """Exception internals, only outside production"""
    if request.app.state.settings.is_production:
        return {}
    return {
        "debug": {
            "type": type(exc).__name__,
            "message": str(exc),
            "stack": traceback.format_exception(type(exc), exc, exc.__traceback__),
        }
    }

async def airdrop_exception_handler(request: Request, exc: AirdropException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code}: {exc.detail} context={request_context(request)}")
        extra = {**exc.extra_content(), **debug_content(request, exc)}
    else:
        extra = exc.extra_content()
    return error_response(request, exc.status_code, exc.detail, extra, exc.headers)

async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(
        request,
        400,
        "Validation failed",
        {"details": validation_details(exc.errors())},
    )

async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        message = "Endpoint not found"
    else:
        message = str(exc.detail)
    return error_response(
        request,
        exc.status_code,
        message,
        {"message": f"Cannot {request.method} {request.url.path}"} if exc.status_code == 404 else None,
        getattr(exc, "headers", None),
    )

async def store_unavailable_handler(request: Request, exc: StoreUnavailable) -> JSONResponse:
    logger.error(f"Data store unavailable: {exc} context={request_context(request)}")
    return error_response(
        request, 503, "Service temporarily unavailable", debug_content(request, exc)
    )

async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.error(f"Database operation failed: {exc} context={request_context(request)}")
    return error_response(
        request, 500, "Database operation failed", debug_content(request, exc)
    )

async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled exception: {type(exc).__name__} context={request_context(request)}")
    return error_response(
        request, 500, "Internal server error", debug_content(request, exc)
    )

def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AirdropException, airdrop_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(StoreUnavailable, store_unavailable_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
