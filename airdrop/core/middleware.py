"""
Application middleware for request/response processing
Handles CORS, request IDs, request context capture and logging
"""

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
import json
import logging
import time
import uuid
from typing import Callable

from .config import Settings
from .errors import unhandled_exception_handler

logger = logging.getLogger(__name__)

class RequestIDMiddleware(BaseHTTPMiddleware):
    """Add unique request ID to each request"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        return response

class RequestContextMiddleware(BaseHTTPMiddleware):
    """Keep the parsed JSON body on request.state for error logging"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request.state.body = None

        if request.method in ("POST", "PUT", "PATCH"):
            raw = await request.body()
            if raw:
                try:
                    request.state.body = json.loads(raw)
                except ValueError:
                    request.state.body = None

        return await call_next(request)

class LoggingMiddleware(BaseHTTPMiddleware):
    """Log all requests and responses"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        client = request.client.host if request.client else "unknown"

        logger.info(f"Request: {request.method} {request.url.path} from {client}")

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"Request failed: {type(e).__name__} "
                f"Time: {process_time:.3f}s"
            )
            # Rendered here so the response still passes through RequestIDMiddleware
            response = await unhandled_exception_handler(request, e)

        process_time = time.time() - start_time
        logger.info(
            f"Response: {response.status_code} "
            f"Time: {process_time:.3f}s "
            f"Request ID: {getattr(request.state, 'request_id', 'N/A')}"
        )
        response.headers["X-Process-Time"] = f"{process_time:.6f}"

        return response

def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure all middleware for the application"""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

    # Last added runs first
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(RequestIDMiddleware)
