# catalog/errors.py
"""
Error kinds raised by the catalog and the single place that turns them into
JSON responses.

Every failure body carries at least ``error`` and ``message``.
"""
import logging
import traceback
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

AVAILABLE_ROUTES = [
    "GET /",
    "GET /health",
    "GET /api/products",
    "GET /api/products/:id",
    "GET /api/products/search",
    "GET /api/products/stats",
    "POST /api/products",
    "PUT /api/products/:id",
    "DELETE /api/products/:id",
]


class CatalogError(Exception):
    status_code = 500
    name = "CatalogError"

    def __init__(self, message: str, details: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or []


class NotFoundError(CatalogError):
    status_code = 404
    name = "NotFoundError"


class ValidationError(CatalogError):
    status_code = 400
    name = "ValidationError"


class ConflictError(CatalogError):
    status_code = 409
    name = "ConflictError"


class AuthenticationError(CatalogError):
    status_code = 401
    name = "AuthenticationError"


class BadRequestError(CatalogError):
    status_code = 400
    name = "Bad Request"


def _error_response(status_code: int, error: str, message: str, **extra: Any) -> JSONResponse:
    body: Dict[str, Any] = {"error": error, "message": message}
    body.update(extra)
    return JSONResponse(status_code=status_code, content=body)


def register_error_handlers(app: FastAPI, debug: bool = False) -> None:
    """Install the responders for every error kind on ``app``.

    With ``debug`` on, unexpected errors also return their stack trace.
    """

    @app.exception_handler(CatalogError)
    async def handle_catalog_error(request: Request, exc: CatalogError) -> JSONResponse:
        logger.warning("%s on %s %s: %s", exc.name, request.method, request.url.path, exc.message)
        extra = {"details": exc.details} if exc.details else {}
        return _error_response(exc.status_code, exc.name, exc.message, **extra)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = []
        for err in exc.errors():
            loc = ".".join(str(part) for part in err.get("loc", ()))
            details.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
        logger.warning("Request validation failed on %s %s", request.method, request.url.path)
        return _error_response(400, ValidationError.name, "Invalid request parameters", details=details)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # unmatched path or method
        if exc.status_code in (404, 405):
            return _error_response(
                404,
                "Not Found",
                f"Route {request.method} {request.url.path} not found",
                availableRoutes=AVAILABLE_ROUTES,
            )
        return _error_response(exc.status_code, "Error", str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unexpected error on %s %s", request.method, request.url.path)
        extra = {}
        if debug:
            extra["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return _error_response(500, "Internal Server Error", "An unexpected error occurred", **extra)
