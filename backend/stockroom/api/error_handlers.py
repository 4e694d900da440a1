"""Error Handlers — global exception handlers for the Stockroom API.

Invariants:
    - Every error response body is {error, message, statusCode}
    - StockroomError → status, code and safe message from its kind
    - RequestValidationError (unparseable body) → VALIDATION_ERROR, default message
    - SQLAlchemyError escaping a repository → DATABASE_ERROR
    - Starlette HTTPException (unknown route, wrong method) keeps its status
    - Exception (catch-all) → INTERNAL_ERROR, never leaks internal details and
      never reaches the server: it is answered inside ServerErrorMiddleware
    - Each error is logged exactly once, here, with the sanitized original

Design Decisions:
    - Layered handlers: domain (StockroomError), framework (validation, HTTP),
      store (SQLAlchemy), catch-all (Exception)
    - Catch-all is an http middleware, not exception_handler(Exception): Starlette
      re-raises after running an Exception handler, so the server would log it again
    - Kept out of main.py so the app module only wires things together
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from stockroom.core.errors import (
    DatabaseError,
    ErrorKind,
    StockroomError,
    ValidationError,
    build_error_payload,
    classify_error,
)
from stockroom.infrastructure.observability import ContextLogger


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_stockroom_error_handler(app)
    _register_validation_error_handler(app)
    _register_store_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _logger(request: Request) -> ContextLogger:
    return request.app.state.app_logger


def _respond(request: Request, error: StockroomError) -> JSONResponse:
    """Log the error with full detail, then return the sanitized envelope."""
    _logger(request).error(
        f"{error.kind.code} on {request.method} {request.url.path}",
        error,
        error_code=error.kind.code,
        status_code=error.http_status,
        method=request.method,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=error.http_status, content=error.to_response(),
    )


def _register_stockroom_error_handler(app: FastAPI) -> None:
    """Register Stockroom domain/infrastructure error handler."""

    @app.exception_handler(StockroomError)
    async def stockroom_error_handler(request: Request, exc: StockroomError):
        return _respond(request, classify_error(exc))


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register request-parsing error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Malformed or non-JSON bodies — field details go to the log only."""
        error = ValidationError()
        _logger(request).warn(
            f"Validation error on {request.url.path}",
            details=[
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        )
        return JSONResponse(
            status_code=error.http_status, content=error.to_response(),
        )


def _register_store_error_handler(app: FastAPI) -> None:
    """Register handler for raw SQLAlchemy errors."""

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError):
        return _respond(request, DatabaseError("request", cause=exc))


def _register_http_error_handler(app: FastAPI) -> None:
    """Register handler for framework HTTP errors (404 route, 405 method)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        if exc.status_code == ErrorKind.NOT_FOUND.http_status:
            code, message = ErrorKind.NOT_FOUND.code, ErrorKind.NOT_FOUND.default_message
        else:
            code, message = "API_ERROR", str(exc.detail)
        _logger(request).warn(
            f"HTTP {exc.status_code} on {request.method} {request.url.path}",
            status_code=exc.status_code,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=build_error_payload(code, message, exc.status_code),
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error middleware."""

    @app.middleware("http")
    async def generic_error_middleware(request: Request, call_next):
        """Catch-all — never leaks internal details."""
        try:
            return await call_next(request)
        except Exception as exc:
            return _respond(request, classify_error(exc))
