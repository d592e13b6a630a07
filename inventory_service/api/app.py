"""FastAPI application factory and setup."""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional, Sequence, Union

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.concurrency import run_in_threadpool
from starlette.responses import JSONResponse

from inventory_service.api.routes import router as products_router
from inventory_service.config import Settings, get_settings
from inventory_service.errors import (
    FieldError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from inventory_service.gateway.abstract import ProductGateway
from inventory_service.gateway.postgres import PostgresProductGateway
from inventory_service.infrastructure.db_factory import create_pool
from inventory_service.utils.logging import get_logger

log = get_logger(__name__)

# Path parameter names as clients see them in the URL template.
_PATH_PARAM_NAMES = {"product_id": "id"}


def _field_name(loc: Sequence[Union[str, int]]) -> str:
    """Turn a pydantic error location such as ("body", "price") into a field name."""
    if not loc:
        return "body"
    source, rest = loc[0], [str(part) for part in loc[1:] if isinstance(part, str)]
    if source == "path" and rest:
        return _PATH_PARAM_NAMES.get(rest[0], rest[0])
    if rest:
        return ".".join(rest)
    return str(source)


def _to_validation_error(exc: RequestValidationError) -> ValidationError:
    details: List[FieldError] = [
        FieldError(field=_field_name(err.get("loc", ())), message=err.get("msg", "invalid value"))
        for err in exc.errors()
    ]
    fields = ", ".join(dict.fromkeys(detail["field"] for detail in details))
    return ValidationError(f"invalid request: {fields}", details)


def _validation_response(exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": exc.message, "details": exc.details},
    )


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return _validation_response(_to_validation_error(exc))

    @app.exception_handler(ValidationError)
    async def handle_validation(request: Request, exc: ValidationError):
        return _validation_response(exc)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": str(exc)})

    @app.exception_handler(StorageError)
    async def handle_storage(request: Request, exc: StorageError):
        settings: Settings = request.app.state.settings
        log.error(
            "Storage error",
            extra={"path": request.url.path, "method": request.method, "error": str(exc)},
        )
        message = str(exc) if settings.expose_storage_errors else "storage error"
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": message}
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        log.exception(
            "Unhandled error", extra={"path": request.url.path, "method": request.method}
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "internal server error"},
        )


def create_app(
    gateway: Optional[ProductGateway] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Build the HTTP application.

    Parameters
    ----------
    gateway : ProductGateway, optional
        Data-access object to serve requests with. When omitted, a connection
        pool is created from settings on startup, wrapped in a
        `PostgresProductGateway`, and closed on exit.
    settings : Settings, optional
        Defaults to the cached environment settings.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if gateway is not None:
            yield
            return
        pool = create_pool(settings)
        app.state.gateway = PostgresProductGateway(pool)
        try:
            yield
        finally:
            # close() blocks until borrowed connections are returned.
            await run_in_threadpool(pool.close)
            log.info("Connection pool closed")

    app = FastAPI(title="Inventory Service", lifespan=lifespan)
    app.state.settings = settings
    app.state.gateway = gateway

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        log.info(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response

    _register_exception_handlers(app)
    app.include_router(products_router)
    return app


__all__ = ["create_app"]
