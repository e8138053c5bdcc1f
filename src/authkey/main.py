"""
FastAPI application entry point.
"""

from __future__ import annotations

import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from authkey.config import Settings, get_settings
from authkey.keys.router import router as keys_router
from authkey.shared.exceptions import AppException
from authkey.shared.logging import correlation_id_var, get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level)

    logger.info("Application starting", extra={"env": settings.app_env})

    missing = settings.missing_required()
    if missing:
        logger.warning(
            "Key issuance disabled: server not configured",
            extra={"missing": missing},
        )

    yield

    logger.info("Application shutdown complete")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title="Tailnet AuthKey API",
        description="Single-use Tailscale pre-authorization keys for verified operators",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
    )
    app.state.settings = settings
    app.dependency_overrides[get_settings] = lambda: settings

    # Map domain exceptions to short plain-text responses; details stay in logs.
    @app.exception_handler(AppException)
    async def _app_exception(request: Request, exc: AppException) -> PlainTextResponse:
        logger.info(
            "Request rejected",
            extra={
                "path": request.url.path,
                "status_code": exc.status_code,
                "code": exc.code,
                "details": exc.details,
            },
        )
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def _http_exception(
        _: Request, exc: StarletteHTTPException
    ) -> PlainTextResponse:
        return PlainTextResponse(
            str(exc.detail),
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.middleware("http")
    async def _correlation_id(request: Request, call_next):
        token = correlation_id_var.set(
            request.headers.get("X-Request-ID") or uuid.uuid4().hex
        )
        try:
            return await call_next(request)
        finally:
            correlation_id_var.reset(token)

    app.include_router(keys_router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    return app


app = create_app()
