from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from amsilence.api.routes import health, silences
from amsilence.clients.alertmanager import AlertmanagerClient
from amsilence.config import Settings, get_settings
from amsilence.logging import configure_logging


def build_backend(settings: Settings) -> AlertmanagerClient:
    return AlertmanagerClient(
        settings.alertmanager_api,
        timeout=settings.http_timeout,
        max_retries=settings.http_max_retries,
        backoff_factor=settings.http_retry_backoff_factor,
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging(settings.log_level)
        yield

    app = FastAPI(
        title="amsilence API",
        version="0.1.0",
        docs_url=f"{settings.api_prefix}/docs",
        openapi_url=f"{settings.api_prefix}/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.backend = build_backend(settings)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in settings.cors_origins],
            allow_methods=["*"],
            allow_headers=["*"],
            allow_credentials=True,
        )

    app.include_router(silences.router, prefix=settings.api_prefix, tags=["silences"])
    app.include_router(health.router, tags=["health"])
    return app
