"""FastAPI application entry point."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import health, routes, trucks, updates
from .config import settings
from .logging_config import configure_logging
from .persistence.storage import InMemoryStorage, Storage, seed_sample_data
from .services.events import Broadcaster


def create_app(storage: Storage | None = None, broadcaster: Broadcaster | None = None) -> FastAPI:
    configure_logging(settings.log_level)
    app = FastAPI(title=settings.app_name)

    if storage is None:
        storage = InMemoryStorage()
        if settings.seed_sample_data:
            seed_sample_data(storage)
    app.state.storage = storage
    app.state.broadcaster = broadcaster if broadcaster is not None else Broadcaster()

    if settings.frontend_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.frontend_allowed_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/")
    def root():
        return {
            "service": settings.app_name,
            "status": "running",
            "api_prefix": settings.api_prefix,
            "health": f"{settings.api_prefix}/health",
            "updates": settings.websocket_path,
            "docs": "/docs",
        }

    app.include_router(health.router, prefix=settings.api_prefix)
    app.include_router(routes.router, prefix=settings.api_prefix)
    app.include_router(trucks.router, prefix=settings.api_prefix)
    app.include_router(updates.router)
    return app


app = create_app()
