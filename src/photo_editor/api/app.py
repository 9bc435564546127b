"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from photo_editor.adapters.local_asset_store import LocalAssetStore
from photo_editor.api.auth import router as auth_router
from photo_editor.api.errors import register_exception_handlers
from photo_editor.api.photos import router as photos_router
from photo_editor.app_logging import configure_logging
from photo_editor.config import parse_cors_origins
from photo_editor.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    settings = container.settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Photo editor API starting",
            extra={"environment": settings.environment},
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Photo Editor API", lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_cors_origins(settings.cors_origins, settings.frontend_url),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(photos_router)

    asset_store = container.photo_service.asset_store
    if isinstance(asset_store, LocalAssetStore):
        app.mount(
            asset_store.url_prefix,
            StaticFiles(directory=asset_store.base_dir, check_dir=False),
            name="uploads",
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
