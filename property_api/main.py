"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from property_api.api.routes import health, properties
from property_api.core.config import Settings, get_settings
from property_api.core.database import Database
from property_api.core.exceptions import register_exception_handlers
from property_api.core.logging import configure_logging
from property_api.services.uploads import ImageStore

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Build the application with its own database and image store."""
    settings = settings or get_settings()
    configure_logging(settings)

    database = database or Database.from_settings(settings)
    image_store = ImageStore.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Application lifespan manager."""
        # Startup: create upload directory and database tables
        image_store.ensure_dirs()
        database.create_all()
        logger.info("Database ready, serving uploads from %s", image_store.upload_dir)
        yield
        database.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Real estate property listings API",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.image_store = image_store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_exception_handlers(app, expose_errors=settings.is_development)

    # Stored images, e.g. /uploads/properties/image-<hex>.jpg
    app.mount(
        image_store.url_prefix,
        StaticFiles(directory=str(image_store.upload_dir), check_dir=False),
        name="uploads",
    )

    app.include_router(health.router, tags=["health"])
    app.include_router(properties.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "property_api.main:app",
        host=app.state.settings.HOST,
        port=app.state.settings.PORT,
        reload=app.state.settings.is_development,
    )
