"""Example host application with the error middleware installed."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from apierror.config import Settings, get_settings
from apierror.logging import setup_logging
from apierror.middleware.error_handler import install


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create a FastAPI application wrapped by ``APIErrorMiddleware``."""
    if settings is None:
        settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(debug=settings.debug, level=settings.log_level)
        logger = structlog.get_logger(__name__)
        await logger.ainfo("app_started", service=settings.app_name)
        yield
        await logger.ainfo("app_stopped", service=settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    # Outermost, so errors from any other middleware are caught too
    install(app, settings=settings)

    @app.get("/health")
    async def health():
        return {"status": "ok", "service": settings.app_name}

    return app


# Default app instance for uvicorn
app = create_app()
