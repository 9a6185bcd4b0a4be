"""
FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storygraph import __version__
from storygraph.config import get_settings
from storygraph.log import configure_logging
from storygraph.models.api import ErrorResponse, HealthResponse
from storygraph.services.asset_source import AssetSourceUnavailableError

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json)

    logger.info(
        "application_starting",
        environment=settings.environment,
        asset_source=settings.asset_source,
    )

    yield

    logger.info("application_shutting_down")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="storygraph API",
        description="Network graph data for IP asset lineage",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # The dashboard offers a retry for 503 and an empty state for 200 with no nodes
    @app.exception_handler(AssetSourceUnavailableError)
    async def asset_source_unavailable_handler(
        request: Request,
        exc: AssetSourceUnavailableError,
    ) -> JSONResponse:
        logger.error(
            "asset_source_unavailable",
            path=request.url.path,
            error=str(exc),
        )
        return JSONResponse(
            status_code=503,
            content=ErrorResponse(
                error="Asset data unavailable",
                detail=str(exc) if settings.debug else None,
                code="input_unavailable",
            ).model_dump(),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
        )
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="Internal server error",
                detail=str(exc) if settings.debug else None,
            ).model_dump(),
        )

    # Include routers
    from storygraph.api.routes import assets, network

    app.include_router(network.router, prefix="/api/v1/network", tags=["network"])
    app.include_router(assets.router, prefix="/api/v1/assets", tags=["assets"])

    @app.get("/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(
            version=__version__,
            environment=settings.environment,
            asset_source=settings.asset_source,
        )

    @app.get("/")
    async def root() -> dict:
        """Root endpoint."""
        return {
            "name": "storygraph API",
            "version": __version__,
            "docs": "/docs",
        }

    return app


# Create default app instance
app = create_app()
