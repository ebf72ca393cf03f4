"""
FastAPI application entry point for the container risk tracker.
"""
from contextlib import asynccontextmanager
from typing import AsyncGenerator
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.api.v1 import api_router


def configure_logging(level: str = settings.log_level) -> None:
    """Apply the configured root log level."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    # Note: Schema is managed by Alembic migrations
    configure_logging()
    yield
    # Shutdown
    pass


def create_application() -> FastAPI:
    """Create and configure FastAPI application."""

    app = FastAPI(
        title=settings.app_name,
        description="""
        ## Container Risk Tracker

        Scores every active shipping container against a fixed set of risk
        rules and keeps exceptions and notifications in step with the result.

        ### Risk Rules

        - ETA passed before arrival, Last Free Day passed / today / imminent
        - Customs clearance and active holds
        - Stale tracking, marked delays, long planned transit
        - Arrived but not gated out

        ### Levels

        Score >= 7 is **critical**, >= 4 **high**, >= 2 **medium**, else **low**.
        Escalations notify every user; de-escalations dismiss stale alerts.

        A Celery beat schedule runs the risk and demurrage cycle every
        few minutes; the API can also queue a cycle on demand.
        """,
        version=settings.app_version,
        openapi_url=f"{settings.api_v1_prefix}/openapi.json",
        docs_url=f"{settings.api_v1_prefix}/docs",
        redoc_url=f"{settings.api_v1_prefix}/redoc",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure properly in production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API router
    app.include_router(api_router, prefix=settings.api_v1_prefix)

    return app


# Create application instance
app = create_application()


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
    }


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": f"{settings.api_v1_prefix}/docs",
        "openapi": f"{settings.api_v1_prefix}/openapi.json",
    }
