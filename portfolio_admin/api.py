"""
FastAPI application for the portfolio admin backend.
"""

from __future__ import annotations

import importlib.metadata
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import get_settings
from .content.routes import router as admin_router
from .db.base import init_database
from .errors import AppError, http_status_for
from .log import configure_logging

logger = structlog.get_logger()

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    configure_logging()
    logger.info("Starting Portfolio Admin", environment=settings.environment)

    try:
        await init_database()
        logger.info("Database initialized")
    except Exception as e:
        logger.error("Failed to start application", error=str(e))
        raise

    yield

    logger.info("Shutdown complete")


app = FastAPI(
    title="Portfolio Admin",
    description="Content management API for an artist portfolio",
    version=importlib.metadata.version("portfolio-admin"),
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render an AppError as ``{"error": {type, message, detail}}``."""
    status_code = http_status_for(exc)
    if status_code >= 500:
        logger.error(
            "request_failed",
            path=request.url.path,
            error_type=exc.type.value,
            detail=exc.technical_message,
        )
    return JSONResponse(status_code=status_code, content={"error": exc.to_dict()})


# Health and Info Endpoints
@app.get("/healthz")
def healthz() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/version")
def version() -> dict[str, str]:
    """Return the version of the application."""
    return {"version": importlib.metadata.version("portfolio-admin")}


app.include_router(admin_router)
