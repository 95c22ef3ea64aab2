from __future__ import annotations

"""Asset Generation Backend - Main Application Entry Point
FastAPI application factory for the provider-routing backend of the creative
asset studio.
Architecture Overview:
    - Eight image backends behind one dispatcher (core/providers)
    - Static routing tables per studio mode and tier (config/image)
    - Credential-aware resolution with keyless fallback and failover
    - Bring-your-own-key overrides applied per request, never cached
Entry Points:
    - /health - Health check endpoint
    - /api/v1/generation/* - Generation, batch and provider status endpoints
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator

from core.utils.env import is_production
# Track startup time in non-production environments
start_time = time.time() if not is_production() else None

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.exceptions import ConfigurationError
from core.logging import setup_logging
from core.observability import register_http_request_logging
from core.providers import list_provider_status
from core.pydantic_schemas import error as api_error
from features.generation import router as generation_router

setup_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Report which providers this deployment can route to."""

    statuses = list_provider_status()
    available = [entry.provider.value for entry in statuses if entry.configured]
    byok_only = [entry.provider.value for entry in statuses if entry.requires_key and not entry.configured]
    logger.info("Image providers available: %s", ", ".join(available))
    if byok_only:
        logger.info("Providers usable only with a user key: %s", ", ".join(byok_only))
    yield
    logger.info("Application shutting down...")


def create_app() -> FastAPI:
    """Application factory returning a configured FastAPI instance."""

    app = FastAPI(
        title="Asset Generation Backend",
        description="Provider routing and failover for image, voice and text generation",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Configure CORS based on environment
    if is_production():
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    else:
        # Development: allow any localhost port (React/Vite/etc.)
        app.add_middleware(
            CORSMiddleware,
            allow_origin_regex=r"^http://(localhost|127\.0\.0\.1)(:\d+)?$",
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(request: Request, exc: ConfigurationError):
        """Return a structured API envelope for configuration errors."""

        payload = api_error(
            code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=str(exc),
            data={"key": exc.key} if getattr(exc, "key", None) else None,
        )
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=payload)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy", "version": "1.0.0"}

    register_http_request_logging(app)

    app.include_router(generation_router)

    timing_info = ""
    if start_time is not None:
        elapsed = time.time() - start_time
        timing_info = f" (loaded in {elapsed:.2f}s)"

    logger.info("Application created with generation router%s", timing_info)
    return app


app = create_app()


if __name__ == "__main__":  # pragma: no cover - manual execution helper
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
