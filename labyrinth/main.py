"""Labyrinth API - Daedalus's FastAPI application."""

import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware

from labyrinth.api.routes import maze
from labyrinth.config import Settings, get_settings
from labyrinth.services.labyrinth_service import LabyrinthService

logger = logging.getLogger("labyrinth")


def configure_logging(debug: bool = False) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging requests with correlation IDs."""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())[:8]
        start_time = time.time()

        request.state.request_id = request_id

        logger.debug(f"[{request_id}] --> {request.method} {request.url.path}")

        try:
            response = await call_next(request)
            process_time = (time.time() - start_time) * 1000

            logger.debug(
                f"[{request_id}] <-- {response.status_code} "
                f"({process_time:.2f}ms)"
            )

            response.headers["X-Request-ID"] = request_id
            return response

        except Exception as e:
            process_time = (time.time() - start_time) * 1000
            logger.error(
                f"[{request_id}] <-- ERROR: {type(e).__name__}: {str(e)} "
                f"({process_time:.2f}ms)"
            )
            raise


def create_app(
    settings: Optional[Settings] = None,
    service: Optional[LabyrinthService] = None,
) -> FastAPI:
    """
    Build the Daedalus application.

    Args:
        settings: Configuration. Defaults to get_settings().
        service: Labyrinth service to expose. Built from settings if omitted.
    """
    settings = settings or get_settings()
    service = service or LabyrinthService(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info(
            f"Starting {settings.app_name}: {settings.width}x{settings.height} mazes "
            f"on {settings.base_url}"
        )
        yield
        # Scores must be reported before the service goes away
        logger.info(f"Shutting down {settings.app_name}...")
        app.state.labyrinth.close()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Daedalus builds labyrinths for Icarus to solve",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.labyrinth = service
    app.state.settings = settings

    app.add_middleware(RequestLoggingMiddleware)

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "ok", "version": settings.app_version}

    @app.get("/")
    async def root() -> dict:
        """Root endpoint with API info."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs",
        }

    app.include_router(maze.router)
    return app
