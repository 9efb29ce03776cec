"""
FastAPI application setup for the TranslateMe backend.
"""

from fastapi import FastAPI, Request
import logging
import time
import uuid
from datetime import datetime, timezone
from contextlib import asynccontextmanager
from typing import Optional

from translateme.config import Settings, get_settings
from translateme.core.dependencies import ServiceContainer, service_container
from translateme.core.error_handlers import setup_error_handlers, error_handler
from translateme.core.logging import configure_logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    container: Optional[ServiceContainer] = None,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Settings to use instead of the global instance
        container: Service container to use instead of the global one

    Returns:
        FastAPI: Configured application instance
    """
    if container is None:
        container = ServiceContainer(settings) if settings is not None else service_container
    settings = settings or get_settings()

    configure_logging(settings.log_level.value, settings.log_format)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.app_name} v{settings.app_version}")
        try:
            await container.initialize_services()
            logger.info("Application startup complete")
            yield
        except Exception as e:
            logger.error(f"Application startup failed: {e}", exc_info=True)
            raise
        finally:
            logger.info("Shutting down application")
            await container.cleanup_services()
            logger.info("Application shutdown complete")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan
    )
    app.state.service_container = container
    app.state.settings = settings

    setup_error_handlers(app)

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Log requests and responses with timing information."""
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()
        logger.info(
            f"Request {request_id} started: {request.method} {request.url.path}",
            extra={
                'request_id': request_id,
                'method': request.method,
                'path': request.url.path,
            }
        )

        response = await call_next(request)

        processing_time = (time.time() - start_time) * 1000
        logger.info(
            f"Request {request_id} completed: {response.status_code} ({processing_time:.2f}ms)",
            extra={
                'request_id': request_id,
                'status_code': response.status_code,
                'processing_time_ms': processing_time
            }
        )
        response.headers["X-Request-ID"] = request_id
        return response

    @app.get("/")
    async def root():
        """Root endpoint for basic health check."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "status": "running"
        }

    @app.get("/health")
    async def health_check(request: Request):
        """Health check endpoint with store connectivity and error statistics."""
        current: ServiceContainer = request.app.state.service_container
        if not current.initialized:
            return {
                "status": "unhealthy",
                "message": "Service container not initialized",
                "version": settings.app_version,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }

        store = await current.check_store()
        return {
            "status": "healthy" if store["status"] == "healthy" else "degraded",
            "version": settings.app_version,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "details": {"store": store},
            "error_statistics": error_handler.get_error_statistics(),
        }

    from translateme.api.translation_endpoints import router as translation_router
    app.include_router(translation_router)

    return app


# Create application instance
app = create_app()
