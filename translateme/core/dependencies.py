"""
Dependency injection setup for FastAPI.
Owns the store engine and the single TranslationService the routes share.
"""

from fastapi import Request, HTTPException
from typing import Optional
import logging
import asyncio

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from translateme.config.settings import Settings, get_settings
from translateme.core.db import create_engine, create_session_factory, init_models
from translateme.services import HistoryStore, TranslationClient, TranslationService


logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Container for application services with lifecycle management.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings
        self._engine: Optional[AsyncEngine] = None
        self._translation_service: Optional[TranslationService] = None
        self._initialized = False
        self._initialization_lock = asyncio.Lock()

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def initialize_services(self) -> None:
        """Create the store engine, make sure the collection exists, wire the services."""
        async with self._initialization_lock:
            if self._initialized:
                return

            logger.info("Initializing service container")
            settings = self.settings

            self._engine = create_engine(
                settings.history.database_url, echo=settings.history.echo_sql
            )
            try:
                await init_models(self._engine)
            except (SQLAlchemyError, OSError) as e:
                # Keep serving; store calls report the failure in the view state.
                logger.error(f"History store unavailable at startup: {e}")

            store = HistoryStore(
                create_session_factory(self._engine),
                batch_delete=settings.history.batch_delete,
            )
            client = TranslationClient(settings.translation)
            self._translation_service = TranslationService(
                client, store, clear_policy=settings.history.clear_policy
            )

            self._initialized = True
            logger.info("Service container initialized")

            # Initial history load; a failure is recorded in the view state.
            await self._translation_service.refresh_history()

    async def cleanup_services(self) -> None:
        async with self._initialization_lock:
            if self._engine is not None:
                await self._engine.dispose()
            self._engine = None
            self._translation_service = None
            self._initialized = False
            logger.info("Service container cleaned up")

    def get_translation_service(self) -> TranslationService:
        if self._translation_service is None:
            raise RuntimeError("Service container not initialized")
        return self._translation_service

    async def check_store(self) -> dict:
        """Round-trip a trivial query to the store."""
        if self._engine is None:
            return {"status": "unknown", "message": "Store not initialized"}
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return {"status": "healthy", "connection": "ok"}
        except Exception as e:
            logger.error(f"Store health check failed: {e}")
            return {"status": "unhealthy", "error": str(e)}


service_container = ServiceContainer()


def get_translation_service(request: Request) -> TranslationService:
    """FastAPI dependency resolving the shared TranslationService."""
    container: Optional[ServiceContainer] = getattr(request.app.state, "service_container", None)
    if container is None or not container.initialized:
        raise HTTPException(status_code=503, detail="Service not available")
    return container.get_translation_service()
