"""
Service container lifecycle against an in-memory history store.
"""
import pytest

from translateme.config.settings import ClearPolicy, HistoryStoreSettings, Settings
from translateme.core.dependencies import ServiceContainer
from translateme.models.internal_models import Operation


def _settings(**history):
    return Settings(history=HistoryStoreSettings(database_url="sqlite+aiosqlite://", **history))


@pytest.mark.asyncio
async def test_initialize_wires_services_and_loads_history():
    container = ServiceContainer(_settings(clear_policy=ClearPolicy.OPTIMISTIC, batch_delete=False))
    await container.initialize_services()
    try:
        service = container.get_translation_service()
        assert service.clear_policy == ClearPolicy.OPTIMISTIC
        assert service.store.batch_delete is False
        assert service.view_state.history == ()
        assert service.view_state.last_operation.operation == Operation.LOAD_HISTORY
        assert not service.view_state.last_operation_failed

        assert (await container.check_store())["status"] == "healthy"
    finally:
        await container.cleanup_services()

    assert not container.initialized
    with pytest.raises(RuntimeError):
        container.get_translation_service()


@pytest.mark.asyncio
async def test_initialize_is_idempotent():
    container = ServiceContainer(_settings())
    await container.initialize_services()
    first = container.get_translation_service()
    await container.initialize_services()
    try:
        assert container.get_translation_service() is first
    finally:
        await container.cleanup_services()


@pytest.mark.asyncio
async def test_store_check_before_initialization():
    container = ServiceContainer(_settings())
    assert (await container.check_store())["status"] == "unknown"
