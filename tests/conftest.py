"""Shared fixtures: an in-memory history store and a scripted translation client."""
import pytest
import pytest_asyncio

from translateme.core.db import create_engine, create_session_factory, init_models
from translateme.models.language import Language
from translateme.services import HistoryStore, TranslationService


class FakeTranslationClient:
    """Stands in for TranslationClient; answers from a dict or raises ``error``."""

    def __init__(self, responses=None, error=None):
        self.responses = responses or {}
        self.error = error
        self.calls = []

    async def translate(self, text, source_language, target_language):
        self.calls.append((text, Language(source_language), Language(target_language)))
        if self.error is not None:
            raise self.error
        return self.responses.get(text, f"[{Language(target_language).value}] {text}")


@pytest_asyncio.fixture
async def engine():
    engine = create_engine("sqlite+aiosqlite://")
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def history_store(session_factory):
    return HistoryStore(session_factory)


@pytest.fixture
def fake_client():
    return FakeTranslationClient()


@pytest.fixture
def translation_service(fake_client, history_store):
    return TranslationService(fake_client, history_store)


@pytest.fixture
def make_client():
    return FakeTranslationClient
