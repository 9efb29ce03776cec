# Business logic services

from .translation_client import TranslationClient
from .history_store import HistoryStore, classify_store_error
from .translation_service import TranslationService

__all__ = [
    "TranslationClient",
    "HistoryStore",
    "classify_store_error",
    "TranslationService",
]
