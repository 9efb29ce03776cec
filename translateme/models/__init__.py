from .language import Language, DEFAULT_SOURCE_LANGUAGE, DEFAULT_TARGET_LANGUAGE
from .translation import TranslationDocument
from .internal_models import (
    RequestState,
    Operation,
    TranslationRecord,
    OperationStatus,
    ViewState,
    TranslateOutcome,
)

__all__ = [
    "Language",
    "DEFAULT_SOURCE_LANGUAGE",
    "DEFAULT_TARGET_LANGUAGE",
    "TranslationDocument",
    "RequestState",
    "Operation",
    "TranslationRecord",
    "OperationStatus",
    "ViewState",
    "TranslateOutcome",
]
