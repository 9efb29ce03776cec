"""
Internal data models and enums for the TranslateMe backend.

These are the values that flow between the translation client, the history
store and the orchestrating service. All of them are frozen: a record never
changes after the store creates it, and the view state is replaced, never
edited in place.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from enum import Enum
from datetime import datetime

from translateme.core.exceptions import ErrorCode
from translateme.models.language import (
    Language,
    DEFAULT_SOURCE_LANGUAGE,
    DEFAULT_TARGET_LANGUAGE,
)


class RequestState(str, Enum):
    """Stages a single translate request moves through."""
    IDLE = "idle"
    TRANSLATING = "translating"
    TRANSLATED = "translated"
    PERSISTING = "persisting"
    REFRESHED = "refreshed"
    FAILED = "failed"


class Operation(str, Enum):
    """User-visible operations whose outcome is reported in the view state."""
    NONE = "none"
    TRANSLATE = "translate"
    PERSIST = "persist"
    LOAD_HISTORY = "load_history"
    CLEAR_HISTORY = "clear_history"


@dataclass(frozen=True)
class TranslationRecord:
    """One persisted translation, as read back from the history store."""
    id: Any
    original: str
    translated: str
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class OperationStatus:
    """Outcome of the most recent operation; ``succeeded=False`` is the failure signal."""
    operation: Operation = Operation.NONE
    succeeded: bool = True
    error_code: Optional[ErrorCode] = None
    message: Optional[str] = None
    retryable: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operation": self.operation.value,
            "succeeded": self.succeeded,
            "error_code": self.error_code.value if self.error_code else None,
            "message": self.message,
            "retryable": self.retryable,
        }


@dataclass(frozen=True)
class ViewState:
    """Snapshot of everything the presentation layer displays."""
    input_text: str = ""
    translated_text: str = ""
    source_language: Language = DEFAULT_SOURCE_LANGUAGE
    target_language: Language = DEFAULT_TARGET_LANGUAGE
    history: tuple[TranslationRecord, ...] = field(default_factory=tuple)
    last_operation: OperationStatus = field(default_factory=OperationStatus)

    @property
    def last_operation_failed(self) -> bool:
        return not self.last_operation.succeeded


@dataclass(frozen=True)
class TranslateOutcome:
    """Result of one translate request as seen by its caller."""
    state: RequestState
    translated_text: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def succeeded(self) -> bool:
        return self.translated_text is not None
