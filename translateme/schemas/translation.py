from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from translateme.models.internal_models import OperationStatus, TranslationRecord, ViewState
from translateme.models.language import Language


class TextTranslationRequest(BaseModel):
    text: str = Field(..., min_length=1)
    source_language: Optional[Language] = None
    target_language: Optional[Language] = None


class TranslationRead(BaseModel):
    id: int
    original: str
    translated: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: TranslationRecord) -> "TranslationRead":
        return cls(
            id=record.id,
            original=record.original,
            translated=record.translated,
            created_at=record.created_at,
        )


class OperationStatusRead(BaseModel):
    operation: str
    succeeded: bool
    error_code: Optional[str] = None
    message: Optional[str] = None
    retryable: bool = False

    @classmethod
    def from_status(cls, status: OperationStatus) -> "OperationStatusRead":
        return cls(**status.to_dict())


class ViewStateRead(BaseModel):
    input_text: str
    translated_text: str
    source_language: Language
    target_language: Language
    history: list[TranslationRead]
    last_operation: OperationStatusRead

    @classmethod
    def from_state(cls, state: ViewState) -> "ViewStateRead":
        return cls(
            input_text=state.input_text,
            translated_text=state.translated_text,
            source_language=state.source_language,
            target_language=state.target_language,
            history=[TranslationRead.from_record(r) for r in state.history],
            last_operation=OperationStatusRead.from_status(state.last_operation),
        )


class TextTranslationResponse(BaseModel):
    original_text: str
    translated_text: str
    source_language: Language
    target_language: Language
    history: list[TranslationRead]


class ClearHistoryResponse(BaseModel):
    deleted: int
    history: list[TranslationRead]


class LanguageRead(BaseModel):
    code: str
    name: str
