"""Translation and history endpoints."""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
import logging

from translateme.core.dependencies import get_translation_service
from translateme.models.internal_models import OperationStatus
from translateme.models.language import Language
from translateme.schemas.translation import (
    ClearHistoryResponse,
    LanguageRead,
    TextTranslationRequest,
    TextTranslationResponse,
    TranslationRead,
    ViewStateRead,
)
from translateme.services.translation_service import TranslationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/translation", tags=["translation"])


def _history(service: TranslationService) -> list[dict]:
    return [TranslationRead.from_record(r).model_dump(mode="json") for r in service.view_state.history]


def _error_response(status_code: int, data, status: OperationStatus) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "status": "error",
            "data": data,
            "error": f"{status.error_code.value}: {status.message}",
        },
    )


@router.get("/languages")
async def list_languages():
    data = [LanguageRead(code=lang.value, name=lang.display_name).model_dump() for lang in Language]
    return {"status": "ok", "data": data, "error": None}


@router.post("/text")
async def translate_text(
    request: TextTranslationRequest,
    service: TranslationService = Depends(get_translation_service),
):
    """
    Translate text and record it in the history.
    Falls back to the languages selected in the view state when none are given.
    """
    if request.source_language or request.target_language:
        state = service.view_state
        service.set_languages(
            request.source_language or state.source_language,
            request.target_language or state.target_language,
        )
    # Another request may change the selection while this one awaits the lookup.
    source, target = service.view_state.source_language, service.view_state.target_language

    outcome = await service.translate(request.text, source, target)
    state = service.view_state

    if not outcome.succeeded:
        return _error_response(
            502, ViewStateRead.from_state(state).model_dump(mode="json"), state.last_operation
        )

    response_data = TextTranslationResponse(
        original_text=request.text,
        translated_text=outcome.translated_text,
        source_language=source,
        target_language=target,
        history=[TranslationRead.from_record(r) for r in state.history],
    )
    return {"status": "ok", "data": response_data.model_dump(mode="json"), "error": None}


@router.get("/history")
async def get_history(service: TranslationService = Depends(get_translation_service)):
    await service.refresh_history()
    status = service.view_state.last_operation
    if not status.succeeded:
        logger.warning(f"History read reported {status.error_code.value}")
        return _error_response(503, _history(service), status)
    return {"status": "ok", "data": _history(service), "error": None}


@router.delete("/history")
async def clear_history(service: TranslationService = Depends(get_translation_service)):
    deleted = await service.clear_history()
    status = service.view_state.last_operation
    data = ClearHistoryResponse(
        deleted=deleted,
        history=[TranslationRead.from_record(r) for r in service.view_state.history],
    ).model_dump(mode="json")

    if not status.succeeded:
        logger.warning(f"History clear reported {status.error_code.value}")
        return _error_response(503, data, status)
    return {"status": "ok", "data": data, "error": None}


@router.get("/state")
async def get_state(service: TranslationService = Depends(get_translation_service)):
    return {
        "status": "ok",
        "data": ViewStateRead.from_state(service.view_state).model_dump(mode="json"),
        "error": None,
    }
