"""
Translation service for the TranslateMe backend.

Runs the translate -> persist -> refresh chain and owns the view state the
presentation layer renders. Each step is awaited before the next one starts,
so within one request the lookup always finishes before the history write,
and the write before the history re-read. Separate requests are not
serialized against each other: whichever re-read completes last decides the
displayed history.
"""

import logging
from dataclasses import replace
from typing import Callable, List, Optional

from translateme.config.settings import ClearPolicy
from translateme.core.exceptions import StoreError, TranslateMeException
from translateme.models.internal_models import (
    Operation,
    OperationStatus,
    RequestState,
    TranslateOutcome,
    ViewState,
)
from translateme.models.language import Language
from translateme.services.history_store import HistoryStore
from translateme.services.translation_client import TranslationClient

ViewStateListener = Callable[[ViewState], None]


class TranslationService:
    """
    Orchestrates the translation client and the history store.

    The service is the only writer of ``ViewState``. Every change replaces the
    current snapshot and is pushed to subscribers.
    """

    def __init__(
        self,
        client: TranslationClient,
        store: HistoryStore,
        clear_policy: ClearPolicy = ClearPolicy.RECONCILE,
        initial_state: Optional[ViewState] = None,
    ):
        self.logger = logging.getLogger(__name__)
        self.client = client
        self.store = store
        self.clear_policy = clear_policy
        self._state = initial_state or ViewState()
        self._listeners: List[ViewStateListener] = []

        self.logger.info(f"TranslationService initialized (clear policy: {clear_policy.value})")

    @property
    def view_state(self) -> ViewState:
        return self._state

    def subscribe(self, listener: ViewStateListener) -> Callable[[], None]:
        """Register a listener for published view states; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, **changes) -> ViewState:
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                self.logger.exception("View state listener failed")
        return self._state

    def _report_failure(self, operation: Operation, error: TranslateMeException) -> None:
        self._publish(
            last_operation=OperationStatus(
                operation=operation,
                succeeded=False,
                error_code=error.error_code,
                message=error.message,
                retryable=error.retryable,
            )
        )

    def set_languages(self, source_language: Language, target_language: Language) -> ViewState:
        return self._publish(
            source_language=Language(source_language),
            target_language=Language(target_language),
        )

    def _advance(self, current: RequestState, new: RequestState) -> RequestState:
        self.logger.debug(f"Request state {current.value} -> {new.value}")
        return new

    async def translate(
        self,
        text: str,
        source_language: Optional[Language] = None,
        target_language: Optional[Language] = None,
    ) -> TranslateOutcome:
        """
        Translate ``text``, store the pair and refresh the history.

        Args:
            text: Text entered by the user
            source_language: Defaults to the language currently selected in the view state
            target_language: Defaults to the language currently selected in the view state

        Returns:
            TranslateOutcome with the final request state. On failure the
            displayed translation is left as it was and nothing is stored.
        """
        source = source_language or self._state.source_language
        target = target_language or self._state.target_language
        self._publish(input_text=text)

        state = self._advance(RequestState.IDLE, RequestState.TRANSLATING)
        try:
            translated = await self.client.translate(text, source, target)
        except TranslateMeException as e:
            self.logger.warning(f"Translation failed ({e.error_code.value}): {e.message}")
            self._report_failure(Operation.TRANSLATE, e)
            state = self._advance(state, RequestState.FAILED)
            return TranslateOutcome(state=state, error=e)

        self._publish(
            translated_text=translated,
            last_operation=OperationStatus(operation=Operation.TRANSLATE),
        )
        state = self._advance(state, RequestState.TRANSLATED)

        state = self._advance(state, RequestState.PERSISTING)
        try:
            await self.store.append(text, translated)
        except StoreError as e:
            # The re-read below still runs so the view matches the store.
            self._report_failure(Operation.PERSIST, e)

        await self._reload_history()
        state = self._advance(state, RequestState.REFRESHED)
        return TranslateOutcome(state=state, translated_text=translated)

    async def _reload_history(self) -> bool:
        try:
            records = await self.store.list_all()
        except StoreError as e:
            self._publish(history=())
            self._report_failure(Operation.LOAD_HISTORY, e)
            return False
        self._publish(history=tuple(records))
        return True

    async def refresh_history(self) -> ViewState:
        """Re-read the history; a failed read shows an empty history."""
        if await self._reload_history():
            self._publish(last_operation=OperationStatus(operation=Operation.LOAD_HISTORY))
        return self._state

    async def clear_history(self) -> int:
        """
        Clear the stored history and update the displayed list.

        With ``ClearPolicy.RECONCILE`` the history is always re-read after the
        clear, whether it succeeded or not. With ``ClearPolicy.OPTIMISTIC`` a
        successful clear empties the displayed list without re-reading and a
        failed one leaves it untouched.

        Returns:
            Number of records deleted (0 when the clear failed outright)
        """
        deleted = 0
        failure: Optional[StoreError] = None
        try:
            deleted = await self.store.clear_all()
        except StoreError as e:
            failure = e
            deleted = getattr(e, "deleted", 0)
            self.logger.error(f"Clearing history failed: {e.message}")

        reloaded = True
        if self.clear_policy == ClearPolicy.RECONCILE:
            reloaded = await self._reload_history()
        elif failure is None:
            self._publish(history=())

        if failure is not None:
            self._report_failure(Operation.CLEAR_HISTORY, failure)
        elif reloaded:
            self._publish(last_operation=OperationStatus(operation=Operation.CLEAR_HISTORY))
        return deleted
