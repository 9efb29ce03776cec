"""Translation history persistence against the ``translations`` collection."""
import logging
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import (
    DisconnectionError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from translateme.core.exceptions import PartialDeleteError, StoreError, StoreErrorKind
from translateme.models.internal_models import TranslationRecord
from translateme.models.translation import TranslationDocument

logger = logging.getLogger(__name__)

_PERMISSION_MARKERS = ("permission denied", "access denied", "not authorized", "readonly", "read-only")


def classify_store_error(exc: BaseException) -> StoreErrorKind:
    message = str(getattr(exc, "orig", None) or exc).lower()
    if any(marker in message for marker in _PERMISSION_MARKERS):
        return StoreErrorKind.PERMISSION_DENIED
    if isinstance(exc, (OperationalError, InterfaceError, DisconnectionError, PoolTimeoutError, OSError)):
        return StoreErrorKind.CONNECTIVITY
    return StoreErrorKind.REJECTED


def _store_error(operation: str, exc: BaseException) -> StoreError:
    kind = classify_store_error(exc)
    logger.error(
        f"History {operation} failed ({kind.value}): {exc}",
        extra={"operation": operation, "kind": kind.value},
    )
    return StoreError(operation, kind, details={"exception_type": type(exc).__name__})


def _to_record(doc: TranslationDocument) -> Optional[TranslationRecord]:
    if not isinstance(doc.original, str) or not isinstance(doc.translated, str):
        return None
    return TranslationRecord(
        id=doc.id,
        original=doc.original,
        translated=doc.translated,
        created_at=doc.timestamp,
    )


class HistoryStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession], batch_delete: bool = True):
        self._session_factory = session_factory
        self.batch_delete = batch_delete

    async def append(self, original: str, translated: str) -> TranslationRecord:
        """Create one history document; the store assigns its id and timestamp."""
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    doc = TranslationDocument(original=original, translated=translated)
                    session.add(doc)
        except (SQLAlchemyError, OSError) as e:
            raise _store_error("append", e) from e
        logger.debug(f"Saved translation {doc.id}")
        return TranslationRecord(id=doc.id, original=original, translated=translated, created_at=doc.timestamp)

    async def list_all(self) -> list[TranslationRecord]:
        """Every well-formed record, newest first."""
        stmt = select(TranslationDocument).order_by(
            TranslationDocument.timestamp.desc(), TranslationDocument.id.desc()
        )
        try:
            async with self._session_factory() as session:
                docs = (await session.execute(stmt)).scalars().all()
        except (SQLAlchemyError, OSError) as e:
            raise _store_error("list", e) from e

        records = [r for r in (_to_record(d) for d in docs) if r is not None]
        skipped = len(docs) - len(records)
        if skipped:
            logger.debug(f"Skipped {skipped} malformed history documents")
        return records

    async def clear_all(self) -> int:
        """
        Delete every record present when the clear starts.

        Returns the number of records deleted. Records created after the
        identifier snapshot is taken are left alone.
        """
        if self.batch_delete:
            return await self._clear_batch()
        return await self._clear_individually()

    async def _snapshot_ids(self) -> list:
        try:
            async with self._session_factory() as session:
                return list((await session.execute(select(TranslationDocument.id))).scalars().all())
        except (SQLAlchemyError, OSError) as e:
            raise _store_error("clear", e) from e

    async def _clear_batch(self) -> int:
        ids = await self._snapshot_ids()
        if not ids:
            return 0
        stmt = (
            delete(TranslationDocument)
            .where(TranslationDocument.id.in_(ids))
            .execution_options(synchronize_session=False)
        )
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    await session.execute(stmt)
        except (SQLAlchemyError, OSError) as e:
            raise _store_error("clear", e) from e
        logger.info(f"Cleared {len(ids)} history records")
        return len(ids)

    async def _clear_individually(self) -> int:
        ids = await self._snapshot_ids()
        deleted = 0
        first_failure: Optional[BaseException] = None
        for doc_id in ids:
            try:
                async with self._session_factory() as session:
                    async with session.begin():
                        await session.execute(
                            delete(TranslationDocument)
                            .where(TranslationDocument.id == doc_id)
                            .execution_options(synchronize_session=False)
                        )
                deleted += 1
            except (SQLAlchemyError, OSError) as e:
                logger.warning(f"Could not delete history record {doc_id}: {e}")
                first_failure = first_failure or e

        failed = len(ids) - deleted
        if first_failure is not None:
            logger.error(f"History clear incomplete: {deleted} deleted, {failed} failed")
            raise PartialDeleteError(deleted, failed, classify_store_error(first_failure)) from first_failure
        logger.info(f"Cleared {deleted} history records")
        return deleted
