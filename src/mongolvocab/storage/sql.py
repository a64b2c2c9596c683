"""Structured storage backend over SQLAlchemy."""
import logging
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Dict, Iterator, List, Optional, Set

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mongolvocab.exceptions import StorageError
from mongolvocab.models.models import (
    CUSTOM_ID_OFFSET,
    BundleStatusEntry,
    DailyProgressRow,
    DeletedWord,
    ExtraSessionRow,
    MigrationStatus,
    PackStatusEntry,
    StreakHeader,
    StreakHistory,
    UserWord,
    WordConfidenceEntry,
    WordOverride,
)
from mongolvocab.models.vocab_models import (
    AcceptedPack,
    ConfidenceLevel,
    DailyProgress,
    DayRecord,
    DayStatus,
    DismissedPack,
    ExtraWordsSession,
    StreakData,
    Word,
    WordFields,
)
from mongolvocab.storage.base import (
    BUNDLE_APPLIED,
    BUNDLE_DISMISSED,
    PACK_ACCEPTED,
    PACK_DISMISSED,
    StorageBackend,
    Transaction,
    build_custom_word,
    guarded_read,
    guarded_write,
    next_custom_id,
)

logger = logging.getLogger(__name__)


def _word_from_row(word_id: int, row) -> Word:
    return Word(
        id=word_id,
        english=row.english,
        mongolian=row.mongolian,
        pronunciation=row.pronunciation or "",
        category=row.category,
    )


class SqlStorage(StorageBackend):
    """StorageBackend over a relational database session."""

    name = "sql"

    def __init__(self, db: Session, engine: Optional[Engine] = None):
        """Initialize the backend with a database session."""
        self.db = db
        self.engine = engine
        self._transaction: Optional[Transaction] = None

    @property
    def in_transaction(self) -> bool:
        return self._transaction is not None

    def _recover(self) -> None:
        if not self.in_transaction:
            self.db.rollback()

    def _commit(self) -> None:
        """Commit now, or flush when the write belongs to an open transaction."""
        if self.in_transaction:
            self.db.flush()
        else:
            self.db.commit()

    @contextmanager
    def atomic(self) -> Iterator[Transaction]:
        if self._transaction is not None:
            yield self._transaction
            return
        tx = self._transaction = Transaction()
        try:
            yield tx
            self.db.commit()
        except (StorageError, SQLAlchemyError) as e:
            self.db.rollback()
            tx.failed = True
            tx.error = e
            logger.error("Transaction rolled back: %s", e)
        except Exception:
            self.db.rollback()
            raise
        finally:
            self._transaction = None

    def close(self) -> None:
        self.db.close()
        if self.engine is not None:
            self.engine.dispose()

    # Streak

    @guarded_read(StreakData)
    def get_streak_data(self) -> StreakData:
        header = self.db.query(StreakHeader).filter(StreakHeader.id == 1).first()
        rows = self.db.query(StreakHistory).order_by(StreakHistory.date).all()
        history = [
            DayRecord(date=row.date, status=DayStatus(row.status), words_completed=row.words_completed)
            for row in rows
        ]
        if not header:
            return StreakData(history=history)
        return StreakData(
            current_streak=header.current_streak,
            longest_streak=header.longest_streak,
            last_completed_date=header.last_completed_date,
            streak_freeze_available=header.streak_freeze_available,
            streak_freeze_used_date=header.streak_freeze_used_date,
            history=history,
        )

    @guarded_write()
    def save_streak_data(self, data: StreakData) -> None:
        header = self.db.query(StreakHeader).filter(StreakHeader.id == 1).first()
        if not header:
            header = StreakHeader(id=1)
            self.db.add(header)
        header.current_streak = data.current_streak
        header.longest_streak = data.longest_streak
        header.last_completed_date = data.last_completed_date
        header.streak_freeze_available = data.streak_freeze_available
        header.streak_freeze_used_date = data.streak_freeze_used_date

        records = {record.date: record for record in data.history}
        existing = {row.date: row for row in self.db.query(StreakHistory).all()}
        for day, row in existing.items():
            if day not in records:
                self.db.delete(row)
        for day, record in records.items():
            row = existing.get(day)
            if row is None:
                row = StreakHistory(date=day)
                self.db.add(row)
            row.status = record.status.value
            row.words_completed = record.words_completed
        self._commit()

    # Confidence

    @guarded_read(dict)
    def get_word_confidence(self) -> Dict[int, ConfidenceLevel]:
        return {
            row.word_id: ConfidenceLevel(row.level)
            for row in self.db.query(WordConfidenceEntry).all()
        }

    @guarded_write()
    def set_word_confidence(self, word_id: int, level: ConfidenceLevel) -> None:
        row = self.db.get(WordConfidenceEntry, word_id)
        if row is None:
            row = WordConfidenceEntry(word_id=word_id)
            self.db.add(row)
        row.level = ConfidenceLevel(level).value
        self._commit()

    @guarded_write(default=False)
    def delete_word_confidence(self, word_id: int) -> bool:
        row = self.db.get(WordConfidenceEntry, word_id)
        if row is None:
            return False
        self.db.delete(row)
        self._commit()
        return True

    # User dictionary

    @guarded_read(list)
    def get_custom_words(self) -> List[Word]:
        rows = self.db.query(UserWord).order_by(UserWord.id).all()
        return [_word_from_row(row.word_id, row) for row in rows]

    @guarded_write()
    def add_custom_word(self, fields: WordFields) -> Optional[Word]:
        ids = [row_id + CUSTOM_ID_OFFSET for (row_id,) in self.db.query(UserWord.id).all()]
        word = build_custom_word(next_custom_id(ids), fields)
        self.db.add(UserWord(
            id=word.id - CUSTOM_ID_OFFSET,
            english=word.english,
            mongolian=word.mongolian,
            pronunciation=word.pronunciation,
            category=word.category,
        ))
        self._commit()
        return word

    @guarded_write(default=False)
    def insert_custom_word(self, word: Word) -> bool:
        if self.db.get(UserWord, word.id - CUSTOM_ID_OFFSET) is not None:
            return False
        self.db.add(UserWord(
            id=word.id - CUSTOM_ID_OFFSET,
            english=word.english,
            mongolian=word.mongolian,
            pronunciation=word.pronunciation,
            category=word.category,
        ))
        self._commit()
        return True

    @guarded_write(default=False)
    def update_custom_word(self, word: Word) -> bool:
        row = self.db.get(UserWord, word.id - CUSTOM_ID_OFFSET)
        if row is None:
            return False
        row.english = word.english
        row.mongolian = word.mongolian
        row.pronunciation = word.pronunciation
        row.category = word.category
        self._commit()
        return True

    @guarded_write(default=False)
    def delete_custom_word(self, word_id: int) -> bool:
        row = self.db.get(UserWord, word_id - CUSTOM_ID_OFFSET)
        if row is None:
            return False
        self.db.delete(row)
        self._commit()
        return True

    # Overrides

    @guarded_read(dict)
    def get_word_overrides(self) -> Dict[int, Word]:
        return {
            row.word_id: _word_from_row(row.word_id, row)
            for row in self.db.query(WordOverride).all()
        }

    @guarded_write()
    def save_word_override(self, word: Word) -> None:
        row = self.db.get(WordOverride, word.id)
        if row is None:
            row = WordOverride(word_id=word.id)
            self.db.add(row)
        row.english = word.english
        row.mongolian = word.mongolian
        row.pronunciation = word.pronunciation
        row.category = word.category
        self._commit()

    @guarded_write(default=False)
    def delete_word_override(self, word_id: int) -> bool:
        row = self.db.get(WordOverride, word_id)
        if row is None:
            return False
        self.db.delete(row)
        self._commit()
        return True

    # Deleted ids

    @guarded_read(set)
    def get_deleted_word_ids(self) -> Set[int]:
        return {word_id for (word_id,) in self.db.query(DeletedWord.word_id).all()}

    @guarded_write()
    def add_deleted_word_id(self, word_id: int) -> None:
        if self.db.get(DeletedWord, word_id) is None:
            self.db.add(DeletedWord(word_id=word_id))
            self._commit()

    @guarded_write(default=False)
    def remove_deleted_word_id(self, word_id: int) -> bool:
        row = self.db.get(DeletedWord, word_id)
        if row is None:
            return False
        self.db.delete(row)
        self._commit()
        return True

    # Packs and bundles

    @guarded_read(list)
    def get_accepted_packs(self) -> List[AcceptedPack]:
        rows = self.db.query(PackStatusEntry).filter(PackStatusEntry.status == PACK_ACCEPTED).all()
        return [AcceptedPack(pack_id=row.pack_id, version=row.version) for row in rows]

    @guarded_read(list)
    def get_dismissed_packs(self) -> List[DismissedPack]:
        rows = self.db.query(PackStatusEntry).filter(PackStatusEntry.status == PACK_DISMISSED).all()
        return [
            DismissedPack(pack_id=row.pack_id, version=row.version, timestamp=row.timestamp)
            for row in rows
        ]

    def _save_pack_status(self, pack_id: str, status: str, version: int, timestamp: float) -> None:
        row = self.db.get(PackStatusEntry, (pack_id, status))
        if row is None:
            row = PackStatusEntry(pack_id=pack_id, status=status)
            self.db.add(row)
        row.version = version
        row.timestamp = timestamp
        self._commit()

    @guarded_write()
    def save_accepted_pack(self, pack_id: str, version: int) -> None:
        self._save_pack_status(pack_id, PACK_ACCEPTED, version, datetime.now(UTC).timestamp())

    @guarded_write()
    def save_dismissed_pack(self, pack_id: str, version: int, timestamp: float) -> None:
        self._save_pack_status(pack_id, PACK_DISMISSED, version, timestamp)

    @guarded_read(dict)
    def get_bundle_states(self, status: str) -> Dict[str, float]:
        rows = self.db.query(BundleStatusEntry).filter(BundleStatusEntry.status == status).all()
        return {row.bundle_id: row.timestamp for row in rows}

    @guarded_write()
    def save_bundle_state(self, bundle_id: str, status: str, timestamp: float) -> None:
        row = self.db.get(BundleStatusEntry, bundle_id)
        if row is None:
            row = BundleStatusEntry(bundle_id=bundle_id)
            self.db.add(row)
        row.status = status
        row.timestamp = timestamp
        self._commit()

    # Progress

    @guarded_read(lambda: None)
    def get_daily_progress(self) -> Optional[DailyProgress]:
        row = self.db.get(DailyProgressRow, 1)
        if row is None:
            return None
        return DailyProgress(
            date=row.date,
            english_to_mongolian_completed=row.english_to_mongolian_completed,
            mongolian_to_english_completed=row.mongolian_to_english_completed,
            english_to_mongolian_progress=[int(i) for i in row.english_to_mongolian_progress],
            mongolian_to_english_progress=[int(i) for i in row.mongolian_to_english_progress],
        )

    @guarded_write()
    def save_daily_progress(self, progress: DailyProgress) -> None:
        row = self.db.get(DailyProgressRow, 1)
        if row is None:
            row = DailyProgressRow(id=1)
            self.db.add(row)
        row.date = progress.date
        row.english_to_mongolian_completed = progress.english_to_mongolian_completed
        row.mongolian_to_english_completed = progress.mongolian_to_english_completed
        row.english_to_mongolian_progress = list(progress.english_to_mongolian_progress)
        row.mongolian_to_english_progress = list(progress.mongolian_to_english_progress)
        self._commit()

    @guarded_write()
    def clear_daily_progress(self) -> None:
        self.db.query(DailyProgressRow).delete()
        self._commit()

    @guarded_read(lambda: None)
    def get_extra_session(self) -> Optional[ExtraWordsSession]:
        row = self.db.get(ExtraSessionRow, 1)
        if row is None:
            return None
        return ExtraWordsSession(
            date=row.date,
            english_to_mongolian_completed=row.english_to_mongolian_completed,
            mongolian_to_english_completed=row.mongolian_to_english_completed,
            english_to_mongolian_progress=[int(i) for i in row.english_to_mongolian_progress],
            mongolian_to_english_progress=[int(i) for i in row.mongolian_to_english_progress],
            session_id=row.session_id,
            words=[Word.from_dict(w) for w in row.words],
        )

    @guarded_write()
    def save_extra_session(self, session: ExtraWordsSession) -> None:
        row = self.db.get(ExtraSessionRow, 1)
        if row is None:
            row = ExtraSessionRow(id=1)
            self.db.add(row)
        row.session_id = session.session_id
        row.date = session.date
        row.words = [word.to_dict() for word in session.words]
        row.english_to_mongolian_completed = session.english_to_mongolian_completed
        row.mongolian_to_english_completed = session.mongolian_to_english_completed
        row.english_to_mongolian_progress = list(session.english_to_mongolian_progress)
        row.mongolian_to_english_progress = list(session.mongolian_to_english_progress)
        self._commit()

    @guarded_write()
    def clear_extra_session(self) -> None:
        self.db.query(ExtraSessionRow).delete()
        self._commit()

    # Migration

    @guarded_read(lambda: False)
    def has_migrated(self) -> bool:
        row = self.db.get(MigrationStatus, 1)
        return bool(row and row.migrated_from_legacy_store)

    @guarded_write()
    def mark_migration_complete(self) -> None:
        row = self.db.get(MigrationStatus, 1)
        if row is None:
            row = MigrationStatus(id=1)
            self.db.add(row)
        row.migrated_from_legacy_store = True
        row.migration_date = datetime.now(UTC)
        self._commit()

    def migrate_from(self, legacy: StorageBackend) -> bool:
        """Copy every record of a legacy store once. Returns True if it ran now."""
        if self.has_migrated():
            return False

        logger.info("Migrating records from the %s store", legacy.name)
        with self.atomic() as tx:
            self.save_streak_data(legacy.get_streak_data())
            for word_id, level in legacy.get_word_confidence().items():
                self.set_word_confidence(word_id, level)
            for word in legacy.get_custom_words():
                self.insert_custom_word(word)
            for word in legacy.get_word_overrides().values():
                self.save_word_override(word)
            for word_id in legacy.get_deleted_word_ids():
                self.add_deleted_word_id(word_id)
            for pack in legacy.get_dismissed_packs():
                self.save_dismissed_pack(pack.pack_id, pack.version, pack.timestamp)
            for pack in legacy.get_accepted_packs():
                self.save_accepted_pack(pack.pack_id, pack.version)
            for status in (BUNDLE_DISMISSED, BUNDLE_APPLIED):
                for bundle_id, timestamp in legacy.get_bundle_states(status).items():
                    self.save_bundle_state(bundle_id, status, timestamp)
            progress = legacy.get_daily_progress()
            if progress:
                self.save_daily_progress(progress)
            session = legacy.get_extra_session()
            if session:
                self.save_extra_session(session)
            self.mark_migration_complete()

        if tx.failed:
            logger.error("Migration from the %s store failed, will retry on next start", legacy.name)
            return False
        logger.info("Migration complete")
        return True
