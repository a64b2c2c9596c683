"""
Storage backend contract.

Business logic talks to one StorageBackend; the structured (SQL) and flat
key-value implementations are interchangeable and chosen once at startup.

Every getter returns a typed default when the record is absent or
unreadable, and every failed write is logged and dropped. Inside
``atomic()`` a failed write instead aborts the whole unit of work.
"""
import functools
import logging
from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Callable, Dict, Iterable, List, Optional, Set

from mongolvocab.exceptions import StorageError
from mongolvocab.models.vocab_models import (
    BUNDLE_ID_MIN,
    CUSTOM_ID_MIN,
    AcceptedPack,
    ConfidenceLevel,
    DailyProgress,
    DismissedPack,
    ExtraWordsSession,
    StreakData,
    Word,
    WordFields,
)
from mongolvocab.monitoring import storage_errors, storage_operations

logger = logging.getLogger(__name__)

BUNDLE_APPLIED = "applied"
BUNDLE_DISMISSED = "dismissed"

PACK_ACCEPTED = "accepted"
PACK_DISMISSED = "dismissed"


class Transaction:
    """Handle yielded by ``atomic()``; ``failed`` is set when the unit rolled back."""

    def __init__(self):
        self.failed = False
        self.error: Optional[Exception] = None


def guarded_read(default_factory: Callable):
    """Turn any failure of a read into the zero-value default."""
    def decorator(func):
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            storage_operations.labels(self.name, func.__name__).inc()
            try:
                return func(self, *args, **kwargs)
            except Exception as e:
                logger.error("Failed to %s (%s backend): %s", func.__name__, self.name, e)
                storage_errors.labels(self.name, func.__name__).inc()
                self._recover()
                return default_factory()
        return wrapper
    return decorator


def guarded_write(default=None):
    """Log and drop a failed write, or abort the surrounding transaction."""
    def decorator(func):
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            storage_operations.labels(self.name, func.__name__).inc()
            try:
                return func(self, *args, **kwargs)
            except Exception as e:
                logger.error("Failed to %s (%s backend): %s", func.__name__, self.name, e)
                storage_errors.labels(self.name, func.__name__).inc()
                if self.in_transaction:
                    raise StorageError(f"{func.__name__} failed: {e}") from e
                self._recover()
                return default
        return wrapper
    return decorator


def next_custom_id(existing_ids: Iterable[int], floor: int = CUSTOM_ID_MIN) -> int:
    """Get the next free id in the custom word range."""
    custom_ids = [i for i in existing_ids if CUSTOM_ID_MIN <= i < BUNDLE_ID_MIN]
    candidate = max([floor, *(i + 1 for i in custom_ids)])
    if candidate >= BUNDLE_ID_MIN:
        raise ValueError("Custom word id range exhausted")
    return candidate


def build_custom_word(word_id: int, fields: WordFields) -> Word:
    return Word(
        id=word_id,
        english=fields.english,
        mongolian=fields.mongolian,
        pronunciation=fields.pronunciation,
        category=fields.category or "custom",
    )


class StorageBackend(ABC):
    """Record-level persistence for every entity of the vocabulary core."""

    name = "base"

    @property
    @abstractmethod
    def in_transaction(self) -> bool:
        """Whether a write is part of an open ``atomic()`` unit."""

    def _recover(self) -> None:
        """Bring the backend back to a usable state after a failure."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager:
        """Group writes into one all-or-nothing unit yielding a Transaction."""

    def close(self) -> None:
        """Release backend resources."""

    # Streak

    @abstractmethod
    def get_streak_data(self) -> StreakData:
        """Get stored streak data."""

    @abstractmethod
    def save_streak_data(self, data: StreakData) -> None:
        """Replace stored streak data, history included."""

    # Confidence

    @abstractmethod
    def get_word_confidence(self) -> Dict[int, ConfidenceLevel]:
        """Get all confidence labels."""

    @abstractmethod
    def set_word_confidence(self, word_id: int, level: ConfidenceLevel) -> None:
        """Set the confidence label of a word."""

    @abstractmethod
    def delete_word_confidence(self, word_id: int) -> bool:
        """Delete a confidence label. Returns True if one existed."""

    # User dictionary

    @abstractmethod
    def get_custom_words(self) -> List[Word]:
        """Get words stored in the user dictionary."""

    @abstractmethod
    def add_custom_word(self, fields: WordFields) -> Optional[Word]:
        """Store a new custom word under a fresh custom id."""

    @abstractmethod
    def insert_custom_word(self, word: Word) -> bool:
        """Store a word under its own id. Returns False if the id is taken."""

    @abstractmethod
    def update_custom_word(self, word: Word) -> bool:
        """Replace a stored custom word. Returns False if absent."""

    @abstractmethod
    def delete_custom_word(self, word_id: int) -> bool:
        """Remove a custom word. Returns False if absent."""

    # Overrides

    @abstractmethod
    def get_word_overrides(self) -> Dict[int, Word]:
        """Get user edits of non-custom words."""

    @abstractmethod
    def save_word_override(self, word: Word) -> None:
        """Create or replace the override of a word."""

    @abstractmethod
    def delete_word_override(self, word_id: int) -> bool:
        """Delete an override. Returns True if one existed."""

    # Deleted ids

    @abstractmethod
    def get_deleted_word_ids(self) -> Set[int]:
        """Get ids of non-custom words hidden by the user."""

    @abstractmethod
    def add_deleted_word_id(self, word_id: int) -> None:
        """Hide a non-custom word."""

    @abstractmethod
    def remove_deleted_word_id(self, word_id: int) -> bool:
        """Unhide a word. Returns True if it was hidden."""

    # Packs and bundles

    @abstractmethod
    def get_accepted_packs(self) -> List[AcceptedPack]:
        """Get packs the user accepted."""

    @abstractmethod
    def get_dismissed_packs(self) -> List[DismissedPack]:
        """Get packs the user dismissed."""

    @abstractmethod
    def save_accepted_pack(self, pack_id: str, version: int) -> None:
        """Record a pack as accepted at a version."""

    @abstractmethod
    def save_dismissed_pack(self, pack_id: str, version: int, timestamp: float) -> None:
        """Record a pack as dismissed at a version."""

    @abstractmethod
    def get_bundle_states(self, status: str) -> Dict[str, float]:
        """Get bundle ids with the given status, mapped to decision time."""

    @abstractmethod
    def save_bundle_state(self, bundle_id: str, status: str, timestamp: float) -> None:
        """Record the user's decision on a bundle."""

    # Progress

    @abstractmethod
    def get_daily_progress(self) -> Optional[DailyProgress]:
        """Get the stored daily progress row, whatever its date."""

    @abstractmethod
    def save_daily_progress(self, progress: DailyProgress) -> None:
        """Replace the daily progress row."""

    @abstractmethod
    def clear_daily_progress(self) -> None:
        """Remove the daily progress row."""

    @abstractmethod
    def get_extra_session(self) -> Optional[ExtraWordsSession]:
        """Get the stored extra words session, whatever its date."""

    @abstractmethod
    def save_extra_session(self, session: ExtraWordsSession) -> None:
        """Replace the extra words session."""

    @abstractmethod
    def clear_extra_session(self) -> None:
        """Remove the extra words session."""
