"""Progress service for the daily word set and the optional extra session."""
import logging
import random
import uuid
from datetime import date
from typing import Callable, List, Optional, Union

from mongolvocab.config import LearningSettings, settings
from mongolvocab.models.vocab_models import (
    DailyProgress,
    ExtraWordsSession,
    PracticeMode,
    StreakResult,
    Word,
)
from mongolvocab.services.dictionary_service import DictionaryService, shuffle_words
from mongolvocab.services.streak_service import StreakService
from mongolvocab.storage.base import StorageBackend

logger = logging.getLogger(__name__)

# Each (mode, set) pair gets its own fixed order.
MODE_SEEDS = {
    PracticeMode.ENGLISH_TO_MONGOLIAN: 12345,
    PracticeMode.MONGOLIAN_TO_ENGLISH: 67890,
}
EXTRA_SEED_OFFSET = 11111


class ProgressService:
    """
    Service for tracking today's practice.

    Holds today's daily progress, the extra session (if any) and the day's
    word set. Every mutation is written to storage before returning.
    Records dated before today are treated as absent.
    """

    def __init__(
        self,
        storage: StorageBackend,
        dictionary: DictionaryService,
        streak: StreakService,
        clock: Callable[[], date] = date.today,
        learning: Optional[LearningSettings] = None,
    ):
        """Initialize the service and load today's state."""
        self.storage = storage
        self.dictionary = dictionary
        self.streak = streak
        self.clock = clock
        self.learning = learning or settings.learning
        self.daily_progress = DailyProgress(date=clock())
        self.extra_session: Optional[ExtraWordsSession] = None
        self.daily_words: List[Word] = []
        self.refresh()

    def refresh(self) -> None:
        """Reload today's state from storage."""
        today = self.clock()
        self.daily_progress = self.get_daily_progress()
        self.extra_session = self.get_extra_session()
        self.daily_words = self.dictionary.daily_words(today, self.learning.daily_words_count)

    def _ensure_today(self) -> None:
        if self.daily_progress.date != self.clock():
            logger.info("Day changed, reloading progress")
            self.refresh()

    # Stored records

    def get_daily_progress(self) -> DailyProgress:
        """Get today's progress, or a fresh record if the stored one is stale."""
        today = self.clock()
        stored = self.storage.get_daily_progress()
        if stored and stored.date == today:
            return stored
        return DailyProgress(date=today)

    def save_daily_progress(self, progress: DailyProgress) -> None:
        self.storage.save_daily_progress(progress)
        self.daily_progress = progress

    def get_extra_session(self) -> Optional[ExtraWordsSession]:
        """Get today's extra session; a stale one is discarded."""
        stored = self.storage.get_extra_session()
        if stored is None:
            return None
        if stored.date != self.clock():
            self.storage.clear_extra_session()
            return None
        return stored

    def save_extra_session(self, session: ExtraWordsSession) -> None:
        self.storage.save_extra_session(session)
        self.extra_session = session

    def clear_extra_session(self) -> None:
        self.storage.clear_extra_session()
        self.extra_session = None

    # Practice

    def _target(self, is_extra: bool) -> Optional[Union[DailyProgress, ExtraWordsSession]]:
        self._ensure_today()
        if is_extra:
            return self.extra_session
        return self.daily_progress

    def _persist(self, target: DailyProgress) -> None:
        if isinstance(target, ExtraWordsSession):
            self.save_extra_session(target)
        else:
            self.save_daily_progress(target)

    @property
    def has_extra_session(self) -> bool:
        self._ensure_today()
        return self.extra_session is not None

    def words_completed_today(self) -> int:
        """Total words done today; a word counts once across both directions."""
        self._ensure_today()
        extra = self.extra_session.max_mode_progress if self.extra_session else 0
        return extra + self.daily_progress.max_mode_progress

    def mark_card_completed(self, mode: PracticeMode, word_id: int, is_extra: bool = False) -> None:
        """Record a practiced card; repeated calls have no further effect."""
        target = self._target(is_extra)
        if target is None:
            return
        progress = target.progress(PracticeMode(mode))
        if word_id in progress:
            return
        progress.append(word_id)
        self._persist(target)

    def mark_mode_completed(self, mode: PracticeMode, is_extra: bool = False) -> Optional[StreakResult]:
        """
        Mark a practice direction as finished.

        Returns the streak outcome when today's total qualifies for the
        streak, otherwise None.
        """
        target = self._target(is_extra)
        if target is None:
            return None
        target.set_completed(PracticeMode(mode))
        self._persist(target)

        total = self.words_completed_today()
        if total >= self.learning.streak_min_words:
            return self.streak.check_and_update_streak(total)
        return None

    def get_words_for_mode(self, mode: PracticeMode, is_extra: bool = False) -> List[Word]:
        """Get the set's words in the fixed order for this direction."""
        self._ensure_today()
        mode = PracticeMode(mode)
        if is_extra and self.extra_session is not None:
            return shuffle_words(self.extra_session.words, MODE_SEEDS[mode] + EXTRA_SEED_OFFSET)
        return shuffle_words(self.daily_words, MODE_SEEDS[mode])

    def get_progress_for_mode(self, mode: PracticeMode, is_extra: bool = False) -> List[int]:
        target = self._target(is_extra)
        if target is None:
            return []
        return list(target.progress(PracticeMode(mode)))

    def is_mode_completed(self, mode: PracticeMode, is_extra: bool = False) -> bool:
        target = self._target(is_extra)
        return bool(target and target.is_completed(PracticeMode(mode)))

    def is_both_modes_completed(self, is_extra: bool = False) -> bool:
        target = self._target(is_extra)
        return bool(target and target.both_completed)

    # Sessions

    def _pick_words(self, exclude: set, count: int) -> List[Word]:
        available = [word for word in self.dictionary.resolve() if word.id not in exclude]
        return random.sample(available, min(count, len(available)))

    def request_new_words(self) -> ExtraWordsSession:
        """Start a new extra session, replacing any existing one."""
        self._ensure_today()
        self.clear_extra_session()
        words = self._pick_words({word.id for word in self.daily_words}, self.learning.extra_words_count)
        session = ExtraWordsSession(
            date=self.clock(),
            session_id=uuid.uuid4().hex,
            words=words,
        )
        self.save_extra_session(session)
        logger.info(f"Started extra session {session.session_id} with {len(words)} words")
        return session

    def delete_word_during_study(self, word_id: int, is_extra: bool = False) -> None:
        """Delete a word and put a replacement into the set being studied."""
        self._ensure_today()
        self.dictionary.delete_word(word_id)

        if is_extra and self.extra_session is not None:
            session = self.extra_session
            remaining = [word for word in session.words if word.id != word_id]
            in_use = {word.id for word in self.daily_words} | {word.id for word in remaining}
            session.words = remaining + self._pick_words(in_use, 1)
            self.save_extra_session(session)
        else:
            # The date-seeded order moves the next word up into the freed slot.
            self.daily_words = self.dictionary.daily_words(self.clock(), self.learning.daily_words_count)

    def reset_today(self) -> None:
        """Undo today's practice and the streak credit it earned."""
        self.streak.reset_today_progress()
        self.refresh()
