"""Streak service for evaluating daily completion and the weekly freeze."""
import copy
import logging
from datetime import date, timedelta
from typing import Callable, Dict, List, Optional, Tuple

from mongolvocab.config import LearningSettings, settings
from mongolvocab.models.vocab_models import (
    DayRecord,
    DayStatus,
    StreakData,
    StreakResult,
    WeekDay,
)
from mongolvocab.monitoring import streak_updates
from mongolvocab.storage.base import StorageBackend

logger = logging.getLogger(__name__)

WEEK_LABELS = ("S", "M", "T", "W", "T", "F", "S")

ONE_DAY = timedelta(days=1)


def week_start(day: date) -> date:
    """Get the Sunday that starts the day's week."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def is_same_week(first: date, second: date) -> bool:
    return week_start(first) == week_start(second)


def _upsert_record(data: StreakData, record: DayRecord) -> None:
    data.history = [r for r in data.history if r.date != record.date]
    data.history.append(record)


def _trim_history(data: StreakData, history_days: int) -> None:
    data.history.sort(key=lambda r: r.date)
    if len(data.history) > history_days:
        data.history = data.history[-history_days:]


def evaluate(
    data: StreakData,
    words_completed_today: int,
    today: date,
    min_words: int = 5,
    freeze_min_words: int = 10,
    history_days: int = 30,
) -> Tuple[StreakData, StreakResult]:
    """
    Evaluate today's completion against the streak.

    Returns the updated data (a copy; the input is left untouched) and the
    outcome. A day already completed only raises its word count.
    """
    data = copy.deepcopy(data)
    unchanged = StreakResult(False, False, False, data.current_streak)

    record = data.record_for(today)
    if record and record.status == DayStatus.COMPLETED:
        record.words_completed = max(record.words_completed, words_completed_today)
        return data, unchanged

    if words_completed_today < min_words:
        return data, unchanged

    broken = used_freeze = False
    last = data.last_completed_date

    if last is None:
        data.current_streak = 1
    elif last == today - ONE_DAY:
        data.current_streak += 1
    elif (
        last == today - 2 * ONE_DAY
        and data.streak_freeze_available
        and words_completed_today >= freeze_min_words
    ):
        yesterday = today - ONE_DAY
        _upsert_record(data, DayRecord(yesterday, DayStatus.PAUSED, 0))
        data.streak_freeze_available = False
        data.streak_freeze_used_date = yesterday
        data.current_streak += 1
        used_freeze = True
    else:
        data.current_streak = 1
        broken = True

    _upsert_record(data, DayRecord(today, DayStatus.COMPLETED, words_completed_today))
    data.last_completed_date = today
    data.longest_streak = max(data.longest_streak, data.current_streak)
    _trim_history(data, history_days)

    return data, StreakResult(True, broken, used_freeze, data.current_streak)


def count_streak_ending(history: List[DayRecord], end: date) -> int:
    """Count completed days in the unbroken run ending at ``end``; paused days bridge it."""
    statuses: Dict[date, DayStatus] = {record.date: record.status for record in history}
    count = 0
    day = end
    while statuses.get(day) in (DayStatus.COMPLETED, DayStatus.PAUSED):
        if statuses[day] == DayStatus.COMPLETED:
            count += 1
        day -= ONE_DAY
    return count


def day_status(day: date, data: StreakData, today: date) -> DayStatus:
    """Get the display status of a calendar day."""
    if day > today:
        return DayStatus.FUTURE
    record = data.record_for(day)
    if record and record.status in (DayStatus.COMPLETED, DayStatus.PAUSED):
        return record.status
    if day == today:
        return DayStatus.PENDING
    return DayStatus.MISSED


def week_days(reference: date) -> List[WeekDay]:
    """Get the Sunday-to-Saturday week containing the reference date."""
    start = week_start(reference)
    return [WeekDay(start + timedelta(days=i), label) for i, label in enumerate(WEEK_LABELS)]


class StreakService:
    """Service for tracking the daily practice streak."""

    def __init__(
        self,
        storage: StorageBackend,
        clock: Callable[[], date] = date.today,
        learning: Optional[LearningSettings] = None,
    ):
        """Initialize the service with a storage backend and a clock."""
        self.storage = storage
        self.clock = clock
        self.learning = learning or settings.learning

    def get_streak_data(self) -> StreakData:
        """Get streak data, renewing the freeze once its week has passed."""
        data = self.storage.get_streak_data()
        used = data.streak_freeze_used_date
        if used and not is_same_week(used, self.clock()):
            data.streak_freeze_available = True
            data.streak_freeze_used_date = None
            self.storage.save_streak_data(data)
            logger.info("Streak freeze renewed for the new week")
        return data

    def check_and_update_streak(self, words_completed_today: int) -> StreakResult:
        """Evaluate today's completion and persist any change."""
        today = self.clock()
        data = self.get_streak_data()
        updated, result = evaluate(
            data,
            words_completed_today,
            today,
            min_words=self.learning.streak_min_words,
            freeze_min_words=self.learning.freeze_min_words,
            history_days=self.learning.streak_history_days,
        )
        if updated != data:
            self.storage.save_streak_data(updated)

        if result.used_freeze:
            streak_updates.labels("freeze").inc()
            logger.info(f"Streak freeze used for {today - ONE_DAY}, streak is {result.new_streak}")
        elif result.streak_broken:
            streak_updates.labels("broken").inc()
            logger.info(f"Streak broken, restarting at {result.new_streak}")
        elif result.streak_incremented:
            streak_updates.labels("incremented").inc()
            logger.info(f"Streak incremented to {result.new_streak}")
        return result

    def reset_today_progress(self) -> StreakData:
        """
        Undo today's practice.

        Clears today's progress and extra session, removes today's history
        record and winds the streak back to where it stood before today.
        The longest streak is kept.
        """
        today = self.clock()
        yesterday = today - ONE_DAY
        data = self.get_streak_data()

        with self.storage.atomic():
            self.storage.clear_daily_progress()
            self.storage.clear_extra_session()

            if data.last_completed_date == today:
                counted_today = data.current_streak
                paused = data.record_for(yesterday)
                if (
                    data.streak_freeze_used_date == yesterday
                    and paused is not None
                    and paused.status == DayStatus.PAUSED
                ):
                    data.history.remove(paused)
                    data.streak_freeze_available = True
                    data.streak_freeze_used_date = None

                data.history = [r for r in data.history if r.date != today]
                completed = [r.date for r in data.history if r.status == DayStatus.COMPLETED]
                data.last_completed_date = max(completed) if completed else None

                if counted_today > 1:
                    data.current_streak = counted_today - 1
                elif data.last_completed_date:
                    data.current_streak = count_streak_ending(data.history, data.last_completed_date)
                else:
                    data.current_streak = 0
            else:
                data.history = [r for r in data.history if r.date != today]

            self.storage.save_streak_data(data)

        logger.info(f"Reset today's progress, streak is {data.current_streak}")
        return data

    def get_week_days(self, reference: Optional[date] = None) -> List[WeekDay]:
        """Get the week strip for the reference date (today by default)."""
        return week_days(reference or self.clock())

    def day_status(self, day: date, data: Optional[StreakData] = None) -> DayStatus:
        """Get the display status of a calendar day."""
        return day_status(day, data or self.get_streak_data(), self.clock())
