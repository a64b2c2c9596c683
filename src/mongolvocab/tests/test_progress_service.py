"""Tests for progress service."""
from datetime import date, timedelta

from mongolvocab.models.vocab_models import (
    DailyProgress,
    ExtraWordsSession,
    PracticeMode,
    Word,
)

E2M = PracticeMode.ENGLISH_TO_MONGOLIAN
M2E = PracticeMode.MONGOLIAN_TO_ENGLISH

TODAY = date(2026, 3, 11)
YESTERDAY = TODAY - timedelta(days=1)


def complete_cards(progress_service, mode, words, is_extra=False):
    for word in words:
        progress_service.mark_card_completed(mode, word.id, is_extra)


def test_stale_daily_progress_is_not_returned(progress_service, storage):
    """Test that yesterday's progress reads as a fresh record for today."""
    storage.save_daily_progress(DailyProgress(
        date=YESTERDAY,
        english_to_mongolian_completed=True,
        english_to_mongolian_progress=[1, 2, 3],
    ))

    assert progress_service.get_daily_progress() == DailyProgress(date=TODAY)


def test_stale_extra_session_is_discarded(progress_service, storage):
    storage.save_extra_session(ExtraWordsSession(date=YESTERDAY, session_id="old"))

    assert progress_service.get_extra_session() is None
    assert storage.get_extra_session() is None


def test_daily_words_loaded_on_start(progress_service, dictionary_service):
    assert len(progress_service.daily_words) == 5
    assert progress_service.daily_words == dictionary_service.daily_words(TODAY, 5)


def test_mark_card_completed_is_idempotent(progress_service, storage):
    word_id = progress_service.daily_words[0].id

    progress_service.mark_card_completed(E2M, word_id)
    progress_service.mark_card_completed(E2M, word_id)

    assert progress_service.get_progress_for_mode(E2M) == [word_id]
    assert storage.get_daily_progress().english_to_mongolian_progress == [word_id]


def test_extra_marks_without_session_are_ignored(progress_service, storage):
    progress_service.mark_card_completed(E2M, 1, is_extra=True)

    assert progress_service.mark_mode_completed(E2M, is_extra=True) is None
    assert storage.get_extra_session() is None
    assert progress_service.get_progress_for_mode(E2M, is_extra=True) == []
    assert not progress_service.is_mode_completed(E2M, is_extra=True)


def test_mode_completion_below_threshold_skips_streak(progress_service, storage):
    complete_cards(progress_service, E2M, progress_service.daily_words[:3])

    assert progress_service.mark_mode_completed(E2M) is None
    assert progress_service.is_mode_completed(E2M)
    assert not progress_service.is_both_modes_completed()
    assert storage.get_streak_data().current_streak == 0


def test_mode_completion_feeds_streak(progress_service, storage):
    complete_cards(progress_service, E2M, progress_service.daily_words)
    result = progress_service.mark_mode_completed(E2M)

    assert result.streak_incremented
    assert result.new_streak == 1

    complete_cards(progress_service, M2E, progress_service.daily_words)
    again = progress_service.mark_mode_completed(M2E)

    assert not again.streak_incremented
    assert progress_service.is_both_modes_completed()
    assert storage.get_streak_data().record_for(TODAY).words_completed == 5


def test_words_completed_today_combines_sets(progress_service, storage):
    """Test that daily and extra progress add up, each counted once across modes."""
    daily = progress_service.daily_words
    complete_cards(progress_service, E2M, daily[:3])
    complete_cards(progress_service, M2E, daily[:2])
    session = progress_service.request_new_words()
    complete_cards(progress_service, M2E, session.words[:2], is_extra=True)

    assert progress_service.words_completed_today() == 5
    result = progress_service.mark_mode_completed(M2E, is_extra=True)

    assert result.streak_incremented
    assert storage.get_extra_session().mongolian_to_english_completed


def test_words_for_mode_are_stable_per_mode(progress_service):
    e2m = progress_service.get_words_for_mode(E2M)
    m2e = progress_service.get_words_for_mode(M2E)

    assert progress_service.get_words_for_mode(E2M) == e2m
    assert sorted(w.id for w in e2m) == sorted(w.id for w in progress_service.daily_words)
    assert sorted(w.id for w in m2e) == sorted(w.id for w in e2m)


def test_words_for_extra_mode_use_session_words(progress_service):
    session = progress_service.request_new_words()

    words = progress_service.get_words_for_mode(E2M, is_extra=True)

    assert sorted(w.id for w in words) == sorted(w.id for w in session.words)
    assert progress_service.get_words_for_mode(E2M, is_extra=True) == words


def test_request_new_words(progress_service, storage):
    daily_ids = {w.id for w in progress_service.daily_words}

    first = progress_service.request_new_words()
    second = progress_service.request_new_words()

    assert len(second.words) == 5
    assert not daily_ids & {w.id for w in second.words}
    assert first.session_id != second.session_id
    assert storage.get_extra_session() == second
    assert progress_service.has_extra_session


def test_new_session_starts_without_progress(progress_service):
    session = progress_service.request_new_words()
    progress_service.mark_card_completed(E2M, session.words[0].id, is_extra=True)

    progress_service.request_new_words()

    assert progress_service.get_progress_for_mode(E2M, is_extra=True) == []


def test_delete_word_during_daily_study(progress_service, storage):
    deleted = progress_service.daily_words[1]

    progress_service.delete_word_during_study(deleted.id)

    assert len(progress_service.daily_words) == 5
    assert deleted not in progress_service.daily_words
    assert storage.get_deleted_word_ids() == {deleted.id}


def test_delete_word_during_extra_study(progress_service, storage):
    session = progress_service.request_new_words()
    deleted = session.words[0]

    progress_service.delete_word_during_study(deleted.id, is_extra=True)

    stored = storage.get_extra_session()
    assert len(stored.words) == 5
    assert deleted.id not in {w.id for w in stored.words}
    daily_ids = {w.id for w in progress_service.daily_words}
    assert not daily_ids & {w.id for w in stored.words}


def test_progress_rolls_over_to_next_day(progress_service, clock):
    word_id = progress_service.daily_words[0].id
    progress_service.mark_card_completed(E2M, word_id)
    progress_service.request_new_words()

    clock.advance()

    assert progress_service.get_progress_for_mode(E2M) == []
    assert progress_service.daily_progress.date == TODAY + timedelta(days=1)
    assert not progress_service.has_extra_session


def test_reset_today_clears_progress_and_streak(progress_service, storage):
    complete_cards(progress_service, E2M, progress_service.daily_words)
    progress_service.mark_mode_completed(E2M)
    progress_service.request_new_words()

    progress_service.reset_today()

    assert progress_service.get_progress_for_mode(E2M) == []
    assert not progress_service.has_extra_session
    assert storage.get_daily_progress() is None
    assert storage.get_streak_data().current_streak == 0


def test_custom_words_can_be_drawn_into_extra_session(progress_service, dictionary_service, storage):
    """Test that extra words come from the resolved dictionary, custom words included."""
    for word in dictionary_service.resolve():
        if word not in progress_service.daily_words:
            storage.add_deleted_word_id(word.id)
    custom = dictionary_service.add_word("Tea", "Цай", "Tsai")

    session = progress_service.request_new_words()

    assert session.words == [Word(custom.id, "Tea", "Цай", "Tsai", "custom")]
