"""Tests for vocabulary data models."""
from datetime import date

import pytest

from mongolvocab.data.bundles import BUNDLES
from mongolvocab.data.dictionary import DICTIONARY, DICTIONARY_IDS
from mongolvocab.data.packs import PACK_WORDS, PACKS, get_pack_meta, get_pack_words
from mongolvocab.models.vocab_models import (
    DailyProgress,
    DayRecord,
    DayStatus,
    ExtraWordsSession,
    PracticeMode,
    StreakData,
    Word,
    WordKind,
    WordRef,
    classify_word_id,
)


@pytest.mark.parametrize("word_id,kind", [
    (1, WordKind.BASE),
    (999, WordKind.BASE),
    (1000, WordKind.CUSTOM),
    (99999, WordKind.CUSTOM),
    (100000, WordKind.BUNDLE),
    (199999, WordKind.BUNDLE),
    (200000, WordKind.PACK),
    (300001, WordKind.PACK),
])
def test_classify_word_id(word_id, kind):
    """Test that id ranges map to their provenance."""
    assert classify_word_id(word_id) == kind


def test_word_ref_translates_flat_ids():
    """Test that a tagged ref and its flat id describe the same word."""
    ref = WordRef.from_id(1005)
    assert ref == WordRef(WordKind.CUSTOM, 5)
    assert ref.word_id == 1005
    assert Word(200003, "Horse", "Морь").ref == WordRef(WordKind.PACK, 3)


def test_word_same_content_ignores_id():
    """Test content comparison between words."""
    first = Word(1, "Dog", "Нохой", "Nokhoi", "animals")
    assert first.same_content(Word(200001, "Dog", "Нохой", "Nokhoi", "animals"))
    assert not first.same_content(Word(1, "Dog", "Нохой", "Nokhoi!", "animals"))


def test_word_from_dict_fills_defaults():
    """Test loading a word stored without optional fields."""
    word = Word.from_dict({"id": "1001", "english": "Tea", "mongolian": "Цай"})
    assert word == Word(1001, "Tea", "Цай", "", "custom")


def test_daily_progress_counts_words_once_across_modes():
    """Test that a word practiced in both directions counts once."""
    progress = DailyProgress(date=date(2026, 3, 11))
    progress.progress(PracticeMode.ENGLISH_TO_MONGOLIAN).extend([1, 2, 3])
    progress.progress(PracticeMode.MONGOLIAN_TO_ENGLISH).extend([1, 2])
    assert progress.max_mode_progress == 3

    progress.set_completed(PracticeMode.ENGLISH_TO_MONGOLIAN)
    assert progress.is_completed(PracticeMode.ENGLISH_TO_MONGOLIAN)
    assert not progress.both_completed


def test_extra_session_serialization():
    """Test that an extra session survives a dict round trip."""
    session = ExtraWordsSession(
        date=date(2026, 3, 11),
        english_to_mongolian_progress=[4],
        session_id="abc",
        words=[Word(4, "Goodbye", "Баяртай", "Bayartai", "greetings")],
    )
    data = session.to_dict()
    assert data["date"] == "2026-03-11"
    assert ExtraWordsSession.from_dict(data) == session


def test_streak_data_from_dict_clamps_counters():
    """Test that negative stored counters load as zero."""
    data = StreakData.from_dict({
        "current_streak": -3,
        "longest_streak": 4,
        "last_completed_date": "2026-03-10",
        "history": [{"date": "2026-03-10", "status": "completed", "words_completed": 5}],
    })
    assert data.current_streak == 0
    assert data.longest_streak == 4
    assert data.last_completed_date == date(2026, 3, 10)
    assert data.record_for(date(2026, 3, 10)) == DayRecord(date(2026, 3, 10), DayStatus.COMPLETED, 5)
    assert data.streak_freeze_available


def test_bundled_content_respects_id_ranges():
    """Test that shipped words sit in the id range of their source."""
    assert len(DICTIONARY) == len(DICTIONARY_IDS) == 150
    assert all(classify_word_id(word.id) == WordKind.BASE for word in DICTIONARY)
    for words in PACK_WORDS.values():
        assert all(classify_word_id(word.id) == WordKind.PACK for word in words)
    for bundle in BUNDLES:
        assert all(classify_word_id(word.id) == WordKind.BUNDLE for word in bundle.words)


def test_pack_manifest_lookup():
    """Test manifest and pack word lookups."""
    for meta in PACKS:
        assert get_pack_meta(meta.id) == meta
        assert len(get_pack_words(meta.id, meta.version)) == meta.word_count
    assert get_pack_meta("unknown") is None
    assert get_pack_words("animals", 99) == []
