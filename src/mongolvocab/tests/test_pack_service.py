"""Tests for pack service."""
import pytest

from mongolvocab.exceptions import StorageError
from mongolvocab.models.vocab_models import (
    AcceptedPack,
    ConfidenceLevel,
    PackDiff,
    PackStatus,
    UpgradeMode,
    UpgradeResult,
    Word,
)
from mongolvocab.services.pack_service import diff_words

CAT = 200002      # content changed in v2
MOUSE = 200016    # dropped in v2
DOG = 200001      # unchanged
HORSE = 200003    # unchanged


@pytest.fixture
def animals_v1(pack_service):
    pack_service.accept_pack("animals", 1)
    return pack_service


def test_diff_between_versions(pack_service):
    assert pack_service.diff("animals", 1, 2) == PackDiff(
        removed=[MOUSE],
        changed=[CAT],
        added=[200013, 200014, 200015],
    )


def test_diff_words_ignores_order():
    old = [Word(1, "A", "А"), Word(2, "B", "Б")]
    assert diff_words(old, list(reversed(old))) == PackDiff([], [], [])


def test_pending_count_fresh_user(pack_service):
    assert pack_service.get_pending_pack_count() == 2


def test_dismissed_at_older_version_is_pending_again(pack_service):
    """Test that a version bump re-offers a dismissed pack."""
    pack_service.dismiss_pack("animals", 1)
    pack_service.accept_pack("missionary_starter", 1)

    assert pack_service.get_pending_pack_count() == 1
    assert not pack_service.is_pack_dismissed("animals", 2)


def test_dismissed_at_current_version_is_not_pending(pack_service):
    pack_service.dismiss_pack("animals", 2)

    assert pack_service.get_pending_pack_count() == 1
    assert pack_service.is_pack_dismissed("animals", 2)


def test_dismissed_update_keeps_accepted_words(animals_v1, dictionary_service):
    """Test that declining an update leaves the accepted release in the dictionary."""
    animals_v1.dismiss_pack("animals", 2)

    states = {state.pack.id: state for state in animals_v1.get_pack_states()}
    ids = {word.id for word in dictionary_service.resolve()}

    assert animals_v1.is_pack_accepted("animals") == AcceptedPack("animals", 1)
    assert states["animals"].status == PackStatus.DISMISSED
    assert states["animals"].accepted_version == 1
    assert animals_v1.get_pending_pack_count() == 1
    assert {DOG, CAT, MOUSE} <= ids
    assert dictionary_service.source_of(MOUSE).pack_version == 1


def test_accepted_at_older_version_needs_upgrade(animals_v1):
    states = {state.pack.id: state for state in animals_v1.get_pack_states()}

    assert states["animals"].status == PackStatus.UPGRADE_AVAILABLE
    assert states["animals"].accepted_version == 1
    assert states["missionary_starter"].status == PackStatus.PENDING
    assert animals_v1.get_pending_pack_count() == 2


def test_pack_states_after_decisions(pack_service):
    pack_service.accept_pack("animals", 2)
    pack_service.dismiss_pack("missionary_starter", 1)

    statuses = {state.pack.id: state.status for state in pack_service.get_pack_states()}

    assert statuses == {"animals": PackStatus.ACCEPTED, "missionary_starter": PackStatus.DISMISSED}
    assert pack_service.get_pending_pack_count() == 0
    assert pack_service.is_pack_accepted("animals") == AcceptedPack("animals", 2)
    assert pack_service.is_pack_accepted("missionary_starter") is None


def test_preview_pack(pack_service):
    assert len(pack_service.preview_pack("animals")) == 15
    assert len(pack_service.preview_pack("animals", 1)) == 13
    assert pack_service.preview_pack("unknown") == []


def test_upgrade_reset_clears_user_changes(animals_v1, storage):
    """Test reset upgrade: edits cleared, deletion of a kept word restored, stale labels dropped."""
    storage.save_word_override(Word(DOG, "Doggy", "Нохой", "Nokhoi", "animals"))
    storage.add_deleted_word_id(HORSE)
    storage.add_deleted_word_id(MOUSE)
    storage.set_word_confidence(CAT, ConfidenceLevel.MASTERED)
    storage.set_word_confidence(DOG, ConfidenceLevel.FAMILIAR)

    result = animals_v1.upgrade_pack("animals", 2, UpgradeMode.RESET)

    assert result == UpgradeResult(added_custom=0, removed_overrides=1, restored_deletes=1, reset_confidences=1)
    assert storage.get_word_overrides() == {}
    assert HORSE not in storage.get_deleted_word_ids()
    assert storage.get_word_confidence() == {DOG: ConfidenceLevel.FAMILIAR}
    assert storage.get_custom_words() == []
    assert animals_v1.is_pack_accepted("animals") == AcceptedPack("animals", 2)


def test_upgrade_promotes_edited_word_that_was_dropped(animals_v1, storage):
    """Test that an edited word removed from the pack survives as a custom word."""
    storage.save_word_override(Word(MOUSE, "Little mouse", "Хулгана", "Khulgana", "animals"))
    storage.set_word_confidence(MOUSE, ConfidenceLevel.LEARNING)

    result = animals_v1.upgrade_pack("animals", 2, UpgradeMode.NEW_WORDS)

    assert result == UpgradeResult(added_custom=1, removed_overrides=1)
    assert storage.get_custom_words() == [Word(1000, "Little mouse", "Хулгана", "Khulgana", "animals")]
    assert storage.get_word_confidence() == {1000: ConfidenceLevel.LEARNING}
    assert storage.get_word_overrides() == {}


def test_upgrade_new_words_keeps_user_changes(animals_v1, storage):
    override = Word(DOG, "Doggy", "Нохой", "Nokhoi", "animals")
    storage.save_word_override(override)
    storage.add_deleted_word_id(HORSE)
    storage.set_word_confidence(CAT, ConfidenceLevel.MASTERED)

    result = animals_v1.upgrade_pack("animals", 2, UpgradeMode.NEW_WORDS)

    assert result == UpgradeResult()
    assert storage.get_word_overrides() == {DOG: override}
    assert storage.get_deleted_word_ids() == {HORSE}
    assert storage.get_word_confidence() == {CAT: ConfidenceLevel.MASTERED}
    assert animals_v1.is_pack_accepted("animals").version == 2


def test_dropped_word_without_edit_vanishes(animals_v1, dictionary_service):
    animals_v1.upgrade_pack("animals", 2, UpgradeMode.RESET)

    ids = {word.id for word in dictionary_service.resolve()}
    assert MOUSE not in ids
    assert {200013, 200014, 200015} <= ids


def test_upgrade_counts_match_mutations(animals_v1, storage):
    storage.save_word_override(Word(MOUSE, "Mouse!", "Хулгана"))
    storage.save_word_override(Word(CAT, "Kitty", "Муур"))
    storage.save_word_override(Word(HORSE, "Pony", "Морь"))
    storage.add_deleted_word_id(DOG)
    storage.set_word_confidence(CAT, ConfidenceLevel.FAMILIAR)
    storage.set_word_confidence(MOUSE, ConfidenceLevel.MASTERED)

    result = animals_v1.upgrade_pack("animals", 2, "reset")

    assert result.added_custom == len(storage.get_custom_words()) == 1
    assert result.removed_overrides == 3
    assert result.restored_deletes == 1
    assert result.reset_confidences == 1
    assert storage.get_word_overrides() == {}
    assert storage.get_deleted_word_ids() == set()
    assert storage.get_word_confidence() == {1000: ConfidenceLevel.MASTERED}


def test_upgrade_of_pack_not_accepted_just_accepts(pack_service, storage):
    assert pack_service.upgrade_pack("animals", 2, UpgradeMode.RESET) == UpgradeResult()
    assert storage.get_accepted_packs() == [AcceptedPack("animals", 2)]


def test_failed_upgrade_changes_nothing(animals_v1, storage, monkeypatch):
    """Test that a failure late in the upgrade rolls back the earlier steps."""
    override = Word(MOUSE, "Little mouse", "Хулгана", "Khulgana", "animals")
    storage.save_word_override(override)

    def fail(pack_id, version):
        raise StorageError("disk full")

    monkeypatch.setattr(storage, "save_accepted_pack", fail)
    result = animals_v1.upgrade_pack("animals", 2, UpgradeMode.RESET)

    assert result == UpgradeResult()
    assert storage.get_custom_words() == []
    assert storage.get_word_overrides() == {MOUSE: override}
    monkeypatch.undo()
    assert animals_v1.is_pack_accepted("animals") == AcceptedPack("animals", 1)
