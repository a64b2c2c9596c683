"""Service for resolving and editing the user's effective dictionary."""
import logging
import random
import time
from datetime import date
from typing import Dict, Hashable, Iterable, List, Optional, Set

from mongolvocab.data.bundles import BUNDLES
from mongolvocab.data.dictionary import DICTIONARY, DICTIONARY_IDS
from mongolvocab.data.packs import get_pack_meta, get_pack_words
from mongolvocab.exceptions import WordValidationError
from mongolvocab.models.vocab_models import (
    BundleResult,
    Word,
    WordBundle,
    WordFields,
    WordKind,
    WordRef,
    WordSource,
    WordSourceInfo,
)
from mongolvocab.monitoring import words_added, words_deleted
from mongolvocab.storage.base import BUNDLE_APPLIED, BUNDLE_DISMISSED, StorageBackend

logger = logging.getLogger(__name__)


def shuffle_words(words: Iterable[Word], seed: Hashable) -> List[Word]:
    """Shuffle a copy of the words; the same seed always gives the same order."""
    shuffled = list(words)
    random.Random(seed).shuffle(shuffled)
    return shuffled


def _validate(english: str, mongolian: str) -> None:
    missing = [name for name, value in (("english", english), ("mongolian", mongolian)) if not value.strip()]
    if missing:
        raise WordValidationError(missing)


class DictionaryService:
    """Service for resolving and editing the user's effective dictionary."""

    def __init__(self, storage: StorageBackend):
        """Initialize the service with a storage backend."""
        self.storage = storage

    def _visible(self, words: Iterable[Word], deleted: Set[int], overrides: Dict[int, Word]) -> List[Word]:
        """Drop deleted words and substitute overrides."""
        return [overrides.get(word.id, word) for word in words if word.id not in deleted]

    def get_accepted_pack_words(self) -> List[Word]:
        """Get the words of every accepted pack at its accepted version."""
        words = []
        for pack in self.storage.get_accepted_packs():
            words.extend(get_pack_words(pack.pack_id, pack.version))
        return words

    def resolve(self) -> List[Word]:
        """Get the user's effective word list."""
        deleted = self.storage.get_deleted_word_ids()
        overrides = self.storage.get_word_overrides()
        return (
            self._visible(DICTIONARY, deleted, overrides)
            + self._visible(self.get_accepted_pack_words(), deleted, overrides)
            + self.storage.get_custom_words()
        )

    def get_word(self, word_id: int) -> Optional[Word]:
        """Get a word of the effective dictionary by its ID."""
        for word in self.resolve():
            if word.id == word_id:
                return word
        return None

    def search(self, query: str, limit: Optional[int] = None) -> List[Word]:
        """Search the effective dictionary by English, Mongolian or pronunciation."""
        needle = query.strip().lower()
        matches = [
            word for word in self.resolve()
            if needle in word.english.lower()
            or needle in word.mongolian.lower()
            or needle in word.pronunciation.lower()
        ]
        return matches[:limit] if limit else matches

    def _in_user_dictionary(self, word_id: int) -> bool:
        return any(word.id == word_id for word in self.storage.get_custom_words())

    def source_of(self, word_id: int) -> WordSourceInfo:
        """Get where a word comes from."""
        kind = WordRef.from_id(word_id).kind

        if self._in_user_dictionary(word_id):
            # Imported bundle words are stored alongside custom words.
            if kind is WordKind.BUNDLE:
                return self._bundle_source(word_id)
            return WordSourceInfo(WordSource.CUSTOM)
        # Ids not yet flushed to storage.
        if kind is WordKind.CUSTOM:
            return WordSourceInfo(WordSource.CUSTOM)

        for pack in self.storage.get_accepted_packs():
            if any(word.id == word_id for word in get_pack_words(pack.pack_id, pack.version)):
                meta = get_pack_meta(pack.pack_id)
                return WordSourceInfo(
                    WordSource.PACK,
                    pack_id=pack.pack_id,
                    pack_version=pack.version,
                    title=meta.title if meta else None,
                )

        if word_id in DICTIONARY_IDS:
            return WordSourceInfo(WordSource.BASE)

        if kind is WordKind.BUNDLE:
            return self._bundle_source(word_id)

        return WordSourceInfo(WordSource.UNKNOWN)

    def _bundle_source(self, word_id: int) -> WordSourceInfo:
        for bundle in BUNDLES:
            if any(word.id == word_id for word in bundle.words):
                return WordSourceInfo(WordSource.BUNDLE, title=bundle.title)
        return WordSourceInfo(WordSource.BUNDLE)

    def add_word(
        self,
        english: str,
        mongolian: str,
        pronunciation: str = "",
        category: str = "custom",
    ) -> Optional[Word]:
        """Create a custom word. Returns None if storage dropped the write."""
        _validate(english, mongolian)
        word = self.storage.add_custom_word(WordFields(
            english=english.strip(),
            mongolian=mongolian.strip(),
            pronunciation=pronunciation.strip(),
            category=category or "custom",
        ))
        if word:
            words_added.inc()
            logger.info(f"Added custom word {word.id}: {word.english}")
        return word

    def _is_user_word(self, word_id: int) -> bool:
        """Check whether a word is stored in the user dictionary rather than hidden or overridden."""
        return WordRef.from_id(word_id).kind is WordKind.CUSTOM or self._in_user_dictionary(word_id)

    def update_word(self, word: Word) -> Word:
        """Save an edit; non-custom words are edited through an override."""
        _validate(word.english, word.mongolian)
        word = Word(
            id=word.id,
            english=word.english.strip(),
            mongolian=word.mongolian.strip(),
            pronunciation=word.pronunciation.strip(),
            category=word.category or "custom",
        )
        if self._is_user_word(word.id):
            self.storage.update_custom_word(word)
        else:
            self.storage.save_word_override(word)
        return word

    def delete_word(self, word_id: int) -> None:
        """Delete a custom word outright, or hide any other word."""
        if self._is_user_word(word_id):
            self.storage.delete_custom_word(word_id)
        else:
            self.storage.add_deleted_word_id(word_id)
        self.storage.delete_word_confidence(word_id)
        words_deleted.inc()
        logger.info(f"Deleted word {word_id}")

    def restore_word(self, word_id: int) -> bool:
        """Unhide a previously deleted non-custom word."""
        return self.storage.remove_deleted_word_id(word_id)

    def daily_words(self, day: date, count: int) -> List[Word]:
        """Get the day's words, drawn from the base dictionary in a date-seeded order."""
        deleted = self.storage.get_deleted_word_ids()
        overrides = self.storage.get_word_overrides()
        ordered = shuffle_words(DICTIONARY, f"daily:{day.isoformat()}")
        return self._visible(ordered, deleted, overrides)[:count]

    # Bundles

    def apply_bundle(self, bundle: WordBundle) -> BundleResult:
        """Add a bundle's words to the user dictionary, skipping invalid or present ids."""
        result = BundleResult()
        with self.storage.atomic() as tx:
            for word in bundle.words:
                if word.ref.kind is not WordKind.BUNDLE:
                    logger.warning(f"Skipping word with invalid bundle ID {word.id} in {bundle.bundle_id}")
                    result.skipped += 1
                    continue
                if self.storage.insert_custom_word(word):
                    result.added += 1
                else:
                    result.skipped += 1
            self.storage.save_bundle_state(bundle.bundle_id, BUNDLE_APPLIED, time.time())

        if tx.failed:
            return BundleResult()
        logger.info(f"Applied bundle {bundle.bundle_id}: {result.added} added, {result.skipped} skipped")
        return result

    def dismiss_bundle(self, bundle_id: str) -> None:
        """Record that the user declined a bundle."""
        self.storage.save_bundle_state(bundle_id, BUNDLE_DISMISSED, time.time())

    def get_pending_bundles(self) -> List[WordBundle]:
        """Get bundles the user has neither applied nor dismissed."""
        decided = set(self.storage.get_bundle_states(BUNDLE_APPLIED))
        decided |= set(self.storage.get_bundle_states(BUNDLE_DISMISSED))
        return [bundle for bundle in BUNDLES if bundle.bundle_id not in decided]
