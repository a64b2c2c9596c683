"""Flat key-value storage backend, used where no structured database is available."""
import json
import logging
import os
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Set

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
from mongolvocab.storage.base import (
    BUNDLE_APPLIED,
    BUNDLE_DISMISSED,
    StorageBackend,
    Transaction,
    build_custom_word,
    guarded_read,
    guarded_write,
    next_custom_id,
)

logger = logging.getLogger(__name__)

STORAGE_KEYS = {
    "DAILY_PROGRESS": "daily_progress",
    "EXTRA_WORDS_SESSION": "extra_words_session",
    "WORD_CONFIDENCE": "word_confidence",
    "USER_DICTIONARY": "user_dictionary",
    "DELETED_WORD_IDS": "deleted_word_ids",
    "BUNDLE_APPLIED": "word_bundle_applied",
    "BUNDLE_DISMISSED": "word_bundle_dismissed",
    "STREAK_DATA": "streak_data",
    "ACCEPTED_PACKS": "accepted_packs",
    "DISMISSED_PACKS": "dismissed_packs",
}

BUNDLE_KEYS = {
    BUNDLE_APPLIED: STORAGE_KEYS["BUNDLE_APPLIED"],
    BUNDLE_DISMISSED: STORAGE_KEYS["BUNDLE_DISMISSED"],
}


class KeyValueStore:
    """
    String key-value store persisted as a single JSON document.

    Without a path the store lives in memory only. Writes are flushed to
    disk immediately (temp file + rename) unless deferred by a transaction.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path) if path else None
        self.deferred = False
        self._data: Dict[str, str] = self._load()

    def _load(self) -> Dict[str, str]:
        if self.path is None or not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("store root is not an object")
            return {str(k): str(v) for k, v in data.items()}
        except (OSError, ValueError) as e:
            logger.error("Unreadable key-value store %s, starting empty: %s", self.path, e)
            corrupt = self.path.with_suffix(self.path.suffix + ".corrupt")
            try:
                os.replace(self.path, corrupt)
            except OSError as move_error:
                logger.error("Could not set aside corrupt store %s: %s", self.path, move_error)
            return {}

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        previous = self._data.get(key)
        self._data[key] = value
        self._flush_or_revert(key, previous)

    def remove_item(self, key: str) -> None:
        previous = self._data.pop(key, None)
        if previous is not None:
            self._flush_or_revert(key, previous)

    def _flush_or_revert(self, key: str, previous: Optional[str]) -> None:
        """Flush, putting the key back as it was if the write does not reach disk."""
        try:
            self.flush()
        except Exception:
            if previous is None:
                self._data.pop(key, None)
            else:
                self._data[key] = previous
            raise

    def keys(self) -> List[str]:
        return list(self._data)

    def snapshot(self) -> Dict[str, str]:
        return dict(self._data)

    def restore(self, snapshot: Dict[str, str]) -> None:
        self._data = dict(snapshot)

    def flush(self) -> None:
        """Write the document to disk (atomic write)."""
        if self.path is None or self.deferred:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_file = f"{self.path}.{uuid.uuid4().hex[:8]}.tmp"
        try:
            with open(temp_file, "w", encoding="utf-8") as f:
                json.dump(self._data, f, ensure_ascii=False)
            os.replace(temp_file, self.path)
        finally:
            if os.path.exists(temp_file):
                os.remove(temp_file)


class KeyValueStorage(StorageBackend):
    """StorageBackend over a KeyValueStore, one JSON value per entity."""

    name = "kv"

    def __init__(self, store: KeyValueStore):
        self.store = store
        self._transaction: Optional[Transaction] = None

    @property
    def in_transaction(self) -> bool:
        return self._transaction is not None

    def _read(self, key: str) -> Any:
        raw = self.store.get_item(STORAGE_KEYS[key])
        return json.loads(raw) if raw is not None else None

    def _write(self, key: str, value: Any) -> None:
        self.store.set_item(STORAGE_KEYS[key], json.dumps(value, ensure_ascii=False))

    @contextmanager
    def atomic(self) -> Iterator[Transaction]:
        if self._transaction is not None:
            yield self._transaction
            return
        tx = self._transaction = Transaction()
        snapshot = self.store.snapshot()
        self.store.deferred = True
        try:
            yield tx
            self.store.deferred = False
            self.store.flush()
        except (StorageError, OSError) as e:
            self.store.restore(snapshot)
            tx.failed = True
            tx.error = e
            logger.error("Key-value transaction rolled back: %s", e)
        except Exception:
            self.store.restore(snapshot)
            raise
        finally:
            self.store.deferred = False
            self._transaction = None

    # Streak

    @guarded_read(StreakData)
    def get_streak_data(self) -> StreakData:
        data = self._read("STREAK_DATA")
        return StreakData.from_dict(data) if data else StreakData()

    @guarded_write()
    def save_streak_data(self, data: StreakData) -> None:
        self._write("STREAK_DATA", data.to_dict())

    # Confidence

    @guarded_read(dict)
    def get_word_confidence(self) -> Dict[int, ConfidenceLevel]:
        data = self._read("WORD_CONFIDENCE") or {}
        return {int(word_id): ConfidenceLevel(level) for word_id, level in data.items()}

    @guarded_write()
    def set_word_confidence(self, word_id: int, level: ConfidenceLevel) -> None:
        data = self._read("WORD_CONFIDENCE") or {}
        data[str(word_id)] = ConfidenceLevel(level).value
        self._write("WORD_CONFIDENCE", data)

    @guarded_write(default=False)
    def delete_word_confidence(self, word_id: int) -> bool:
        data = self._read("WORD_CONFIDENCE") or {}
        if data.pop(str(word_id), None) is None:
            return False
        self._write("WORD_CONFIDENCE", data)
        return True

    # User dictionary

    def _read_user_dictionary(self) -> Dict[str, Any]:
        data = self._read("USER_DICTIONARY") or {}
        words = [Word.from_dict(w) for w in data.get("words", [])]
        edited = {int(k): Word.from_dict(v) for k, v in data.get("edited_words", {}).items()}
        next_id = int(data.get("next_id", CUSTOM_ID_MIN))
        return {"words": words, "edited_words": edited, "next_id": next_id}

    def _write_user_dictionary(self, user_dictionary: Dict[str, Any]) -> None:
        self._write("USER_DICTIONARY", {
            "words": [w.to_dict() for w in user_dictionary["words"]],
            "edited_words": {str(k): w.to_dict() for k, w in user_dictionary["edited_words"].items()},
            "next_id": user_dictionary["next_id"],
        })

    @guarded_read(list)
    def get_custom_words(self) -> List[Word]:
        return self._read_user_dictionary()["words"]

    @guarded_write()
    def add_custom_word(self, fields: WordFields) -> Optional[Word]:
        user_dictionary = self._read_user_dictionary()
        word_id = next_custom_id(
            (w.id for w in user_dictionary["words"]), floor=user_dictionary["next_id"]
        )
        word = build_custom_word(word_id, fields)
        user_dictionary["words"].append(word)
        user_dictionary["next_id"] = word.id + 1
        self._write_user_dictionary(user_dictionary)
        return word

    @guarded_write(default=False)
    def insert_custom_word(self, word: Word) -> bool:
        user_dictionary = self._read_user_dictionary()
        if any(w.id == word.id for w in user_dictionary["words"]):
            return False
        user_dictionary["words"].append(word)
        if word.id < BUNDLE_ID_MIN:
            user_dictionary["next_id"] = max(user_dictionary["next_id"], word.id + 1)
        self._write_user_dictionary(user_dictionary)
        return True

    @guarded_write(default=False)
    def update_custom_word(self, word: Word) -> bool:
        user_dictionary = self._read_user_dictionary()
        for index, existing in enumerate(user_dictionary["words"]):
            if existing.id == word.id:
                user_dictionary["words"][index] = word
                self._write_user_dictionary(user_dictionary)
                return True
        return False

    @guarded_write(default=False)
    def delete_custom_word(self, word_id: int) -> bool:
        user_dictionary = self._read_user_dictionary()
        remaining = [w for w in user_dictionary["words"] if w.id != word_id]
        if len(remaining) == len(user_dictionary["words"]):
            return False
        user_dictionary["words"] = remaining
        self._write_user_dictionary(user_dictionary)
        return True

    # Overrides

    @guarded_read(dict)
    def get_word_overrides(self) -> Dict[int, Word]:
        return self._read_user_dictionary()["edited_words"]

    @guarded_write()
    def save_word_override(self, word: Word) -> None:
        user_dictionary = self._read_user_dictionary()
        user_dictionary["edited_words"][word.id] = word
        self._write_user_dictionary(user_dictionary)

    @guarded_write(default=False)
    def delete_word_override(self, word_id: int) -> bool:
        user_dictionary = self._read_user_dictionary()
        if user_dictionary["edited_words"].pop(word_id, None) is None:
            return False
        self._write_user_dictionary(user_dictionary)
        return True

    # Deleted ids

    @guarded_read(set)
    def get_deleted_word_ids(self) -> Set[int]:
        return {int(i) for i in self._read("DELETED_WORD_IDS") or []}

    @guarded_write()
    def add_deleted_word_id(self, word_id: int) -> None:
        ids = [int(i) for i in self._read("DELETED_WORD_IDS") or []]
        if word_id not in ids:
            ids.append(word_id)
            self._write("DELETED_WORD_IDS", ids)

    @guarded_write(default=False)
    def remove_deleted_word_id(self, word_id: int) -> bool:
        ids = [int(i) for i in self._read("DELETED_WORD_IDS") or []]
        if word_id not in ids:
            return False
        self._write("DELETED_WORD_IDS", [i for i in ids if i != word_id])
        return True

    # Packs and bundles

    @guarded_read(list)
    def get_accepted_packs(self) -> List[AcceptedPack]:
        return [
            AcceptedPack(pack_id=p["id"], version=int(p["version"]))
            for p in self._read("ACCEPTED_PACKS") or []
        ]

    @guarded_read(list)
    def get_dismissed_packs(self) -> List[DismissedPack]:
        return [
            DismissedPack(pack_id=p["id"], version=int(p["version"]), timestamp=float(p["timestamp"]))
            for p in self._read("DISMISSED_PACKS") or []
        ]

    @guarded_write()
    def save_accepted_pack(self, pack_id: str, version: int) -> None:
        accepted = [p for p in self._read("ACCEPTED_PACKS") or [] if p["id"] != pack_id]
        accepted.append({"id": pack_id, "version": version})
        self._write("ACCEPTED_PACKS", accepted)

    @guarded_write()
    def save_dismissed_pack(self, pack_id: str, version: int, timestamp: float) -> None:
        dismissed = [p for p in self._read("DISMISSED_PACKS") or [] if p["id"] != pack_id]
        dismissed.append({"id": pack_id, "version": version, "timestamp": timestamp})
        self._write("DISMISSED_PACKS", dismissed)

    @guarded_read(dict)
    def get_bundle_states(self, status: str) -> Dict[str, float]:
        raw = self.store.get_item(BUNDLE_KEYS[status])
        data = json.loads(raw) if raw is not None else {}
        return {str(k): float(v) for k, v in data.items()}

    @guarded_write()
    def save_bundle_state(self, bundle_id: str, status: str, timestamp: float) -> None:
        for other_status, key in BUNDLE_KEYS.items():
            raw = self.store.get_item(key)
            data = json.loads(raw) if raw is not None else {}
            data.pop(bundle_id, None)
            if other_status == status:
                data[bundle_id] = timestamp
            self.store.set_item(key, json.dumps(data))

    # Progress

    @guarded_read(lambda: None)
    def get_daily_progress(self) -> Optional[DailyProgress]:
        data = self._read("DAILY_PROGRESS")
        return DailyProgress.from_dict(data) if data else None

    @guarded_write()
    def save_daily_progress(self, progress: DailyProgress) -> None:
        self._write("DAILY_PROGRESS", progress.to_dict())

    @guarded_write()
    def clear_daily_progress(self) -> None:
        self.store.remove_item(STORAGE_KEYS["DAILY_PROGRESS"])

    @guarded_read(lambda: None)
    def get_extra_session(self) -> Optional[ExtraWordsSession]:
        data = self._read("EXTRA_WORDS_SESSION")
        return ExtraWordsSession.from_dict(data) if data else None

    @guarded_write()
    def save_extra_session(self, session: ExtraWordsSession) -> None:
        self._write("EXTRA_WORDS_SESSION", session.to_dict())

    @guarded_write()
    def clear_extra_session(self) -> None:
        self.store.remove_item(STORAGE_KEYS["EXTRA_WORDS_SESSION"])
