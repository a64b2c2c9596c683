"""Models for vocabulary, progress and streak data structures."""
from dataclasses import asdict, dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional

# Word id partition. Provenance is encoded in the numeric range.
CUSTOM_ID_MIN = 1000
BUNDLE_ID_MIN = 100000
PACK_ID_MIN = 200000


class WordKind(Enum):
    """Provenance of a word, derived from its id range."""
    BASE = "base"
    CUSTOM = "custom"
    BUNDLE = "bundle"
    PACK = "pack"


def classify_word_id(word_id: int) -> WordKind:
    """Get the provenance implied by a word id's range."""
    if word_id < CUSTOM_ID_MIN:
        return WordKind.BASE
    if word_id < BUNDLE_ID_MIN:
        return WordKind.CUSTOM
    if word_id < PACK_ID_MIN:
        return WordKind.BUNDLE
    return WordKind.PACK


@dataclass(frozen=True)
class WordRef:
    """Tagged word identity, translated to/from the flat id at the storage boundary."""
    kind: WordKind
    number: int

    @classmethod
    def from_id(cls, word_id: int) -> "WordRef":
        kind = classify_word_id(word_id)
        offsets = {
            WordKind.BASE: 0,
            WordKind.CUSTOM: CUSTOM_ID_MIN,
            WordKind.BUNDLE: BUNDLE_ID_MIN,
            WordKind.PACK: PACK_ID_MIN,
        }
        return cls(kind, word_id - offsets[kind])

    @property
    def word_id(self) -> int:
        offsets = {
            WordKind.BASE: 0,
            WordKind.CUSTOM: CUSTOM_ID_MIN,
            WordKind.BUNDLE: BUNDLE_ID_MIN,
            WordKind.PACK: PACK_ID_MIN,
        }
        return self.number + offsets[self.kind]


@dataclass(frozen=True)
class Word:
    """A single vocabulary entry."""
    id: int
    english: str
    mongolian: str
    pronunciation: str = ""
    category: str = "custom"

    @property
    def ref(self) -> WordRef:
        return WordRef.from_id(self.id)

    def same_content(self, other: "Word") -> bool:
        """Check whether two words carry identical content."""
        return (
            self.english == other.english
            and self.mongolian == other.mongolian
            and self.pronunciation == other.pronunciation
            and self.category == other.category
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Word":
        return cls(
            id=int(data["id"]),
            english=str(data["english"]),
            mongolian=str(data["mongolian"]),
            pronunciation=str(data.get("pronunciation") or ""),
            category=str(data.get("category") or "custom"),
        )


@dataclass
class WordFields:
    """User input for a new custom word."""
    english: str
    mongolian: str
    pronunciation: str = ""
    category: str = "custom"


class WordSource(Enum):
    """Where a word in the resolved dictionary comes from."""
    CUSTOM = "custom"
    PACK = "pack"
    BASE = "base"
    BUNDLE = "bundle"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class WordSourceInfo:
    """Provenance of a word, with pack/bundle details when applicable."""
    source: WordSource
    pack_id: Optional[str] = None
    pack_version: Optional[int] = None
    title: Optional[str] = None


class ConfidenceLevel(str, Enum):
    """User-chosen mastery label."""
    LEARNING = "learning"
    FAMILIAR = "familiar"
    MASTERED = "mastered"


class PracticeMode(str, Enum):
    """Practice direction."""
    ENGLISH_TO_MONGOLIAN = "englishToMongolian"
    MONGOLIAN_TO_ENGLISH = "mongolianToEnglish"


@dataclass
class DailyProgress:
    """Per-mode completion state for one day."""
    date: date
    english_to_mongolian_completed: bool = False
    mongolian_to_english_completed: bool = False
    english_to_mongolian_progress: List[int] = field(default_factory=list)
    mongolian_to_english_progress: List[int] = field(default_factory=list)

    def progress(self, mode: PracticeMode) -> List[int]:
        if mode == PracticeMode.ENGLISH_TO_MONGOLIAN:
            return self.english_to_mongolian_progress
        return self.mongolian_to_english_progress

    def is_completed(self, mode: PracticeMode) -> bool:
        if mode == PracticeMode.ENGLISH_TO_MONGOLIAN:
            return self.english_to_mongolian_completed
        return self.mongolian_to_english_completed

    def set_completed(self, mode: PracticeMode) -> None:
        if mode == PracticeMode.ENGLISH_TO_MONGOLIAN:
            self.english_to_mongolian_completed = True
        else:
            self.mongolian_to_english_completed = True

    @property
    def both_completed(self) -> bool:
        return self.english_to_mongolian_completed and self.mongolian_to_english_completed

    @property
    def max_mode_progress(self) -> int:
        """Words done in this set; a word counts once across both directions."""
        return max(
            len(self.english_to_mongolian_progress),
            len(self.mongolian_to_english_progress),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["date"] = self.date.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DailyProgress":
        return cls(
            date=date.fromisoformat(data["date"]),
            english_to_mongolian_completed=bool(data.get("english_to_mongolian_completed", False)),
            mongolian_to_english_completed=bool(data.get("mongolian_to_english_completed", False)),
            english_to_mongolian_progress=[int(i) for i in data.get("english_to_mongolian_progress", [])],
            mongolian_to_english_progress=[int(i) for i in data.get("mongolian_to_english_progress", [])],
        )


@dataclass
class ExtraWordsSession(DailyProgress):
    """Optional second practice set for the day, with its own word list."""
    session_id: str = ""
    words: List[Word] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["words"] = [word.to_dict() for word in self.words]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExtraWordsSession":
        base = DailyProgress.from_dict(data)
        return cls(
            date=base.date,
            english_to_mongolian_completed=base.english_to_mongolian_completed,
            mongolian_to_english_completed=base.mongolian_to_english_completed,
            english_to_mongolian_progress=base.english_to_mongolian_progress,
            mongolian_to_english_progress=base.mongolian_to_english_progress,
            session_id=str(data["session_id"]),
            words=[Word.from_dict(w) for w in data.get("words", [])],
        )


class DayStatus(str, Enum):
    """Status of a calendar day in the streak history."""
    COMPLETED = "completed"
    PAUSED = "paused"  # missed, covered by a freeze
    MISSED = "missed"
    PENDING = "pending"
    FUTURE = "future"


@dataclass
class DayRecord:
    """One entry in the streak history."""
    date: date
    status: DayStatus
    words_completed: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "status": self.status.value,
            "words_completed": self.words_completed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DayRecord":
        return cls(
            date=date.fromisoformat(data["date"]),
            status=DayStatus(data["status"]),
            words_completed=int(data.get("words_completed", 0)),
        )


@dataclass
class StreakData:
    """Streak counters plus a bounded day history."""
    current_streak: int = 0
    longest_streak: int = 0
    last_completed_date: Optional[date] = None
    streak_freeze_available: bool = True
    streak_freeze_used_date: Optional[date] = None
    history: List[DayRecord] = field(default_factory=list)

    def record_for(self, day: date) -> Optional[DayRecord]:
        for record in self.history:
            if record.date == day:
                return record
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "last_completed_date": self.last_completed_date.isoformat() if self.last_completed_date else None,
            "streak_freeze_available": self.streak_freeze_available,
            "streak_freeze_used_date": (
                self.streak_freeze_used_date.isoformat() if self.streak_freeze_used_date else None
            ),
            "history": [record.to_dict() for record in self.history],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StreakData":
        last = data.get("last_completed_date")
        used = data.get("streak_freeze_used_date")
        return cls(
            current_streak=max(0, int(data.get("current_streak", 0))),
            longest_streak=max(0, int(data.get("longest_streak", 0))),
            last_completed_date=date.fromisoformat(last) if last else None,
            streak_freeze_available=bool(data.get("streak_freeze_available", True)),
            streak_freeze_used_date=date.fromisoformat(used) if used else None,
            history=[DayRecord.from_dict(r) for r in data.get("history", [])],
        )


@dataclass(frozen=True)
class StreakResult:
    """Outcome of a streak evaluation."""
    streak_incremented: bool
    streak_broken: bool
    used_freeze: bool
    new_streak: int


@dataclass(frozen=True)
class WeekDay:
    """A day cell in the week strip."""
    date: date
    day_label: str


@dataclass(frozen=True)
class PackMeta:
    """Manifest entry describing the current release of a content pack."""
    id: str
    version: int
    title: str
    description: str
    word_count: int


@dataclass(frozen=True)
class AcceptedPack:
    pack_id: str
    version: int


@dataclass(frozen=True)
class DismissedPack:
    pack_id: str
    version: int
    timestamp: float


class PackStatus(Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DISMISSED = "dismissed"
    UPGRADE_AVAILABLE = "upgrade_available"


@dataclass(frozen=True)
class PackState:
    """A catalog pack with the user's decision on it."""
    pack: PackMeta
    status: PackStatus
    accepted_version: Optional[int] = None


class UpgradeMode(str, Enum):
    """How a pack upgrade treats the user's changes to the old version."""
    RESET = "reset"
    NEW_WORDS = "new_words"


@dataclass(frozen=True)
class PackDiff:
    """Differences between two versions of a pack, keyed by word id."""
    removed: List[int]
    changed: List[int]
    added: List[int]


@dataclass
class UpgradeResult:
    """Number of records mutated by a pack upgrade."""
    added_custom: int = 0
    removed_overrides: int = 0
    restored_deletes: int = 0
    reset_confidences: int = 0


@dataclass(frozen=True)
class WordBundle:
    """One-time, non-versioned word set."""
    bundle_id: str
    title: str
    words: List[Word]
    description: Optional[str] = None


@dataclass
class BundleResult:
    added: int = 0
    skipped: int = 0
