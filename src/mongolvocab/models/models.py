"""Database models for the structured storage backend."""
from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Float,
    Integer,
    String,
)

from mongolvocab.models.base import Base, TimestampMixin
from mongolvocab.models.vocab_models import CUSTOM_ID_MIN

# Row ids of the user dictionary are exposed as word ids shifted by this offset.
CUSTOM_ID_OFFSET = CUSTOM_ID_MIN


class StreakHeader(Base):
    """Singleton row holding the streak counters."""

    __tablename__ = "streak_data"
    __table_args__ = (CheckConstraint("id = 1"),)

    id = Column(Integer, primary_key=True, default=1)
    current_streak = Column(Integer, nullable=False, default=0)
    longest_streak = Column(Integer, nullable=False, default=0)
    last_completed_date = Column(Date, nullable=True)
    streak_freeze_available = Column(Boolean, nullable=False, default=True)
    streak_freeze_used_date = Column(Date, nullable=True)


class StreakHistory(Base):
    """Streak history entry, one per date."""

    __tablename__ = "streak_history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, nullable=False, unique=True)
    status = Column(String, nullable=False)  # completed, paused, missed
    words_completed = Column(Integer, nullable=False, default=0)


class WordConfidenceEntry(Base):
    """Confidence label of a word."""

    __tablename__ = "word_confidence"

    word_id = Column(Integer, primary_key=True, autoincrement=False)
    level = Column(String, nullable=False, default="learning")


class UserWord(Base, TimestampMixin):
    """Word owned by the user: custom words and applied bundle words."""

    __tablename__ = "user_dictionary"

    id = Column(Integer, primary_key=True, autoincrement=False)
    english = Column(String, nullable=False)
    mongolian = Column(String, nullable=False)
    pronunciation = Column(String, nullable=True)
    category = Column(String, nullable=False, default="custom")

    @property
    def word_id(self) -> int:
        return self.id + CUSTOM_ID_OFFSET


class WordOverride(Base, TimestampMixin):
    """User edit replacing a base or pack word."""

    __tablename__ = "word_overrides"

    word_id = Column(Integer, primary_key=True, autoincrement=False)
    english = Column(String, nullable=False)
    mongolian = Column(String, nullable=False)
    pronunciation = Column(String, nullable=True)
    category = Column(String, nullable=False, default="custom")


class DeletedWord(Base):
    """Id of a non-custom word hidden by the user."""

    __tablename__ = "deleted_words"

    word_id = Column(Integer, primary_key=True, autoincrement=False)


class PackStatusEntry(Base, TimestampMixin):
    """Version of a content pack the user accepted or dismissed, one row per decision kind."""

    __tablename__ = "pack_status"

    pack_id = Column(String, primary_key=True)
    status = Column(String, primary_key=True)  # accepted, dismissed
    version = Column(Integer, nullable=False)
    timestamp = Column(Float, nullable=False, default=0.0)


class BundleStatusEntry(Base):
    """Latest decision the user took on a word bundle."""

    __tablename__ = "bundle_status"

    bundle_id = Column(String, primary_key=True)
    status = Column(String, nullable=False)  # applied, dismissed
    timestamp = Column(Float, nullable=False)


class DailyProgressRow(Base):
    """Singleton row with the progress of the current day."""

    __tablename__ = "daily_progress"
    __table_args__ = (CheckConstraint("id = 1"),)

    id = Column(Integer, primary_key=True, default=1)
    date = Column(Date, nullable=False)
    english_to_mongolian_completed = Column(Boolean, nullable=False, default=False)
    mongolian_to_english_completed = Column(Boolean, nullable=False, default=False)
    english_to_mongolian_progress = Column(JSON, nullable=False, default=list)
    mongolian_to_english_progress = Column(JSON, nullable=False, default=list)


class ExtraSessionRow(Base):
    """Singleton row with the extra words session of the current day."""

    __tablename__ = "extra_words_session"
    __table_args__ = (CheckConstraint("id = 1"),)

    id = Column(Integer, primary_key=True, default=1)
    session_id = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    words = Column(JSON, nullable=False, default=list)
    english_to_mongolian_completed = Column(Boolean, nullable=False, default=False)
    mongolian_to_english_completed = Column(Boolean, nullable=False, default=False)
    english_to_mongolian_progress = Column(JSON, nullable=False, default=list)
    mongolian_to_english_progress = Column(JSON, nullable=False, default=list)


class MigrationStatus(Base):
    """Singleton flag recording the one-time import of the legacy store."""

    __tablename__ = "migration_status"
    __table_args__ = (CheckConstraint("id = 1"),)

    id = Column(Integer, primary_key=True, default=1)
    migrated_from_legacy_store = Column(Boolean, nullable=False, default=False)
    migration_date = Column(DateTime(timezone=True), nullable=True)
