"""Test configuration."""
import os
from datetime import date, timedelta
from pathlib import Path
from typing import Callable, Generator

import pytest
from dotenv import load_dotenv
from faker import Faker

# Set test environment before any imports
os.environ["ENV"] = "test"

# Load test environment variables
test_env_path = Path(__file__).parent.parent.parent.parent / ".env.test"
load_dotenv(test_env_path)

# Import after environment setup
from mongolvocab.config import LearningSettings, ensure_directories
from mongolvocab.models.base import create_db_engine, create_session_factory, init_db
from mongolvocab.models.vocab_models import WordFields
from mongolvocab.services.confidence_service import ConfidenceService
from mongolvocab.services.dictionary_service import DictionaryService
from mongolvocab.services.pack_service import PackService
from mongolvocab.services.progress_service import ProgressService
from mongolvocab.services.streak_service import StreakService
from mongolvocab.storage.base import StorageBackend
from mongolvocab.storage.kv import KeyValueStorage, KeyValueStore
from mongolvocab.storage.sql import SqlStorage

fake = Faker()

# A Wednesday; its week starts on Sunday 2026-03-08.
TODAY = date(2026, 3, 11)


class FakeClock:
    """Clock returning a settable date."""

    def __init__(self, today: date):
        self.today = today

    def __call__(self) -> date:
        return self.today

    def advance(self, days: int = 1) -> None:
        self.today += timedelta(days=days)


def make_fields() -> WordFields:
    """Build a custom word with fake content."""
    return WordFields(
        english=fake.unique.word(),
        mongolian=fake.word(),
        pronunciation=fake.word(),
        category="custom",
    )


@pytest.fixture(autouse=True)
def setup_test_environment():
    """Set up test environment before each test."""
    ensure_directories()
    yield
    fake.unique.clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(TODAY)


@pytest.fixture
def word_fields() -> Callable[[], WordFields]:
    """Factory for custom words with fake content."""
    return make_fields


@pytest.fixture
def learning() -> LearningSettings:
    """Learning settings with the standard thresholds, independent of the environment."""
    return LearningSettings(
        daily_words_count=5,
        extra_words_count=5,
        streak_min_words=5,
        freeze_min_words=10,
        streak_history_days=30,
    )


@pytest.fixture
def sql_storage() -> Generator[SqlStorage, None, None]:
    """Create a fresh in-memory structured storage for each test."""
    engine = create_db_engine("sqlite:///:memory:")
    init_db(engine)
    storage = SqlStorage(create_session_factory(engine)(), engine=engine)
    try:
        yield storage
    finally:
        storage.close()


@pytest.fixture
def kv_storage() -> KeyValueStorage:
    """Create a fresh in-memory key-value storage for each test."""
    return KeyValueStorage(KeyValueStore())


@pytest.fixture(params=["sql", "kv"])
def storage(request) -> StorageBackend:
    """Run the test against both storage backends."""
    return request.getfixturevalue(f"{request.param}_storage")


@pytest.fixture
def dictionary_service(storage: StorageBackend) -> DictionaryService:
    return DictionaryService(storage)


@pytest.fixture
def confidence_service(storage: StorageBackend) -> ConfidenceService:
    return ConfidenceService(storage)


@pytest.fixture
def streak_service(storage: StorageBackend, clock: FakeClock, learning: LearningSettings) -> StreakService:
    return StreakService(storage, clock=clock, learning=learning)


@pytest.fixture
def pack_service(storage: StorageBackend) -> PackService:
    return PackService(storage)


@pytest.fixture
def progress_service(
    storage: StorageBackend,
    dictionary_service: DictionaryService,
    streak_service: StreakService,
    clock: FakeClock,
    learning: LearningSettings,
) -> ProgressService:
    return ProgressService(storage, dictionary_service, streak_service, clock=clock, learning=learning)


@pytest.fixture
def break_writes(storage: StorageBackend, monkeypatch) -> Callable[[], pytest.MonkeyPatch]:
    """Return a switch that makes every later write fail when it is persisted."""
    def fail(*args, **kwargs):
        raise OSError("disk full")

    def switch() -> pytest.MonkeyPatch:
        if isinstance(storage, SqlStorage):
            monkeypatch.setattr(storage.db, "commit", fail)
        else:
            monkeypatch.setattr(storage.store, "flush", fail)
        return monkeypatch

    return switch
