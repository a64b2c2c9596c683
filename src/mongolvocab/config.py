"""Configuration settings for the vocabulary core."""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Define base directory
BASE_DIR = Path(__file__).parent.parent.parent

# Load environment variables from .env file
env_file = ".env.test" if os.getenv("ENV") == "test" else ".env"
load_dotenv(env_file)


# Define data directories from environment variables
DATA_DIR = Path(os.getenv("DATA_DIR", "./data"))

STORAGE_BACKENDS = ("auto", "sql", "kv")

# Learning settings
STREAK_HISTORY_DAYS = 30  # days of history kept in the ring buffer


def ensure_directories() -> None:
    """Ensure all required directories exist."""
    directories = [
        DATA_DIR,
    ]

    for directory in directories:
        directory.mkdir(parents=True, exist_ok=True)


@dataclass
class PathSettings:
    """Path configuration settings."""
    base_dir: Path = BASE_DIR
    data_dir: Path = DATA_DIR


@dataclass
class DatabaseSettings:
    """Database configuration settings."""
    url: str = os.getenv("DATABASE_URL", "sqlite:///mongolvocab.db")
    echo: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"


@dataclass
class StorageSettings:
    """Storage backend selection."""
    backend: str = os.getenv("STORAGE_BACKEND", "auto").lower()
    kv_path: Optional[str] = os.getenv("KV_STORE_PATH", str(DATA_DIR / "storage.json"))
    migrate_legacy: bool = os.getenv("MIGRATE_LEGACY_STORE", "true").lower() == "true"


@dataclass
class LoggingSettings:
    """Logging configuration settings."""
    level: str = os.getenv("LOG_LEVEL", "INFO")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    dir: Optional[str] = os.getenv("LOG_DIR", None)
    rotation: str = os.getenv("LOG_ROTATION", "midnight")
    interval: int = int(os.getenv("LOG_INTERVAL", "1"))
    backup_count: int = int(os.getenv("LOG_BACKUP_COUNT", "7"))


@dataclass
class LearningSettings:
    """Learning process settings."""
    daily_words_count: int = int(os.getenv("DAILY_WORDS_COUNT", "5"))
    extra_words_count: int = int(os.getenv("EXTRA_WORDS_COUNT", "5"))
    streak_min_words: int = int(os.getenv("STREAK_MIN_WORDS", "5"))
    freeze_min_words: int = int(os.getenv("FREEZE_MIN_WORDS", "10"))
    streak_history_days: int = int(os.getenv("STREAK_HISTORY_DAYS", str(STREAK_HISTORY_DAYS)))


@dataclass
class MonitoringSettings:
    """Prometheus metrics settings."""
    enabled: bool = os.getenv("METRICS_ENABLED", "false").lower() == "true"
    port: int = int(os.getenv("METRICS_PORT", "9090"))


def get_path_settings() -> PathSettings:
    """Get path settings."""
    return PathSettings()


def get_database_settings() -> DatabaseSettings:
    """Get database settings."""
    return DatabaseSettings()


def get_storage_settings() -> StorageSettings:
    """Get storage settings."""
    return StorageSettings()


def get_logging_settings() -> LoggingSettings:
    """Get logging settings."""
    return LoggingSettings()


def get_learning_settings() -> LearningSettings:
    """Get learning settings."""
    return LearningSettings()


def get_monitoring_settings() -> MonitoringSettings:
    """Get monitoring settings."""
    return MonitoringSettings()


@dataclass
class Settings:
    """Main settings class that combines all configuration settings."""
    paths: PathSettings = field(default_factory=get_path_settings)
    database: DatabaseSettings = field(default_factory=get_database_settings)
    storage: StorageSettings = field(default_factory=get_storage_settings)
    logging: LoggingSettings = field(default_factory=get_logging_settings)
    learning: LearningSettings = field(default_factory=get_learning_settings)
    monitoring: MonitoringSettings = field(default_factory=get_monitoring_settings)

    def validate(self) -> None:
        """Validate settings and raise ValueError if invalid."""
        if self.storage.backend not in STORAGE_BACKENDS:
            raise ValueError(f"STORAGE_BACKEND must be one of {', '.join(STORAGE_BACKENDS)}")

        if self.learning.daily_words_count < 1:
            raise ValueError("DAILY_WORDS_COUNT must be positive")

        if self.learning.extra_words_count < 1:
            raise ValueError("EXTRA_WORDS_COUNT must be positive")

        if self.learning.streak_min_words < 1:
            raise ValueError("STREAK_MIN_WORDS must be positive")

        if self.learning.freeze_min_words < self.learning.streak_min_words:
            raise ValueError("FREEZE_MIN_WORDS cannot be less than STREAK_MIN_WORDS")

        if self.learning.streak_history_days < 1:
            raise ValueError("STREAK_HISTORY_DAYS must be positive")


# Create global settings instance
settings = Settings()
settings.validate()
