"""Main application entry point."""
import logging
from datetime import date
from typing import Callable, Optional

from mongolvocab.config import Settings, settings as default_settings
from mongolvocab.services.confidence_service import ConfidenceService
from mongolvocab.services.dictionary_service import DictionaryService
from mongolvocab.services.pack_service import PackService
from mongolvocab.services.progress_service import ProgressService
from mongolvocab.services.streak_service import StreakService
from mongolvocab.storage.base import StorageBackend
from mongolvocab.storage.factory import create_storage


class VocabApp:
    """Main application class wiring storage to the services."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        storage: Optional[StorageBackend] = None,
        clock: Callable[[], date] = date.today,
    ):
        """Initialize the application."""
        self.settings = settings or default_settings
        self.logger = logging.getLogger(__name__)
        self.storage = storage or create_storage(self.settings)
        self.clock = clock

        learning = self.settings.learning
        self.dictionary = DictionaryService(self.storage)
        self.confidence = ConfidenceService(self.storage)
        self.streak = StreakService(self.storage, clock=clock, learning=learning)
        self.packs = PackService(self.storage)
        self.progress = ProgressService(
            self.storage,
            self.dictionary,
            self.streak,
            clock=clock,
            learning=learning,
        )
        self.logger.info(f"Application started with {self.storage.name} storage")

    def reset_today_progress(self) -> None:
        """Undo today's practice."""
        self.progress.reset_today()

    def close(self) -> None:
        """Release the storage backend."""
        self.storage.close()
        self.logger.info("Application stopped")

    def __enter__(self) -> "VocabApp":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
