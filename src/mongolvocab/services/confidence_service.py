"""Service for managing per-word confidence labels."""
import logging
from typing import Dict, Optional

from mongolvocab.models.vocab_models import ConfidenceLevel
from mongolvocab.storage.base import StorageBackend

logger = logging.getLogger(__name__)


class ConfidenceService:
    """Service for managing per-word confidence labels.

    Labels are chosen by the user; any level may follow any other.
    A word without a label has never been practiced.
    """

    def __init__(self, storage: StorageBackend):
        """Initialize the service with a storage backend."""
        self.storage = storage

    def get_all(self) -> Dict[int, ConfidenceLevel]:
        """Get the confidence label of every labelled word."""
        return self.storage.get_word_confidence()

    def get(self, word_id: int) -> Optional[ConfidenceLevel]:
        """Get the confidence label of a word."""
        return self.get_all().get(word_id)

    def update(self, word_id: int, level: ConfidenceLevel) -> Dict[int, ConfidenceLevel]:
        """Set the confidence label of a word and return the updated map."""
        level = ConfidenceLevel(level)
        self.storage.set_word_confidence(word_id, level)
        return self.get_all()

    def delete(self, word_id: int) -> bool:
        """Remove the confidence label of a word."""
        return self.storage.delete_word_confidence(word_id)

    def transfer(self, old_word_id: int, new_word_id: int) -> bool:
        """Move a label to another word id. Returns False if there was none."""
        level = self.get(old_word_id)
        if level is None:
            return False
        self.storage.set_word_confidence(new_word_id, level)
        self.storage.delete_word_confidence(old_word_id)
        logger.info(f"Moved confidence {level.value} from word {old_word_id} to {new_word_id}")
        return True
