"""Exceptions raised by the vocabulary core."""
from typing import Sequence


class VocabError(Exception):
    """Base class for errors of this package."""


class StorageError(VocabError):
    """A storage write failed inside a transaction."""


class WordValidationError(VocabError, ValueError):
    """A submitted word is incomplete."""

    def __init__(self, fields: Sequence[str], message: str = ""):
        self.fields = list(fields)
        super().__init__(message or f"Missing required fields: {', '.join(self.fields)}")
