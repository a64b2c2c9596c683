"""Startup selection of the storage backend."""
import logging
from pathlib import Path
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from mongolvocab.config import Settings, settings as default_settings
from mongolvocab.models.base import create_db_engine, create_session_factory, init_db
from mongolvocab.storage.base import StorageBackend
from mongolvocab.storage.kv import KeyValueStorage, KeyValueStore
from mongolvocab.storage.sql import SqlStorage

logger = logging.getLogger(__name__)


def open_structured_engine(url: str, echo: bool = False) -> Optional[Engine]:
    """Open an engine if the structured database capability is available."""
    try:
        engine = create_db_engine(url, echo=echo)
        with engine.connect():
            pass
        return engine
    except (ImportError, SQLAlchemyError) as e:
        logger.warning("Structured storage unavailable for %s: %s", url, e)
        return None


def run_legacy_migration(storage: SqlStorage, kv_path: Optional[str]) -> bool:
    """Import the legacy key-value store into the structured store, once."""
    if storage.has_migrated():
        return False
    if kv_path and Path(kv_path).exists():
        return storage.migrate_from(KeyValueStorage(KeyValueStore(kv_path)))
    storage.mark_migration_complete()
    return False


def create_storage(settings: Optional[Settings] = None) -> StorageBackend:
    """Select and build the storage backend for this process."""
    settings = settings or default_settings
    backend = settings.storage.backend

    if backend in ("auto", "sql"):
        engine = open_structured_engine(settings.database.url, settings.database.echo)
        if engine is not None:
            init_db(engine)
            storage = SqlStorage(create_session_factory(engine)(), engine=engine)
            if settings.storage.migrate_legacy:
                run_legacy_migration(storage, settings.storage.kv_path)
            logger.info("Using structured storage at %s", settings.database.url)
            return storage
        if backend == "sql":
            logger.error("Structured storage was requested but is unavailable, using key-value storage")

    logger.info("Using key-value storage at %s", settings.storage.kv_path or "<memory>")
    return KeyValueStorage(KeyValueStore(settings.storage.kv_path))
