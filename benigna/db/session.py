# benigna-api/benigna/db/session.py
import logging
from functools import lru_cache

from benigna import config
from benigna.db.json_store import JsonFileRepository
from benigna.db.repository import InMemoryRepository, Repository

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_repository() -> Repository:
    """FastAPI dependency returning the configured storage backend."""
    backend = config.STORAGE_BACKEND.lower()
    if backend == "memory":
        return InMemoryRepository()
    if backend == "firestore":
        from benigna.db.firestore import FirestoreRepository

        return FirestoreRepository(config.init_firebase())
    if backend != "json":
        raise RuntimeError(f"Unknown storage backend: {config.STORAGE_BACKEND}")
    logger.info("Using JSON storage in %s", config.DATA_DIR)
    return JsonFileRepository(config.DATA_DIR)
