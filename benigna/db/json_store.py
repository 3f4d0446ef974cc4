# benigna-api/benigna/db/json_store.py
import json
import logging
import os
from pathlib import Path
from typing import List

from benigna.db.repository import KeyValueRepository, Record

logger = logging.getLogger(__name__)


class JsonFileRepository(KeyValueRepository):
    """Keeps each collection as a JSON array in ``<data_dir>/<collection>.json``."""

    def __init__(self, data_dir: str) -> None:
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, collection: str) -> Path:
        return self.data_dir / f"{collection}.json"

    def _load(self, collection: str) -> List[Record]:
        path = self._path(collection)
        if not path.exists():
            return []
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            logger.error("%s does not hold a JSON array, ignoring it", path)
            return []
        return data

    def _store(self, collection: str, records: List[Record]) -> None:
        path = self._path(collection)
        tmp_path = path.with_suffix(".json.tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(records, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, path)
