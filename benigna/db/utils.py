# benigna-api/benigna/db/utils.py
from datetime import datetime
from typing import Any, Dict

from google.cloud.firestore import GeoPoint


def _plain(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, GeoPoint):
        return {"latitude": value.latitude, "longitude": value.longitude}
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    # Firestore sentinels (e.g. SERVER_TIMESTAMP) read back before being resolved
    if not isinstance(value, str) and str(value).startswith("Sentinel"):
        return None
    return value


def convert_doc_to_record(doc_id: str, doc_data: Dict[str, Any]) -> Dict[str, Any]:
    """Turn a Firestore document into a JSON-safe record carrying its ID."""
    return {**_plain(doc_data), "id": doc_id}
