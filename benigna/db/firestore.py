# benigna-api/benigna/db/firestore.py
import logging
from typing import Any, List, Optional

from google.cloud.firestore import GeoPoint

from benigna.core.geo import Coordinate, encode_geohash
from benigna.db.repository import USERS, Record, Repository
from benigna.db.utils import convert_doc_to_record
from benigna.models.user import UserType

logger = logging.getLogger(__name__)


class FirestoreRepository(Repository):
    """One Firestore collection per entity type, one document per record.

    Institution documents also carry a ``location`` GeoPoint and a ``geohash``
    of their address for proximity queries in the console.
    """

    def __init__(self, db: Any) -> None:
        if db is None:
            raise RuntimeError("Firestore not initialized.")
        self.db = db

    def _all(self, collection: str) -> List[Record]:
        docs = self.db.collection(collection).stream()  # synchronous
        return [convert_doc_to_record(doc.id, doc.to_dict()) for doc in docs]

    def _get(self, collection: str, record_id: str) -> Optional[Record]:
        doc = self.db.collection(collection).document(record_id).get()  # synchronous
        if not doc.exists:
            return None
        return convert_doc_to_record(doc.id, doc.to_dict())

    def _put(self, collection: str, record_id: str, record: Record) -> None:
        data = dict(record)
        data.pop("id", None)
        if collection == USERS and data.get("type") == UserType.INSTITUTION.value:
            address = data.get("address") or {}
            point = Coordinate(latitude=address["latitude"], longitude=address["longitude"])
            data["location"] = GeoPoint(point.latitude, point.longitude)
            data["geohash"] = encode_geohash(point)
        self.db.collection(collection).document(record_id).set(data)  # synchronous
        logger.debug("Stored %s/%s", collection, record_id)

    def _delete(self, collection: str, record_id: str) -> bool:
        ref = self.db.collection(collection).document(record_id)
        if not ref.get().exists:
            return False
        ref.delete()
        return True
