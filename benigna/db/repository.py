# benigna-api/benigna/db/repository.py
"""Typed repository over one record collection per entity type.

Backends only implement the four record-level primitives; the typed
operations and the invariants that span records (unique e-mail/CPF/CNPJ,
institution rating recompute) live here so every backend shares them.
"""
import copy
import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Union

from benigna.core.errors import ConflictError, NotFoundError
from benigna.models.category import CategoryInDB
from benigna.models.donation import DonationInDB
from benigna.models.institution import InstitutionInDB
from benigna.models.rating import RatingInDB
from benigna.models.user import UserInDB, UserType

logger = logging.getLogger(__name__)

USERS = "users"
DONATIONS = "donations"
RATINGS = "ratings"
CATEGORIES = "categories"

Record = Dict[str, object]
AnyUser = Union[UserInDB, InstitutionInDB]


def user_from_record(record: Record) -> AnyUser:
    if record.get("type") == UserType.INSTITUTION.value:
        return InstitutionInDB.model_validate(record)
    return UserInDB.model_validate(record)


class Repository(ABC):
    @abstractmethod
    def _all(self, collection: str) -> List[Record]:
        ...

    @abstractmethod
    def _get(self, collection: str, record_id: str) -> Optional[Record]:
        ...

    @abstractmethod
    def _put(self, collection: str, record_id: str, record: Record) -> None:
        ...

    @abstractmethod
    def _delete(self, collection: str, record_id: str) -> bool:
        ...

    # Users and institutions share one collection, told apart by ``type``.

    def get_users(self) -> List[AnyUser]:
        return [user_from_record(r) for r in self._all(USERS)]

    def get_user(self, user_id: str) -> Optional[AnyUser]:
        record = self._get(USERS, user_id)
        return user_from_record(record) if record else None

    def get_user_by_email(self, email: str) -> Optional[AnyUser]:
        email = email.strip().lower()
        for user in self.get_users():
            if user.email.lower() == email:
                return user
        return None

    def save_user(self, user: AnyUser) -> AnyUser:
        for existing in self.get_users():
            if existing.id == user.id:
                continue
            if existing.email.lower() == user.email.lower():
                raise ConflictError("Email já cadastrado")
            if user.cpf and existing.cpf == user.cpf:
                raise ConflictError("CPF já cadastrado")
            if user.cnpj and existing.cnpj == user.cnpj:
                raise ConflictError("CNPJ já cadastrado")
        self._put(USERS, user.id, user.model_dump(mode="json"))
        return user

    def get_institutions(self) -> List[InstitutionInDB]:
        return [u for u in self.get_users() if isinstance(u, InstitutionInDB)]

    def get_institution(self, institution_id: str) -> Optional[InstitutionInDB]:
        user = self.get_user(institution_id)
        return user if isinstance(user, InstitutionInDB) else None

    def save_institution(self, institution: InstitutionInDB) -> InstitutionInDB:
        return self.save_user(institution)

    # Donations

    def get_donations(self) -> List[DonationInDB]:
        return [DonationInDB.model_validate(r) for r in self._all(DONATIONS)]

    def get_donation(self, donation_id: str) -> Optional[DonationInDB]:
        record = self._get(DONATIONS, donation_id)
        return DonationInDB.model_validate(record) if record else None

    def save_donation(self, donation: DonationInDB) -> DonationInDB:
        self._put(DONATIONS, donation.id, donation.model_dump(mode="json"))
        return donation

    def delete_donation(self, donation_id: str) -> bool:
        return self._delete(DONATIONS, donation_id)

    # Ratings

    def get_ratings(self, institution_id: Optional[str] = None) -> List[RatingInDB]:
        ratings = [RatingInDB.model_validate(r) for r in self._all(RATINGS)]
        if institution_id is not None:
            ratings = [r for r in ratings if r.institution_id == institution_id]
        return ratings

    def save_rating(self, rating: RatingInDB) -> InstitutionInDB:
        """Store the rating and refresh the institution's mean and count."""
        institution = self.get_institution(rating.institution_id)
        if institution is None:
            raise NotFoundError("Instituição não encontrada")

        self._put(RATINGS, rating.id, rating.model_dump(mode="json"))

        values = [r.rating for r in self.get_ratings(institution.id)]
        institution.rating = sum(values) / len(values)
        institution.total_ratings = len(values)
        logger.debug("Institution %s rating is now %.2f over %d", institution.id, institution.rating, len(values))
        return self.save_institution(institution)

    # Categories

    def get_categories(self) -> List[CategoryInDB]:
        return [CategoryInDB.model_validate(r) for r in self._all(CATEGORIES)]

    def get_category(self, category_id: str) -> Optional[CategoryInDB]:
        record = self._get(CATEGORIES, category_id)
        return CategoryInDB.model_validate(record) if record else None

    def save_category(self, category: CategoryInDB) -> CategoryInDB:
        self._put(CATEGORIES, category.id, category.model_dump(mode="json"))
        return category

    def delete_category(self, category_id: str) -> bool:
        return self._delete(CATEGORIES, category_id)


class KeyValueRepository(Repository):
    """A repository stored as one array of records per collection key."""

    @abstractmethod
    def _load(self, collection: str) -> List[Record]:
        ...

    @abstractmethod
    def _store(self, collection: str, records: List[Record]) -> None:
        ...

    def _all(self, collection: str) -> List[Record]:
        return self._load(collection)

    def _get(self, collection: str, record_id: str) -> Optional[Record]:
        for record in self._load(collection):
            if record.get("id") == record_id:
                return record
        return None

    def _put(self, collection: str, record_id: str, record: Record) -> None:
        records = self._load(collection)
        for index, existing in enumerate(records):
            if existing.get("id") == record_id:
                records[index] = record
                break
        else:
            records.append(record)
        self._store(collection, records)

    def _delete(self, collection: str, record_id: str) -> bool:
        records = self._load(collection)
        kept = [r for r in records if r.get("id") != record_id]
        if len(kept) == len(records):
            return False
        self._store(collection, kept)
        return True


class InMemoryRepository(KeyValueRepository):
    def __init__(self) -> None:
        self._data: Dict[str, List[Record]] = {}

    def _load(self, collection: str) -> List[Record]:
        return copy.deepcopy(self._data.get(collection, []))

    def _store(self, collection: str, records: List[Record]) -> None:
        self._data[collection] = copy.deepcopy(records)
