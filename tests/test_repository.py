import json

import firebase_admin
import pytest
from firebase_admin import credentials, firestore
from google.cloud.firestore import GeoPoint

from benigna import config
from benigna.core.errors import ConflictError, NotFoundError
from benigna.db.firestore import FirestoreRepository
from benigna.db.json_store import JsonFileRepository
from benigna.db.repository import InMemoryRepository
from benigna.models.category import CategoryInDB
from benigna.models.donation import DonationInDB, DonationStatus
from benigna.models.institution import InstitutionInDB
from benigna.models.rating import RatingInDB
from benigna.models.user import UserInDB

from conftest import DONOR_CPF, INSTITUTION_CNPJ, make_institution


def make_donor(email="joana@benigna.org", cpf=DONOR_CPF):
    return UserInDB(name="Joana", email=email, phone="11977776666", cpf=cpf, password_hash="x")


def rate(repo, institution_id, value):
    rating = RatingInDB(donation_id=f"d-{value}", rating=value, donor_id="u1", institution_id=institution_id)
    return repo.save_rating(rating)


class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data
        self.exists = data is not None

    def to_dict(self):
        return dict(self._data)


class FakeDocument:
    def __init__(self, store, doc_id):
        self.store = store
        self.doc_id = doc_id

    def get(self):
        return FakeSnapshot(self.doc_id, self.store.get(self.doc_id))

    def set(self, data):
        self.store[self.doc_id] = data

    def delete(self):
        self.store.pop(self.doc_id, None)


class FakeCollection:
    def __init__(self):
        self.docs = {}

    def document(self, doc_id):
        return FakeDocument(self.docs, doc_id)

    def stream(self):
        return [FakeSnapshot(doc_id, data) for doc_id, data in self.docs.items()]


class FakeFirestore:
    def __init__(self):
        self.collections = {}

    def collection(self, name):
        return self.collections.setdefault(name, FakeCollection())


@pytest.fixture(params=["memory", "json", "firestore"])
def any_repo(request, tmp_path):
    if request.param == "memory":
        return InMemoryRepository()
    if request.param == "json":
        return JsonFileRepository(str(tmp_path))
    return FirestoreRepository(FakeFirestore())


def test_user_round_trip(any_repo):
    donor = any_repo.save_user(make_donor())
    institution = any_repo.save_institution(make_institution(cnpj=INSTITUTION_CNPJ))

    assert any_repo.get_user(donor.id) == donor
    assert isinstance(any_repo.get_user(institution.id), InstitutionInDB)
    assert any_repo.get_user_by_email(" JOANA@benigna.org ").id == donor.id
    assert [i.id for i in any_repo.get_institutions()] == [institution.id]
    assert any_repo.get_institution(donor.id) is None
    assert any_repo.get_user("missing") is None


def test_duplicate_users_are_rejected(any_repo):
    any_repo.save_user(make_donor())
    with pytest.raises(ConflictError, match="Email"):
        any_repo.save_user(make_donor(cpf=None))
    with pytest.raises(ConflictError, match="CPF"):
        any_repo.save_user(make_donor(email="outra@benigna.org"))

    any_repo.save_institution(make_institution(cnpj=INSTITUTION_CNPJ))
    with pytest.raises(ConflictError, match="CNPJ"):
        any_repo.save_institution(make_institution("Outra Casa", cnpj=INSTITUTION_CNPJ))


def test_resaving_a_user_is_not_a_duplicate(any_repo):
    donor = any_repo.save_user(make_donor())
    donor.name = "Joana Silva"
    any_repo.save_user(donor)
    assert [u.name for u in any_repo.get_users()] == ["Joana Silva"]


def test_rating_recompute(any_repo):
    institution = any_repo.save_institution(make_institution())
    for value in (4, 4, 4):
        rate(any_repo, institution.id, value)

    updated = rate(any_repo, institution.id, 5)
    assert updated.rating == pytest.approx(4.25)
    assert updated.total_ratings == 4
    assert any_repo.get_institution(institution.id).total_ratings == 4
    assert len(any_repo.get_ratings(institution.id)) == 4
    assert any_repo.get_ratings("other") == []


def test_rating_unknown_institution(any_repo):
    with pytest.raises(NotFoundError):
        rate(any_repo, "missing", 5)


def test_donation_and_category_crud(any_repo):
    donation = DonationInDB(category="Roupas", subcategory="Adulto", description="Casacos", donor_id="u1")
    any_repo.save_donation(donation)
    donation.status = DonationStatus.CANCELLED
    any_repo.save_donation(donation)
    assert any_repo.get_donation(donation.id).status == DonationStatus.CANCELLED
    assert len(any_repo.get_donations()) == 1
    assert any_repo.delete_donation(donation.id)
    assert not any_repo.delete_donation(donation.id)

    category = CategoryInDB(name="Livros", icon="📚")
    category.add_subcategory("Didáticos")
    any_repo.save_category(category)
    assert any_repo.get_category(category.id).subcategories[0].name == "Didáticos"
    assert any_repo.delete_category(category.id)
    assert any_repo.get_categories() == []


def test_in_memory_repository_returns_copies():
    repo = InMemoryRepository()
    donor = repo.save_user(make_donor())
    fetched = repo.get_user(donor.id)
    fetched.name = "Mudado"
    assert repo.get_user(donor.id).name == "Joana"


def test_json_store_writes_arrays(tmp_path):
    repo = JsonFileRepository(str(tmp_path))
    donor = repo.save_user(make_donor())

    data = json.loads((tmp_path / "users.json").read_text(encoding="utf-8"))
    assert [r["id"] for r in data] == [donor.id]
    assert not list(tmp_path.glob("*.tmp"))

    # a fresh instance over the same directory sees the stored data
    assert JsonFileRepository(str(tmp_path)).get_user(donor.id).email == donor.email


def test_json_store_ignores_non_array_files(tmp_path):
    (tmp_path / "categories.json").write_text('{"oops": true}', encoding="utf-8")
    assert JsonFileRepository(str(tmp_path)).get_categories() == []


def test_firestore_institution_gets_location_and_geohash():
    db = FakeFirestore()
    repo = FirestoreRepository(db)
    institution = repo.save_institution(make_institution(latitude=-23.5505, longitude=-46.6333))

    stored = db.collection("users").docs[institution.id]
    assert "id" not in stored
    assert isinstance(stored["location"], GeoPoint)
    assert stored["geohash"].startswith("6gyf")
    assert repo.get_institution(institution.id).address.latitude == -23.5505


def test_firestore_requires_client():
    with pytest.raises(RuntimeError):
        FirestoreRepository(None)


@pytest.mark.parametrize("app_exists", [False, True])
def test_init_firebase_reuses_existing_app(monkeypatch, app_exists):
    monkeypatch.delenv("GOOGLE_APPLICATION_CREDENTIALS", raising=False)
    monkeypatch.setenv("FIREBASE_SERVICE_ACCOUNT_JSON", "{}")
    initialized = []

    def get_app():
        if not app_exists:
            raise ValueError("no default app")

    monkeypatch.setattr(credentials, "Certificate", lambda info: "cred")
    monkeypatch.setattr(firebase_admin, "get_app", get_app)
    monkeypatch.setattr(firebase_admin, "initialize_app", initialized.append)
    monkeypatch.setattr(firestore, "client", lambda: "db")

    assert config.init_firebase() == "db"
    assert initialized == ([] if app_exists else ["cred"])
