from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from benigna import config
from benigna.core.errors import InvalidTransitionError, NotFoundError, PermissionDeniedError, ValidationError
from benigna.models.donation import DeliverySchedule, DonationCreate, DonationStatus
from benigna.models.user import UserInDB, UserType
from benigna.services import donations

from conftest import DONOR_CPF, OTHER_CPF, make_institution

TODAY = date(2024, 3, 4)
TUESDAY = date(2024, 3, 5)


@pytest.fixture
def donor(repo):
    return repo.save_user(UserInDB(name="Joana", email="joana@benigna.org", phone="11977776666",
                                   cpf=DONOR_CPF, password_hash="x"))


@pytest.fixture
def other_donor(repo):
    return repo.save_user(UserInDB(name="Pedro", email="pedro@benigna.org", phone="11977775555",
                                   cpf=OTHER_CPF, password_hash="x"))


@pytest.fixture
def institution(repo):
    return repo.save_institution(make_institution())


@pytest.fixture
def donation(repo, donor):
    payload = DonationCreate(category="Roupas", subcategory="Agasalhos", description="Casacos de lã", quantity=3)
    return donations.create_donation(repo, donor, payload)


def schedule(repo, donor, donation, institution, day=TUESDAY, time="09:30"):
    slot = DeliverySchedule(institution_id=institution.id, day=day, time=time)
    return donations.schedule_delivery(repo, donor, donation.id, slot, TODAY)


def test_new_donation_is_pending(repo, donation, donor):
    assert donation.status == DonationStatus.PENDING
    assert donation.donor_id == donor.id
    assert repo.get_donation(donation.id).quantity == 3


@pytest.mark.parametrize("field,value", [("description", "   "), ("category", ""), ("quantity", 0)])
def test_required_fields(repo, donor, field, value):
    data = dict(category="Roupas", subcategory="Adulto", description="Camisas", quantity=1)
    data[field] = value
    with pytest.raises(ValidationError, match="campos obrigatórios"):
        donations.create_donation(repo, donor, DonationCreate(**data))


def test_image_limit():
    with pytest.raises(ValueError):
        DonationCreate(category="Roupas", subcategory="Adulto", description="x", images=["a"] * 6)


def test_full_lifecycle(repo, donor, donation, institution):
    scheduled = schedule(repo, donor, donation, institution)
    assert scheduled.status == DonationStatus.SCHEDULED
    assert scheduled.institution_id == institution.id
    assert scheduled.scheduled_date == datetime(2024, 3, 5, 9, 30, tzinfo=ZoneInfo(config.APP_TIMEZONE))
    assert repo.get_donation(donation.id).scheduled_date.utcoffset() is not None

    delivered = donations.confirm_delivery(repo, institution, donation.id)
    assert delivered.status == DonationStatus.DELIVERED
    assert delivered.delivered_date is not None

    with pytest.raises(InvalidTransitionError):
        donations.cancel_donation(repo, donor, donation.id)


def test_pending_cannot_be_delivered(repo, donation, institution):
    with pytest.raises(PermissionDeniedError):
        donations.confirm_delivery(repo, institution, donation.id)

    donation.institution_id = institution.id
    repo.save_donation(donation)
    with pytest.raises(InvalidTransitionError):
        donations.confirm_delivery(repo, institution, donation.id)


def test_cancelled_is_terminal(repo, donor, donation, institution):
    donations.cancel_donation(repo, donor, donation.id)
    with pytest.raises(InvalidTransitionError):
        schedule(repo, donor, donation, institution)
    with pytest.raises(InvalidTransitionError):
        donations.cancel_donation(repo, donor, donation.id)


def test_schedule_must_be_from_tomorrow(repo, donor, donation, institution):
    with pytest.raises(ValidationError, match="a partir de amanhã"):
        schedule(repo, donor, donation, institution, day=TODAY)


def test_schedule_must_use_an_available_slot(repo, donor, donation, institution):
    with pytest.raises(ValidationError, match="Horário indisponível"):
        schedule(repo, donor, donation, institution, time="17:00")
    with pytest.raises(ValidationError, match="Horário indisponível"):
        schedule(repo, donor, donation, institution, day=date(2024, 3, 10))
    assert repo.get_donation(donation.id).status == DonationStatus.PENDING


def test_schedule_unknown_institution(repo, donor, donation, institution):
    institution.id = "missing"
    with pytest.raises(NotFoundError):
        schedule(repo, donor, donation, institution)


def test_other_donor_cannot_touch_donation(repo, other_donor, donation, institution):
    with pytest.raises(PermissionDeniedError):
        donations.get_donation(repo, other_donor, donation.id)
    with pytest.raises(PermissionDeniedError):
        donations.cancel_donation(repo, other_donor, donation.id)
    with pytest.raises(PermissionDeniedError):
        donations.delete_donation(repo, other_donor, donation.id)


def test_list_donations_by_role(repo, donor, other_donor, donation, institution):
    schedule(repo, donor, donation, institution)
    admin = UserInDB(name="Admin", email="admin@benigna.org", phone="11999999999",
                     type=UserType.ADMIN, password_hash="x")

    assert [d.id for d in donations.list_donations(repo, donor)] == [donation.id]
    assert [d.id for d in donations.list_donations(repo, institution)] == [donation.id]
    assert donations.list_donations(repo, other_donor) == []
    assert len(donations.list_donations(repo, admin)) == 1


def test_delete_donation(repo, donor, donation):
    donations.delete_donation(repo, donor, donation.id)
    with pytest.raises(NotFoundError):
        donations.get_donation(repo, donor, donation.id)


def test_summary_counts(repo, donor, donation, institution):
    payload = DonationCreate(category="Livros", subcategory="Infantis", description="Gibis")
    second = donations.create_donation(repo, donor, payload)
    donations.cancel_donation(repo, donor, second.id)
    schedule(repo, donor, donation, institution)

    summary = donations.summarize(repo.get_donations())
    assert summary.total == 2
    assert summary.scheduled == 1
    assert summary.cancelled == 1
    assert summary.pending == 0
