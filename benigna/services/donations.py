# benigna-api/benigna/services/donations.py
"""Donation lifecycle: pending -> scheduled -> delivered, with cancelled as a side exit."""
import logging
from datetime import date
from typing import Iterable, List

from benigna.core.errors import InvalidTransitionError, NotFoundError, PermissionDeniedError, ValidationError
from benigna.core.schedule import available_slots, earliest_delivery_date, slot_datetime
from benigna.db.repository import AnyUser, Repository
from benigna.models.base import utc_now
from benigna.models.donation import (
    DeliverySchedule,
    DonationCreate,
    DonationInDB,
    DonationStatus,
    DonationSummary,
)
from benigna.models.user import UserType

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    DonationStatus.PENDING: {DonationStatus.SCHEDULED, DonationStatus.CANCELLED},
    DonationStatus.SCHEDULED: {DonationStatus.DELIVERED, DonationStatus.CANCELLED},
    DonationStatus.DELIVERED: set(),
    DonationStatus.CANCELLED: set(),
}


def transition(donation: DonationInDB, new_status: DonationStatus) -> DonationInDB:
    if new_status not in ALLOWED_TRANSITIONS[donation.status]:
        raise InvalidTransitionError(
            f"Não é possível alterar a doação de '{donation.status.value}' para '{new_status.value}'"
        )
    donation.status = new_status
    donation.updated_at = utc_now()
    return donation


def create_donation(repo: Repository, donor: AnyUser, payload: DonationCreate) -> DonationInDB:
    if not (
        payload.category.strip()
        and payload.subcategory.strip()
        and payload.description.strip()
        and payload.quantity > 0
    ):
        raise ValidationError("Por favor, preencha todos os campos obrigatórios.")

    now = utc_now()
    donation = DonationInDB(**payload.model_dump(), donor_id=donor.id, created_at=now, updated_at=now)
    repo.save_donation(donation)
    logger.info("Donor %s created donation %s", donor.id, donation.id)
    return donation


def list_donations(repo: Repository, user: AnyUser) -> List[DonationInDB]:
    donations = repo.get_donations()
    if user.type == UserType.ADMIN:
        return donations
    if user.type == UserType.INSTITUTION:
        return [d for d in donations if d.institution_id == user.id]
    return [d for d in donations if d.donor_id == user.id]


def get_donation(repo: Repository, user: AnyUser, donation_id: str) -> DonationInDB:
    donation = repo.get_donation(donation_id)
    if donation is None:
        raise NotFoundError("Doação não encontrada")
    if user.type != UserType.ADMIN and user.id not in (donation.donor_id, donation.institution_id):
        raise PermissionDeniedError("Você não tem acesso a esta doação")
    return donation


def _owned_by(repo: Repository, donor: AnyUser, donation_id: str) -> DonationInDB:
    donation = get_donation(repo, donor, donation_id)
    if donation.donor_id != donor.id:
        raise PermissionDeniedError("Apenas o doador pode alterar esta doação")
    return donation


def schedule_delivery(
    repo: Repository,
    donor: AnyUser,
    donation_id: str,
    schedule: DeliverySchedule,
    today: date,
) -> DonationInDB:
    donation = _owned_by(repo, donor, donation_id)

    institution = repo.get_institution(schedule.institution_id)
    if institution is None:
        raise NotFoundError("Instituição não encontrada")

    if schedule.day < earliest_delivery_date(today):
        raise ValidationError("A entrega deve ser agendada a partir de amanhã")
    if schedule.time not in available_slots(institution.working_hours, schedule.day):
        raise ValidationError("Horário indisponível para esta instituição")

    transition(donation, DonationStatus.SCHEDULED)
    donation.institution_id = institution.id
    donation.scheduled_date = slot_datetime(schedule.day, schedule.time)
    repo.save_donation(donation)
    logger.info("Donation %s scheduled at %s for %s", donation.id, donation.scheduled_date, institution.id)
    return donation


def confirm_delivery(repo: Repository, institution: AnyUser, donation_id: str) -> DonationInDB:
    donation = get_donation(repo, institution, donation_id)
    if donation.institution_id != institution.id:
        raise PermissionDeniedError("Apenas a instituição de destino pode confirmar a entrega")

    transition(donation, DonationStatus.DELIVERED)
    donation.delivered_date = utc_now()
    repo.save_donation(donation)
    return donation


def cancel_donation(repo: Repository, donor: AnyUser, donation_id: str) -> DonationInDB:
    donation = _owned_by(repo, donor, donation_id)
    transition(donation, DonationStatus.CANCELLED)
    repo.save_donation(donation)
    return donation


def delete_donation(repo: Repository, user: AnyUser, donation_id: str) -> None:
    donation = get_donation(repo, user, donation_id)
    if user.type != UserType.ADMIN and donation.donor_id != user.id:
        raise PermissionDeniedError("Apenas o doador pode excluir esta doação")
    repo.delete_donation(donation.id)


def summarize(donations: Iterable[DonationInDB]) -> DonationSummary:
    summary = DonationSummary()
    for donation in donations:
        summary.total += 1
        setattr(summary, donation.status.value, getattr(summary, donation.status.value) + 1)
    return summary
