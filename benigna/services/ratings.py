# benigna-api/benigna/services/ratings.py
import logging

from benigna.core.errors import ConflictError, NotFoundError, PermissionDeniedError, ValidationError
from benigna.db.repository import AnyUser, Repository
from benigna.models.base import utc_now
from benigna.models.donation import DonationStatus
from benigna.models.institution import InstitutionInDB
from benigna.models.rating import RatingCreate, RatingInDB

logger = logging.getLogger(__name__)


def rate_institution(repo: Repository, donor: AnyUser, payload: RatingCreate) -> InstitutionInDB:
    """Rate the institution that received one of the donor's delivered donations."""
    donation = repo.get_donation(payload.donation_id)
    if donation is None:
        raise NotFoundError("Doação não encontrada")
    if donation.donor_id != donor.id:
        raise PermissionDeniedError("Apenas o doador pode avaliar esta doação")
    if donation.status != DonationStatus.DELIVERED or not donation.institution_id:
        raise ValidationError("Só é possível avaliar doações entregues")
    if any(r.donation_id == donation.id for r in repo.get_ratings(donation.institution_id)):
        raise ConflictError("Esta doação já foi avaliada")

    rating = RatingInDB(
        **payload.model_dump(),
        donor_id=donor.id,
        institution_id=donation.institution_id,
        created_at=utc_now(),
    )
    institution = repo.save_rating(rating)
    logger.info("Donation %s rated %d for institution %s", donation.id, rating.rating, institution.id)
    return institution
