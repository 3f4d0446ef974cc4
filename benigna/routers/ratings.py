# benigna-api/benigna/routers/ratings.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from benigna.auth.dependencies import require_role
from benigna.core.errors import BenignaError
from benigna.db.repository import AnyUser, Repository
from benigna.db.session import get_repository
from benigna.models.institution import InstitutionPublic
from benigna.models.rating import RatingCreate
from benigna.models.user import UserType
from benigna.services.ratings import rate_institution

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ratings", tags=["Ratings"])


@router.post("/", response_model=InstitutionPublic, status_code=status.HTTP_201_CREATED)
async def create_rating(
    rating: RatingCreate,
    donor: AnyUser = Depends(require_role(UserType.DONOR)),
    repo: Repository = Depends(get_repository),
):
    try:
        institution = rate_institution(repo, donor, rating)
        return institution.model_dump(exclude={"password_hash"})
    except BenignaError:
        raise
    except Exception as e:
        logger.exception("Rating donation %s failed", rating.donation_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to save rating: {e}")
