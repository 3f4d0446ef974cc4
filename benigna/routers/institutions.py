# benigna-api/benigna/routers/institutions.py
import logging
from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from benigna.auth.dependencies import get_current_institution
from benigna.core.errors import BenignaError, NotFoundError
from benigna.core.filters import FilterOptions, build_listings, filter_institutions
from benigna.core.geo import Coordinate
from benigna.core.geocoding import GeocodingClient, get_geocoder
from benigna.core.schedule import available_slots, earliest_delivery_date, local_now
from benigna.db.repository import Repository
from benigna.db.session import get_repository
from benigna.models.donation import DeliverySlots
from benigna.models.institution import InstitutionInDB, InstitutionListing, InstitutionPublic, InstitutionUpdate
from benigna.models.rating import RatingInDB
from benigna.services import accounts

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/institutions", tags=["Institutions"])


def _get_or_404(repo: Repository, institution_id: str) -> InstitutionInDB:
    institution = repo.get_institution(institution_id)
    if institution is None:
        raise NotFoundError("Instituição não encontrada")
    return institution


@router.get("/", response_model=List[InstitutionListing])
async def list_institutions(
    q: str = "",
    category: str = "",
    max_distance: float = Query(0, ge=0),
    min_rating: float = Query(0, ge=0, le=5),
    open_now: bool = False,
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lon: Optional[float] = Query(None, ge=-180, le=180),
    repo: Repository = Depends(get_repository),
    now: datetime = Depends(local_now),
):
    try:
        options = FilterOptions(
            search_query=q,
            category=category,
            max_distance=max_distance,
            min_rating=min_rating,
            open_now=open_now,
        )
        user_location = None
        if lat is not None and lon is not None:
            user_location = Coordinate(latitude=lat, longitude=lon)

        institutions = filter_institutions(repo.get_institutions(), options, user_location, now)
        return build_listings(institutions, user_location, now)
    except BenignaError:
        raise
    except Exception as e:
        logger.exception("Listing institutions failed")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to retrieve institutions: {e}")


@router.get("/{institution_id}", response_model=InstitutionPublic)
async def get_institution(institution_id: str, repo: Repository = Depends(get_repository)):
    institution = _get_or_404(repo, institution_id)
    return institution.model_dump(exclude={"password_hash"})


@router.put("/{institution_id}", response_model=InstitutionPublic)
async def update_institution(
    institution_id: str,
    update: InstitutionUpdate,
    current: InstitutionInDB = Depends(get_current_institution),
    repo: Repository = Depends(get_repository),
    geocoder: GeocodingClient = Depends(get_geocoder),
):
    if current.id != institution_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You can only update your own institution.")
    try:
        updated = await accounts.update_institution(repo, current, update, geocoder)
        logger.info("Institution %s updated its profile", updated.id)
        return updated.model_dump(exclude={"password_hash"})
    except BenignaError:
        raise
    except Exception as e:
        logger.exception("Updating institution %s failed", institution_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to update institution: {e}")


@router.get("/{institution_id}/slots", response_model=DeliverySlots)
async def get_delivery_slots(
    institution_id: str,
    day: date,
    repo: Repository = Depends(get_repository),
    now: datetime = Depends(local_now),
):
    institution = _get_or_404(repo, institution_id)
    earliest = earliest_delivery_date(now.date())
    slots = available_slots(institution.working_hours, day) if day >= earliest else []
    return DeliverySlots(institution_id=institution.id, day=day, earliest_day=earliest, slots=slots)


@router.get("/{institution_id}/ratings", response_model=List[RatingInDB])
async def get_institution_ratings(institution_id: str, repo: Repository = Depends(get_repository)):
    _get_or_404(repo, institution_id)
    return repo.get_ratings(institution_id)
