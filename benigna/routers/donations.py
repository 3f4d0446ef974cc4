# benigna-api/benigna/routers/donations.py
import logging
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from benigna.auth.dependencies import get_current_user, require_role
from benigna.core.errors import BenignaError
from benigna.core.schedule import local_now
from benigna.db.repository import AnyUser, Repository
from benigna.db.session import get_repository
from benigna.models.donation import DeliverySchedule, DonationCreate, DonationInDB, DonationSummary
from benigna.models.user import UserType
from benigna.services import donations as service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/donations", tags=["Donations"])


@router.post("/", response_model=DonationInDB, status_code=status.HTTP_201_CREATED)
async def create_donation(
    donation: DonationCreate,
    donor: AnyUser = Depends(require_role(UserType.DONOR)),
    repo: Repository = Depends(get_repository),
):
    try:
        return service.create_donation(repo, donor, donation)
    except BenignaError:
        raise
    except Exception as e:
        logger.exception("Creating donation failed")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to create donation: {e}")


@router.get("/", response_model=List[DonationInDB])
async def list_donations(user: AnyUser = Depends(get_current_user), repo: Repository = Depends(get_repository)):
    try:
        return service.list_donations(repo, user)
    except Exception as e:
        logger.exception("Listing donations failed")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to retrieve donations: {e}")


@router.get("/summary", response_model=DonationSummary)
async def donation_summary(user: AnyUser = Depends(get_current_user), repo: Repository = Depends(get_repository)):
    return service.summarize(service.list_donations(repo, user))


@router.get("/{donation_id}", response_model=DonationInDB)
async def get_donation(
    donation_id: str,
    user: AnyUser = Depends(get_current_user),
    repo: Repository = Depends(get_repository),
):
    return service.get_donation(repo, user, donation_id)


@router.post("/{donation_id}/schedule", response_model=DonationInDB)
async def schedule_delivery(
    donation_id: str,
    schedule: DeliverySchedule,
    donor: AnyUser = Depends(require_role(UserType.DONOR)),
    repo: Repository = Depends(get_repository),
    now: datetime = Depends(local_now),
):
    try:
        return service.schedule_delivery(repo, donor, donation_id, schedule, now.date())
    except BenignaError:
        raise
    except Exception as e:
        logger.exception("Scheduling donation %s failed", donation_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to schedule delivery: {e}")


@router.post("/{donation_id}/deliver", response_model=DonationInDB)
async def confirm_delivery(
    donation_id: str,
    institution: AnyUser = Depends(require_role(UserType.INSTITUTION)),
    repo: Repository = Depends(get_repository),
):
    donation = service.confirm_delivery(repo, institution, donation_id)
    logger.info("Institution %s received donation %s", institution.id, donation.id)
    return donation


@router.post("/{donation_id}/cancel", response_model=DonationInDB)
async def cancel_donation(
    donation_id: str,
    donor: AnyUser = Depends(require_role(UserType.DONOR)),
    repo: Repository = Depends(get_repository),
):
    return service.cancel_donation(repo, donor, donation_id)


@router.delete("/{donation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_donation(
    donation_id: str,
    user: AnyUser = Depends(get_current_user),
    repo: Repository = Depends(get_repository),
):
    service.delete_donation(repo, user, donation_id)
