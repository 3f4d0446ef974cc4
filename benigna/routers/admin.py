# benigna-api/benigna/routers/admin.py
import logging

from fastapi import APIRouter, Depends

from benigna.auth.dependencies import require_role
from benigna.core.errors import NotFoundError
from benigna.db.repository import Repository
from benigna.db.session import get_repository
from benigna.models.base import utc_now
from benigna.models.institution import InstitutionPublic
from benigna.models.statistics import AdminStatistics
from benigna.models.user import UserType
from benigna.services.statistics import admin_statistics

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_role(UserType.ADMIN))])


@router.get("/statistics", response_model=AdminStatistics)
async def get_statistics(repo: Repository = Depends(get_repository)):
    return admin_statistics(repo)


@router.post("/institutions/{institution_id}/verify", response_model=InstitutionPublic)
async def verify_institution(institution_id: str, repo: Repository = Depends(get_repository)):
    institution = repo.get_institution(institution_id)
    if institution is None:
        raise NotFoundError("Instituição não encontrada")

    institution.verified = True
    institution.updated_at = utc_now()
    repo.save_institution(institution)
    logger.info("Institution %s verified", institution.id)
    return institution.model_dump(exclude={"password_hash"})
