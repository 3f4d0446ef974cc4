# benigna-api/benigna/routers/categories.py
from typing import List

from fastapi import APIRouter, Depends, status

from benigna.auth.dependencies import require_role
from benigna.db.repository import Repository
from benigna.db.session import get_repository
from benigna.models.category import CategoryCreate, CategoryInDB, Subcategory, SubcategoryCreate
from benigna.models.user import UserType
from benigna.services import categories as service

router = APIRouter(prefix="/categories", tags=["Categories"])

admin_only = require_role(UserType.ADMIN)


@router.get("/", response_model=List[CategoryInDB])
async def list_categories(repo: Repository = Depends(get_repository)):
    return repo.get_categories()


@router.post("/", response_model=CategoryInDB, status_code=status.HTTP_201_CREATED, dependencies=[Depends(admin_only)])
async def create_category(category: CategoryCreate, repo: Repository = Depends(get_repository)):
    return service.add_category(repo, category)


@router.post(
    "/{category_id}/subcategories",
    response_model=Subcategory,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(admin_only)],
)
async def create_subcategory(category_id: str, subcategory: SubcategoryCreate, repo: Repository = Depends(get_repository)):
    return service.add_subcategory(repo, category_id, subcategory.name)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(admin_only)])
async def delete_category(category_id: str, repo: Repository = Depends(get_repository)):
    service.delete_category(repo, category_id)
