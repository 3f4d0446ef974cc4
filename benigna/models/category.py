# benigna-api/benigna/models/category.py
from typing import List

from pydantic import BaseModel

from benigna.models.base import DocumentInDB, new_id


class Subcategory(BaseModel):
    id: str
    name: str
    category_id: str


class CategoryCreate(BaseModel):
    name: str
    icon: str


class SubcategoryCreate(BaseModel):
    name: str


class CategoryInDB(DocumentInDB, CategoryCreate):
    subcategories: List[Subcategory] = []

    def add_subcategory(self, name: str) -> Subcategory:
        subcategory = Subcategory(id=new_id(), name=name, category_id=self.id)
        self.subcategories.append(subcategory)
        return subcategory
