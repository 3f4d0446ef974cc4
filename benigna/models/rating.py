# benigna-api/benigna/models/rating.py
from pydantic import BaseModel, Field

from benigna.models.base import DocumentInDB


class RatingCreate(BaseModel):
    donation_id: str
    rating: int = Field(..., ge=1, le=5)
    comment: str = ""


class RatingInDB(DocumentInDB, RatingCreate):
    donor_id: str
    institution_id: str
