# benigna-api/benigna/models/statistics.py
from pydantic import BaseModel


class AdminStatistics(BaseModel):
    total_users: int = 0
    total_institutions: int = 0
    verified_institutions: int = 0
    total_donors: int = 0
    total_donations: int = 0
    pending_donations: int = 0
    scheduled_donations: int = 0
    delivered_donations: int = 0
    cancelled_donations: int = 0
    total_categories: int = 0
    total_ratings: int = 0
    average_rating: float = 0.0
