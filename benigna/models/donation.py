# benigna-api/benigna/models/donation.py
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from benigna.models.base import DocumentInDB
from benigna.models.institution import HHMM_PATTERN

MAX_DONATION_IMAGES = 5


class DonationCondition(str, Enum):
    NEW = "new"
    USED_GOOD = "used_good"
    USED_FAIR = "used_fair"


class DonationStatus(str, Enum):
    PENDING = "pending"
    SCHEDULED = "scheduled"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class DonationCreate(BaseModel):
    category: str
    subcategory: str
    description: str
    quantity: int = 1
    condition: DonationCondition = DonationCondition.NEW
    images: List[str] = Field(default_factory=list, max_length=MAX_DONATION_IMAGES)


class DonationInDB(DocumentInDB, DonationCreate):
    donor_id: str
    institution_id: Optional[str] = None
    status: DonationStatus = DonationStatus.PENDING
    scheduled_date: Optional[datetime] = None
    delivered_date: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DeliverySchedule(BaseModel):
    institution_id: str
    day: date
    time: str = Field(..., pattern=HHMM_PATTERN)


class DonationSummary(BaseModel):
    total: int = 0
    pending: int = 0
    scheduled: int = 0
    delivered: int = 0
    cancelled: int = 0


class DeliverySlots(BaseModel):
    institution_id: str
    day: date
    earliest_day: date
    slots: List[str] = []
