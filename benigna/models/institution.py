# benigna-api/benigna/models/institution.py
from typing import List, Optional

from pydantic import BaseModel, Field

from benigna.core.geo import Coordinate
from benigna.models.user import UserInDB, UserPublic

HHMM_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class WorkingHours(BaseModel):
    day_of_week: int = Field(..., ge=0, le=6, description="0 = Sunday")
    is_open: bool = False
    open_time: str = Field("08:00", pattern=HHMM_PATTERN)
    close_time: str = Field("17:00", pattern=HHMM_PATTERN)


def default_working_hours() -> List[WorkingHours]:
    # Monday to Friday, 08:00-17:00
    return [WorkingHours(day_of_week=day, is_open=0 < day < 6) for day in range(7)]


class AddressInput(BaseModel):
    street: str
    number: str
    complement: Optional[str] = None
    neighborhood: str
    city: str
    state: str
    zip_code: str
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)

    def one_line(self) -> str:
        return f"{self.street}, {self.number}, {self.neighborhood}, {self.city}, {self.state}"


class Address(AddressInput):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)


class InstitutionProfile(BaseModel):
    description: str
    working_hours: List[WorkingHours] = Field(default_factory=default_working_hours)
    accepted_categories: List[str] = []


class InstitutionUpdate(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    profile_image: Optional[str] = None
    description: Optional[str] = None
    address: Optional[AddressInput] = None
    working_hours: Optional[List[WorkingHours]] = None
    accepted_categories: Optional[List[str]] = None


class InstitutionPublic(UserPublic, InstitutionProfile):
    address: Address
    rating: float = 0.0
    total_ratings: int = 0
    verified: bool = False


class InstitutionInDB(InstitutionPublic, UserInDB):
    pass


class InstitutionListing(InstitutionPublic):
    distance_km: Optional[float] = None
    distance_label: Optional[str] = None
    open_now: bool = False
