# benigna-api/benigna/models/location.py
from typing import Optional

from pydantic import BaseModel


class LocationData(BaseModel):
    latitude: float
    longitude: float
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None


class PostalAddress(BaseModel):
    zip_code: str
    street: str = ""
    complement: str = ""
    neighborhood: str = ""
    city: str = ""
    state: str = ""
