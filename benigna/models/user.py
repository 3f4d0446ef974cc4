# benigna-api/benigna/models/user.py
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, EmailStr

from benigna.models.base import DocumentInDB


class UserType(str, Enum):
    DONOR = "donor"
    INSTITUTION = "institution"
    ADMIN = "admin"


class UserBase(BaseModel):
    name: str
    email: EmailStr
    phone: str
    cpf: Optional[str] = None
    cnpj: Optional[str] = None
    type: UserType = UserType.DONOR
    profile_image: Optional[str] = None


class UserPublic(DocumentInDB, UserBase):
    updated_at: Optional[datetime] = None


class UserInDB(UserPublic):
    password_hash: str
