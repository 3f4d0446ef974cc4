# benigna-api/benigna/models/account.py
from typing import List, Literal, Optional, Union

from pydantic import BaseModel

from benigna.models.institution import AddressInput, InstitutionPublic, WorkingHours
from benigna.models.user import UserPublic

AccountPublic = Union[InstitutionPublic, UserPublic]


class RegisterRequest(BaseModel):
    """Sign-up form for donors and institutions.

    Fields are plain strings so that the localized validators can report
    problems instead of the schema layer. Institution-only fields are ignored
    for donors.
    """
    type: Literal["donor", "institution"] = "donor"
    name: str = ""
    email: str = ""
    password: str = ""
    phone: str = ""
    cpf: Optional[str] = None
    cnpj: Optional[str] = None
    profile_image: Optional[str] = None

    description: Optional[str] = None
    address: Optional[AddressInput] = None
    working_hours: Optional[List[WorkingHours]] = None
    accepted_categories: List[str] = []


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: AccountPublic
