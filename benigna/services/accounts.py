# benigna-api/benigna/services/accounts.py
import logging
from typing import Optional

import pydantic

from benigna.auth.security import hash_password, verify_password
from benigna.core import validation as v
from benigna.core.errors import AuthenticationError, ConflictError, GeocodingError, NotFoundError, ValidationError
from benigna.core.geo import DEFAULT_COORDINATE
from benigna.core.geocoding import GeocodingClient
from benigna.db.repository import AnyUser, Repository
from benigna.models.account import RegisterRequest
from benigna.models.base import utc_now
from benigna.models.institution import Address, AddressInput, InstitutionInDB, InstitutionUpdate, default_working_hours
from benigna.models.user import UserInDB, UserType

logger = logging.getLogger(__name__)

NON_NULLABLE_LISTS = ("working_hours", "accepted_categories")


def _validate_address(address: Optional[AddressInput]) -> None:
    if address is None:
        raise ValidationError("Endereço é obrigatório")
    v.ensure_valid([
        v.validate_zip_code(address.zip_code),
        v.validate_required(address.street, "Rua"),
        v.validate_required(address.number, "Número"),
        v.validate_required(address.neighborhood, "Bairro"),
        v.validate_required(address.city, "Cidade"),
        v.validate_required(address.state, "Estado"),
    ])


def validate_registration(payload: RegisterRequest) -> None:
    checks = [
        v.validate_required(payload.name, "Nome"),
        v.validate_email(payload.email.strip()),
        v.validate_password(payload.password),
        v.validate_phone(payload.phone),
    ]
    if payload.type == UserType.DONOR.value:
        checks.append(v.validate_cpf(payload.cpf or ""))
    else:
        checks.append(v.validate_cnpj(payload.cnpj or ""))
        checks.append(v.validate_required(payload.description or "", "Descrição"))
    v.ensure_valid(checks)

    if payload.type == UserType.INSTITUTION.value:
        _validate_address(payload.address)


async def resolve_address(address: AddressInput, geocoder: GeocodingClient) -> Address:
    """Fill in missing coordinates by geocoding the address text."""
    if address.latitude is not None and address.longitude is not None:
        return Address.model_validate(address.model_dump())

    data = address.model_dump()
    try:
        location = await geocoder.geocode(address.one_line())
        data.update(latitude=location.latitude, longitude=location.longitude)
    except (GeocodingError, NotFoundError) as e:
        logger.warning("Could not geocode '%s' (%s), using default coordinates", address.one_line(), e.message)
        data.update(latitude=DEFAULT_COORDINATE.latitude, longitude=DEFAULT_COORDINATE.longitude)
    return Address.model_validate(data)


async def register(repo: Repository, payload: RegisterRequest, geocoder: GeocodingClient) -> AnyUser:
    validate_registration(payload)

    email = payload.email.strip().lower()
    if repo.get_user_by_email(email) is not None:
        raise ConflictError("Email já cadastrado")

    now = utc_now()
    data = {
        "name": payload.name.strip(),
        "email": email,
        "phone": v.only_digits(payload.phone),
        "type": payload.type,
        "profile_image": payload.profile_image,
        "password_hash": hash_password(payload.password),
        "created_at": now,
        "updated_at": now,
    }
    try:
        if payload.type == UserType.DONOR.value:
            user = UserInDB(**data, cpf=v.only_digits(payload.cpf))
        else:
            address = await resolve_address(payload.address, geocoder)
            user = InstitutionInDB(
                **data,
                cnpj=v.only_digits(payload.cnpj),
                description=payload.description.strip(),
                address=address,
                working_hours=payload.working_hours or default_working_hours(),
                accepted_categories=payload.accepted_categories,
            )
    except pydantic.ValidationError as e:
        logger.info("Registration rejected by schema: %s", e)
        raise _schema_error(e)

    repo.save_user(user)
    logger.info("Registered %s %s", user.type.value, user.id)
    return user


def _schema_error(error: pydantic.ValidationError) -> ValidationError:
    """Name the first field the schema rejected."""
    loc = error.errors()[0]["loc"]
    field = str(loc[0]) if loc else ""
    if field == "email":
        return ValidationError("Email inválido")
    return ValidationError(f"Campo inválido: {field}" if field else "Dados inválidos")


def login(repo: Repository, email: str, password: str) -> AnyUser:
    user = repo.get_user_by_email(email or "")
    if user is None:
        raise AuthenticationError("Email não encontrado")
    if not verify_password(password or "", user.password_hash):
        raise AuthenticationError("Senha incorreta")
    return user


async def update_institution(
    repo: Repository,
    institution: InstitutionInDB,
    update: InstitutionUpdate,
    geocoder: GeocodingClient,
) -> InstitutionInDB:
    changes = update.model_dump(exclude_unset=True, exclude={"address"})
    # null on a list field means "leave unchanged"
    for key in NON_NULLABLE_LISTS:
        if key in changes and changes[key] is None:
            del changes[key]
    if "name" in changes:
        v.ensure_valid([v.validate_required(changes["name"] or "", "Nome")])
    if "phone" in changes:
        v.ensure_valid([v.validate_phone(changes["phone"] or "")])
        changes["phone"] = v.only_digits(changes["phone"])
    if "description" in changes:
        v.ensure_valid([v.validate_required(changes["description"] or "", "Descrição")])

    data = institution.model_dump()
    data.update(changes)
    if update.address is not None:
        _validate_address(update.address)
        address = await resolve_address(update.address, geocoder)
        data["address"] = address.model_dump()
    data["updated_at"] = utc_now()

    try:
        updated = InstitutionInDB.model_validate(data)
    except pydantic.ValidationError as e:
        logger.info("Institution update rejected by schema: %s", e)
        raise _schema_error(e)
    return repo.save_institution(updated)
