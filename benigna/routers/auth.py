# benigna-api/benigna/routers/auth.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from benigna.auth.dependencies import get_current_user
from benigna.auth.security import generate_token
from benigna.core.errors import BenignaError
from benigna.core.geocoding import GeocodingClient, get_geocoder
from benigna.db.repository import AnyUser, Repository
from benigna.db.session import get_repository
from benigna.models.account import AccountPublic, LoginRequest, RegisterRequest, TokenResponse
from benigna.services import accounts

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


def _token_response(user: AnyUser) -> TokenResponse:
    return TokenResponse(
        access_token=generate_token(user.id),
        user=user.model_dump(exclude={"password_hash"}),
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    repo: Repository = Depends(get_repository),
    geocoder: GeocodingClient = Depends(get_geocoder),
):
    try:
        user = await accounts.register(repo, payload, geocoder)
        return _token_response(user)
    except BenignaError:
        raise
    except Exception as e:
        logger.exception("Registration failed")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to register user: {e}")


@router.post("/login", response_model=TokenResponse)
async def login(credentials: LoginRequest, repo: Repository = Depends(get_repository)):
    user = accounts.login(repo, credentials.email, credentials.password)
    logger.info("User %s logged in", user.id)
    return _token_response(user)


@router.get("/me", response_model=AccountPublic)
async def read_me(user: AnyUser = Depends(get_current_user)):
    return user.model_dump(exclude={"password_hash"})
