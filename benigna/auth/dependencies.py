# benigna-api/benigna/auth/dependencies.py
from typing import Callable

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from benigna.auth.security import decode_token
from benigna.db.repository import AnyUser, Repository
from benigna.db.session import get_repository
from benigna.models.institution import InstitutionInDB
from benigna.models.user import UserType

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user_id(token: HTTPAuthorizationCredentials = Depends(bearer_scheme)) -> str:
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No authentication token provided",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return decode_token(token.credentials)
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except jwt.PyJWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_current_user(
    user_id: str = Depends(get_current_user_id),
    repo: Repository = Depends(get_repository),
) -> AnyUser:
    user = repo.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User no longer exists")
    return user


def require_role(*roles: UserType) -> Callable:
    async def checker(user: AnyUser = Depends(get_current_user)) -> AnyUser:
        if user.type not in roles:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
        return user
    return checker


async def get_current_institution(
    user: AnyUser = Depends(require_role(UserType.INSTITUTION)),
) -> InstitutionInDB:
    if not isinstance(user, InstitutionInDB):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Institution profile missing")
    return user
