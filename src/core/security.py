"""Bearer token handling for the current user."""

from datetime import timedelta
from typing import Any, Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.core.config import settings
from src.core.database import get_session
from src.core.exceptions import UnauthorizedException
from src.apps.users.models.user import User
from src.apps.users.repositories.user_repository import UserRepository

bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(user_id: Any, expires_minutes: Optional[int] = None) -> str:
    """Sign a token whose subject is the user id."""
    if expires_minutes is None:
        expires_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES

    issued_at = settings.get_now()
    expires_at = issued_at + timedelta(minutes=expires_minutes)
    payload = {"sub": str(user_id), "iat": issued_at, "exp": expires_at}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> int:
    """Return the user id from a token, or raise UnauthorizedException."""
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM]
        )
        return int(payload["sub"])
    except jwt.ExpiredSignatureError:
        raise UnauthorizedException(detail="Unauthorized. Token expired.")
    except (jwt.InvalidTokenError, KeyError, ValueError):
        raise UnauthorizedException(detail="Unauthorized. Invalid token.")


def get_user_repository() -> UserRepository:
    return UserRepository(get_session)  # type:ignore


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    repository: UserRepository = Depends(get_user_repository),
) -> User:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise UnauthorizedException(detail="Unauthorized. No token.")

    user_id = decode_access_token(credentials.credentials)
    user = await repository.get(user_id)
    if user is None:
        raise UnauthorizedException(detail="Unauthorized. Unknown user.")
    return user
