import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import HTTPException, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from campus_life.constants import (
    JWT_ALGORITHM,
    JWT_SECRET,
    MSG_INVALID_TOKEN,
    MSG_NO_TOKEN,
    TOKEN_EXPIRE_DAYS,
)

logger = logging.getLogger("campus_life.auth")

bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(user_id: int) -> str:
    """Issue a signed token for the user, valid for TOKEN_EXPIRE_DAYS"""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + timedelta(days=TOKEN_EXPIRE_DAYS),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> int:
    """
    Decode a token and return the user id it was issued for.

    Raises:
        jwt.InvalidTokenError: If the token is malformed, forged or expired
    """
    payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError) as e:
        raise jwt.InvalidTokenError("Token subject is missing or malformed") from e


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> int:
    """Verify the bearer token and return the authenticated user id"""
    if not credentials or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=MSG_NO_TOKEN
        )
    try:
        return decode_access_token(credentials.credentials)
    except jwt.InvalidTokenError as e:
        logger.warning(f"Rejected token: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=MSG_INVALID_TOKEN
        ) from e
