"""
Resolves the owner of a request from its bearer token.

Tokens are issued by the auth service (``POST /api/login``); this module
only verifies them and reads the ``id`` claim.
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt

from config import settings
from logger import logger

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/login")


def get_current_owner(token: str = Depends(oauth2_scheme)) -> str:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.warning(f"Rejected token: {e}")
        raise credentials_exception
    owner = payload.get("id")
    if not owner:
        raise credentials_exception
    return str(owner)
