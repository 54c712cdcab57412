import uuid
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from pydantic import BaseModel, ValidationError

from synergysphere.auth.auth_utils import decode_access_token
from synergysphere.exceptions import raise_unauthorized
from synergysphere.utils.logger import get_logger

logger = get_logger(__name__)

security = HTTPBearer(auto_error=False)


class AuthenticatedUser(BaseModel):
    """
    Principal decoded from the bearer token. No database lookup is made;
    the token stays valid until it expires.
    """
    id: uuid.UUID
    email: str
    full_name: str


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthenticatedUser:
    """
    Dependency to get the current authenticated principal from JWT token.

    Args:
        credentials: Bearer token credentials (None when the header is
            missing or does not use the Bearer scheme)

    Returns:
        AuthenticatedUser: id, email and full name from the token

    Raises:
        BaseAPIException: 401 for every failure, without saying why
    """
    if credentials is None or not credentials.credentials:
        raise_unauthorized()

    try:
        payload = decode_access_token(credentials.credentials)
        return AuthenticatedUser(
            id=payload.get("id"),
            email=payload.get("email"),
            full_name=payload.get("fullName"),
        )
    except (JWTError, ValidationError) as e:
        logger.debug(f"Rejected bearer token: {e}")
        raise_unauthorized()
