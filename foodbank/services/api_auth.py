import logging
import secrets
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from foodbank import config

logger = logging.getLogger(__name__)

# auto_error=False so a missing header gets the same 401 as a wrong password
bearer_scheme = HTTPBearer(auto_error=False)


def verify_api_password(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)) -> None:
    """Requires `Authorization: Bearer <API_PASSWORD>`."""
    expected = config.API_PASSWORD
    supplied = credentials.credentials if credentials else None
    if not expected or not supplied or not secrets.compare_digest(supplied, expected):
        logger.error("Unauthorized notification request")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
