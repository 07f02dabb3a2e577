"""
FastAPI dependencies for authentication and authorization.

Reads are open to anonymous callers; writes go through ensure_admin.
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from jobly.core.errors import UnauthorizedError
from jobly.core.security import JWTError, decode_token

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme (Authorization: Bearer <token>); a missing header is not an error here
optional_bearer = HTTPBearer(auto_error=False)


def get_token_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_bearer),
) -> Optional[dict]:
    """
    Return the claims of a valid bearer token, or None for anonymous callers.

    An invalid or expired token is treated the same as no token.
    """
    if not credentials:
        return None

    try:
        payload = decode_token(credentials.credentials)
    except JWTError as e:
        logger.warning(f"Rejected bearer token: {e}")
        return None

    if not payload.get("username"):
        return None

    return payload


def ensure_admin(claims: Optional[dict] = Depends(get_token_claims)) -> dict:
    """
    Require a token belonging to an admin.

    Raises:
        UnauthorizedError: Anonymous caller or non-admin user
    """
    if claims is None or not claims.get("isAdmin"):
        raise UnauthorizedError("Unauthorized")

    return claims
