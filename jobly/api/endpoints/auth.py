"""
Authentication endpoints.

- POST /auth/token: Exchange username/password for a JWT
- POST /auth/register: Create a (non-admin) user and return a JWT
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.security import create_token
from jobly.crud import user as user_crud
from jobly.schemas.user import UserLoginRequest, UserRegisterRequest, TokenResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=TokenResponse)
def login(request: UserLoginRequest, db: Session = Depends(get_db)):
    """
    Authenticate a user and return a JWT.

    The token carries the username and admin flag.
    """
    user = user_crud.authenticate(db, request.username, request.password)
    token = create_token(user["username"], is_admin=bool(user["isAdmin"]))
    return TokenResponse(token=token)


@router.post("/register", status_code=201, response_model=TokenResponse)
def register(request: UserRegisterRequest, db: Session = Depends(get_db)):
    """
    Register a new user account.

    New accounts are never admins. Returns a JWT for immediate use.
    """
    user = user_crud.register(db, request)
    token = create_token(user["username"], is_admin=False)
    return TokenResponse(token=token)
