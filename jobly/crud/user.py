"""
CRUD operations for users: registration and credential checks.
"""

import logging
from typing import Any, Dict
from sqlalchemy.orm import Session

from jobly.core.database import run_query
from jobly.core.errors import ConflictError, UnauthorizedError
from jobly.core.security import get_password_hash, verify_password
from jobly.schemas.user import UserRegisterRequest

logger = logging.getLogger(__name__)

USER_COLUMNS = """username,
                  first_name AS "firstName",
                  last_name AS "lastName",
                  email,
                  is_admin AS "isAdmin\""""


def register(db: Session, user_data: UserRegisterRequest, is_admin: bool = False) -> Dict[str, Any]:
    """
    Create a user with a bcrypt-hashed password.

    Returns:
        {username, firstName, lastName, email, isAdmin}

    Raises:
        ConflictError: If the username is taken
    """
    duplicate_check = run_query(
        db,
        """SELECT username
           FROM users
           WHERE username = $1""",
        [user_data.username],
    )
    if duplicate_check:
        raise ConflictError(f"Duplicate username: {user_data.username}")

    rows = run_query(
        db,
        f"""INSERT INTO users
            (username, password, first_name, last_name, email, is_admin)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING {USER_COLUMNS}""",
        [
            user_data.username,
            get_password_hash(user_data.password),
            user_data.first_name,
            user_data.last_name,
            user_data.email,
            is_admin,
        ],
    )

    logger.info(f"Registered user {user_data.username} (admin={is_admin})")
    return rows[0]


def authenticate(db: Session, username: str, password: str) -> Dict[str, Any]:
    """
    Check a username/password pair.

    Returns:
        {username, firstName, lastName, email, isAdmin}

    Raises:
        UnauthorizedError: Unknown user or wrong password
    """
    rows = run_query(
        db,
        f"""SELECT {USER_COLUMNS},
                   password
            FROM users
            WHERE username = $1""",
        [username],
    )

    if rows:
        user = rows[0]
        hashed_password = user.pop("password")
        if verify_password(password, hashed_password):
            return user

    logger.warning(f"Failed login for {username}")
    raise UnauthorizedError("Invalid username/password")
