"""Authentication Service — credential check and token issuance.

Invariants:
    - The configured administrator is checked first and gets role Admin
    - Any stored user may log in with email + password and gets role User
    - Every rejection raises the same AuthenticationError message (no user enumeration)
"""

import hmac
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from user_management_api.config import get_settings
from user_management_api.core.errors import AuthenticationError
from user_management_api.core.security import (
    ROLE_ADMIN, ROLE_USER, IssuedToken, create_access_token, verify_password,
)
from user_management_api.services.user_service import UserService

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"


def _matches_admin(username: str, password: str) -> bool:
    settings = get_settings()
    username_ok = hmac.compare_digest(
        username.encode(), settings.admin_username.encode(),
    )
    password_ok = hmac.compare_digest(
        password.encode(), settings.admin_password.encode(),
    )
    return username_ok and password_ok


async def authenticate_user(
    db: AsyncSession, *, username: str, password: str,
) -> tuple[str, str]:
    """Return (subject, role) for valid credentials; raise AuthenticationError otherwise."""
    if _matches_admin(username, password):
        return username, ROLE_ADMIN

    user = await UserService(db).find_by_email(username)
    if user is not None and verify_password(password, user.password_hash):
        return user.email, ROLE_USER

    logger.warning("Rejected login attempt")
    raise AuthenticationError(INVALID_CREDENTIALS)


async def login(db: AsyncSession, *, username: str, password: str) -> IssuedToken:
    subject, role = await authenticate_user(db, username=username, password=password)
    logger.info(f"Issued token for {subject} ({role})")
    return create_access_token(subject, role)
