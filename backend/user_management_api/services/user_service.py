"""User Service — store operations behind the /users routes.

Invariants:
    - Email uniqueness is case-insensitive and checked before every write that sets an email
    - A write that loses a race on the unique index raises DuplicateEmailError, never DatabaseError
    - Passwords are hashed before they reach the model
    - Missing users raise ResourceNotFoundError (404), never return None to routes
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from user_management_api.core.errors import DuplicateEmailError, ResourceNotFoundError
from user_management_api.core.security import hash_password
from user_management_api.models.user import User, normalize_email
from user_management_api.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    """CRUD operations on the user table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_users(self) -> list[User]:
        result = await self.db.execute(select(User).order_by(User.id))
        return list(result.scalars().all())

    async def get_user(self, user_id: int) -> User:
        user = await self.db.get(User, user_id)
        if user is None:
            raise ResourceNotFoundError("User", str(user_id))
        return user

    async def find_by_email(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.normalized_email == normalize_email(email)),
        )
        return result.scalar_one_or_none()

    async def email_in_use(self, email: str, exclude_id: int | None = None) -> bool:
        query = select(User.id).where(
            User.normalized_email == normalize_email(email),
        )
        if exclude_id is not None:
            query = query.where(User.id != exclude_id)
        result = await self.db.execute(query.limit(1))
        return result.first() is not None

    async def count_users(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(User))
        return result.scalar_one()

    async def create_user(self, payload: UserCreate) -> User:
        """Insert a new user. Raises DuplicateEmailError if the email is taken."""
        if await self.email_in_use(payload.email):
            raise DuplicateEmailError(payload.email)

        user = User(
            name=payload.name.strip(),
            password_hash=hash_password(payload.password),
        )
        user.set_email(payload.email)
        self.db.add(user)
        await self._commit(payload.email)
        await self.db.refresh(user)
        logger.info("User created", extra={"user_id": user.id})
        return user

    async def update_user(self, user_id: int, payload: UserUpdate) -> User:
        """Apply the non-blank fields of payload to an existing user."""
        user = await self.get_user(user_id)

        if payload.email is not None:
            if await self.email_in_use(payload.email, exclude_id=user_id):
                raise DuplicateEmailError(payload.email)
            user.set_email(payload.email)

        if payload.name is not None:
            user.name = payload.name.strip()

        if payload.password is not None:
            user.password_hash = hash_password(payload.password)

        if not payload.has_changes():
            logger.debug("Empty update", extra={"user_id": user_id})
            return user

        await self._commit(payload.email)
        logger.info("User updated", extra={"user_id": user_id})
        return user

    async def delete_user(self, user_id: int) -> None:
        user = await self.get_user(user_id)
        await self.db.delete(user)
        await self.db.commit()
        logger.info("User deleted", extra={"user_id": user_id})

    async def _commit(self, email: str | None) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Unique email constraint rejected write: {e.orig}")
            raise DuplicateEmailError(email or "")
