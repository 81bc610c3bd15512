"""Startup Seed — inserts the default administrator into an empty store."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from user_management_api.config import Settings
from user_management_api.core.password_rules import is_strong_password
from user_management_api.core.security import hash_password
from user_management_api.models.user import User
from user_management_api.services.user_service import UserService

logger = logging.getLogger(__name__)


async def seed_initial_data(db: AsyncSession, settings: Settings) -> User | None:
    """Insert the seed admin when the user table is empty. Returns the new row, if any."""
    if not settings.seed_admin:
        return None
    if await UserService(db).count_users() > 0:
        return None

    if not is_strong_password(settings.seed_admin_password):
        logger.warning("Seed admin password does not meet the strength policy")

    user = User(
        name=settings.seed_admin_name,
        password_hash=hash_password(settings.seed_admin_password),
    )
    user.set_email(settings.seed_admin_email)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    logger.info("Seeded admin user", extra={"user_id": user.id})
    return user
